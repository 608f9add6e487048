"""Lógica de las pantallas: servicios, cotizaciones, pendientes, recursos y sedes.

Cada tablero lee con consultas en caché (``QueryClient``) y escribe con
``mutate``, invalidando la clave de su recurso. Las acciones destructivas o
de cambio de estado piden confirmación con ``confirmar(mensaje) -> bool``.
"""
import logging

from calendario.client.api import (
    assignments_api,
    pending_items_api,
    quote_assignments_api,
    quote_entries_api,
    resources_api,
    sedes_api,
    service_entries_api,
)
from calendario.client import grilla
from calendario.fechas import formatear_fecha

logger = logging.getLogger(__name__)

CONFIRMAR_CERRAR = '¿Está seguro que desea cerrar este servicio?'
CONFIRMAR_REABRIR = '¿Está seguro que desea reabrir este servicio?'
CONFIRMAR_ELIMINAR_ENTREGA = '¿Eliminar la asignación de esta fecha?'
CONFIRMAR_ELIMINAR_RECURSO = '¿Estás seguro de eliminar este recurso?'
CONFIRMAR_ELIMINAR_SEDE = '¿Estás seguro de eliminar esta sede? Esta acción no se puede deshacer.'


def _siempre(_mensaje):
    return True


def confirmar_quitar_recurso(nombre=None):
    return f"¿Remover {nombre or 'este recurso'} de esta fecha?"


class Tablero:
    recurso = None

    def __init__(self, cliente, queries, sede_id=None, confirmar=None):
        self.cliente = cliente
        self.queries = queries
        self.sede_id = sede_id
        self.confirmar = confirmar or _siempre

    def _filtro_sede(self):
        return {'sede_id': self.sede_id} if self.sede_id else {}

    def _mutar(self, funcion, *claves):
        return self.queries.mutate(funcion, invalidates=claves or ((self.recurso,),))

    def sedes(self):
        api = sedes_api(self.cliente)
        return self.queries.fetch_query(('sedes',), api.list)


class ServicesBoard(Tablero):
    recurso = 'service-entries'

    def __init__(self, cliente, queries, sede_id=None, confirmar=None):
        super().__init__(cliente, queries, sede_id, confirmar)
        self.api = service_entries_api(cliente)
        self.asignaciones_api = assignments_api(cliente)
        self.recursos_api = resources_api(cliente)
        self.historial = False

    def entradas(self):
        params = {**self._filtro_sede(), 'estado': 'cerrado' if self.historial else 'abierto'}
        return self.queries.fetch_query(
            (self.recurso, self.sede_id, self.historial),
            lambda: self.api.list(params),
        )

    def asignaciones(self):
        return self.queries.fetch_query(('assignments',), self.asignaciones_api.list)

    def recursos(self):
        return self.queries.fetch_query(
            ('resources', self.sede_id),
            lambda: self.recursos_api.list(self._filtro_sede()),
        )

    def grupos_recursos(self, filtro='all', resource_id=None):
        return grilla.agrupar_recursos(self.recursos(), self.sede_id, filtro, resource_id)

    def crear_entrada(self, datos):
        if self.sede_id and 'sede_id' not in datos:
            datos = {**datos, 'sede_id': self.sede_id}
        return self._mutar(lambda: self.api.create(datos))

    def editar_entrada(self, id, datos):
        return self._mutar(lambda: self.api.update(id, datos))

    def _cambiar_estado(self, id, estado, mensaje):
        if not self.confirmar(mensaje):
            return None
        return self._mutar(lambda: self.api.update(id, {'estado': estado}))

    def cerrar(self, id):
        return self._cambiar_estado(id, 'cerrado', CONFIRMAR_CERRAR)

    def reabrir(self, id):
        return self._cambiar_estado(id, 'abierto', CONFIRMAR_REABRIR)

    def soltar_recurso(self, resource_id, droppable_id):
        """Crea la asignación al soltar un recurso sobre una celda.

        En la vista de mes la celda no indica entrada y se usa la primera
        visible. Un duplicado llega como ``ApiError`` con status 409.
        """
        celda = grilla.parse_id_celda(droppable_id)
        if celda is None:
            return None
        entry_id, dia = celda
        if entry_id is None:
            entradas = self.entradas()
            if not entradas:
                return None
            entry_id = entradas[0]['id']

        datos = {'service_entry_id': entry_id, 'resource_id': str(resource_id), 'date': formatear_fecha(dia)}
        logger.debug(f"Creando asignación: {datos}")
        return self._mutar(lambda: self.asignaciones_api.create(datos), ('assignments',))

    def quitar_asignacion(self, asignacion_id, nombre_recurso=None):
        if not self.confirmar(confirmar_quitar_recurso(nombre_recurso)):
            return None
        return self._mutar(lambda: self.asignaciones_api.delete(asignacion_id), ('assignments',))

    def celda(self, entry_id, dia):
        return grilla.asignaciones_de_celda(self.asignaciones(), entry_id, dia)


def ordenar_abiertas_primero(entradas):
    """Abiertas primero y, dentro de cada grupo, las más recientes."""
    recientes = sorted(entradas, key=lambda e: e.get('created_at') or '', reverse=True)
    return sorted(recientes, key=lambda e: (e.get('estado') or 'abierto') != 'abierto')


class QuotesBoard(Tablero):
    recurso = 'quote-entries'

    def __init__(self, cliente, queries, sede_id=None, confirmar=None):
        super().__init__(cliente, queries, sede_id, confirmar)
        self.api = quote_entries_api(cliente)
        self.entregas_api = quote_assignments_api(cliente)

    def entradas(self):
        entradas = self.queries.fetch_query(
            (self.recurso, self.sede_id),
            lambda: self.api.list(self._filtro_sede()),
        )
        return ordenar_abiertas_primero(entradas)

    def entregas(self):
        return self.queries.fetch_query(('quote-assignments',), self.entregas_api.list)

    def crear_entrada(self, datos):
        if self.sede_id and 'sede_id' not in datos:
            datos = {**datos, 'sede_id': self.sede_id}
        return self._mutar(lambda: self.api.create(datos))

    def editar_entrada(self, id, datos):
        return self._mutar(lambda: self.api.update(id, datos))

    def entrega(self, quote_entry_id, dia):
        encontradas = grilla.asignaciones_de_celda(self.entregas(), quote_entry_id, dia, campo='quote_entry_id')
        return encontradas[0] if encontradas else None

    def alternar_entrega(self, quote_entry_id, dia):
        existente = self.entrega(quote_entry_id, dia)
        nuevo = grilla.siguiente_estado_entrega(existente['status'] if existente else None)

        def accion():
            if existente:
                return self.entregas_api.update(existente['id'], {'status': nuevo})
            return self.entregas_api.create({
                'quote_entry_id': str(quote_entry_id),
                'date': formatear_fecha(dia),
                'status': nuevo,
            })

        return self._mutar(accion, ('quote-assignments',))

    def eliminar_entrega(self, quote_entry_id, dia):
        existente = self.entrega(quote_entry_id, dia)
        if existente is None or not self.confirmar(CONFIRMAR_ELIMINAR_ENTREGA):
            return None
        return self._mutar(lambda: self.entregas_api.delete(existente['id']), ('quote-assignments',))


class PendingBoard(Tablero):
    recurso = 'pending-items'

    def __init__(self, cliente, queries, sede_id=None, confirmar=None):
        super().__init__(cliente, queries, sede_id, confirmar)
        self.api = pending_items_api(cliente)

    def items(self):
        return self.queries.fetch_query(
            (self.recurso, self.sede_id),
            lambda: self.api.list(self._filtro_sede()),
        )

    def crear(self, datos):
        if self.sede_id and 'sede_id' not in datos:
            datos = {**datos, 'sede_id': self.sede_id}
        return self._mutar(lambda: self.api.create(datos))

    def editar(self, id, datos):
        return self._mutar(lambda: self.api.update(id, datos))

    def eliminar(self, id):
        return self._mutar(lambda: self.api.delete(id))


class ResourcesBoard(Tablero):
    recurso = 'resources'

    def __init__(self, cliente, queries, sede_id=None, confirmar=None):
        super().__init__(cliente, queries, sede_id, confirmar)
        self.api = resources_api(cliente)

    def recursos(self):
        return self.queries.fetch_query(
            (self.recurso, self.sede_id),
            lambda: self.api.list(self._filtro_sede()),
        )

    def crear(self, name, type, sede_id=None):
        datos = {'name': name, 'type': type, 'available': True}
        # Las fases nunca llevan sede
        if type != 'phase' and sede_id:
            datos['sede_id'] = str(sede_id)
        return self._mutar(lambda: self.api.create(datos))

    def editar(self, id, datos):
        cambios = {k: datos[k] for k in ('name', 'type', 'available') if k in datos}
        if datos.get('type') == 'phase':
            cambios['sede_id'] = None
        elif 'sede_id' in datos:
            cambios['sede_id'] = datos['sede_id'] or None
        return self._mutar(lambda: self.api.update(id, cambios))

    def eliminar(self, id):
        if not self.confirmar(CONFIRMAR_ELIMINAR_RECURSO):
            return None
        return self._mutar(lambda: self.api.delete(id))


class SedesBoard(Tablero):
    recurso = 'sedes'

    def __init__(self, cliente, queries, sede_id=None, confirmar=None):
        super().__init__(cliente, queries, sede_id, confirmar)
        self.api = sedes_api(cliente)

    def crear(self, datos):
        return self._mutar(lambda: self.api.create(datos))

    def editar(self, id, datos):
        return self._mutar(lambda: self.api.update(id, datos))

    def eliminar(self, id):
        if not self.confirmar(CONFIRMAR_ELIMINAR_SEDE):
            return None
        return self._mutar(lambda: self.api.delete(id))
