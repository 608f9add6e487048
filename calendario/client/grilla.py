"""Cálculos de la grilla del calendario de asignaciones.

Vistas de día, semana (lunes a sábado) y mes (semanas que empiezan en lunes,
sin domingos). Las fechas se comparan siempre como ``date``: tanto las
fechas ``yyyy-MM-dd`` como los timestamps ISO se convierten antes de
compararlas con el día de la celda.
"""
from datetime import date, timedelta
from enum import Enum
import re

from dateutil.relativedelta import relativedelta

from calendario.fechas import formatear_fecha, parse_fecha

PREFIJO_CELDA = 'cell-'
PREFIJO_CELDA_MES = 'month-cell-'
SEPARADOR_CELDA = '::'

DIAS_VISIBLES_SEMANA = 6  # lunes a sábado

# Nombres fijos en inglés, independientes del locale del proceso
NOMBRES_DIAS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
NOMBRES_MESES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)


class ViewMode(str, Enum):
    DAY = 'day'
    WEEK = 'week'
    MONTH = 'month'


def inicio_semana(dia: date) -> date:
    return dia - timedelta(days=dia.weekday())


def dias_semana(dia: date) -> list[date]:
    inicio = inicio_semana(dia)
    return [inicio + timedelta(days=i) for i in range(DIAS_VISIBLES_SEMANA)]


def semanas_mes(dia: date) -> list[list[date]]:
    primero = dia.replace(day=1)
    ultimo = primero + relativedelta(months=1, days=-1)
    semanas = []
    lunes = inicio_semana(primero)
    while lunes <= ultimo:
        semanas.append(dias_semana(lunes))
        lunes += timedelta(days=7)
    return semanas


def dias_mes(dia: date) -> list[date]:
    return [d for semana in semanas_mes(dia) for d in semana]


def dias_visibles(modo, ancla: date) -> list[date]:
    modo = ViewMode(modo)
    if modo is ViewMode.DAY:
        return [ancla]
    if modo is ViewMode.WEEK:
        return dias_semana(ancla)
    return dias_mes(ancla)


def _paso(modo):
    modo = ViewMode(modo)
    if modo is ViewMode.DAY:
        return relativedelta(days=1)
    if modo is ViewMode.WEEK:
        return relativedelta(weeks=1)
    return relativedelta(months=1)


def anterior(modo, ancla: date) -> date:
    return ancla - _paso(modo)


def siguiente(modo, ancla: date) -> date:
    return ancla + _paso(modo)


def hoy() -> date:
    return date.today()


def rango_conteo(modo, ancla: date) -> tuple[date, date]:
    """Intervalo en el que se cuentan las asignaciones de un recurso."""
    modo = ViewMode(modo)
    if modo is ViewMode.DAY:
        return ancla, ancla
    if modo is ViewMode.WEEK:
        inicio = inicio_semana(ancla)
        return inicio, inicio + timedelta(days=6)
    primero = ancla.replace(day=1)
    return primero, primero + relativedelta(months=1, days=-1)


def titulo(modo, ancla: date) -> str:
    if ViewMode(modo) is ViewMode.DAY:
        return f"{NOMBRES_DIAS[ancla.weekday()]}, {NOMBRES_MESES[ancla.month - 1]} {ancla.day}, {ancla.year}"
    return f"{NOMBRES_MESES[ancla.month - 1]} {ancla.year}"


# --- Identificadores de celdas ---
def id_celda(entry_id, dia: date) -> str:
    return f"{PREFIJO_CELDA}{entry_id}{SEPARADOR_CELDA}{formatear_fecha(dia)}"


def id_celda_mes(dia: date) -> str:
    return f"{PREFIJO_CELDA_MES}{formatear_fecha(dia)}"


def parse_id_celda(droppable_id: str):
    """Devuelve ``(entry_id, fecha)``; ``entry_id`` es None en celdas de mes.

    Si el id no es de una celda (p. ej. la barra lateral) devuelve None.
    """
    try:
        if droppable_id.startswith(PREFIJO_CELDA_MES):
            return None, parse_fecha(droppable_id[len(PREFIJO_CELDA_MES):])
        if droppable_id.startswith(PREFIJO_CELDA):
            entry_id, separador, texto = droppable_id[len(PREFIJO_CELDA):].partition(SEPARADOR_CELDA)
            if not separador or not entry_id:
                return None
            return entry_id, parse_fecha(texto)
    except ValueError:
        return None
    return None


# --- Asignaciones ---
def fecha_de(asignacion) -> date:
    return parse_fecha(asignacion['date'])


def asignaciones_del_dia(asignaciones, dia: date):
    return [a for a in asignaciones if fecha_de(a) == dia]


def asignaciones_de_celda(asignaciones, entry_id, dia: date, campo='service_entry_id'):
    entry_id = str(entry_id)
    return [a for a in asignaciones if str(a[campo]) == entry_id and fecha_de(a) == dia]


def agrupar_por_entrada(asignaciones, campo='service_entry_id') -> dict:
    grupos = {}
    for asignacion in asignaciones:
        grupos.setdefault(str(asignacion[campo]), []).append(asignacion)
    return grupos


def contar_asignaciones_recurso(asignaciones, resource_id, modo, ancla: date) -> int:
    inicio, fin = rango_conteo(modo, ancla)
    resource_id = str(resource_id)
    return sum(
        1 for a in asignaciones
        if str(a['resource_id']) == resource_id and inicio <= fecha_de(a) <= fin
    )


# --- Barra lateral de recursos ---
def numero_en_nombre(nombre: str) -> int:
    encontrado = re.search(r'\d+', nombre or '')
    return int(encontrado.group()) if encontrado else 0


def ordenar_recursos(recursos):
    return sorted(recursos, key=lambda r: (numero_en_nombre(r['name']), r['name'].lower(), r['name']))


def agrupar_recursos(recursos, sede_id=None, filtro='all', resource_id=None) -> dict:
    """Grupos de la barra lateral.

    Técnicos, administradores y actividades se filtran por sede; las fases
    son globales y aparecen siempre.
    """
    if sede_id:
        sede_id = str(sede_id)
        de_la_sede = [r for r in recursos if r.get('sede_id') == sede_id or r['type'] == 'phase']
    else:
        de_la_sede = list(recursos)

    filtrados = [r for r in de_la_sede if filtro in ('all', r['type'])]
    tecnicos = ordenar_recursos(r for r in filtrados if r['type'] == 'technician')
    administradores = ordenar_recursos(r for r in filtrados if r['type'] == 'administrator')
    if resource_id:
        resource_id = str(resource_id)
        if filtro == 'technician':
            tecnicos = [r for r in tecnicos if r['id'] == resource_id]
        if filtro == 'administrator':
            administradores = [r for r in administradores if r['id'] == resource_id]

    return {
        'technician': tecnicos,
        'administrator': administradores,
        'activity': ordenar_recursos(r for r in de_la_sede if r['type'] == 'activity'),
        'phase': ordenar_recursos(r for r in recursos if r['type'] == 'phase'),
    }


def siguiente_estado_entrega(actual):
    """Ciclo del botón de entrega: pending <-> delivered."""
    if actual == 'pending':
        return 'delivered'
    return 'pending'
