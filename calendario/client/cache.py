"""Caché de consultas del cliente.

Las consultas se guardan por clave (tupla: recurso seguido de los filtros
activos). Las escrituras pasan por :meth:`QueryClient.mutate`, que invalida
las claves indicadas cuando terminan bien; no hay actualizaciones optimistas.
"""
import logging

from calendario.client.api import ApiError

logger = logging.getLogger(__name__)


def _clave(clave):
    if isinstance(clave, (list, tuple)):
        return tuple(clave)
    return (clave,)


class QueryClient:
    def __init__(self, retry=1):
        self.retry = retry
        self._datos = {}

    def fetch_query(self, clave, funcion, retry=None):
        """Devuelve el dato en caché o lo pide con ``funcion``."""
        clave = _clave(clave)
        if clave in self._datos:
            return self._datos[clave]

        intentos = (self.retry if retry is None else retry) + 1
        for intento in range(1, intentos + 1):
            try:
                datos = funcion()
                break
            except ApiError as e:
                if intento == intentos:
                    raise
                logger.warning(f"Consulta {clave} fallida ({e}), reintentando")

        self._datos[clave] = datos
        return datos

    def get_query_data(self, clave):
        return self._datos.get(_clave(clave))

    def set_query_data(self, clave, datos):
        self._datos[_clave(clave)] = datos

    def invalidate_queries(self, prefijo=()):
        """Descarta todas las claves que empiezan por ``prefijo``."""
        prefijo = _clave(prefijo)
        descartadas = [c for c in self._datos if c[:len(prefijo)] == prefijo]
        for clave in descartadas:
            del self._datos[clave]
        logger.debug(f"Invalidadas {len(descartadas)} consultas con prefijo {prefijo}")
        return len(descartadas)

    def mutate(self, funcion, invalidates=()):
        resultado = funcion()
        for prefijo in invalidates:
            self.invalidate_queries(prefijo)
        return resultado

    def clear(self):
        self._datos.clear()
