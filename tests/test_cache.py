"""
Tests de la caché de consultas.
"""

import pytest

from calendario.client.api import ApiError
from calendario.client.cache import QueryClient


class Contador:
    def __init__(self, fallos=0):
        self.llamadas = 0
        self.fallos = fallos

    def __call__(self):
        self.llamadas += 1
        if self.llamadas <= self.fallos:
            raise ApiError("Error de red", 500)
        return [self.llamadas]


class TestQueryClient:
    def test_misma_clave_desde_cache(self):
        queries = QueryClient()
        funcion = Contador()
        assert queries.fetch_query(("sedes",), funcion) == [1]
        assert queries.fetch_query(["sedes"], funcion) == [1]
        assert funcion.llamadas == 1

    def test_claves_distintas(self):
        queries = QueryClient()
        funcion = Contador()
        queries.fetch_query(("service-entries", "s1", False), funcion)
        queries.fetch_query(("service-entries", "s1", True), funcion)
        assert funcion.llamadas == 2

    def test_reintenta_una_vez(self):
        funcion = Contador(fallos=1)
        assert QueryClient().fetch_query(("a",), funcion) == [2]

    def test_falla_tras_reintento(self):
        funcion = Contador(fallos=2)
        with pytest.raises(ApiError):
            QueryClient().fetch_query(("a",), funcion)
        assert funcion.llamadas == 2

    def test_invalidar_por_prefijo(self):
        queries = QueryClient()
        queries.set_query_data(("service-entries", "s1", False), [])
        queries.set_query_data(("service-entries", "s2", True), [])
        queries.set_query_data(("assignments",), [])
        assert queries.invalidate_queries(("service-entries",)) == 2
        assert queries.get_query_data(("assignments",)) == []
        assert queries.get_query_data(("service-entries", "s1", False)) is None

    def test_mutate_invalida_solo_si_termina_bien(self):
        queries = QueryClient()
        queries.set_query_data(("sedes",), ["vieja"])

        def falla():
            raise ApiError("No", 400)

        with pytest.raises(ApiError):
            queries.mutate(falla, invalidates=[("sedes",)])
        assert queries.get_query_data(("sedes",)) == ["vieja"]

        assert queries.mutate(lambda: "ok", invalidates=[("sedes",)]) == "ok"
        assert queries.get_query_data(("sedes",)) is None
