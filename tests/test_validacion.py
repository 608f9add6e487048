"""
Tests de los mensajes de validación y de los límites de longitud de columnas.
"""

import pytest


ENTRADA = {
    "site": "Planta", "zone": "Z1", "ott": "OTT-1", "client": "ACME",
    "advisor": "Laura", "type": "Service", "equipment_state": "New",
}
COTIZACION = {"zone": "Z2", "equipment": "Compresor", "client": "Globex"}
PENDIENTE = {"item": "Repuestos", "date": "2025-03-01", "assigned_to": "Pedro", "due_date": "2025-03-10"}
RECURSO = {"name": "Técnico 1", "type": "technician"}
SEDE = {"nombre": "Cali", "codigo": "CAL"}
REGISTRO = {"username": "largo", "email": "largo@example.com", "password": "secret1"}

LIMITES = [
    ("sedes", SEDE, "nombre", 100),
    ("sedes", SEDE, "codigo", 20),
    ("sedes", SEDE, "ciudad", 100),
    ("service-entries", ENTRADA, "site", 100),
    ("service-entries", ENTRADA, "zone", 100),
    ("service-entries", ENTRADA, "ott", 50),
    ("service-entries", ENTRADA, "client", 150),
    ("service-entries", ENTRADA, "advisor", 100),
    ("service-entries", ENTRADA, "equipment", 150),
    ("quote-entries", COTIZACION, "zone", 100),
    ("quote-entries", COTIZACION, "equipment", 150),
    ("quote-entries", COTIZACION, "client", 150),
    ("pending-items", PENDIENTE, "assigned_to", 100),
    ("resources", RECURSO, "name", 100),
]


class TestLongitudMaxima:
    @pytest.mark.parametrize("ruta, base, campo, largo", LIMITES)
    def test_crear_demasiado_largo(self, client, auth_headers, ruta, base, campo, largo):
        respuesta = client.post(f"/api/{ruta}", json=dict(base, **{campo: "A" * (largo + 1)}), headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == f"{campo} no puede tener más de {largo} caracteres"

    @pytest.mark.parametrize("ruta, base, campo, largo", LIMITES)
    def test_crear_en_el_limite(self, crear, ruta, base, campo, largo):
        fila = crear(ruta, dict(base, **{campo: "A" * largo}))
        assert fila[campo] == "A" * largo

    @pytest.mark.parametrize("ruta, base, campo, largo", LIMITES)
    def test_actualizar_demasiado_largo(self, client, auth_headers, crear, ruta, base, campo, largo):
        fila = crear(ruta, base)
        respuesta = client.put(f"/api/{ruta}/{fila['id']}", json={campo: "A" * (largo + 1)}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == f"{campo} no puede tener más de {largo} caracteres"

    @pytest.mark.parametrize("campo, largo", [("username", 100), ("email", 255)])
    def test_registro_demasiado_largo(self, client, campo, largo):
        respuesta = client.post("/api/auth/register", json=dict(REGISTRO, **{campo: "a" * (largo + 1)}))
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == f"{campo} no puede tener más de {largo} caracteres"


class TestMensajesDeCamposOpcionales:
    def test_null_en_campo_opcional_al_crear(self, client, auth_headers):
        respuesta = client.post("/api/resources", json=dict(RECURSO, available=None), headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "available no puede ser nulo"

    def test_vacio_en_enum_al_actualizar(self, client, auth_headers, crear):
        recurso = crear("resources", RECURSO)
        respuesta = client.put(f"/api/resources/{recurso['id']}", json={"type": ""}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"].startswith("type debe ser uno de")

    def test_null_en_campo_requerido_sigue_siendo_requerido(self, client, auth_headers):
        respuesta = client.post("/api/resources", json={"name": None, "type": "technician"}, headers=auth_headers)
        assert respuesta.get_json()["error"] == "Name y type son requeridos"
