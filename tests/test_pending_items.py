"""
Tests de pendientes.
"""

import pytest


@pytest.fixture
def pendiente(crear, sede):
    return crear("pending-items", {
        "item": "Comprar repuestos",
        "date": "2025-03-01",
        "assigned_to": "Pedro",
        "due_date": "2025-03-10",
        "sede_id": sede["id"],
    })


class TestPendientes:
    def test_crear(self, pendiente):
        assert pendiente["observations"] == ""
        assert pendiente["estado"] == "abierto"
        assert pendiente["date"] == "2025-03-01"
        assert pendiente["due_date"] == "2025-03-10"

    def test_crear_requiere_campos(self, client, auth_headers):
        respuesta = client.post("/api/pending-items", json={"item": "X"}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "Todos los campos requeridos deben ser proporcionados"

    def test_fecha_invalida(self, client, auth_headers):
        respuesta = client.post("/api/pending-items", json={
            "item": "X", "date": "ayer", "assigned_to": "Y", "due_date": "2025-03-10",
        }, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "date no es una fecha válida: ayer"

    def test_abiertos_primero(self, client, auth_headers, crear, pendiente):
        cerrado = crear("pending-items", {
            "item": "Cerrado", "date": "2025-03-05", "assigned_to": "Ana",
            "due_date": "2025-03-06", "estado": "cerrado",
        })
        abierto = crear("pending-items", {
            "item": "Abierto", "date": "2025-02-01", "assigned_to": "Ana", "due_date": "2025-02-02",
        })
        items = client.get("/api/pending-items", headers=auth_headers).get_json()
        assert items[-1]["id"] == cerrado["id"]
        assert {i["id"] for i in items[:2]} == {pendiente["id"], abierto["id"]}

    def test_actualizar_y_eliminar(self, client, auth_headers, pendiente):
        ruta = f"/api/pending-items/{pendiente['id']}"
        cuerpo = client.put(ruta, json={"estado": "cerrado", "observations": "Listo"}, headers=auth_headers).get_json()
        assert cuerpo["estado"] == "cerrado"
        assert cuerpo["observations"] == "Listo"
        assert cuerpo["item"] == "Comprar repuestos"

        assert client.delete(ruta, headers=auth_headers).get_json() == {"message": "Item eliminado correctamente"}
        respuesta = client.get(ruta, headers=auth_headers)
        assert respuesta.status_code == 404
        assert respuesta.get_json()["error"] == "Item no encontrado"
