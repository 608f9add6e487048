"""
Tests de asignaciones (entrada, recurso, fecha).
"""

import pytest


@pytest.fixture
def asignar(crear, entrada, tecnico):
    def _asignar(fecha, resource_id=None):
        return crear("assignments", {
            "service_entry_id": entrada["id"],
            "resource_id": resource_id or tecnico["id"],
            "date": fecha,
        })
    return _asignar


class TestCrearAsignacion:
    def test_crear(self, asignar, entrada, tecnico):
        asignacion = asignar("2025-03-03")
        assert asignacion["service_entry_id"] == entrada["id"]
        assert asignacion["resource_id"] == tecnico["id"]
        assert asignacion["date"] == "2025-03-03"

    def test_duplicado_409_sin_nueva_fila(self, client, auth_headers, asignar, entrada, tecnico):
        asignar("2025-03-03")
        respuesta = client.post("/api/assignments", json={
            "service_entry_id": entrada["id"], "resource_id": tecnico["id"], "date": "2025-03-03",
        }, headers=auth_headers)
        assert respuesta.status_code == 409
        assert respuesta.get_json()["error"] == "La asignación ya existe"

        filas = client.get(f"/api/assignments?service_entry_id={entrada['id']}", headers=auth_headers).get_json()
        assert len(filas) == 1

    def test_timestamp_se_guarda_como_fecha(self, asignar):
        assert asignar("2025-03-04T15:30:00Z")["date"] == "2025-03-04"

    def test_resource_id_no_uuid(self, client, auth_headers, entrada):
        respuesta = client.post("/api/assignments", json={
            "service_entry_id": entrada["id"], "resource_id": "abc", "date": "2025-03-03",
        }, headers=auth_headers)
        assert respuesta.status_code == 400
        assert "resource_id" in respuesta.get_json()["error"]

    def test_campos_faltantes(self, client, auth_headers):
        respuesta = client.post("/api/assignments", json={"date": "2025-03-03"}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "service_entry_id, resource_id y date son requeridos"

    def test_entrada_inexistente(self, client, auth_headers, tecnico):
        respuesta = client.post("/api/assignments", json={
            "service_entry_id": "00000000-0000-0000-0000-000000000000",
            "resource_id": tecnico["id"],
            "date": "2025-03-03",
        }, headers=auth_headers)
        assert respuesta.status_code == 404
        assert respuesta.get_json()["error"] == "Entrada no encontrada"


class TestListarAsignaciones:
    def test_orden_por_fecha_y_rango(self, client, auth_headers, asignar):
        for fecha in ("2025-03-05", "2025-03-01", "2025-03-10"):
            asignar(fecha)

        todas = client.get("/api/assignments", headers=auth_headers).get_json()
        assert [a["date"] for a in todas] == ["2025-03-01", "2025-03-05", "2025-03-10"]

        rango = client.get("/api/assignments?desde=2025-03-02&hasta=2025-03-09", headers=auth_headers).get_json()
        assert [a["date"] for a in rango] == ["2025-03-05"]

        dia = client.get("/api/assignments?date=2025-03-10", headers=auth_headers).get_json()
        assert [a["date"] for a in dia] == ["2025-03-10"]

    def test_filtro_recurso(self, client, auth_headers, crear, asignar):
        otro = crear("resources", {"name": "Técnico 2", "type": "technician"})
        asignar("2025-03-03")
        asignar("2025-03-03", resource_id=otro["id"])
        filas = client.get(f"/api/assignments?resource_id={otro['id']}", headers=auth_headers).get_json()
        assert [a["resource_id"] for a in filas] == [otro["id"]]

    def test_fecha_mal_formada(self, client, auth_headers):
        respuesta = client.get("/api/assignments?date=03/03/2025", headers=auth_headers)
        assert respuesta.status_code == 400


class TestMoverAsignacion:
    def test_mover_a_otro_dia(self, client, auth_headers, asignar):
        asignacion = asignar("2025-03-03")
        respuesta = client.put(f"/api/assignments/{asignacion['id']}", json={"date": "2025-03-06"}, headers=auth_headers)
        assert respuesta.status_code == 200
        assert respuesta.get_json()["date"] == "2025-03-06"
        assert respuesta.get_json()["resource_id"] == asignacion["resource_id"]

    def test_mover_sobre_existente_409(self, client, auth_headers, asignar):
        asignar("2025-03-03")
        segunda = asignar("2025-03-04")
        respuesta = client.put(f"/api/assignments/{segunda['id']}", json={"date": "2025-03-03"}, headers=auth_headers)
        assert respuesta.status_code == 409

        intacta = client.get(f"/api/assignments/{segunda['id']}", headers=auth_headers).get_json()
        assert intacta["date"] == "2025-03-04"

    def test_eliminar(self, client, auth_headers, asignar):
        asignacion = asignar("2025-03-03")
        respuesta = client.delete(f"/api/assignments/{asignacion['id']}", headers=auth_headers)
        assert respuesta.get_json() == {"message": "Asignación eliminada correctamente"}

    def test_eliminar_recurso_borra_asignaciones(self, client, auth_headers, asignar, tecnico):
        asignacion = asignar("2025-03-03")
        client.delete(f"/api/resources/{tecnico['id']}", headers=auth_headers)
        assert client.get(f"/api/assignments/{asignacion['id']}", headers=auth_headers).status_code == 404
