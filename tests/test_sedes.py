"""
Tests del CRUD de sedes.
"""


class TestSedes:
    def test_listar_ordenadas_por_nombre(self, client, auth_headers, sede, otra_sede, crear):
        crear("sedes", {"nombre": "Cali", "codigo": "CAL"})
        respuesta = client.get("/api/sedes", headers=auth_headers)
        assert [s["nombre"] for s in respuesta.get_json()] == ["Bogotá", "Cali", "Medellín"]

    def test_filtro_activa(self, client, auth_headers, sede, crear):
        crear("sedes", {"nombre": "Cerrada", "codigo": "CER", "activa": False})
        respuesta = client.get("/api/sedes?activa=false", headers=auth_headers)
        assert [s["codigo"] for s in respuesta.get_json()] == ["CER"]

    def test_crear_requiere_nombre_y_codigo(self, client, auth_headers):
        respuesta = client.post("/api/sedes", json={"nombre": "Sin código"}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "Nombre y código son requeridos"

    def test_codigo_duplicado_al_crear(self, client, auth_headers, sede):
        respuesta = client.post("/api/sedes", json={"nombre": "Otra", "codigo": "BOG"}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "El código de la sede ya existe"

    def test_codigo_duplicado_al_actualizar(self, client, auth_headers, sede, otra_sede):
        respuesta = client.put(f"/api/sedes/{otra_sede['id']}", json={"codigo": "BOG"}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "El código de la sede ya existe"

    def test_actualizar_conserva_campos_omitidos(self, client, auth_headers, sede):
        respuesta = client.put(f"/api/sedes/{sede['id']}", json={"direccion": "Calle 1"}, headers=auth_headers)
        assert respuesta.status_code == 200
        cuerpo = respuesta.get_json()
        assert cuerpo["direccion"] == "Calle 1"
        assert cuerpo["nombre"] == "Bogotá"
        assert cuerpo["ciudad"] == "Bogotá"

    def test_actualizar_null_en_campo_obligatorio(self, client, auth_headers, sede):
        respuesta = client.put(f"/api/sedes/{sede['id']}", json={"nombre": None}, headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "nombre no puede ser nulo"

    def test_obtener_y_eliminar(self, client, auth_headers, sede):
        assert client.get(f"/api/sedes/{sede['id']}", headers=auth_headers).get_json()["codigo"] == "BOG"

        respuesta = client.delete(f"/api/sedes/{sede['id']}", headers=auth_headers)
        assert respuesta.get_json() == {"message": "Sede eliminada correctamente"}

        respuesta = client.get(f"/api/sedes/{sede['id']}", headers=auth_headers)
        assert respuesta.status_code == 404
        assert respuesta.get_json()["error"] == "Sede no encontrada"

    def test_id_mal_formado_404(self, client, auth_headers):
        assert client.get("/api/sedes/no-es-uuid", headers=auth_headers).status_code == 404

    def test_eliminar_sede_deja_recursos_sin_sede(self, client, auth_headers, sede, tecnico):
        client.delete(f"/api/sedes/{sede['id']}", headers=auth_headers)
        recurso = client.get(f"/api/resources/{tecnico['id']}", headers=auth_headers).get_json()
        assert recurso["sede_id"] is None

    def test_filtro_activa_mal_formado(self, client, auth_headers):
        respuesta = client.get("/api/sedes?activa=quizas", headers=auth_headers)
        assert respuesta.status_code == 400
        assert respuesta.get_json()["error"] == "activa debe ser true o false: quizas"
