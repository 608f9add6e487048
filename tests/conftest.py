"""
Fixtures comunes: aplicación con SQLite en memoria, cliente y token.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

import pytest

from calendario import create_app, db


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "JWT_SECRET": "test-secret-key",
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def usuario(client):
    """Usuario registrado: respuesta de /api/auth/register."""
    respuesta = client.post("/api/auth/register", json={
        "username": "tester",
        "email": "tester@example.com",
        "password": "secret1",
    })
    assert respuesta.status_code == 201
    return respuesta.get_json()


@pytest.fixture
def auth_headers(usuario):
    return {"Authorization": f"Bearer {usuario['token']}"}


@pytest.fixture
def crear(client, auth_headers):
    """POST autenticado que exige 201 y devuelve la fila creada."""

    def _crear(ruta, datos):
        respuesta = client.post(f"/api/{ruta}", json=datos, headers=auth_headers)
        assert respuesta.status_code == 201, respuesta.get_json()
        return respuesta.get_json()

    return _crear


@pytest.fixture
def sede(crear):
    return crear("sedes", {"nombre": "Bogotá", "codigo": "BOG", "ciudad": "Bogotá"})


@pytest.fixture
def otra_sede(crear):
    return crear("sedes", {"nombre": "Medellín", "codigo": "MED"})


@pytest.fixture
def entrada(crear, sede):
    return crear("service-entries", {
        "site": "Planta Norte",
        "zone": "Zona 1",
        "ott": "OTT-100",
        "client": "ACME",
        "advisor": "Laura",
        "type": "Service",
        "equipment_state": "New",
        "sede_id": sede["id"],
    })


@pytest.fixture
def tecnico(crear, sede):
    return crear("resources", {"name": "Técnico 1", "type": "technician", "sede_id": sede["id"]})


@pytest.fixture
def cotizacion(crear, sede):
    return crear("quote-entries", {
        "zone": "Zona 2",
        "equipment": "Compresor",
        "client": "Globex",
        "sede_id": sede["id"],
    })
