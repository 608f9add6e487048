"""Cliente HTTP de la API REST.

Cada petición lleva ``Content-Type: application/json`` y, si hay token
guardado, ``Authorization: Bearer``. Las respuestas que no son 2xx se
convierten en :class:`ApiError` con el mensaje ``error`` del servidor.
"""
import logging
import uuid
from datetime import date

import httpx

from calendario.client.storage import TOKEN, USUARIO, LocalStorage
from config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, mensaje, status=None):
        super().__init__(mensaje)
        self.mensaje = mensaje
        self.status = status


def _valor_param(valor):
    if isinstance(valor, bool):
        return 'true' if valor else 'false'
    if isinstance(valor, (uuid.UUID, date)):
        return str(valor)
    return valor


class ApiClient:
    def __init__(self, base_url=None, storage=None, transport=None, timeout=None):
        self.base_url = base_url or settings.API_URL
        self.storage = storage if storage is not None else LocalStorage(settings.STORAGE_PATH or None)
        opciones = {'base_url': self.base_url, 'transport': transport}
        if timeout is not None:
            opciones['timeout'] = timeout
        self._http = httpx.Client(**opciones)

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def fetch_with_auth(self, metodo, endpoint, json=None, params=None):
        headers = {'Content-Type': 'application/json'}
        token = self.storage.get_item(TOKEN)
        if token:
            headers['Authorization'] = f'Bearer {token}'
        if params:
            params = {k: _valor_param(v) for k, v in params.items() if v is not None}

        try:
            respuesta = self._http.request(metodo, endpoint, json=json, params=params or None, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Error de red en {metodo} {endpoint}: {e}")
            raise ApiError(str(e) or 'Error desconocido') from e

        if not respuesta.is_success:
            try:
                cuerpo = respuesta.json()
            except ValueError:
                cuerpo = {'error': 'Error desconocido'}
            mensaje = cuerpo.get('error') if isinstance(cuerpo, dict) else None
            logger.debug(f"{metodo} {endpoint} -> {respuesta.status_code}: {mensaje}")
            raise ApiError(mensaje or f'HTTP {respuesta.status_code}', respuesta.status_code)

        return respuesta.json()


class AuthApi:
    def __init__(self, cliente: ApiClient):
        self.cliente = cliente

    def login(self, username, password):
        return self.cliente.fetch_with_auth('POST', '/auth/login', json={'username': username, 'password': password})

    def register(self, username, email, password, role=None):
        datos = {'username': username, 'email': email, 'password': password}
        if role is not None:
            datos['role'] = role
        return self.cliente.fetch_with_auth('POST', '/auth/register', json=datos)

    def me(self):
        return self.cliente.fetch_with_auth('GET', '/auth/me')

    def logout(self):
        self.cliente.storage.remove_item(TOKEN, USUARIO)


class RecursoApi:
    """list/get/create/update/delete sobre ``/<recurso>``."""

    def __init__(self, cliente: ApiClient, recurso: str):
        self.cliente = cliente
        self.recurso = recurso
        self.endpoint = f'/{recurso}'

    def list(self, params=None):
        return self.cliente.fetch_with_auth('GET', self.endpoint, params=params)

    def get(self, id):
        return self.cliente.fetch_with_auth('GET', f'{self.endpoint}/{id}')

    def create(self, datos):
        return self.cliente.fetch_with_auth('POST', self.endpoint, json=datos)

    def update(self, id, datos):
        return self.cliente.fetch_with_auth('PUT', f'{self.endpoint}/{id}', json=datos)

    def delete(self, id):
        return self.cliente.fetch_with_auth('DELETE', f'{self.endpoint}/{id}')


def create_api_client(cliente: ApiClient, recurso: str) -> RecursoApi:
    return RecursoApi(cliente, recurso)


def sedes_api(cliente):
    return create_api_client(cliente, 'sedes')


def service_entries_api(cliente):
    return create_api_client(cliente, 'service-entries')


def quote_entries_api(cliente):
    return create_api_client(cliente, 'quote-entries')


def pending_items_api(cliente):
    return create_api_client(cliente, 'pending-items')


def resources_api(cliente):
    return create_api_client(cliente, 'resources')


def assignments_api(cliente):
    return create_api_client(cliente, 'assignments')


def quote_assignments_api(cliente):
    return create_api_client(cliente, 'quote-assignments')
