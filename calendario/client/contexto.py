"""Estado de sesión del cliente: usuario autenticado y sede seleccionada."""
import logging

from calendario.client.api import ApiError, AuthApi, sedes_api
from calendario.client.storage import SEDE_SELECCIONADA, TOKEN, USUARIO

logger = logging.getLogger(__name__)


class AuthContext:
    def __init__(self, cliente):
        self.cliente = cliente
        self.storage = cliente.storage
        self.auth = AuthApi(cliente)
        self.user = None
        self._al_salir = []

    def al_cerrar_sesion(self, funcion):
        """Registra una función a llamar en el logout."""
        self._al_salir.append(funcion)
        return funcion

    def check_user(self):
        """Restaura el usuario guardado validando el token contra la API."""
        if not (self.storage.get_item(TOKEN) and self.storage.get_item(USUARIO)):
            self.user = None
            return None
        try:
            self.user = self.auth.me()
            self.storage.set_item(USUARIO, self.user)
        except ApiError as e:
            logger.info(f"Sesión guardada no válida: {e}")
            self.storage.remove_item(TOKEN, USUARIO)
            self.user = None
        return self.user

    def _guardar_sesion(self, respuesta):
        self.storage.set_item(TOKEN, respuesta['token'])
        self.storage.set_item(USUARIO, respuesta['user'])
        self.user = respuesta['user']
        return respuesta

    def login(self, username, password):
        return self._guardar_sesion(self.auth.login(username, password))

    def register(self, username, email, password, role=None):
        return self._guardar_sesion(self.auth.register(username, email, password, role))

    def logout(self):
        self.auth.logout()
        self.user = None
        for funcion in self._al_salir:
            funcion()

    @property
    def is_authenticated(self):
        return self.user is not None


class SedeContext:
    def __init__(self, cliente, auth: AuthContext = None):
        self.storage = cliente.storage
        self.sedes = sedes_api(cliente)
        self.selected_sede = None
        self.selected_sede_id = self.storage.get_item(SEDE_SELECCIONADA)
        if auth is not None:
            auth.al_cerrar_sesion(self.clear_selected_sede)

    def load(self):
        """Carga la sede guardada; si ya no existe se limpia la selección."""
        if not self.selected_sede_id:
            return None
        try:
            self.selected_sede = self.sedes.get(self.selected_sede_id)
        except ApiError as e:
            logger.warning(f"Error cargando la sede {self.selected_sede_id}: {e}")
            self.clear_selected_sede()
        return self.selected_sede

    def set_selected_sede(self, sede):
        if sede is None:
            self.clear_selected_sede()
            return
        self.selected_sede = sede
        self.selected_sede_id = sede['id']
        self.storage.set_item(SEDE_SELECCIONADA, sede['id'])

    def clear_selected_sede(self):
        self.selected_sede = None
        self.selected_sede_id = None
        self.storage.remove_item(SEDE_SELECCIONADA)
