"""Almacenamiento local del cliente (token, usuario y sede seleccionada)."""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN = 'token'
USUARIO = 'user'
SEDE_SELECCIONADA = 'selectedSedeId'


class LocalStorage:
    """Clave/valor persistido en un archivo JSON; en memoria si no hay ruta."""

    def __init__(self, ruta=None):
        self.ruta = Path(ruta) if ruta else None
        self._datos = {}
        if self.ruta and self.ruta.exists():
            try:
                self._datos = json.loads(self.ruta.read_text(encoding='utf-8'))
            except (OSError, ValueError) as e:
                logger.warning(f"No se pudo leer {self.ruta}, se empieza vacío: {e}")
                self._datos = {}

    def get_item(self, clave, defecto=None):
        return self._datos.get(clave, defecto)

    def set_item(self, clave, valor):
        self._datos[clave] = valor
        self._guardar()

    def remove_item(self, *claves):
        for clave in claves:
            self._datos.pop(clave, None)
        self._guardar()

    def clear(self):
        self._datos = {}
        self._guardar()

    def __contains__(self, clave):
        return clave in self._datos

    def _guardar(self):
        if self.ruta is None:
            return
        self.ruta.parent.mkdir(parents=True, exist_ok=True)
        self.ruta.write_text(json.dumps(self._datos, ensure_ascii=False), encoding='utf-8')
