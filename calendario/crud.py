"""Operaciones comunes de las rutas CRUD."""
import logging

from calendario import db
from calendario.errors import ApiError, NoEncontrado

logger = logging.getLogger(__name__)


def obtener_o_404(modelo, id, mensaje):
    objeto = db.session.get(modelo, id)
    if objeto is None:
        raise NoEncontrado(mensaje)
    return objeto


def aplicar_cambios(objeto, cambios: dict):
    for campo, valor in cambios.items():
        setattr(objeto, campo, valor)
    return objeto


def validar_sede(sede_id):
    from calendario.models.sedes import Sede
    if sede_id is not None and db.session.get(Sede, sede_id) is None:
        raise ApiError(f"La sede no existe: {sede_id}")


def eliminar(objeto):
    db.session.delete(objeto)
    db.session.commit()
