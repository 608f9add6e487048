from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
import logging

from calendario import db

logger = logging.getLogger(__name__)

MENSAJES_HTTP = {
    404: 'Recurso no encontrado',
    405: 'Método no permitido',
}


class ApiError(Exception):
    """Error que se devuelve al cliente como ``{"error": mensaje}``."""

    def __init__(self, mensaje, status=400, detalles=None):
        super().__init__(mensaje)
        self.mensaje = mensaje
        self.status = status
        self.detalles = detalles

    def to_dict(self):
        cuerpo = {'error': self.mensaje}
        if self.detalles:
            cuerpo['details'] = self.detalles
        return cuerpo


class NoEncontrado(ApiError):
    def __init__(self, mensaje):
        super().__init__(mensaje, status=404)


def registrar_manejadores(app):
    @app.errorhandler(ApiError)
    def manejar_api_error(error):
        return jsonify(error.to_dict()), error.status

    @app.errorhandler(HTTPException)
    def manejar_http(error):
        mensaje = MENSAJES_HTTP.get(error.code, error.name)
        return jsonify({'error': mensaje}), error.code

    @app.errorhandler(Exception)
    def manejar_inesperado(error):
        logger.exception(f"Error inesperado: {error}")
        db.session.rollback()
        cuerpo = {'error': 'Error interno del servidor'}
        if current_app.debug:
            cuerpo['details'] = str(error)
        return jsonify(cuerpo), 500
