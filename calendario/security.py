from datetime import datetime, timedelta, timezone
import logging
import uuid

from flask import current_app, jsonify, request
from flask_login import UserMixin, login_required
from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from calendario import login_manager

logger = logging.getLogger(__name__)


class UsuarioToken(UserMixin):
    """Usuario autenticado a partir de los claims del token (sin consultar la BD)."""

    def __init__(self, id, username, email, role):
        self.id = id
        self.username = username
        self.email = email
        self.role = role

    def get_id(self):
        return str(self.id)

    def to_claims(self):
        return {
            'id': str(self.id),
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verificar_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def generar_token(usuario) -> str:
    claims = {
        'id': str(usuario.id),
        'username': usuario.username,
        'email': usuario.email,
        'role': usuario.role,
        'exp': datetime.now(timezone.utc) + timedelta(days=current_app.config['JWT_EXPIRES_DAYS']),
    }
    return jwt.encode(claims, current_app.config['JWT_SECRET'], algorithm=current_app.config['JWT_ALGORITHM'])


def decodificar_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=[current_app.config['JWT_ALGORITHM']])
    except JWTError as e:
        logger.debug(f"Token rechazado: {e}")
        return None


def _token_de_cabecera():
    # Authorization: Bearer TOKEN
    partes = request.headers.get('Authorization', '').split(' ')
    if len(partes) < 2 or not partes[1]:
        return None
    return partes[1]


@login_manager.request_loader
def cargar_usuario_desde_token(_request):
    token = _token_de_cabecera()
    if token is None:
        return None
    payload = decodificar_token(token)
    if payload is None:
        return None
    try:
        return UsuarioToken(
            id=uuid.UUID(payload['id']),
            username=payload['username'],
            email=payload['email'],
            role=payload['role'],
        )
    except (KeyError, ValueError, TypeError):
        return None


@login_manager.unauthorized_handler
def no_autorizado():
    if _token_de_cabecera() is None:
        return jsonify({'error': 'Token de acceso requerido'}), 401
    return jsonify({'error': 'Token inválido o expirado'}), 403


def proteger(bp):
    """Exige token en todas las rutas del blueprint."""

    @bp.before_request
    @login_required
    def requiere_token():
        return None

    return bp
