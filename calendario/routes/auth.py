from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
import logging

from calendario import db
from calendario.errors import ApiError, NoEncontrado
from calendario.models.users import User
from calendario.schemas import Login, Registro, validar
from calendario.security import generar_token, hash_password, verificar_password

bp = Blueprint('auth', __name__, url_prefix='/api/auth')

logger = logging.getLogger(__name__)

@bp.route('/login', methods=['POST'])
def login():
    datos = validar(Login)

    user = User.query.filter_by(username=datos.username).first()
    if not user or not verificar_password(datos.password, user.password_hash):
        logger.info(f"Login fallido para {datos.username}")
        raise ApiError('Usuario o contraseña incorrectos', status=401)

    return jsonify({'token': generar_token(user), 'user': user.perfil()})

@bp.route('/register', methods=['POST'])
def register():
    datos = validar(Registro)

    existente = User.query.filter(or_(User.username == datos.username, User.email == datos.email)).first()
    if existente:
        raise ApiError('El usuario o email ya existe')

    user = User(
        username=datos.username,
        email=datos.email,
        password_hash=hash_password(datos.password),
        role=datos.role or 'User',
    )
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ApiError('El usuario o email ya existe') from None

    logger.info(f"Usuario registrado: {user.username} ({user.role})")
    return jsonify({'token': generar_token(user), 'user': user.perfil()}), 201

@bp.route('/me')
@login_required
def me():
    user = db.session.get(User, current_user.id)
    if user is None:
        raise NoEncontrado('Usuario no encontrado')
    return jsonify(user.to_dict())
