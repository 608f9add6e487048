from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError
import logging

from calendario import db
from calendario.crud import aplicar_cambios, eliminar, obtener_o_404
from calendario.errors import ApiError
from calendario.models.sedes import Sede
from calendario.schemas import SedeActualizar, SedeCrear, arg_bool, validar
from calendario.security import proteger

bp = proteger(Blueprint('sedes', __name__, url_prefix='/api/sedes'))

logger = logging.getLogger(__name__)

CODIGO_DUPLICADO = 'El código de la sede ya existe'

@bp.route('', methods=['GET'])
def listar_sedes():
    consulta = Sede.query
    activa = arg_bool('activa')
    if activa is not None:
        consulta = consulta.filter(Sede.activa == activa)
    sedes = consulta.order_by(Sede.nombre.asc()).all()
    return jsonify([sede.to_dict() for sede in sedes])

@bp.route('/<uuid:id>', methods=['GET'])
def obtener_sede(id):
    return jsonify(obtener_o_404(Sede, id, 'Sede no encontrada').to_dict())

@bp.route('', methods=['POST'])
def crear_sede():
    datos = validar(SedeCrear)
    sede = Sede(**datos.model_dump())
    try:
        db.session.add(sede)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ApiError(CODIGO_DUPLICADO) from None
    logger.info(f"Sede creada: {sede.codigo}")
    return jsonify(sede.to_dict()), 201

@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_sede(id):
    datos = validar(SedeActualizar)
    sede = obtener_o_404(Sede, id, 'Sede no encontrada')
    aplicar_cambios(sede, datos.cambios())
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ApiError(CODIGO_DUPLICADO) from None
    return jsonify(sede.to_dict())

@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_sede(id):
    eliminar(obtener_o_404(Sede, id, 'Sede no encontrada'))
    return jsonify({'message': 'Sede eliminada correctamente'})
