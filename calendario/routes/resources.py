from flask import Blueprint, jsonify
from sqlalchemy import or_
import logging

from calendario import db
from calendario.crud import aplicar_cambios, eliminar, obtener_o_404, validar_sede
from calendario.models.resources import TIPOS_RECURSO, Resource
from calendario.schemas import RecursoActualizar, RecursoCrear, arg_bool, arg_opcion, arg_uuid, validar
from calendario.security import proteger

bp = proteger(Blueprint('resources', __name__, url_prefix='/api/resources'))

logger = logging.getLogger(__name__)

@bp.route('', methods=['GET'])
def listar_recursos():
    consulta = Resource.query
    sede_id = arg_uuid('sede_id')
    if sede_id:
        # Recursos de la sede más las fases (globales)
        consulta = consulta.filter(or_(Resource.sede_id == sede_id, Resource.type == 'phase'))
    tipo = arg_opcion('type', TIPOS_RECURSO)
    if tipo:
        consulta = consulta.filter(Resource.type == tipo)
    disponible = arg_bool('available')
    if disponible is not None:
        consulta = consulta.filter(Resource.available == disponible)
    recursos = consulta.order_by(Resource.type, Resource.name).all()
    return jsonify([recurso.to_dict() for recurso in recursos])

@bp.route('/<uuid:id>', methods=['GET'])
def obtener_recurso(id):
    return jsonify(obtener_o_404(Resource, id, 'Recurso no encontrado').to_dict())

@bp.route('', methods=['POST'])
def crear_recurso():
    datos = validar(RecursoCrear)
    valores = datos.model_dump()
    # Las fases no tienen sede
    if valores['type'] == 'phase':
        valores['sede_id'] = None
    validar_sede(valores['sede_id'])
    recurso = Resource(**valores)
    db.session.add(recurso)
    db.session.commit()
    logger.info(f"Recurso creado: {recurso.name} ({recurso.type})")
    return jsonify(recurso.to_dict()), 201

@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_recurso(id):
    datos = validar(RecursoActualizar)
    recurso = obtener_o_404(Resource, id, 'Recurso no encontrado')
    cambios = datos.cambios()

    # Las fases quedan sin sede; un sede_id ausente del cuerpo conserva el actual
    tipo_final = cambios.get('type', recurso.type)
    if tipo_final == 'phase':
        cambios['sede_id'] = None
    elif 'sede_id' in cambios:
        validar_sede(cambios['sede_id'])

    aplicar_cambios(recurso, cambios)
    db.session.commit()
    logger.debug(f"Recurso {recurso.id} actualizado: tipo={recurso.type}, sede={recurso.sede_id}")
    return jsonify(recurso.to_dict())

@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_recurso(id):
    eliminar(obtener_o_404(Resource, id, 'Recurso no encontrado'))
    return jsonify({'message': 'Recurso eliminado correctamente'})
