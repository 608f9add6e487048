from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError
import logging

from calendario import db
from calendario.crud import aplicar_cambios, eliminar, obtener_o_404
from calendario.errors import ApiError
from calendario.models.assignments import Assignment
from calendario.models.resources import Resource
from calendario.models.service_entries import ServiceEntry
from calendario.schemas import AsignacionActualizar, AsignacionCrear, arg_fecha, arg_uuid, validar
from calendario.security import proteger

bp = proteger(Blueprint('assignments', __name__, url_prefix='/api/assignments'))

logger = logging.getLogger(__name__)

DUPLICADA = 'La asignación ya existe'


def _guardar(asignacion):
    clave = (asignacion.service_entry_id, asignacion.resource_id, asignacion.date)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.info(f"Asignación duplicada: {clave}")
        raise ApiError(DUPLICADA, status=409) from None


@bp.route('', methods=['GET'])
def listar_asignaciones():
    consulta = Assignment.query
    service_entry_id = arg_uuid('service_entry_id')
    if service_entry_id:
        consulta = consulta.filter(Assignment.service_entry_id == service_entry_id)
    resource_id = arg_uuid('resource_id')
    if resource_id:
        consulta = consulta.filter(Assignment.resource_id == resource_id)
    fecha = arg_fecha('date')
    if fecha:
        consulta = consulta.filter(Assignment.date == fecha)
    desde = arg_fecha('desde')
    if desde:
        consulta = consulta.filter(Assignment.date >= desde)
    hasta = arg_fecha('hasta')
    if hasta:
        consulta = consulta.filter(Assignment.date <= hasta)
    asignaciones = consulta.order_by(Assignment.date.asc()).all()
    return jsonify([asignacion.to_dict() for asignacion in asignaciones])


@bp.route('/<uuid:id>', methods=['GET'])
def obtener_asignacion(id):
    return jsonify(obtener_o_404(Assignment, id, 'Asignación no encontrada').to_dict())


@bp.route('', methods=['POST'])
def crear_asignacion():
    datos = validar(AsignacionCrear)
    obtener_o_404(ServiceEntry, datos.service_entry_id, 'Entrada no encontrada')
    obtener_o_404(Resource, datos.resource_id, 'Recurso no encontrado')

    asignacion = Assignment(**datos.model_dump())
    db.session.add(asignacion)
    _guardar(asignacion)
    logger.info(f"Asignación creada: recurso {asignacion.resource_id} el {asignacion.date}")
    return jsonify(asignacion.to_dict()), 201


@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_asignacion(id):
    """Mueve una asignación a otro día o a otro recurso."""
    datos = validar(AsignacionActualizar)
    asignacion = obtener_o_404(Assignment, id, 'Asignación no encontrada')
    cambios = datos.cambios()
    if 'resource_id' in cambios:
        obtener_o_404(Resource, cambios['resource_id'], 'Recurso no encontrado')
    aplicar_cambios(asignacion, cambios)
    _guardar(asignacion)
    return jsonify(asignacion.to_dict())


@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_asignacion(id):
    eliminar(obtener_o_404(Assignment, id, 'Asignación no encontrada'))
    return jsonify({'message': 'Asignación eliminada correctamente'})
