from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError
import logging

from calendario import db
from calendario.crud import eliminar, obtener_o_404
from calendario.models.quote_assignments import ESTADOS_ENTREGA, QuoteAssignment
from calendario.models.quote_entries import QuoteEntry
from calendario.schemas import (
    AsignacionCotizacionActualizar,
    AsignacionCotizacionCrear,
    arg_fecha,
    arg_opcion,
    arg_uuid,
    validar,
)
from calendario.security import proteger

bp = proteger(Blueprint('quote_assignments', __name__, url_prefix='/api/quote-assignments'))

logger = logging.getLogger(__name__)


def _existente(quote_entry_id, fecha):
    return QuoteAssignment.query.filter_by(quote_entry_id=quote_entry_id, date=fecha).first()


@bp.route('', methods=['GET'])
def listar_asignaciones_cotizacion():
    consulta = QuoteAssignment.query
    quote_entry_id = arg_uuid('quote_entry_id')
    if quote_entry_id:
        consulta = consulta.filter(QuoteAssignment.quote_entry_id == quote_entry_id)
    fecha = arg_fecha('date')
    if fecha:
        consulta = consulta.filter(QuoteAssignment.date == fecha)
    status = arg_opcion('status', ESTADOS_ENTREGA)
    if status:
        consulta = consulta.filter(QuoteAssignment.status == status)
    asignaciones = consulta.order_by(QuoteAssignment.date.desc()).all()
    return jsonify([asignacion.to_dict() for asignacion in asignaciones])


@bp.route('/<uuid:id>', methods=['GET'])
def obtener_asignacion_cotizacion(id):
    return jsonify(obtener_o_404(QuoteAssignment, id, 'Asignación no encontrada').to_dict())


@bp.route('', methods=['POST'])
def crear_asignacion_cotizacion():
    """Crea la asignación del día o actualiza su estado si ya existe."""
    datos = validar(AsignacionCotizacionCrear)
    obtener_o_404(QuoteEntry, datos.quote_entry_id, 'Cotización no encontrada')

    asignacion = _existente(datos.quote_entry_id, datos.date)
    if asignacion is not None:
        asignacion.status = datos.status
        db.session.commit()
    else:
        asignacion = QuoteAssignment(**datos.model_dump())
        db.session.add(asignacion)
        try:
            db.session.commit()
        except IntegrityError:
            # Otra petición insertó la misma fecha entre la consulta y el insert
            db.session.rollback()
            asignacion = _existente(datos.quote_entry_id, datos.date)
            asignacion.status = datos.status
            db.session.commit()

    logger.info(f"Entrega {asignacion.quote_entry_id} el {asignacion.date}: {asignacion.status}")
    return jsonify(asignacion.to_dict()), 201


@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_asignacion_cotizacion(id):
    datos = validar(AsignacionCotizacionActualizar)
    asignacion = obtener_o_404(QuoteAssignment, id, 'Asignación no encontrada')
    asignacion.status = datos.status
    db.session.commit()
    return jsonify(asignacion.to_dict())


@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_asignacion_cotizacion(id):
    eliminar(obtener_o_404(QuoteAssignment, id, 'Asignación no encontrada'))
    return jsonify({'message': 'Asignación eliminada correctamente'})
