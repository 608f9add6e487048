from flask import Blueprint, jsonify
from flask_login import current_user
import logging

from calendario import db
from calendario.crud import aplicar_cambios, eliminar, obtener_o_404, validar_sede
from calendario.models.quote_entries import QuoteEntry
from calendario.models.service_entries import ESTADOS
from calendario.schemas import CotizacionActualizar, CotizacionCrear, arg_opcion, arg_uuid, validar
from calendario.security import proteger

bp = proteger(Blueprint('quote_entries', __name__, url_prefix='/api/quote-entries'))

logger = logging.getLogger(__name__)

@bp.route('', methods=['GET'])
def listar_cotizaciones():
    consulta = QuoteEntry.query
    sede_id = arg_uuid('sede_id')
    if sede_id:
        consulta = consulta.filter(QuoteEntry.sede_id == sede_id)
    estado = arg_opcion('estado', ESTADOS)
    if estado:
        consulta = consulta.filter(QuoteEntry.estado == estado)
    cotizaciones = consulta.order_by(QuoteEntry.created_at.desc()).all()
    return jsonify([cotizacion.to_dict() for cotizacion in cotizaciones])

@bp.route('/<uuid:id>', methods=['GET'])
def obtener_cotizacion(id):
    return jsonify(obtener_o_404(QuoteEntry, id, 'Cotización no encontrada').to_dict())

@bp.route('', methods=['POST'])
def crear_cotizacion():
    datos = validar(CotizacionCrear)
    validar_sede(datos.sede_id)
    valores = datos.model_dump()
    valores['notes'] = valores['notes'] or ''
    cotizacion = QuoteEntry(**valores, created_by=current_user.id)
    db.session.add(cotizacion)
    db.session.commit()
    logger.info(f"Cotización creada para {cotizacion.client}")
    return jsonify(cotizacion.to_dict()), 201

@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_cotizacion(id):
    datos = validar(CotizacionActualizar)
    cotizacion = obtener_o_404(QuoteEntry, id, 'Cotización no encontrada')
    cambios = datos.cambios()
    if 'sede_id' in cambios:
        validar_sede(cambios['sede_id'])
    aplicar_cambios(cotizacion, cambios)
    db.session.commit()
    return jsonify(cotizacion.to_dict())

@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_cotizacion(id):
    eliminar(obtener_o_404(QuoteEntry, id, 'Cotización no encontrada'))
    return jsonify({'message': 'Cotización eliminada correctamente'})
