from flask import Blueprint, jsonify
from flask_login import current_user
from sqlalchemy import case
import logging

from calendario import db
from calendario.crud import aplicar_cambios, eliminar, obtener_o_404, validar_sede
from calendario.models.pending_items import PendingItem
from calendario.models.service_entries import ESTADOS
from calendario.schemas import PendienteActualizar, PendienteCrear, arg_opcion, arg_uuid, validar
from calendario.security import proteger

bp = proteger(Blueprint('pending_items', __name__, url_prefix='/api/pending-items'))

logger = logging.getLogger(__name__)

@bp.route('', methods=['GET'])
def listar_pendientes():
    consulta = PendingItem.query
    sede_id = arg_uuid('sede_id')
    if sede_id:
        consulta = consulta.filter(PendingItem.sede_id == sede_id)
    estado = arg_opcion('estado', ESTADOS)
    if estado:
        consulta = consulta.filter(PendingItem.estado == estado)
    # Abiertos primero, luego los más recientes
    abiertos_primero = case((PendingItem.estado == 'abierto', 0), else_=1)
    items = consulta.order_by(
        abiertos_primero,
        PendingItem.created_at.desc(),
        PendingItem.date.desc(),
    ).all()
    return jsonify([item.to_dict() for item in items])

@bp.route('/<uuid:id>', methods=['GET'])
def obtener_pendiente(id):
    return jsonify(obtener_o_404(PendingItem, id, 'Item no encontrado').to_dict())

@bp.route('', methods=['POST'])
def crear_pendiente():
    datos = validar(PendienteCrear)
    validar_sede(datos.sede_id)
    valores = datos.model_dump()
    valores['observations'] = valores['observations'] or ''
    item = PendingItem(**valores, created_by=current_user.id)
    db.session.add(item)
    db.session.commit()
    logger.info(f"Pendiente creado: {item.item} -> {item.assigned_to}")
    return jsonify(item.to_dict()), 201

@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_pendiente(id):
    datos = validar(PendienteActualizar)
    item = obtener_o_404(PendingItem, id, 'Item no encontrado')
    cambios = datos.cambios()
    if 'sede_id' in cambios:
        validar_sede(cambios['sede_id'])
    aplicar_cambios(item, cambios)
    db.session.commit()
    return jsonify(item.to_dict())

@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_pendiente(id):
    eliminar(obtener_o_404(PendingItem, id, 'Item no encontrado'))
    return jsonify({'message': 'Item eliminado correctamente'})
