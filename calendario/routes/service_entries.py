from flask import Blueprint, jsonify
from flask_login import current_user
from sqlalchemy.orm import joinedload
import logging

from calendario import db
from calendario.crud import aplicar_cambios, eliminar, obtener_o_404, validar_sede
from calendario.models.service_entries import ESTADOS, ServiceEntry
from calendario.schemas import EntradaServicioActualizar, EntradaServicioCrear, arg_opcion, arg_uuid, validar
from calendario.security import proteger

bp = proteger(Blueprint('service_entries', __name__, url_prefix='/api/service-entries'))

logger = logging.getLogger(__name__)

@bp.route('', methods=['GET'])
def listar_entradas():
    consulta = ServiceEntry.query.options(joinedload(ServiceEntry.sede))
    sede_id = arg_uuid('sede_id')
    if sede_id:
        consulta = consulta.filter(ServiceEntry.sede_id == sede_id)
    estado = arg_opcion('estado', ESTADOS)
    if estado:
        consulta = consulta.filter(ServiceEntry.estado == estado)
    entradas = consulta.order_by(ServiceEntry.created_at.desc()).all()
    logger.debug(f"Entradas de servicio: {len(entradas)} (sede={sede_id}, estado={estado})")
    return jsonify([entrada.to_dict() for entrada in entradas])

@bp.route('/<uuid:id>', methods=['GET'])
def obtener_entrada(id):
    return jsonify(obtener_o_404(ServiceEntry, id, 'Entrada no encontrada').to_dict())

@bp.route('', methods=['POST'])
def crear_entrada():
    datos = validar(EntradaServicioCrear)
    validar_sede(datos.sede_id)
    entrada = ServiceEntry(**datos.model_dump(), created_by=current_user.id)
    db.session.add(entrada)
    db.session.commit()
    logger.info(f"Entrada de servicio creada: OTT {entrada.ott}")
    return jsonify(entrada.to_dict()), 201

@bp.route('/<uuid:id>', methods=['PUT'])
def actualizar_entrada(id):
    datos = validar(EntradaServicioActualizar)
    entrada = obtener_o_404(ServiceEntry, id, 'Entrada no encontrada')
    cambios = datos.cambios()
    if 'sede_id' in cambios:
        validar_sede(cambios['sede_id'])
    anterior = entrada.estado
    aplicar_cambios(entrada, cambios)
    db.session.commit()
    if entrada.estado != anterior:
        logger.info(f"Entrada {entrada.id}: {anterior} -> {entrada.estado}")
    return jsonify(entrada.to_dict())

@bp.route('/<uuid:id>', methods=['DELETE'])
def eliminar_entrada(id):
    eliminar(obtener_o_404(ServiceEntry, id, 'Entrada no encontrada'))
    return jsonify({'message': 'Entrada eliminada correctamente'})
