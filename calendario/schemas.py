"""Validación de cuerpos y filtros de las peticiones.

Los esquemas ``*Crear`` exigen los campos requeridos de cada entidad; los
esquemas ``*Actualizar`` son parches: solo se aplican los campos presentes en
el cuerpo (``cambios()``), un ``null`` explícito limpia las columnas que lo
admiten y se rechaza en las que no.
"""
from datetime import date
from typing import Annotated, ClassVar, Literal, Optional
import uuid

from flask import request
from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints, ValidationError, model_validator

from calendario.errors import ApiError
from calendario.fechas import parse_fecha


def _vacio_a_none(valor):
    if isinstance(valor, str) and not valor.strip():
        return None
    return valor


def _fecha(valor):
    valor = _vacio_a_none(valor)
    if isinstance(valor, str):
        try:
            return parse_fecha(valor)
        except ValueError:
            return valor
    return valor


def requerido(largo):
    return Annotated[str, BeforeValidator(_vacio_a_none), StringConstraints(max_length=largo)]


def texto(largo=None):
    return Annotated[
        Optional[Annotated[str, StringConstraints(max_length=largo)]],
        BeforeValidator(_vacio_a_none),
    ]


Texto = texto()
Requerido = requerido(None)
IdOpcional = Annotated[Optional[uuid.UUID], BeforeValidator(_vacio_a_none)]
Fecha = Annotated[date, BeforeValidator(_fecha)]

Rol = Literal['Administrator', 'User', 'Sales']
Estado = Literal['abierto', 'cerrado']
TipoServicio = Literal['Service', 'Preparation', 'Warranty']
EstadoEquipo = Literal['New', 'Used']
TipoRecurso = Literal['technician', 'administrator', 'phase', 'activity']
EstadoEntrega = Literal['scheduled', 'pending', 'delivered']


class Esquema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    mensaje_requeridos: ClassVar[str] = 'Faltan campos requeridos'
    no_nulos: ClassVar[tuple] = ()

    @model_validator(mode='after')
    def _rechazar_nulos(self):
        for campo in self.no_nulos:
            if campo in self.model_fields_set and getattr(self, campo) is None:
                raise ValueError(f"{campo} no puede ser nulo")
        return self

    def cambios(self) -> dict:
        return self.model_dump(exclude_unset=True)


def _requerido_vacio(esquema, detalle) -> bool:
    """Campo obligatorio enviado como ``null`` o cadena vacía."""
    if not detalle['loc']:
        return False
    campo = esquema.model_fields.get(detalle['loc'][0])
    return campo is not None and campo.is_required() and detalle.get('input') in (None, '')


def _mensaje(esquema, error: ValidationError) -> str:
    errores = error.errors()
    for detalle in errores:
        if detalle['type'] == 'missing' or _requerido_vacio(esquema, detalle):
            return esquema.mensaje_requeridos
    detalle = errores[0]
    campo = '.'.join(str(parte) for parte in detalle['loc'])
    tipo = detalle['type']
    if detalle['loc'] and detalle.get('input') is None:
        return f"{campo} no puede ser nulo"
    if tipo == 'string_too_long':
        return f"{campo} no puede tener más de {detalle['ctx']['max_length']} caracteres"
    if tipo == 'literal_error':
        return f"{campo} debe ser uno de: {detalle['ctx']['expected']}"
    if tipo.startswith('uuid'):
        return f"{campo} no es un UUID válido: {detalle['input']}"
    if tipo.startswith('date'):
        return f"{campo} no es una fecha válida: {detalle['input']}"
    if tipo == 'value_error':
        return str(detalle['ctx']['error'])
    return f"{campo}: {detalle['msg']}"


def validar(esquema, datos=None):
    if datos is None:
        datos = request.get_json(silent=True) or {}
    if not isinstance(datos, dict):
        raise ApiError('El cuerpo de la petición debe ser un objeto JSON')
    try:
        return esquema.model_validate(datos)
    except ValidationError as e:
        raise ApiError(_mensaje(esquema, e)) from None


# --- Filtros de query string ---
def arg_uuid(nombre):
    valor = request.args.get(nombre)
    if not valor:
        return None
    try:
        return uuid.UUID(valor)
    except ValueError:
        raise ApiError(f"{nombre} no es un UUID válido: {valor}") from None


def arg_fecha(nombre):
    valor = request.args.get(nombre)
    if not valor:
        return None
    try:
        return parse_fecha(valor)
    except ValueError:
        raise ApiError(f"{nombre} no es una fecha válida: {valor}") from None


def arg_bool(nombre):
    valor = request.args.get(nombre)
    if valor is None or valor == '':
        return None
    if valor.lower() not in ('true', 'false'):
        raise ApiError(f"{nombre} debe ser true o false: {valor}")
    return valor.lower() == 'true'


def arg_opcion(nombre, opciones):
    valor = request.args.get(nombre)
    if not valor:
        return None
    if valor not in opciones:
        raise ApiError(f"{nombre} debe ser uno de: {', '.join(opciones)}")
    return valor


# --- Auth ---
class Login(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Usuario y contraseña son requeridos'
    username: Requerido
    password: Requerido


class Registro(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Usuario, email y contraseña son requeridos'
    username: requerido(100)
    email: requerido(255)
    password: Requerido
    role: Optional[Rol] = None


# --- Sedes ---
class SedeCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Nombre y código son requeridos'
    nombre: requerido(100)
    codigo: requerido(20)
    ciudad: texto(100) = None
    direccion: Texto = None
    activa: bool = True


class SedeActualizar(Esquema):
    no_nulos: ClassVar[tuple] = ('nombre', 'codigo', 'activa')
    nombre: texto(100) = None
    codigo: texto(20) = None
    ciudad: texto(100) = None
    direccion: Texto = None
    activa: Optional[bool] = None


# --- Entradas de servicio ---
class EntradaServicioCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Todos los campos requeridos deben ser proporcionados'
    site: requerido(100)
    zone: requerido(100)
    ott: requerido(50)
    client: requerido(150)
    advisor: requerido(100)
    type: TipoServicio
    equipment_state: EstadoEquipo
    equipment: texto(150) = None
    notas: Texto = None
    estado: Estado = 'abierto'
    sede_id: IdOpcional = None


class EntradaServicioActualizar(Esquema):
    no_nulos: ClassVar[tuple] = (
        'site', 'zone', 'ott', 'client', 'advisor', 'type', 'equipment_state', 'estado',
    )
    site: texto(100) = None
    zone: texto(100) = None
    ott: texto(50) = None
    client: texto(150) = None
    advisor: texto(100) = None
    type: Optional[TipoServicio] = None
    equipment_state: Optional[EstadoEquipo] = None
    equipment: texto(150) = None
    notas: Texto = None
    estado: Optional[Estado] = None
    sede_id: IdOpcional = None


# --- Cotizaciones ---
class CotizacionCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Zone, equipment y client son requeridos'
    zone: requerido(100)
    equipment: requerido(150)
    client: requerido(150)
    notes: Optional[str] = ''
    estado: Estado = 'abierto'
    sede_id: IdOpcional = None


class CotizacionActualizar(Esquema):
    no_nulos: ClassVar[tuple] = ('zone', 'equipment', 'client', 'estado')
    zone: texto(100) = None
    equipment: texto(150) = None
    client: texto(150) = None
    notes: Optional[str] = None
    estado: Optional[Estado] = None
    sede_id: IdOpcional = None


# --- Pendientes ---
class PendienteCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Todos los campos requeridos deben ser proporcionados'
    item: Requerido
    date: Fecha
    assigned_to: requerido(100)
    due_date: Fecha
    estado: Estado = 'abierto'
    observations: Optional[str] = ''
    sede_id: IdOpcional = None


class PendienteActualizar(Esquema):
    no_nulos: ClassVar[tuple] = ('item', 'date', 'assigned_to', 'due_date', 'estado')
    item: Texto = None
    date: Optional[Fecha] = None
    assigned_to: texto(100) = None
    due_date: Optional[Fecha] = None
    estado: Optional[Estado] = None
    observations: Optional[str] = None
    sede_id: IdOpcional = None


# --- Recursos ---
class RecursoCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'Name y type son requeridos'
    name: requerido(100)
    type: TipoRecurso
    available: bool = True
    sede_id: IdOpcional = None


class RecursoActualizar(Esquema):
    no_nulos: ClassVar[tuple] = ('name', 'type', 'available')
    name: texto(100) = None
    type: Optional[TipoRecurso] = None
    available: Optional[bool] = None
    sede_id: IdOpcional = None


# --- Asignaciones ---
class AsignacionCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'service_entry_id, resource_id y date son requeridos'
    service_entry_id: uuid.UUID
    resource_id: uuid.UUID
    date: Fecha


class AsignacionActualizar(Esquema):
    no_nulos: ClassVar[tuple] = ('resource_id', 'date')
    resource_id: Optional[uuid.UUID] = None
    date: Optional[Fecha] = None


class AsignacionCotizacionCrear(Esquema):
    mensaje_requeridos: ClassVar[str] = 'quote_entry_id y date son requeridos'
    quote_entry_id: uuid.UUID
    date: Fecha
    status: EstadoEntrega = 'pending'


class AsignacionCotizacionActualizar(Esquema):
    mensaje_requeridos: ClassVar[str] = 'status debe ser scheduled, pending o delivered'
    status: EstadoEntrega
