from sqlalchemy import Enum
from calendario import db
from calendario.models.base import BaseModelMixin, TimestampMixin

TIPOS_SERVICIO = ('Service', 'Preparation', 'Warranty')
ESTADOS_EQUIPO = ('New', 'Used')
ESTADOS = ('abierto', 'cerrado')

class ServiceEntry(BaseModelMixin, TimestampMixin, db.Model):
    __tablename__ = 'service_entries'
    site = db.Column(db.String(100), nullable=False)
    zone = db.Column(db.String(100), nullable=False)
    ott = db.Column(db.String(50), nullable=False)
    client = db.Column(db.String(150), nullable=False)
    advisor = db.Column(db.String(100), nullable=False)
    type = db.Column(Enum(*TIPOS_SERVICIO, name='service_type_enum'), nullable=False)
    equipment_state = db.Column(Enum(*ESTADOS_EQUIPO, name='equipment_state_enum'), nullable=False)
    equipment = db.Column(db.String(150))
    notas = db.Column(db.Text)
    estado = db.Column(Enum(*ESTADOS, name='service_estado_enum'), nullable=False, default='abierto')
    sede_id = db.Column(db.Uuid, db.ForeignKey('sedes.id', ondelete='SET NULL'))
    created_by = db.Column(db.Uuid, db.ForeignKey('users.id', ondelete='SET NULL'))

    asignaciones = db.relationship('Assignment', backref='service_entry', lazy=True, cascade='all, delete')

    def to_dict(self):
        datos = super().to_dict()
        datos['sede_nombre'] = self.sede.nombre if self.sede else None
        datos['sede_codigo'] = self.sede.codigo if self.sede else None
        return datos
