from sqlalchemy import Enum
from calendario import db
from calendario.models.base import BaseModelMixin

TIPOS_RECURSO = ('technician', 'administrator', 'phase', 'activity')

class Resource(BaseModelMixin, db.Model):
    __tablename__ = 'resources'
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(Enum(*TIPOS_RECURSO, name='resource_type_enum'), nullable=False)
    available = db.Column(db.Boolean, nullable=False, default=True)
    # Las fases son globales: siempre sin sede
    sede_id = db.Column(db.Uuid, db.ForeignKey('sedes.id', ondelete='SET NULL'))

    asignaciones = db.relationship('Assignment', backref='resource', lazy=True, cascade='all, delete')
