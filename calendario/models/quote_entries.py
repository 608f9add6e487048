from sqlalchemy import Enum
from calendario import db
from calendario.models.base import BaseModelMixin, TimestampMixin
from calendario.models.service_entries import ESTADOS

class QuoteEntry(BaseModelMixin, TimestampMixin, db.Model):
    __tablename__ = 'quote_entries'
    zone = db.Column(db.String(100), nullable=False)
    equipment = db.Column(db.String(150), nullable=False)
    client = db.Column(db.String(150), nullable=False)
    notes = db.Column(db.Text, default='')
    estado = db.Column(Enum(*ESTADOS, name='quote_estado_enum'), nullable=False, default='abierto')
    sede_id = db.Column(db.Uuid, db.ForeignKey('sedes.id', ondelete='SET NULL'))
    created_by = db.Column(db.Uuid, db.ForeignKey('users.id', ondelete='SET NULL'))

    asignaciones = db.relationship('QuoteAssignment', backref='quote_entry', lazy=True, cascade='all, delete')
