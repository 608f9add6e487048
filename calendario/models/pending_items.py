from sqlalchemy import Enum
from calendario import db
from calendario.models.base import BaseModelMixin, TimestampMixin
from calendario.models.service_entries import ESTADOS

class PendingItem(BaseModelMixin, TimestampMixin, db.Model):
    __tablename__ = 'pending_items'
    item = db.Column(db.Text, nullable=False)
    date = db.Column(db.Date, nullable=False)
    assigned_to = db.Column(db.String(100), nullable=False)
    due_date = db.Column(db.Date, nullable=False)
    estado = db.Column(Enum(*ESTADOS, name='pending_estado_enum'), nullable=False, default='abierto')
    observations = db.Column(db.Text, default='')
    sede_id = db.Column(db.Uuid, db.ForeignKey('sedes.id', ondelete='SET NULL'))
    created_by = db.Column(db.Uuid, db.ForeignKey('users.id', ondelete='SET NULL'))
