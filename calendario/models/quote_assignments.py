from sqlalchemy import Enum
from calendario import db
from calendario.models.base import BaseModelMixin

ESTADOS_ENTREGA = ('scheduled', 'pending', 'delivered')

class QuoteAssignment(BaseModelMixin, db.Model):
    __tablename__ = 'quote_assignments'
    __table_args__ = (
        db.UniqueConstraint('quote_entry_id', 'date', name='uq_quote_assignments_entry_date'),
    )
    quote_entry_id = db.Column(db.Uuid, db.ForeignKey('quote_entries.id', ondelete='CASCADE'), nullable=False)
    date = db.Column(db.Date, nullable=False)
    status = db.Column(Enum(*ESTADOS_ENTREGA, name='quote_status_enum'), nullable=False, default='pending')
