from calendario import db
from calendario.models.base import BaseModelMixin

class Assignment(BaseModelMixin, db.Model):
    __tablename__ = 'assignments'
    __table_args__ = (
        db.UniqueConstraint('service_entry_id', 'resource_id', 'date', name='uq_assignments_entry_resource_date'),
    )
    service_entry_id = db.Column(db.Uuid, db.ForeignKey('service_entries.id', ondelete='CASCADE'), nullable=False)
    resource_id = db.Column(db.Uuid, db.ForeignKey('resources.id', ondelete='CASCADE'), nullable=False)
    date = db.Column(db.Date, nullable=False)
