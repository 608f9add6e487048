from calendario import db
from calendario.models.base import BaseModelMixin, TimestampMixin

class Sede(BaseModelMixin, TimestampMixin, db.Model):
    __tablename__ = 'sedes'
    nombre = db.Column(db.String(100), nullable=False)
    codigo = db.Column(db.String(20), unique=True, nullable=False)
    ciudad = db.Column(db.String(100))
    direccion = db.Column(db.Text)
    activa = db.Column(db.Boolean, nullable=False, default=True)

    # Al eliminar una sede las filas que la referencian quedan sin sede
    usuarios = db.relationship('User', backref='sede', lazy=True)
    recursos = db.relationship('Resource', backref='sede', lazy=True)
    entradas_servicio = db.relationship('ServiceEntry', backref='sede', lazy=True)
    cotizaciones = db.relationship('QuoteEntry', backref='sede', lazy=True)
    pendientes = db.relationship('PendingItem', backref='sede', lazy=True)
