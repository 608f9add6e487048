"""Mixins comunes para los modelos."""
from datetime import date, datetime
import uuid

from calendario import db


class BaseModelMixin:
    """Clave UUID, fecha de creación y serialización a JSON."""

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    def to_dict(self):
        datos = {}
        for columna in self.__table__.columns:
            datos[columna.name] = _serializar(getattr(self, columna.name))
        return datos


class TimestampMixin:
    updated_at = db.Column(
        db.DateTime,
        default=db.func.current_timestamp(),
        onupdate=db.func.current_timestamp(),
    )


def _serializar(valor):
    if isinstance(valor, uuid.UUID):
        return str(valor)
    if isinstance(valor, (datetime, date)):
        return valor.isoformat()
    return valor
