from sqlalchemy import Enum
from calendario import db
from calendario.models.base import BaseModelMixin

ROLES = ('Administrator', 'User', 'Sales')

class User(BaseModelMixin, db.Model):
    __tablename__ = 'users'
    username = db.Column(db.String(100), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(Enum(*ROLES, name='user_role_enum'), nullable=False, default='User')
    sede_id = db.Column(db.Uuid, db.ForeignKey('sedes.id', ondelete='SET NULL'))

    def to_dict(self):
        datos = super().to_dict()
        datos.pop('password_hash', None)
        return datos

    def perfil(self):
        return {
            'id': str(self.id),
            'username': self.username,
            'email': self.email,
            'role': self.role,
        }
