"""
Modelo Usuario - Cuentas de usuario del sistema
"""

from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
from .base import Base


class Rol(str, enum.Enum):
    """Roles permitidos para un usuario."""
    ADMIN = "admin"
    USUARIO = "usuario"


ROLES_VALIDOS = tuple(rol.value for rol in Rol)


class Usuario(Base):
    """
    Usuario del sistema.

    El email es el identificador de login y es único en toda la tabla.
    La contraseña se guarda siempre como hash.
    """
    __tablename__ = 'usuarios'
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'usuario')", name='ck_usuarios_role'),
    )

    # Identificación
    id = Column(Integer, primary_key=True)
    name = Column(String(150), nullable=False)
    email = Column(String(150), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    # Permisos
    role = Column(String(20), nullable=False, default=Rol.USUARIO.value)

    # Fechas
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relaciones
    tokens = relationship("PersonalAccessToken", back_populates="usuario", cascade="all, delete-orphan")

    @property
    def es_admin(self) -> bool:
        return self.role == Rol.ADMIN.value

    def __repr__(self):
        return f"<Usuario(id={self.id}, email='{self.email}', role='{self.role}')>"
