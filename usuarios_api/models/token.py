"""
Modelo PersonalAccessToken - Tokens de acceso emitidos a usuarios
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from .base import Base


class PersonalAccessToken(Base):
    """
    Token de acceso emitido en login o registro.

    Solo se guarda el hash SHA-256 del identificador (jti) del token;
    el token en claro se entrega una única vez al cliente. Un token es
    válido mientras exista su fila.
    """
    __tablename__ = 'personal_access_tokens'

    id = Column(Integer, primary_key=True)
    usuario_id = Column(
        Integer,
        ForeignKey('usuarios.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    name = Column(String(100), nullable=False)
    token_hash = Column(String(64), unique=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    last_used_at = Column(DateTime)

    usuario = relationship("Usuario", back_populates="tokens")

    def __repr__(self):
        return f"<PersonalAccessToken(id={self.id}, usuario_id={self.usuario_id}, name='{self.name}')>"
