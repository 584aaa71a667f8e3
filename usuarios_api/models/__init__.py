"""
Modelos SQLAlchemy para Usuarios API
=====================================

- Usuario: cuentas de usuario con rol
- PersonalAccessToken: tokens bearer emitidos a cada usuario
"""

from .base import Base
from .usuario import Usuario, Rol, ROLES_VALIDOS
from .token import PersonalAccessToken

__all__ = [
    'Base',
    'Usuario',
    'Rol',
    'ROLES_VALIDOS',
    'PersonalAccessToken',
]
