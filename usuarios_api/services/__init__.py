"""
Services package - Lógica de negocio
"""

from .auth_service import AuthService
from .usuario_service import UsuarioService

__all__ = ['AuthService', 'UsuarioService']
