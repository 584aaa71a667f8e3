"""
Pydantic schemas

Los esquemas de entrada de usuarios se definen en services.validacion y
se reexportan aquí para documentar los cuerpos de las peticiones.
"""

from usuarios_api.services.validacion import (
    RegisterRequest,
    UsuarioCreate,
    UsuarioUpdate,
)
from .usuario import (
    UsuarioResponse,
    MessageResponse,
    StatusResponse,
    UsuarioActualizadoResponse,
)
from .auth import LoginRequest, AuthResponse
