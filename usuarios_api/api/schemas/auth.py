"""
Pydantic schemas for authentication
"""

from pydantic import BaseModel, Field

from usuarios_api.services.validacion import Email
from .usuario import UsuarioResponse


class LoginRequest(BaseModel):
    """Schema for login request"""
    email: Email = Field(..., examples=["juan@example.com"])
    password: str = Field(..., min_length=1, examples=["123456"])


class AuthResponse(BaseModel):
    """Schema for register/login response"""
    message: str
    user: UsuarioResponse
    token: str
