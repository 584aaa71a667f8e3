"""
Pydantic schemas for Usuario responses
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class UsuarioResponse(BaseModel):
    """Schema for user response; never carries the password hash"""
    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Schema for a plain confirmation"""
    message: str


class StatusResponse(MessageResponse):
    """Schema for confirmations carrying a status flag"""
    status: bool


class UsuarioActualizadoResponse(MessageResponse):
    """Schema for update response"""
    data: UsuarioResponse
