"""
Authentication Routes
"""

from fastapi import APIRouter, Body, Depends, status
from typing import Any

from usuarios_api.api.dependencies import get_auth_service, get_current_user
from usuarios_api.api.schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UsuarioResponse,
)
from usuarios_api.models import Usuario
from usuarios_api.services import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registro de un nuevo usuario",
    description="Crea un usuario y devuelve un token de acceso",
    responses={422: {"description": "Errores de validación"}},
    openapi_extra={"requestBody": {"content": {"application/json": {
        "schema": RegisterRequest.model_json_schema()
    }}}},
)
async def register(
    datos: Any = Body(None),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register new user.

    Args:
        datos: name, email, password and role, validated by the service
        auth_service: Auth service

    Returns:
        Created user and its access token
    """
    usuario, token = auth_service.registrar(datos if datos is not None else {})

    return AuthResponse(
        message="Usuario registrado exitosamente",
        user=UsuarioResponse.model_validate(usuario),
        token=token
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login de usuario existente",
    description="Valida las credenciales y devuelve un token",
    responses={401: {"description": "Credenciales inválidas"}},
)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login endpoint - Authenticate user and return a new token.

    Raises:
        AuthenticationError: If credentials are invalid
    """
    usuario, token = auth_service.login(credentials.email, credentials.password)

    return AuthResponse(
        message="Login exitoso",
        user=UsuarioResponse.model_validate(usuario),
        token=token
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout de usuario",
    description="Revoca todos los tokens del usuario autenticado",
    responses={401: {"description": "No autorizado"}},
)
async def logout(
    current_user: Usuario = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    auth_service.logout(current_user)
    return MessageResponse(message="Logout exitoso, tokens revocados")


@router.get(
    "/user",
    response_model=UsuarioResponse,
    summary="Usuario autenticado",
    description="Devuelve el usuario dueño del token",
    responses={401: {"description": "No autorizado"}},
)
async def get_current_user_info(
    current_user: Usuario = Depends(get_current_user)
):
    return UsuarioResponse.model_validate(current_user)
