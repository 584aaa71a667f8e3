"""
Usuario Routes - administración de usuarios (requiere token)
"""

from fastapi import APIRouter, Body, Depends
from typing import Any, List

from usuarios_api.api.dependencies import get_current_user, get_usuario_service
from usuarios_api.api.schemas import (
    MessageResponse,
    StatusResponse,
    UsuarioActualizadoResponse,
    UsuarioCreate,
    UsuarioResponse,
    UsuarioUpdate,
)
from usuarios_api.services import UsuarioService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get(
    "/listUsers",
    response_model=List[UsuarioResponse],
    summary="Obtener lista de usuarios",
    description="Retorna todos los usuarios registrados en el sistema",
)
async def listar_usuarios(
    service: UsuarioService = Depends(get_usuario_service)
):
    return [UsuarioResponse.model_validate(u) for u in service.listar()]


@router.post(
    "/addUser",
    response_model=StatusResponse,
    summary="Crear un nuevo usuario",
    description="Crea un nuevo usuario en el sistema",
    responses={
        400: {"description": "Rol no válido"},
        422: {"description": "Error de validación"},
        500: {"description": "Error al crear el usuario"},
    },
    openapi_extra={"requestBody": {"content": {"application/json": {
        "schema": UsuarioCreate.model_json_schema()
    }}}},
)
async def crear_usuario(
    datos: Any = Body(None),
    service: UsuarioService = Depends(get_usuario_service)
):
    """
    Create a user.

    Unlike /register, an unknown role is rejected after field validation
    with a 400 and a ``status: false`` body.
    """
    service.crear(datos if datos is not None else {})
    return StatusResponse(message="Usuario creado correctamente", status=True)


@router.get(
    "/getUser/{usuario_id}",
    response_model=UsuarioResponse,
    summary="Obtener un usuario por ID",
    description="Devuelve los detalles de un usuario específico",
    responses={404: {"description": "Usuario no encontrado"}},
)
async def obtener_usuario(
    usuario_id: str,
    service: UsuarioService = Depends(get_usuario_service)
):
    return UsuarioResponse.model_validate(service.obtener(usuario_id))


@router.put(
    "/updateUser/{usuario_id}",
    response_model=UsuarioActualizadoResponse,
    summary="Actualizar un usuario",
    description="Actualiza los datos de un usuario existente",
    responses={
        404: {"description": "Usuario no encontrado"},
        422: {"description": "Error de validación o restricciones de rol"},
    },
    openapi_extra={"requestBody": {"content": {"application/json": {
        "schema": UsuarioUpdate.model_json_schema()
    }}}},
)
async def actualizar_usuario(
    usuario_id: str,
    datos: Any = Body(None),
    service: UsuarioService = Depends(get_usuario_service)
):
    """
    Partially update a user.

    The body is validated by the service, after the target's role check.

    Args:
        usuario_id: ID of the user to update
        datos: Any subset of name, email, password, role
        service: Usuario service

    Returns:
        Confirmation and the updated user
    """
    usuario = service.actualizar(usuario_id, datos if datos is not None else {})
    return UsuarioActualizadoResponse(
        message="Usuario actualizado correctamente",
        data=UsuarioResponse.model_validate(usuario)
    )


@router.delete(
    "/deleteUser/{usuario_id}",
    response_model=MessageResponse,
    summary="Eliminar un usuario",
    description="Elimina un usuario existente del sistema",
    responses={404: {"description": "Usuario no encontrado"}},
)
async def eliminar_usuario(
    usuario_id: str,
    service: UsuarioService = Depends(get_usuario_service)
):
    service.eliminar(usuario_id)
    return MessageResponse(message="Usuario eliminado correctamente")
