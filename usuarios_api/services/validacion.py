"""
Validación de datos de entrada de usuarios

Los esquemas de entrada viven junto a los servicios: la validación de
campos y la comprobación de email único se hacen en una sola pasada,
de modo que un error de validación enumera todos los campos que fallan.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, StringConstraints, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError
from typing import Annotated, Any, Literal, Optional, Type, TypeVar
import pydantic

from usuarios_api.database.manager import DatabaseManager
from usuarios_api.services.exceptions import (
    ValidationError,
    MENSAJE_EMAIL_EN_USO,
    errores_desde_pydantic,
)

NOMBRE_MAX = 150
EMAIL_MAX = 150
PASSWORD_MIN = 6

MENSAJE_EMAIL_INVALIDO = "El campo email debe ser una dirección de correo válida."


def _validar_email(value: str) -> str:
    """Comprueba el formato y la longitud; devuelve el email tal como llegó."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("value_error", MENSAJE_EMAIL_INVALIDO)
    if len(value) > EMAIL_MAX:
        raise PydanticCustomError(
            "string_too_long",
            "El campo email no debe ser mayor que {max_length} caracteres.",
            {"max_length": EMAIL_MAX},
        )
    return value


Nombre = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NOMBRE_MAX)]
Email = Annotated[str, AfterValidator(_validar_email)]
Password = Annotated[str, StringConstraints(min_length=PASSWORD_MIN)]


class UsuarioBase(BaseModel):
    """Base schema for Usuario"""
    name: Nombre = Field(..., examples=["Juan Pérez"])
    email: Email = Field(..., examples=["juan@example.com"])
    password: Password = Field(..., examples=["123456"])


class RegisterRequest(UsuarioBase):
    """Schema for self-registration; the role is checked with the other fields"""
    role: Literal["admin", "usuario"] = Field(..., examples=["usuario"])


class UsuarioCreate(UsuarioBase):
    """Schema for creating a user from the admin endpoints"""
    role: str = Field(..., min_length=1, examples=["usuario"])


class UsuarioUpdate(BaseModel):
    """
    Schema for a partial update.

    name, email and role may be omitted but not sent as null.
    A null or empty password leaves the current one unchanged.
    """
    name: Optional[Nombre] = Field(None, examples=["Pedro García"])
    email: Optional[Email] = Field(None, examples=["pedro@example.com"])
    password: Optional[Password] = Field(None, examples=["nueva123"])
    role: Optional[str] = Field(None, min_length=1, examples=["admin"])

    @field_validator("name", "email", "role", mode="before")
    @classmethod
    def _no_nulo(cls, value, info: ValidationInfo):
        if value is None:
            raise PydanticCustomError(
                "obligatorio",
                "El campo {campo} es obligatorio.",
                {"campo": {"name": "nombre", "role": "rol"}.get(info.field_name, info.field_name)},
            )
        return value

    @field_validator("password", mode="before")
    @classmethod
    def _password_vacia(cls, value):
        if value == "":
            return None
        return value

    def campos_enviados(self) -> dict:
        """Campos presentes en la petición, sin una password vacía"""
        campos = self.model_dump(include=self.model_fields_set)
        if not campos.get("password"):
            campos.pop("password", None)
        return campos


Esquema = TypeVar("Esquema", bound=BaseModel)


def validar_datos(
    esquema: Type[Esquema],
    datos: Any,
    manager: DatabaseManager,
    excluir_id: int = None
) -> Esquema:
    """
    Valida el cuerpo de una petición contra un esquema y comprueba que el
    email no pertenezca a otro usuario.

    Args:
        esquema: Esquema pydantic de entrada
        datos: Cuerpo de la petición sin validar
        manager: Gestor de base de datos para la comprobación de email único
        excluir_id: ID del usuario propio en una actualización

    Returns:
        Datos validados

    Raises:
        ValidationError: Con todos los campos que fallan, email en uso incluido
    """
    errores = {}
    validado = None
    try:
        validado = esquema.model_validate(datos)
    except pydantic.ValidationError as e:
        errores = errores_desde_pydantic(e.errors())

    # El email se comprueba aunque fallen otros campos, si su formato es válido
    email = datos.get("email") if isinstance(datos, dict) else None
    if isinstance(email, str) and "email" not in errores:
        if manager.email_en_uso(email, excluir_id=excluir_id):
            errores["email"] = [MENSAJE_EMAIL_EN_USO]

    if errores:
        orden = list(esquema.model_fields)
        errores = dict(sorted(
            errores.items(),
            key=lambda item: orden.index(item[0]) if item[0] in orden else len(orden)
        ))
        raise ValidationError(errores)

    return validado
