"""
Errores de servicio

Cada error conoce su código HTTP y el cuerpo JSON con el que se
devuelve al cliente. Los manejadores de main.py los serializan.
"""

from typing import Any, Dict, List, Optional

MENSAJE_NO_AUTENTICADO = "No autenticado. Token inválido o ausente."
MENSAJE_CREDENCIALES_INVALIDAS = "Credenciales inválidas."
MENSAJE_ROL_INVALIDO = 'El rol ingresado no es válido, debe ser "admin" o "usuario".'
MENSAJE_SOLO_ADMIN = "Solo los usuarios con rol admin pueden ser actualizados."
MENSAJE_NO_ENCONTRADO = "Usuario no encontrado."
MENSAJE_ERROR_CREACION = "Error al crear el usuario"
MENSAJE_EMAIL_EN_USO = "El email ya ha sido registrado."


class ServiceError(Exception):
    """Base de los errores que llegan al cliente como JSON."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int = None, **extra: Any):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body = {"message": self.message}
        body.update(self.extra)
        return body


class ValidationError(ServiceError):
    """Errores de validación por campo (422)."""

    status_code = 422

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or resumen_errores(errors))

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class InvalidRoleError(ServiceError):
    """Rol fuera de {"admin", "usuario"} detectado tras la validación estructural."""

    status_code = 400

    def __init__(self, status_code: int = 400, **extra: Any):
        super().__init__(MENSAJE_ROL_INVALIDO, status_code=status_code, **extra)


class AuthenticationError(ServiceError):
    """Token ausente o inválido, o credenciales incorrectas (401)."""

    status_code = 401

    def __init__(self, message: str = MENSAJE_NO_AUTENTICADO):
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Restricción de rol sobre el usuario destino (422)."""

    status_code = 422

    def __init__(self, message: str = MENSAJE_SOLO_ADMIN):
        super().__init__(message, status=False)


class NotFoundError(ServiceError):
    status_code = 404

    def __init__(self, message: str = MENSAJE_NO_ENCONTRADO):
        super().__init__(message)


class PersistenceError(ServiceError):
    """Fallo del almacenamiento al escribir (500)."""

    status_code = 500

    def __init__(self, message: str = MENSAJE_ERROR_CREACION):
        super().__init__(message, status=False)


def resumen_errores(errors: Dict[str, List[str]]) -> str:
    """
    Mensaje de cabecera: el primer error, más el número de errores restantes.
    """
    mensajes = [mensaje for lista in errors.values() for mensaje in lista]
    if not mensajes:
        return "Los datos enviados no son válidos."
    primero = mensajes[0]
    restantes = len(mensajes) - 1
    if restantes == 1:
        return f"{primero} (y 1 error más)"
    if restantes > 1:
        return f"{primero} (y {restantes} errores más)"
    return primero


# Nombre legible de cada campo en los mensajes
ATRIBUTOS = {
    "name": "nombre",
    "email": "email",
    "password": "contraseña",
    "role": "rol",
    "body": "cuerpo de la petición",
}


def _campo(loc) -> str:
    partes = [str(p) for p in loc if p != "body"]
    return partes[-1] if partes else "body"


def _mensaje(campo: str, error: Dict[str, Any]) -> str:
    tipo = error.get("type", "")
    ctx = error.get("ctx") or {}
    atributo = ATRIBUTOS.get(campo, campo)

    if tipo == "missing":
        return f"El campo {atributo} es obligatorio."
    if tipo in ("string_too_short", "too_short"):
        if ctx.get("min_length", 1) <= 1:
            return f"El campo {atributo} es obligatorio."
        return f"El campo {atributo} debe tener al menos {ctx['min_length']} caracteres."
    if tipo in ("string_too_long", "too_long"):
        return f"El campo {atributo} no debe ser mayor que {ctx.get('max_length')} caracteres."
    if tipo == "string_type":
        return f"El campo {atributo} debe ser una cadena de caracteres."
    if tipo in ("int_parsing", "int_type"):
        return f"El campo {atributo} debe ser un número entero."
    if tipo == "literal_error":
        return f"El {atributo} seleccionado no es válido."
    if tipo == "value_error" and campo == "email":
        return "El campo email debe ser una dirección de correo válida."
    if tipo in ("model_type", "model_attributes_type", "dict_type", "json_invalid"):
        return "El cuerpo de la petición debe ser un objeto JSON."
    return error.get("msg", f"El campo {atributo} no es válido.")


def errores_desde_pydantic(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Agrupa los errores de pydantic por campo con mensajes legibles.

    Acepta tanto ``RequestValidationError.errors()`` (loc con prefijo
    "body") como ``pydantic.ValidationError.errors()``.
    """
    agrupados: Dict[str, List[str]] = {}
    for error in errors:
        campo = _campo(error.get("loc", ()))
        mensaje = _mensaje(campo, error)
        mensajes = agrupados.setdefault(campo, [])
        if mensaje not in mensajes:
            mensajes.append(mensaje)
    return agrupados
