"""
Usuario Service - administración de cuentas de usuario
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import Any, Dict, List, Union
import logging

from usuarios_api.database.manager import DatabaseManager
from usuarios_api.models import Usuario, ROLES_VALIDOS
from usuarios_api.services.exceptions import (
    AuthorizationError,
    InvalidRoleError,
    NotFoundError,
    PersistenceError,
    ValidationError,
    MENSAJE_EMAIL_EN_USO,
)
from usuarios_api.services.validacion import UsuarioCreate, UsuarioUpdate, validar_datos
from usuarios_api.utils.security import hash_password

logger = logging.getLogger(__name__)


def _parse_id(usuario_id: Union[int, str]) -> int:
    """Un ID que no es un entero no corresponde a ningún usuario"""
    try:
        return int(usuario_id)
    except (TypeError, ValueError):
        raise NotFoundError()


class UsuarioService:
    """
    Servicio para gestionar usuarios.

    Solo se pueden actualizar usuarios cuyo rol actual sea "admin",
    sin importar quién hace la petición.
    """

    def __init__(self, db: Session):
        self.db = db
        self.manager = DatabaseManager(db)

    def listar(self) -> List[Usuario]:
        """Todos los usuarios, en orden de creación"""
        return self.manager.listar_usuarios()

    def crear(self, datos: Dict[str, Any]) -> Usuario:
        """
        Crea un usuario.

        El rol se comprueba después de la validación de campos y con su
        propio error (400), distinto del error de validación del registro.

        Args:
            datos: Cuerpo de la petición (name, email, password, role)

        Raises:
            ValidationError: Con todos los campos que fallan, email en uso incluido
            InvalidRoleError: Si el rol no es "admin" ni "usuario"
            PersistenceError: Si falla la escritura
        """
        nuevo = validar_datos(UsuarioCreate, datos, self.manager)

        if nuevo.role not in ROLES_VALIDOS:
            raise InvalidRoleError(status_code=400, status=False)

        try:
            usuario = self.manager.crear_usuario(
                name=nuevo.name,
                email=nuevo.email,
                password_hash=hash_password(nuevo.password),
                role=nuevo.role
            )
        except IntegrityError:
            raise ValidationError({"email": [MENSAJE_EMAIL_EN_USO]})
        except SQLAlchemyError as e:
            logger.error(f"❌ Error creando usuario {nuevo.email}: {e}")
            raise PersistenceError()

        return usuario

    def obtener(self, usuario_id: Union[int, str]) -> Usuario:
        """
        Raises:
            NotFoundError: Si el usuario no existe o el ID no es un entero
        """
        usuario = self.manager.obtener_usuario(_parse_id(usuario_id))
        if usuario is None:
            raise NotFoundError()
        return usuario

    def actualizar(self, usuario_id: Union[int, str], datos: Dict[str, Any]) -> Usuario:
        """
        Actualiza parcialmente un usuario.

        Orden de comprobaciones: existencia (404), rol del usuario destino
        (422), validación de campos con email único (422), rol enviado (422).

        Args:
            usuario_id: ID del usuario a modificar
            datos: Cuerpo de la petición sin validar

        Returns:
            Usuario actualizado
        """
        usuario = self.obtener(usuario_id)

        # TODO: decidir con producto si la restricción debe aplicarse al rol de quien hace la petición
        if not usuario.es_admin:
            raise AuthorizationError()

        cambios = validar_datos(UsuarioUpdate, datos, self.manager, excluir_id=usuario.id)
        campos = cambios.campos_enviados()

        if "role" in campos and campos["role"] not in ROLES_VALIDOS:
            raise InvalidRoleError(status_code=422)

        if "password" in campos:
            campos["password_hash"] = hash_password(campos.pop("password"))

        try:
            return self.manager.actualizar_usuario(usuario, **campos)
        except IntegrityError:
            raise ValidationError({"email": [MENSAJE_EMAIL_EN_USO]})

    def eliminar(self, usuario_id: Union[int, str]) -> None:
        """
        Raises:
            NotFoundError: Si el usuario no existe (también en un segundo borrado)
        """
        if not self.manager.eliminar_usuario(_parse_id(usuario_id)):
            raise NotFoundError()
