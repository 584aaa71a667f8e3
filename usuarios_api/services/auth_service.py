"""
Auth Service - registro, login, logout y validación de tokens
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import timedelta
from typing import Any, Dict, Tuple

from usuarios_api.config import settings
from usuarios_api.database.manager import DatabaseManager
from usuarios_api.models import Usuario
from usuarios_api.services.exceptions import (
    AuthenticationError,
    PersistenceError,
    ValidationError,
    MENSAJE_CREDENCIALES_INVALIDAS,
    MENSAJE_EMAIL_EN_USO,
)
from usuarios_api.services.validacion import RegisterRequest, validar_datos
from usuarios_api.utils.logger import setup_logger
from usuarios_api.utils.security import (
    create_access_token,
    decode_token,
    generate_token_id,
    hash_password,
    hash_token_id,
    verify_password,
)

logger = setup_logger(__name__, "auth.log")


class AuthService:
    """
    Servicio de autenticación.

    Cada login o registro emite un token nuevo; el logout revoca todos
    los tokens del usuario.
    """

    def __init__(self, db: Session):
        self.db = db
        self.manager = DatabaseManager(db)

    def registrar(self, datos: Dict[str, Any]) -> Tuple[Usuario, str]:
        """
        Registra un usuario y le emite un token.

        El usuario y su token se confirman en la misma transacción.

        Args:
            datos: Cuerpo de la petición (name, email, password, role)

        Raises:
            ValidationError: Con todos los campos que fallan, email en uso incluido
            PersistenceError: Si falla la escritura
        """
        registro = validar_datos(RegisterRequest, datos, self.manager)

        try:
            usuario = self.manager.crear_usuario(
                name=registro.name,
                email=registro.email,
                password_hash=hash_password(registro.password),
                role=registro.role,
                commit=False
            )
            token = self.emitir_token(usuario, commit=False)
            self.manager.confirmar()
        except IntegrityError:
            # Otra petición registró el mismo email entre la comprobación y el insert
            self.db.rollback()
            raise ValidationError({"email": [MENSAJE_EMAIL_EN_USO]})
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error registrando {registro.email}: {e}")
            raise PersistenceError("Error al registrar el usuario")

        logger.info(f"Registro: usuario {usuario.id} ({usuario.email}) rol={usuario.role}")
        return usuario, token

    def login(self, email: str, password: str) -> Tuple[Usuario, str]:
        """
        Valida credenciales y emite un token nuevo.

        Raises:
            AuthenticationError: Mismo mensaje si el email no existe o la password no coincide
        """
        usuario = self.manager.obtener_usuario_por_email(email)

        if not usuario or not verify_password(password, usuario.password_hash):
            logger.warning(f"Login fallido para {email}")
            raise AuthenticationError(MENSAJE_CREDENCIALES_INVALIDAS)

        token = self.emitir_token(usuario)
        logger.info(f"Login: usuario {usuario.id}")
        return usuario, token

    def logout(self, usuario: Usuario) -> int:
        """Revoca todos los tokens del usuario"""
        revocados = self.manager.revocar_tokens(usuario.id)
        logger.info(f"Logout: usuario {usuario.id}, {revocados} token(s) revocados")
        return revocados

    def emitir_token(self, usuario: Usuario, commit: bool = True) -> str:
        """Crea un token firmado y registra su identificador"""
        token_id = generate_token_id()
        self.manager.crear_token(
            usuario.id,
            settings.TOKEN_NAME,
            hash_token_id(token_id),
            commit=commit
        )

        expires_delta = None
        if settings.JWT_EXPIRATION_MINUTES:
            expires_delta = timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

        return create_access_token(
            data={"sub": usuario.id, "jti": token_id},
            expires_delta=expires_delta
        )

    def autenticar_token(self, token: str) -> Usuario:
        """
        Resuelve el usuario dueño de un token vigente.

        Raises:
            AuthenticationError: Si el token no decodifica, fue revocado o su usuario no existe
        """
        claims = decode_token(token) if token else None
        if not claims or not claims.get("jti") or not claims.get("sub"):
            raise AuthenticationError()

        registro = self.manager.obtener_token(hash_token_id(claims["jti"]))
        if registro is None or str(registro.usuario_id) != str(claims["sub"]):
            raise AuthenticationError()

        usuario = self.manager.obtener_usuario(registro.usuario_id)
        if usuario is None:
            raise AuthenticationError()

        self.manager.marcar_token_usado(registro)
        return usuario
