"""
Database Manager - CRUD operations para Usuarios API
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from typing import List, Optional
import logging

from usuarios_api.models import Usuario, PersonalAccessToken

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Gestor de base de datos para Usuarios API.

    Proporciona métodos CRUD sobre usuarios y sus tokens de acceso.
    Los métodos de escritura hacen commit; ante un error de base de datos
    hacen rollback y relanzan la excepción.
    """

    def __init__(self, session: Session):
        self.session = session

    # =====================================================
    # USUARIOS
    # =====================================================

    def crear_usuario(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: str,
        commit: bool = True
    ) -> Usuario:
        """
        Crea un nuevo usuario.

        Args:
            name: Nombre visible
            email: Email (único)
            password_hash: Hash de la contraseña
            role: Rol del usuario
            commit: False para solo hacer flush y confirmar más tarde con confirmar()

        Returns:
            Usuario creado

        Raises:
            IntegrityError: Si el email ya existe
        """
        usuario = Usuario(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role
        )

        self.session.add(usuario)
        self._guardar(commit)
        self.session.refresh(usuario)
        logger.info(f"✓ Usuario creado: {usuario.id} - {email}")
        return usuario

    def obtener_usuario(self, usuario_id: int) -> Optional[Usuario]:
        """Obtiene un usuario por ID"""
        return self.session.query(Usuario).filter_by(id=usuario_id).first()

    def obtener_usuario_por_email(self, email: str) -> Optional[Usuario]:
        """Obtiene un usuario por email (coincidencia exacta)"""
        return self.session.query(Usuario).filter(Usuario.email == email).first()

    def listar_usuarios(self) -> List[Usuario]:
        """Lista todos los usuarios en orden de creación"""
        return self.session.query(Usuario).order_by(Usuario.id).all()

    def email_en_uso(self, email: str, excluir_id: int = None) -> bool:
        """
        Indica si el email ya pertenece a otro usuario.

        Args:
            email: Email a comprobar
            excluir_id: ID de usuario a ignorar (el propio en una actualización)
        """
        query = self.session.query(Usuario.id).filter(Usuario.email == email)
        if excluir_id is not None:
            query = query.filter(Usuario.id != excluir_id)
        return query.first() is not None

    def actualizar_usuario(self, usuario: Usuario, **campos) -> Usuario:
        """
        Actualiza campos de un usuario.

        Args:
            usuario: Usuario a modificar
            **campos: Campos a actualizar (solo los presentes)

        Returns:
            Usuario actualizado
        """
        for campo, valor in campos.items():
            if hasattr(usuario, campo):
                setattr(usuario, campo, valor)

        self._guardar()
        self.session.refresh(usuario)
        logger.info(f"✓ Usuario actualizado: {usuario.id} ({', '.join(sorted(campos))})")
        return usuario

    def eliminar_usuario(self, usuario_id: int) -> bool:
        """
        Elimina un usuario; sus tokens se eliminan en cascada.

        Returns:
            True si se eliminó, False si no existía
        """
        usuario = self.obtener_usuario(usuario_id)
        if not usuario:
            return False

        self.session.delete(usuario)
        self._guardar()
        logger.info(f"✓ Usuario eliminado: {usuario_id}")
        return True

    # =====================================================
    # TOKENS
    # =====================================================

    def crear_token(
        self,
        usuario_id: int,
        name: str,
        token_hash: str,
        commit: bool = True
    ) -> PersonalAccessToken:
        """Registra un token emitido para un usuario"""
        token = PersonalAccessToken(
            usuario_id=usuario_id,
            name=name,
            token_hash=token_hash
        )
        self.session.add(token)
        self._guardar(commit)
        logger.debug(f"✓ Token emitido para usuario {usuario_id}")
        return token

    def obtener_token(self, token_hash: str) -> Optional[PersonalAccessToken]:
        """Obtiene un token por el hash de su identificador"""
        return self.session.query(PersonalAccessToken).filter_by(token_hash=token_hash).first()

    def marcar_token_usado(self, token: PersonalAccessToken) -> None:
        """Actualiza la fecha de último uso"""
        token.last_used_at = datetime.utcnow()
        self._guardar()

    def contar_tokens(self, usuario_id: int) -> int:
        """Número de tokens vigentes de un usuario"""
        return self.session.query(PersonalAccessToken).filter_by(usuario_id=usuario_id).count()

    def revocar_tokens(self, usuario_id: int) -> int:
        """
        Revoca todos los tokens de un usuario.

        Returns:
            Número de tokens eliminados
        """
        eliminados = (
            self.session.query(PersonalAccessToken)
            .filter_by(usuario_id=usuario_id)
            .delete()
        )
        self._guardar()
        logger.info(f"✓ {eliminados} token(s) revocados para usuario {usuario_id}")
        return eliminados

    # =====================================================
    # MÉTODOS PRIVADOS
    # =====================================================

    def confirmar(self) -> None:
        """Confirma las escrituras pendientes de flush"""
        self._guardar()

    def _guardar(self, commit: bool = True) -> None:
        """Commit (o flush) con rollback si falla"""
        try:
            if commit:
                self.session.commit()
            else:
                self.session.flush()
        except SQLAlchemyError:
            self.session.rollback()
            raise
