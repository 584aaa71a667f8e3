"""
API Dependencies - Authentication, database sessions, services
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from usuarios_api.database.connection import get_db
from usuarios_api.models import Usuario
from usuarios_api.services import AuthService, UsuarioService
from usuarios_api.services.exceptions import AuthenticationError

# Security; sin auto_error para devolver siempre el mismo 401
security = HTTPBearer(auto_error=False)


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(db)


def get_usuario_service(db: Session = Depends(get_db)) -> UsuarioService:
    """Dependency to get UsuarioService instance."""
    return UsuarioService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Usuario:
    """
    Dependency to get current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token
        auth_service: Auth service bound to the request session

    Returns:
        Current user

    Raises:
        AuthenticationError: If the token is missing, invalid or revoked
    """
    if credentials is None:
        raise AuthenticationError()

    return auth_service.autenticar_token(credentials.credentials)
