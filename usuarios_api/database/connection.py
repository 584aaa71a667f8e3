"""
Conexión a base de datos
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from usuarios_api.config import settings
from usuarios_api.models.base import Base

logger = logging.getLogger(__name__)


def _engine_kwargs(database_url: str) -> dict:
    """Opciones del engine según el backend"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verificar conexiones antes de usar
        "pool_size": 10,
        "max_overflow": 20,
    }


# Crear engine
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.ENV == "development",  # Log SQL en desarrollo
    **_engine_kwargs(settings.DATABASE_URL)
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency para FastAPI que proporciona una sesión de base de datos.

    Uso:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """
    Crea todas las tablas en la base de datos.

    NOTA: En producción, usar migrations (Alembic) en lugar de esto.
    """
    Base.metadata.create_all(bind=bind or engine)
    logger.info("✓ Tablas creadas")


def drop_tables(bind=None):
    """
    PELIGRO: Elimina todas las tablas.
    Solo usar en desarrollo.
    """
    if settings.ENV == "production":
        raise RuntimeError("No se puede eliminar tablas en producción")

    Base.metadata.drop_all(bind=bind or engine)
    logger.info("✓ Tablas eliminadas")
