"""
Configuración de Usuarios API
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # Entorno
    ENV: str = "development"  # development | production

    # API
    API_TITLE: str = "Usuarios API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Base de datos
    DATABASE_URL: str = "sqlite:///./usuarios.db"

    # JWT
    JWT_SECRET: str = "dev-secret-key-change-in-production-12345"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: Optional[int] = None  # None = válido hasta logout
    TOKEN_NAME: str = "api-token"

    # Passwords
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: list = ["*"]

    # Paths
    BASE_DIR: Path = Path(__file__).parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING | ERROR
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Instancia global de configuración
settings = Settings()

# Crear directorios si no existen
settings.LOGS_DIR.mkdir(exist_ok=True, parents=True)
