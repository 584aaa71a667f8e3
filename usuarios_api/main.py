"""
Usuarios API - FastAPI Main Application
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from usuarios_api.config import settings

# Configurar logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT,
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(settings.LOGS_DIR / "backend.log", encoding="utf-8")
    ]
)

logger = logging.getLogger(__name__)

from usuarios_api.api.routes import auth_router, usuarios_router
from usuarios_api.services.exceptions import ServiceError, ValidationError, errores_desde_pydantic

# Crear aplicación FastAPI
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description="API de gestión de usuarios con autenticación por token",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =====================================================
# EVENTOS DE STARTUP/SHUTDOWN
# =====================================================

@app.on_event("startup")
async def startup_event():
    """Inicialización al arrancar"""
    logger.info("=" * 60)
    logger.info(f"🚀 {settings.API_TITLE} v{settings.API_VERSION}")
    logger.info(f"   Entorno: {settings.ENV}")
    logger.info(f"   Puerto: {settings.API_PORT}")
    logger.info(f"   Database: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else settings.DATABASE_URL}")
    logger.info("=" * 60)

    # Verificar conexión y crear tablas
    try:
        from usuarios_api.database.connection import engine, create_tables
        from sqlalchemy import text
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            logger.info("✓ Conexión a base de datos OK")
        create_tables()
    except Exception as e:
        logger.error(f"❌ Error conectando a base de datos: {e}")
        raise


@app.on_event("shutdown")
async def shutdown_event():
    """Limpieza al cerrar"""
    logger.info("👋 Cerrando Usuarios API...")


# =====================================================
# RUTAS BÁSICAS
# =====================================================

@app.get("/", include_in_schema=False)
async def root():
    """Endpoint raíz"""
    return {
        "app": settings.API_TITLE,
        "version": settings.API_VERSION,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health", include_in_schema=False)
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "environment": settings.ENV
    }


# =====================================================
# INCLUIR ROUTERS
# =====================================================

app.include_router(auth_router, tags=["Autenticación"])
app.include_router(usuarios_router, prefix="/usuarios", tags=["Usuarios"])


# =====================================================
# MANEJO DE ERRORES
# =====================================================

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Errores de negocio con su código y cuerpo propios"""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Errores de validación de FastAPI con el mismo formato que los del servicio"""
    error = ValidationError(errores_desde_pydantic(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Manejador global de excepciones"""
    logger.error(f"Error no manejado: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "message": "Error interno del servidor",
            "detail": str(exc) if settings.ENV == "development" else "An error occurred"
        }
    )


# =====================================================
# MAIN (para ejecutar directamente)
# =====================================================

def run():
    import uvicorn
    uvicorn.run(
        "usuarios_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
