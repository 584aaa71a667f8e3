"""
Fixtures compartidos: base de datos SQLite en memoria y cliente HTTP
"""

import os
import tempfile

os.environ.setdefault("ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOGS_DIR", tempfile.mkdtemp(prefix="usuarios_api_logs_"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from usuarios_api.database.connection import create_tables, drop_tables, get_db
from usuarios_api.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    drop_tables(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def datos_usuario(**cambios):
    datos = {
        "name": "Juan Pérez",
        "email": "juan@example.com",
        "password": "123456",
        "role": "usuario",
    }
    datos.update(cambios)
    return datos


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def registrar(client):
    """Registra un usuario y devuelve (json de la respuesta, headers con su token)."""
    def _registrar(**cambios):
        response = client.post("/register", json=datos_usuario(**cambios))
        assert response.status_code == 201, response.text
        body = response.json()
        return body, auth_headers(body["token"])
    return _registrar


@pytest.fixture
def admin(registrar):
    return registrar(name="Ana Admin", email="ana@example.com", role="admin")
