"""
Configuraciones y fixtures compartidos para las pruebas automatizadas con pytest.
Cada prueba levanta la app en proceso contra su propia base SQLite temporal.
"""

import os

# Debe definirse ANTES de importar clientes_service.main, que crea la app al importarse
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from clientes_service.main import create_app

# URL de un servicio real para las pruebas en vivo (opcional)
SERVICE_URL = os.getenv("CLIENTES_SERVICE_URL")


@pytest.fixture
def app(tmp_path):
    """App con una base SQLite nueva en el directorio temporal de la prueba."""
    return create_app(f"sqlite:///{tmp_path / 'test.db'}")


@pytest.fixture
def client(app):
    """Cliente HTTP en proceso; ejecuta los eventos de startup."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def cliente_payload() -> dict:
    """Cuerpo de ejemplo para crear un cliente."""
    return {
        "nombre": "Ana",
        "correo": "a@x.com",
        "telefono": 5551234,
        "direccion": "Main St",
    }
