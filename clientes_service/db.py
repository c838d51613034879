"""Configuración de la conexión a la base de datos usando SQLAlchemy para el Clientes Service."""

import os
import logging
from typing import Optional
from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy import create_engine, exc
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

# Configuración del logger
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Carga variables de entorno desde el archivo .env
load_dotenv()

SQLITE_FALLBACK_URL = "sqlite:///./clientes.db"

# Crea una clase base (Base) para los modelos declarativos
Base = declarative_base()


def resolve_database_url() -> str:
    """
    Decide la URL de conexión a partir del entorno.
    DATABASE_URL tiene prioridad; si no, se arma la URL de MariaDB con
    DB_USER/DB_PASS/DB_HOST/DB_NAME; si faltan, se usa SQLite local.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    required_db_vars = {"DB_USER", "DB_PASS", "DB_HOST", "DB_NAME"}
    missing_vars = sorted(var for var in required_db_vars if not os.getenv(var))
    if missing_vars:
        logger.warning(
            f"Faltan variables de entorno para la base de datos: {', '.join(missing_vars)}. "
            f"Usando {SQLITE_FALLBACK_URL}"
        )
        return SQLITE_FALLBACK_URL

    return (
        f"mysql+pymysql://{os.getenv('DB_USER')}:{os.getenv('DB_PASS')}"
        f"@{os.getenv('DB_HOST')}/{os.getenv('DB_NAME')}"
    )


def build_engine(database_url: Optional[str] = None) -> Engine:
    """Crea el engine de SQLAlchemy. SQLite necesita compartir la conexión entre hilos."""
    url = database_url or resolve_database_url()
    kwargs = {"pool_pre_ping": True}

    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # En memoria: una sola conexión para que todas las sesiones vean la misma BD
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    logger.info(f"Engine de base de datos creado ({engine.url.get_backend_name()}).")
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """Crea una fábrica de sesiones (SessionLocal) ligada al engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    """
    Dependencia de FastAPI: abre una sesión por petición usando la fábrica
    guardada en app.state y la cierra al terminar.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    except RequestValidationError as validation_exc:
        logger.warning(f"Error de validación: {validation_exc.errors()}")
        db.rollback()
        raise
    except HTTPException as http_exc:
        db.rollback()
        logger.warning(f"Error HTTP controlado: {http_exc.detail}")
        raise
    except exc.SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error de base de datos durante la petición: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error interno de base de datos.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error inesperado (no-HTTP) durante la petición: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error interno del servidor.")
    finally:
        db.close()
