# clientes_service/main.py

import logging
import time
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response, JSONResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import text
from sqlalchemy.orm import Session

from clientes_service import crud, schemas
from clientes_service.db import Base, build_engine, build_session_factory, get_db

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

PUERTO = 3000

# --- Métricas Prometheus ---
REQUEST_COUNT = Counter("clientes_requests_total", "Total requests", ["method", "endpoint", "status_code"])
REQUEST_LATENCY = Histogram("clientes_request_latency_seconds", "Request latency", ["endpoint"])
CLIENTE_CREATED_COUNT = Counter("clientes_created_total", "Clientes creados")
CLIENTE_UPDATED_COUNT = Counter("clientes_updated_total", "Clientes actualizados (filas afectadas)")
CLIENTE_DELETED_COUNT = Counter("clientes_deleted_total", "Clientes borrados (filas afectadas)")


KNOWN_ENDPOINTS = {"/clientes", "/health", "/metrics", "/docs", "/openapi.json"}


def _endpoint_label(path: str) -> str:
    # Etiquetas acotadas: cualquier ruta desconocida cae en "other"
    if path in KNOWN_ENDPOINTS:
        return path
    parts = path.split("/")
    if len(parts) == 3 and parts[1] == "clientes" and parts[2].isdigit():
        return "/clientes/{cliente_id}"
    return "other"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Servicio iniciado (puerto {PUERTO}).")
    yield


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Construye la aplicación con su propio engine y fábrica de sesiones.
    Sin database_url se usa la configuración del entorno (ver db.resolve_database_url).
    """
    engine = build_engine(database_url)

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Tabla de base de datos (clientes) verificada/creada.")
    except Exception as e:
        logger.error(f"Error al inicializar la base de datos: {e}", exc_info=True)

    app = FastAPI(
        title="Clientes Service",
        description="CRUD mínimo sobre la tabla de clientes.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # --- Configuración de CORS: cualquier origen puede llamar ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        start_time = time.time()
        response = None
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except HTTPException as http_exc:
            status_code = http_exc.status_code
            raise http_exc
        except Exception as exc:
            logger.error(f"Middleware error: {exc}", exc_info=True)
            return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
        finally:
            latency = time.time() - start_time
            endpoint = _endpoint_label(request.url.path)
            final_status_code = getattr(response, 'status_code', status_code)
            REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency)
            REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status_code=final_status_code).inc()
        return response

    @app.get("/metrics", tags=["Monitoring"])
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/health", tags=["Monitoring"])
    def health_check(request: Request):
        try:
            db = request.app.state.session_factory()
            try:
                db.execute(text("SELECT 1"))
            finally:
                db.close()
        except Exception as e:
            logger.error(f"Health check fallido - Error de BD: {e}", exc_info=True)
            raise HTTPException(status_code=503, detail=f"Database connection error: {e}")
        return {"status": "ok", "service": "clientes_service", "database": "ok"}

    # --- Endpoints de API para Clientes ---

    @app.post("/clientes", response_model=schemas.ClienteResponse, tags=["Clientes"])
    def create_cliente(datos: Optional[schemas.ClienteIn] = None, db: Session = Depends(get_db)):
        """Crea un cliente y lo devuelve con el id asignado. Sin cuerpo, todos los campos quedan en null."""
        nuevo = crud.create_cliente(db, datos or schemas.ClienteIn())
        CLIENTE_CREATED_COUNT.inc()
        return nuevo

    @app.get("/clientes", response_model=List[schemas.ClienteResponse], tags=["Clientes"])
    def list_clientes(db: Session = Depends(get_db)):
        return crud.list_clientes(db)

    @app.put("/clientes/{cliente_id}", response_model=int, tags=["Clientes"])
    def update_cliente(cliente_id: int, datos: Optional[schemas.ClienteIn] = None, db: Session = Depends(get_db)):
        """
        Reemplaza los cuatro campos del cliente. Los campos omitidos quedan en null.
        Devuelve las filas afectadas; 0 si el id no existe (no es un error).
        """
        filas = crud.update_cliente(db, cliente_id, datos or schemas.ClienteIn())
        CLIENTE_UPDATED_COUNT.inc(filas)
        return filas

    @app.delete("/clientes/{cliente_id}", response_model=int, tags=["Clientes"])
    def delete_cliente(cliente_id: int, db: Session = Depends(get_db)):
        """Borra el cliente. Devuelve las filas afectadas; 0 si el id no existe."""
        filas = crud.delete_cliente(db, cliente_id)
        CLIENTE_DELETED_COUNT.inc(filas)
        return filas

    return app


app = create_app()


def run():
    uvicorn.run(app, host="0.0.0.0", port=PUERTO)


if __name__ == "__main__":
    run()
