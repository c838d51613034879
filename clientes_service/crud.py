"""Operaciones de acceso a datos sobre la tabla 'clientes'.

Cada función recibe la sesión explícitamente; ninguna abre conexiones propias.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from clientes_service import schemas
from clientes_service.models import Cliente

logger = logging.getLogger(__name__)


def _campos(datos: schemas.ClienteIn) -> dict:
    # Siempre los cuatro campos: lo que no vino se escribe como NULL
    return {campo: getattr(datos, campo) for campo in Cliente.EDITABLE_FIELDS}


def create_cliente(db: Session, datos: schemas.ClienteIn) -> Cliente:
    """Inserta un cliente nuevo y lo devuelve con el id asignado por la BD."""
    nuevo = Cliente(**_campos(datos))
    db.add(nuevo)
    db.commit()
    db.refresh(nuevo)
    logger.info(f"Cliente ID {nuevo.id} creado.")
    return nuevo


def list_clientes(db: Session) -> List[Cliente]:
    """Devuelve todos los clientes, en orden de inserción."""
    return db.query(Cliente).order_by(Cliente.id).all()


def update_cliente(db: Session, cliente_id: int, datos: schemas.ClienteIn) -> int:
    """
    Reemplaza los cuatro campos del cliente con ese id (no es un merge).
    Devuelve la cantidad de filas afectadas: 0 si el id no existe.
    """
    filas = (
        db.query(Cliente)
        .filter(Cliente.id == cliente_id)
        .update(_campos(datos), synchronize_session=False)
    )
    db.commit()
    logger.info(f"Actualización de cliente ID {cliente_id}: {filas} fila(s) afectada(s).")
    return filas


def delete_cliente(db: Session, cliente_id: int) -> int:
    """Borra físicamente el cliente con ese id. Devuelve las filas afectadas."""
    filas = (
        db.query(Cliente)
        .filter(Cliente.id == cliente_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Borrado de cliente ID {cliente_id}: {filas} fila(s) afectada(s).")
    return filas
