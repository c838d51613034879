"""Pruebas de la capa de acceso a datos, usando una sesión explícita."""

import pytest

from clientes_service import crud, schemas
from clientes_service.db import Base, build_engine, build_session_factory


@pytest.fixture
def db():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def test_create_and_list(db):
    creado = crud.create_cliente(db, schemas.ClienteIn(nombre="Ana", telefono=5551234))

    assert creado.id >= 1
    clientes = crud.list_clientes(db)
    assert [(c.id, c.nombre, c.correo, c.telefono, c.direccion) for c in clientes] == [
        (creado.id, "Ana", None, 5551234, None)
    ]


def test_list_is_in_insertion_order(db):
    ids = [crud.create_cliente(db, schemas.ClienteIn(nombre=n)).id for n in ("a", "b", "c")]

    assert [c.id for c in crud.list_clientes(db)] == ids


def test_update_counts(db):
    creado = crud.create_cliente(db, schemas.ClienteIn(nombre="Ana", correo="a@x.com"))

    assert crud.update_cliente(db, creado.id, schemas.ClienteIn(direccion="Nueva")) == 1
    assert crud.update_cliente(db, creado.id + 100, schemas.ClienteIn()) == 0

    db.expire_all()
    actualizado = crud.list_clientes(db)[0]
    assert (actualizado.nombre, actualizado.correo, actualizado.direccion) == (None, None, "Nueva")


def test_delete_counts(db):
    creado = crud.create_cliente(db, schemas.ClienteIn(nombre="Ana"))

    assert crud.delete_cliente(db, creado.id) == 1
    assert crud.delete_cliente(db, creado.id) == 0
    assert crud.list_clientes(db) == []
