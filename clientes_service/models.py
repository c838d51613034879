"""Define el modelo de la tabla 'clientes' usando SQLAlchemy ORM."""

from sqlalchemy import Column, Integer, String

from clientes_service.db import Base


class Cliente(Base):
    """
    Modelo SQLAlchemy que representa la tabla 'clientes'.
    Sin timestamps ni relaciones: solo el id y cuatro campos opcionales.
    """
    __tablename__ = "clientes"
    # Sin esto SQLite reutiliza el id más alto tras un borrado
    __table_args__ = {"sqlite_autoincrement": True}

    # Clave primaria autoincremental, asignada por la base de datos
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    nombre = Column(String(255), nullable=True)
    correo = Column(String(255), nullable=True)
    # NOTA: numérico a propósito; los ceros a la izquierda se pierden
    telefono = Column(Integer, nullable=True)
    direccion = Column(String(255), nullable=True)

    # Campos reemplazados completos en cada actualización
    EDITABLE_FIELDS = ("nombre", "correo", "telefono", "direccion")
