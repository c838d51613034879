"""Modelos Pydantic (schemas) para validación de datos en el Clientes Service."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# --- Schemas de Entrada (Input) ---

class ClienteIn(BaseModel):
    """
    Cuerpo de POST /clientes y PUT /clientes/{id}.
    Todos los campos son opcionales; un campo omitido llega como None.
    Campos desconocidos se rechazan.
    """
    nombre: Optional[str] = None
    correo: Optional[str] = None
    telefono: Optional[int] = Field(None, description="Teléfono numérico")
    direccion: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


# --- Schemas de Salida (Respuesta) ---

class ClienteResponse(BaseModel):
    """Schema para mostrar un cliente tal como está en la tabla."""
    id: int
    nombre: Optional[str] = None
    correo: Optional[str] = None
    telefono: Optional[int] = None
    direccion: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
