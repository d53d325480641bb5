# backEnd/app/schemas/cliente.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .pagination import Pagination


class ClienteBase(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100)
    apellido: str = Field(..., min_length=1, max_length=100)
    cedula: str = Field(..., min_length=1, max_length=20, description="Cédula de identidad")
    telefono: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    direccion: Optional[str] = None


class ClienteCreate(ClienteBase):
    pass


class ClienteUpdate(BaseModel):
    """Actualización parcial: solo se modifican los campos enviados."""
    nombre: Optional[str] = Field(None, min_length=1, max_length=100)
    apellido: Optional[str] = Field(None, min_length=1, max_length=100)
    cedula: Optional[str] = Field(None, min_length=1, max_length=20)
    telefono: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    direccion: Optional[str] = None


# Versión corta para anidar en ventas y cuotas
class ClienteNested(BaseModel):
    cliente_id: int
    nombre: str
    apellido: str
    cedula: str

    class Config:
        from_attributes = True


class Cliente(ClienteBase):
    cliente_id: int
    activo: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientePagination(Pagination[Cliente]):
    pass
