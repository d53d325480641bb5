# backEnd/app/schemas/historial.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from .pagination import Pagination


class MoverHistorial(BaseModel):
    motivo: str = Field("Eliminado por administrador", min_length=1, max_length=255)


class ClienteHistorial(BaseModel):
    historial_id: int
    cliente_id_original: int
    nombre: str
    apellido: str
    cedula: str
    telefono: Optional[str] = None
    email: Optional[str] = None
    direccion: Optional[str] = None
    fecha_registro: Optional[datetime] = None
    fecha_eliminacion: datetime
    motivo_eliminacion: str

    class Config:
        from_attributes = True


class ClienteHistorialPagination(Pagination[ClienteHistorial]):
    pass
