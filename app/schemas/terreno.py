# backEnd/app/schemas/terreno.py
from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime
from ..models.enums import TipoTerrenoEnum, EstadoTerrenoEnum
from .pagination import Pagination


class TerrenoBase(BaseModel):
    numero_lote: str = Field(..., min_length=1, max_length=20)
    seccion: str = Field(..., min_length=1, max_length=20)
    manzana: str = Field(..., min_length=1, max_length=20)
    precio: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    tipo: TipoTerrenoEnum
    dimensiones: Optional[str] = Field(None, max_length=50)
    descripcion: Optional[str] = None


class TerrenoCreate(TerrenoBase):
    estado: EstadoTerrenoEnum = EstadoTerrenoEnum.disponible


class TerrenoUpdate(BaseModel):
    numero_lote: Optional[str] = Field(None, min_length=1, max_length=20)
    seccion: Optional[str] = Field(None, min_length=1, max_length=20)
    manzana: Optional[str] = Field(None, min_length=1, max_length=20)
    precio: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    tipo: Optional[TipoTerrenoEnum] = None
    estado: Optional[EstadoTerrenoEnum] = None
    dimensiones: Optional[str] = Field(None, max_length=50)
    descripcion: Optional[str] = None


class TerrenoNested(BaseModel):
    terreno_id: int
    numero_lote: str
    seccion: str
    manzana: str
    tipo: TipoTerrenoEnum
    ubicacion: str

    class Config:
        from_attributes = True


class Terreno(TerrenoBase):
    terreno_id: int
    estado: EstadoTerrenoEnum
    ubicacion: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TerrenoPagination(Pagination[Terreno]):
    pass
