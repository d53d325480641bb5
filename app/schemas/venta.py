# backEnd/app/schemas/venta.py
from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from ..models.enums import EstadoVentaEnum, TipoPagoEnum
from .cliente import ClienteNested
from .terreno import TerrenoNested
from .usuario import UsuarioAudit
from .pago_credito import PagoCredito


class PlanCreditoCreate(BaseModel):
    num_cuotas: int = Field(..., ge=1, le=60, description="Cantidad de cuotas mensuales")
    tasa_interes_anual: Decimal = Field(Decimal("0"), ge=0, le=100, decimal_places=2, description="Tasa anual en porcentaje")


class VentaBase(BaseModel):
    cliente_id: int
    terreno_id: int
    tipo_pago: TipoPagoEnum
    observaciones: Optional[str] = None


class VentaCreate(VentaBase):
    # Si no se envía se usa el precio del terreno
    precio_total: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    fecha_venta: Optional[datetime] = None
    plan_credito: Optional[PlanCreditoCreate] = None


class Venta(VentaBase):
    venta_id: int
    precio_total: Decimal
    fecha_venta: datetime
    estado: EstadoVentaEnum
    num_cuotas: Optional[int] = None
    tasa_interes_anual: Optional[Decimal] = None

    cliente: Optional[ClienteNested] = None
    terreno: Optional[TerrenoNested] = None
    creador: Optional[UsuarioAudit] = None
    modificador: Optional[UsuarioAudit] = None

    class Config:
        from_attributes = True


class VentaConCuotas(Venta):
    cuotas: List[PagoCredito] = []


class VentaPagination(BaseModel):
    items: List[Venta]
    total: int
