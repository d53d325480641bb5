# backEnd/app/schemas/pago_credito.py
from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import date, datetime
from ..models.enums import EstadoCuotaEnum, EstadoCuotaVisibleEnum
from .cliente import ClienteNested
from .terreno import TerrenoNested
from .pagination import Pagination


class RegistrarPago(BaseModel):
    monto_pagado: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class PagoCredito(BaseModel):
    pago_id: int
    venta_id: int
    numero_cuota: int
    monto_cuota: Decimal
    monto_capital: Decimal
    interes_aplicado: Optional[Decimal] = None
    fecha_vencimiento: date
    estado: EstadoCuotaEnum
    fecha_pago: Optional[datetime] = None
    monto_pagado: Optional[Decimal] = None

    class Config:
        from_attributes = True


class PagoCreditoDetalle(PagoCredito):
    """Cuota con el estado que ve el usuario y los datos de la venta para el listado de pagos."""
    estado_visible: EstadoCuotaVisibleEnum
    cliente: Optional[ClienteNested] = None
    terreno: Optional[TerrenoNested] = None


class PagoCreditoPagination(Pagination[PagoCreditoDetalle]):
    pass


class ResumenCuotas(BaseModel):
    cantidad_pendientes: int
    total_pendiente: Decimal
    cantidad_vencidas: int
    total_vencido: Decimal
