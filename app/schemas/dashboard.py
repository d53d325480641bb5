from pydantic import BaseModel
from typing import List, Optional
from decimal import Decimal

from .pago_credito import ResumenCuotas


class KpiCard(BaseModel):
    title: str
    value: str
    icon: Optional[str] = None


class IngresosMensuales(BaseModel):
    anio: int
    mes: int
    periodo: str  # 'Enero 2025'
    ingresos_contado: Decimal
    ingresos_credito: Decimal
    ingresos_totales: Decimal
    ventas_mes: int


class SerieIngresos(BaseModel):
    anio: int
    moneda: str
    puntos: List[IngresosMensuales]


class DashboardData(BaseModel):
    kpi_cards: List[KpiCard]
    clientes_activos: int
    terrenos_disponibles: int
    total_ventas: int
    ingresos: IngresosMensuales
    cuotas: ResumenCuotas
    moneda: str
