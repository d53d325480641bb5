from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date

from ..database import get_db
from .. import config
from app.schemas.dashboard import DashboardData, KpiCard, IngresosMensuales, SerieIngresos
from ..services import ingresos_service
from ..utils.moneda import formato_moneda
from ..utils.fechas import etiqueta_mes
from .. import auth as auth_utils

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"]
)


def _ingresos_schema(datos: dict) -> IngresosMensuales:
    return IngresosMensuales(periodo=etiqueta_mes(datos["anio"], datos["mes"]), **datos)


@router.get("/", response_model=DashboardData)
def get_dashboard_data(
    anio: Optional[int] = Query(None, ge=1900, le=9999, description="Año (por defecto el actual)"),
    mes: Optional[int] = Query(None, ge=1, le=12, description="Mes (por defecto el actual)"),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    hoy = date.today()
    anio = anio or hoy.year
    mes = mes or hoy.month

    # --- 1. Estadísticas generales ---
    generales = ingresos_service.estadisticas_generales(db)

    # --- 2. Ingresos del mes y cartera ---
    ingresos = ingresos_service.calcular_ingresos_mensuales(db, anio, mes)
    cuotas = ingresos_service.resumen_cuotas(db, hoy)

    kpi_cards = [
        KpiCard(title="Clientes Activos", value=str(generales["clientes_activos"]), icon="users"),
        KpiCard(title="Terrenos Disponibles", value=str(generales["terrenos_disponibles"]), icon="map"),
        KpiCard(title="Ventas del Mes", value=str(ingresos["ventas_mes"]), icon="file-text"),
        KpiCard(title="Ingresos del Mes", value=formato_moneda(ingresos["ingresos_totales"]), icon="dollar-sign"),
        KpiCard(title="Cuotas Vencidas", value=str(cuotas["cantidad_vencidas"]), icon="alert-triangle"),
        KpiCard(title="Saldo Pendiente", value=formato_moneda(cuotas["total_pendiente"]), icon="clock"),
    ]

    return DashboardData(
        kpi_cards=kpi_cards,
        ingresos=_ingresos_schema(ingresos),
        cuotas=cuotas,
        moneda=config.MONEDA_CODIGO,
        **generales
    )


@router.get("/ingresos", response_model=SerieIngresos)
def get_ingresos_anuales(
    anio: Optional[int] = Query(None, ge=1900, le=9999, description="Año (por defecto el actual)"),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """Ingresos de cada mes del año, para el gráfico del dashboard."""
    anio = anio or date.today().year
    puntos = [_ingresos_schema(d) for d in ingresos_service.ingresos_por_mes(db, anio)]
    return SerieIngresos(anio=anio, moneda=config.MONEDA_CODIGO, puntos=puntos)
