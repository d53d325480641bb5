# backEnd/app/services/ingresos_service.py
"""
Ingresos del mes, estado visible de las cuotas y estadísticas del dashboard.

Reglas:
- Ingresos al contado: precio_total de las ventas 'contado' del mes no canceladas.
- Ingresos a crédito: monto_pagado de las cuotas cuyo fecha_pago cae en el mes,
  sin importar en qué mes se hizo la venta.
- El mes es el intervalo semiabierto [día 1, día 1 del mes siguiente).
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..exceptions import ErrorValidacion
from ..models.cliente import Cliente
from ..models.terreno import Terreno
from ..models.venta import Venta
from ..models.pago_credito import PagoCredito
from ..models.enums import (
    EstadoCuotaEnum, EstadoCuotaVisibleEnum, EstadoTerrenoEnum, EstadoVentaEnum, TipoPagoEnum
)
from ..utils.moneda import redondear
from ..utils.fechas import rango_mes

logger = logging.getLogger(__name__)


def clasificar_cuota(estado: EstadoCuotaEnum, fecha_vencimiento: date, hoy: date) -> EstadoCuotaVisibleEnum:
    """Pagado si la cuota está pagada; si no, Vencido cuando el vencimiento ya pasó."""
    if estado == EstadoCuotaEnum.pagado:
        return EstadoCuotaVisibleEnum.pagado
    if fecha_vencimiento < hoy:
        return EstadoCuotaVisibleEnum.vencido
    return EstadoCuotaVisibleEnum.pendiente


def _monto(valor) -> Decimal:
    # SUM puede devolver None, float (SQLite) o Decimal (PostgreSQL)
    return redondear(Decimal(str(valor or 0)))


def _validar_periodo(anio: int, mes: int):
    if not 1 <= mes <= 12:
        raise ErrorValidacion(f"Mes inválido: {mes}. Debe estar entre 1 y 12.")
    if not 1900 <= anio <= 9999:
        raise ErrorValidacion(f"Año inválido: {anio}.")


def calcular_ingresos_mensuales(db: Session, anio: int, mes: int) -> Dict:
    _validar_periodo(anio, mes)
    inicio, fin = rango_mes(anio, mes)

    ingresos_contado = db.query(func.sum(Venta.precio_total)).filter(
        Venta.tipo_pago == TipoPagoEnum.contado,
        Venta.estado != EstadoVentaEnum.cancelada,
        Venta.fecha_venta >= inicio,
        Venta.fecha_venta < fin
    ).scalar()

    ingresos_credito = db.query(func.sum(PagoCredito.monto_pagado)).filter(
        PagoCredito.fecha_pago.isnot(None),
        PagoCredito.fecha_pago >= inicio,
        PagoCredito.fecha_pago < fin
    ).scalar()

    ventas_mes = db.query(func.count(Venta.venta_id)).filter(
        Venta.estado != EstadoVentaEnum.cancelada,
        Venta.fecha_venta >= inicio,
        Venta.fecha_venta < fin
    ).scalar()

    contado = _monto(ingresos_contado)
    credito = _monto(ingresos_credito)
    return {
        "anio": anio,
        "mes": mes,
        "ingresos_contado": contado,
        "ingresos_credito": credito,
        "ingresos_totales": contado + credito,
        "ventas_mes": ventas_mes or 0,
    }


def ingresos_por_mes(db: Session, anio: int) -> List[Dict]:
    """Serie de los 12 meses del año."""
    return [calcular_ingresos_mensuales(db, anio, mes) for mes in range(1, 13)]


def resumen_cuotas(db: Session, hoy: Optional[date] = None) -> Dict:
    """Cantidad y total de cuotas no pagadas y, dentro de ellas, las vencidas."""
    hoy = hoy or date.today()
    no_pagadas = db.query(
        func.count(PagoCredito.pago_id), func.sum(PagoCredito.monto_cuota)
    ).join(Venta, PagoCredito.venta_id == Venta.venta_id).filter(
        PagoCredito.estado != EstadoCuotaEnum.pagado,
        Venta.estado != EstadoVentaEnum.cancelada
    )
    cantidad_pendientes, total_pendiente = no_pagadas.one()
    cantidad_vencidas, total_vencido = no_pagadas.filter(PagoCredito.fecha_vencimiento < hoy).one()

    return {
        "cantidad_pendientes": cantidad_pendientes or 0,
        "total_pendiente": _monto(total_pendiente),
        "cantidad_vencidas": cantidad_vencidas or 0,
        "total_vencido": _monto(total_vencido),
    }


def estadisticas_generales(db: Session) -> Dict:
    clientes_activos = db.query(func.count(Cliente.cliente_id)).filter(Cliente.activo.is_(True)).scalar()
    terrenos_disponibles = db.query(func.count(Terreno.terreno_id)).filter(
        Terreno.estado == EstadoTerrenoEnum.disponible
    ).scalar()
    total_ventas = db.query(func.count(Venta.venta_id)).filter(
        Venta.estado != EstadoVentaEnum.cancelada
    ).scalar()
    return {
        "clientes_activos": clientes_activos or 0,
        "terrenos_disponibles": terrenos_disponibles or 0,
        "total_ventas": total_ventas or 0,
    }
