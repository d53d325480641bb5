# backEnd/app/services/plan_cuotas_service.py
"""
Generación del plan de cuotas de una venta a crédito.

Método de amortización: sistema francés (cuota total constante, interés sobre
saldo). La tasa anual en porcentaje se convierte a fracción y luego a tasa
mensual (tasa / 100 / 12).

    cuota = P * i / (1 - (1 + i) ** -n)

Cada cuota se redondea al centavo; el interés de cada período es saldo * i
redondeado y el capital es la diferencia. La última cuota absorbe el residuo
del redondeo (capital = saldo pendiente), de modo que:

    suma(monto_capital) == P
    suma(monto_cuota)   == P + suma(interes_aplicado)

Con tasa 0 cada cuota es P / n truncado al centavo y la última lleva el resto.
Los vencimientos son mensuales desde la fecha de venta: la cuota k vence en
fecha_venta + k meses.
"""
import logging
from datetime import date, datetime
from decimal import Decimal, ROUND_DOWN, InvalidOperation
from typing import List, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import config
from ..exceptions import ErrorValidacion, ErrorNoEncontrado, ErrorConflicto
from ..models.venta import Venta
from ..models.pago_credito import PagoCredito
from ..models.enums import TipoPagoEnum, EstadoVentaEnum, EstadoCuotaEnum
from ..utils.moneda import redondear, CENTAVO
from ..utils.fechas import sumar_meses
from .audit_service import AuditService
from .transaccion import transaccion

logger = logging.getLogger(__name__)

MESES_POR_ANIO = 12


class CuotaCalculada:
    """Una fila del cuadro de amortización, antes de persistirse."""
    def __init__(self, numero_cuota: int, fecha_vencimiento: date, monto_capital: Decimal,
                 interes: Decimal, saldo_restante: Decimal):
        self.numero_cuota = numero_cuota
        self.fecha_vencimiento = fecha_vencimiento
        self.monto_capital = monto_capital
        self.interes = interes
        self.monto_cuota = monto_capital + interes
        self.saldo_restante = saldo_restante


def validar_parametros_plan(num_cuotas: int, tasa_interes_anual: Union[Decimal, float, str]) -> Decimal:
    """
    Valida el número de cuotas y la tasa anual (en porcentaje).
    Retorna la tasa como Decimal con 2 decimales. Lanza ErrorValidacion si algo está
    fuera de rango o si la tasa trae más de 2 decimales.
    """
    if isinstance(num_cuotas, bool) or not isinstance(num_cuotas, int):
        raise ErrorValidacion("El número de cuotas debe ser un entero.")
    if not config.MIN_CUOTAS <= num_cuotas <= config.MAX_CUOTAS:
        raise ErrorValidacion(
            f"El número de cuotas debe estar entre {config.MIN_CUOTAS} y {config.MAX_CUOTAS}."
        )
    try:
        tasa = Decimal(str(tasa_interes_anual))
    except (InvalidOperation, ValueError):
        raise ErrorValidacion("La tasa de interés no es un número válido.")
    if not tasa.is_finite() or tasa < 0 or tasa > config.TASA_INTERES_MAXIMA:
        raise ErrorValidacion(
            f"La tasa de interés anual debe estar entre 0 y {config.TASA_INTERES_MAXIMA}%."
        )
    # Debe caber sin redondeo en ventas.tasa_interes_anual NUMERIC(5,2)
    if tasa != tasa.quantize(CENTAVO):
        raise ErrorValidacion("La tasa de interés anual admite como máximo 2 decimales.")
    return tasa.quantize(CENTAVO)


def calcular_amortizacion(
    principal: Decimal,
    num_cuotas: int,
    tasa_interes: Decimal,
    fecha_inicio: date
) -> List[CuotaCalculada]:
    """
    Calcula el cuadro de amortización.

    Args:
        principal: Monto financiado
        num_cuotas: Cantidad de cuotas mensuales
        tasa_interes: Tasa anual como fracción (0.12 = 12%)
        fecha_inicio: Fecha de la venta; la primera cuota vence un mes después
    """
    principal = redondear(principal)
    tasa_mensual = Decimal(str(tasa_interes)) / MESES_POR_ANIO

    if tasa_mensual == 0:
        cuota_fija = (principal / num_cuotas).quantize(CENTAVO, rounding=ROUND_DOWN)
    else:
        factor = (1 + tasa_mensual) ** num_cuotas
        cuota_fija = redondear(principal * tasa_mensual * factor / (factor - 1))

    cuotas = []
    saldo = principal
    for numero in range(1, num_cuotas + 1):
        interes = redondear(saldo * tasa_mensual)
        if numero == num_cuotas:
            capital = saldo
        else:
            capital = min(cuota_fija - interes, saldo)
        saldo -= capital
        cuotas.append(CuotaCalculada(
            numero_cuota=numero,
            fecha_vencimiento=sumar_meses(fecha_inicio, numero),
            monto_capital=capital,
            interes=interes,
            saldo_restante=saldo,
        ))
    return cuotas


def crear_cuotas_venta(
    db: Session,
    venta: Venta,
    num_cuotas: int,
    tasa_interes_anual: Decimal,
    usuario_id: int = None
) -> List[PagoCredito]:
    """
    Agrega a la sesión las cuotas de la venta y su configuración de crédito.
    No hace commit: el llamador define el límite de la transacción.
    """
    if venta.tipo_pago != TipoPagoEnum.credito:
        raise ErrorConflicto(f"La venta {venta.venta_id} es al contado; no admite plan de cuotas.")
    if venta.estado == EstadoVentaEnum.cancelada:
        raise ErrorConflicto(f"La venta {venta.venta_id} está cancelada.")

    existentes = db.query(func.count(PagoCredito.pago_id)).filter(
        PagoCredito.venta_id == venta.venta_id
    ).scalar()
    if existentes or venta.num_cuotas:
        raise ErrorConflicto(f"La venta {venta.venta_id} ya tiene un plan de cuotas generado.")

    fecha_base = venta.fecha_venta.date() if isinstance(venta.fecha_venta, datetime) else venta.fecha_venta
    calculadas = calcular_amortizacion(
        Decimal(str(venta.precio_total)),
        num_cuotas,
        tasa_interes_anual / 100,
        fecha_base,
    )

    cuotas = [
        PagoCredito(
            venta_id=venta.venta_id,
            numero_cuota=c.numero_cuota,
            monto_cuota=c.monto_cuota,
            monto_capital=c.monto_capital,
            interes_aplicado=c.interes,
            fecha_vencimiento=c.fecha_vencimiento,
            estado=EstadoCuotaEnum.pendiente,
        )
        for c in calculadas
    ]
    db.add_all(cuotas)
    venta.num_cuotas = num_cuotas
    venta.tasa_interes_anual = tasa_interes_anual
    if usuario_id is not None:
        venta.modificado_por = usuario_id
    db.flush()

    total_plan = sum((c.monto_cuota for c in calculadas), Decimal('0.00'))
    AuditService.log_action(
        db=db,
        tabla="pagos_credito",
        accion="GENERAR_PLAN",
        usuario_id=usuario_id,
        registro_id=venta.venta_id,
        valores_despues={
            "venta_id": venta.venta_id,
            "num_cuotas": num_cuotas,
            "tasa_interes_anual": str(tasa_interes_anual),
            "total_plan": str(total_plan),
        },
        descripcion=f"Plan de {num_cuotas} cuotas generado para la venta {venta.venta_id}"
    )
    logger.info(
        f"Plan generado para venta {venta.venta_id}: {num_cuotas} cuotas al {tasa_interes_anual}% anual, "
        f"total {total_plan}"
    )
    return cuotas


def generar_plan_cuotas(
    db: Session,
    venta_id: int,
    num_cuotas: int,
    tasa_interes_anual: Union[Decimal, float, str],
    usuario_id: int = None
) -> List[PagoCredito]:
    """
    Genera y guarda el plan de cuotas de una venta a crédito en una sola transacción.

    La fila de la venta se bloquea mientras se verifica que no exista un plan;
    la restricción única (venta_id, numero_cuota) cubre el resto.
    """
    tasa = validar_parametros_plan(num_cuotas, tasa_interes_anual)

    with transaccion(db, "generar el plan de cuotas"):
        venta = db.query(Venta).filter(Venta.venta_id == venta_id).with_for_update().first()
        if venta is None:
            raise ErrorNoEncontrado(f"Venta con ID {venta_id} no encontrada.")
        crear_cuotas_venta(db, venta, num_cuotas, tasa, usuario_id)

    return db.query(PagoCredito).filter(
        PagoCredito.venta_id == venta_id
    ).order_by(PagoCredito.numero_cuota).all()
