# backEnd/app/services/pago_service.py
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from ..exceptions import ErrorValidacion, ErrorNoEncontrado, ErrorConflicto
from ..models.pago_credito import PagoCredito
from ..models.venta import Venta
from ..models.enums import EstadoCuotaEnum, EstadoVentaEnum, TipoPagoEnum
from ..utils.moneda import redondear
from .audit_service import AuditService
from .transaccion import transaccion

logger = logging.getLogger(__name__)


def validar_monto_pago(monto_pagado: Union[Decimal, float, str]) -> Decimal:
    try:
        monto = Decimal(str(monto_pagado))
    except (InvalidOperation, ValueError):
        raise ErrorValidacion("El monto del pago no es un número válido.")
    if not monto.is_finite() or monto <= 0:
        raise ErrorValidacion("El monto del pago debe ser mayor a cero.")
    return redondear(monto)


def estado_cuota_segun_pago(monto_pagado: Decimal, monto_cuota: Decimal) -> EstadoCuotaEnum:
    """La cuota queda pagada solo si el monto cubre el total de la cuota."""
    if monto_pagado >= monto_cuota:
        return EstadoCuotaEnum.pagado
    return EstadoCuotaEnum.pendiente


def actualizar_estado_venta(venta: Venta, cuotas: List[PagoCredito]) -> EstadoVentaEnum:
    """
    Una venta a crédito pasa a 'pagada' cuando todas sus cuotas están pagadas
    y vuelve a 'activa' si alguna deja de estarlo.
    """
    if venta.estado == EstadoVentaEnum.cancelada or venta.tipo_pago != TipoPagoEnum.credito:
        return venta.estado
    if cuotas and all(c.estado == EstadoCuotaEnum.pagado for c in cuotas):
        venta.estado = EstadoVentaEnum.pagada
    elif venta.estado == EstadoVentaEnum.pagada:
        venta.estado = EstadoVentaEnum.activa
    return venta.estado


def registrar_pago(
    db: Session,
    pago_id: int,
    monto_pagado: Union[Decimal, float, str],
    usuario_id: Optional[int] = None,
    ahora: Optional[datetime] = None
) -> PagoCredito:
    """
    Registra el pago de una cuota.

    El pago se guarda en la misma cuota: fecha_pago y monto_pagado se
    sobrescriben en cada llamada (no hay historial de pagos parciales). Un pago
    menor al monto de la cuota la deja pendiente; uno mayor se acepta tal cual.

    La fila de la venta se bloquea antes de leer sus cuotas: los pagos de una
    misma venta se aplican de a uno.
    """
    monto = validar_monto_pago(monto_pagado)

    with transaccion(db, "registrar el pago"):
        venta_id = db.query(PagoCredito.venta_id).filter(PagoCredito.pago_id == pago_id).scalar()
        if venta_id is None:
            raise ErrorNoEncontrado(f"Cuota con ID {pago_id} no encontrada.")
        venta = db.query(Venta).filter(
            Venta.venta_id == venta_id
        ).with_for_update().populate_existing().one()
        cuota = db.query(PagoCredito).filter(
            PagoCredito.pago_id == pago_id
        ).populate_existing().one()
        if venta.estado == EstadoVentaEnum.cancelada:
            raise ErrorConflicto(f"La venta {venta.venta_id} está cancelada; no admite pagos.")

        valores_antes = AuditService.serialize_model(cuota)
        monto_cuota = Decimal(str(cuota.monto_cuota))

        cuota.fecha_pago = ahora or datetime.now()
        cuota.monto_pagado = monto
        cuota.estado = estado_cuota_segun_pago(monto, monto_cuota)

        if monto > monto_cuota:
            logger.warning(
                f"Sobrepago en cuota {cuota.numero_cuota} de la venta {venta.venta_id}: "
                f"pagado {monto}, cuota {monto_cuota}"
            )

        db.flush()
        cuotas_venta = db.query(PagoCredito).filter(
            PagoCredito.venta_id == venta.venta_id
        ).populate_existing().all()
        actualizar_estado_venta(venta, cuotas_venta)
        if usuario_id is not None:
            venta.modificado_por = usuario_id

        AuditService.log_update(
            db=db,
            tabla="pagos_credito",
            registro_id=cuota.pago_id,
            valores_antes=valores_antes,
            valores_despues=AuditService.serialize_model(cuota),
            usuario_id=usuario_id,
            accion="PAGO",
            descripcion=f"Pago de {monto} registrado en la cuota {cuota.numero_cuota} de la venta {venta.venta_id}"
        )

    db.refresh(cuota)
    logger.info(f"Pago registrado en cuota {cuota.pago_id}: {monto} -> {cuota.estado.value}")
    return cuota
