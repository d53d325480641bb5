# backEnd/app/services/venta_service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..exceptions import ErrorValidacion, ErrorNoEncontrado, ErrorConflicto
from ..models.cliente import Cliente
from ..models.terreno import Terreno
from ..models.venta import Venta
from ..models.pago_credito import PagoCredito
from ..models.enums import EstadoTerrenoEnum, EstadoVentaEnum, TipoPagoEnum
from ..schemas.venta import VentaCreate
from ..utils.moneda import redondear
from .audit_service import AuditService
from .plan_cuotas_service import validar_parametros_plan, crear_cuotas_venta
from .transaccion import transaccion

logger = logging.getLogger(__name__)


def reservar_terreno(db: Session, terreno_id: int) -> bool:
    """
    Marca el terreno como vendido solo si sigue disponible.
    Retorna False si otra venta lo tomó primero (0 filas afectadas).
    """
    filas = db.query(Terreno).filter(
        Terreno.terreno_id == terreno_id,
        Terreno.estado == EstadoTerrenoEnum.disponible
    ).update({Terreno.estado: EstadoTerrenoEnum.vendido}, synchronize_session=False)
    return filas == 1


def crear_venta(db: Session, datos: VentaCreate, usuario_id: Optional[int] = None) -> Venta:
    """
    Crea la venta y marca el terreno como vendido en la misma transacción.
    Si viene plan_credito (solo ventas a crédito) también genera las cuotas.
    """
    if datos.plan_credito is not None:
        if datos.tipo_pago != TipoPagoEnum.credito:
            raise ErrorValidacion("Solo las ventas a crédito pueden tener plan de cuotas.")
        tasa = validar_parametros_plan(datos.plan_credito.num_cuotas, datos.plan_credito.tasa_interes_anual)

    with transaccion(db, "registrar la venta"):
        cliente = db.query(Cliente).filter(Cliente.cliente_id == datos.cliente_id).first()
        if cliente is None or not cliente.activo:
            raise ErrorNoEncontrado(f"Cliente con ID {datos.cliente_id} no encontrado o inactivo.")

        terreno = db.query(Terreno).filter(Terreno.terreno_id == datos.terreno_id).first()
        if terreno is None:
            raise ErrorNoEncontrado(f"Terreno con ID {datos.terreno_id} no encontrado.")

        precio_total = redondear(datos.precio_total if datos.precio_total is not None else terreno.precio)
        if precio_total <= 0:
            raise ErrorValidacion("El precio total de la venta debe ser mayor a cero.")

        if not reservar_terreno(db, terreno.terreno_id):
            raise ErrorConflicto(f"El terreno {terreno.ubicacion} no está disponible.")
        db.expire(terreno)

        nueva_venta = Venta(
            cliente_id=cliente.cliente_id,
            terreno_id=terreno.terreno_id,
            precio_total=precio_total,
            tipo_pago=datos.tipo_pago,
            fecha_venta=datos.fecha_venta or datetime.now(),
            estado=EstadoVentaEnum.activa,
            observaciones=datos.observaciones,
            creado_por=usuario_id,
        )
        db.add(nueva_venta)
        db.flush()

        AuditService.log_create(
            db=db,
            tabla="ventas",
            registro_id=nueva_venta.venta_id,
            valores_despues=AuditService.serialize_model(nueva_venta),
            usuario_id=usuario_id,
            descripcion=f"Venta del terreno {terreno.ubicacion} a {cliente.nombre} {cliente.apellido}"
        )

        if datos.plan_credito is not None:
            crear_cuotas_venta(db, nueva_venta, datos.plan_credito.num_cuotas, tasa, usuario_id)

    db.refresh(nueva_venta)
    logger.info(
        f"Venta {nueva_venta.venta_id} registrada: terreno {nueva_venta.terreno_id}, "
        f"{nueva_venta.tipo_pago.value}, total {nueva_venta.precio_total}"
    )
    return nueva_venta


def cancelar_venta(db: Session, venta_id: int, usuario_id: Optional[int] = None) -> Venta:
    """
    Cancela una venta que no tiene pagos registrados: borra las cuotas pendientes
    y libera el terreno.
    """
    with transaccion(db, "cancelar la venta"):
        venta = db.query(Venta).filter(Venta.venta_id == venta_id).with_for_update().first()
        if venta is None:
            raise ErrorNoEncontrado(f"Venta con ID {venta_id} no encontrada.")
        if venta.estado == EstadoVentaEnum.cancelada:
            raise ErrorConflicto(f"La venta {venta_id} ya está cancelada.")

        pagos = db.query(func.count(PagoCredito.pago_id)).filter(
            PagoCredito.venta_id == venta_id,
            PagoCredito.fecha_pago.isnot(None)
        ).scalar()
        if pagos:
            raise ErrorConflicto(
                f"La venta {venta_id} tiene {pagos} cuota(s) con pagos registrados; no se puede cancelar."
            )

        valores_antes = AuditService.serialize_model(venta)
        venta.cuotas.clear()
        venta.estado = EstadoVentaEnum.cancelada
        venta.modificado_por = usuario_id
        venta.terreno.estado = EstadoTerrenoEnum.disponible
        db.flush()

        AuditService.log_update(
            db=db,
            tabla="ventas",
            registro_id=venta.venta_id,
            valores_antes=valores_antes,
            valores_despues=AuditService.serialize_model(venta),
            usuario_id=usuario_id,
            accion="CANCELAR",
            descripcion=f"Venta {venta_id} cancelada; terreno {venta.terreno_id} liberado"
        )

    db.refresh(venta)
    logger.info(f"Venta {venta_id} cancelada")
    return venta
