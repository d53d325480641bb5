# backEnd/app/routes/pagos.py
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_, cast, String

from .. import auth as auth_utils
from ..database import get_db
from ..models.pago_credito import PagoCredito as DBPagoCredito
from ..models.venta import Venta as DBVenta
from ..models.cliente import Cliente as DBCliente
from ..models.terreno import Terreno as DBTerreno
from ..models.enums import EstadoCuotaEnum, EstadoCuotaVisibleEnum, EstadoVentaEnum
from ..schemas.pago_credito import PagoCreditoDetalle, PagoCreditoPagination, RegistrarPago, ResumenCuotas
from ..services.ingresos_service import clasificar_cuota, resumen_cuotas
from ..services.pago_service import registrar_pago

router = APIRouter(
    prefix="/pagos",
    tags=["pagos"]
)


def serializar_cuota(cuota: DBPagoCredito, hoy: date) -> PagoCreditoDetalle:
    """Cuota con su estado visible y los datos del cliente y terreno de la venta."""
    return PagoCreditoDetalle.model_validate({
        **{c.name: getattr(cuota, c.name) for c in cuota.__table__.columns},
        "estado_visible": clasificar_cuota(cuota.estado, cuota.fecha_vencimiento, hoy),
        "cliente": cuota.venta.cliente,
        "terreno": cuota.venta.terreno,
    }, from_attributes=True)


def get_cuota_or_404(
    pago_id: int = Path(..., title="El ID de la cuota"),
    db: Session = Depends(get_db)
) -> DBPagoCredito:
    cuota = db.query(DBPagoCredito).options(
        joinedload(DBPagoCredito.venta).joinedload(DBVenta.cliente),
        joinedload(DBPagoCredito.venta).joinedload(DBVenta.terreno)
    ).filter(DBPagoCredito.pago_id == pago_id).first()
    if cuota is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cuota no encontrada.")
    return cuota


@router.get("/", response_model=PagoCreditoPagination)
def read_pagos(
    estado_visible: Optional[EstadoCuotaVisibleEnum] = Query(None, description="Pagado, Vencido o Pendiente"),
    search: Optional[str] = Query(None, description="Buscar por cliente, cédula, lote o número de cuota"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, gt=0, le=500),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """Cuotas de las ventas a crédito no canceladas, ordenadas por vencimiento."""
    hoy = date.today()
    query = db.query(DBPagoCredito).join(DBPagoCredito.venta).join(DBVenta.cliente).join(DBVenta.terreno).filter(
        DBVenta.estado != EstadoVentaEnum.cancelada
    )

    if estado_visible == EstadoCuotaVisibleEnum.pagado:
        query = query.filter(DBPagoCredito.estado == EstadoCuotaEnum.pagado)
    elif estado_visible == EstadoCuotaVisibleEnum.vencido:
        query = query.filter(DBPagoCredito.estado != EstadoCuotaEnum.pagado, DBPagoCredito.fecha_vencimiento < hoy)
    elif estado_visible == EstadoCuotaVisibleEnum.pendiente:
        query = query.filter(DBPagoCredito.estado != EstadoCuotaEnum.pagado, DBPagoCredito.fecha_vencimiento >= hoy)

    if search:
        query = query.filter(
            or_(
                DBCliente.nombre.ilike(f"%{search}%"),
                DBCliente.apellido.ilike(f"%{search}%"),
                DBCliente.cedula.ilike(f"%{search}%"),
                DBTerreno.numero_lote.ilike(f"%{search}%"),
                cast(DBPagoCredito.numero_cuota, String) == search.strip()
            )
        )

    total = query.count()
    cuotas = query.options(
        joinedload(DBPagoCredito.venta).joinedload(DBVenta.cliente),
        joinedload(DBPagoCredito.venta).joinedload(DBVenta.terreno)
    ).order_by(DBPagoCredito.fecha_vencimiento, DBPagoCredito.numero_cuota).offset(skip).limit(limit).all()
    return {"items": [serializar_cuota(c, hoy) for c in cuotas], "total": total}


@router.get("/resumen", response_model=ResumenCuotas)
def read_resumen(
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    return resumen_cuotas(db, date.today())


@router.get("/{pago_id}", response_model=PagoCreditoDetalle)
def read_pago(
    cuota: DBPagoCredito = Depends(get_cuota_or_404),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    return serializar_cuota(cuota, date.today())


@router.post("/{pago_id}/registrar", response_model=PagoCreditoDetalle)
def registrar_pago_cuota(
    pago: RegistrarPago,
    pago_id: int = Path(..., title="El ID de la cuota"),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """
    Registra el pago de una cuota. Un monto menor a la cuota la deja pendiente;
    un nuevo pago reemplaza al anterior.
    """
    cuota = registrar_pago(db, pago_id, pago.monto_pagado, usuario_id=current_user.usuario_id)
    return serializar_cuota(cuota, date.today())
