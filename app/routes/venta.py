# backEnd/app/routes/venta.py
from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import or_

from .. import auth as auth_utils
from ..database import get_db
from ..models.venta import Venta as DBVenta
from ..models.cliente import Cliente as DBCliente
from ..models.terreno import Terreno as DBTerreno
from ..models.pago_credito import PagoCredito as DBPagoCredito
from ..models.enums import EstadoVentaEnum, TipoPagoEnum
from ..schemas.venta import Venta, VentaCreate, VentaConCuotas, VentaPagination, PlanCreditoCreate
from ..schemas.pago_credito import PagoCredito
from ..services.venta_service import crear_venta, cancelar_venta
from ..services.plan_cuotas_service import generar_plan_cuotas

router = APIRouter(
    prefix="/ventas",
    tags=["ventas"]
)


def get_venta_or_404(
    venta_id: int = Path(..., title="El ID de la venta"),
    db: Session = Depends(get_db)
) -> DBVenta:
    """
    Dependencia para obtener una venta por ID con sus relaciones precargadas.
    """
    venta = db.query(DBVenta).options(
        joinedload(DBVenta.cliente),
        joinedload(DBVenta.terreno),
        joinedload(DBVenta.creador),
        joinedload(DBVenta.modificador),
        joinedload(DBVenta.cuotas)
    ).filter(DBVenta.venta_id == venta_id).first()
    if venta is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venta no encontrada.")
    return venta


@router.post("/", response_model=VentaConCuotas, status_code=status.HTTP_201_CREATED)
def create_venta(
    venta_data: VentaCreate,
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """
    Registra la venta de un terreno disponible. Con `plan_credito` también genera
    las cuotas en la misma transacción.
    """
    return crear_venta(db, venta_data, usuario_id=current_user.usuario_id)


@router.get("/", response_model=VentaPagination)
def read_ventas(
    estado: Optional[EstadoVentaEnum] = Query(None, description="Filtrar por estado de la venta"),
    tipo_pago: Optional[TipoPagoEnum] = Query(None, description="Filtrar por tipo de pago"),
    fecha_desde: Optional[datetime] = Query(None, description="Fecha de inicio (YYYY-MM-DD)"),
    fecha_hasta: Optional[datetime] = Query(None, description="Fecha de fin, exclusiva (YYYY-MM-DD)"),
    search: Optional[str] = Query(None, description="Buscar por cliente, cédula o número de lote"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, gt=0, le=500),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    query = db.query(DBVenta).join(DBVenta.cliente).join(DBVenta.terreno)

    if estado:
        query = query.filter(DBVenta.estado == estado)
    if tipo_pago:
        query = query.filter(DBVenta.tipo_pago == tipo_pago)
    if fecha_desde:
        query = query.filter(DBVenta.fecha_venta >= fecha_desde)
    if fecha_hasta:
        query = query.filter(DBVenta.fecha_venta < fecha_hasta)
    if search:
        query = query.filter(
            or_(
                DBCliente.nombre.ilike(f"%{search}%"),
                DBCliente.apellido.ilike(f"%{search}%"),
                DBCliente.cedula.ilike(f"%{search}%"),
                DBTerreno.numero_lote.ilike(f"%{search}%")
            )
        )

    total = query.count()
    ventas = query.options(
        joinedload(DBVenta.cliente),
        joinedload(DBVenta.terreno),
        joinedload(DBVenta.creador)
    ).order_by(DBVenta.fecha_venta.desc()).offset(skip).limit(limit).all()
    return {"items": ventas, "total": total}


@router.get("/{venta_id}", response_model=VentaConCuotas)
def read_venta(
    venta: DBVenta = Depends(get_venta_or_404),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    return venta


@router.post("/{venta_id}/plan-credito", response_model=List[PagoCredito], status_code=status.HTTP_201_CREATED)
def create_plan_credito(
    plan: PlanCreditoCreate,
    venta_id: int = Path(..., title="El ID de la venta"),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """Genera el plan de cuotas de una venta a crédito. Solo se puede generar una vez."""
    return generar_plan_cuotas(
        db, venta_id, plan.num_cuotas, plan.tasa_interes_anual, usuario_id=current_user.usuario_id
    )


@router.get("/{venta_id}/cuotas", response_model=List[PagoCredito])
def read_cuotas_venta(
    venta: DBVenta = Depends(get_venta_or_404),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    return db.query(DBPagoCredito).filter(
        DBPagoCredito.venta_id == venta.venta_id
    ).order_by(DBPagoCredito.numero_cuota).all()


@router.patch("/{venta_id}/cancelar", response_model=Venta)
def cancel_venta(
    venta_id: int = Path(..., title="El ID de la venta"),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.ADMIN_ROLES))
):
    """Cancela una venta sin pagos registrados y libera el terreno."""
    return cancelar_venta(db, venta_id, usuario_id=current_user.usuario_id)
