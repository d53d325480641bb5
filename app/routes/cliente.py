# backEnd/app/routes/cliente.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session
from sqlalchemy import or_

from .. import auth as auth_utils
from ..database import get_db
from ..exceptions import ErrorConflicto
from ..models.cliente import Cliente as DBCliente
from ..schemas.cliente import Cliente, ClienteCreate, ClienteUpdate, ClientePagination
from ..schemas.historial import ClienteHistorial, MoverHistorial
from ..services.audit_service import AuditService
from ..services.historial_service import mover_cliente_a_historial
from ..services.transaccion import transaccion

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clientes",
    tags=["clientes"]
)


def get_cliente_or_404(
    cliente_id: int = Path(..., title="El ID del cliente"),
    db: Session = Depends(get_db)
) -> DBCliente:
    db_cliente = db.query(DBCliente).filter(
        DBCliente.cliente_id == cliente_id,
        DBCliente.activo.is_(True)
    ).first()
    if db_cliente is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente no encontrado.")
    return db_cliente


def verificar_cedula_disponible(db: Session, cedula: str, excluir_id: Optional[int] = None):
    """La cédula no se puede repetir entre clientes activos."""
    query = db.query(DBCliente).filter(DBCliente.cedula == cedula, DBCliente.activo.is_(True))
    if excluir_id is not None:
        query = query.filter(DBCliente.cliente_id != excluir_id)
    if query.first():
        raise ErrorConflicto(f"Ya existe un cliente activo con la cédula {cedula}.")


@router.get("/", response_model=ClientePagination)
def read_clientes(
    search: Optional[str] = Query(None, description="Buscar por nombre, apellido o cédula"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, gt=0, le=500),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """Lista los clientes activos con búsqueda y paginación."""
    query = db.query(DBCliente).filter(DBCliente.activo.is_(True))
    if search:
        query = query.filter(
            or_(
                DBCliente.nombre.ilike(f"%{search}%"),
                DBCliente.apellido.ilike(f"%{search}%"),
                DBCliente.cedula.ilike(f"%{search}%")
            )
        )
    total = query.count()
    clientes = query.order_by(DBCliente.apellido, DBCliente.nombre).offset(skip).limit(limit).all()
    return {"items": clientes, "total": total}


@router.get("/{cliente_id}", response_model=Cliente)
def get_cliente(
    db_cliente: DBCliente = Depends(get_cliente_or_404),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    return db_cliente


@router.post("/", response_model=Cliente, status_code=status.HTTP_201_CREATED)
def create_cliente(
    cliente_data: ClienteCreate,
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    with transaccion(db, "crear el cliente"):
        verificar_cedula_disponible(db, cliente_data.cedula)
        new_cliente = DBCliente(**cliente_data.model_dump(), activo=True)
        db.add(new_cliente)
        db.flush()
        AuditService.log_create(
            db=db,
            tabla="clientes",
            registro_id=new_cliente.cliente_id,
            valores_despues=AuditService.serialize_model(new_cliente),
            usuario_id=current_user.usuario_id,
            descripcion=f"Cliente creado: {new_cliente.nombre} {new_cliente.apellido}"
        )
    db.refresh(new_cliente)
    logger.info(f"Cliente {new_cliente.cliente_id} creado por {current_user.nombre_usuario}")
    return new_cliente


@router.patch("/{cliente_id}", response_model=Cliente)
def update_cliente(
    cliente_update: ClienteUpdate,
    db_cliente: DBCliente = Depends(get_cliente_or_404),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    cambios = cliente_update.model_dump(exclude_unset=True)
    with transaccion(db, "actualizar el cliente"):
        if cambios.get("cedula") and cambios["cedula"] != db_cliente.cedula:
            verificar_cedula_disponible(db, cambios["cedula"], excluir_id=db_cliente.cliente_id)
        valores_antes = AuditService.serialize_model(db_cliente)
        for key, value in cambios.items():
            setattr(db_cliente, key, value)
        db.flush()
        AuditService.log_update(
            db=db,
            tabla="clientes",
            registro_id=db_cliente.cliente_id,
            valores_antes=valores_antes,
            valores_despues=AuditService.serialize_model(db_cliente),
            usuario_id=current_user.usuario_id
        )
    db.refresh(db_cliente)
    return db_cliente


@router.delete("/{cliente_id}", response_model=ClienteHistorial)
def delete_cliente(
    cliente_id: int = Path(..., title="El ID del cliente"),
    datos: Optional[MoverHistorial] = None,
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.ADMIN_ROLES))
):
    """
    "Elimina" un cliente: se copia al historial con el motivo y se desactiva.
    Las ventas del cliente se conservan.
    """
    motivo = datos.motivo if datos else MoverHistorial().motivo
    return mover_cliente_a_historial(db, cliente_id, motivo, usuario_id=current_user.usuario_id)
