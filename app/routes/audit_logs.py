# backEnd/app/routes/audit_logs.py
from typing import Optional
from datetime import datetime, date, timedelta
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import desc

from ..database import get_db
from .. import auth as auth_utils
from ..models.audit_log import AuditLog
from ..schemas.audit_log import AuditLogRead, AuditLogPagination

router = APIRouter(
    prefix="/audit-logs",
    tags=["Audit Logs"]
)


def _con_usuario(log: AuditLog) -> AuditLogRead:
    data = AuditLogRead.model_validate(log)
    data.usuario_nombre = log.usuario.nombre_usuario if log.usuario else "Sistema"
    return data


@router.get("/", response_model=AuditLogPagination)
def get_audit_logs(
    tabla: Optional[str] = Query(None, description="Filtrar por tabla afectada"),
    accion: Optional[str] = Query(None, description="Filtrar por tipo de acción"),
    registro_id: Optional[int] = Query(None, description="Filtrar por ID del registro afectado"),
    fecha_desde: Optional[date] = Query(None, description="Fecha desde (YYYY-MM-DD)"),
    fecha_hasta: Optional[date] = Query(None, description="Fecha hasta, inclusive (YYYY-MM-DD)"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, gt=0, le=500),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.ADMIN_ROLES))
):
    """
    Historial de cambios (ventas, cuotas, pagos, clientes, terrenos), del más reciente
    al más antiguo. Solo administradores.
    """
    query = db.query(AuditLog).options(joinedload(AuditLog.usuario))

    if tabla:
        query = query.filter(AuditLog.tabla == tabla)
    if accion:
        query = query.filter(AuditLog.accion == accion)
    if registro_id is not None:
        query = query.filter(AuditLog.registro_id == registro_id)
    if fecha_desde:
        query = query.filter(AuditLog.fecha >= datetime.combine(fecha_desde, datetime.min.time()))
    if fecha_hasta:
        query = query.filter(AuditLog.fecha < datetime.combine(fecha_hasta + timedelta(days=1), datetime.min.time()))

    total = query.count()
    logs = query.order_by(desc(AuditLog.fecha), desc(AuditLog.log_id)).offset(skip).limit(limit).all()
    return {"items": [_con_usuario(log) for log in logs], "total": total}


@router.get("/{log_id}", response_model=AuditLogRead)
def get_audit_log_detail(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.ADMIN_ROLES))
):
    log = db.query(AuditLog).options(
        joinedload(AuditLog.usuario)
    ).filter(AuditLog.log_id == log_id).first()
    if not log:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Log de auditoría no encontrado"
        )
    return _con_usuario(log)
