# backEnd/app/routes/historial.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_

from .. import auth as auth_utils
from ..database import get_db
from ..models.cliente_historial import ClienteHistorial as DBClienteHistorial
from ..schemas.historial import ClienteHistorialPagination

router = APIRouter(
    prefix="/historial",
    tags=["historial"]
)


@router.get("/", response_model=ClienteHistorialPagination)
def read_historial(
    search: Optional[str] = Query(None, description="Buscar por nombre, apellido, cédula o motivo"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, gt=0, le=500),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    """Clientes eliminados, del más reciente al más antiguo."""
    query = db.query(DBClienteHistorial)
    if search:
        query = query.filter(
            or_(
                DBClienteHistorial.nombre.ilike(f"%{search}%"),
                DBClienteHistorial.apellido.ilike(f"%{search}%"),
                DBClienteHistorial.cedula.ilike(f"%{search}%"),
                DBClienteHistorial.motivo_eliminacion.ilike(f"%{search}%")
            )
        )
    total = query.count()
    items = query.order_by(DBClienteHistorial.fecha_eliminacion.desc()).offset(skip).limit(limit).all()
    return {"items": items, "total": total}
