# backEnd/app/routes/terreno.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session
from sqlalchemy import or_

from .. import auth as auth_utils
from ..database import get_db
from ..exceptions import ErrorConflicto
from ..models.terreno import Terreno as DBTerreno
from ..models.venta import Venta as DBVenta
from ..models.enums import EstadoTerrenoEnum, TipoTerrenoEnum
from ..schemas.terreno import Terreno, TerrenoCreate, TerrenoUpdate, TerrenoPagination
from ..services.audit_service import AuditService
from ..services.transaccion import transaccion

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/terrenos",
    tags=["terrenos"]
)


def get_terreno_or_404(
    terreno_id: int = Path(..., title="El ID del terreno"),
    db: Session = Depends(get_db)
) -> DBTerreno:
    db_terreno = db.query(DBTerreno).filter(DBTerreno.terreno_id == terreno_id).first()
    if db_terreno is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Terreno no encontrado.")
    return db_terreno


@router.get("/", response_model=TerrenoPagination)
def read_terrenos(
    estado: Optional[EstadoTerrenoEnum] = Query(None, description="Filtrar por estado"),
    tipo: Optional[TipoTerrenoEnum] = Query(None, description="Filtrar por tipo"),
    search: Optional[str] = Query(None, description="Buscar por lote, sección o manzana"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, gt=0, le=500),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    query = db.query(DBTerreno)
    if estado:
        query = query.filter(DBTerreno.estado == estado)
    if tipo:
        query = query.filter(DBTerreno.tipo == tipo)
    if search:
        query = query.filter(
            or_(
                DBTerreno.numero_lote.ilike(f"%{search}%"),
                DBTerreno.seccion.ilike(f"%{search}%"),
                DBTerreno.manzana.ilike(f"%{search}%")
            )
        )
    total = query.count()
    terrenos = query.order_by(DBTerreno.seccion, DBTerreno.manzana, DBTerreno.numero_lote).offset(skip).limit(limit).all()
    return {"items": terrenos, "total": total}


@router.get("/{terreno_id}", response_model=Terreno)
def get_terreno(
    db_terreno: DBTerreno = Depends(get_terreno_or_404),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    return db_terreno


@router.post("/", response_model=Terreno, status_code=status.HTTP_201_CREATED)
def create_terreno(
    terreno_data: TerrenoCreate,
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    # La ubicación repetida la rechaza uq_terreno_ubicacion (-> 409)
    with transaccion(db, "crear el terreno"):
        new_terreno = DBTerreno(**terreno_data.model_dump())
        db.add(new_terreno)
        db.flush()
        AuditService.log_create(
            db=db,
            tabla="terrenos",
            registro_id=new_terreno.terreno_id,
            valores_despues=AuditService.serialize_model(new_terreno),
            usuario_id=current_user.usuario_id,
            descripcion=f"Terreno creado: {new_terreno.ubicacion}"
        )
    db.refresh(new_terreno)
    return new_terreno


@router.patch("/{terreno_id}", response_model=Terreno)
def update_terreno(
    terreno_update: TerrenoUpdate,
    db_terreno: DBTerreno = Depends(get_terreno_or_404),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.EMPLOYEE_ROLES))
):
    cambios = terreno_update.model_dump(exclude_unset=True)
    with transaccion(db, "actualizar el terreno"):
        nuevo_estado = cambios.get("estado")
        if nuevo_estado is not None and nuevo_estado != db_terreno.estado:
            # El paso a/desde 'vendido' solo lo hacen las ventas
            if EstadoTerrenoEnum.vendido in (nuevo_estado, db_terreno.estado):
                raise ErrorConflicto("El estado 'vendido' se asigna y libera únicamente mediante ventas.")
        valores_antes = AuditService.serialize_model(db_terreno)
        for key, value in cambios.items():
            setattr(db_terreno, key, value)
        db.flush()
        AuditService.log_update(
            db=db,
            tabla="terrenos",
            registro_id=db_terreno.terreno_id,
            valores_antes=valores_antes,
            valores_despues=AuditService.serialize_model(db_terreno),
            usuario_id=current_user.usuario_id
        )
    db.refresh(db_terreno)
    return db_terreno


@router.delete("/{terreno_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_terreno(
    db_terreno: DBTerreno = Depends(get_terreno_or_404),
    db: Session = Depends(get_db),
    current_user: auth_utils.Usuario = Depends(auth_utils.get_current_active_user_with_role(auth_utils.ADMIN_ROLES))
):
    terreno_id = db_terreno.terreno_id
    with transaccion(db, "eliminar el terreno"):
        if db_terreno.estado == EstadoTerrenoEnum.vendido:
            raise ErrorConflicto(f"El terreno {db_terreno.ubicacion} está vendido; no se puede eliminar.")
        if db.query(DBVenta).filter(DBVenta.terreno_id == db_terreno.terreno_id).first():
            raise ErrorConflicto(f"El terreno {db_terreno.ubicacion} tiene ventas registradas; no se puede eliminar.")
        AuditService.log_delete(
            db=db,
            tabla="terrenos",
            registro_id=db_terreno.terreno_id,
            valores_antes=AuditService.serialize_model(db_terreno),
            usuario_id=current_user.usuario_id
        )
        db.delete(db_terreno)
    logger.info(f"Terreno {terreno_id} eliminado por {current_user.nombre_usuario}")
