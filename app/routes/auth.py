# backEnd/app/routes/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from .. import auth as auth_utils
from ..database import get_db
from ..schemas.token import Token
from ..schemas.usuario import Usuario as UsuarioSchema
from ..models.usuario import Usuario
from ..models.enums import EstadoEnum
from ..services.audit_service import AuditService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Auth"]
)


@router.post("/login", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """Autentica un usuario y devuelve un token de acceso JWT."""
    user = auth_utils.authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        logger.warning(f"Login fallido para '{form_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.estado != EstadoEnum.activo:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="La cuenta de usuario se encuentra inactiva. Comuníquese con un administrador.",
        )

    access_token = auth_utils.create_access_token(
        data={"sub": user.nombre_usuario, "rol": user.rol.value}
    )
    AuditService.log_action(
        db=db,
        tabla="usuarios",
        accion="LOGIN",
        usuario_id=user.usuario_id,
        registro_id=user.usuario_id,
        descripcion=f"Inicio de sesión de {user.nombre_usuario}"
    )
    db.commit()
    logger.info(f"Usuario {user.nombre_usuario} inició sesión")
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UsuarioSchema)
def read_users_me(current_user: Usuario = Depends(auth_utils.get_current_active_user)):
    """Devuelve el usuario autenticado."""
    return current_user
