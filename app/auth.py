# backEnd/app/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, List

from sqlalchemy.orm import Session

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from . import config
from .database import get_db
from .models.usuario import Usuario
from .models.enums import EstadoEnum, RolEnum
from .schemas.token import TokenData

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 Bearer token (para proteger rutas)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica si una contraseña plana coincide con un hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Genera el hash de una contraseña plana."""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Crea un token de acceso JWT."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def authenticate_user(db: Session, username: str, password: str) -> Optional[Usuario]:
    user = db.query(Usuario).filter(Usuario.nombre_usuario == username).first()
    if user is None or not verify_password(password, user.contraseña):
        return None
    return user


# --- DEPENDENCIAS DE USUARIO Y ROL ---

async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    """Obtiene el usuario autenticado a partir del token JWT."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="No se pudieron validar las credenciales",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
        token_data = TokenData(username=username, rol=payload.get("rol"))
    except JWTError:
        raise credentials_exception

    user = db.query(Usuario).filter(Usuario.nombre_usuario == token_data.username).first()
    if user is None:
        raise credentials_exception
    return user


def get_current_active_user(current_user: Usuario = Depends(get_current_user)):
    """Obtiene el usuario autenticado y verifica que esté activo."""
    if current_user.estado != EstadoEnum.activo:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Usuario inactivo")
    return current_user


def get_current_active_user_with_role(required_roles: List[str]):
    """
    Dependencia que verifica que el usuario autenticado esté activo y tenga
    uno de los roles requeridos.
    """
    def _get_current_active_user_with_role_inner(
        current_user: Usuario = Depends(get_current_active_user)
    ):
        rol = current_user.rol.value if isinstance(current_user.rol, RolEnum) else current_user.rol
        if rol not in required_roles:
            logger.warning(f"Acceso denegado a {current_user.nombre_usuario} (rol {rol})")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="No tienes permisos suficientes para acceder a este recurso."
            )
        return current_user
    return _get_current_active_user_with_role_inner


# Lista de roles del sistema para facilitar la referencia
ROLES = [r.value for r in RolEnum]
ADMIN_ROLES = [RolEnum.administrador.value]
EMPLOYEE_ROLES = [RolEnum.administrador.value, RolEnum.empleado.value]
