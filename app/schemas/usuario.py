# backEnd/app/schemas/usuario.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from ..models.enums import EstadoEnum, RolEnum


class UsuarioBase(BaseModel):
    nombre_usuario: str = Field(..., min_length=1, max_length=50, description="Nombre de usuario, debe ser único")
    rol: RolEnum = RolEnum.empleado
    estado: Optional[EstadoEnum] = EstadoEnum.activo


class UsuarioCreate(UsuarioBase):
    contraseña: str = Field(..., min_length=6, description="Contraseña para el usuario")


# --- Versión anidada para auditoría (creado_por / modificado_por) ---
class UsuarioAudit(BaseModel):
    usuario_id: int
    nombre_usuario: str
    model_config = ConfigDict(from_attributes=True)


class Usuario(UsuarioBase):
    usuario_id: int
    fecha_creacion: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
