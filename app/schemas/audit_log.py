# backEnd/app/schemas/audit_log.py
from typing import Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel
from .pagination import Pagination


class AuditLogRead(BaseModel):
    log_id: int
    tabla: str
    accion: str  # 'CREATE', 'UPDATE', 'DELETE', 'PAGO', 'GENERAR_PLAN', 'CANCELAR', 'LOGIN'
    registro_id: Optional[int] = None
    usuario_id: Optional[int] = None
    usuario_nombre: Optional[str] = None
    valores_antes: Optional[Dict[str, Any]] = None
    valores_despues: Optional[Dict[str, Any]] = None
    descripcion: Optional[str] = None
    fecha: datetime

    class Config:
        from_attributes = True


AuditLogPagination = Pagination[AuditLogRead]
