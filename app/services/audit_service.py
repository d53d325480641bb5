# backEnd/app/services/audit_service.py

from datetime import date, datetime
from enum import Enum
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session
from ..models.audit_log import AuditLog


def _valor_json(valor: Any) -> Any:
    if valor is None or isinstance(valor, (bool, int, float, str)):
        return valor
    if isinstance(valor, Enum):
        return valor.value
    if isinstance(valor, (datetime, date)):
        return valor.isoformat()
    return str(valor)


class AuditService:
    """
    Bitácora de cambios sobre clientes, terrenos, ventas y cuotas.

    Cada entrada se agrega a la sesión del llamador sin confirmar; queda
    escrita sólo si la transacción que describe hace commit.
    """

    @staticmethod
    def log_action(
        db: Session,
        tabla: str,
        accion: str,
        usuario_id: Optional[int] = None,
        registro_id: Optional[int] = None,
        valores_antes: Optional[Dict[str, Any]] = None,
        valores_despues: Optional[Dict[str, Any]] = None,
        descripcion: Optional[str] = None
    ) -> AuditLog:
        entrada = AuditLog(
            tabla=tabla,
            accion=accion.upper(),
            usuario_id=usuario_id,
            registro_id=registro_id,
            valores_antes=valores_antes,
            valores_despues=valores_despues,
            descripcion=descripcion or f"{accion.upper()} en {tabla}",
        )
        db.add(entrada)
        db.flush()
        return entrada

    @staticmethod
    def log_create(db: Session, tabla: str, registro_id: int, valores_despues: Dict[str, Any],
                   usuario_id: Optional[int] = None, descripcion: Optional[str] = None) -> AuditLog:
        return AuditService.log_action(
            db, tabla, "CREATE", usuario_id, registro_id,
            valores_despues=valores_despues,
            descripcion=descripcion or f"Alta en {tabla} (id {registro_id})",
        )

    @staticmethod
    def log_update(db: Session, tabla: str, registro_id: int, valores_antes: Dict[str, Any],
                   valores_despues: Dict[str, Any], usuario_id: Optional[int] = None,
                   accion: str = "UPDATE", descripcion: Optional[str] = None) -> AuditLog:
        """Guarda el antes y el después; ``accion`` distingue PAGO o CANCELAR de una edición."""
        return AuditService.log_action(
            db, tabla, accion, usuario_id, registro_id,
            valores_antes=valores_antes,
            valores_despues=valores_despues,
            descripcion=descripcion,
        )

    @staticmethod
    def log_delete(db: Session, tabla: str, registro_id: int, valores_antes: Dict[str, Any],
                   usuario_id: Optional[int] = None, descripcion: Optional[str] = None) -> AuditLog:
        return AuditService.log_action(
            db, tabla, "DELETE", usuario_id, registro_id,
            valores_antes=valores_antes,
            descripcion=descripcion or f"Baja en {tabla} (id {registro_id})",
        )

    @staticmethod
    def serialize_model(model_instance) -> Dict[str, Any]:
        """Foto de las columnas de una fila, lista para la columna JSON."""
        if model_instance is None:
            return {}
        return {
            columna.name: _valor_json(getattr(model_instance, columna.name))
            for columna in model_instance.__table__.columns
        }
