# backEnd/app/services/historial_service.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..exceptions import ErrorValidacion, ErrorNoEncontrado, ErrorConflicto
from ..models.cliente import Cliente
from ..models.cliente_historial import ClienteHistorial
from .audit_service import AuditService
from .transaccion import transaccion

logger = logging.getLogger(__name__)

MOTIVO_POR_DEFECTO = "Eliminado por administrador"


def mover_cliente_a_historial(
    db: Session,
    cliente_id: int,
    motivo: str = MOTIVO_POR_DEFECTO,
    usuario_id: Optional[int] = None,
    ahora: Optional[datetime] = None
) -> ClienteHistorial:
    """
    Copia el cliente a clientes_historial y lo desactiva, todo en una transacción.
    El registro original se conserva (las ventas lo siguen referenciando).
    """
    motivo = (motivo or "").strip()
    if not motivo:
        raise ErrorValidacion("Debe indicar el motivo de la eliminación.")

    with transaccion(db, "mover el cliente al historial"):
        cliente = db.query(Cliente).filter(Cliente.cliente_id == cliente_id).with_for_update().first()
        if cliente is None:
            raise ErrorNoEncontrado(f"Cliente con ID {cliente_id} no encontrado.")
        if not cliente.activo:
            raise ErrorConflicto(f"El cliente {cliente_id} ya fue movido al historial.")

        valores_antes = AuditService.serialize_model(cliente)
        entrada = ClienteHistorial(
            cliente_id_original=cliente.cliente_id,
            nombre=cliente.nombre,
            apellido=cliente.apellido,
            cedula=cliente.cedula,
            telefono=cliente.telefono,
            email=cliente.email,
            direccion=cliente.direccion,
            fecha_registro=cliente.created_at,
            fecha_eliminacion=ahora or datetime.now(),
            motivo_eliminacion=motivo,
        )
        db.add(entrada)
        cliente.activo = False
        db.flush()

        AuditService.log_delete(
            db=db,
            tabla="clientes",
            registro_id=cliente.cliente_id,
            valores_antes=valores_antes,
            usuario_id=usuario_id,
            descripcion=f"Cliente movido al historial: {motivo}"
        )

    db.refresh(entrada)
    logger.info(f"Cliente {cliente_id} movido al historial (entrada {entrada.historial_id})")
    return entrada
