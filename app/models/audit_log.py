# backEnd/app/models/audit_log.py

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, JSON, func
from sqlalchemy.orm import relationship
from .base import Base


class AuditLog(Base):
    __tablename__ = 'audit_logs'

    log_id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey('usuarios.usuario_id', ondelete='SET NULL'), nullable=True)
    tabla = Column(String(50), nullable=False, index=True)  # 'clientes', 'ventas', 'pagos_credito', etc.
    accion = Column(String(50), nullable=False, index=True)  # 'CREATE', 'UPDATE', 'DELETE', 'PAGO', ...
    registro_id = Column(Integer, nullable=True)  # ID del registro afectado

    # Datos del cambio
    valores_antes = Column(JSON, nullable=True)  # Estado anterior (UPDATE/DELETE)
    valores_despues = Column(JSON, nullable=True)  # Estado nuevo (CREATE/UPDATE)

    descripcion = Column(Text, nullable=True)  # Descripción legible de la acción

    fecha = Column(DateTime, default=func.now(), nullable=False, index=True)

    usuario = relationship("Usuario", foreign_keys=[usuario_id])

    def __repr__(self):
        return f"<AuditLog(id={self.log_id}, usuario={self.usuario_id}, tabla='{self.tabla}', accion='{self.accion}')>"
