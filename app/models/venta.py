from sqlalchemy import Column, Integer, Text, DECIMAL, TIMESTAMP, DateTime, ForeignKey, Enum, CheckConstraint, func
from sqlalchemy.orm import relationship
from datetime import datetime
from .base import Base
from .enums import EstadoVentaEnum, TipoPagoEnum


class Venta(Base):
    __tablename__ = "ventas"
    venta_id = Column(Integer, primary_key=True, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.cliente_id", ondelete="RESTRICT"), nullable=False, index=True)
    terreno_id = Column(Integer, ForeignKey("terrenos.terreno_id", ondelete="RESTRICT"), nullable=False, index=True)
    precio_total = Column(DECIMAL(12, 2), nullable=False)
    # No se modifica después de crear la venta: define si existe plan de cuotas
    tipo_pago = Column(Enum(TipoPagoEnum), nullable=False)
    fecha_venta = Column(TIMESTAMP, default=datetime.now, nullable=False, index=True)
    estado = Column(Enum(EstadoVentaEnum), default=EstadoVentaEnum.activa, nullable=False, index=True)
    observaciones = Column(Text, nullable=True)

    # Configuración del crédito (se llena al generar el plan de cuotas)
    num_cuotas = Column(Integer, nullable=True)
    tasa_interes_anual = Column(DECIMAL(5, 2), nullable=True)

    creado_por = Column(Integer, ForeignKey("usuarios.usuario_id", ondelete="SET NULL"), nullable=True)
    modificado_por = Column(Integer, ForeignKey("usuarios.usuario_id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=True)

    __table_args__ = (
        CheckConstraint('precio_total > 0', name='chk_precio_total_positivo'),
    )

    cliente = relationship("Cliente", back_populates="ventas")
    terreno = relationship("Terreno", back_populates="ventas")
    cuotas = relationship(
        "PagoCredito",
        back_populates="venta",
        cascade="all, delete-orphan",
        order_by="PagoCredito.numero_cuota",
    )
    creador = relationship("Usuario", foreign_keys=[creado_por])
    modificador = relationship("Usuario", foreign_keys=[modificado_por])

    def __repr__(self):
        return f"<Venta(venta_id={self.venta_id}, cliente_id={self.cliente_id}, total={self.precio_total}, tipo_pago='{self.tipo_pago}', estado='{self.estado}')>"
