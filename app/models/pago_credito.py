# backEnd/app/models/pago_credito.py
from sqlalchemy import Column, Integer, DECIMAL, Date, DateTime, ForeignKey, Enum, CheckConstraint, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base
from .enums import EstadoCuotaEnum


class PagoCredito(Base):
    """Una cuota del plan de pagos de una venta a crédito."""
    __tablename__ = "pagos_credito"

    pago_id = Column(Integer, primary_key=True, index=True)
    venta_id = Column(Integer, ForeignKey("ventas.venta_id", ondelete="CASCADE"), nullable=False, index=True)
    numero_cuota = Column(Integer, nullable=False)
    monto_cuota = Column(DECIMAL(12, 2), nullable=False)
    monto_capital = Column(DECIMAL(12, 2), nullable=False)
    interes_aplicado = Column(DECIMAL(12, 2), nullable=True)
    fecha_vencimiento = Column(Date, nullable=False, index=True)
    estado = Column(Enum(EstadoCuotaEnum), default=EstadoCuotaEnum.pendiente, nullable=False, index=True)
    fecha_pago = Column(DateTime, nullable=True, index=True)
    monto_pagado = Column(DECIMAL(12, 2), nullable=True)

    # Un plan se genera una sola vez: dos cuotas con el mismo número en una venta es un conflicto
    __table_args__ = (
        UniqueConstraint('venta_id', 'numero_cuota', name='uq_pago_credito_venta_numero'),
        CheckConstraint('numero_cuota >= 1', name='chk_numero_cuota_positivo'),
        CheckConstraint('monto_cuota >= 0', name='chk_monto_cuota_no_negativo'),
    )

    venta = relationship("Venta", back_populates="cuotas")

    def __repr__(self):
        return f"<PagoCredito(id={self.pago_id}, venta_id={self.venta_id}, cuota={self.numero_cuota}, estado='{self.estado}')>"
