# backEnd/app/models/cliente.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from .base import Base


class Cliente(Base):
    __tablename__ = "clientes"

    cliente_id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    # La unicidad de la cédula se valida solo entre clientes activos (regla de negocio)
    cedula = Column(String(20), nullable=False, index=True)
    telefono = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    direccion = Column(Text, nullable=True)
    activo = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=True)

    ventas = relationship("Venta", back_populates="cliente")

    def __repr__(self):
        return f"<Cliente(id={self.cliente_id}, nombre='{self.nombre} {self.apellido}', activo={self.activo})>"
