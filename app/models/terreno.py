# backEnd/app/models/terreno.py
from sqlalchemy import Column, Integer, String, Text, DECIMAL, DateTime, Enum, CheckConstraint, UniqueConstraint, func
from sqlalchemy.orm import relationship

from .base import Base
from .enums import TipoTerrenoEnum, EstadoTerrenoEnum


class Terreno(Base):
    __tablename__ = "terrenos"

    terreno_id = Column(Integer, primary_key=True, index=True)
    numero_lote = Column(String(20), nullable=False)
    seccion = Column(String(20), nullable=False)
    manzana = Column(String(20), nullable=False)
    precio = Column(DECIMAL(12, 2), nullable=False)
    tipo = Column(Enum(TipoTerrenoEnum), nullable=False)
    estado = Column(Enum(EstadoTerrenoEnum), default=EstadoTerrenoEnum.disponible, nullable=False, index=True)
    dimensiones = Column(String(50), nullable=True)
    descripcion = Column(Text, nullable=True)

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=True)

    __table_args__ = (
        UniqueConstraint('seccion', 'manzana', 'numero_lote', name='uq_terreno_ubicacion'),
        CheckConstraint('precio >= 0', name='chk_precio_terreno_no_negativo'),
    )

    ventas = relationship("Venta", back_populates="terreno")

    @property
    def ubicacion(self) -> str:
        return f"{self.seccion}-{self.manzana}-{self.numero_lote}"

    def __repr__(self):
        return f"<Terreno(id={self.terreno_id}, ubicacion='{self.ubicacion}', estado='{self.estado}')>"
