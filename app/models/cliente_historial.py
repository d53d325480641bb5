# backEnd/app/models/cliente_historial.py
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from .base import Base


class ClienteHistorial(Base):
    """Copia inmutable de un cliente al momento de eliminarlo."""
    __tablename__ = "clientes_historial"

    historial_id = Column(Integer, primary_key=True, index=True)
    cliente_id_original = Column(Integer, nullable=False, index=True)
    nombre = Column(String(100), nullable=False)
    apellido = Column(String(100), nullable=False)
    cedula = Column(String(20), nullable=False)
    telefono = Column(String(20), nullable=True)
    email = Column(String(100), nullable=True)
    direccion = Column(Text, nullable=True)
    fecha_registro = Column(DateTime, nullable=True)
    fecha_eliminacion = Column(DateTime, default=func.now(), nullable=False, index=True)
    motivo_eliminacion = Column(Text, nullable=False)

    def __repr__(self):
        return f"<ClienteHistorial(id={self.historial_id}, cliente_id_original={self.cliente_id_original})>"
