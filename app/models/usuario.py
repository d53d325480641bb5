# backEnd/app/models/usuario.py

from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from .base import Base
from .enums import EstadoEnum, RolEnum


class Usuario(Base):
    __tablename__ = 'usuarios'

    usuario_id = Column(Integer, primary_key=True, index=True)
    nombre_usuario = Column(String(50), unique=True, nullable=False, index=True)
    contraseña = Column(String(255), nullable=False) # Almacenar el hash aquí
    rol = Column(Enum(RolEnum), default=RolEnum.empleado, nullable=False)
    estado = Column(Enum(EstadoEnum), default=EstadoEnum.activo, nullable=False)

    fecha_creacion = Column(DateTime, default=func.now(), nullable=True)
    fecha_modificacion = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=True)

    def __repr__(self):
        return f"<Usuario(id={self.usuario_id}, nombre_usuario='{self.nombre_usuario}', rol='{self.rol}')>"
