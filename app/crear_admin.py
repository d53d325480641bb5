# backEnd/app/crear_admin.py
"""
Crea el primer usuario Administrador.

Uso:
    python -m app.crear_admin <nombre_usuario> <contraseña>
"""
import logging
import sys

from app import config
from app.database import SessionLocal, engine
from app.auth import get_password_hash
from app.models import Base, Usuario, RolEnum, EstadoEnum

logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
logger = logging.getLogger(__name__)


def crear_admin(db, nombre_usuario: str, password: str) -> Usuario:
    existente = db.query(Usuario).filter(Usuario.nombre_usuario == nombre_usuario).first()
    if existente:
        logger.info(f"El usuario '{nombre_usuario}' ya existe (rol {existente.rol.value})")
        return existente
    admin = Usuario(
        nombre_usuario=nombre_usuario,
        contraseña=get_password_hash(password),
        rol=RolEnum.administrador,
        estado=EstadoEnum.activo,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(f"Administrador '{nombre_usuario}' creado con ID {admin.usuario_id}")
    return admin


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        crear_admin(db, sys.argv[1], sys.argv[2])
    finally:
        db.close()
