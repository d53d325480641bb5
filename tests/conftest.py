"""
Configuración global para todas las pruebas pytest
"""
import os

# La app crea tablas al importarse: apuntarla a SQLite en memoria antes de importarla
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.auth import get_current_active_user
from app.main import app
from app.models.base import Base
from app.models.usuario import Usuario as DBUsuario
from app.models.cliente import Cliente as DBCliente
from app.models.terreno import Terreno as DBTerreno
from app.models.venta import Venta as DBVenta
from app.models.enums import (
    RolEnum, EstadoEnum, TipoTerrenoEnum, EstadoTerrenoEnum, TipoPagoEnum, EstadoVentaEnum
)

# Base de datos SQLite en memoria: una sola conexión compartida por la sesión y el TestClient
SQLALCHEMY_DATABASE_URL = "sqlite://"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

FECHA_VENTA = datetime(2025, 1, 15, 10, 30)


@pytest.fixture
def db_session():
    """
    Crea las tablas vacías para cada test y las elimina al final.
    Los servicios hacen commit, por eso no se usa rollback de una transacción externa.
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def admin_user(db_session):
    """Usuario Administrador real en la BD (para creado_por y auditoría)."""
    user = DBUsuario(
        nombre_usuario="admin",
        contraseña="no-se-usa-en-tests",
        rol=RolEnum.administrador,
        estado=EstadoEnum.activo,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def client(db_session, admin_user):
    """
    Cliente HTTP de pruebas con la base de datos de test y el usuario autenticado mockeado.
    """
    def get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = get_test_db
    app.dependency_overrides[get_current_active_user] = lambda: admin_user

    with TestClient(app) as client:
        yield client

    # Limpiar overrides después del test
    app.dependency_overrides.clear()


@pytest.fixture
def mock_user():
    """
    Usuario mockeado para llamar directamente a las funciones de las rutas.
    """
    user = MagicMock()
    user.usuario_id = None
    user.nombre_usuario = "tester"
    user.rol = RolEnum.administrador
    user.estado = EstadoEnum.activo
    return user


@pytest.fixture
def create_test_cliente(db_session):
    """
    Factory function para crear clientes de prueba en la BD.
    """
    def _create_cliente(nombre="Juan", apellido="Pérez", cedula="1234567", activo=True, **extra):
        cliente = DBCliente(
            nombre=nombre,
            apellido=apellido,
            cedula=cedula,
            activo=activo,
            **extra
        )
        db_session.add(cliente)
        db_session.commit()
        db_session.refresh(cliente)
        return cliente

    return _create_cliente


@pytest.fixture
def create_test_terreno(db_session):
    """
    Factory function para crear terrenos de prueba en la BD.
    """
    def _create_terreno(numero_lote="1", seccion="A", manzana="1", precio=Decimal("120000.00"),
                        tipo=TipoTerrenoEnum.nicho, estado=EstadoTerrenoEnum.disponible):
        terreno = DBTerreno(
            numero_lote=numero_lote,
            seccion=seccion,
            manzana=manzana,
            precio=precio,
            tipo=tipo,
            estado=estado,
        )
        db_session.add(terreno)
        db_session.commit()
        db_session.refresh(terreno)
        return terreno

    return _create_terreno


@pytest.fixture
def create_test_venta(db_session, create_test_cliente, create_test_terreno):
    """
    Factory function para crear ventas directamente en la BD (sin plan de cuotas).
    Crea cliente y terreno si no se pasan.
    """
    contador = {"n": 0}

    def _create_venta(cliente=None, terreno=None, tipo_pago=TipoPagoEnum.credito, precio_total=None,
                      fecha_venta=FECHA_VENTA, estado=EstadoVentaEnum.activa):
        contador["n"] += 1
        if cliente is None:
            cliente = create_test_cliente(cedula=f"CI-{contador['n']}")
        if terreno is None:
            terreno = create_test_terreno(numero_lote=f"V{contador['n']}")
        venta = DBVenta(
            cliente_id=cliente.cliente_id,
            terreno_id=terreno.terreno_id,
            precio_total=precio_total if precio_total is not None else terreno.precio,
            tipo_pago=tipo_pago,
            fecha_venta=fecha_venta,
            estado=estado,
        )
        terreno.estado = EstadoTerrenoEnum.vendido
        db_session.add(venta)
        db_session.commit()
        db_session.refresh(venta)
        return venta

    return _create_venta
