#aqui se el __init__.py para importar las clases y funciones necesarias
from .base import Base
from .enums import (
    EstadoEnum, RolEnum, TipoTerrenoEnum, EstadoTerrenoEnum, TipoPagoEnum,
    EstadoVentaEnum, EstadoCuotaEnum, EstadoCuotaVisibleEnum,
)
from .usuario import Usuario
from .cliente import Cliente
from .cliente_historial import ClienteHistorial
from .terreno import Terreno
from .venta import Venta
from .pago_credito import PagoCredito # Cuotas del plan de crédito
from .audit_log import AuditLog
