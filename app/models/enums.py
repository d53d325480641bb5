from enum import Enum


class EstadoEnum(str, Enum):
    activo = "activo"
    inactivo = "inactivo"


class RolEnum(str, Enum):
    administrador = "Administrador"
    empleado = "Empleado"


class TipoTerrenoEnum(str, Enum):
    nicho = "nicho"
    boveda = "boveda"
    mausoleo = "mausoleo"


class EstadoTerrenoEnum(str, Enum):
    disponible = "disponible"
    vendido = "vendido"
    reservado = "reservado"


class TipoPagoEnum(str, Enum):
    contado = "contado"
    credito = "credito"


class EstadoVentaEnum(str, Enum):
    activa = "activa"
    pagada = "pagada"
    cancelada = "cancelada"


class EstadoCuotaEnum(str, Enum):
    pendiente = "pendiente"
    pagado = "pagado"


class EstadoCuotaVisibleEnum(str, Enum):
    """Estado que se muestra al usuario: depende también de la fecha de vencimiento."""
    pagado = "Pagado"
    vencido = "Vencido"
    pendiente = "Pendiente"
