from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from .. import config

CENTAVO = Decimal('0.01')


def redondear(monto: Union[Decimal, int, float, str]) -> Decimal:
    """Redondea a dos decimales (mitad hacia arriba)."""
    return Decimal(str(monto)).quantize(CENTAVO, rounding=ROUND_HALF_UP)


def formato_moneda(monto: Union[Decimal, int, float, str, None]) -> str:
    """
    Formatea un monto con la moneda configurada del despliegue.

    Ejemplo con la configuración por defecto (BOB): 120000.5 -> "Bs. 120.000,50"
    """
    valor = redondear(monto or 0)
    signo = "-" if valor < 0 else ""
    entero, decimales = f"{abs(valor):,.2f}".split(".")
    entero = entero.replace(",", config.MONEDA_SEPARADOR_MILES)
    return f"{signo}{config.MONEDA_SIMBOLO} {entero}{config.MONEDA_SEPARADOR_DECIMAL}{decimales}"
