from datetime import date, datetime
from typing import Tuple

from dateutil.relativedelta import relativedelta

MESES_LABEL = {
    1: 'Enero', 2: 'Febrero', 3: 'Marzo', 4: 'Abril', 5: 'Mayo',
    6: 'Junio', 7: 'Julio', 8: 'Agosto', 9: 'Septiembre',
    10: 'Octubre', 11: 'Noviembre', 12: 'Diciembre'
}


def rango_mes(anio: int, mes: int) -> Tuple[datetime, datetime]:
    """
    Intervalo semiabierto [primer día del mes, primer día del mes siguiente).
    Ej: rango_mes(2024, 12) -> (2024-12-01 00:00, 2025-01-01 00:00)
    """
    if not 1 <= mes <= 12:
        raise ValueError(f"Mes inválido: {mes}")
    inicio = datetime(anio, mes, 1)
    return inicio, inicio + relativedelta(months=1)


def sumar_meses(base: date, meses: int) -> date:
    """Suma meses a una fecha; si el día no existe en el mes destino se usa el último día."""
    return base + relativedelta(months=meses)


def etiqueta_mes(anio: int, mes: int) -> str:
    return f"{MESES_LABEL[mes]} {anio}"
