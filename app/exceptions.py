# backEnd/app/exceptions.py
"""
Errores de negocio del sistema.

Cada error lleva el código HTTP con el que se responde y si el usuario puede
reintentar la misma acción sin cambios. Los servicios los lanzan y el manejador
registrado en main.py los convierte en respuesta JSON.
"""
from fastapi import status


class ErrorNegocio(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    codigo = "error_negocio"
    reintentable = False

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"detail": self.detail, "codigo": self.codigo, "reintentable": self.reintentable}


class ErrorValidacion(ErrorNegocio):
    """Datos mal formados o fuera de rango. Se rechaza antes de escribir."""
    status_code = status.HTTP_400_BAD_REQUEST
    codigo = "validacion"


class ErrorNoEncontrado(ErrorNegocio):
    status_code = status.HTTP_404_NOT_FOUND
    codigo = "no_encontrado"


class ErrorConflicto(ErrorNegocio):
    """Violación de una regla de negocio (plan duplicado, terreno vendido, etc.)."""
    status_code = status.HTTP_409_CONFLICT
    codigo = "conflicto"


class ErrorTransitorio(ErrorNegocio):
    """Falla de conexión o del motor de base de datos."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    codigo = "transitorio"
    reintentable = True
