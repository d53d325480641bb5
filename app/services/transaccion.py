# backEnd/app/services/transaccion.py
import logging
from contextlib import contextmanager

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, OperationalError, InterfaceError

from ..exceptions import ErrorNegocio, ErrorConflicto, ErrorTransitorio

logger = logging.getLogger(__name__)


@contextmanager
def transaccion(db: Session, accion: str):
    """
    Ejecuta el bloque como una sola transacción: commit al final o rollback completo.

    Traduce los errores del motor a errores de negocio:
    - IntegrityError (restricción única/FK/check) -> ErrorConflicto
    - OperationalError / InterfaceError (conexión) -> ErrorTransitorio
    Cualquier otro error se registra y se propaga sin cambios.
    """
    try:
        yield
        db.commit()
    except ErrorNegocio as e:
        db.rollback()
        logger.info(f"No se pudo {accion}: {e.detail}")
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Conflicto de integridad al {accion}: {e.orig}")
        raise ErrorConflicto(
            f"No se pudo {accion}: los datos entran en conflicto con registros existentes."
        ) from e
    except (OperationalError, InterfaceError) as e:
        db.rollback()
        logger.error(f"Base de datos no disponible al {accion}: {e}")
        raise ErrorTransitorio(
            f"No se pudo {accion}: la base de datos no está disponible. Intente nuevamente."
        ) from e
    except Exception:
        db.rollback()
        logger.exception(f"Error inesperado al {accion}")
        raise
