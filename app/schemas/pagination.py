# backEnd/app/schemas/pagination.py
from typing import Generic, List, TypeVar
from pydantic import BaseModel

T = TypeVar('T')


class Pagination(BaseModel, Generic[T]):
    """Respuesta de listados paginados: la página pedida y el total sin paginar."""
    items: List[T]
    total: int

    class Config:
        from_attributes = True
