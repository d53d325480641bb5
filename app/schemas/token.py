# backEnd/app/schemas/token.py
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    username: Optional[str] = None
    rol: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
