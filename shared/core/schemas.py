from pydantic import BaseModel
from typing import Optional


class UserToken(BaseModel):
    user_id: str
    email: str
    role: str
    name: Optional[str] = None
    exp: Optional[int] = None


class ErrorResult(BaseModel):
    error: str
    kind: str
