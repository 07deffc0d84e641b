from typing import Optional
from datetime import datetime

from pizzeria.schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: str
    password: str


class AdminUserRead(CamelModel):
    id: int
    username: str
    last_login: Optional[datetime] = None
