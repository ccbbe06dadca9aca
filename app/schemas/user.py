from pydantic import BaseModel
from typing import Optional


class Credentials(BaseModel):
    """Body of both register and login; presence is checked by the handlers."""
    username: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    message: str
    userId: str


class LoginResponse(BaseModel):
    message: str
    token: str
