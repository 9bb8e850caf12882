from pydantic import BaseModel, EmailStr
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class MagicLinkRequest(BaseModel):
    email: EmailStr
    return_to: Optional[str] = "/identity"


class MagicLinkResponse(BaseModel):
    email: str
    message: str
