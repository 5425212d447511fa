from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional

from app.schemas.base import CamelModel

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserRegister(CamelModel):
    user_name: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6)
    current_weight: Optional[float] = Field(default=None, ge=0)
    target_weight: Optional[float] = Field(default=None, ge=0)

    @field_validator("user_name", mode="before")
    @classmethod
    def strip_user_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

class AuthResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str

class RefreshTokenRequest(CamelModel):
    refresh_token: str
