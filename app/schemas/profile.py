from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel

class ProfileResponse(CamelModel):
    user_name: str
    email: str
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None

class ProfileUpdate(CamelModel):
    current_weight: Optional[float] = Field(default=None, ge=0)
    target_weight: Optional[float] = Field(default=None, ge=0)

class ProfileUpdateResponse(CamelModel):
    message: str
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None
