from datetime import datetime
from typing import Optional

from pydantic import EmailStr

from app.schemas.base import CamelModel

class UserRead(CamelModel):
    id: int
    user_name: str
    email: EmailStr
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None
    created_at: Optional[datetime] = None

class UserShort(CamelModel):
    id: int
    user_name: str
    email: str
