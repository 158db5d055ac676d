# File: invento/schemas/user.py
from pydantic import BaseModel, Field
from datetime import datetime

from invento.models.user import UserRole


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    role: UserRole = UserRole.STAFF


class User(BaseModel):
    user_id: int
    tenant_id: str
    name: str
    email: str
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True
