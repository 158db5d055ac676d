# File: invento/schemas/tenant.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TenantBase(BaseModel):
    tenant_id: str
    org_name: str


class TenantCreate(TenantBase):
    active: bool = True


class Tenant(TenantBase):
    active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
