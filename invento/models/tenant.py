# File: invento/models/tenant.py
from sqlalchemy import Boolean, Column, DateTime, String

from invento.models.base import Base, utcnow


class Tenant(Base):
    __tablename__ = "tenants"

    tenant_id = Column(String(64), primary_key=True)
    org_name = Column(String(255), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
