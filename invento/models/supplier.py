# File: invento/models/supplier.py
from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from invento.models.base import Base, TenantScopedMixin, TimestampMixin


class Supplier(TenantScopedMixin, TimestampMixin, Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_suppliers_tenant_name"),
        UniqueConstraint("tenant_id", "id", name="uq_suppliers_tenant_id"),
    )
