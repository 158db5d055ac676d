# File: invento/models/category.py
from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from invento.models.base import Base, TenantScopedMixin, TimestampMixin


class Category(TenantScopedMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_categories_tenant_name"),
        # Target of the tenant-aware product foreign key
        UniqueConstraint("tenant_id", "id", name="uq_categories_tenant_id"),
    )
