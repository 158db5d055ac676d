# File: invento/models/product.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKeyConstraint,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from invento.models.base import Base, TenantScopedMixin, TimestampMixin


class Product(TenantScopedMixin, TimestampMixin, Base):
    __tablename__ = "products"

    product_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False)
    purchase_price = Column(Numeric(12, 4), nullable=False)
    mrp = Column(Numeric(12, 4), nullable=False)
    category_id = Column(Integer, nullable=True, index=True)
    supplier_id = Column(Integer, nullable=True, index=True)
    dimensions = Column(String(255), nullable=True)
    image_url = Column(String(500), nullable=True)

    # Read-only; the ids are written directly so tenant_id is never copied across
    category = relationship("Category", viewonly=True, lazy="joined")
    supplier = relationship("Supplier", viewonly=True, lazy="joined")

    __table_args__ = (
        CheckConstraint("purchase_price >= 0", name="ck_products_purchase_price_non_negative"),
        CheckConstraint("mrp >= 0", name="ck_products_mrp_non_negative"),
        UniqueConstraint("tenant_id", "product_id", name="uq_products_tenant_id"),
        # A NULL category_id/supplier_id skips the check (MATCH SIMPLE)
        ForeignKeyConstraint(
            ["tenant_id", "category_id"],
            ["categories.tenant_id", "categories.id"],
            name="fk_products_category_same_tenant",
        ),
        ForeignKeyConstraint(
            ["tenant_id", "supplier_id"],
            ["suppliers.tenant_id", "suppliers.id"],
            name="fk_products_supplier_same_tenant",
        ),
    )
