# File: invento/models/inventory.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    ForeignKeyConstraint,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from invento.models.base import Base, TimestampMixin

# Upper bound of the 32-bit Integer quantity column
MAX_QUANTITY = 2_147_483_647


class InventoryRecord(TimestampMixin, Base):
    __tablename__ = "inventory"

    # (tenant_id, product_id, location) is the primary key
    tenant_id = Column(
        String(64),
        ForeignKey("tenants.tenant_id", ondelete="CASCADE"),
        primary_key=True,
    )
    product_id = Column(Integer, primary_key=True)
    location = Column(String(255), primary_key=True)
    quantity = Column(Integer, nullable=False, default=0)
    capacity = Column(Integer, nullable=True)

    product = relationship("Product", viewonly=True, lazy="joined")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        ForeignKeyConstraint(
            ["tenant_id", "product_id"],
            ["products.tenant_id", "products.product_id"],
            ondelete="CASCADE",
            name="fk_inventory_product_same_tenant",
        ),
    )
