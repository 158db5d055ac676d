# File: invento/models/sale.py
from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String

from invento.models.base import Base, TenantScopedMixin, utcnow


class Sale(TenantScopedMixin, Base):
    """Append-only sale line. product_id is kept after the product is deleted."""

    __tablename__ = "sales"

    sale_id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    selling_price = Column(Numeric(12, 4), nullable=False)
    location = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_sales_quantity_positive"),
        CheckConstraint("selling_price >= 0", name="ck_sales_selling_price_non_negative"),
    )
