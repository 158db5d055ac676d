# File: invento/schemas/sale.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from invento.models.inventory import MAX_QUANTITY


class SaleCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    selling_price: Decimal = Field(..., ge=0)
    # When set, stock at this location is decremented in the same transaction
    location: Optional[str] = Field(None, max_length=255)


class Sale(BaseModel):
    sale_id: int
    tenant_id: str
    product_id: int
    quantity: int
    selling_price: Decimal
    location: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
