# File: invento/schemas/inventory.py
from enum import Enum
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field

from invento.models.inventory import MAX_QUANTITY
from invento.schemas.product import ProductSummary


class QuantityOperation(str, Enum):
    SET = "set"
    ADD = "add"
    SUBTRACT = "subtract"


class InventoryCreate(BaseModel):
    product_id: int
    location: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=0, le=MAX_QUANTITY)
    capacity: Optional[int] = Field(None, ge=0, le=MAX_QUANTITY)


class QuantityMutation(BaseModel):
    quantity: int = Field(..., le=MAX_QUANTITY)
    operation: QuantityOperation = QuantityOperation.SET
    capacity: Optional[int] = Field(None, ge=0, le=MAX_QUANTITY)


class InventoryRecord(BaseModel):
    tenant_id: str
    product_id: int
    location: str
    quantity: int
    capacity: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    products: Optional[ProductSummary] = Field(None, validation_alias="product")

    class Config:
        from_attributes = True
        populate_by_name = True
