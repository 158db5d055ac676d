# File: invento/schemas/product.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class ProductBase(BaseModel):
    name: str = Field(..., max_length=255)
    brand: str = Field(..., max_length=255)
    purchase_price: Decimal = Field(..., ge=0)
    mrp: Decimal = Field(..., ge=0)
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    dimensions: Optional[str] = None
    image_url: Optional[str] = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=255)
    brand: Optional[str] = Field(None, max_length=255)
    purchase_price: Optional[Decimal] = Field(None, ge=0)
    mrp: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    dimensions: Optional[str] = None
    image_url: Optional[str] = None


class ProductFilter(BaseModel):
    search: Optional[str] = None
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None


class ProductSummary(BaseModel):
    """Product columns embedded in inventory responses."""

    name: str
    brand: str
    purchase_price: Decimal
    mrp: Decimal

    class Config:
        from_attributes = True


class Product(ProductBase):
    product_id: int
    tenant_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
