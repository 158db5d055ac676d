# File: invento/schemas/dashboard.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from invento.schemas.inventory import InventoryRecord


class DashboardStats(BaseModel):
    totalProducts: int = 0
    totalQuantity: int = 0
    lowStock: int = 0
    outOfStock: int = 0
    totalValue: Decimal = Decimal("0.00")
    recentSales: int = 0
    totalUsers: int = 0
    totalCategories: int = 0
    totalSuppliers: int = 0


class TopProduct(BaseModel):
    product_id: int
    name: Optional[str] = None
    brand: Optional[str] = None
    totalSold: int


class CategoryStats(BaseModel):
    category_id: int
    name: str
    productCount: int
    totalValue: Decimal


class CategoryShare(BaseModel):
    category: str
    count: int


class RecentActivity(BaseModel):
    product_id: int
    name: str
    brand: str
    updated_at: datetime

    class Config:
        from_attributes = True


class StockAlerts(BaseModel):
    threshold: int
    lowStock: List[InventoryRecord]
    outOfStock: List[InventoryRecord]
