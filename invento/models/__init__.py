from .base import Base, TenantScopedMixin, TimestampMixin
from .tenant import Tenant
from .category import Category
from .supplier import Supplier
from .product import Product
from .inventory import InventoryRecord
from .sale import Sale
from .user import User, UserRole

__all__ = [
    "Base", "TenantScopedMixin", "TimestampMixin", "Tenant", "Category",
    "Supplier", "Product", "InventoryRecord", "Sale", "User", "UserRole",
]
