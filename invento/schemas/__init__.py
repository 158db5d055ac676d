# File: invento/schemas/__init__.py
from .common import (
    DataResponse, ListResponse, Message, Page, PageParams, Pagination, pagination_of,
)
from .tenant import Tenant, TenantCreate
from .category import Category, CategoryCreate, CategoryUpdate
from .supplier import Supplier, SupplierCreate, SupplierUpdate
from .product import (
    Product, ProductCreate, ProductFilter, ProductSummary, ProductUpdate,
)
from .inventory import (
    InventoryCreate, InventoryRecord, QuantityMutation, QuantityOperation,
)
from .sale import Sale, SaleCreate
from .user import User, UserCreate
from .dashboard import (
    CategoryShare, CategoryStats, DashboardStats, RecentActivity, StockAlerts, TopProduct,
)
