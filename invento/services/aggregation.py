# File: invento/services/aggregation.py
"""
Read-only dashboard metrics for one tenant.

Every table touched, including each side of a join, is filtered by the
caller's tenant_id. Money is accumulated as Decimal and rounded once, to
the cent, on the way out.
"""
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from invento.core.config import settings
from invento.core.exceptions import InvalidInput, NotFound
from invento.core.tenancy import TenantContext
from invento.crud.base import storage_guard
from invento.crud.inventory import inventory as inventory_crud
from invento.models.base import utcnow
from invento.models.category import Category
from invento.models.inventory import InventoryRecord
from invento.models.product import Product
from invento.models.sale import Sale
from invento.models.supplier import Supplier
from invento.models.user import User
from invento.schemas.dashboard import (
    CategoryShare,
    CategoryStats,
    DashboardStats,
    RecentActivity,
    StockAlerts,
    TopProduct,
)
from invento.schemas.inventory import InventoryRecord as InventoryRecordSchema

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_value(rows: Iterable[Tuple[int, Decimal]]) -> Decimal:
    total = Decimal("0")
    for quantity, price in rows:
        total += Decimal(quantity or 0) * Decimal(price or 0)
    return total


def _count(db: Session, stmt) -> int:
    return db.execute(stmt).scalar() or 0


def _stock_value_rows(db: Session, tenant_id: str, *criteria):
    stmt = (
        select(InventoryRecord.quantity, Product.purchase_price)
        .join(
            Product,
            and_(
                Product.tenant_id == InventoryRecord.tenant_id,
                Product.product_id == InventoryRecord.product_id,
            ),
        )
        .where(
            InventoryRecord.tenant_id == tenant_id,
            Product.tenant_id == tenant_id,
            *criteria,
        )
    )
    return db.execute(stmt).all()


def dashboard_stats(
    db: Session, *, tenant: TenantContext, now: Optional[datetime] = None
) -> DashboardStats:
    tenant_id = tenant.tenant_id
    threshold = settings.LOW_STOCK_THRESHOLD
    now = now or utcnow()
    window_start = now - timedelta(days=settings.RECENT_SALES_DAYS)

    with storage_guard(db, "dashboard stats"):
        total_products = _count(
            db, select(func.count()).select_from(Product).where(Product.tenant_id == tenant_id)
        )
        total_quantity = _count(
            db,
            select(func.coalesce(func.sum(InventoryRecord.quantity), 0)).where(
                InventoryRecord.tenant_id == tenant_id
            ),
        )
        low_stock = _count(
            db,
            select(func.count())
            .select_from(InventoryRecord)
            .where(
                InventoryRecord.tenant_id == tenant_id,
                InventoryRecord.quantity > 0,
                InventoryRecord.quantity < threshold,
            ),
        )
        out_of_stock = _count(
            db,
            select(func.count())
            .select_from(InventoryRecord)
            .where(InventoryRecord.tenant_id == tenant_id, InventoryRecord.quantity == 0),
        )
        recent_sales = _count(
            db,
            select(func.count())
            .select_from(Sale)
            .where(
                Sale.tenant_id == tenant_id,
                Sale.created_at >= window_start,
                Sale.created_at < now,
            ),
        )
        total_users = _count(
            db, select(func.count()).select_from(User).where(User.tenant_id == tenant_id)
        )
        total_categories = _count(
            db, select(func.count()).select_from(Category).where(Category.tenant_id == tenant_id)
        )
        total_suppliers = _count(
            db, select(func.count()).select_from(Supplier).where(Supplier.tenant_id == tenant_id)
        )
        total_value = sum_value(_stock_value_rows(db, tenant_id))

    return DashboardStats(
        totalProducts=total_products,
        totalQuantity=total_quantity,
        lowStock=low_stock,
        outOfStock=out_of_stock,
        totalValue=round_money(total_value),
        recentSales=recent_sales,
        totalUsers=total_users,
        totalCategories=total_categories,
        totalSuppliers=total_suppliers,
    )


def top_products(db: Session, *, tenant: TenantContext, limit: int) -> List[TopProduct]:
    """Best sellers by quantity; ties go to the lower product_id."""
    if limit < 1:
        raise InvalidInput("limit must be positive")

    tenant_id = tenant.tenant_id
    total_sold = func.sum(Sale.quantity).label("total_sold")
    stmt = (
        select(Sale.product_id, total_sold, Product.name, Product.brand)
        .outerjoin(
            Product,
            and_(Product.tenant_id == tenant_id, Product.product_id == Sale.product_id),
        )
        .where(Sale.tenant_id == tenant_id)
        .group_by(Sale.product_id, Product.name, Product.brand)
        .order_by(total_sold.desc(), Sale.product_id.asc())
        .limit(limit)
    )
    with storage_guard(db, "top products"):
        rows = db.execute(stmt).all()

    return [
        TopProduct(product_id=product_id, name=name, brand=brand, totalSold=int(sold))
        for product_id, sold, name, brand in rows
    ]


def category_stats(db: Session, *, tenant: TenantContext, category_id: int) -> CategoryStats:
    tenant_id = tenant.tenant_id
    with storage_guard(db, "category stats"):
        category = (
            db.query(Category)
            .filter(Category.tenant_id == tenant_id, Category.id == category_id)
            .first()
        )
        if category is None:
            raise NotFound("Category not found")

        product_count = _count(
            db,
            select(func.count())
            .select_from(Product)
            .where(Product.tenant_id == tenant_id, Product.category_id == category_id),
        )
        stmt = (
            select(InventoryRecord.quantity, Product.purchase_price)
            .join(
                Product,
                and_(
                    Product.tenant_id == InventoryRecord.tenant_id,
                    Product.product_id == InventoryRecord.product_id,
                ),
            )
            .join(
                Category,
                and_(Category.tenant_id == Product.tenant_id, Category.id == Product.category_id),
            )
            .where(
                InventoryRecord.tenant_id == tenant_id,
                Product.tenant_id == tenant_id,
                Category.tenant_id == tenant_id,
                Category.id == category_id,
            )
        )
        total_value = sum_value(db.execute(stmt).all())

    return CategoryStats(
        category_id=category.id,
        name=category.name,
        productCount=product_count,
        totalValue=round_money(total_value),
    )


def stock_alerts(db: Session, *, tenant: TenantContext, threshold: Optional[int] = None) -> StockAlerts:
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    with storage_guard(db, "stock alerts"):
        low = [
            record
            for record in inventory_crud.iter_low_stock(db, tenant=tenant, threshold=threshold)
            if record.quantity > 0
        ]
        out = (
            db.query(InventoryRecord)
            .filter(InventoryRecord.tenant_id == tenant.tenant_id, InventoryRecord.quantity == 0)
            .order_by(InventoryRecord.updated_at.desc(), InventoryRecord.product_id.asc())
            .all()
        )

    return StockAlerts(
        threshold=threshold,
        lowStock=[InventoryRecordSchema.model_validate(record) for record in low],
        outOfStock=[InventoryRecordSchema.model_validate(record) for record in out],
    )


def category_distribution(db: Session, *, tenant: TenantContext) -> List[CategoryShare]:
    tenant_id = tenant.tenant_id
    stmt = (
        select(Category.name, func.count(Product.product_id))
        .select_from(Product)
        .outerjoin(
            Category,
            and_(Category.tenant_id == tenant_id, Category.id == Product.category_id),
        )
        .where(Product.tenant_id == tenant_id)
        .group_by(Category.name)
    )
    with storage_guard(db, "category distribution"):
        rows = db.execute(stmt).all()

    shares = [CategoryShare(category=name or "Uncategorized", count=count) for name, count in rows]
    return sorted(shares, key=lambda share: (-share.count, share.category))


def recent_activity(db: Session, *, tenant: TenantContext, limit: int = 10) -> List[RecentActivity]:
    if limit < 1:
        raise InvalidInput("limit must be positive")
    with storage_guard(db, "recent activity"):
        products = (
            db.query(Product)
            .filter(Product.tenant_id == tenant.tenant_id)
            .order_by(Product.updated_at.desc(), Product.product_id.desc())
            .limit(limit)
            .all()
        )
    return [RecentActivity.model_validate(product) for product in products]
