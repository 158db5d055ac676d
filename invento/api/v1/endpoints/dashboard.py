# File: invento/api/v1/endpoints/dashboard.py
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from invento import schemas
from invento.core import deps
from invento.core.config import settings
from invento.core.tenancy import TenantContext
from invento.db.database import get_db
from invento.services import aggregation

router = APIRouter()


@router.get("/stats", response_model=schemas.DataResponse[schemas.DashboardStats])
def get_dashboard_stats(
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get dashboard statistics"""
    return {"success": True, "data": aggregation.dashboard_stats(db, tenant=tenant)}


@router.get("/top-products", response_model=schemas.DataResponse[List[schemas.TopProduct]])
def get_top_products(
    limit: int = Query(settings.TOP_PRODUCTS_DEFAULT, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get best-selling products by units sold"""
    return {"success": True, "data": aggregation.top_products(db, tenant=tenant, limit=limit)}


@router.get("/categories/{category_id}/stats", response_model=schemas.DataResponse[schemas.CategoryStats])
def get_category_stats(
    category_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    return {"success": True, "data": aggregation.category_stats(db, tenant=tenant, category_id=category_id)}


@router.get("/alerts", response_model=schemas.DataResponse[schemas.StockAlerts])
def get_stock_alerts(
    threshold: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get low stock and out of stock inventory"""
    return {"success": True, "data": aggregation.stock_alerts(db, tenant=tenant, threshold=threshold)}


@router.get("/category-distribution", response_model=schemas.DataResponse[List[schemas.CategoryShare]])
def get_category_distribution(
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    return {"success": True, "data": aggregation.category_distribution(db, tenant=tenant)}


@router.get("/recent-activity", response_model=schemas.DataResponse[List[schemas.RecentActivity]])
def get_recent_activity(
    limit: int = Query(10, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get recently updated products"""
    return {"success": True, "data": aggregation.recent_activity(db, tenant=tenant, limit=limit)}
