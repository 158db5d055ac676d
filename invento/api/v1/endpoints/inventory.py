# File: invento/api/v1/endpoints/inventory.py
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.config import settings
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


@router.get("/", response_model=schemas.ListResponse[schemas.InventoryRecord])
def list_inventory(
    search: Optional[str] = None,
    location: Optional[str] = None,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get all inventory for a tenant"""
    items, total = crud.inventory.list(db, tenant=tenant, params=params, search=search, location=location)
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}


@router.get("/product/{product_id}", response_model=schemas.DataResponse[List[schemas.InventoryRecord]])
def get_product_inventory(
    product_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get inventory for specific product"""
    return {"success": True, "data": crud.inventory.list_for_product(db, tenant=tenant, product_id=product_id)}


@router.get("/alerts/low-stock")
def get_low_stock(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, ge=0),
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get low stock alerts"""
    records = [
        schemas.InventoryRecord.model_validate(record)
        for record in crud.inventory.iter_low_stock(db, tenant=tenant, threshold=threshold)
    ]
    return {"success": True, "data": records, "count": len(records), "threshold": threshold}


@router.get("/{product_id}/{location}", response_model=schemas.DataResponse[schemas.InventoryRecord])
def get_inventory(
    product_id: int,
    location: str,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    record = crud.inventory.get_or_404(db, tenant=tenant, product_id=product_id, location=location)
    return {"success": True, "data": record}


@router.post("/", response_model=schemas.DataResponse[schemas.InventoryRecord], status_code=status.HTTP_201_CREATED)
def create_inventory(
    inventory_in: schemas.InventoryCreate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Add inventory entry"""
    record = crud.inventory.create(db, tenant=tenant, obj_in=inventory_in)
    return {"success": True, "message": "Inventory entry created successfully", "data": record}


@router.put("/{product_id}/{location}", response_model=schemas.DataResponse[schemas.InventoryRecord])
def update_inventory_quantity(
    product_id: int,
    location: str,
    mutation: schemas.QuantityMutation,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Set, add to or subtract from the stock quantity (subtraction stops at zero)"""
    record = crud.inventory.mutate_quantity(
        db, tenant=tenant, product_id=product_id, location=location, mutation=mutation
    )
    return {"success": True, "message": "Inventory updated successfully", "data": record}


@router.delete("/{product_id}/{location}", response_model=schemas.Message)
def delete_inventory(
    product_id: int,
    location: str,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    crud.inventory.remove(db, tenant=tenant, product_id=product_id, location=location)
    return {"success": True, "message": "Inventory entry deleted successfully"}
