# File: invento/api/v1/endpoints/products.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


@router.get("/", response_model=schemas.ListResponse[schemas.Product])
def list_products(
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    supplier_id: Optional[int] = None,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get products, newest first; search matches name or brand"""
    filters = schemas.ProductFilter(search=search, category_id=category_id, supplier_id=supplier_id)
    items, total = crud.product.list(db, tenant=tenant, params=params, filters=filters)
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}


@router.get("/{product_id}", response_model=schemas.DataResponse[schemas.Product])
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    return {"success": True, "data": crud.product.get_or_404(db, tenant=tenant, id=product_id)}


@router.post("/", response_model=schemas.DataResponse[schemas.Product], status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: schemas.ProductCreate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Create new product"""
    product = crud.product.create(db, tenant=tenant, obj_in=product_in)
    return {"success": True, "message": "Product created successfully", "data": product}


@router.put("/{product_id}", response_model=schemas.DataResponse[schemas.Product])
def update_product(
    product_id: int,
    product_in: schemas.ProductUpdate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    product = crud.product.update(db, tenant=tenant, id=product_id, obj_in=product_in)
    return {"success": True, "message": "Product updated successfully", "data": product}


@router.delete("/{product_id}", response_model=schemas.Message)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Delete product together with its inventory records"""
    crud.product.remove(db, tenant=tenant, id=product_id)
    return {"success": True, "message": "Product deleted successfully"}
