# File: invento/api/v1/endpoints/categories.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


@router.get("/", response_model=schemas.ListResponse[schemas.Category])
def list_categories(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get categories ordered by name"""
    items, total = crud.category.list(db, tenant=tenant, params=params, search=search)
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}


@router.get("/{category_id}", response_model=schemas.DataResponse[schemas.Category])
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    return {"success": True, "data": crud.category.get_or_404(db, tenant=tenant, id=category_id)}


@router.post("/", response_model=schemas.DataResponse[schemas.Category], status_code=status.HTTP_201_CREATED)
def create_category(
    category_in: schemas.CategoryCreate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Create new category"""
    category = crud.category.create(db, tenant=tenant, obj_in=category_in)
    return {"success": True, "message": "Category created successfully", "data": category}


@router.put("/{category_id}", response_model=schemas.DataResponse[schemas.Category])
def update_category(
    category_id: int,
    category_in: schemas.CategoryUpdate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    category = crud.category.update(db, tenant=tenant, id=category_id, obj_in=category_in)
    return {"success": True, "message": "Category updated successfully", "data": category}


@router.delete("/{category_id}", response_model=schemas.Message)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    crud.category.remove(db, tenant=tenant, id=category_id)
    return {"success": True, "message": "Category deleted successfully"}


@router.get("/{category_id}/products", response_model=schemas.ListResponse[schemas.Product])
def list_category_products(
    category_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get products in category"""
    crud.category.get_or_404(db, tenant=tenant, id=category_id)
    items, total = crud.product.list(
        db, tenant=tenant, params=params, filters=schemas.ProductFilter(category_id=category_id)
    )
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}
