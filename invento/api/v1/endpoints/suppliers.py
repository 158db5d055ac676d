# File: invento/api/v1/endpoints/suppliers.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


@router.get("/", response_model=schemas.ListResponse[schemas.Supplier])
def list_suppliers(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get suppliers ordered by name"""
    items, total = crud.supplier.list(db, tenant=tenant, params=params, search=search)
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}


@router.get("/{supplier_id}", response_model=schemas.DataResponse[schemas.Supplier])
def get_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    return {"success": True, "data": crud.supplier.get_or_404(db, tenant=tenant, id=supplier_id)}


@router.post("/", response_model=schemas.DataResponse[schemas.Supplier], status_code=status.HTTP_201_CREATED)
def create_supplier(
    supplier_in: schemas.SupplierCreate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    supplier = crud.supplier.create(db, tenant=tenant, obj_in=supplier_in)
    return {"success": True, "message": "Supplier created successfully", "data": supplier}


@router.put("/{supplier_id}", response_model=schemas.DataResponse[schemas.Supplier])
def update_supplier(
    supplier_id: int,
    supplier_in: schemas.SupplierUpdate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    supplier = crud.supplier.update(db, tenant=tenant, id=supplier_id, obj_in=supplier_in)
    return {"success": True, "message": "Supplier updated successfully", "data": supplier}


@router.delete("/{supplier_id}", response_model=schemas.Message)
def delete_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    crud.supplier.remove(db, tenant=tenant, id=supplier_id)
    return {"success": True, "message": "Supplier deleted successfully"}


@router.get("/{supplier_id}/products", response_model=schemas.ListResponse[schemas.Product])
def list_supplier_products(
    supplier_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get products sourced from this supplier"""
    crud.supplier.get_or_404(db, tenant=tenant, id=supplier_id)
    items, total = crud.product.list(
        db, tenant=tenant, params=params, filters=schemas.ProductFilter(supplier_id=supplier_id)
    )
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}
