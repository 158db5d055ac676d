# File: invento/api/v1/endpoints/sales.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


@router.get("/", response_model=schemas.ListResponse[schemas.Sale])
def list_sales(
    product_id: Optional[int] = None,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    """Get sales, newest first"""
    items, total = crud.sale.list(db, tenant=tenant, params=params, product_id=product_id)
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}


@router.post("/", response_model=schemas.DataResponse[schemas.Sale], status_code=status.HTTP_201_CREATED)
def record_sale(
    sale_in: schemas.SaleCreate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Record a sale"""
    sale = crud.sale.record(db, tenant=tenant, obj_in=sale_in)
    return {"success": True, "message": "Sale recorded successfully", "data": sale}
