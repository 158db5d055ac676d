# File: invento/api/v1/endpoints/users.py
from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


@router.get("/", response_model=schemas.ListResponse[schemas.User])
def list_users(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
    params: schemas.PageParams = Depends(deps.get_page_params),
) -> Any:
    items, total = crud.user.list(db, tenant=tenant, params=params, search=search)
    page = schemas.Page.build(items, total, params)
    return {"success": True, "data": page.items, "pagination": schemas.pagination_of(page)}


@router.get("/{user_id}", response_model=schemas.DataResponse[schemas.User])
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    return {"success": True, "data": crud.user.get_or_404(db, tenant=tenant, id=user_id)}


@router.post("/", response_model=schemas.DataResponse[schemas.User], status_code=status.HTTP_201_CREATED)
def create_user(
    user_in: schemas.UserCreate,
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Create new user in the tenant"""
    user = crud.user.create(db, tenant=tenant, obj_in=user_in)
    return {"success": True, "message": "User created successfully", "data": user}
