# File: invento/api/v1/endpoints/tenants.py
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invento import crud, schemas
from invento.core import deps
from invento.core.tenancy import TenantContext
from invento.db.database import get_db

router = APIRouter()


def _tenant_payload(db: Session, tenant: TenantContext) -> dict:
    return {"success": True, "data": crud.tenant.get(db, tenant.tenant_id)}


@router.get("/tenants/{tenant_id}", response_model=schemas.DataResponse[schemas.Tenant])
def get_tenant(
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get the tenant named in the URL"""
    return _tenant_payload(db, tenant)


@router.get("/tenant", response_model=schemas.DataResponse[schemas.Tenant])
def get_current_tenant(
    db: Session = Depends(get_db),
    tenant: TenantContext = Depends(deps.get_tenant_context),
) -> Any:
    """Get the tenant named by the X-Tenant-ID header"""
    return _tenant_payload(db, tenant)
