# File: invento/core/deps.py
from typing import Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from invento import crud
from invento.core.config import settings
from invento.core.tenancy import TenantContext
from invento.db.database import get_db
from invento.schemas.common import PageParams


def get_tenant_context(
    request: Request,
    x_tenant_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> TenantContext:
    """
    Resolve the tenant for this request.
    The URL segment (/tenants/{tenant_id}/...) takes precedence over the
    X-Tenant-ID header.
    """
    token = request.path_params.get("tenant_id") or x_tenant_id
    return crud.tenant.resolve(db, token=token)


def get_page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> PageParams:
    return PageParams(page=page, page_size=limit)
