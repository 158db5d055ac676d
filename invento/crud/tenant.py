# File: invento/crud/tenant.py
from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invento.core.exceptions import DuplicateKey, InvalidInput, NotFound, TenantInactive
from invento.core.tenancy import TenantContext
from invento.crud.base import CRUDBase, storage_guard
from invento.models.tenant import Tenant
from invento.schemas.tenant import TenantCreate

logger = logging.getLogger(__name__)


class CRUDTenant(CRUDBase[Tenant, TenantCreate, TenantCreate]):
    """Tenant registry: the gate in front of every other operation."""

    def resolve(self, db: Session, *, token: Optional[str]) -> TenantContext:
        token = (token or "").strip()
        if not token:
            raise InvalidInput("Tenant ID is required. Provide it in URL path or X-Tenant-ID header.")

        with storage_guard(db, "tenant lookup"):
            tenant = self.get(db, token)

        if tenant is None:
            logger.warning(f"Rejected unknown tenant '{token}'")
            raise NotFound("Tenant not found")
        if not tenant.active:
            logger.warning(f"Rejected inactive tenant '{token}'")
            raise TenantInactive("Tenant account is inactive")

        return TenantContext(tenant_id=tenant.tenant_id, org_name=tenant.org_name, active=True)

    def create(self, db: Session, *, obj_in: TenantCreate) -> Tenant:
        tenant_id = obj_in.tenant_id.strip()
        org_name = obj_in.org_name.strip()
        if not tenant_id or not org_name:
            raise InvalidInput("tenant_id and org_name are required")

        db_obj = Tenant(tenant_id=tenant_id, org_name=org_name, active=obj_in.active)
        with storage_guard(db, "create tenant"):
            db.add(db_obj)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise DuplicateKey(f"Tenant '{tenant_id}' already exists") from e
            db.refresh(db_obj)

        logger.info(f"Created tenant '{tenant_id}' ({org_name})")
        return db_obj

    def set_active(self, db: Session, *, tenant_id: str, active: bool) -> Tenant:
        """The active flag is the only tenant field that changes after creation."""
        with storage_guard(db, "update tenant status"):
            tenant = self.get(db, tenant_id)
            if tenant is None:
                raise NotFound("Tenant not found")
            tenant.active = active
            db.commit()
            db.refresh(tenant)

        logger.info(f"Tenant '{tenant_id}' {'activated' if active else 'deactivated'}")
        return tenant


tenant = CRUDTenant(Tenant)
