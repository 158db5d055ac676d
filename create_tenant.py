#!/usr/bin/env python3
"""
Tenant administration: create a tenant or switch its active flag.

Usage:
    python create_tenant.py create <tenant_id> <org_name>
    python create_tenant.py activate <tenant_id>
    python create_tenant.py deactivate <tenant_id>
"""
import os
import sys
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from invento import crud
from invento.core.exceptions import LedgerError
from invento.db.database import SessionLocal
from invento.schemas.tenant import TenantCreate

USAGE = __doc__


def create_tenant(tenant_id: str, org_name: str) -> bool:
    db = SessionLocal()
    try:
        tenant = crud.tenant.create(db, obj_in=TenantCreate(tenant_id=tenant_id, org_name=org_name))
        print(f"✅ Tenant created: {tenant.tenant_id} ({tenant.org_name})")
        return True
    except LedgerError as e:
        print(f"❌ {e.kind}: {e.message}")
        return False
    finally:
        db.close()


def set_tenant_active(tenant_id: str, active: bool) -> bool:
    db = SessionLocal()
    try:
        tenant = crud.tenant.set_active(db, tenant_id=tenant_id, active=active)
        print(f"✅ Tenant {tenant.tenant_id} is now {'active' if tenant.active else 'inactive'}")
        return True
    except LedgerError as e:
        print(f"❌ {e.kind}: {e.message}")
        return False
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print(USAGE)
        sys.exit(1)

    command, tenant_id = sys.argv[1], sys.argv[2]
    if command == "create" and len(sys.argv) == 4:
        success = create_tenant(tenant_id, sys.argv[3])
    elif command in ("activate", "deactivate") and len(sys.argv) == 3:
        success = set_tenant_active(tenant_id, command == "activate")
    else:
        print(USAGE)
        sys.exit(1)

    sys.exit(0 if success else 1)
