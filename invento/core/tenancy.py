# File: invento/core/tenancy.py
from dataclasses import dataclass


@dataclass(frozen=True)
class TenantContext:
    """A tenant already resolved and checked active by the registry.

    Every catalog, ledger and aggregation operation takes one of these as a
    required keyword argument; none of them re-derive tenant identity.
    """

    tenant_id: str
    org_name: str
    active: bool = True
