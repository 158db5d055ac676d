# File: invento/core/exceptions.py
"""
Domain error kinds raised by the catalog, ledger and aggregation layers.

The core never formats responses; the gateway maps ``kind`` to a
transport status (see ``invento.main``).
"""
from typing import Any, Dict, Optional


class LedgerError(Exception):
    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.kind, "message": self.message}


class NotFound(LedgerError):
    """Entity absent from the caller's tenant (or owned by another one)."""

    kind = "NotFound"


class InvalidInput(LedgerError):
    kind = "InvalidInput"


class ForeignKeyViolation(InvalidInput):
    """A category/supplier/product reference outside the caller's tenant."""

    kind = "ForeignKeyViolation"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class DuplicateName(LedgerError):
    kind = "DuplicateName"


class DuplicateKey(LedgerError):
    kind = "DuplicateKey"


class InUse(LedgerError):
    kind = "InUse"

    def __init__(self, message: str, count: int):
        super().__init__(message)
        self.count = count

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["count"] = self.count
        return payload


class TenantInactive(LedgerError):
    kind = "TenantInactive"


class Transient(LedgerError):
    """Storage timeout or unavailability; safe for the caller to retry."""

    kind = "Transient"
