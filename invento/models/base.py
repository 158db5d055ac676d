# File: invento/models/base.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import declared_attr

from invento.db.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class TenantScopedMixin:
    """Adds the owning tenant column every tenant-scoped table carries."""

    @declared_attr
    def tenant_id(cls):
        return Column(
            String(64),
            ForeignKey("tenants.tenant_id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


__all__ = ["Base", "TimestampMixin", "TenantScopedMixin", "utcnow"]
