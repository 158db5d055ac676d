# File: invento/crud/inventory.py
"""
Inventory ledger: per (tenant, product, location) stock records.

Quantity changes are applied as one conditional UPDATE evaluated by the
database (``quantity = quantity + n`` and a clamped subtraction), so two
concurrent mutations of the same key can never both act on the same
starting quantity. Quantities are never read into Python to compute the
next value.
"""
from typing import Iterator, List, Optional, Tuple
import logging

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invento.core.exceptions import DuplicateKey, InvalidInput, NotFound
from invento.core.tenancy import TenantContext
from invento.crud.base import TenantCRUDBase, like_pattern, paginate, storage_guard
from invento.models.base import utcnow
from invento.models.inventory import MAX_QUANTITY, InventoryRecord
from invento.models.product import Product
from invento.schemas.common import PageParams
from invento.schemas.inventory import InventoryCreate, QuantityMutation, QuantityOperation

logger = logging.getLogger(__name__)


def quantity_expression(operation: QuantityOperation, amount: int):
    """Server-side expression for the new quantity."""
    if operation == QuantityOperation.SET:
        return amount
    if operation == QuantityOperation.ADD:
        return InventoryRecord.quantity + amount
    # Clamp at zero; the size of any shortfall is deliberately dropped
    return case(
        (InventoryRecord.quantity > amount, InventoryRecord.quantity - amount),
        else_=0,
    )


def first_write_quantity(operation: QuantityOperation, amount: int) -> int:
    if operation == QuantityOperation.ADD:
        return amount
    # Subtracting from an empty key clamps to zero
    return 0


class CRUDInventory(TenantCRUDBase[InventoryRecord, InventoryCreate, QuantityMutation]):
    label = "Inventory entry"

    def _key_filter(self, tenant: TenantContext, product_id: int, location: str):
        return (
            InventoryRecord.tenant_id == tenant.tenant_id,
            InventoryRecord.product_id == product_id,
            InventoryRecord.location == location,
        )

    def _ensure_product(self, db: Session, *, tenant: TenantContext, product_id: int) -> None:
        exists = (
            db.query(Product.product_id)
            .filter(Product.tenant_id == tenant.tenant_id, Product.product_id == product_id)
            .first()
        )
        if exists is None:
            raise NotFound("Product not found for this tenant")

    def get(
        self, db: Session, *, tenant: TenantContext, product_id: int, location: str
    ) -> Optional[InventoryRecord]:
        return (
            db.query(InventoryRecord)
            .filter(*self._key_filter(tenant, product_id, location))
            .first()
        )

    def get_or_404(
        self, db: Session, *, tenant: TenantContext, product_id: int, location: str
    ) -> InventoryRecord:
        record = self.get(db, tenant=tenant, product_id=product_id, location=location)
        if record is None:
            raise NotFound("Inventory entry not found for this tenant")
        return record

    def _refuse_overflow(self, db: Session, *, tenant: TenantContext, product_id: int, location: str) -> None:
        """An Add that matched no row on an existing key would have overflowed."""
        if self.get(db, tenant=tenant, product_id=product_id, location=location) is not None:
            raise InvalidInput(f"Quantity would exceed the maximum of {MAX_QUANTITY}")

    def create(self, db: Session, *, tenant: TenantContext, obj_in: InventoryCreate) -> InventoryRecord:
        location = obj_in.location.strip()
        if not location:
            raise InvalidInput("Missing required field: location")
        if obj_in.quantity < 0:
            raise InvalidInput("Quantity must not be negative")
        if obj_in.quantity > MAX_QUANTITY:
            raise InvalidInput(f"Quantity must not exceed {MAX_QUANTITY}")

        with storage_guard(db, "create inventory"):
            self._ensure_product(db, tenant=tenant, product_id=obj_in.product_id)
            if self.get(db, tenant=tenant, product_id=obj_in.product_id, location=location) is not None:
                raise DuplicateKey(f"Inventory for product {obj_in.product_id} at '{location}' already exists")

            record = InventoryRecord(
                tenant_id=tenant.tenant_id,
                product_id=obj_in.product_id,
                location=location,
                quantity=obj_in.quantity,
                capacity=obj_in.capacity,
            )
            db.add(record)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise DuplicateKey(f"Inventory for product {obj_in.product_id} at '{location}' already exists") from e
            db.refresh(record)

        logger.info(
            f"Created inventory {tenant.tenant_id}/{record.product_id}/{record.location} "
            f"with quantity {record.quantity}"
        )
        return record

    def apply_mutation(
        self,
        db: Session,
        *,
        tenant: TenantContext,
        product_id: int,
        location: str,
        operation: QuantityOperation,
        amount: int,
        capacity: Optional[int] = None,
    ) -> InventoryRecord:
        """
        Apply one quantity mutation inside the caller's transaction.

        The caller commits. Add/Subtract on a missing key creates it as if
        the previous quantity were 0; Set on a missing key is NotFound.
        """
        if amount is None or amount < 0:
            raise InvalidInput("Quantity must be a non-negative integer")
        if amount > MAX_QUANTITY:
            raise InvalidInput(f"Quantity must not exceed {MAX_QUANTITY}")
        if capacity is not None and capacity < 0:
            raise InvalidInput("Capacity must not be negative")

        values = {"quantity": quantity_expression(operation, amount), "updated_at": utcnow()}
        if capacity is not None:
            values["capacity"] = capacity
        criteria = list(self._key_filter(tenant, product_id, location))
        if operation == QuantityOperation.ADD:
            # Rows whose sum would overflow the column are left untouched
            criteria.append(InventoryRecord.quantity <= MAX_QUANTITY - amount)
        stmt = (
            update(InventoryRecord)
            .where(*criteria)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

        result = db.execute(stmt)
        if result.rowcount == 0:
            if operation == QuantityOperation.SET:
                raise NotFound("Inventory entry not found for this tenant")
            self._refuse_overflow(db, tenant=tenant, product_id=product_id, location=location)

            self._ensure_product(db, tenant=tenant, product_id=product_id)
            try:
                with db.begin_nested():
                    db.add(
                        InventoryRecord(
                            tenant_id=tenant.tenant_id,
                            product_id=product_id,
                            location=location,
                            quantity=first_write_quantity(operation, amount),
                            capacity=capacity,
                        )
                    )
            except IntegrityError:
                # A concurrent first write created the key; apply on top of it
                result = db.execute(stmt)
                if result.rowcount == 0:
                    self._refuse_overflow(db, tenant=tenant, product_id=product_id, location=location)
                    raise NotFound("Product not found for this tenant")

        return db.execute(
            select(InventoryRecord)
            .where(*self._key_filter(tenant, product_id, location))
            .execution_options(populate_existing=True)
        ).scalar_one()

    def mutate_quantity(
        self,
        db: Session,
        *,
        tenant: TenantContext,
        product_id: int,
        location: str,
        mutation: QuantityMutation,
    ) -> InventoryRecord:
        with storage_guard(db, "mutate inventory quantity"):
            record = self.apply_mutation(
                db,
                tenant=tenant,
                product_id=product_id,
                location=location,
                operation=mutation.operation,
                amount=mutation.quantity,
                capacity=mutation.capacity,
            )
            db.commit()

        logger.info(
            f"Inventory {tenant.tenant_id}/{product_id}/{location} "
            f"{mutation.operation.value} {mutation.quantity} -> {record.quantity}"
        )
        return record

    def remove(self, db: Session, *, tenant: TenantContext, product_id: int, location: str) -> None:
        with storage_guard(db, "delete inventory"):
            deleted = (
                db.query(InventoryRecord)
                .filter(*self._key_filter(tenant, product_id, location))
                .delete(synchronize_session=False)
            )
            if not deleted:
                raise NotFound("Inventory entry not found for this tenant")
            db.commit()

        logger.info(f"Deleted inventory {tenant.tenant_id}/{product_id}/{location}")

    def iter_low_stock(
        self, db: Session, *, tenant: TenantContext, threshold: int
    ) -> Iterator[InventoryRecord]:
        """Records with quantity below ``threshold``, lowest first.

        Each call runs a fresh query, so iteration can be restarted.
        """
        stmt = (
            select(InventoryRecord)
            .where(
                InventoryRecord.tenant_id == tenant.tenant_id,
                InventoryRecord.quantity < threshold,
            )
            .order_by(
                InventoryRecord.quantity.asc(),
                InventoryRecord.product_id.asc(),
                InventoryRecord.location.asc(),
            )
        )
        yield from db.scalars(stmt)

    def list(
        self,
        db: Session,
        *,
        tenant: TenantContext,
        params: PageParams,
        search: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Tuple[List[InventoryRecord], int]:
        query = self.query(db, tenant=tenant)
        if search:
            query = query.filter(InventoryRecord.location.ilike(like_pattern(search), escape="\\"))
        if location:
            query = query.filter(InventoryRecord.location == location)
        query = query.order_by(
            InventoryRecord.updated_at.desc(),
            InventoryRecord.product_id.asc(),
            InventoryRecord.location.asc(),
        )
        with storage_guard(db, "list inventory"):
            return paginate(query, params)

    def list_for_product(
        self, db: Session, *, tenant: TenantContext, product_id: int
    ) -> List[InventoryRecord]:
        with storage_guard(db, "list product inventory"):
            return (
                self.query(db, tenant=tenant)
                .filter(InventoryRecord.product_id == product_id)
                .order_by(InventoryRecord.location.asc())
                .all()
            )


inventory = CRUDInventory(InventoryRecord)
