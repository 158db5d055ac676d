# File: invento/crud/product.py
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invento.core.exceptions import ForeignKeyViolation, InvalidInput
from invento.core.tenancy import TenantContext
from invento.crud.base import TenantCRUDBase, like_pattern, paginate, storage_guard
from invento.models.category import Category
from invento.models.inventory import InventoryRecord
from invento.models.product import Product
from invento.models.supplier import Supplier
from invento.schemas.common import PageParams
from invento.schemas.product import ProductCreate, ProductFilter, ProductUpdate

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "brand")
PRICE_FIELDS = ("purchase_price", "mrp")


class CRUDProduct(TenantCRUDBase[Product, ProductCreate, ProductUpdate]):
    id_attr = "product_id"
    label = "Product"

    def _validate_fields(self, data: Dict[str, Any], *, partial: bool) -> None:
        for field in REQUIRED_TEXT_FIELDS:
            if field not in data and partial:
                continue
            value = (data.get(field) or "").strip()
            if not value:
                raise InvalidInput(f"Missing required field: {field}")
            data[field] = value

        for field in PRICE_FIELDS:
            if field not in data and partial:
                continue
            value = data.get(field)
            if value is None:
                raise InvalidInput(f"Missing required field: {field}")
            if Decimal(value) < 0:
                raise InvalidInput(f"{field} must not be negative")

    def _validate_references(self, db: Session, *, tenant: TenantContext, data: Dict[str, Any]) -> None:
        """Category and supplier must belong to the same tenant as the product."""
        category_id = data.get("category_id")
        if category_id is not None:
            exists = (
                db.query(Category.id)
                .filter(Category.tenant_id == tenant.tenant_id, Category.id == category_id)
                .first()
            )
            if exists is None:
                raise ForeignKeyViolation(f"Category {category_id} not found", field="category_id")

        supplier_id = data.get("supplier_id")
        if supplier_id is not None:
            exists = (
                db.query(Supplier.id)
                .filter(Supplier.tenant_id == tenant.tenant_id, Supplier.id == supplier_id)
                .first()
            )
            if exists is None:
                raise ForeignKeyViolation(f"Supplier {supplier_id} not found", field="supplier_id")

    def create(self, db: Session, *, tenant: TenantContext, obj_in: ProductCreate) -> Product:
        data = obj_in.dict()
        self._validate_fields(data, partial=False)

        with storage_guard(db, "create product"):
            self._validate_references(db, tenant=tenant, data=data)
            db_obj = Product(**data, tenant_id=tenant.tenant_id)
            db.add(db_obj)
            try:
                db.commit()
            except IntegrityError as e:
                # Category or supplier removed between the check and the insert
                db.rollback()
                raise ForeignKeyViolation("Category or supplier no longer exists") from e
            db.refresh(db_obj)

        logger.info(f"Created product {db_obj.product_id} '{db_obj.name}' for tenant '{tenant.tenant_id}'")
        return db_obj

    def update(
        self, db: Session, *, tenant: TenantContext, id: int, obj_in: ProductUpdate
    ) -> Product:
        update_data = obj_in.dict(exclude_unset=True)
        self._validate_fields(update_data, partial=True)

        with storage_guard(db, "update product"):
            db_obj = self.get_or_404(db, tenant=tenant, id=id)
            self._validate_references(db, tenant=tenant, data=update_data)
            self.apply_update(db_obj, update_data)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ForeignKeyViolation("Category or supplier no longer exists") from e
            db.refresh(db_obj)

        logger.info(f"Updated product {id} for tenant '{tenant.tenant_id}'")
        return db_obj

    def remove(self, db: Session, *, tenant: TenantContext, id: int) -> None:
        """Delete the product and every inventory record it owns, in one transaction."""
        with storage_guard(db, "delete product"):
            db_obj = self.get_or_404(db, tenant=tenant, id=id)
            removed_records = (
                db.query(InventoryRecord)
                .filter(
                    InventoryRecord.tenant_id == tenant.tenant_id,
                    InventoryRecord.product_id == id,
                )
                .delete(synchronize_session=False)
            )
            db.delete(db_obj)
            db.commit()

        logger.info(
            f"Deleted product {id} for tenant '{tenant.tenant_id}' "
            f"with {removed_records} inventory record(s)"
        )

    def list(
        self,
        db: Session,
        *,
        tenant: TenantContext,
        params: PageParams,
        filters: Optional[ProductFilter] = None,
    ) -> Tuple[List[Product], int]:
        query = self.query(db, tenant=tenant)
        filters = filters or ProductFilter()

        if filters.search:
            pattern = like_pattern(filters.search)
            query = query.filter(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.brand.ilike(pattern, escape="\\"),
                )
            )
        if filters.category_id is not None:
            query = query.filter(Product.category_id == filters.category_id)
        if filters.supplier_id is not None:
            query = query.filter(Product.supplier_id == filters.supplier_id)

        query = query.order_by(Product.created_at.desc(), Product.product_id.desc())
        with storage_guard(db, "list products"):
            return paginate(query, params)


product = CRUDProduct(Product)
