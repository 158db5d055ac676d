# File: invento/crud/named_entity.py
from typing import Any, List, Optional, Tuple
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invento.core.exceptions import DuplicateName, InUse, InvalidInput
from invento.core.tenancy import TenantContext
from invento.crud.base import (
    CreateSchemaType,
    ModelType,
    TenantCRUDBase,
    UpdateSchemaType,
    like_pattern,
    paginate,
    storage_guard,
)
from invento.models.product import Product
from invento.schemas.common import PageParams

logger = logging.getLogger(__name__)


class CRUDNamedEntity(TenantCRUDBase[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Shared rules for categories and suppliers.

    Names are unique per tenant after trimming (case-sensitive). The name
    lookup before insert only produces a friendly error; the unique
    constraint on (tenant_id, name) is what actually rejects duplicates,
    and a constraint failure is reported as the same ``DuplicateName``.
    Deletion is refused while products still reference the row.
    """

    reference_attr = "category_id"

    @staticmethod
    def clean_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidInput("Name is required")
        return cleaned

    def get_by_name(
        self, db: Session, *, tenant: TenantContext, name: str, exclude_id: Any = None
    ) -> Optional[ModelType]:
        query = self.query(db, tenant=tenant).filter(self.model.name == name)
        if exclude_id is not None:
            query = query.filter(self.id_column != exclude_id)
        return query.first()

    def count_references(self, db: Session, *, tenant: TenantContext, id: Any) -> int:
        return (
            db.query(Product)
            .filter(
                Product.tenant_id == tenant.tenant_id,
                getattr(Product, self.reference_attr) == id,
            )
            .count()
        )

    def _duplicate(self, name: str) -> DuplicateName:
        return DuplicateName(f"{self.label} with name '{name}' already exists")

    def create(self, db: Session, *, tenant: TenantContext, obj_in: CreateSchemaType) -> ModelType:
        data = obj_in.dict()
        data["name"] = self.clean_name(data.get("name"))

        with storage_guard(db, f"create {self.label.lower()}"):
            if self.get_by_name(db, tenant=tenant, name=data["name"]) is not None:
                logger.warning(f"Duplicate {self.label.lower()} '{data['name']}' for tenant '{tenant.tenant_id}'")
                raise self._duplicate(data["name"])

            db_obj = self.model(**data, tenant_id=tenant.tenant_id)
            db.add(db_obj)
            try:
                db.commit()
            except IntegrityError as e:
                # Lost the race to a concurrent insert of the same name
                db.rollback()
                logger.warning(f"Unique constraint rejected {self.label.lower()} '{data['name']}' for tenant '{tenant.tenant_id}'")
                raise self._duplicate(data["name"]) from e
            db.refresh(db_obj)

        logger.info(f"Created {self.label.lower()} {getattr(db_obj, self.id_attr)} '{db_obj.name}' for tenant '{tenant.tenant_id}'")
        return db_obj

    def update(
        self, db: Session, *, tenant: TenantContext, id: Any, obj_in: UpdateSchemaType
    ) -> ModelType:
        update_data = obj_in.dict(exclude_unset=True)
        if "name" in update_data:
            update_data["name"] = self.clean_name(update_data["name"])

        with storage_guard(db, f"update {self.label.lower()}"):
            db_obj = self.get_or_404(db, tenant=tenant, id=id)
            name = update_data.get("name")
            if name is not None and self.get_by_name(db, tenant=tenant, name=name, exclude_id=id) is not None:
                raise self._duplicate(name)

            self.apply_update(db_obj, update_data)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise self._duplicate(name) from e
            db.refresh(db_obj)

        logger.info(f"Updated {self.label.lower()} {id} for tenant '{tenant.tenant_id}'")
        return db_obj

    def remove(self, db: Session, *, tenant: TenantContext, id: Any) -> None:
        with storage_guard(db, f"delete {self.label.lower()}"):
            db_obj = self.get_or_404(db, tenant=tenant, id=id)
            count = self.count_references(db, tenant=tenant, id=id)
            if count:
                raise InUse(f"Cannot delete {self.label.lower()} with {count} existing product(s)", count=count)

            db.delete(db_obj)
            try:
                db.commit()
            except IntegrityError as e:
                # A product was attached after the count; the foreign key refused the delete
                db.rollback()
                count = self.count_references(db, tenant=tenant, id=id)
                raise InUse(f"Cannot delete {self.label.lower()} with {count} existing product(s)", count=count) from e

        logger.info(f"Deleted {self.label.lower()} {id} for tenant '{tenant.tenant_id}'")

    def list(
        self, db: Session, *, tenant: TenantContext, params: PageParams, search: Optional[str] = None
    ) -> Tuple[List[ModelType], int]:
        query = self.query(db, tenant=tenant)
        if search:
            query = query.filter(self.model.name.ilike(like_pattern(search), escape="\\"))
        query = query.order_by(self.model.name.asc(), self.id_column.asc())
        with storage_guard(db, f"list {self.label.lower()}"):
            return paginate(query, params)
