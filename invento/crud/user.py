# File: invento/crud/user.py
from typing import List, Optional, Tuple
import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invento.core.exceptions import DuplicateName, InvalidInput
from invento.core.tenancy import TenantContext
from invento.crud.base import TenantCRUDBase, like_pattern, paginate, storage_guard
from invento.models.user import User
from invento.schemas.common import PageParams
from invento.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class CRUDUser(TenantCRUDBase[User, UserCreate, UserCreate]):
    id_attr = "user_id"
    label = "User"

    def get_by_email(self, db: Session, *, tenant: TenantContext, email: str) -> Optional[User]:
        return self.query(db, tenant=tenant).filter(func.lower(User.email) == email.lower()).first()

    def create(self, db: Session, *, tenant: TenantContext, obj_in: UserCreate) -> User:
        name = obj_in.name.strip()
        email = obj_in.email.strip().lower()
        if not name or "@" not in email:
            raise InvalidInput("A name and a valid email are required")

        with storage_guard(db, "create user"):
            if self.get_by_email(db, tenant=tenant, email=email) is not None:
                raise DuplicateName(f"User with email '{email}' already exists")
            db_obj = User(tenant_id=tenant.tenant_id, name=name, email=email, role=obj_in.role)
            db.add(db_obj)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise DuplicateName(f"User with email '{email}' already exists") from e
            db.refresh(db_obj)

        logger.info(f"Created user {db_obj.user_id} for tenant '{tenant.tenant_id}'")
        return db_obj

    def list(
        self, db: Session, *, tenant: TenantContext, params: PageParams, search: Optional[str] = None
    ) -> Tuple[List[User], int]:
        query = self.query(db, tenant=tenant)
        if search:
            pattern = like_pattern(search)
            query = query.filter(
                or_(User.name.ilike(pattern, escape="\\"), User.email.ilike(pattern, escape="\\"))
            )
        query = query.order_by(User.created_at.desc(), User.user_id.desc())
        with storage_guard(db, "list users"):
            return paginate(query, params)


user = CRUDUser(User)
