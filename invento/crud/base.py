# File: invento/crud/base.py
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar, Union
import logging

from pydantic import BaseModel
from sqlalchemy.exc import DataError, DBAPIError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Query, Session

from invento.core.exceptions import InvalidInput, LedgerError, NotFound, Transient
from invento.core.tenancy import TenantContext
from invento.db.database import Base
from invento.schemas.common import PageParams

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


@contextmanager
def storage_guard(db: Session, action: str = "storage operation") -> Iterator[None]:
    """Roll back on any failure and surface storage outages as ``Transient``."""
    try:
        yield
    except LedgerError:
        db.rollback()
        raise
    except (OperationalError, PoolTimeoutError) as e:
        db.rollback()
        logger.exception(f"Storage unavailable during {action}")
        raise Transient(f"Storage unavailable during {action}, retry later") from e
    except DataError as e:
        # Value out of range for its column (integer overflow, over-long text)
        db.rollback()
        logger.warning(f"Rejected out-of-range value during {action}: {e.orig}")
        raise InvalidInput(f"Value out of range during {action}") from e
    except DBAPIError as e:
        db.rollback()
        if e.connection_invalidated:
            logger.exception(f"Connection lost during {action}")
            raise Transient(f"Connection lost during {action}, retry later") from e
        raise
    except Exception:
        db.rollback()
        raise


def like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def paginate(query: Query, params: PageParams) -> Tuple[List[Any], int]:
    if params.page < 1 or params.page_size < 1:
        raise InvalidInput("page and page size must be positive")
    total = query.order_by(None).count()
    items = query.offset(params.offset).limit(params.page_size).all()
    return items, total


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        CRUD object with default methods to Create, Read, Update, Delete (CRUD).

        **Parameters**

        * `model`: A SQLAlchemy model class
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def create(self, db: Session, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model(**obj_in.dict())
        with storage_guard(db, f"create {self.model.__tablename__}"):
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
        return db_obj


class TenantCRUDBase(CRUDBase[ModelType, CreateSchemaType, UpdateSchemaType]):
    """CRUD whose every read and write carries the caller's tenant filter."""

    id_attr = "id"
    label = "Record"

    @property
    def id_column(self):
        return getattr(self.model, self.id_attr)

    def query(self, db: Session, *, tenant: TenantContext) -> Query:
        return db.query(self.model).filter(self.model.tenant_id == tenant.tenant_id)

    def get(self, db: Session, *, tenant: TenantContext, id: Any) -> Optional[ModelType]:
        return self.query(db, tenant=tenant).filter(self.id_column == id).first()

    def get_or_404(self, db: Session, *, tenant: TenantContext, id: Any) -> ModelType:
        db_obj = self.get(db, tenant=tenant, id=id)
        if db_obj is None:
            # Another tenant's row is reported exactly like a missing one
            raise NotFound(f"{self.label} not found")
        return db_obj

    def count(self, db: Session, *, tenant: TenantContext) -> int:
        return self.query(db, tenant=tenant).count()

    def apply_update(self, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.dict(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        return update_data
