# File: invento/crud/sale.py
from typing import List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from invento.core.exceptions import InvalidInput, NotFound
from invento.core.tenancy import TenantContext
from invento.crud.base import TenantCRUDBase, paginate, storage_guard
from invento.crud.inventory import inventory
from invento.models.product import Product
from invento.models.sale import Sale
from invento.schemas.common import PageParams
from invento.schemas.inventory import QuantityOperation
from invento.schemas.sale import SaleCreate

logger = logging.getLogger(__name__)


class CRUDSale(TenantCRUDBase[Sale, SaleCreate, SaleCreate]):
    id_attr = "sale_id"
    label = "Sale"

    def record(self, db: Session, *, tenant: TenantContext, obj_in: SaleCreate) -> Sale:
        """Append a sale; with a location, stock there is decremented atomically in the same transaction."""
        if obj_in.quantity <= 0:
            raise InvalidInput("Sale quantity must be positive")
        if obj_in.selling_price < 0:
            raise InvalidInput("Selling price must not be negative")
        location = obj_in.location.strip() if obj_in.location else None

        with storage_guard(db, "record sale"):
            exists = (
                db.query(Product.product_id)
                .filter(Product.tenant_id == tenant.tenant_id, Product.product_id == obj_in.product_id)
                .first()
            )
            if exists is None:
                raise NotFound("Product not found for this tenant")

            sale = Sale(
                tenant_id=tenant.tenant_id,
                product_id=obj_in.product_id,
                quantity=obj_in.quantity,
                selling_price=obj_in.selling_price,
                location=location,
            )
            db.add(sale)
            if location:
                inventory.apply_mutation(
                    db,
                    tenant=tenant,
                    product_id=obj_in.product_id,
                    location=location,
                    operation=QuantityOperation.SUBTRACT,
                    amount=obj_in.quantity,
                )
            db.commit()
            db.refresh(sale)

        logger.info(
            f"Recorded sale {sale.sale_id} of {sale.quantity} x product {sale.product_id} "
            f"for tenant '{tenant.tenant_id}'"
        )
        return sale

    def list(
        self,
        db: Session,
        *,
        tenant: TenantContext,
        params: PageParams,
        product_id: Optional[int] = None,
    ) -> Tuple[List[Sale], int]:
        query = self.query(db, tenant=tenant)
        if product_id is not None:
            query = query.filter(Sale.product_id == product_id)
        query = query.order_by(Sale.created_at.desc(), Sale.sale_id.desc())
        with storage_guard(db, "list sales"):
            return paginate(query, params)


sale = CRUDSale(Sale)
