# File: invento/crud/supplier.py
from invento.crud.named_entity import CRUDNamedEntity
from invento.models.supplier import Supplier
from invento.schemas.supplier import SupplierCreate, SupplierUpdate


class CRUDSupplier(CRUDNamedEntity[Supplier, SupplierCreate, SupplierUpdate]):
    label = "Supplier"
    reference_attr = "supplier_id"


supplier = CRUDSupplier(Supplier)
