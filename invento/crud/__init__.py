from .tenant import tenant
from .category import category
from .supplier import supplier
from .product import product
from .inventory import inventory
from .sale import sale
from .user import user

__all__ = ["tenant", "category", "supplier", "product", "inventory", "sale", "user"]
