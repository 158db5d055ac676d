# File: invento/crud/category.py
from invento.crud.named_entity import CRUDNamedEntity
from invento.models.category import Category
from invento.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDNamedEntity[Category, CategoryCreate, CategoryUpdate]):
    label = "Category"
    reference_attr = "category_id"


category = CRUDCategory(Category)
