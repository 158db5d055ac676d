from decimal import Decimal

import pytest

from invento import crud, schemas
from invento.core.exceptions import (
    DuplicateName, ForeignKeyViolation, InUse, InvalidInput, NotFound,
)


# ============================================================================
# Categories and suppliers
# ============================================================================


def test_category_name_is_trimmed(db, acme, make_category):
    category = make_category(acme, name="  Tools  ")
    assert category.name == "Tools"
    assert category.tenant_id == "acme"


def test_blank_category_name_is_rejected(db, acme, make_category):
    with pytest.raises(InvalidInput):
        make_category(acme, name="   ")


def test_category_names_are_unique_per_tenant(db, acme, globex, make_category):
    make_category(acme, name="Tools")
    with pytest.raises(DuplicateName):
        make_category(acme, name=" Tools ")

    # Another tenant may reuse the name
    assert make_category(globex, name="Tools").tenant_id == "globex"


def test_category_names_are_case_sensitive(db, acme, make_category):
    make_category(acme, name="Tools")
    assert make_category(acme, name="tools").name == "tools"


def test_unique_constraint_rejects_duplicate_missed_by_lookup(db, acme, make_category, monkeypatch):
    make_category(acme, name="Tools")
    # Simulate a concurrent insert that happened after the lookup
    monkeypatch.setattr(crud.category, "get_by_name", lambda *args, **kwargs: None)

    with pytest.raises(DuplicateName):
        make_category(acme, name="Tools")
    assert crud.category.count(db, tenant=acme) == 1


def test_rename_to_existing_name_is_rejected(db, acme, make_category):
    make_category(acme, name="Tools")
    paint = make_category(acme, name="Paint")

    with pytest.raises(DuplicateName):
        crud.category.update(db, tenant=acme, id=paint.id, obj_in=schemas.CategoryUpdate(name="Tools"))

    # Renaming to its own name is not a clash
    updated = crud.category.update(
        db, tenant=acme, id=paint.id, obj_in=schemas.CategoryUpdate(name="Paint", description="Cans")
    )
    assert updated.description == "Cans"


def test_category_of_other_tenant_is_not_found(db, acme, globex, make_category):
    category = make_category(globex, name="Secret")

    assert crud.category.get(db, tenant=acme, id=category.id) is None
    with pytest.raises(NotFound):
        crud.category.update(db, tenant=acme, id=category.id, obj_in=schemas.CategoryUpdate(name="Mine"))
    with pytest.raises(NotFound):
        crud.category.remove(db, tenant=acme, id=category.id)


def test_delete_category_in_use_then_after_products_move(db, acme, make_category, make_product):
    tools = make_category(acme, name="Tools")
    first = make_product(acme, name="Hammer", category_id=tools.id)
    second = make_product(acme, name="Saw", category_id=tools.id)

    with pytest.raises(InUse) as exc_info:
        crud.category.remove(db, tenant=acme, id=tools.id)
    assert exc_info.value.count == 2

    for product in (first, second):
        crud.product.update(db, tenant=acme, id=product.product_id, obj_in=schemas.ProductUpdate(category_id=None))

    crud.category.remove(db, tenant=acme, id=tools.id)
    assert crud.category.get(db, tenant=acme, id=tools.id) is None


def test_foreign_key_refusal_at_delete_is_reported_as_in_use(db, acme, make_category, make_product, monkeypatch):
    tools = make_category(acme, name="Tools")
    make_product(acme, name="Hammer", category_id=tools.id)

    real_count = crud.category.count_references
    calls = []

    def stale_then_real(db, *, tenant, id):
        calls.append(id)
        if len(calls) == 1:
            return 0
        return real_count(db, tenant=tenant, id=id)

    monkeypatch.setattr(crud.category, "count_references", stale_then_real)

    with pytest.raises(InUse) as exc_info:
        crud.category.remove(db, tenant=acme, id=tools.id)
    assert exc_info.value.count == 1
    assert crud.category.get(db, tenant=acme, id=tools.id) is not None


def test_supplier_in_use(db, acme, make_supplier, make_product):
    supplier = make_supplier(acme, name="Bolts R Us", contact_person="Ann", email="ann@bolts.test")
    make_product(acme, supplier_id=supplier.id)

    with pytest.raises(InUse) as exc_info:
        crud.supplier.remove(db, tenant=acme, id=supplier.id)
    assert exc_info.value.count == 1


def test_category_list_is_paginated_by_name(db, acme, make_category):
    for n in range(25, 0, -1):
        make_category(acme, name=f"Category {n:02d}")

    params = schemas.PageParams(page=2, page_size=10)
    items, total = crud.category.list(db, tenant=acme, params=params)
    page = schemas.Page.build(items, total, params)

    assert total == 25
    assert page.total_pages == 3
    assert [c.name for c in items] == [f"Category {n:02d}" for n in range(11, 21)]

    last, _ = crud.category.list(db, tenant=acme, params=schemas.PageParams(page=3, page_size=10))
    assert len(last) == 5


def test_empty_list_has_zero_pages(db, acme):
    params = schemas.PageParams(page=1, page_size=10)
    items, total = crud.category.list(db, tenant=acme, params=params)
    assert items == []
    assert schemas.Page.build(items, total, params).total_pages == 0


def test_invalid_page_is_rejected(db, acme):
    with pytest.raises(InvalidInput):
        crud.category.list(db, tenant=acme, params=schemas.PageParams(page=0, page_size=10))


def test_search_treats_wildcards_literally(db, acme, make_category):
    make_category(acme, name="100% Cotton")
    make_category(acme, name="1000 Cotton")

    items, total = crud.category.list(db, tenant=acme, params=schemas.PageParams(), search="0%")
    assert total == 1
    assert items[0].name == "100% Cotton"


# ============================================================================
# Products
# ============================================================================


def test_product_rejects_category_of_other_tenant(db, acme, globex, make_category, make_product):
    foreign = make_category(globex, name="Theirs")

    with pytest.raises(ForeignKeyViolation) as exc_info:
        make_product(acme, category_id=foreign.id)
    assert exc_info.value.field == "category_id"
    assert crud.product.count(db, tenant=acme) == 0


def test_product_rejects_unknown_supplier(db, acme, make_product):
    with pytest.raises(ForeignKeyViolation):
        make_product(acme, supplier_id=999)


def test_foreign_key_violation_is_invalid_input(db, acme, make_product):
    with pytest.raises(InvalidInput):
        make_product(acme, category_id=999)


def test_product_update_cannot_point_at_other_tenant(db, acme, globex, make_category, make_product):
    foreign = make_category(globex, name="Theirs")
    product = make_product(acme)

    with pytest.raises(ForeignKeyViolation):
        crud.product.update(db, tenant=acme, id=product.product_id, obj_in=schemas.ProductUpdate(category_id=foreign.id))


def test_product_requires_name_and_brand(db, acme, make_product):
    with pytest.raises(InvalidInput):
        make_product(acme, name="  ")
    with pytest.raises(InvalidInput):
        make_product(acme, brand="")


def test_product_update_is_partial(db, acme, make_product):
    product = make_product(acme, name="Widget", brand="Acme", mrp="2.50")
    updated = crud.product.update(
        db, tenant=acme, id=product.product_id, obj_in=schemas.ProductUpdate(name="Gadget")
    )
    assert updated.name == "Gadget"
    assert updated.brand == "Acme"
    assert updated.mrp == Decimal("2.50")


def test_product_list_filters_and_orders_newest_first(db, acme, make_category, make_supplier, make_product):
    tools = make_category(acme, name="Tools")
    vendor = make_supplier(acme, name="Vendor")
    hammer = make_product(acme, name="Hammer", brand="Stanley", category_id=tools.id)
    saw = make_product(acme, name="Saw", brand="Bosch", category_id=tools.id, supplier_id=vendor.id)
    make_product(acme, name="Paint", brand="Dulux")

    params = schemas.PageParams()
    items, total = crud.product.list(db, tenant=acme, params=params, filters=schemas.ProductFilter(category_id=tools.id))
    assert total == 2
    assert [p.product_id for p in items] == [saw.product_id, hammer.product_id]

    items, _ = crud.product.list(db, tenant=acme, params=params, filters=schemas.ProductFilter(supplier_id=vendor.id))
    assert [p.name for p in items] == ["Saw"]

    items, _ = crud.product.list(db, tenant=acme, params=params, filters=schemas.ProductFilter(search="stan"))
    assert [p.name for p in items] == ["Hammer"]


def test_product_delete_removes_its_inventory(db, acme, make_product, make_stock):
    product = make_product(acme)
    make_stock(acme, product, location="Main", quantity=5)
    make_stock(acme, product, location="Annex", quantity=2)

    crud.product.remove(db, tenant=acme, id=product.product_id)

    assert crud.product.get(db, tenant=acme, id=product.product_id) is None
    assert crud.inventory.list_for_product(db, tenant=acme, product_id=product.product_id) == []


def test_product_of_other_tenant_cannot_be_deleted(db, acme, globex, make_product):
    product = make_product(globex)
    with pytest.raises(NotFound):
        crud.product.remove(db, tenant=acme, id=product.product_id)
    assert crud.product.get(db, tenant=globex, id=product.product_id) is not None
