import os
import sys
import tempfile
from decimal import Decimal

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

# The engine is built at import time, so the test database must be chosen first
TEST_DB_DIR = tempfile.mkdtemp(prefix="invento-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DB_DIR, 'test.db')}"
os.environ["SQLITE_BUSY_TIMEOUT"] = "30"

from fastapi.testclient import TestClient  # noqa: E402

from invento import crud, schemas  # noqa: E402
from invento.db.database import Base, SessionLocal, engine, get_db  # noqa: E402
from invento.main import app  # noqa: E402
import invento.models  # noqa: E402,F401


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    def override_get_db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _register(db, tenant_id, org_name, active=True):
    crud.tenant.create(db, obj_in=schemas.TenantCreate(tenant_id=tenant_id, org_name=org_name, active=active))


@pytest.fixture
def acme(db):
    _register(db, "acme", "Acme Corp")
    return crud.tenant.resolve(db, token="acme")


@pytest.fixture
def globex(db):
    _register(db, "globex", "Globex Inc")
    return crud.tenant.resolve(db, token="globex")


@pytest.fixture
def dormant(db):
    _register(db, "dormant", "Dormant Ltd", active=False)
    return "dormant"


@pytest.fixture
def make_category(db):
    def _make(tenant, name="Hardware", description=None):
        return crud.category.create(
            db, tenant=tenant, obj_in=schemas.CategoryCreate(name=name, description=description)
        )

    return _make


@pytest.fixture
def make_supplier(db):
    def _make(tenant, name="Wholesale Co", **fields):
        return crud.supplier.create(db, tenant=tenant, obj_in=schemas.SupplierCreate(name=name, **fields))

    return _make


@pytest.fixture
def make_product(db):
    def _make(tenant, name="Widget", brand="Acme", purchase_price="1.00", mrp="2.00", **fields):
        return crud.product.create(
            db,
            tenant=tenant,
            obj_in=schemas.ProductCreate(
                name=name,
                brand=brand,
                purchase_price=Decimal(purchase_price),
                mrp=Decimal(mrp),
                **fields,
            ),
        )

    return _make


@pytest.fixture
def make_stock(db):
    def _make(tenant, product, location="Main", quantity=0, capacity=None):
        return crud.inventory.create(
            db,
            tenant=tenant,
            obj_in=schemas.InventoryCreate(
                product_id=product.product_id, location=location, quantity=quantity, capacity=capacity
            ),
        )

    return _make
