# File: invento/api/v1/api.py
from fastapi import APIRouter

from invento.api.v1.endpoints import (
    categories, dashboard, inventory, products, sales, suppliers, tenants, users,
)

# Routes that act inside one tenant. Mounted twice: under
# /tenants/{tenant_id} and at the root, where X-Tenant-ID names the tenant.
tenant_router = APIRouter()

tenant_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"]
)

tenant_router.include_router(
    suppliers.router,
    prefix="/suppliers",
    tags=["suppliers"]
)

tenant_router.include_router(
    products.router,
    prefix="/products",
    tags=["products"]
)

tenant_router.include_router(
    inventory.router,
    prefix="/inventory",
    tags=["inventory"]
)

tenant_router.include_router(
    sales.router,
    prefix="/sales",
    tags=["sales"]
)

tenant_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

tenant_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["dashboard"]
)

# Create main API router
api_router = APIRouter()

api_router.include_router(tenants.router, tags=["tenants"])
api_router.include_router(tenant_router, prefix="/tenants/{tenant_id}")
api_router.include_router(tenant_router)


@api_router.get("/", tags=["root"])
async def api_root():
    """API v1 root endpoint"""
    return {
        "message": "Invento Ledger API v1",
        "version": "1.0.0",
        "endpoints": {
            "categories": "/tenants/{tenant_id}/categories - Product categories",
            "suppliers": "/tenants/{tenant_id}/suppliers - Suppliers",
            "products": "/tenants/{tenant_id}/products - Product catalog",
            "inventory": "/tenants/{tenant_id}/inventory - Stock per location",
            "sales": "/tenants/{tenant_id}/sales - Sales ledger",
            "users": "/tenants/{tenant_id}/users - Tenant users",
            "dashboard": "/tenants/{tenant_id}/dashboard - Stock and sales analytics",
        },
    }
