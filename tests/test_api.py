from invento.models.inventory import MAX_QUANTITY

API = "/api/v1"


def scoped(tenant_id, path):
    return f"{API}/tenants/{tenant_id}{path}"


def create_product(client, tenant_id, **fields):
    payload = {"name": "Widget", "brand": "Acme", "purchase_price": "2.00", "mrp": "3.00"}
    payload.update(fields)
    response = client.post(scoped(tenant_id, "/products/"), json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ============================================================================
# Gateway
# ============================================================================


def test_root_banner(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_requests_carry_process_time(client):
    assert "x-process-time" in client.get("/").headers


def test_get_tenant_by_path_and_header(client, acme):
    by_path = client.get(f"{API}/tenants/acme")
    assert by_path.status_code == 200
    assert by_path.json()["data"]["org_name"] == "Acme Corp"

    by_header = client.get(f"{API}/tenant", headers={"X-Tenant-ID": "acme"})
    assert by_header.json()["data"]["tenant_id"] == "acme"


def test_missing_tenant_is_bad_request(client):
    response = client.get(f"{API}/categories/")
    assert response.status_code == 400
    assert response.json()["error"] == "InvalidInput"
    assert response.json()["success"] is False


def test_unknown_tenant_is_not_found(client, acme):
    response = client.get(scoped("initech", "/categories/"))
    assert response.status_code == 404
    assert response.json()["error"] == "NotFound"


def test_inactive_tenant_is_forbidden(client, dormant):
    response = client.get(scoped(dormant, "/products/"))
    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "error": "TenantInactive",
        "message": "Tenant account is inactive",
    }


def test_path_segment_wins_over_header(client, acme, globex):
    client.post(scoped("globex", "/categories/"), json={"name": "Globex only"})

    response = client.get(scoped("acme", "/categories/"), headers={"X-Tenant-ID": "globex"})
    assert response.json()["data"] == []


# ============================================================================
# Catalog
# ============================================================================


def test_category_lifecycle(client, acme):
    created = client.post(scoped("acme", "/categories/"), json={"name": " Tools ", "description": "Hand tools"})
    assert created.status_code == 201
    category = created.json()["data"]
    assert category["name"] == "Tools"

    duplicate = client.post(scoped("acme", "/categories/"), json={"name": "Tools"})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "DuplicateName"

    renamed = client.put(scoped("acme", f"/categories/{category['id']}"), json={"name": "Hand Tools"})
    assert renamed.json()["data"]["name"] == "Hand Tools"
    assert renamed.json()["data"]["description"] == "Hand tools"

    deleted = client.delete(scoped("acme", f"/categories/{category['id']}"))
    assert deleted.status_code == 200
    assert client.get(scoped("acme", f"/categories/{category['id']}")).status_code == 404


def test_delete_category_in_use_reports_count(client, acme):
    category = client.post(scoped("acme", "/categories/"), json={"name": "Tools"}).json()["data"]
    create_product(client, "acme", name="Hammer", category_id=category["id"])
    create_product(client, "acme", name="Saw", category_id=category["id"])

    response = client.delete(scoped("acme", f"/categories/{category['id']}"))
    assert response.status_code == 409
    assert response.json()["error"] == "InUse"
    assert response.json()["count"] == 2

    products = client.get(scoped("acme", f"/categories/{category['id']}/products"))
    assert products.json()["pagination"]["total"] == 2


def test_cross_tenant_category_reference_is_rejected(client, acme, globex):
    theirs = client.post(scoped("globex", "/categories/"), json={"name": "Theirs"}).json()["data"]

    response = client.post(
        scoped("acme", "/products/"),
        json={"name": "Widget", "brand": "Acme", "purchase_price": "1", "mrp": "2", "category_id": theirs["id"]},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "ForeignKeyViolation"


def test_other_tenant_product_is_invisible(client, acme, globex):
    product = create_product(client, "globex")
    assert client.get(scoped("acme", f"/products/{product['product_id']}")).status_code == 404
    assert client.delete(scoped("acme", f"/products/{product['product_id']}")).status_code == 404


def test_negative_price_fails_validation(client, acme):
    response = client.post(
        scoped("acme", "/products/"),
        json={"name": "Widget", "brand": "Acme", "purchase_price": "-1", "mrp": "2"},
    )
    assert response.status_code == 422


def test_product_list_pagination_envelope(client, acme):
    for n in range(12):
        create_product(client, "acme", name=f"Item {n}")

    response = client.get(scoped("acme", "/products/"), params={"page": 2, "limit": 5})
    body = response.json()
    assert body["success"] is True
    assert len(body["data"]) == 5
    assert body["pagination"] == {"page": 2, "limit": 5, "total": 12, "totalPages": 3}


def test_page_size_above_maximum_is_rejected(client, acme):
    assert client.get(scoped("acme", "/products/"), params={"limit": 1000}).status_code == 422


# ============================================================================
# Inventory, sales and dashboard
# ============================================================================


def test_inventory_flow_over_header_routes(client, acme):
    headers = {"X-Tenant-ID": "acme"}
    product = create_product(client, "acme", name="Widget", brand="Acme")
    product_id = product["product_id"]

    created = client.post(
        f"{API}/inventory/", json={"product_id": product_id, "location": "Main", "quantity": 5}, headers=headers
    )
    assert created.status_code == 201
    assert created.json()["data"]["products"]["name"] == "Widget"

    again = client.post(
        f"{API}/inventory/", json={"product_id": product_id, "location": "Main", "quantity": 1}, headers=headers
    )
    assert again.status_code == 409
    assert again.json()["error"] == "DuplicateKey"

    subtracted = client.put(
        f"{API}/inventory/{product_id}/Main", json={"quantity": 8, "operation": "subtract"}, headers=headers
    )
    assert subtracted.json()["data"]["quantity"] == 0

    added = client.put(
        f"{API}/inventory/{product_id}/Main", json={"quantity": 3, "operation": "add"}, headers=headers
    )
    assert added.json()["data"]["quantity"] == 3

    low = client.get(f"{API}/inventory/alerts/low-stock", params={"threshold": 5}, headers=headers)
    assert low.json()["count"] == 1

    negative = client.put(f"{API}/inventory/{product_id}/Main", json={"quantity": -2, "operation": "add"}, headers=headers)
    assert negative.status_code == 400

    missing = client.put(f"{API}/inventory/{product_id}/Elsewhere", json={"quantity": 2}, headers=headers)
    assert missing.status_code == 404

    assert client.delete(f"{API}/inventory/{product_id}/Main", headers=headers).status_code == 200
    assert client.get(f"{API}/inventory/{product_id}/Main", headers=headers).status_code == 404


def test_sale_updates_stock_and_dashboard(client, acme):
    product = create_product(client, "acme", purchase_price="10.005")
    product_id = product["product_id"]
    client.post(scoped("acme", "/inventory/"), json={"product_id": product_id, "location": "Shop", "quantity": 5})

    sale = client.post(
        scoped("acme", "/sales/"),
        json={"product_id": product_id, "quantity": 2, "selling_price": "15.00", "location": "Shop"},
    )
    assert sale.status_code == 201

    record = client.get(scoped("acme", f"/inventory/{product_id}/Shop")).json()["data"]
    assert record["quantity"] == 3

    stats = client.get(scoped("acme", "/dashboard/stats")).json()["data"]
    assert stats["recentSales"] == 1
    assert stats["lowStock"] == 1
    assert float(stats["totalValue"]) == 30.02

    top = client.get(scoped("acme", "/dashboard/top-products")).json()["data"]
    assert top == [{"product_id": product_id, "name": "Widget", "brand": "Acme", "totalSold": 2}]


def test_quantities_beyond_column_range(client, acme):
    headers = {"X-Tenant-ID": "acme"}
    product_id = create_product(client, "acme")["product_id"]

    too_big = client.post(
        f"{API}/inventory/", json={"product_id": product_id, "location": "M2", "quantity": 2**63}, headers=headers
    )
    assert too_big.status_code == 422

    created = client.post(
        f"{API}/inventory/", json={"product_id": product_id, "location": "M2", "quantity": MAX_QUANTITY}, headers=headers
    )
    assert created.status_code == 201

    overflow = client.put(f"{API}/inventory/{product_id}/M2", json={"quantity": 1, "operation": "add"}, headers=headers)
    assert overflow.status_code == 400
    assert overflow.json()["error"] == "InvalidInput"

    record = client.get(f"{API}/inventory/{product_id}/M2", headers=headers).json()["data"]
    assert record["quantity"] == MAX_QUANTITY

    sale = client.post(
        f"{API}/sales/", json={"product_id": product_id, "quantity": MAX_QUANTITY + 1, "selling_price": "1"}, headers=headers
    )
    assert sale.status_code == 422


def test_dashboard_category_stats_unknown_category(client, acme):
    response = client.get(scoped("acme", "/dashboard/categories/999/stats"))
    assert response.status_code == 404


def test_user_email_unique_per_tenant(client, acme, globex):
    created = client.post(scoped("acme", "/users/"), json={"name": "Ann", "email": "Ann@Acme.test"})
    assert created.status_code == 201
    assert created.json()["data"]["email"] == "ann@acme.test"

    clash = client.post(scoped("acme", "/users/"), json={"name": "Ann B", "email": "ann@acme.test"})
    assert clash.status_code == 409

    elsewhere = client.post(scoped("globex", "/users/"), json={"name": "Ann", "email": "ann@acme.test"})
    assert elsewhere.status_code == 201


def test_recent_activity_is_documented_as_products(client):
    schema = client.get(f"{API}/openapi.json").json()
    operation = schema["paths"][f"{API}/tenants/{{tenant_id}}/dashboard/recent-activity"]["get"]
    assert operation["description"] == "Get recently updated products"
