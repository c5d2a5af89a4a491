"""HTTP layer: auth, role gates, error mapping and the main flows end to end."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from models.log import Log


def _product_payload(kode_brg="BRG001", **overrides):
    payload = {
        "kode_brg": kode_brg,
        "nama_brg": "Indomie Goreng",
        "satuan_default": "PCS",
        "isi_per_satuan": "1",
        "harga_beli": "2500",
        "harga_jual": "3000",
        "stok_min": "10",
        "stok_max": "100",
    }
    payload.update(overrides)
    return payload


def _purchase_payload(kode_brg, f_beli="PB-1", jumlah="50", **overrides):
    payload = {
        "f_beli": f_beli,
        "tgl_beli": "2024-01-15",
        "kode_brg": kode_brg,
        "nama_brg": "Indomie Goreng",
        "jumlah": jumlah,
        "satuan": "PCS",
        "hrg_beli": "2500",
    }
    payload.update(overrides)
    return payload


def _sale_payload(kode_brg, f_jual="FJ-1", jumlah="5", **overrides):
    payload = {
        "tgl_jual": "2024-02-01",
        "f_jual": f_jual,
        "kode_brg": kode_brg,
        "nama_brg": "Indomie Goreng",
        "jumlah": jumlah,
        "satuan": "PCS",
        "hrg_jual": "3000",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def product_id(client, auth):
    response = client.post("/products", json=_product_payload(), headers=auth("manager"))
    assert response.status_code == 201, response.text
    return response.json()["id"]


def _stock(client, auth, product_id):
    return Decimal(client.get(f"/products/{product_id}", headers=auth("admin")).json()["current_stock"])


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


def test_healthcheck(client):
    assert client.get("/healthcheck").json() == {"status": "ok"}


def test_login_and_me(client, db):
    response = client.post("/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert me.json()["role"] == "admin"
    assert db.query(Log).filter(Log.action == "LOGIN", Log.status == "SUCCESS").count() == 1


def test_login_with_wrong_password(client, db):
    response = client.post("/login", json={"username": "admin", "password": "nope"})
    assert response.status_code == 401
    assert db.query(Log).filter(Log.action == "LOGIN", Log.status == "FAIL").count() == 1


def test_register_then_duplicate(client):
    body = {"username": "budi", "email": "budi@example.com", "password": "secret1"}
    first = client.post("/register", json=body)
    assert first.status_code == 201
    assert first.json()["role"] == "cashier"

    assert client.post("/register", json=body).status_code == 400


def test_register_ignores_requested_role(client):
    body = {"username": "eve", "email": "eve@example.com", "password": "secret1", "role": "admin"}
    response = client.post("/register", json=body)

    assert response.status_code == 201
    assert response.json()["role"] == "cashier"

    login = client.post("/login", json={"username": "eve", "password": "secret1"})
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
    assert client.get("/logs", headers=headers).status_code == 403


def test_only_admin_changes_roles(client, auth, users):
    target = users["cashier"].id

    refused = client.put(f"/users/{target}/role", json={"role": "manager"}, headers=auth("manager"))
    assert refused.status_code == 403

    changed = client.put(f"/users/{target}/role", json={"role": "warehouse"}, headers=auth("admin"))
    assert changed.status_code == 200
    assert changed.json()["role"] == "warehouse"
    listed = client.get("/users", params={"role": "warehouse"}, headers=auth("admin")).json()
    assert {u["username"] for u in listed} == {"cashier", "warehouse"}

    missing = client.put("/users/999/role", json={"role": "manager"}, headers=auth("admin"))
    assert missing.status_code == 404


def test_requests_without_token_are_refused(client):
    assert client.get("/products").status_code in (401, 403)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def test_cashier_cannot_edit_catalog(client, auth):
    response = client.post("/products", json=_product_payload(), headers=auth("cashier"))
    assert response.status_code == 403


def test_duplicate_product_code_is_conflict(client, auth, product_id):
    response = client.post("/products", json=_product_payload(), headers=auth("manager"))
    assert response.status_code == 409
    assert response.json() == {"detail": "Product code BRG001 already exists", "error": "DuplicateCode"}


def test_missing_product_is_404(client, auth):
    response = client.get("/products/999", headers=auth("admin"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Product with ID 999 not found"


def test_product_lookups(client, auth, product_id):
    headers = auth("cashier")
    assert client.get("/products/by-code/BRG001", headers=headers).json()["id"] == product_id
    assert [p["id"] for p in client.get("/products/search", params={"q": "indo"}, headers=headers).json()] == [product_id]
    # fresh product sits at 0, below its minimum of 10
    assert [p["id"] for p in client.get("/products/low-stock", headers=headers).json()] == [product_id]


def test_patch_and_deactivate_product(client, auth, product_id):
    headers = auth("admin")
    patched = client.patch(f"/products/{product_id}", json={"harga_jual": "3200"}, headers=headers)
    assert patched.status_code == 200
    assert Decimal(patched.json()["harga_jual"]) == Decimal("3200")

    assert client.patch(f"/products/{product_id}", json={"current_stock": "99"}, headers=headers).status_code == 422

    assert client.delete(f"/products/{product_id}", headers=headers).json()["is_active"] is False
    assert client.get("/products", headers=headers).json() == []


def test_categories_and_units(client, auth):
    headers = auth("manager")
    category = client.post("/categories", json={"name": "Food"}, headers=headers)
    assert category.status_code == 201

    base = client.post("/units", json={"name": "Pieces", "abbreviation": "PCS", "conversion_factor": "1"}, headers=headers)
    box = client.post(
        "/units",
        json={"name": "Box", "abbreviation": "BOX", "conversion_factor": "12", "base_unit_id": base.json()["id"]},
        headers=headers,
    )
    assert box.status_code == 201

    bad = client.post(
        "/units",
        json={"name": "Crate", "abbreviation": "CRT", "conversion_factor": "24", "base_unit_id": 999},
        headers=headers,
    )
    assert bad.status_code == 400
    assert len(client.get("/units", headers=headers).json()) == 2

    product = client.post(
        "/products", json=_product_payload(kategori_id=category.json()["id"]), headers=headers
    )
    assert product.status_code == 201
    assert client.post("/products", json=_product_payload("BRG002", kategori_id=777), headers=headers).status_code == 400


# ---------------------------------------------------------------------------
# Stock, purchases, sales
# ---------------------------------------------------------------------------


def test_purchase_sale_and_reversal_flow(client, auth, db, product_id):
    purchase = client.post("/purchases", json=_purchase_payload("BRG001"), headers=auth("warehouse"))
    assert purchase.status_code == 201, purchase.text
    assert _stock(client, auth, product_id) == Decimal("50")

    sale = client.post("/sales", json=_sale_payload("BRG001"), headers=auth("cashier"))
    assert sale.status_code == 201, sale.text
    assert Decimal(sale.json()["total"]) == Decimal("15000")
    assert _stock(client, auth, product_id) == Decimal("45")

    assert client.delete(f"/sales/{sale.json()['id']}", headers=auth("cashier")).status_code == 204
    assert _stock(client, auth, product_id) == Decimal("50")

    actions = {log.action for log in db.query(Log)}
    assert {"PURCHASE_CREATE", "SALE_CREATE", "SALE_DELETE"} <= actions


def test_insufficient_stock_is_conflict(client, auth, product_id):
    client.post("/purchases", json=_purchase_payload("BRG001", jumlah="3"), headers=auth("warehouse"))

    response = client.post("/sales", json=_sale_payload("BRG001", jumlah="5"), headers=auth("cashier"))

    assert response.status_code == 409
    assert response.json()["detail"] == "Insufficient stock. Available: 3, Required: 5"
    assert _stock(client, auth, product_id) == Decimal("3")


def test_discount_percent_out_of_range_is_rejected(client, auth, product_id):
    response = client.post("/sales", json=_sale_payload("BRG001", disc1="120"), headers=auth("cashier"))
    assert response.status_code == 422


def test_role_gates_on_transactions(client, auth, product_id):
    assert client.post("/sales", json=_sale_payload("BRG001"), headers=auth("warehouse")).status_code == 403
    assert client.post("/purchases", json=_purchase_payload("BRG001"), headers=auth("cashier")).status_code == 403
    assert client.get("/logs", headers=auth("manager")).status_code == 403


def test_manual_adjustment_and_listing(client, auth, product_id):
    headers = auth("warehouse")
    created = client.post(
        "/stock/adjustments",
        json={"product_id": product_id, "adjustment_type": "in", "quantity": "12", "reason": "Found in back room"},
        headers=headers,
    )
    assert created.status_code == 201
    assert created.json()["user_id"] is not None

    client.post(
        "/stock/adjustments",
        json={"product_id": product_id, "adjustment_type": "out", "quantity": "20", "reason": "Expired"},
        headers=headers,
    )
    assert _stock(client, auth, product_id) == Decimal("0")

    today = datetime.now(timezone.utc).date().isoformat()
    listed = client.get(
        "/stock/adjustments",
        params={"product_id": product_id, "start_date": today, "end_date": today},
        headers=headers,
    )
    assert [e["adjustment_type"] for e in listed.json()] == ["in", "out"]

    assert client.get("/stock/adjustments", params={"start_date": today}, headers=headers).status_code == 422


def test_opname_endpoint(client, auth, product_id):
    client.post("/purchases", json=_purchase_payload("BRG001"), headers=auth("warehouse"))

    body = {"items": [{"product_id": product_id, "actual_quantity": "45"}, {"product_id": 999, "actual_quantity": "1"}]}
    response = client.post("/stock/opname", json=body, headers=auth("warehouse"))

    assert response.status_code == 200
    assert response.json() == {
        "success": 1,
        "failed": 1,
        "unchanged": 0,
        "errors": ["Product with ID 999 not found"],
    }
    assert _stock(client, auth, product_id) == Decimal("45")


def test_import_endpoints(client, auth, product_id):
    rows = [
        _purchase_payload("BRG001", f_beli="IMP-1", jumlah=10),
        _purchase_payload("NOPE", f_beli="IMP-2", jumlah=10),
        _purchase_payload("BRG001", f_beli="IMP-3", jumlah=5),
    ]
    response = client.post("/purchases/import", json=rows, headers=auth("warehouse"))

    assert response.status_code == 200
    assert response.json() == {"success": 2, "failed": 1, "errors": ["Row 2: Product with code NOPE not found"]}

    sales_rows = [_sale_payload("BRG001", f_jual="S-1", jumlah=20)]
    result = client.post("/sales/import", json=sales_rows, headers=auth("cashier")).json()
    assert result == {"success": 0, "failed": 1, "errors": ["Row 1: Insufficient stock. Available: 15, Required: 20"]}


def test_purchase_listing_filters(client, auth, product_id):
    headers = auth("warehouse")
    client.post("/purchases", json=_purchase_payload("BRG001", f_beli="P1", tgl_beli="2024-05-01", codesup="A"), headers=headers)
    client.post("/purchases", json=_purchase_payload("BRG001", f_beli="P2", tgl_beli="2024-05-09", codesup="B"), headers=headers)

    by_range = client.get("/purchases", params={"start_date": "2024-05-01", "end_date": "2024-05-01"}, headers=headers)
    assert [p["f_beli"] for p in by_range.json()] == ["P1"]
    by_supplier = client.get("/purchases", params={"codesup": "B"}, headers=headers)
    assert [p["f_beli"] for p in by_supplier.json()] == ["P2"]


def test_admin_reads_audit_log(client, auth, product_id):
    response = client.get("/logs", params={"action": "PRODUCT_CREATE"}, headers=auth("admin"))
    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["resource_id"] == str(product_id)


def test_import_reports_non_object_rows_without_failing_the_batch(client, auth, product_id):
    rows = [_purchase_payload("BRG001", f_beli="IMP-1", jumlah=10), None, "oops", _purchase_payload("BRG001", f_beli="IMP-2", jumlah=2)]

    response = client.post("/purchases/import", json=rows, headers=auth("warehouse"))

    assert response.status_code == 200
    body = response.json()
    assert (body["success"], body["failed"]) == (2, 2)
    assert body["errors"][0].startswith("Row 2: ")
    assert body["errors"][1].startswith("Row 3: ")
    assert _stock(client, auth, product_id) == Decimal("12")

    sales = client.post("/sales/import", json=[None], headers=auth("cashier")).json()
    assert (sales["success"], sales["failed"]) == (0, 1)


def test_quantity_with_three_decimals_is_422(client, auth, product_id):
    client.post("/purchases", json=_purchase_payload("BRG001"), headers=auth("warehouse"))

    response = client.post(
        "/stock/adjustments",
        json={"product_id": product_id, "adjustment_type": "out", "quantity": "0.004", "reason": "Spill"},
        headers=auth("warehouse"),
    )

    assert response.status_code == 422
    assert _stock(client, auth, product_id) == Decimal("50")
