from decimal import Decimal

import pytest


@pytest.fixture
def supplier(client):
    return client.post("/api/suppliers", json={"name": "ChemCorp Egypt", "supplier_type": "Local"}).json()


@pytest.fixture
def product(client):
    return client.post("/api/products", json={
        "name": "Amoxicillin 250mg",
        "drug_name": "Amoxicillin",
        "sku": "AMOX-250",
        "quantity": 5,
    }).json()


def _order(client, supplier, product, **overrides):
    payload = {
        "supplier_id": supplier["id"],
        "order_date": "2026-10-10",
        "transportation_cost": "20.00",
        "items": [{"product_id": product["id"], "quantity": 10, "unit_price": "5.00"}],
    }
    payload.update(overrides)
    return client.post("/api/purchase-orders", json=payload)


def test_create_purchase_order_totals_items_and_transport(client, supplier, product):
    resp = _order(client, supplier, product)

    assert resp.status_code == 201
    po = resp.json()
    assert po["po_number"] == "PO-00001"
    assert po["status"] == "pending"
    assert Decimal(po["total_amount"]) == Decimal("70.00")
    assert Decimal(po["items"][0]["total"]) == Decimal("50.00")


def test_purchase_order_validation(client, supplier, product):
    assert _order(client, {"id": 999}, product).status_code == 404
    assert _order(client, supplier, {"id": 999}).status_code == 400
    assert client.get("/api/purchase-orders").json() == []


def test_approve_purchase_receives_stock_and_posts_entry(client, seeded, supplier, product, balance_of):
    po = _order(client, supplier, product).json()

    resp = client.patch(f"/api/accounting/approve-purchase/{po['id']}")

    assert resp.status_code == 200
    result = resp.json()
    assert result["purchase_order"]["status"] == "received"
    assert result["journal_entry_number"] is not None
    assert client.get("/api/products").json()[0]["quantity"] == 15
    assert balance_of("1300") == Decimal("70.00")
    assert balance_of("2100") == Decimal("-70.00")

    again = client.patch(f"/api/accounting/approve-purchase/{po['id']}")
    assert again.status_code == 400
    assert client.patch("/api/accounting/approve-purchase/999").status_code == 404


def test_status_updates(client, seeded, supplier, product, balance_of):
    po = _order(client, supplier, product).json()

    assert client.patch(f"/api/purchase-orders/{po['id']}/status", json={"status": "archived"}).status_code == 400

    sent = client.patch(f"/api/purchase-orders/{po['id']}/status", json={"status": "sent"})
    assert sent.json()["status"] == "sent"
    assert client.get("/api/purchase-orders", params={"status": "sent"}).json()[0]["id"] == po["id"]

    received = client.patch(f"/api/purchase-orders/{po['id']}/status", json={"status": "received"})
    assert received.json()["status"] == "received"
    assert balance_of("1300") == Decimal("70.00")


def test_rejected_order_cannot_be_received(client, seeded, supplier, product):
    po = _order(client, supplier, product).json()
    client.patch(f"/api/purchase-orders/{po['id']}/status", json={"status": "rejected"})

    assert client.patch(f"/api/accounting/approve-purchase/{po['id']}").status_code == 400


def test_duplicate_supplier_and_sku(client, supplier, product):
    assert client.post("/api/suppliers", json={"name": "ChemCorp Egypt"}).status_code == 400
    assert client.post("/api/products", json={"name": "Copy", "drug_name": "Copy", "sku": "AMOX-250"}).status_code == 400
