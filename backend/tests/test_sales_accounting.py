from decimal import Decimal

from models.journal_entry import JournalEntry


def _sale_payload(customer_id=None, **overrides):
    payload = {
        "customer_id": customer_id,
        "total_amount": "100.00",
        "tax": "14.00",
        "grand_total": "114.00",
        "payment_method": "credit",
        "payment_status": "pending",
        "payment_terms": "30",
    }
    payload.update(overrides)
    return payload


def test_credit_sale_posts_invoice_entry(client, seeded, customer, balance_of):
    resp = client.post("/api/sales", json=_sale_payload(customer["id"]))

    assert resp.status_code == 201
    body = resp.json()
    assert body["sale"]["invoice_number"].startswith("INV-")
    assert body["journal_entry_number"] is not None

    entries = client.get("/api/journal-entries", params={"source_type": "invoice"}).json()
    assert len(entries) == 1
    assert entries[0]["source_id"] == body["sale"]["id"]
    assert Decimal(entries[0]["total_debit"]) == Decimal("114.00")

    assert balance_of("1200") == Decimal("114.00")
    assert balance_of("4100") == Decimal("-100.00")
    assert balance_of("2200") == Decimal("-14.00")

    updated = client.get(f"/api/customers/{customer['id']}").json()
    assert Decimal(updated["total_purchases"]) == Decimal("114.00")


def test_cash_sale_without_customer_is_not_journalised(client, seeded):
    resp = client.post("/api/sales", json=_sale_payload(payment_status="completed"))

    assert resp.status_code == 201
    body = resp.json()
    assert body["journal_entry_number"] is None
    assert Decimal(body["sale"]["amount_paid"]) == Decimal("114.00")
    assert seeded.query(JournalEntry).count() == 0


def test_sale_survives_missing_accounts(client, customer, db):
    # No chart of accounts: the journal entry fails but the sale is kept
    resp = client.post("/api/sales", json=_sale_payload(customer["id"]))

    assert resp.status_code == 201
    assert resp.json()["journal_entry_number"] is None
    assert len(client.get("/api/sales").json()) == 1
    assert db.query(JournalEntry).count() == 0


def test_sale_for_unknown_customer_is_404(client, seeded):
    resp = client.post("/api/sales", json=_sale_payload(999))
    assert resp.status_code == 404


def test_sale_items_take_stock(client, seeded, customer):
    product = client.post("/api/products", json={
        "name": "Paracetamol 500mg",
        "drug_name": "Paracetamol",
        "sku": "PARA-500",
        "selling_price": "10.00",
        "quantity": 20,
    }).json()

    resp = client.post("/api/sales", json=_sale_payload(
        customer["id"],
        items=[{"product_id": product["id"], "quantity": 5, "unit_price": "20.00"}],
    ))
    assert resp.status_code == 201
    assert len(resp.json()["sale"]["items"]) == 1

    products = client.get("/api/products").json()
    assert products[0]["quantity"] == 15

    resp = client.post("/api/sales", json=_sale_payload(
        customer["id"],
        items=[{"product_id": product["id"], "quantity": 50, "unit_price": "20.00"}],
    ))
    assert resp.status_code == 400
    assert "Insufficient stock" in resp.json()["detail"]


def test_get_sale_404(client):
    assert client.get("/api/sales/12345").status_code == 404


def test_expense_posts_to_category_account(client, seeded, balance_of):
    resp = client.post("/api/expenses", json={
        "description": "October electricity bill",
        "amount": "250.00",
        "category": "Utilities",
        "date": "2026-10-10",
        "vendor": "Cairo Electricity",
    })

    assert resp.status_code == 201
    assert resp.json()["journal_entry_number"] is not None
    assert balance_of("6300") == Decimal("250.00")
    assert balance_of("1100") == Decimal("-250.00")


def test_expense_with_unknown_category_uses_office_expenses(client, seeded, balance_of):
    client.post("/api/expenses", json={
        "description": "Courier",
        "amount": "40.00",
        "category": "Shipping",
        "date": "2026-10-11",
    })
    assert balance_of("6100") == Decimal("40.00")


def test_expenses_filtered_by_date(client, seeded):
    for day in ("2026-09-30", "2026-10-02"):
        client.post("/api/expenses", json={"description": f"Supplies {day}", "amount": "10", "date": day})

    resp = client.get("/api/expenses", params={"start_date": "2026-10-01", "end_date": "2026-10-31"})
    assert [e["date"] for e in resp.json()] == ["2026-10-02"]


def test_user_header_takes_precedence_over_payload(client, seeded, customer):
    resp = client.post(
        "/api/sales",
        json=_sale_payload(customer["id"], user_id=7),
        headers={"X-User-ID": "3"},
    )

    assert resp.status_code == 201
    assert resp.json()["sale"]["user_id"] == 3
    entries = client.get("/api/journal-entries", params={"source_type": "invoice"}).json()
    assert entries[0]["user_id"] == 3

    without_header = client.post("/api/sales", json=_sale_payload(customer["id"], user_id=7))
    assert without_header.json()["sale"]["user_id"] == 7


def test_expense_user_falls_back_to_payload_then_default(client, seeded):
    expense = {
        "description": "Courier",
        "amount": "40.00",
        "category": "Travel",
        "date": "2026-10-12",
    }

    from_header = client.post("/api/expenses", json={**expense, "user_id": 9}, headers={"X-User-ID": "4"})
    from_payload = client.post("/api/expenses", json={**expense, "user_id": 9})
    defaulted = client.post("/api/expenses", json=expense)

    assert from_header.json()["expense"]["user_id"] == 4
    assert from_payload.json()["expense"]["user_id"] == 9
    assert defaulted.json()["expense"]["user_id"] == 1
