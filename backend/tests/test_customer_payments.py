from decimal import Decimal


def _invoice(client, customer_id, grand_total="114.00", payment_terms="30"):
    return client.post("/api/sales", json={
        "customer_id": customer_id,
        "total_amount": "100.00",
        "tax": "14.00",
        "grand_total": grand_total,
        "payment_status": "pending",
        "payment_terms": payment_terms,
    }).json()["sale"]


def test_partial_payment_allocated_to_invoice(client, seeded, customer, balance_of):
    invoice = _invoice(client, customer["id"])

    resp = client.post("/api/customer-payments", json={
        "customer_id": customer["id"],
        "amount": "50.00",
        "payment_date": "2026-10-15",
        "payment_method": "bank_transfer",
        "reference": "TRX-778",
        "allocations": [{"invoice_id": invoice["id"], "amount": "50.00"}],
    })

    assert resp.status_code == 201
    payment = resp.json()
    assert payment["payment_number"] == "PAY-0001"
    assert payment["customer_name"] == customer["name"]
    assert payment["journal_entry_number"] is not None
    assert payment["allocations"][0]["invoice_number"] == invoice["invoice_number"]

    assert balance_of("1100") == Decimal("50.00")
    assert balance_of("1200") == Decimal("64.00")

    open_invoices = client.get("/api/customer-invoices", params={"customer_id": customer["id"]}).json()
    assert len(open_invoices) == 1
    assert Decimal(open_invoices[0]["amount_paid"]) == Decimal("50.00")
    assert Decimal(open_invoices[0]["amount_due"]) == Decimal("64.00")
    assert open_invoices[0]["status"] == "partial"

    listed = client.get("/api/customer-payments", params={"customer_id": customer["id"]}).json()
    assert [p["payment_number"] for p in listed] == ["PAY-0001"]


def test_full_payment_closes_invoice(client, seeded, customer):
    invoice = _invoice(client, customer["id"])
    client.post("/api/customer-payments", json={
        "customer_id": customer["id"],
        "amount": "114.00",
        "payment_date": "2026-10-15",
        "allocations": [{"invoice_id": invoice["id"], "amount": "114.00"}],
    })

    assert client.get(f"/api/sales/{invoice['id']}").json()["payment_status"] == "completed"
    assert client.get("/api/customer-invoices", params={"customer_id": customer["id"]}).json() == []


def test_unpaid_invoice_past_due_is_overdue(client, seeded, customer):
    client.post("/api/sales", json={
        "customer_id": customer["id"],
        "total_amount": "100.00",
        "grand_total": "100.00",
        "payment_status": "pending",
        "payment_terms": "30",
        "date": "2026-01-05T10:00:00",
    })

    open_invoices = client.get("/api/customer-invoices", params={"customer_id": customer["id"]}).json()
    assert open_invoices[0]["due_date"] == "2026-02-04"
    assert open_invoices[0]["status"] == "overdue"


def test_payment_validation(client, seeded, customer):
    invoice = _invoice(client, customer["id"])

    unknown_customer = client.post("/api/customer-payments", json={
        "customer_id": 999, "amount": "10", "payment_date": "2026-10-15",
    })
    assert unknown_customer.status_code == 404

    over_allocated = client.post("/api/customer-payments", json={
        "customer_id": customer["id"],
        "amount": "10.00",
        "payment_date": "2026-10-15",
        "allocations": [{"invoice_id": invoice["id"], "amount": "20.00"}],
    })
    assert over_allocated.status_code == 400

    other = client.post("/api/customers", json={"name": "Alexandria Pharmacy"}).json()
    wrong_customer = client.post("/api/customer-payments", json={
        "customer_id": other["id"],
        "amount": "10.00",
        "payment_date": "2026-10-15",
        "allocations": [{"invoice_id": invoice["id"], "amount": "10.00"}],
    })
    assert wrong_customer.status_code == 400

    assert client.get("/api/customer-payments").json() == []
