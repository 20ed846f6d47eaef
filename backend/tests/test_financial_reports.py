import json
from decimal import Decimal


def _credit_sale(client, customer_id, grand_total="114.00", tax="14.00"):
    net = Decimal(grand_total) - Decimal(tax)
    return client.post("/api/sales", json={
        "customer_id": customer_id,
        "total_amount": str(net),
        "tax": tax,
        "grand_total": grand_total,
        "payment_status": "pending",
    }).json()


def test_trial_balance_balances_after_postings(client, seeded, customer):
    _credit_sale(client, customer["id"])
    client.post("/api/expenses", json={"description": "Rent", "amount": "30", "category": "Utilities", "date": "2026-10-01"})

    tb = client.get("/api/accounting/trial-balance").json()

    assert tb["is_balanced"] is True
    assert Decimal(tb["total_debits"]) == Decimal(tb["total_credits"]) == Decimal("144.00")
    rows = {row["code"]: row for row in tb["accounts"]}
    assert Decimal(rows["1200"]["debit"]) == Decimal("114.00")
    assert Decimal(rows["4100"]["credit"]) == Decimal("100.00")
    assert Decimal(rows["1100"]["credit"]) == Decimal("30.00")


def test_trial_balance_filters(client, seeded, customer):
    _credit_sale(client, customer["id"])

    tb = client.get("/api/accounting/trial-balance", params={
        "account_filter": "Assets only",
        "include_zero_balance": "false",
    }).json()

    assert [row["code"] for row in tb["accounts"]] == ["1200"]
    assert tb["summary"]["original_account_count"] == 3
    assert tb["filters"]["account_filter"] == "Assets only"


def test_balance_sheet_includes_current_earnings(client, seeded, customer):
    _credit_sale(client, customer["id"])

    sheet = client.get("/api/accounting/balance-sheet").json()

    assert sheet["is_balanced"] is True
    assert Decimal(sheet["assets"]["total"]) == Decimal("114.00")
    assert Decimal(sheet["liabilities"]["total"]) == Decimal("14.00")
    assert Decimal(sheet["current_earnings"]) == Decimal("100.00")
    assert sheet["equity"]["accounts"][-1]["name"] == "Current Earnings"


def test_summary_and_profit_and_loss(client, seeded, customer):
    _credit_sale(client, customer["id"])
    today = client.get("/api/sales").json()[0]["date"][:10]
    client.post("/api/expenses", json={"description": "Internet", "amount": "20", "category": "Utilities", "date": today})

    summary = client.get("/api/accounting/summary").json()
    assert Decimal(summary["total_revenue"]) == Decimal("114.00")
    assert Decimal(summary["total_expenses"]) == Decimal("20.00")
    assert Decimal(summary["outstanding_ar"]) == Decimal("114.00")
    assert summary["total_journal_entries"] == 2

    pnl = client.get("/api/accounting/profit-loss", params={"start_date": today, "end_date": today}).json()
    assert Decimal(pnl["revenue"]["total"]) == Decimal("114.00")
    assert Decimal(pnl["expenses"]["total"]) == Decimal("20.00")
    assert Decimal(pnl["net_income"]) == Decimal("94.00")


def test_profit_and_loss_rejects_inverted_range(client):
    resp = client.get("/api/accounting/profit-loss", params={"start_date": "2026-10-31", "end_date": "2026-10-01"})
    assert resp.status_code == 400


def test_sync_status_counts_records(client, seeded, customer):
    _credit_sale(client, customer["id"])
    status = client.get("/api/accounting/sync-status").json()
    assert status["invoices"] == 1
    assert status["journal_entries"] == 1
    assert status["expenses"] == 0


def _write_fixture(tmp_path, monkeypatch):
    data = {
        "dueInvoices": [
            {"client": "Cairo Medical Center", "totalAmount": 1000, "amountPaid": 400, "balance": 600, "invoiceDate": "2026-10-03"},
            {"client": "Cairo Medical", "totalAmount": 500, "amountPaid": 500, "balance": 0, "invoiceDate": "2026-10-08"},
            {"client": "Alexandria Pharmacy", "totalAmount": 300, "amountPaid": 0, "balance": 300, "invoiceDate": "2026-09-20"},
        ],
        "purchases": [
            {"date": "2026-10-05", "total": 200, "paidStatus": "Paid"},
            {"date": "2026-10-06", "total": 999, "paidStatus": "Unpaid"},
        ],
        "expenses": [
            {"date": "2026-10-04", "amount": 50, "description": "Office supplies"},
            {"date": "2026-10-09", "amount": 120, "description": "Lab equipment"},
        ],
    }
    path = tmp_path / "data.json"
    path.write_text(json.dumps(data))
    monkeypatch.setenv("FINANCIAL_DATA_PATH", str(path))


def test_customer_balances_from_fixture(client, customer, tmp_path, monkeypatch):
    _write_fixture(tmp_path, monkeypatch)

    balances = client.get("/api/accounting/customer-balances").json()

    assert len(balances) == 1
    row = balances[0]
    assert row["invoice_count"] == 2
    assert Decimal(row["outstanding_balance"]) == Decimal("600.00")
    assert Decimal(row["total_invoiced"]) == Decimal("1500.00")
    assert row["last_payment_date"] == "2026-10-08"
    assert row["status"] == "Outstanding"


def test_cash_flow_from_fixture(client, tmp_path, monkeypatch):
    _write_fixture(tmp_path, monkeypatch)

    flow = client.get("/api/accounting/cash-flow", params={"start_date": "2026-10-01", "end_date": "2026-10-31"}).json()

    assert Decimal(flow["operating_activities"]["cash_from_sales"]) == Decimal("900.00")
    assert Decimal(flow["operating_activities"]["cash_to_purchases"]) == Decimal("-200.00")
    assert Decimal(flow["operating_activities"]["cash_to_expenses"]) == Decimal("-170.00")
    assert Decimal(flow["investing_activities"]["total"]) == Decimal("-120.00")
    assert Decimal(flow["net_cash_flow"]) == Decimal("410.00")
    assert Decimal(flow["ending_cash"]) == Decimal("25410.00")


def test_cash_flow_without_fixture_is_zero(client, tmp_path, monkeypatch):
    monkeypatch.setenv("FINANCIAL_DATA_PATH", str(tmp_path / "missing.json"))
    flow = client.get("/api/accounting/cash-flow").json()
    assert Decimal(flow["net_cash_flow"]) == Decimal("0")
    assert Decimal(flow["ending_cash"]) == Decimal("25000.00")


def test_sample_data_and_seed_accounts(client):
    seeded = client.post("/api/accounting/seed-accounts").json()
    assert seeded["created_accounts"] == 15
    assert client.post("/api/accounting/seed-accounts").json()["created_accounts"] == 0

    result = client.post("/api/accounting/generate-sample-data").json()
    assert result["accounts_created"] == 15
    assert result["journal_entries_created"] == 3
    assert result["journal_lines_created"] == 6

    tb = client.get("/api/accounting/trial-balance").json()
    assert tb["is_balanced"] is True
    assert Decimal(tb["total_debits"]) == Decimal("26000.00")
    assert len(client.get("/api/journal-entries").json()) == 3
