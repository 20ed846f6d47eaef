from decimal import Decimal

from models.audit_log import AuditLog


def test_accounts_listed_by_code(client, seeded):
    accounts = client.get("/api/accounts").json()
    codes = [a["code"] for a in accounts]
    assert codes == sorted(codes)
    assert len(codes) == 15
    assert all(Decimal(a["balance"]) == 0 for a in accounts)


def test_create_account_and_duplicate_code(client, seeded):
    payload = {"code": "6600", "name": "Bank Charges", "type": "Expense", "subtype": "Operating Expense"}

    resp = client.post("/api/accounts", json=payload)
    assert resp.status_code == 201
    assert resp.json()["is_active"] is True

    dup = client.post("/api/accounts", json=payload)
    assert dup.status_code == 400

    bad = client.post("/api/accounts", json={**payload, "code": "6700", "type": "Income"})
    assert bad.status_code == 422


def test_get_account_404(client):
    assert client.get("/api/accounts/999").status_code == 404


def test_account_in_use_cannot_change_type_or_deactivate(client, seeded):
    accounts = {a["code"]: a["id"] for a in client.get("/api/accounts").json()}
    client.post("/api/journal-entries", json={
        "date": "2026-10-12",
        "lines": [
            {"account_id": accounts["6300"], "debit": "10"},
            {"account_id": accounts["1100"], "credit": "10"},
        ],
    })

    assert client.patch(f"/api/accounts/{accounts['6300']}", json={"type": "Asset"}).status_code == 400
    assert client.patch(f"/api/accounts/{accounts['6300']}", json={"is_active": False}).status_code == 400

    resp = client.patch(f"/api/accounts/{accounts['6300']}", json={"name": "Utilities and Internet"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Utilities and Internet"


def test_unused_account_can_be_deactivated_and_is_audited(client, seeded, db):
    accounts = {a["code"]: a["id"] for a in client.get("/api/accounts").json()}

    resp = client.patch(f"/api/accounts/{accounts['6500']}", json={"is_active": False}, headers={"X-User-ID": "4"})
    assert resp.status_code == 200
    assert "6500" not in [a["code"] for a in client.get("/api/accounts").json()]

    log = db.query(AuditLog).filter(AuditLog.table_name == "accounts").one()
    assert log.changed_by == "4"
    assert log.old_values["is_active"] is True
    assert log.new_values["is_active"] is False


def test_update_unknown_account_404(client):
    assert client.patch("/api/accounts/999", json={"name": "Nope"}).status_code == 404


def test_bad_user_header_is_400(client):
    resp = client.post("/api/accounts", json={"code": "1", "name": "x", "type": "Asset"}, headers={"X-User-ID": "abc"})
    assert resp.status_code == 400
