from decimal import Decimal


def _accounts(client):
    return {a["code"]: a["id"] for a in client.get("/api/accounts").json()}


def test_manual_entry_round_trip(client, seeded, balance_of):
    accounts = _accounts(client)

    resp = client.post("/api/journal-entries", json={
        "date": "2026-10-12",
        "reference": "CAP-001",
        "memo": "Owner capital injection",
        "lines": [
            {"account_id": accounts["1100"], "debit": "5000", "description": "Deposit"},
            {"account_id": accounts["3000"], "credit": "5000"},
        ],
    }, headers={"X-User-ID": "3"})

    assert resp.status_code == 201
    entry = resp.json()
    assert entry["status"] == "posted"
    assert entry["source_type"] == "manual"
    assert entry["user_id"] == 3
    assert [line["position"] for line in entry["lines"]] == [1, 2]

    fetched = client.get(f"/api/journal-entries/{entry['id']}").json()
    assert fetched["entry_number"] == entry["entry_number"]
    assert balance_of("1100") == Decimal("5000.00")
    assert balance_of("3000") == Decimal("-5000.00")


def test_unbalanced_entry_is_400(client, seeded):
    accounts = _accounts(client)
    resp = client.post("/api/journal-entries", json={
        "date": "2026-10-12",
        "lines": [
            {"account_id": accounts["1100"], "debit": "100"},
            {"account_id": accounts["3000"], "credit": "90"},
        ],
    })
    assert resp.status_code == 400
    assert "not balanced" in resp.json()["detail"]
    assert client.get("/api/journal-entries").json() == []


def test_line_with_both_sides_or_single_line_is_422(client, seeded):
    accounts = _accounts(client)
    both = client.post("/api/journal-entries", json={
        "date": "2026-10-12",
        "lines": [
            {"account_id": accounts["1100"], "debit": "100", "credit": "100"},
            {"account_id": accounts["3000"], "credit": "100"},
        ],
    })
    single = client.post("/api/journal-entries", json={
        "date": "2026-10-12",
        "lines": [{"account_id": accounts["1100"], "debit": "100"}],
    })
    assert both.status_code == 422
    assert single.status_code == 422


def test_unknown_account_is_400(client, seeded):
    accounts = _accounts(client)
    resp = client.post("/api/journal-entries", json={
        "date": "2026-10-12",
        "lines": [
            {"account_id": accounts["1100"], "debit": "100"},
            {"account_id": 9999, "credit": "100"},
        ],
    })
    assert resp.status_code == 400


def test_list_filters_and_404(client, seeded):
    accounts = _accounts(client)
    for day in ("2026-09-15", "2026-10-15"):
        client.post("/api/journal-entries", json={
            "date": day,
            "lines": [
                {"account_id": accounts["6300"], "debit": "10"},
                {"account_id": accounts["1100"], "credit": "10"},
            ],
        })

    all_entries = client.get("/api/journal-entries").json()
    assert [e["date"] for e in all_entries] == ["2026-10-15", "2026-09-15"]

    october = client.get("/api/journal-entries", params={"start_date": "2026-10-01"}).json()
    assert len(october) == 1

    assert client.get("/api/journal-entries/4242").status_code == 404
