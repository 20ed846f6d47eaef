import httpx
import pytest

from utils import eta_client

CREDENTIALS = {
    "client_id": "client-1",
    "client_secret": "secret",
    "username": "taxpayer",
    "pin": "1234",
    "api_key": "api-key",
}


class FakeETA:
    """Stands in for httpx.post and answers like the tax authority would."""

    def __init__(self, auth_status=200, submit_status=202, accepted=True, fail_with=None):
        self.auth_status = auth_status
        self.submit_status = submit_status
        self.accepted = accepted
        self.fail_with = fail_with
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers})
        request = httpx.Request("POST", url)
        if self.fail_with is not None:
            raise self.fail_with
        if url.endswith("/auth/token"):
            if self.auth_status != 200:
                return httpx.Response(self.auth_status, text="invalid_client", request=request)
            return httpx.Response(200, json={"access_token": "tok-1", "token_type": "Bearer", "expires_in": 3600}, request=request)
        if self.submit_status >= 400:
            return httpx.Response(self.submit_status, text="server error", request=request)
        body = {"submissionId": "SUB-42", "acceptedDocuments": [], "rejectedDocuments": []}
        if self.accepted:
            body["acceptedDocuments"] = [{"uuid": "UUID-42", "internalId": "INV-000001"}]
        else:
            body["rejectedDocuments"] = [{"internalId": "INV-000001", "error": "invalid receiver"}]
        return httpx.Response(self.submit_status, json=body, request=request)


@pytest.fixture
def fake_eta(monkeypatch):
    def install(**kwargs):
        fake = FakeETA(**kwargs)
        monkeypatch.setattr(eta_client.httpx, "post", fake)
        return fake
    return install


@pytest.fixture
def invoice(client, customer):
    return client.post("/api/sales", json={
        "customer_id": customer["id"],
        "total_amount": "100.00",
        "tax": "14.00",
        "grand_total": "114.00",
        "payment_status": "pending",
    }).json()["sale"]


def test_authenticate(client, fake_eta):
    fake = fake_eta()
    resp = client.post("/api/eta/authenticate", json=CREDENTIALS)

    assert resp.status_code == 200
    assert resp.json()["expires_in"] == 3600
    assert fake.calls[0]["json"]["grant_type"] == "password"
    assert fake.calls[0]["headers"]["Authorization"] == "Bearer api-key"
    assert eta_client.is_authenticated()


def test_authenticate_rejected_is_401(client, fake_eta):
    fake_eta(auth_status=401)
    resp = client.post("/api/eta/authenticate", json=CREDENTIALS)
    assert resp.status_code == 401
    assert not eta_client.is_authenticated()


def test_authenticate_unreachable_is_503(client, fake_eta):
    fake_eta(fail_with=httpx.ConnectError("connection refused"))
    assert client.post("/api/eta/authenticate", json=CREDENTIALS).status_code == 503


def test_submit_requires_authentication(client, invoice):
    resp = client.post(f"/api/eta/submit/{invoice['id']}")

    assert resp.status_code == 401
    assert resp.json()["requires_auth"] is True
    status = client.get(f"/api/eta/status/{invoice['id']}").json()
    assert status["eta_status"] == "failed"
    assert "authentication required" in status["eta_error_message"]


def test_submit_uploads_invoice(client, invoice, customer, fake_eta):
    fake = fake_eta()
    client.post("/api/eta/authenticate", json=CREDENTIALS)

    resp = client.post(f"/api/eta/submit/{invoice['id']}")

    assert resp.status_code == 200
    assert resp.json()["eta_uuid"] == "UUID-42"
    document = fake.calls[-1]["json"]["documents"][0]
    assert document["internalID"] == invoice["invoice_number"]
    assert document["receiver"]["id"] == customer["tax_number"]
    assert document["totalAmount"] == 114.0
    assert fake.calls[-1]["headers"]["Authorization"] == "Bearer tok-1"

    status = client.get(f"/api/eta/status/{invoice['id']}").json()
    assert status["eta_status"] == "uploaded"
    assert status["eta_reference"] == "SUB-42"
    assert status["eta_submission_date"] is not None

    uploaded = client.get("/api/eta/invoices", params={"status": "uploaded"}).json()["invoices"]
    assert [i["invoice_number"] for i in uploaded] == [invoice["invoice_number"]]
    assert uploaded[0]["customer_name"] == customer["name"]


def test_submit_failure_is_retryable(client, invoice, fake_eta):
    fake_eta(submit_status=500)
    client.post("/api/eta/authenticate", json=CREDENTIALS)

    resp = client.post(f"/api/eta/submit/{invoice['id']}")

    assert resp.status_code == 503
    assert resp.json()["retryable"] is True
    assert client.get(f"/api/eta/status/{invoice['id']}").json()["eta_status"] == "failed"
    assert client.get("/api/eta/invoices", params={"status": "failed"}).json()["invoices"][0]["id"] == invoice["id"]


def test_rejected_document_marks_failure(client, invoice, fake_eta):
    fake_eta(accepted=False)
    client.post("/api/eta/authenticate", json=CREDENTIALS)

    assert client.post(f"/api/eta/submit/{invoice['id']}").status_code == 503
    assert "invalid receiver" in client.get(f"/api/eta/status/{invoice['id']}").json()["eta_error_message"]


def test_unknown_invoice_and_bad_status_filter(client):
    assert client.post("/api/eta/submit/999").status_code == 404
    assert client.get("/api/eta/status/999").status_code == 404
    assert client.get("/api/eta/invoices", params={"status": "archived"}).status_code == 400
