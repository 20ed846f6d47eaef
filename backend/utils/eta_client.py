"""Thin client for the Egyptian Tax Authority (ETA) e-invoicing API.

Credentials and the access token live in a module-level session, so one
authentication serves every later submission until the token expires.
"""
import logging
import os
import time

import httpx

logger = logging.getLogger("eta_client")

ETA_API_BASE_URL = os.getenv("ETA_API_BASE_URL", "https://sdk.invoicing.eta.gov.eg/api")
ETA_EINVOICING_URL = os.getenv("ETA_EINVOICING_URL", "https://sdk.invoicing.eta.gov.eg/einvoicingapi")
ETA_TIMEOUT_SECONDS = float(os.getenv("ETA_TIMEOUT_SECONDS", "30"))
ETA_ISSUER_ID = os.getenv("ETA_ISSUER_ID", "")
ETA_ISSUER_NAME = os.getenv("ETA_ISSUER_NAME", "Pharma ERP")


class ETAError(Exception):
    pass


class ETAAuthenticationError(ETAError):
    """The tax authority rejected the credentials, or no valid token is held."""


class ETAUnavailableError(ETAError):
    """The tax authority could not be reached or refused the submission."""


_session = {"credentials": None, "access_token": None, "expires_at": 0.0}


def reset_session():
    _session.update(credentials=None, access_token=None, expires_at=0.0)


def is_authenticated() -> bool:
    return bool(_session["credentials"] and _session["access_token"])


def is_token_expired() -> bool:
    return time.time() >= _session["expires_at"]


def authenticate(credentials: dict) -> dict:
    payload = {
        "client_id": credentials["client_id"],
        "client_secret": credentials["client_secret"],
        "username": credentials["username"],
        "pin": credentials["pin"],
        "grant_type": "password",
    }
    headers = {
        "Authorization": f"Bearer {credentials['api_key']}",
        "Accept": "application/json",
    }
    try:
        response = httpx.post(
            f"{ETA_API_BASE_URL}/auth/token",
            json=payload,
            headers=headers,
            timeout=ETA_TIMEOUT_SECONDS,
        )
    except httpx.HTTPError as e:
        logger.error(f"ETA authentication request failed: {e}")
        raise ETAUnavailableError("Unable to connect to Egyptian Tax Authority servers.") from e

    if not response.is_success:
        logger.error(f"ETA authentication failed with status {response.status_code}: {response.text}")
        raise ETAAuthenticationError(response.text or "Failed to authenticate with Egyptian Tax Authority")

    data = response.json()
    expires_in = int(data.get("expires_in", 0))
    _session["credentials"] = dict(credentials)
    _session["access_token"] = data["access_token"]
    _session["expires_at"] = time.time() + expires_in
    logger.info(f"Authenticated with ETA; token valid for {expires_in}s")
    return {"token_type": data.get("token_type", "Bearer"), "expires_in": expires_in}


def build_document(sale, customer=None) -> dict:
    """Build an ETA invoice document (type I) from a sale and its items."""
    lines = []
    for item in sale.items:
        lines.append({
            "description": item.product.name if item.product else f"Product {item.product_id}",
            "itemType": "EGS",
            "itemCode": item.product.sku if item.product else str(item.product_id),
            "unitType": item.product.unit_of_measure if item.product else "EA",
            "quantity": item.quantity,
            "unitValue": {"currencySold": "EGP", "amountEGP": float(item.unit_price)},
            "discount": {"amount": float(item.discount or 0)},
            "salesTotal": float(item.unit_price * item.quantity),
            "netTotal": float(item.total),
            "total": float(item.total),
        })
    if not lines:
        lines.append({
            "description": f"Invoice {sale.invoice_number}",
            "itemType": "EGS",
            "itemCode": sale.invoice_number,
            "unitType": "EA",
            "quantity": 1,
            "unitValue": {"currencySold": "EGP", "amountEGP": float(sale.total_amount)},
            "discount": {"amount": float(sale.discount or 0)},
            "salesTotal": float(sale.total_amount),
            "netTotal": float(sale.total_amount),
            "total": float(sale.total_amount),
        })

    receiver = {"type": "P", "id": "", "name": "Cash Customer"}
    if customer is not None:
        receiver = {
            "type": "B" if customer.tax_number else "P",
            "id": customer.tax_number or "",
            "name": customer.company or customer.name,
        }

    return {
        "issuer": {"type": "B", "id": ETA_ISSUER_ID, "name": ETA_ISSUER_NAME},
        "receiver": receiver,
        "documentType": "I",
        "documentTypeVersion": "1.0",
        "dateTimeIssued": sale.date.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "internalID": sale.invoice_number,
        "invoiceLines": lines,
        "totalSalesAmount": float(sale.subtotal or sale.total_amount),
        "totalDiscountAmount": float(sale.discount or 0),
        "netAmount": float(sale.total_amount),
        "taxTotals": [{"taxType": "T1", "amount": float(sale.tax or 0)}],
        "totalAmount": float(sale.grand_total),
    }


def submit_document(document: dict) -> dict:
    if not is_authenticated() or is_token_expired():
        raise ETAAuthenticationError("ETA authentication required. Please authenticate first.")

    headers = {
        "Authorization": f"Bearer {_session['access_token']}",
        "Accept": "application/json",
    }
    try:
        response = httpx.post(
            f"{ETA_EINVOICING_URL}/v1.0/documentsubmissions",
            json={"documents": [document]},
            headers=headers,
            timeout=ETA_TIMEOUT_SECONDS,
        )
    except httpx.HTTPError as e:
        logger.error(f"ETA submission request failed: {e}")
        raise ETAUnavailableError("ETA service unavailable. Unable to connect to Egyptian Tax Authority servers.") from e

    if not response.is_success:
        logger.error(f"ETA submission failed with status {response.status_code}: {response.text}")
        raise ETAUnavailableError(f"ETA submission failed ({response.status_code}): {response.text}")

    data = response.json()
    accepted = data.get("acceptedDocuments") or []
    if not accepted:
        rejected = data.get("rejectedDocuments") or []
        raise ETAUnavailableError(f"ETA rejected the document: {rejected}")

    return {"submission_id": data.get("submissionId"), "uuid": accepted[0].get("uuid")}
