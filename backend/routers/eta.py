from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional
import logging
from database import get_db
from models.sales import Sale, ETA_STATUSES
from models.audit_mixin import local_now
from schemas.eta import ETACredentials, ETAAuthResult, ETASubmissionResult, ETAStatus, ETAInvoiceList
from crud.sales import get_sale
from utils import eta_client

router = APIRouter(prefix="/api/eta", tags=["ETA E-Invoicing"])
logger = logging.getLogger("eta")

@router.post("/authenticate", response_model=ETAAuthResult)
def authenticate(credentials: ETACredentials):
    try:
        token = eta_client.authenticate(credentials.model_dump())
    except eta_client.ETAAuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except eta_client.ETAUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return {"success": True, "message": "Successfully authenticated with Egyptian Tax Authority", **token}

@router.post("/submit/{invoice_id}", response_model=ETASubmissionResult)
def submit_invoice(invoice_id: int, db: Session = Depends(get_db)):
    """
    Submit a sale to the tax authority. The sale's eta_status moves to pending,
    then uploaded on acceptance or failed with the error message otherwise.
    """
    sale = get_sale(db, invoice_id)
    if not sale:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")

    if not eta_client.is_authenticated() or eta_client.is_token_expired():
        message = "ETA authentication required. Please authenticate first."
        sale.eta_status = "failed"
        sale.eta_error_message = message
        db.commit()
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": message, "requires_auth": True},
        )

    sale.eta_status = "pending"
    sale.eta_error_message = None
    db.commit()

    try:
        document = eta_client.build_document(sale, sale.customer)
        result = eta_client.submit_document(document)
    except eta_client.ETAError as e:
        logger.error(f"ETA submission failed for invoice {sale.invoice_number}: {e}")
        sale.eta_status = "failed"
        sale.eta_error_message = str(e)
        db.commit()
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "message": str(e), "retryable": True},
        )

    sale.eta_status = "uploaded"
    sale.eta_reference = result["submission_id"]
    sale.eta_uuid = result["uuid"]
    sale.eta_submission_date = local_now()
    db.commit()
    logger.info(f"Invoice {sale.invoice_number} uploaded to ETA as {sale.eta_uuid}")
    return {
        "success": True,
        "message": "Invoice successfully submitted to Egyptian Tax Authority",
        "eta_reference": sale.eta_reference,
        "eta_uuid": sale.eta_uuid,
    }

@router.get("/status/{invoice_id}", response_model=ETAStatus)
def get_invoice_status(invoice_id: int, db: Session = Depends(get_db)):
    sale = get_sale(db, invoice_id)
    if not sale:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return {
        "eta_status": sale.eta_status,
        "eta_reference": sale.eta_reference,
        "eta_uuid": sale.eta_uuid,
        "eta_submission_date": sale.eta_submission_date,
        "eta_error_message": sale.eta_error_message,
    }

@router.get("/invoices", response_model=ETAInvoiceList)
def get_invoices(status_filter: Optional[str] = Query(None, alias="status"), db: Session = Depends(get_db)):
    if status_filter and status_filter not in ETA_STATUSES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid status. Must be one of {list(ETA_STATUSES)}"
        )
    query = db.query(Sale)
    if status_filter:
        query = query.filter(Sale.eta_status == status_filter)
    sales = query.order_by(Sale.date.desc(), Sale.id.desc()).all()
    return {
        "invoices": [
            {
                "id": sale.id,
                "invoice_number": sale.invoice_number,
                "date": sale.date,
                "grand_total": sale.grand_total,
                "customer_name": sale.customer.name if sale.customer else None,
                "eta_status": sale.eta_status,
                "eta_reference": sale.eta_reference,
                "eta_submission_date": sale.eta_submission_date,
                "eta_error_message": sale.eta_error_message,
            }
            for sale in sales
        ]
    }
