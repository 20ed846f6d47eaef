from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

class ETACredentials(BaseModel):
    client_id: str
    client_secret: str
    username: str
    pin: str
    api_key: str
    environment: str = "sandbox"  # production or sandbox

class ETAAuthResult(BaseModel):
    success: bool
    message: str
    token_type: str
    expires_in: int

class ETASubmissionResult(BaseModel):
    success: bool
    message: str
    eta_reference: Optional[str] = None
    eta_uuid: Optional[str] = None

class ETAStatus(BaseModel):
    success: bool = True
    eta_status: str
    eta_reference: Optional[str] = None
    eta_uuid: Optional[str] = None
    eta_submission_date: Optional[datetime] = None
    eta_error_message: Optional[str] = None

class ETAInvoice(BaseModel):
    id: int
    invoice_number: str
    date: datetime
    grand_total: Decimal
    customer_name: Optional[str] = None
    eta_status: str
    eta_reference: Optional[str] = None
    eta_submission_date: Optional[datetime] = None
    eta_error_message: Optional[str] = None

class ETAInvoiceList(BaseModel):
    success: bool = True
    invoices: List[ETAInvoice]
