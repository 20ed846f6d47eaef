from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import date
from decimal import Decimal

class RefundRequest(BaseModel):
    invoice_id: int
    invoice_number: Optional[str] = None
    customer_id: Optional[int] = None
    customer_name: Optional[str] = None
    total_refund_amount: Decimal
    refund_reason: str = "Customer refund"
    refund_date: Optional[date] = None
    items: List[Dict[str, Any]] = []

class RefundResult(BaseModel):
    success: bool
    message: str
    journal_entry_number: str
    refund_amount: Decimal
    items_refunded: int
