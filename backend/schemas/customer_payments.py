from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

class PaymentAllocationCreate(BaseModel):
    invoice_id: int
    amount: Decimal

class PaymentAllocation(BaseModel):
    id: int
    invoice_id: int
    invoice_number: Optional[str] = None
    amount: Decimal

class CustomerPaymentCreate(BaseModel):
    customer_id: int
    amount: Decimal = Field(gt=0)
    payment_date: date
    payment_method: str = "cash"
    reference: Optional[str] = None
    notes: Optional[str] = None
    allocations: List[PaymentAllocationCreate] = []

class CustomerPayment(BaseModel):
    id: int
    payment_number: str
    customer_id: int
    customer_name: str
    amount: Decimal
    payment_date: date
    payment_method: str
    reference: Optional[str] = None
    notes: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    allocations: List[PaymentAllocation] = []
    journal_entry_number: Optional[str] = None

class CustomerInvoice(BaseModel):
    id: int
    invoice_number: str
    customer_id: int
    customer_name: str
    date: datetime
    due_date: date
    total_amount: Decimal
    amount_paid: Decimal
    amount_due: Decimal
    status: str  # unpaid, partial, paid, overdue
