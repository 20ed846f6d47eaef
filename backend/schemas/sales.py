from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

class SaleItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    unit_price: Decimal
    discount: Decimal = Decimal(0)
    total: Optional[Decimal] = None

class SaleItem(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    discount: Decimal
    total: Decimal

    class Config:
        from_attributes = True

class SaleCreate(BaseModel):
    invoice_number: Optional[str] = None
    customer_id: Optional[int] = None  # None for a cash sale
    user_id: Optional[int] = None
    total_amount: Decimal
    subtotal: Optional[Decimal] = None
    discount: Decimal = Decimal(0)
    tax: Decimal = Decimal(0)
    tax_rate: Decimal = Decimal(14)
    grand_total: Decimal
    payment_method: str = "cash"
    payment_status: str = "completed"
    payment_terms: Optional[str] = "0"
    notes: Optional[str] = None
    items: List[SaleItemCreate] = []
    date: Optional[datetime] = None

class Sale(BaseModel):
    id: int
    invoice_number: str
    customer_id: Optional[int] = None
    user_id: int
    date: datetime
    total_amount: Decimal
    subtotal: Decimal
    discount: Decimal
    tax: Decimal
    tax_rate: Decimal
    grand_total: Decimal
    payment_method: str
    payment_status: str
    amount_paid: Decimal
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    eta_status: str
    eta_reference: Optional[str] = None
    eta_uuid: Optional[str] = None
    eta_submission_date: Optional[datetime] = None
    eta_error_message: Optional[str] = None
    items: List[SaleItem] = []

    class Config:
        from_attributes = True

class SaleCreated(BaseModel):
    sale: Sale
    journal_entry_number: Optional[str] = None
