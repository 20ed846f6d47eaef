from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

VALID_PO_STATUS_UPDATES = ["sent", "received", "rejected"]

class PurchaseOrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(gt=0)
    unit_price: Decimal = Field(ge=0)

class PurchaseOrderItem(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    total: Decimal
    received_quantity: int

    class Config:
        from_attributes = True

class PurchaseOrderCreate(BaseModel):
    po_number: Optional[str] = None
    supplier_id: int
    order_date: date
    expected_delivery_date: Optional[date] = None
    transportation_cost: Decimal = Decimal(0)
    notes: Optional[str] = None
    items: List[PurchaseOrderItemCreate]

class PurchaseOrderStatusUpdate(BaseModel):
    status: str

class PurchaseOrder(BaseModel):
    id: int
    po_number: str
    supplier_id: int
    user_id: int
    order_date: date
    expected_delivery_date: Optional[date] = None
    status: str
    total_amount: Decimal
    transportation_cost: Decimal
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[PurchaseOrderItem] = []

    class Config:
        from_attributes = True

class PurchaseApprovalResult(BaseModel):
    success: bool
    message: str
    purchase_order: PurchaseOrder
    journal_entry_number: Optional[str] = None
