from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

class ExpenseBase(BaseModel):
    description: str
    amount: Decimal = Field(gt=0)
    category: Optional[str] = None
    date: date
    payment_method: str = "cash"
    cost_center: Optional[str] = None
    vendor: Optional[str] = None
    notes: Optional[str] = None
    status: str = "pending"

class ExpenseCreate(ExpenseBase):
    user_id: Optional[int] = None

class Expense(ExpenseBase):
    id: int
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ExpenseCreated(BaseModel):
    expense: Expense
    journal_entry_number: Optional[str] = None
