from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from decimal import Decimal

class CustomerBase(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    company: Optional[str] = None
    position: Optional[str] = None
    sector: Optional[str] = None
    tax_number: Optional[str] = ""

class CustomerCreate(CustomerBase):
    pass

class Customer(CustomerBase):
    id: int
    total_purchases: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
