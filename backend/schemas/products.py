from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

class ProductBase(BaseModel):
    name: str
    drug_name: str
    sku: str
    barcode: Optional[str] = None
    description: Optional[str] = None
    cost_price: Decimal = Decimal(0)
    selling_price: Decimal = Decimal(0)
    quantity: int = 0
    unit_of_measure: str = "PCS"
    low_stock_threshold: Optional[int] = 10
    expiry_date: Optional[date] = None
    status: str = "active"
    product_type: str = "finished"
    manufacturer: Optional[str] = None
    location: Optional[str] = None
    grade: str = "P"

class ProductCreate(ProductBase):
    pass

class Product(ProductBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
