from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

VALID_ACCOUNT_TYPES = ["Asset", "Liability", "Equity", "Revenue", "Expense"]

def _check_account_type(v):
    if v is not None and v not in VALID_ACCOUNT_TYPES:
        raise ValueError(f"type must be one of {VALID_ACCOUNT_TYPES}")
    return v

class AccountBase(BaseModel):
    code: str
    name: str
    type: str  # Asset, Liability, Equity, Revenue, Expense
    subtype: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: bool = True

    @field_validator('type')
    @classmethod
    def validate_account_type(cls, v):
        return _check_account_type(v)

class AccountCreate(AccountBase):
    pass

class AccountUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator('type')
    @classmethod
    def validate_account_type(cls, v):
        return _check_account_type(v)

class Account(AccountBase):
    id: int
    balance: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
