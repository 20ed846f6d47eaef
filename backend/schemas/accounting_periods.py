from pydantic import BaseModel, model_validator
from typing import Literal, Optional
from datetime import date, datetime

class AccountingPeriodCreate(BaseModel):
    period_name: str
    start_date: date
    end_date: date
    status: Literal["open", "closed"] = "open"

    @model_validator(mode='after')
    def check_dates(self):
        if self.start_date > self.end_date:
            raise ValueError('start_date must be on or before end_date')
        return self

class AccountingPeriodStatusUpdate(BaseModel):
    status: str

class AccountingPeriod(BaseModel):
    id: int
    period_name: str
    start_date: date
    end_date: date
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
