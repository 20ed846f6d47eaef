from pydantic import BaseModel, field_validator, model_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal
from models.journal_entry import JournalEntryStatus, JournalSourceType

class JournalEntryLineCreate(BaseModel):
    account_id: int
    description: Optional[str] = None
    debit: Decimal = Decimal(0)
    credit: Decimal = Decimal(0)

    @model_validator(mode='after')
    def check_one_side(self):
        if self.debit < 0 or self.credit < 0:
            raise ValueError('Debit and credit amounts cannot be negative.')
        if self.debit > 0 and self.credit > 0:
            raise ValueError('A journal line cannot have both a debit and a credit amount.')
        return self

class JournalEntryLine(BaseModel):
    id: int
    account_id: int
    description: Optional[str] = None
    debit: Decimal
    credit: Decimal
    position: int

    class Config:
        from_attributes = True

class JournalEntryCreate(BaseModel):
    date: date
    reference: Optional[str] = None
    memo: Optional[str] = None
    lines: List[JournalEntryLineCreate]

    @field_validator('lines')
    @classmethod
    def check_line_count(cls, lines):
        if len(lines) < 2:
            raise ValueError('A journal entry needs at least two lines.')
        return lines

class JournalEntrySummary(BaseModel):
    id: int
    entry_number: str
    date: date
    reference: Optional[str] = None
    memo: Optional[str] = None
    status: JournalEntryStatus
    total_debit: Decimal
    total_credit: Decimal
    source_type: Optional[JournalSourceType] = None
    source_id: Optional[int] = None
    user_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class JournalEntry(JournalEntrySummary):
    lines: List[JournalEntryLine] = []
