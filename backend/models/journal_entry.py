from sqlalchemy import Column, Integer, String, Text, Date, Numeric, Enum
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin

class JournalEntryStatus(enum.Enum):
    DRAFT = "draft"
    POSTED = "posted"

class JournalSourceType(enum.Enum):
    INVOICE = "invoice"
    PAYMENT = "payment"
    EXPENSE = "expense"
    REFUND = "refund"
    PURCHASE_ORDER = "purchase_order"
    MANUAL = "manual"

class JournalEntry(Base, TimestampMixin):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, index=True)
    entry_number = Column(String(40), nullable=False, unique=True, index=True)
    date = Column(Date, nullable=False)
    reference = Column(String, nullable=True)
    memo = Column(Text, nullable=True)
    status = Column(Enum(JournalEntryStatus), default=JournalEntryStatus.POSTED, nullable=False)
    total_debit = Column(Numeric(14, 2), nullable=False)
    total_credit = Column(Numeric(14, 2), nullable=False)
    source_type = Column(Enum(JournalSourceType), nullable=True)
    source_id = Column(Integer, nullable=True)
    user_id = Column(Integer, nullable=False)

    # Relationships
    lines = relationship(
        "JournalEntryLine",
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryLine.position",
    )
