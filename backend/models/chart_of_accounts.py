from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, ForeignKey
from database import Base
from models.audit_mixin import TimestampMixin

class Account(Base, TimestampMixin):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(20), nullable=False)  # Asset, Liability, Equity, Revenue, Expense
    subtype = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    # Running total of (debit - credit), maintained by the balance updater
    balance = Column(Numeric(14, 2), default=0, server_default='0', nullable=False)
