from sqlalchemy import Column, Integer, String, Text, Date, Numeric
from database import Base
from models.audit_mixin import TimestampMixin

class Expense(Base, TimestampMixin):
    __tablename__ = 'expenses'

    id = Column(Integer, primary_key=True, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    category = Column(String, nullable=True)  # e.g. "Utilities", "Office Supplies"
    date = Column(Date, nullable=False)
    payment_method = Column(String, nullable=False, default="cash")
    cost_center = Column(String, nullable=True)
    vendor = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="pending")  # pending, approved, rejected
    user_id = Column(Integer, nullable=True)
