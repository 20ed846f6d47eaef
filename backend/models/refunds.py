from sqlalchemy import Column, Integer, String, Text, Numeric, Date, ForeignKey
from database import Base
from models.audit_mixin import TimestampMixin

class Refund(Base, TimestampMixin):
    __tablename__ = "refunds"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("sales.id"), nullable=False)
    invoice_number = Column(String, nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    customer_name = Column(String, nullable=True)
    original_amount = Column(Numeric(14, 2), nullable=False)
    refund_amount = Column(Numeric(14, 2), nullable=False)
    reason = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="processed")
    journal_entry_number = Column(String, nullable=True)
