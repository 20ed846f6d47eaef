from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin, local_now

ETA_STATUSES = ("not_sent", "pending", "uploaded", "failed")

class Sale(Base, TimestampMixin):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String, nullable=False, unique=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)  # NULL for cash sales
    user_id = Column(Integer, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=local_now)
    total_amount = Column(Numeric(14, 2), nullable=False)
    subtotal = Column(Numeric(14, 2), default=0, nullable=False)
    discount = Column(Numeric(14, 2), default=0, nullable=False)
    tax = Column(Numeric(14, 2), default=0, nullable=False)
    tax_rate = Column(Numeric(5, 2), default=14, nullable=False)
    grand_total = Column(Numeric(14, 2), nullable=False)
    payment_method = Column(String, nullable=False, default="cash")
    payment_status = Column(String, nullable=False, default="completed")  # pending, partial, completed, refunded, failed
    amount_paid = Column(Numeric(14, 2), default=0, nullable=False)
    payment_terms = Column(String, default="0")  # Number of days
    notes = Column(Text, nullable=True)

    # Egyptian Tax Authority e-invoicing state
    eta_status = Column(String, nullable=False, default="not_sent")
    eta_reference = Column(String, nullable=True)
    eta_uuid = Column(String, nullable=True)
    eta_submission_date = Column(DateTime(timezone=True), nullable=True)
    eta_error_message = Column(Text, nullable=True)

    # Relationships
    customer = relationship("Customer", back_populates="sales")
    items = relationship("SaleItem", back_populates="sale", cascade="all, delete-orphan")
