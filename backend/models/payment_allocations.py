from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from database import Base

class PaymentAllocation(Base):
    __tablename__ = "payment_allocations"

    id = Column(Integer, primary_key=True, index=True)
    payment_id = Column(Integer, ForeignKey("customer_payments.id"), nullable=False)
    invoice_id = Column(Integer, ForeignKey("sales.id"), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)

    # Relationships
    payment = relationship("CustomerPayment", back_populates="allocations")
    invoice = relationship("Sale")
