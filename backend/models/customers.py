from sqlalchemy import Column, Integer, String, Text, Numeric
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin

class Customer(Base, TimestampMixin):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, index=True)
    phone = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    zip_code = Column(String, nullable=True)
    company = Column(String, nullable=True)
    position = Column(String, nullable=True)
    sector = Column(String, nullable=True)
    tax_number = Column(String, nullable=True, default="")  # ETA registration number
    total_purchases = Column(Numeric(14, 2), default=0, server_default='0', nullable=False)

    # Relationships
    sales = relationship("Sale", back_populates="customer")
    payments = relationship("CustomerPayment", back_populates="customer")
