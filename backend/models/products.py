from sqlalchemy import Column, Integer, String, Text, Numeric, Date
from database import Base
from models.audit_mixin import TimestampMixin

class Product(Base, TimestampMixin):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    drug_name = Column(String, nullable=False)
    sku = Column(String, nullable=False, unique=True, index=True)
    barcode = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    cost_price = Column(Numeric(14, 2), nullable=False, default=0)
    selling_price = Column(Numeric(14, 2), nullable=False, default=0)
    quantity = Column(Integer, nullable=False, default=0)
    unit_of_measure = Column(String, nullable=False, default="PCS")
    low_stock_threshold = Column(Integer, default=10)
    expiry_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="active")  # active, expired, out_of_stock, near
    product_type = Column(String, nullable=False, default="finished")  # raw, semi-raw, finished
    manufacturer = Column(String, nullable=True)
    location = Column(String, nullable=True)
    grade = Column(String, nullable=False, default="P")  # P (Pharmaceutical), F (Food), T (Technical)
