from sqlalchemy import Column, Integer, String, Date, CheckConstraint
from database import Base
from models.audit_mixin import TimestampMixin

class AccountingPeriod(Base, TimestampMixin):
    __tablename__ = "accounting_periods"

    id = Column(Integer, primary_key=True, index=True)
    period_name = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String, nullable=False, default="open")  # open, closed

    __table_args__ = (
        CheckConstraint('start_date <= end_date', name='check_period_dates'),
    )
