import logging
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session
from models.accounting_periods import AccountingPeriod
from models.audit_mixin import local_now
from schemas.accounting_periods import AccountingPeriodCreate
from schemas.audit_log import AuditLogCreate
from crud.audit_log import create_audit_log
from utils import sqlalchemy_to_dict

logger = logging.getLogger("accounting_periods")

VALID_PERIOD_STATUSES = ["open", "closed"]

def get_periods(db: Session):
    return db.query(AccountingPeriod).order_by(AccountingPeriod.start_date.desc()).all()

def get_period(db: Session, period_id: int):
    return db.query(AccountingPeriod).filter(AccountingPeriod.id == period_id).first()

def ensure_default_periods(db: Session, year: Optional[int] = None):
    """Create the four quarters of the year when no period exists yet (Q1 closed)."""
    if db.query(AccountingPeriod.id).first():
        return []

    year = year or local_now().year
    quarters = [
        ("Q1", date(year, 1, 1), date(year, 3, 31), "closed"),
        ("Q2", date(year, 4, 1), date(year, 6, 30), "open"),
        ("Q3", date(year, 7, 1), date(year, 9, 30), "open"),
        ("Q4", date(year, 10, 1), date(year, 12, 31), "open"),
    ]
    periods = []
    for name, start, end, status in quarters:
        period = AccountingPeriod(period_name=f"{name} {year}", start_date=start, end_date=end, status=status)
        db.add(period)
        periods.append(period)
    db.commit()
    logger.info(f"Created default accounting periods for {year}")
    return periods

def find_overlapping_periods(db: Session, start_date: date, end_date: date):
    return db.query(AccountingPeriod).filter(
        AccountingPeriod.start_date <= end_date,
        AccountingPeriod.end_date >= start_date
    ).all()

def create_period(db: Session, period: AccountingPeriodCreate, created_by: Optional[str] = None):
    overlapping = find_overlapping_periods(db, period.start_date, period.end_date)
    if overlapping:
        names = ", ".join(p.period_name for p in overlapping)
        raise ValueError(f"The specified period overlaps with existing periods: {names}")

    db_period = AccountingPeriod(**period.model_dump(), created_by=created_by)
    db.add(db_period)
    db.commit()
    db.refresh(db_period)
    return db_period

def update_period_status(db: Session, period_id: int, status: str, changed_by: str):
    if status not in VALID_PERIOD_STATUSES:
        raise ValueError("Invalid status. Must be 'open' or 'closed'")

    db_period = get_period(db, period_id)
    if not db_period:
        return None

    old_values = sqlalchemy_to_dict(db_period)
    db_period.status = status
    db_period.updated_by = changed_by

    create_audit_log(db, AuditLogCreate(
        table_name="accounting_periods",
        record_id=db_period.id,
        changed_by=changed_by,
        action="STATUS_CHANGE",
        old_values=old_values,
        new_values=sqlalchemy_to_dict(db_period),
    ), commit=False)
    db.commit()
    db.refresh(db_period)
    logger.info(f"Accounting period {db_period.period_name} set to {status} by user {changed_by}")
    return db_period

def is_period_closed(db: Session, on_date: date) -> bool:
    return db.query(AccountingPeriod.id).filter(
        AccountingPeriod.status == "closed",
        AccountingPeriod.start_date <= on_date,
        AccountingPeriod.end_date >= on_date
    ).first() is not None
