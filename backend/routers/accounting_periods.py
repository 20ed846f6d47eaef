from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.accounting_periods import AccountingPeriod, AccountingPeriodCreate, AccountingPeriodStatusUpdate
from crud import accounting_periods as periods_crud
from utils.request_context import get_user_id

router = APIRouter(
    prefix="/api/accounting-periods",
    tags=["Accounting Periods"],
)

@router.get("", response_model=List[AccountingPeriod])
def get_accounting_periods(db: Session = Depends(get_db)):
    """Periods newest first. The quarters of the current year are created on first use."""
    periods_crud.ensure_default_periods(db)
    return periods_crud.get_periods(db)

@router.post("", response_model=AccountingPeriod, status_code=status.HTTP_201_CREATED)
def create_accounting_period(
    period: AccountingPeriodCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    try:
        return periods_crud.create_period(db, period, created_by=str(user_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.patch("/{period_id}/status", response_model=AccountingPeriod)
def update_accounting_period_status(
    period_id: int,
    status_update: AccountingPeriodStatusUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    try:
        period = periods_crud.update_period_status(db, period_id, status_update.status, changed_by=str(user_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not period:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accounting period not found")
    return period
