from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from database import get_db
from schemas.expenses import Expense, ExpenseCreate, ExpenseCreated
from crud import expenses as expenses_crud
from crud.accounting_integration import create_expense_journal_entry, post_side_effect_entry
from utils.request_context import get_header_user_id, resolve_user_id

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])

@router.post("", response_model=ExpenseCreated, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense: ExpenseCreate,
    db: Session = Depends(get_db),
    header_user_id: Optional[int] = Depends(get_header_user_id)
):
    acting_user = resolve_user_id(header_user_id, expense.user_id)
    db_expense = expenses_crud.create_expense(db, expense, acting_user)
    entry = post_side_effect_entry(
        db, f"expense {db_expense.id}",
        create_expense_journal_entry, db_expense, acting_user
    )
    db.refresh(db_expense)
    return {"expense": db_expense, "journal_entry_number": entry.entry_number if entry else None}

@router.get("", response_model=List[Expense])
def get_expenses(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    return expenses_crud.get_expenses(db, start_date=start_date, end_date=end_date, skip=skip, limit=limit)

@router.get("/{expense_id}", response_model=Expense)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    db_expense = expenses_crud.get_expense(db, expense_id)
    if not db_expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")
    return db_expense
