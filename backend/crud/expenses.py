from sqlalchemy.orm import Session
from models.expenses import Expense
from schemas.expenses import ExpenseCreate
from typing import Optional
from datetime import date

def create_expense(db: Session, expense: ExpenseCreate, user_id: int):
    db_expense = Expense(**expense.model_dump(exclude={"user_id"}), user_id=user_id, created_by=str(user_id))
    db.add(db_expense)
    db.commit()
    db.refresh(db_expense)
    return db_expense

def get_expense(db: Session, expense_id: int):
    return db.query(Expense).filter(Expense.id == expense_id).first()

def get_expenses(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None, skip: int = 0, limit: int = 100):
    query = db.query(Expense)
    if start_date:
        query = query.filter(Expense.date >= start_date)
    if end_date:
        query = query.filter(Expense.date <= end_date)
    return query.order_by(Expense.date.desc(), Expense.id.desc()).offset(skip).limit(limit).all()
