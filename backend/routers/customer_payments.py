from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from database import get_db
from schemas.customer_payments import CustomerPayment, CustomerPaymentCreate, CustomerInvoice
from crud import customer_payments as payments_crud
from crud.customers import get_customer
from crud.accounting_integration import create_payment_journal_entry, post_side_effect_entry
from utils.request_context import get_user_id

router = APIRouter(prefix="/api", tags=["Customer Payments"])
logger = logging.getLogger("customer_payments")

@router.get("/customer-payments", response_model=List[CustomerPayment])
def get_customer_payments(customer_id: Optional[int] = None, db: Session = Depends(get_db)):
    return [payments_crud.payment_to_dict(p) for p in payments_crud.get_customer_payments(db, customer_id)]

@router.post("/customer-payments", response_model=CustomerPayment, status_code=status.HTTP_201_CREATED)
def create_customer_payment(
    payment: CustomerPaymentCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    customer = get_customer(db, payment.customer_id)
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")

    try:
        db_payment = payments_crud.create_customer_payment(db, payment, user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    entry = post_side_effect_entry(
        db, f"payment {db_payment.payment_number}",
        create_payment_journal_entry, db_payment, customer.name, user_id
    )
    db.refresh(db_payment)
    result = payments_crud.payment_to_dict(db_payment)
    result["journal_entry_number"] = entry.entry_number if entry else None
    return result

@router.get("/customer-invoices", response_model=List[CustomerInvoice])
def get_customer_invoices(customer_id: int, db: Session = Depends(get_db)):
    """Open invoices of a customer with what has been paid and what is still due."""
    return payments_crud.get_open_invoices(db, customer_id)
