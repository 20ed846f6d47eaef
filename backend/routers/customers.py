from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.customers import Customer, CustomerCreate
from crud import customers as customers_crud
from utils.request_context import get_user_id

router = APIRouter(prefix="/api/customers", tags=["Customers"])

@router.get("", response_model=List[Customer])
def get_customers(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return customers_crud.get_customers(db, skip=skip, limit=limit)

@router.post("", response_model=Customer, status_code=status.HTTP_201_CREATED)
def create_customer(customer: CustomerCreate, db: Session = Depends(get_db), user_id: int = Depends(get_user_id)):
    if customer.email and customers_crud.get_customer_by_email(db, customer.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Customer with this email already exists")
    return customers_crud.create_customer(db, customer, created_by=str(user_id))

@router.get("/{customer_id}", response_model=Customer)
def get_customer(customer_id: int, db: Session = Depends(get_db)):
    db_customer = customers_crud.get_customer(db, customer_id)
    if not db_customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return db_customer
