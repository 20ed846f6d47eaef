from sqlalchemy.orm import Session
from models.customers import Customer
from schemas.customers import CustomerCreate

def get_customer(db: Session, customer_id: int):
    return db.query(Customer).filter(Customer.id == customer_id).first()

def get_customer_by_email(db: Session, email: str):
    return db.query(Customer).filter(Customer.email == email).first()

def get_customers(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Customer).order_by(Customer.name).offset(skip).limit(limit).all()

def create_customer(db: Session, customer: CustomerCreate, created_by: str = None):
    db_customer = Customer(**customer.model_dump(), created_by=created_by)
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer
