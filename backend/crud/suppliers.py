from sqlalchemy.orm import Session
from models.suppliers import Supplier
from schemas.suppliers import SupplierCreate

def get_supplier(db: Session, supplier_id: int):
    return db.query(Supplier).filter(Supplier.id == supplier_id).first()

def get_supplier_by_name(db: Session, name: str):
    return db.query(Supplier).filter(Supplier.name == name).first()

def get_suppliers(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Supplier).order_by(Supplier.name).offset(skip).limit(limit).all()

def create_supplier(db: Session, supplier: SupplierCreate, created_by: str = None):
    if get_supplier_by_name(db, supplier.name):
        raise ValueError(f"Supplier '{supplier.name}' already exists")
    db_supplier = Supplier(**supplier.model_dump(), created_by=created_by)
    db.add(db_supplier)
    db.commit()
    db.refresh(db_supplier)
    return db_supplier
