from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.suppliers import Supplier, SupplierCreate
from crud import suppliers as suppliers_crud
from utils.request_context import get_user_id

router = APIRouter(prefix="/api/suppliers", tags=["Suppliers"])

@router.get("", response_model=List[Supplier])
def get_suppliers(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return suppliers_crud.get_suppliers(db, skip=skip, limit=limit)

@router.post("", response_model=Supplier, status_code=status.HTTP_201_CREATED)
def create_supplier(supplier: SupplierCreate, db: Session = Depends(get_db), user_id: int = Depends(get_user_id)):
    try:
        return suppliers_crud.create_supplier(db, supplier, created_by=str(user_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
