from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from database import get_db
from schemas.products import Product, ProductCreate
from crud import products as products_crud
from utils.request_context import get_user_id

router = APIRouter(prefix="/api/products", tags=["Products"])

@router.get("", response_model=List[Product])
def get_products(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return products_crud.get_products(db, skip=skip, limit=limit)

@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(product: ProductCreate, db: Session = Depends(get_db), user_id: int = Depends(get_user_id)):
    try:
        return products_crud.create_product(db, product, created_by=str(user_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
