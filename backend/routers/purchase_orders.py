from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from database import get_db
from schemas.purchase_orders import PurchaseOrder, PurchaseOrderCreate, PurchaseOrderStatusUpdate
from crud import purchase_orders as purchase_orders_crud
from crud.suppliers import get_supplier
from crud.accounting_integration import create_purchase_journal_entry, post_side_effect_entry
from utils.request_context import get_user_id

router = APIRouter(prefix="/api/purchase-orders", tags=["Purchase Orders"])
logger = logging.getLogger("purchase_orders")

@router.post("", response_model=PurchaseOrder, status_code=status.HTTP_201_CREATED)
def create_purchase_order(
    po: PurchaseOrderCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    if not get_supplier(db, po.supplier_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    try:
        return purchase_orders_crud.create_purchase_order(db, po, user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("", response_model=List[PurchaseOrder])
def get_purchase_orders(
    status_filter: Optional[str] = Query(None, alias="status"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    return purchase_orders_crud.get_purchase_orders(db, status=status_filter, skip=skip, limit=limit)

@router.get("/{po_id}", response_model=PurchaseOrder)
def get_purchase_order(po_id: int, db: Session = Depends(get_db)):
    db_po = purchase_orders_crud.get_purchase_order(db, po_id)
    if not db_po:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Purchase order not found")
    return db_po

@router.patch("/{po_id}/status", response_model=PurchaseOrder)
def update_purchase_order_status(
    po_id: int,
    status_update: PurchaseOrderStatusUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    db_po = purchase_orders_crud.get_purchase_order(db, po_id)
    if not db_po:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Purchase order not found")

    try:
        db_po = purchase_orders_crud.update_purchase_order_status(db, db_po, status_update.status, user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if status_update.status == "received":
        supplier_name = db_po.supplier.name if db_po.supplier else "Unknown Supplier"
        post_side_effect_entry(
            db, f"purchase order {db_po.po_number}",
            create_purchase_journal_entry, db_po, supplier_name, user_id
        )
        db.refresh(db_po)
    return db_po
