from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
import logging
from database import get_db
from schemas.sales import Sale, SaleCreate, SaleCreated
from crud import sales as sales_crud
from crud.customers import get_customer
from crud.accounting_integration import create_invoice_journal_entry, post_side_effect_entry
from utils.request_context import get_header_user_id, resolve_user_id

router = APIRouter(prefix="/api/sales", tags=["Sales"])
logger = logging.getLogger("sales")

@router.post("", response_model=SaleCreated, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale: SaleCreate,
    db: Session = Depends(get_db),
    header_user_id: Optional[int] = Depends(get_header_user_id)
):
    """
    Create a sale. When it has a customer, the invoice is also booked to
    Accounts Receivable / Sales Revenue / Tax Payable; a failure there is logged
    and does not undo the sale. Cash sales without a customer are not journalised.
    """
    acting_user = resolve_user_id(header_user_id, sale.user_id)
    customer = None
    if sale.customer_id is not None:
        customer = get_customer(db, sale.customer_id)
        if not customer:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")

    try:
        db_sale = sales_crud.create_sale(db, sale, acting_user, customer=customer)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    entry = None
    if customer is not None:
        entry = post_side_effect_entry(
            db, f"invoice {db_sale.invoice_number}",
            create_invoice_journal_entry, db_sale, customer.name, acting_user
        )
    else:
        logger.info(f"Cash sale {db_sale.invoice_number} recorded without a journal entry")

    db.refresh(db_sale)
    return {"sale": db_sale, "journal_entry_number": entry.entry_number if entry else None}

@router.get("", response_model=List[Sale])
def get_sales(
    customer_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    return sales_crud.get_sales(db, customer_id=customer_id, skip=skip, limit=limit)

@router.get("/{sale_id}", response_model=Sale)
def get_sale(sale_id: int, db: Session = Depends(get_db)):
    db_sale = sales_crud.get_sale(db, sale_id)
    if not db_sale:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Sale not found")
    return db_sale
