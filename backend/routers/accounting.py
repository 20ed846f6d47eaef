from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
import logging
from database import get_db
from schemas.financial_reports import (
    AccountingSummary,
    TrialBalance,
    ProfitAndLoss,
    BalanceSheet,
    CustomerBalance,
    CashFlowStatement,
    SyncStatus,
)
from schemas.refunds import RefundRequest, RefundResult
from schemas.purchase_orders import PurchaseApprovalResult, PurchaseOrder
from crud import financial_reports as reports_crud
from crud import chart_of_accounts as accounts_crud
from crud import purchase_orders as purchase_orders_crud
from crud.refunds import process_refund
from crud.sample_data import generate_sample_data
from crud.accounting_integration import create_purchase_journal_entry, post_side_effect_entry
from utils.request_context import get_user_id

router = APIRouter(
    prefix="/api/accounting",
    tags=["Accounting"],
)
logger = logging.getLogger("accounting")

@router.get("/summary", response_model=AccountingSummary)
def get_accounting_summary(db: Session = Depends(get_db)):
    return reports_crud.generate_financial_summary(db)

@router.get("/trial-balance", response_model=TrialBalance)
def get_trial_balance(
    account_filter: str = "all",
    include_zero_balance: bool = True,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    """Trial balance from the cached account balances."""
    return reports_crud.get_trial_balance(
        db,
        account_filter=account_filter,
        include_zero_balance=include_zero_balance,
        from_date=from_date,
        to_date=to_date,
    )

@router.get("/profit-loss", response_model=ProfitAndLoss)
def get_profit_and_loss(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    try:
        return reports_crud.get_profit_and_loss(db, start_date=start_date, end_date=end_date)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/balance-sheet", response_model=BalanceSheet)
def get_balance_sheet(db: Session = Depends(get_db)):
    return reports_crud.get_balance_sheet(db)

@router.get("/customer-balances", response_model=List[CustomerBalance])
def get_customer_balances(db: Session = Depends(get_db)):
    return reports_crud.get_customer_balances(db)

@router.get("/cash-flow", response_model=CashFlowStatement)
def get_cash_flow(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    db: Session = Depends(get_db)
):
    return reports_crud.get_cash_flow(db, start_date=start_date, end_date=end_date)

@router.get("/sync-status", response_model=SyncStatus)
def get_sync_status(db: Session = Depends(get_db)):
    return reports_crud.get_sync_status(db)

@router.post("/process-refund", response_model=RefundResult)
def process_invoice_refund(
    refund: RefundRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    logger.info(f"Processing refund for invoice {refund.invoice_id}: EGP {refund.total_refund_amount}")
    try:
        result = process_refund(db, refund, user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return result

@router.post("/generate-sample-data")
def create_sample_data(db: Session = Depends(get_db), user_id: int = Depends(get_user_id)):
    try:
        return generate_sample_data(db, user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.post("/seed-accounts")
def seed_accounts(db: Session = Depends(get_db)):
    created = accounts_crud.seed_default_accounts(db)
    return {
        "message": f"Chart of accounts seeded successfully. Created {created} new accounts.",
        "created_accounts": created,
        "total_available": len(accounts_crud.DEFAULT_ACCOUNTS),
    }

@router.patch("/approve-purchase/{po_id}", response_model=PurchaseApprovalResult)
def approve_purchase(
    po_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    """Receive a purchase order into stock and book it to Inventory / Accounts Payable."""
    db_po = purchase_orders_crud.get_purchase_order(db, po_id)
    if not db_po:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Purchase order not found")

    try:
        db_po = purchase_orders_crud.receive_purchase_order(db, db_po, user_id)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    supplier_name = db_po.supplier.name if db_po.supplier else "Unknown Supplier"
    entry = post_side_effect_entry(
        db, f"purchase order {db_po.po_number}",
        create_purchase_journal_entry, db_po, supplier_name, user_id
    )
    db.refresh(db_po)
    return {
        "success": True,
        "message": f"Purchase order {db_po.po_number} approved and received",
        "purchase_order": PurchaseOrder.model_validate(db_po),
        "journal_entry_number": entry.entry_number if entry else None,
    }
