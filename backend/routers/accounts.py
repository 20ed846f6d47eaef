from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging
from database import get_db
from schemas.chart_of_accounts import Account, AccountCreate, AccountUpdate
from crud import chart_of_accounts as accounts_crud
from utils.request_context import get_user_id

router = APIRouter(
    prefix="/api/accounts",
    tags=["Chart of Accounts"],
)
logger = logging.getLogger("accounts")

@router.get("", response_model=List[Account])
def get_accounts(db: Session = Depends(get_db)):
    """Active accounts ordered by code, with the balance summed from journal lines."""
    result = []
    for account, ledger_balance in accounts_crud.get_accounts_with_ledger_balances(db):
        item = Account.model_validate(account)
        item.balance = ledger_balance
        result.append(item)
    return result

@router.get("/{account_id}", response_model=Account)
def get_account(account_id: int, db: Session = Depends(get_db)):
    account = accounts_crud.get_account(db, account_id)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account with id {account_id} not found"
        )
    return account

@router.post("", response_model=Account, status_code=status.HTTP_201_CREATED)
def create_account(
    account: AccountCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    try:
        db_account = accounts_crud.create_account(db, account, created_by=str(user_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.info(f"Account {db_account.code} created by user {user_id}")
    return db_account

@router.patch("/{account_id}", response_model=Account)
def update_account(
    account_id: int,
    account_update: AccountUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_user_id)
):
    try:
        account = accounts_crud.update_account(db, account_id, account_update, changed_by=str(user_id))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account with id {account_id} not found"
        )
    return account
