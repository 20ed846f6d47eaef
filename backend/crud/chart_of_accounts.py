import logging
from decimal import Decimal
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.chart_of_accounts import Account
from models.journal_entry_line import JournalEntryLine
from schemas.chart_of_accounts import AccountCreate, AccountUpdate
from schemas.audit_log import AuditLogCreate
from crud.audit_log import create_audit_log
from utils import sqlalchemy_to_dict, q_money

logger = logging.getLogger("chart_of_accounts")

# Accounts the automatic journal entries post to
ACCOUNT_CODES = {
    "CASH": "1100",
    "ACCOUNTS_RECEIVABLE": "1200",
    "INVENTORY": "1300",
    "ACCOUNTS_PAYABLE": "2100",
    "TAX_PAYABLE": "2200",
    "SALES_REVENUE": "4100",
    "COST_OF_GOODS_SOLD": "5100",
    "OFFICE_EXPENSES": "6100",
    "UTILITIES": "6300",
}

DEFAULT_ACCOUNTS = [
    # Assets
    {"code": "1100", "name": "Cash and Bank", "type": "Asset", "subtype": "Current Asset", "description": "Cash on hand and in bank"},
    {"code": "1200", "name": "Accounts Receivable", "type": "Asset", "subtype": "Current Asset", "description": "Money owed by customers"},
    {"code": "1300", "name": "Inventory", "type": "Asset", "subtype": "Current Asset", "description": "Product inventory"},
    # Liabilities
    {"code": "2100", "name": "Accounts Payable", "type": "Liability", "subtype": "Current Liability", "description": "Money owed to suppliers"},
    {"code": "2200", "name": "Tax Payable", "type": "Liability", "subtype": "Current Liability", "description": "Taxes owed to government"},
    {"code": "2300", "name": "VAT Payable", "type": "Liability", "subtype": "Current Liability", "description": "VAT owed to tax authority"},
    # Equity
    {"code": "3000", "name": "Owner Equity", "type": "Equity", "subtype": "Owner Capital", "description": "Owner investment in business"},
    {"code": "3100", "name": "Retained Earnings", "type": "Equity", "subtype": "Retained Earnings", "description": "Accumulated profits"},
    # Revenue
    {"code": "4100", "name": "Sales Revenue", "type": "Revenue", "subtype": "Operating Revenue", "description": "Primary sales income"},
    # Cost of sales
    {"code": "5100", "name": "Cost of Goods Sold", "type": "Expense", "subtype": "Cost of Sales", "description": "Direct cost of products sold"},
    # Operating expenses
    {"code": "6100", "name": "Office Expenses", "type": "Expense", "subtype": "Operating Expense", "description": "General office and administrative expenses"},
    {"code": "6200", "name": "Rent Expense", "type": "Expense", "subtype": "Operating Expense", "description": "Office and warehouse rent"},
    {"code": "6300", "name": "Utilities", "type": "Expense", "subtype": "Operating Expense", "description": "Electricity, water, internet"},
    {"code": "6400", "name": "Marketing Expenses", "type": "Expense", "subtype": "Operating Expense", "description": "Advertising and promotion costs"},
    {"code": "6500", "name": "Travel Expenses", "type": "Expense", "subtype": "Operating Expense", "description": "Business travel costs"},
]

def get_account(db: Session, account_id: int):
    return db.query(Account).filter(Account.id == account_id).first()

def get_account_by_code(db: Session, code: str):
    return db.query(Account).filter(Account.code == code).first()

def get_account_id_by_code(db: Session, code: str) -> Optional[int]:
    row = db.query(Account.id).filter(Account.code == code).first()
    return row[0] if row else None

def get_accounts(db: Session, account_type: Optional[str] = None, active_only: bool = True):
    query = db.query(Account)
    if active_only:
        query = query.filter(Account.is_active == True)
    if account_type:
        query = query.filter(Account.type == account_type)
    return query.order_by(Account.code).all()

def get_ledger_balances(db: Session) -> dict:
    """Sum of (debit - credit) per account, straight from the journal lines."""
    rows = db.query(
        JournalEntryLine.account_id,
        func.sum(JournalEntryLine.debit - JournalEntryLine.credit)
    ).group_by(JournalEntryLine.account_id).all()
    return {account_id: q_money(total or 0) for account_id, total in rows}

def get_accounts_with_ledger_balances(db: Session):
    """Active accounts ordered by code, each paired with its ledger-derived balance."""
    ledger = get_ledger_balances(db)
    return [(account, ledger.get(account.id, Decimal("0.00"))) for account in get_accounts(db)]

def is_account_in_use(db: Session, account_id: int) -> bool:
    return db.query(JournalEntryLine.id).filter(JournalEntryLine.account_id == account_id).first() is not None

def create_account(db: Session, account: AccountCreate, created_by: Optional[str] = None):
    if get_account_by_code(db, account.code):
        raise ValueError(f"Account with code {account.code} already exists")

    db_account = Account(**account.model_dump(), balance=Decimal(0), created_by=created_by)
    db.add(db_account)
    db.commit()
    db.refresh(db_account)
    return db_account

def update_account(db: Session, account_id: int, account_update: AccountUpdate, changed_by: str):
    account = get_account(db, account_id)
    if not account:
        return None

    update_data = account_update.model_dump(exclude_unset=True)
    in_use = is_account_in_use(db, account_id)

    # Prevent changing account type or deactivating an account that is already in use
    if 'type' in update_data and update_data['type'] != account.type and in_use:
        raise ValueError("Cannot change account type for an account that is in use by journal entries.")
    if 'is_active' in update_data and update_data['is_active'] is False and in_use:
        raise ValueError("Cannot deactivate account because it is referenced by journal entry lines.")

    old_values = sqlalchemy_to_dict(account)
    for key, value in update_data.items():
        setattr(account, key, value)
    account.updated_by = changed_by

    create_audit_log(db, AuditLogCreate(
        table_name="accounts",
        record_id=account.id,
        changed_by=changed_by,
        action="UPDATE",
        old_values=old_values,
        new_values=sqlalchemy_to_dict(account),
    ), commit=False)
    db.commit()
    db.refresh(account)
    return account

def seed_default_accounts(db: Session, commit: bool = True) -> int:
    """Insert the default chart of accounts, skipping codes that already exist."""
    created = 0
    for account_data in DEFAULT_ACCOUNTS:
        if get_account_by_code(db, account_data["code"]):
            continue
        db.add(Account(**account_data, is_active=True, balance=Decimal(0)))
        db.flush()
        created += 1

    if commit:
        db.commit()
    logger.info(f"Seeded chart of accounts: {created} new accounts")
    return created
