"""
Automatic journal entries for business events.

Each writer turns one event (invoice, customer payment, expense, refund,
purchase approval, manual entry) into a posted journal entry with balanced
lines. Writers flush but never commit and never touch account balances;
callers apply the entry with update_account_balances() and commit both in
one transaction.
"""
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.chart_of_accounts import Account
from models.journal_entry import JournalEntry, JournalEntryStatus, JournalSourceType
from models.journal_entry_line import JournalEntryLine
from models.audit_mixin import local_now
from crud.chart_of_accounts import ACCOUNT_CODES, get_account_id_by_code
from crud.accounting_periods import is_period_closed
from utils import q_money

logger = logging.getLogger("accounting_integration")


class MissingAccountError(ValueError):
    pass


class UnbalancedJournalEntryError(ValueError):
    pass


class ClosedPeriodError(ValueError):
    pass


EXPENSE_CATEGORY_ACCOUNTS = {
    "Office Supplies": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Utilities": ACCOUNT_CODES["UTILITIES"],
    "Travel": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Marketing": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Equipment": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Rent": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Insurance": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Professional Services": ACCOUNT_CODES["OFFICE_EXPENSES"],
    "Other": ACCOUNT_CODES["OFFICE_EXPENSES"],
}


def _as_date(value) -> date:
    if value is None:
        return local_now().date()
    if isinstance(value, datetime):
        return value.date()
    return value


def _require_account(db: Session, code: str) -> int:
    account_id = get_account_id_by_code(db, code)
    if account_id is None:
        raise MissingAccountError(f"Required account {code} not found in chart of accounts")
    return account_id


def expense_account_code(category: Optional[str]) -> str:
    return EXPENSE_CATEGORY_ACCOUNTS.get(category or "", ACCOUNT_CODES["OFFICE_EXPENSES"])


def _next_number(db: Session, prefix: str) -> str:
    count = db.query(func.count(JournalEntry.id)).filter(
        JournalEntry.entry_number.like(f"{prefix}%")
    ).scalar() or 0
    return f"{prefix}{count + 1:04d}"


def generate_journal_entry_number(db: Session, on_date: Optional[date] = None) -> str:
    """Next JE-YYYYMM-NNNN number for the month of on_date (today by default).

    The sequence is a count of the month's existing entries, not a database
    sequence; concurrent writers can collide and the unique constraint on
    entry_number rejects the second one.
    """
    on_date = on_date or local_now().date()
    return _next_number(db, f"JE-{on_date:%Y%m}-")


def generate_refund_entry_number(db: Session, on_date: Optional[date] = None) -> str:
    on_date = on_date or local_now().date()
    return _next_number(db, f"REFUND-JE-{on_date:%Y%m}-")


def _post_entry(
    db: Session,
    *,
    entry_date,
    reference: Optional[str],
    memo: Optional[str],
    lines: List[dict],
    source_type: JournalSourceType,
    source_id: Optional[int],
    user_id: int,
    entry_number: Optional[str] = None,
) -> JournalEntry:
    entry_date = _as_date(entry_date)
    if len(lines) < 2:
        raise UnbalancedJournalEntryError("A journal entry needs at least two lines.")

    for line in lines:
        line["debit"] = q_money(line.get("debit"))
        line["credit"] = q_money(line.get("credit"))

    total_debit = sum((line["debit"] for line in lines), Decimal("0.00"))
    total_credit = sum((line["credit"] for line in lines), Decimal("0.00"))
    if total_debit != total_credit:
        raise UnbalancedJournalEntryError(
            f"Journal entry is not balanced: total debits {total_debit} != total credits {total_credit}"
        )
    if total_debit == 0:
        raise UnbalancedJournalEntryError("A journal entry must have non-zero debit and credit amounts.")

    if is_period_closed(db, entry_date):
        raise ClosedPeriodError(f"Accounting period is closed for date {entry_date.isoformat()}")

    db_entry = JournalEntry(
        entry_number=entry_number or generate_journal_entry_number(db),
        date=entry_date,
        reference=reference,
        memo=memo,
        status=JournalEntryStatus.POSTED,
        total_debit=total_debit,
        total_credit=total_credit,
        source_type=source_type,
        source_id=source_id,
        user_id=user_id,
        created_by=str(user_id),
    )
    db.add(db_entry)
    db.flush()  # Flush to get the ID for the entry before creating its lines

    for position, line in enumerate(lines, start=1):
        db.add(JournalEntryLine(
            journal_entry_id=db_entry.id,
            account_id=line["account_id"],
            description=line.get("description"),
            debit=line["debit"],
            credit=line["credit"],
            position=position,
        ))
    db.flush()

    logger.info(
        f"Posted journal entry {db_entry.entry_number} ({source_type.value}) for {total_debit}"
    )
    return db_entry


def create_invoice_journal_entry(db: Session, sale, customer_name: str, user_id: int) -> JournalEntry:
    """Dr Accounts Receivable, Cr Sales Revenue and Cr Tax Payable for an invoice."""
    grand_total = q_money(sale.grand_total)
    tax = q_money(sale.tax)
    revenue = grand_total - tax

    receivable_id = _require_account(db, ACCOUNT_CODES["ACCOUNTS_RECEIVABLE"])
    revenue_id = _require_account(db, ACCOUNT_CODES["SALES_REVENUE"])

    lines = [
        {"account_id": receivable_id, "debit": grand_total,
         "description": f"Invoice {sale.invoice_number} - {customer_name}"},
        {"account_id": revenue_id, "credit": revenue,
         "description": f"Sales revenue - Invoice {sale.invoice_number}"},
    ]
    if tax > 0:
        tax_id = _require_account(db, ACCOUNT_CODES["TAX_PAYABLE"])
        lines.append({"account_id": tax_id, "credit": tax,
                      "description": f"Tax on Invoice {sale.invoice_number}"})

    return _post_entry(
        db,
        entry_date=sale.date,
        reference=f"Invoice {sale.invoice_number}",
        memo=f"Sale to {customer_name}",
        lines=lines,
        source_type=JournalSourceType.INVOICE,
        source_id=sale.id,
        user_id=user_id,
    )


def create_payment_journal_entry(db: Session, payment, customer_name: str, user_id: int) -> JournalEntry:
    amount = q_money(payment.amount)
    cash_id = _require_account(db, ACCOUNT_CODES["CASH"])
    receivable_id = _require_account(db, ACCOUNT_CODES["ACCOUNTS_RECEIVABLE"])
    reference = payment.reference or f"Payment {payment.payment_number}"

    return _post_entry(
        db,
        entry_date=payment.payment_date,
        reference=reference,
        memo=f"Payment from {customer_name}",
        lines=[
            {"account_id": cash_id, "debit": amount, "description": f"Payment received - {reference}"},
            {"account_id": receivable_id, "credit": amount, "description": f"Payment against A/R - {customer_name}"},
        ],
        source_type=JournalSourceType.PAYMENT,
        source_id=payment.id,
        user_id=user_id,
    )


def create_expense_journal_entry(db: Session, expense, user_id: int) -> JournalEntry:
    amount = q_money(expense.amount)
    cash_id = _require_account(db, ACCOUNT_CODES["CASH"])
    expense_id = _require_account(db, expense_account_code(expense.category))

    return _post_entry(
        db,
        entry_date=expense.date,
        reference=expense.vendor or "General Expense",
        memo=expense.description,
        lines=[
            {"account_id": expense_id, "debit": amount, "description": expense.description},
            {"account_id": cash_id, "credit": amount, "description": f"Payment for {expense.description}"},
        ],
        source_type=JournalSourceType.EXPENSE,
        source_id=expense.id,
        user_id=user_id,
    )


def create_refund_journal_entry(
    db: Session, sale, amount, reason: str, refund_date, customer_name: str, user_id: int
) -> JournalEntry:
    """Reverse (part of) a sale: Dr Sales Revenue, Cr Accounts Receivable."""
    amount = q_money(amount)
    receivable_id = _require_account(db, ACCOUNT_CODES["ACCOUNTS_RECEIVABLE"])
    revenue_id = _require_account(db, ACCOUNT_CODES["SALES_REVENUE"])

    return _post_entry(
        db,
        entry_number=generate_refund_entry_number(db),
        entry_date=refund_date,
        reference=f"REF-{sale.invoice_number}",
        memo=f"Refund for Invoice {sale.invoice_number} - {reason}",
        lines=[
            {"account_id": revenue_id, "debit": amount,
             "description": f"Refund - reduce sales revenue for {sale.invoice_number}"},
            {"account_id": receivable_id, "credit": amount,
             "description": f"Refund - reduce receivable from {customer_name}"},
        ],
        source_type=JournalSourceType.REFUND,
        source_id=sale.id,
        user_id=user_id,
    )


def create_purchase_journal_entry(db: Session, purchase_order, supplier_name: str, user_id: int) -> JournalEntry:
    amount = q_money(purchase_order.total_amount)
    inventory_id = _require_account(db, ACCOUNT_CODES["INVENTORY"])
    payable_id = _require_account(db, ACCOUNT_CODES["ACCOUNTS_PAYABLE"])

    return _post_entry(
        db,
        entry_date=local_now().date(),
        reference=f"PO {purchase_order.po_number}",
        memo=f"Purchase from {supplier_name}",
        lines=[
            {"account_id": inventory_id, "debit": amount,
             "description": f"Inventory received - PO {purchase_order.po_number}"},
            {"account_id": payable_id, "credit": amount, "description": f"A/P - {supplier_name}"},
        ],
        source_type=JournalSourceType.PURCHASE_ORDER,
        source_id=purchase_order.id,
        user_id=user_id,
    )


def create_manual_journal_entry(
    db: Session, entry_date, reference: Optional[str], memo: Optional[str], lines: List[dict], user_id: int
) -> JournalEntry:
    account_ids = {line["account_id"] for line in lines}
    found = {row[0] for row in db.query(Account.id).filter(Account.id.in_(account_ids)).all()}
    missing = sorted(account_ids - found)
    if missing:
        raise MissingAccountError(f"Accounts not found: {', '.join(str(a) for a in missing)}")

    return _post_entry(
        db,
        entry_date=entry_date,
        reference=reference,
        memo=memo,
        lines=[dict(line) for line in lines],
        source_type=JournalSourceType.MANUAL,
        source_id=None,
        user_id=user_id,
    )


def update_account_balances(db: Session, journal_entry_id: int):
    """Apply a posted entry to the cached balance of every account it touches."""
    lines = db.query(JournalEntryLine).filter(
        JournalEntryLine.journal_entry_id == journal_entry_id
    ).order_by(JournalEntryLine.position).all()

    for line in lines:
        account = db.query(Account).filter(Account.id == line.account_id).first()
        if account is None:
            logger.warning(f"Skipping balance update for missing account {line.account_id}")
            continue
        net_change = q_money(line.debit) - q_money(line.credit)
        account.balance = q_money(account.balance) + net_change

    db.flush()


def post_side_effect_entry(db: Session, description: str, writer, *args, **kwargs) -> Optional[JournalEntry]:
    """Post an automatic entry for an already-committed business record.

    The entry and its balance updates are committed together. Any failure rolls
    back the accounting work only and is logged; the business record stays.
    """
    try:
        entry = writer(db, *args, **kwargs)
        update_account_balances(db, entry.id)
        db.commit()
        return entry
    except Exception:
        db.rollback()
        logger.exception(f"Failed to record journal entry for {description}")
        return None
