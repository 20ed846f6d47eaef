"""
Financial report generators.

Each report reads its own source: the summary and P&L aggregate the sales and
expenses tables directly, the trial balance and balance sheet read the cached
account balances, and the customer-balance and cash-flow reports read the
static financial-data fixture. Reports covering the same period can disagree.
"""
import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.chart_of_accounts import Account
from models.customers import Customer
from models.customer_payments import CustomerPayment
from models.expenses import Expense
from models.journal_entry import JournalEntry
from models.purchase_orders import PurchaseOrder
from models.sales import Sale
from models.audit_mixin import local_now
from crud.chart_of_accounts import get_accounts
from utils import q_money, to_decimal
from utils.financial_data import load_financial_data
from utils.money import BALANCE_TOLERANCE

logger = logging.getLogger("financial_reports")

CREDIT_NORMAL_TYPES = ("Liability", "Equity", "Revenue")
BEGINNING_CASH = Decimal("25000.00")

TRIAL_BALANCE_FILTERS = {
    "asset": "Asset",
    "assets": "Asset",
    "liability": "Liability",
    "liabilities": "Liability",
    "equity": "Equity",
    "revenue": "Revenue",
    "expense": "Expense",
    "expenses": "Expense",
}

ZERO = Decimal("0.00")


def natural_balance(account_type: str, balance) -> Decimal:
    """Cached balances are debit-positive; credit-normal accounts read positive when negated."""
    balance = q_money(balance)
    return -balance if account_type in CREDIT_NORMAL_TYPES else balance


def _day_bounds(start_date: date, end_date: date):
    return datetime.combine(start_date, time.min), datetime.combine(end_date + timedelta(days=1), time.min)


def _default_period(start_date: Optional[date], end_date: Optional[date]):
    today = local_now().date()
    return start_date or today.replace(day=1), end_date or today


def generate_financial_summary(db: Session) -> dict:
    total_revenue = db.query(func.sum(Sale.grand_total)).scalar() or Decimal(0)
    total_expenses = db.query(func.sum(Expense.amount)).scalar() or Decimal(0)
    outstanding_ar = db.query(func.sum(Sale.grand_total)).filter(
        Sale.payment_status == "pending"
    ).scalar() or Decimal(0)

    totals_by_type = {"Asset": ZERO, "Liability": ZERO, "Equity": ZERO}
    rows = db.query(Account.type, func.sum(Account.balance)).filter(
        Account.is_active == True
    ).group_by(Account.type).all()
    for account_type, total in rows:
        if account_type in totals_by_type:
            totals_by_type[account_type] = natural_balance(account_type, total or 0)

    summary = {
        "total_accounts": db.query(func.count(Account.id)).scalar() or 0,
        "total_journal_entries": db.query(func.count(JournalEntry.id)).scalar() or 0,
        "total_revenue": q_money(total_revenue),
        "total_expenses": q_money(total_expenses),
        "net_profit": q_money(total_revenue) - q_money(total_expenses),
        "outstanding_ar": q_money(outstanding_ar),
        "total_assets": totals_by_type["Asset"],
        "total_liabilities": totals_by_type["Liability"],
        "total_equity": totals_by_type["Equity"],
        "sales_count": db.query(func.count(Sale.id)).scalar() or 0,
        "expenses_count": db.query(func.count(Expense.id)).scalar() or 0,
    }
    logger.info(f"Financial summary: revenue={summary['total_revenue']} expenses={summary['total_expenses']}")
    return summary


def normalize_account_filter(account_filter: Optional[str]) -> Optional[str]:
    """Map a filter like 'Assets only' to an account type; None means all accounts."""
    key = (account_filter or "all").strip().lower()
    if key.endswith(" only"):
        key = key[:-len(" only")].strip()
    return TRIAL_BALANCE_FILTERS.get(key)


def get_trial_balance(
    db: Session,
    account_filter: str = "all",
    include_zero_balance: bool = True,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
) -> dict:
    accounts = get_accounts(db, account_type=normalize_account_filter(account_filter))

    rows = []
    for account in accounts:
        balance = q_money(account.balance)
        debit = balance if balance > 0 else ZERO
        credit = -balance if balance < 0 else ZERO
        rows.append({
            "id": account.id,
            "code": account.code,
            "name": account.name,
            "type": account.type,
            "balance": balance,
            "debit": debit,
            "credit": credit,
        })

    filtered = rows if include_zero_balance else [r for r in rows if r["debit"] > 0 or r["credit"] > 0]
    total_debits = sum((r["debit"] for r in filtered), ZERO)
    total_credits = sum((r["credit"] for r in filtered), ZERO)

    return {
        "accounts": filtered,
        "total_debits": total_debits,
        "total_credits": total_credits,
        "is_balanced": abs(total_debits - total_credits) < BALANCE_TOLERANCE,
        "filters": {
            "account_filter": account_filter,
            "from_date": from_date,
            "to_date": to_date,
            "include_zero_balance": include_zero_balance,
        },
        "summary": {
            "total_accounts": len(filtered),
            "original_account_count": len(rows),
            "applied_filter": account_filter,
        },
    }


def get_profit_and_loss(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict:
    start_date, end_date = _default_period(start_date, end_date)
    if start_date > end_date:
        raise ValueError("start_date must be on or before end_date")
    start_dt, end_dt = _day_bounds(start_date, end_date)

    revenue_total, sales_count = db.query(func.sum(Sale.grand_total), func.count(Sale.id)).filter(
        Sale.date >= start_dt,
        Sale.date < end_dt
    ).one()
    expense_total, expense_count = db.query(func.sum(Expense.amount), func.count(Expense.id)).filter(
        Expense.date >= start_date,
        Expense.date <= end_date
    ).one()

    total_revenue = q_money(revenue_total or 0)
    total_expenses = q_money(expense_total or 0)

    return {
        "period": {"start_date": start_date, "end_date": end_date},
        "revenue": {
            "accounts": get_accounts(db, account_type="Revenue", active_only=False),
            "total": total_revenue,
            "transactions": sales_count or 0,
        },
        "expenses": {
            "accounts": get_accounts(db, account_type="Expense", active_only=False),
            "total": total_expenses,
            "transactions": expense_count or 0,
        },
        "net_income": total_revenue - total_expenses,
    }


def get_balance_sheet(db: Session) -> dict:
    sections = {"Asset": [], "Liability": [], "Equity": []}
    current_earnings = ZERO

    for account in get_accounts(db, active_only=False):
        if account.type in sections:
            sections[account.type].append({
                "id": account.id,
                "code": account.code,
                "name": account.name,
                "balance": natural_balance(account.type, account.balance),
            })
        elif account.type == "Revenue":
            current_earnings += natural_balance(account.type, account.balance)
        elif account.type == "Expense":
            current_earnings -= natural_balance(account.type, account.balance)

    sections["Equity"].append({"name": "Current Earnings", "balance": current_earnings})

    totals = {key: sum((line["balance"] for line in lines), ZERO) for key, lines in sections.items()}
    total_liabilities_and_equity = totals["Liability"] + totals["Equity"]

    return {
        "assets": {"accounts": sections["Asset"], "total": totals["Asset"]},
        "liabilities": {"accounts": sections["Liability"], "total": totals["Liability"]},
        "equity": {"accounts": sections["Equity"], "total": totals["Equity"]},
        "current_earnings": current_earnings,
        "total_liabilities_and_equity": total_liabilities_and_equity,
        "is_balanced": abs(totals["Asset"] - total_liabilities_and_equity) < BALANCE_TOLERANCE,
    }


def _fixture_date(value) -> Optional[date]:
    try:
        return date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        return None


def get_customer_balances(db: Session) -> list:
    due_invoices = load_financial_data()["dueInvoices"]
    balances = []

    for customer in db.query(Customer).order_by(Customer.id).all():
        name = customer.name.lower()
        invoices = [
            inv for inv in due_invoices
            if name in str(inv.get("client", "")).lower() or str(inv.get("client", "")).lower() in name
        ]
        outstanding = sum((q_money(inv.get("balance")) for inv in invoices), ZERO)
        invoiced = sum((q_money(inv.get("totalAmount")) for inv in invoices), ZERO)
        paid = sum((q_money(inv.get("amountPaid")) for inv in invoices), ZERO)
        paid_invoices = sorted(
            (inv for inv in invoices if to_decimal(inv.get("amountPaid")) > 0),
            key=lambda inv: str(inv.get("invoiceDate", "")),
            reverse=True,
        )

        balances.append({
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "total_purchases": q_money(customer.total_purchases),
            "outstanding_balance": outstanding,
            "total_invoiced": invoiced,
            "total_paid": paid,
            "invoice_count": len(invoices),
            "last_payment_date": paid_invoices[0].get("invoiceDate") if paid_invoices else None,
            "status": "Outstanding" if outstanding > 0 else "Paid",
        })
    return balances


def get_cash_flow(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict:
    start_date, end_date = _default_period(start_date, end_date)
    data = load_financial_data()

    def in_period(value):
        d = _fixture_date(value)
        return d is not None and start_date <= d <= end_date

    cash_from_sales = sum(
        (q_money(inv.get("amountPaid")) for inv in data["dueInvoices"] if in_period(inv.get("invoiceDate"))), ZERO
    )
    cash_to_purchases = sum(
        (q_money(p.get("total")) for p in data["purchases"]
         if in_period(p.get("date")) and p.get("paidStatus") == "Paid"), ZERO
    )
    period_expenses = [e for e in data["expenses"] if in_period(e.get("date"))]
    cash_to_expenses = sum((q_money(e.get("amount")) for e in period_expenses), ZERO)
    equipment_purchases = sum(
        (q_money(e.get("amount")) for e in period_expenses
         if "equipment" in str(e.get("description", "")).lower()), ZERO
    )

    net_operating_cash = cash_from_sales - cash_to_purchases - cash_to_expenses
    net_cash_flow = net_operating_cash - equipment_purchases

    return {
        "period": {"start_date": start_date, "end_date": end_date},
        "operating_activities": {
            "cash_from_sales": cash_from_sales,
            "cash_to_purchases": -cash_to_purchases,
            "cash_to_expenses": -cash_to_expenses,
            "net_operating_cash": net_operating_cash,
            "total": net_operating_cash,
        },
        "investing_activities": {
            "equipment_purchases": -equipment_purchases,
            "total": -equipment_purchases,
        },
        "financing_activities": {"loan_proceeds": ZERO, "total": ZERO},
        "net_cash_flow": net_cash_flow,
        "beginning_cash": BEGINNING_CASH,
        "ending_cash": BEGINNING_CASH + net_cash_flow,
        "data_source": "financialDataFixture",
    }


def get_sync_status(db: Session) -> dict:
    return {
        "expenses": db.query(func.count(Expense.id)).scalar() or 0,
        "invoices": db.query(func.count(Sale.id)).scalar() or 0,
        "purchase_orders": db.query(func.count(PurchaseOrder.id)).scalar() or 0,
        "journal_entries": db.query(func.count(JournalEntry.id)).scalar() or 0,
        "customer_payments": db.query(func.count(CustomerPayment.id)).scalar() or 0,
    }
