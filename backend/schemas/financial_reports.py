from pydantic import BaseModel
from typing import Dict, List, Optional
from datetime import date
from decimal import Decimal
from schemas.chart_of_accounts import Account

class AccountingSummary(BaseModel):
    total_accounts: int
    total_journal_entries: int
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    outstanding_ar: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    sales_count: int
    expenses_count: int

class TrialBalanceRow(BaseModel):
    id: int
    code: str
    name: str
    type: str
    balance: Decimal
    debit: Decimal
    credit: Decimal

class TrialBalanceFilters(BaseModel):
    account_filter: str
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    include_zero_balance: bool

class TrialBalanceSummary(BaseModel):
    total_accounts: int
    original_account_count: int
    applied_filter: str

class TrialBalance(BaseModel):
    accounts: List[TrialBalanceRow]
    total_debits: Decimal
    total_credits: Decimal
    is_balanced: bool
    filters: TrialBalanceFilters
    summary: TrialBalanceSummary

class ReportPeriod(BaseModel):
    start_date: date
    end_date: date

class ProfitAndLossSection(BaseModel):
    accounts: List[Account]
    total: Decimal
    transactions: int

class ProfitAndLoss(BaseModel):
    period: ReportPeriod
    revenue: ProfitAndLossSection
    expenses: ProfitAndLossSection
    net_income: Decimal

class BalanceSheetLine(BaseModel):
    id: Optional[int] = None
    code: Optional[str] = None
    name: str
    balance: Decimal

class BalanceSheetSection(BaseModel):
    accounts: List[BalanceSheetLine]
    total: Decimal

class BalanceSheet(BaseModel):
    assets: BalanceSheetSection
    liabilities: BalanceSheetSection
    equity: BalanceSheetSection
    current_earnings: Decimal
    total_liabilities_and_equity: Decimal
    is_balanced: bool

class CustomerBalance(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    total_purchases: Decimal
    outstanding_balance: Decimal
    total_invoiced: Decimal
    total_paid: Decimal
    invoice_count: int
    last_payment_date: Optional[str] = None
    status: str  # Outstanding or Paid

class CashFlowStatement(BaseModel):
    period: ReportPeriod
    operating_activities: Dict[str, Decimal]
    investing_activities: Dict[str, Decimal]
    financing_activities: Dict[str, Decimal]
    net_cash_flow: Decimal
    beginning_cash: Decimal
    ending_cash: Decimal
    data_source: str

class SyncStatus(BaseModel):
    expenses: int
    invoices: int
    purchase_orders: int
    journal_entries: int
    customer_payments: int
