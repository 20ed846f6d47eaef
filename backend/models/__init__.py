from models.chart_of_accounts import Account
from models.journal_entry import JournalEntry, JournalEntryStatus, JournalSourceType
from models.journal_entry_line import JournalEntryLine
from models.customers import Customer
from models.suppliers import Supplier
from models.products import Product
from models.sales import Sale
from models.sale_items import SaleItem
from models.expenses import Expense
from models.purchase_orders import PurchaseOrder
from models.purchase_order_items import PurchaseOrderItem
from models.accounting_periods import AccountingPeriod
from models.customer_payments import CustomerPayment
from models.payment_allocations import PaymentAllocation
from models.refunds import Refund
from models.audit_log import AuditLog

__all__ = ['Account', 'AccountingPeriod', 'AuditLog', 'Customer', 'CustomerPayment', 'Expense', 'JournalEntry', 'JournalEntryLine', 'JournalEntryStatus', 'JournalSourceType', 'PaymentAllocation', 'Product', 'PurchaseOrder', 'PurchaseOrderItem', 'Refund', 'Sale', 'SaleItem', 'Supplier',]
