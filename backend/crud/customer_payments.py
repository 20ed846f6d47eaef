import logging
from datetime import timedelta
from decimal import Decimal
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.customer_payments import CustomerPayment
from models.payment_allocations import PaymentAllocation
from models.sales import Sale
from models.customers import Customer
from models.audit_mixin import local_now
from schemas.customer_payments import CustomerPaymentCreate
from utils import q_money

logger = logging.getLogger("customer_payments")

OPEN_INVOICE_STATUSES = ("pending", "partial")

def generate_payment_number(db: Session) -> str:
    count = db.query(func.count(CustomerPayment.id)).scalar() or 0
    return f"PAY-{count + 1:04d}"

def get_customer_payment(db: Session, payment_id: int):
    return db.query(CustomerPayment).filter(CustomerPayment.id == payment_id).first()

def get_customer_payments(db: Session, customer_id: Optional[int] = None):
    query = db.query(CustomerPayment)
    if customer_id is not None:
        query = query.filter(CustomerPayment.customer_id == customer_id)
    return query.order_by(CustomerPayment.payment_date.desc(), CustomerPayment.id.desc()).all()

def payment_to_dict(payment: CustomerPayment) -> dict:
    return {
        "id": payment.id,
        "payment_number": payment.payment_number,
        "customer_id": payment.customer_id,
        "customer_name": payment.customer.name if payment.customer else "Unknown Customer",
        "amount": payment.amount,
        "payment_date": payment.payment_date,
        "payment_method": payment.payment_method,
        "reference": payment.reference,
        "notes": payment.notes,
        "status": payment.status,
        "created_at": payment.created_at,
        "allocations": [
            {
                "id": allocation.id,
                "invoice_id": allocation.invoice_id,
                "invoice_number": allocation.invoice.invoice_number if allocation.invoice else None,
                "amount": allocation.amount,
            }
            for allocation in payment.allocations
        ],
    }

def create_customer_payment(db: Session, payment: CustomerPaymentCreate, user_id: int):
    """
    Records a customer payment and allocates it to the customer's invoices.
    Each allocation raises the invoice's amount_paid and moves it to partial or completed.
    """
    amount = q_money(payment.amount)
    allocations = [a for a in payment.allocations if a.amount > 0]

    allocated_total = sum((q_money(a.amount) for a in allocations), Decimal(0))
    if allocated_total > amount:
        raise ValueError(f"Allocations ({allocated_total}) exceed the payment amount ({amount})")

    invoices = {}
    for allocation in allocations:
        invoice = db.query(Sale).filter(Sale.id == allocation.invoice_id).first()
        if not invoice:
            raise ValueError(f"Invoice with id {allocation.invoice_id} not found")
        if invoice.customer_id != payment.customer_id:
            raise ValueError(f"Invoice {invoice.invoice_number} does not belong to customer {payment.customer_id}")
        invoices[invoice.id] = invoice

    db_payment = CustomerPayment(
        payment_number=generate_payment_number(db),
        customer_id=payment.customer_id,
        amount=amount,
        payment_date=payment.payment_date,
        payment_method=payment.payment_method,
        reference=payment.reference,
        notes=payment.notes,
        status="completed",
        created_by=str(user_id),
    )
    db.add(db_payment)
    db.flush()

    for allocation in allocations:
        invoice = invoices[allocation.invoice_id]
        db.add(PaymentAllocation(payment_id=db_payment.id, invoice_id=invoice.id, amount=q_money(allocation.amount)))
        invoice.amount_paid = q_money(invoice.amount_paid) + q_money(allocation.amount)
        invoice.payment_status = "completed" if invoice.amount_paid >= q_money(invoice.grand_total) else "partial"

    db.commit()
    db.refresh(db_payment)
    logger.info(f"Recorded payment {db_payment.payment_number} of {amount} from customer {payment.customer_id}")
    return db_payment

def get_open_invoices(db: Session, customer_id: int) -> list:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    customer_name = customer.name if customer else "Unknown Customer"
    today = local_now().date()

    invoices = db.query(Sale).filter(
        Sale.customer_id == customer_id,
        Sale.payment_status.in_(OPEN_INVOICE_STATUSES)
    ).order_by(Sale.date).all()

    result = []
    for invoice in invoices:
        amount_paid = db.query(func.sum(PaymentAllocation.amount)).filter(
            PaymentAllocation.invoice_id == invoice.id
        ).scalar() or Decimal(0)
        amount_paid = q_money(amount_paid)
        total = q_money(invoice.grand_total)
        amount_due = total - amount_paid

        try:
            terms_days = int(invoice.payment_terms or 0)
        except ValueError:
            terms_days = 0
        due_date = invoice.date.date() + timedelta(days=terms_days)

        if amount_due <= 0:
            status = "paid"
        elif amount_paid > 0:
            status = "partial"
        elif due_date < today:
            status = "overdue"
        else:
            status = "unpaid"

        result.append({
            "id": invoice.id,
            "invoice_number": invoice.invoice_number,
            "customer_id": invoice.customer_id,
            "customer_name": customer_name,
            "date": invoice.date,
            "due_date": due_date,
            "total_amount": total,
            "amount_paid": amount_paid,
            "amount_due": amount_due,
            "status": status,
        })
    return result
