import logging
from models.refunds import Refund
from models.audit_mixin import local_now
from schemas.refunds import RefundRequest
from crud.sales import get_sale
from crud.accounting_integration import create_refund_journal_entry, update_account_balances
from utils import q_money
from sqlalchemy import func
from sqlalchemy.orm import Session

logger = logging.getLogger("refunds")

def get_refunds(db: Session, invoice_id: int = None):
    query = db.query(Refund)
    if invoice_id is not None:
        query = query.filter(Refund.invoice_id == invoice_id)
    return query.order_by(Refund.id.desc()).all()

def process_refund(db: Session, refund: RefundRequest, user_id: int):
    """
    Reverses (part of) an invoice: posts the refund journal entry, applies it to
    balances, records the refund and marks the invoice refunded, all in one commit.
    Returns None when the invoice does not exist.
    """
    sale = get_sale(db, refund.invoice_id)
    if not sale:
        return None

    amount = q_money(refund.total_refund_amount)
    if amount <= 0:
        raise ValueError("Refund amount must be greater than zero")
    already_refunded = q_money(
        db.query(func.coalesce(func.sum(Refund.refund_amount), 0))
        .filter(Refund.invoice_id == sale.id)
        .scalar()
    )
    refundable = q_money(sale.grand_total) - already_refunded
    if amount > refundable:
        raise ValueError(
            f"Refund amount {amount} exceeds the refundable balance {refundable} "
            f"of invoice {sale.invoice_number} (already refunded {already_refunded})"
        )

    customer_name = refund.customer_name or (sale.customer.name if sale.customer else "Cash Customer")
    refund_date = refund.refund_date or local_now().date()

    entry = create_refund_journal_entry(
        db, sale, amount, refund.refund_reason, refund_date, customer_name, user_id
    )
    update_account_balances(db, entry.id)

    db.add(Refund(
        invoice_id=sale.id,
        invoice_number=sale.invoice_number,
        customer_id=sale.customer_id,
        customer_name=customer_name,
        original_amount=q_money(sale.grand_total),
        refund_amount=amount,
        reason=refund.refund_reason,
        date=refund_date,
        status="processed",
        journal_entry_number=entry.entry_number,
        created_by=str(user_id),
    ))

    note = f"REFUNDED: EGP {amount} on {refund_date.isoformat()} - {refund.refund_reason}"
    sale.payment_status = "refunded"
    sale.notes = f"{sale.notes}\n\n{note}" if sale.notes else note

    db.commit()
    logger.info(f"Refund of {amount} processed for invoice {sale.invoice_number}: {entry.entry_number}")
    return {
        "success": True,
        "message": f"Refund of EGP {amount} processed successfully",
        "journal_entry_number": entry.entry_number,
        "refund_amount": amount,
        "items_refunded": len(refund.items),
    }
