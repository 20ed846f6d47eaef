import logging
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.sales import Sale
from models.sale_items import SaleItem
from models.products import Product
from models.customers import Customer
from schemas.sales import SaleCreate
from utils import q_money

logger = logging.getLogger("sales")

def generate_invoice_number(db: Session) -> str:
    count = db.query(func.count(Sale.id)).scalar() or 0
    number = f"INV-{count + 1:06d}"
    while db.query(Sale.id).filter(Sale.invoice_number == number).first():
        count += 1
        number = f"INV-{count + 1:06d}"
    return number

def get_sale(db: Session, sale_id: int):
    return db.query(Sale).filter(Sale.id == sale_id).first()

def get_sales(db: Session, customer_id: int = None, skip: int = 0, limit: int = 100):
    query = db.query(Sale)
    if customer_id is not None:
        query = query.filter(Sale.customer_id == customer_id)
    return query.order_by(Sale.date.desc(), Sale.id.desc()).offset(skip).limit(limit).all()

def create_sale(db: Session, sale: SaleCreate, user_id: int, customer: Customer = None):
    """
    Creates a sale with its items, takes the sold quantities out of stock and
    adds the grand total to the customer's purchases. Commits the sale.
    """
    if sale.invoice_number and db.query(Sale.id).filter(Sale.invoice_number == sale.invoice_number).first():
        raise ValueError(f"Invoice number {sale.invoice_number} already exists")

    item_rows = []
    for item in sale.items:
        product = db.query(Product).filter(Product.id == item.product_id).first()
        if not product:
            raise ValueError(f"Product with id {item.product_id} not found")
        if product.quantity < item.quantity:
            raise ValueError(
                f"Insufficient stock for {product.name}: {product.quantity} available, {item.quantity} requested"
            )
        line_total = item.total if item.total is not None else item.unit_price * item.quantity - item.discount
        item_rows.append((product, item, q_money(line_total)))

    grand_total = q_money(sale.grand_total)
    subtotal = sale.subtotal
    if subtotal is None:
        subtotal = sum((row[2] for row in item_rows), Decimal(0)) if item_rows else sale.total_amount

    sale_data = sale.model_dump(exclude={"items", "user_id", "subtotal", "date", "invoice_number"})
    db_sale = Sale(
        **sale_data,
        invoice_number=sale.invoice_number or generate_invoice_number(db),
        user_id=user_id,
        subtotal=q_money(subtotal),
        amount_paid=grand_total if sale.payment_status == "completed" else Decimal(0),
        created_by=str(user_id),
    )
    if sale.date is not None:
        db_sale.date = sale.date
    db.add(db_sale)
    db.flush()  # Flush to get the sale ID before adding its items

    for product, item, line_total in item_rows:
        db.add(SaleItem(
            sale_id=db_sale.id,
            product_id=product.id,
            quantity=item.quantity,
            unit_price=q_money(item.unit_price),
            discount=q_money(item.discount),
            total=line_total,
        ))
        product.quantity -= item.quantity
        if product.quantity == 0:
            product.status = "out_of_stock"

    if customer is not None:
        customer.total_purchases = q_money(customer.total_purchases) + grand_total

    db.commit()
    db.refresh(db_sale)
    logger.info(f"Created sale {db_sale.invoice_number} for {grand_total} (customer {sale.customer_id})")
    return db_sale
