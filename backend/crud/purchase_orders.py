import logging
from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.purchase_orders import PurchaseOrder
from models.purchase_order_items import PurchaseOrderItem
from models.products import Product
from schemas.purchase_orders import PurchaseOrderCreate, VALID_PO_STATUS_UPDATES
from utils import q_money

logger = logging.getLogger("purchase_orders")

def generate_po_number(db: Session) -> str:
    count = db.query(func.count(PurchaseOrder.id)).scalar() or 0
    return f"PO-{count + 1:05d}"

def get_purchase_order(db: Session, po_id: int):
    return db.query(PurchaseOrder).filter(PurchaseOrder.id == po_id).first()

def get_purchase_orders(db: Session, status: str = None, skip: int = 0, limit: int = 100):
    query = db.query(PurchaseOrder)
    if status:
        query = query.filter(PurchaseOrder.status == status)
    return query.order_by(PurchaseOrder.order_date.desc(), PurchaseOrder.id.desc()).offset(skip).limit(limit).all()

def create_purchase_order(db: Session, po: PurchaseOrderCreate, user_id: int):
    if not po.items:
        raise ValueError("A purchase order needs at least one item")

    for item in po.items:
        if not db.query(Product.id).filter(Product.id == item.product_id).first():
            raise ValueError(f"Product with id {item.product_id} not found")

    po_number = po.po_number or generate_po_number(db)
    if db.query(PurchaseOrder.id).filter(PurchaseOrder.po_number == po_number).first():
        raise ValueError(f"Purchase order number {po_number} already exists")

    db_po = PurchaseOrder(
        po_number=po_number,
        supplier_id=po.supplier_id,
        user_id=user_id,
        order_date=po.order_date,
        expected_delivery_date=po.expected_delivery_date,
        transportation_cost=q_money(po.transportation_cost),
        notes=po.notes,
        status="pending",
        created_by=str(user_id),
    )
    db.add(db_po)
    db.flush()

    total_amount = Decimal(0)
    for item in po.items:
        line_total = q_money(item.unit_price * item.quantity)
        db.add(PurchaseOrderItem(
            purchase_order_id=db_po.id,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=q_money(item.unit_price),
            total=line_total,
            received_quantity=0,
        ))
        total_amount += line_total

    # Transportation is capitalised into the inventory cost of the order
    db_po.total_amount = total_amount + q_money(po.transportation_cost)
    db.commit()
    db.refresh(db_po)
    logger.info(f"Created purchase order {db_po.po_number} for {db_po.total_amount}")
    return db_po

def receive_purchase_order(db: Session, db_po: PurchaseOrder, user_id: int):
    """Mark the order received and bring every item's remaining quantity into stock."""
    if db_po.status == "received":
        raise ValueError(f"Purchase order {db_po.po_number} has already been received")
    if db_po.status in ("rejected", "cancelled"):
        raise ValueError(f"Purchase order {db_po.po_number} is {db_po.status} and cannot be received")

    for item in db_po.items:
        outstanding = item.quantity - (item.received_quantity or 0)
        if outstanding > 0:
            item.product.quantity = (item.product.quantity or 0) + outstanding
            item.product.cost_price = item.unit_price
            if item.product.status == "out_of_stock":
                item.product.status = "active"
            item.received_quantity = item.quantity

    db_po.status = "received"
    db_po.updated_by = str(user_id)
    db.commit()
    db.refresh(db_po)
    logger.info(f"Purchase order {db_po.po_number} received into stock")
    return db_po

def update_purchase_order_status(db: Session, db_po: PurchaseOrder, status: str, user_id: int):
    if status not in VALID_PO_STATUS_UPDATES:
        raise ValueError(f"Invalid status. Must be one of {VALID_PO_STATUS_UPDATES}")
    if status == "received":
        return receive_purchase_order(db, db_po, user_id)
    if db_po.status == "received":
        raise ValueError(f"Purchase order {db_po.po_number} has already been received")

    db_po.status = status
    db_po.updated_by = str(user_id)
    db.commit()
    db.refresh(db_po)
    return db_po
