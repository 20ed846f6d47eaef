from sqlalchemy.orm import Session
from models.products import Product
from schemas.products import ProductCreate

def get_product(db: Session, product_id: int):
    return db.query(Product).filter(Product.id == product_id).first()

def get_product_by_sku(db: Session, sku: str):
    return db.query(Product).filter(Product.sku == sku).first()

def get_products(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Product).order_by(Product.name).offset(skip).limit(limit).all()

def create_product(db: Session, product: ProductCreate, created_by: str = None):
    if get_product_by_sku(db, product.sku):
        raise ValueError(f"Product with SKU {product.sku} already exists")
    db_product = Product(**product.model_dump(), created_by=created_by)
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product
