"""
Bulk upsert of products, customers and suppliers from imported rows.

Rows are keyed by SKU (products), email (customers) or name (suppliers). A row
whose key already exists updates the record when any mapped field differs and
is skipped when nothing changed. Each row commits on its own, so one bad row
does not stop the import.
"""
import logging
from datetime import date
from decimal import Decimal
import pandas as pd
from sqlalchemy.orm import Session
from models.products import Product
from models.customers import Customer
from models.suppliers import Supplier
from utils import q_money

logger = logging.getLogger("bulk_import")

PRODUCT_FIELDS = {
    "name": ("name", "Product Name"),
    "drug_name": ("drug_name", "drugName", "Drug Name"),
    "sku": ("sku", "SKU"),
    "description": ("description", "Description"),
    "cost_price": ("cost_price", "costPrice", "Cost Price"),
    "selling_price": ("selling_price", "sellingPrice", "Selling Price", "price"),
    "unit_of_measure": ("unit_of_measure", "unitOfMeasure", "Unit of Measure"),
    "quantity": ("quantity", "Quantity", "currentStock"),
    "low_stock_threshold": ("low_stock_threshold", "lowStockThreshold", "Low Stock Threshold", "minStockLevel"),
    "expiry_date": ("expiry_date", "expiryDate", "Expiry Date"),
    "location": ("location", "Location", "warehouse", "Warehouse"),
    "manufacturer": ("manufacturer", "Manufacturer"),
}

CUSTOMER_FIELDS = {
    "name": ("name", "Name", "Customer Name"),
    "email": ("email", "Email"),
    "phone": ("phone", "Phone"),
    "address": ("address", "Address"),
    "city": ("city", "City"),
    "state": ("state", "State"),
    "zip_code": ("zip_code", "zipCode", "Zip Code", "zip"),
    "company": ("company", "Company"),
    "position": ("position", "Position", "Job Title"),
    "sector": ("sector", "Sector", "Industry"),
    "tax_number": ("tax_number", "taxNumber", "Tax Number", "taxId"),
}

SUPPLIER_FIELDS = {
    "name": ("name", "Name", "Supplier Name"),
    "contact_person": ("contact_person", "contactPerson", "Contact Person", "contact"),
    "email": ("email", "Email"),
    "phone": ("phone", "Phone"),
    "address": ("address", "Address"),
    "city": ("city", "City"),
    "state": ("state", "State"),
    "zip_code": ("zip_code", "zipCode", "Zip Code", "zip"),
    "materials": ("materials", "Materials", "products"),
    "supplier_type": ("supplier_type", "supplierType", "Supplier Type"),
    "eta_number": ("eta_number", "etaNumber", "ETA Number", "eta"),
}


def _pick(row: dict, aliases) -> object:
    for key in aliases:
        value = row.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            value = value.strip()
            if value == "":
                continue
        return value
    return None


def _map(row: dict, fields: dict) -> dict:
    return {field: _pick(row, aliases) for field, aliases in fields.items()}


def _as_int(value, default: int) -> int:
    if value is None:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid whole number: {value!r}")


def _as_text(value):
    return None if value is None else str(value)


def _as_date(value):
    if value is None:
        return None
    if isinstance(value, date):
        return value
    try:
        return pd.to_datetime(value).date()
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date: {value!r}")


def map_product_row(row: dict) -> dict:
    data = _map(row, PRODUCT_FIELDS)
    if not data["sku"]:
        raise ValueError("SKU is required")
    if not data["name"]:
        raise ValueError("Product name is required")
    return {
        "sku": str(data["sku"]),
        "name": str(data["name"]),
        "drug_name": str(data["drug_name"] or data["name"]),
        "description": _as_text(data["description"]),
        "cost_price": q_money(data["cost_price"]),
        "selling_price": q_money(data["selling_price"]),
        "unit_of_measure": str(data["unit_of_measure"] or "PCS"),
        "quantity": _as_int(data["quantity"], 0),
        "low_stock_threshold": _as_int(data["low_stock_threshold"], 10),
        "expiry_date": _as_date(data["expiry_date"]),
        "location": _as_text(data["location"]),
        "manufacturer": _as_text(data["manufacturer"]),
    }


def map_customer_row(row: dict) -> dict:
    data = {key: _as_text(value) for key, value in _map(row, CUSTOMER_FIELDS).items()}
    if not data["email"]:
        raise ValueError("Customer email is required")
    if not data["name"]:
        raise ValueError("Customer name is required")
    data["sector"] = data["sector"] or "Healthcare"
    data["tax_number"] = data["tax_number"] or ""
    return data


def map_supplier_row(row: dict) -> dict:
    data = {key: _as_text(value) for key, value in _map(row, SUPPLIER_FIELDS).items()}
    if not data["name"]:
        raise ValueError("Supplier name is required")
    data["supplier_type"] = data["supplier_type"] or "Local"
    return data


def _same(current, new) -> bool:
    if isinstance(current, Decimal) or isinstance(new, Decimal):
        return q_money(current) == q_money(new)
    return current == new


def _upsert(db: Session, model, existing, values: dict) -> str:
    if existing is None:
        db.add(model(**values))
        return "inserted"

    changed = {key: value for key, value in values.items() if not _same(getattr(existing, key), value)}
    if not changed:
        return "skipped"
    for key, value in changed.items():
        setattr(existing, key, value)
    return "updated"


def import_row(db: Session, import_type: str, row: dict) -> str:
    if import_type == "products":
        values = map_product_row(row)
        existing = db.query(Product).filter(Product.sku == values["sku"]).first()
        return _upsert(db, Product, existing, values)
    if import_type == "customers":
        values = map_customer_row(row)
        existing = db.query(Customer).filter(Customer.email == values["email"]).first()
        return _upsert(db, Customer, existing, values)
    if import_type == "suppliers":
        values = map_supplier_row(row)
        existing = db.query(Supplier).filter(Supplier.name == values["name"]).first()
        return _upsert(db, Supplier, existing, values)
    raise ValueError(f"Unsupported import type: {import_type}")


def import_rows(db: Session, import_type: str, rows: list) -> dict:
    result = {"success": True, "inserted": 0, "updated": 0, "skipped": 0, "failed": 0, "errors": []}

    for i, row in enumerate(rows, start=1):
        try:
            outcome = import_row(db, import_type, row)
            db.commit()
            result[outcome] += 1
        except Exception as e:
            db.rollback()
            result["failed"] += 1
            result["errors"].append(f"Row {i}: {e}")
            logger.warning(f"Failed to import {import_type} row {i}: {e}")

    logger.info(
        f"Import of {import_type} completed: {result['inserted']} inserted, {result['updated']} updated, "
        f"{result['skipped']} skipped, {result['failed']} failed"
    )
    return result
