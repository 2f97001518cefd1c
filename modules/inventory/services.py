# modules/inventory/services.py
"""
Product storage helpers.

Every helper reads and writes the ``ombor_products`` table directly; there is
no cache in front of it. Writes follow a last-writer-wins contract: an upsert
replaces whatever row currently holds the id, with no version check, so two
browser sessions editing the same product simply overwrite each other.
"""
from datetime import datetime

from flask import current_app
from sqlalchemy import func, or_

from extensions import db
from modules.inventory.models import Product, new_id


def get_products():
    return Product.query.order_by(Product.name.asc(), Product.id.asc()).all()


def get_product(product_id):
    if not product_id:
        return None
    return db.session.get(Product, product_id)


def get_product_by_barcode(barcode):
    code = (barcode or "").strip()
    if not code:
        return None
    return Product.query.filter_by(barcode=code).order_by(Product.created_seq.asc(), Product.id.asc()).first()


def _next_created_seq() -> int:
    current = db.session.query(func.max(Product.created_seq)).scalar()
    return (current or 0) + 1


def save_product(product: Product) -> Product:
    """
    Upsert by id: replaces the stored row when the id exists, otherwise adds it.
    Returns the persistent instance.
    """
    if not product.id:
        product.id = new_id()
    existing = get_product(product.id)
    if existing is not None:
        product.created_seq = existing.created_seq
    elif not product.created_seq:
        product.created_seq = _next_created_seq()
    if product.last_updated is None:
        product.last_updated = datetime.utcnow()
    merged = db.session.merge(product)
    db.session.commit()
    return merged


def update_product_details(product: Product) -> bool:
    """
    Replace the descriptive fields of an existing product.

    Quantity is left as stored: stock only moves through ``update_stock``.
    Returns False when the id is unknown.
    """
    existing = get_product(product.id)
    if existing is None:
        return False

    if existing is not product:
        existing.name = product.name
        existing.category = product.category
        existing.unit = product.unit
        existing.barcode = product.barcode
        existing.price = product.price
    existing.last_updated = datetime.utcnow()
    db.session.commit()
    return True


def delete_product(product_id) -> bool:
    product = get_product(product_id)
    if product is None:
        return False
    db.session.delete(product)
    db.session.commit()
    return True


def find_duplicate_barcode(product: Product):
    """Another product carrying the same barcode, if any."""
    q = Product.query.filter(Product.barcode == product.barcode)
    if product.id:
        q = q.filter(Product.id != product.id)
    duplicate = q.first()
    if duplicate is not None:
        current_app.logger.warning(
            "Barcode %s is shared by products %s and %s", product.barcode, product.id, duplicate.id
        )
    return duplicate


def get_all_categories():
    rows = (
        db.session.query(Product.category)
        .filter(Product.category.isnot(None), Product.category != "")
        .distinct()
        .order_by(Product.category.asc())
        .all()
    )
    return [r[0] for r in rows]


def search_products(text=None, category=None):
    """
    Name matches case-insensitively, barcode matches as a plain substring.
    ``category`` of None, "" or "all" means no category filter.
    """
    q = Product.query
    text = (text or "").strip()
    if text:
        q = q.filter(or_(
            func.lower(Product.name).contains(text.lower(), autoescape=True),
            Product.barcode.contains(text, autoescape=True),
        ))
    if category and category != "all":
        q = q.filter(Product.category == category)
    return q.order_by(Product.name.asc(), Product.id.asc()).all()


def category_counts():
    """[(category, product count)] in category order."""
    rows = (
        db.session.query(Product.category, func.count(Product.id))
        .group_by(Product.category)
        .order_by(Product.category.asc())
        .all()
    )
    return [(name, int(count)) for name, count in rows]


def count_low_stock(threshold: int) -> int:
    return Product.query.filter(Product.quantity < threshold).count()
