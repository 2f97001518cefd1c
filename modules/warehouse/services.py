# modules/warehouse/services.py
from datetime import datetime

from flask import current_app
from sqlalchemy import func

from extensions import db
from modules.inventory.models import Product
from modules.warehouse.models import StockTransaction, TxType


def get_transactions(limit=None):
    """Journal, newest first."""
    q = StockTransaction.query.order_by(StockTransaction.tx_date.desc(), StockTransaction.seq.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def count_transactions(tx_type: TxType) -> int:
    return StockTransaction.query.filter_by(tx_type=tx_type).count()


def _next_seq() -> int:
    current = db.session.query(func.max(StockTransaction.seq)).scalar()
    return (current or 0) + 1


def update_stock(product_id, amount, tx_type, username=None) -> bool:
    """
    Move stock for one product and write the matching journal entry.

    Inbound adds ``amount``, outbound subtracts it. Outbound fails when the
    product holds less than ``amount``; this is the only insufficient-stock
    check, views just report the outcome. Product row and journal entry are
    committed together.

    Returns False when the amount is not positive, the product is missing or
    stock is insufficient.
    """
    tx_type = TxType(tx_type)
    if amount is None or amount <= 0:
        current_app.logger.warning("update_stock: rejected amount %r for %s", amount, product_id)
        return False

    product = db.session.get(Product, product_id) if product_id else None
    if product is None:
        current_app.logger.warning("update_stock: product %s not found", product_id)
        return False

    if tx_type is TxType.OUTBOUND and amount > product.quantity:
        current_app.logger.warning(
            "update_stock: insufficient stock for %s (have %s, requested %s)",
            product.id, product.quantity, amount,
        )
        return False

    now = datetime.utcnow()
    if tx_type is TxType.INBOUND:
        product.quantity += amount
    else:
        product.quantity -= amount
    product.last_updated = now

    db.session.add(StockTransaction(
        product_id=product.id,
        product_name=product.name,
        tx_type=tx_type,
        qty=amount,
        tx_date=now,
        user=username or current_app.config.get("DEFAULT_ACTOR", "System"),
        seq=_next_seq(),
    ))

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception("update_stock: commit failed for %s", product_id)
        raise

    current_app.logger.info(
        "Stock %s: %s x%s -> %s", tx_type.value, product.name, amount, product.quantity
    )
    return True
