"""
Stock and sale-total arithmetic.

Stock moves are single guarded UPDATE statements, so two concurrent sales
can never both pass the availability check and drive stock negative; the
`stock >= 0` check constraint backs this up at the storage layer. Sale
totals are changed on a row locked with SELECT ... FOR UPDATE.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Session
from sqlalchemy.orm.util import identity_key

from ...exceptions import InvalidInputError, NotFoundError
from ...models import Product, Sale

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(value or 0).quantize(CENTS, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int, discount=0) -> Decimal:
    """unit_price x quantity - discount, never negative"""
    total = to_money(unit_price) * quantity - to_money(discount)
    if total < 0:
        raise InvalidInputError("Item discount cannot exceed the item subtotal")
    return to_money(total)


def _expire_cached_stock(db: Session, product_id: int) -> None:
    product = db.identity_map.get(identity_key(Product, product_id))
    if product is not None:
        db.expire(product, ["stock"])


def decrement_stock(db: Session, product_id: int, quantity: int) -> None:
    """Take `quantity` units out of stock or reject the whole operation"""
    if quantity <= 0:
        return
    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
        .execution_options(synchronize_session=False)
    )
    _expire_cached_stock(db, product_id)
    if result.rowcount != 1:
        available = db.query(Product.stock).filter(Product.id == product_id).scalar()
        logger.info(
            f"⚠️ Insufficient stock for product {product_id}: requested {quantity}, available {available}"
        )
        raise InvalidInputError(
            f"Insufficient stock for product {product_id}. Available: {available or 0}",
            code="INSUFFICIENT_STOCK",
        )


def increment_stock(db: Session, product_id: int, quantity: int) -> None:
    if quantity <= 0:
        return
    db.execute(
        update(Product)
        .where(Product.id == product_id)
        .values(stock=Product.stock + quantity)
        .execution_options(synchronize_session=False)
    )
    _expire_cached_stock(db, product_id)


def restock_sale(db: Session, sale: Sale) -> None:
    """Return every line of `sale` to stock"""
    for item in sale.items:
        increment_stock(db, item.product_id, item.quantity)
    logger.info(f"📦 Restocked {len(sale.items)} line(s) from sale {sale.id}")


def lock_sale(db: Session, sale_id: int) -> Optional[Sale]:
    """Load the sale row FOR UPDATE with fresh column values"""
    return (
        db.query(Sale)
        .filter(Sale.id == sale_id)
        .populate_existing()
        .with_for_update()
        .first()
    )


def get_locked_sale(db: Session, sale_id: int) -> Sale:
    sale = lock_sale(db, sale_id)
    if not sale:
        raise NotFoundError("Sale not found")
    return sale


def ensure_sale_open(sale: Sale) -> None:
    if sale.status == "cancelled":
        raise InvalidInputError("Sale is cancelled and cannot be modified", code="INVALID_STATE")


def adjust_sale_total(sale: Sale, delta) -> None:
    sale.total = to_money(to_money(sale.total) + to_money(delta))
