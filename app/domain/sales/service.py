"""
Sales service - checkout, cancellation and line-item edits.

Every public method is one transaction: stock moves and total changes are
issued first and committed together at the end, so any rejection leaves
stock and totals exactly as they were.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import BackgroundTasks
from sqlalchemy import false
from sqlalchemy.orm import Session

from ...auth import ensure_client_access, is_client_user
from ...exceptions import InvalidInputError, NotFoundError
from ...models import Product, Sale, SaleItem, User
from ...services.notification_service import notify_sale_cancelled, notify_sale_confirmed
from ...shared.pagination import PaginationParams, paginate
from .inventory import (
    adjust_sale_total,
    decrement_stock,
    ensure_sale_open,
    get_locked_sale,
    increment_stock,
    line_total,
    restock_sale,
    to_money,
)
from .repository import SaleRepository
from .schemas import SaleCreate, SaleItemCreate, SaleItemUpdate, SaleUpdate

logger = logging.getLogger(__name__)

# Allowed status moves through the update endpoint; cancelled is terminal
SALE_TRANSITIONS = {
    "pending": {"pending", "completed", "cancelled"},
    "completed": {"completed", "cancelled"},
    "cancelled": set(),
}


def _get_sellable_product(repo: SaleRepository, db: Session, product_id: int) -> Product:
    product = repo.get_product(db, product_id)
    if not product:
        raise NotFoundError(f"Product {product_id} not found")
    if product.status != "active":
        raise InvalidInputError(f"Product '{product.name}' is inactive")
    return product


class SaleService:
    """Service layer for sales"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SaleRepository()

    def list_sales(self, params: PaginationParams, current_user: User, **filters):
        if is_client_user(current_user):
            own = current_user.client
            if own is None:
                return paginate(self.db.query(Sale).filter(false()), params)
            filters["client_id"] = own.id
        return paginate(self.repo.query_sales(self.db, **filters), params)

    def get_sale(self, sale_id: int, current_user: User) -> Sale:
        sale = self.repo.get_sale_by_id(self.db, sale_id)
        if not sale:
            raise NotFoundError("Sale not found")
        ensure_client_access(current_user, sale.client_id)
        return sale

    def create_sale(
        self, data: SaleCreate, current_user: User, background_tasks: BackgroundTasks
    ) -> Sale:
        """
        Check out a list of products.

        Each line checks the product is active and in stock, takes the units
        out of stock and adds `unit_price x quantity - discount` to the
        subtotal. The sale-level discount comes off the subtotal last. One
        failing line rejects the whole sale.
        """
        client = self.repo.get_client(self.db, data.client_id)
        if not client:
            raise NotFoundError("Client not found")
        ensure_client_access(current_user, client.id)

        staff_id = data.staff_id
        if staff_id is not None:
            if not self.repo.get_staff(self.db, staff_id):
                raise NotFoundError("Staff member not found")
        elif current_user.staff is not None:
            staff_id = current_user.staff.id

        items = []
        subtotal = to_money(0)
        for line in data.items:
            product = _get_sellable_product(self.repo, self.db, line.product_id)
            unit_price = line.unit_price if line.unit_price is not None else product.price
            total = line_total(unit_price, line.quantity, line.discount)
            decrement_stock(self.db, product.id, line.quantity)
            items.append(
                SaleItem(
                    product_id=product.id,
                    quantity=line.quantity,
                    unit_price=to_money(unit_price),
                    discount=to_money(line.discount),
                    total=total,
                )
            )
            subtotal += total

        discount = to_money(data.discount)
        if discount > subtotal:
            raise InvalidInputError("Sale discount cannot exceed the sale subtotal")

        sale = Sale(
            client_id=client.id,
            staff_id=staff_id,
            date=datetime.utcnow(),
            total=to_money(subtotal - discount),
            discount=discount,
            payment_method=data.payment_method,
            status="completed",
            notes=data.notes,
            items=items,
        )
        self.db.add(sale)
        self.db.commit()
        self.db.refresh(sale)
        logger.info(f"✅ Sale {sale.id} completed: {len(items)} line(s), total {sale.total}")

        notify_sale_confirmed(background_tasks, sale)
        return sale

    def update_sale(
        self,
        sale_id: int,
        data: SaleUpdate,
        current_user: User,
        background_tasks: BackgroundTasks,
    ) -> Sale:
        self.get_sale(sale_id, current_user)
        sale = get_locked_sale(self.db, sale_id)
        ensure_sale_open(sale)

        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        new_status = updates.get("status", sale.status)
        if new_status not in SALE_TRANSITIONS[sale.status]:
            raise InvalidInputError(
                f"Cannot change sale status from {sale.status} to {new_status}",
                code="INVALID_STATE",
            )

        cancelling = new_status == "cancelled"
        if cancelling:
            restock_sale(self.db, sale)

        for key, value in updates.items():
            setattr(sale, key, value)
        self.db.commit()
        self.db.refresh(sale)
        logger.info(f"✅ Sale {sale.id} updated: {sorted(updates)}")

        if cancelling:
            notify_sale_cancelled(background_tasks, sale)
        return sale

    def delete_sale(self, sale_id: int, background_tasks: BackgroundTasks) -> None:
        """Delete a sale and its lines; stock comes back unless a cancel already returned it"""
        sale = get_locked_sale(self.db, sale_id)
        if sale.status != "cancelled":
            restock_sale(self.db, sale)
            notify_sale_cancelled(background_tasks, sale)

        self.db.delete(sale)
        self.db.commit()
        logger.info(f"🗑️ Sale {sale_id} deleted")


class SaleItemService:
    """Service layer for editing the lines of an existing sale"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SaleRepository()

    def list_items(
        self,
        params: PaginationParams,
        current_user: User,
        sale_id: Optional[int] = None,
        product_id: Optional[int] = None,
    ):
        client_id = None
        if is_client_user(current_user):
            own = current_user.client
            if own is None:
                return paginate(self.db.query(SaleItem).filter(false()), params)
            client_id = own.id
        query = self.repo.query_items(
            self.db, sale_id=sale_id, product_id=product_id, client_id=client_id
        )
        return paginate(query, params)

    def get_item(self, item_id: int, current_user: User) -> SaleItem:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise NotFoundError("Sale item not found")
        ensure_client_access(current_user, item.sale.client_id)
        return item

    def create_item(self, data: SaleItemCreate) -> SaleItem:
        sale = get_locked_sale(self.db, data.sale_id)
        ensure_sale_open(sale)

        product = _get_sellable_product(self.repo, self.db, data.product_id)
        unit_price = data.unit_price if data.unit_price is not None else product.price
        total = line_total(unit_price, data.quantity, data.discount)
        decrement_stock(self.db, product.id, data.quantity)

        item = SaleItem(
            sale_id=sale.id,
            product_id=product.id,
            quantity=data.quantity,
            unit_price=to_money(unit_price),
            discount=to_money(data.discount),
            total=total,
        )
        self.db.add(item)
        adjust_sale_total(sale, total)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"✅ Added item {item.id} to sale {sale.id}, sale total {sale.total}")
        return item

    def update_item(self, item_id: int, data: SaleItemUpdate) -> SaleItem:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise NotFoundError("Sale item not found")
        sale = get_locked_sale(self.db, item.sale_id)
        ensure_sale_open(sale)

        quantity = data.quantity if data.quantity is not None else item.quantity
        unit_price = data.unit_price if data.unit_price is not None else item.unit_price
        discount = data.discount if data.discount is not None else item.discount
        new_total = line_total(unit_price, quantity, discount)

        delta = quantity - item.quantity
        if delta > 0:
            decrement_stock(self.db, item.product_id, delta)
        elif delta < 0:
            increment_stock(self.db, item.product_id, -delta)

        adjust_sale_total(sale, new_total - to_money(item.total))
        item.quantity = quantity
        item.unit_price = to_money(unit_price)
        item.discount = to_money(discount)
        item.total = new_total
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"✅ Sale item {item.id} updated (quantity delta {delta})")
        return item

    def delete_item(self, item_id: int) -> None:
        item = self.repo.get_item_by_id(self.db, item_id)
        if not item:
            raise NotFoundError("Sale item not found")
        sale = get_locked_sale(self.db, item.sale_id)
        ensure_sale_open(sale)

        adjust_sale_total(sale, -to_money(item.total))
        increment_stock(self.db, item.product_id, item.quantity)
        self.db.delete(item)
        self.db.commit()
        logger.info(f"🗑️ Sale item {item_id} removed from sale {sale.id}")
