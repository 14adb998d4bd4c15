"""Sales repository - Database operations for sales and line items"""

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.orm import Query, Session, selectinload

from ...models import Client, Product, Sale, SaleItem, Staff


class SaleRepository:
    """Repository for sale database operations"""

    @staticmethod
    def query_sales(
        db: Session,
        client_id: Optional[int] = None,
        staff_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        payment_method: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Query:
        query = db.query(Sale).options(selectinload(Sale.items))
        if client_id is not None:
            query = query.filter(Sale.client_id == client_id)
        if staff_id is not None:
            query = query.filter(Sale.staff_id == staff_id)
        if date_from is not None:
            query = query.filter(Sale.date >= datetime.combine(date_from, time.min))
        if date_to is not None:
            query = query.filter(Sale.date <= datetime.combine(date_to, time.max))
        if payment_method:
            query = query.filter(Sale.payment_method == payment_method)
        if status:
            query = query.filter(Sale.status == status)
        return query.order_by(Sale.date.desc(), Sale.id.desc())

    @staticmethod
    def query_items(
        db: Session,
        sale_id: Optional[int] = None,
        product_id: Optional[int] = None,
        client_id: Optional[int] = None,
    ) -> Query:
        query = db.query(SaleItem)
        if sale_id is not None:
            query = query.filter(SaleItem.sale_id == sale_id)
        if product_id is not None:
            query = query.filter(SaleItem.product_id == product_id)
        if client_id is not None:
            query = query.join(Sale, SaleItem.sale_id == Sale.id).filter(Sale.client_id == client_id)
        return query.order_by(SaleItem.id.asc())

    @staticmethod
    def get_sale_by_id(db: Session, sale_id: int) -> Optional[Sale]:
        return db.query(Sale).filter(Sale.id == sale_id).first()

    @staticmethod
    def get_item_by_id(db: Session, item_id: int) -> Optional[SaleItem]:
        return db.query(SaleItem).filter(SaleItem.id == item_id).first()

    @staticmethod
    def get_client(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_staff(db: Session, staff_id: int) -> Optional[Staff]:
        return db.query(Staff).filter(Staff.id == staff_id).first()

    @staticmethod
    def get_product(db: Session, product_id: int) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()
