"""Inventory repository - Database operations for products, suppliers and categories"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from ...models import Product, ProductCategory, SaleItem, Supplier


class InventoryRepository:
    """Repository for inventory database operations"""

    # ------------------------------------------------------------------
    # Product categories
    # ------------------------------------------------------------------

    @staticmethod
    def query_categories(db: Session, name: Optional[str] = None) -> Query:
        query = db.query(ProductCategory)
        if name:
            query = query.filter(ProductCategory.name.ilike(f"%{name}%"))
        return query.order_by(ProductCategory.name.asc())

    @staticmethod
    def get_category_by_id(db: Session, category_id: int) -> Optional[ProductCategory]:
        return db.query(ProductCategory).filter(ProductCategory.id == category_id).first()

    @staticmethod
    def get_category_by_name(db: Session, name: str) -> Optional[ProductCategory]:
        return (
            db.query(ProductCategory)
            .filter(func.lower(ProductCategory.name) == name.lower())
            .first()
        )

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    @staticmethod
    def query_suppliers(
        db: Session,
        name: Optional[str] = None,
        cnpj: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Query:
        query = db.query(Supplier)
        if name:
            query = query.filter(Supplier.name.ilike(f"%{name}%"))
        if cnpj:
            query = query.filter(Supplier.cnpj.contains(cnpj))
        if city:
            query = query.filter(Supplier.city.ilike(f"%{city}%"))
        if state:
            query = query.filter(Supplier.state == state.upper())
        return query.order_by(Supplier.name.asc())

    @staticmethod
    def get_supplier_by_id(db: Session, supplier_id: int) -> Optional[Supplier]:
        return db.query(Supplier).filter(Supplier.id == supplier_id).first()

    @staticmethod
    def get_supplier_by_cnpj(db: Session, cnpj: str) -> Optional[Supplier]:
        return db.query(Supplier).filter(Supplier.cnpj == cnpj).first()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    @staticmethod
    def query_products(
        db: Session,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        supplier_id: Optional[int] = None,
        barcode: Optional[str] = None,
        low_stock: bool = False,
        status: Optional[str] = None,
    ) -> Query:
        query = db.query(Product)
        if name:
            query = query.filter(Product.name.ilike(f"%{name}%"))
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if supplier_id is not None:
            query = query.filter(Product.supplier_id == supplier_id)
        if barcode:
            query = query.filter(Product.barcode == barcode)
        if low_stock:
            query = query.filter(Product.stock <= Product.min_stock)
        if status:
            query = query.filter(Product.status == status)
        return query.order_by(Product.name.asc())

    @staticmethod
    def get_product_by_id(db: Session, product_id: int) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    def get_product_by_barcode(db: Session, barcode: str) -> Optional[Product]:
        return db.query(Product).filter(Product.barcode == barcode).first()

    @staticmethod
    def category_has_products(db: Session, category_id: int) -> bool:
        return db.query(Product.id).filter(Product.category_id == category_id).first() is not None

    @staticmethod
    def supplier_has_products(db: Session, supplier_id: int) -> bool:
        return db.query(Product.id).filter(Product.supplier_id == supplier_id).first() is not None

    @staticmethod
    def product_has_sale_items(db: Session, product_id: int) -> bool:
        return db.query(SaleItem.id).filter(SaleItem.product_id == product_id).first() is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @staticmethod
    def save(db: Session, obj):
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    @staticmethod
    def update(db: Session, obj, **updates):
        for key, value in updates.items():
            if hasattr(obj, key):
                setattr(obj, key, value)
        db.commit()
        db.refresh(obj)
        return obj

    @staticmethod
    def delete(db: Session, obj) -> None:
        db.delete(obj)
        db.commit()
