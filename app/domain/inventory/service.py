"""Inventory service - product categories, suppliers, products and stock adjustments"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, InvalidInputError, NotFoundError
from ...models import Product, ProductCategory, Supplier
from ...shared.pagination import PaginationParams, paginate
from ..sales.inventory import decrement_stock, increment_stock
from ..services.schemas import CategoryCreate, CategoryUpdate
from .repository import InventoryRepository
from .schemas import (
    ProductCreate,
    ProductUpdate,
    StockAdjustment,
    SupplierCreate,
    SupplierUpdate,
)

logger = logging.getLogger(__name__)


class ProductCategoryService:
    """Service layer for product categories"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InventoryRepository()

    def list_categories(self, params: PaginationParams, name: Optional[str] = None):
        return paginate(self.repo.query_categories(self.db, name=name), params)

    def get_category(self, category_id: int) -> ProductCategory:
        category = self.repo.get_category_by_id(self.db, category_id)
        if not category:
            raise NotFoundError("Product category not found")
        return category

    def create_category(self, data: CategoryCreate) -> ProductCategory:
        if self.repo.get_category_by_name(self.db, data.name):
            raise ConflictError("A product category with this name already exists")
        category = self.repo.save(self.db, ProductCategory(**data.model_dump()))
        logger.info(f"✅ Created product category {category.id} '{category.name}'")
        return category

    def update_category(self, category_id: int, data: CategoryUpdate) -> ProductCategory:
        category = self.get_category(category_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in updates:
            existing = self.repo.get_category_by_name(self.db, updates["name"])
            if existing and existing.id != category.id:
                raise ConflictError("A product category with this name already exists")
        return self.repo.update(self.db, category, **updates)

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        if self.repo.category_has_products(self.db, category.id):
            raise InvalidInputError("Cannot delete a category that still has products")
        self.repo.delete(self.db, category)
        logger.info(f"🗑️ Deleted product category {category_id}")

    def list_category_products(
        self, category_id: int, params: PaginationParams, status: Optional[str] = None
    ):
        category = self.get_category(category_id)
        query = self.repo.query_products(self.db, category_id=category.id, status=status)
        return paginate(query, params)


class SupplierService:
    """Service layer for suppliers"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InventoryRepository()

    def list_suppliers(self, params: PaginationParams, **filters):
        return paginate(self.repo.query_suppliers(self.db, **filters), params)

    def get_supplier(self, supplier_id: int) -> Supplier:
        supplier = self.repo.get_supplier_by_id(self.db, supplier_id)
        if not supplier:
            raise NotFoundError("Supplier not found")
        return supplier

    def create_supplier(self, data: SupplierCreate) -> Supplier:
        if data.cnpj and self.repo.get_supplier_by_cnpj(self.db, data.cnpj):
            raise ConflictError("CNPJ already in use")
        supplier = self.repo.save(self.db, Supplier(**data.model_dump()))
        logger.info(f"✅ Created supplier {supplier.id} '{supplier.name}'")
        return supplier

    def update_supplier(self, supplier_id: int, data: SupplierUpdate) -> Supplier:
        supplier = self.get_supplier(supplier_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "cnpj" in updates and updates["cnpj"] != supplier.cnpj:
            if self.repo.get_supplier_by_cnpj(self.db, updates["cnpj"]):
                raise ConflictError("CNPJ already in use")
        return self.repo.update(self.db, supplier, **updates)

    def delete_supplier(self, supplier_id: int) -> None:
        supplier = self.get_supplier(supplier_id)
        if self.repo.supplier_has_products(self.db, supplier.id):
            raise InvalidInputError("Cannot delete a supplier that still has products")
        self.repo.delete(self.db, supplier)
        logger.info(f"🗑️ Deleted supplier {supplier_id}")

    def list_supplier_products(
        self, supplier_id: int, params: PaginationParams, status: Optional[str] = None
    ):
        supplier = self.get_supplier(supplier_id)
        query = self.repo.query_products(self.db, supplier_id=supplier.id, status=status)
        return paginate(query, params)


class ProductService:
    """Service layer for products"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InventoryRepository()

    def _check_references(self, category_id: Optional[int], supplier_id: Optional[int]) -> None:
        if category_id is not None and not self.repo.get_category_by_id(self.db, category_id):
            raise NotFoundError("Product category not found")
        if supplier_id is not None and not self.repo.get_supplier_by_id(self.db, supplier_id):
            raise NotFoundError("Supplier not found")

    def list_products(self, params: PaginationParams, **filters):
        return paginate(self.repo.query_products(self.db, **filters), params)

    def get_product(self, product_id: int) -> Product:
        product = self.repo.get_product_by_id(self.db, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        self._check_references(data.category_id, data.supplier_id)
        if data.barcode and self.repo.get_product_by_barcode(self.db, data.barcode):
            raise ConflictError("Barcode already in use")

        product = self.repo.save(self.db, Product(**data.model_dump()))
        logger.info(f"✅ Created product {product.id} '{product.name}' with stock {product.stock}")
        return product

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        updates = data.model_dump(exclude_unset=True)
        # supplier may be detached with an explicit null
        updates = {k: v for k, v in updates.items() if v is not None or k == "supplier_id"}

        self._check_references(updates.get("category_id"), updates.get("supplier_id"))
        if "barcode" in updates and updates["barcode"] != product.barcode:
            if self.repo.get_product_by_barcode(self.db, updates["barcode"]):
                raise ConflictError("Barcode already in use")

        return self.repo.update(self.db, product, **updates)

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        if self.repo.product_has_sale_items(self.db, product.id):
            raise InvalidInputError("Cannot delete a product that has been sold")
        self.repo.delete(self.db, product)
        logger.info(f"🗑️ Deleted product {product_id}")

    def adjust_stock(self, product_id: int, data: StockAdjustment) -> Product:
        """Manual stock entry or write-off; a removal may never take stock below zero"""
        product = self.get_product(product_id)
        if data.operation == "add":
            increment_stock(self.db, product.id, data.quantity)
        else:
            decrement_stock(self.db, product.id, data.quantity)
        self.db.commit()
        self.db.refresh(product)

        logger.info(
            f"📦 Stock {data.operation} {data.quantity} on product {product.id}, now {product.stock}"
        )
        if product.stock <= product.min_stock:
            logger.warning(
                f"⚠️ Product {product.id} '{product.name}' at or below minimum stock "
                f"({product.stock}/{product.min_stock})"
            )
        return product
