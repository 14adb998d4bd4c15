"""Service catalogue business logic"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ConflictError, InvalidInputError, NotFoundError
from ...models import Service, ServiceCategory
from ...shared.pagination import PaginationParams, paginate
from ..scheduling.repository import AppointmentRepository
from .repository import ServiceRepository
from .schemas import CategoryCreate, CategoryUpdate, ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class ServiceCategoryService:
    """Service layer for service categories"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def list_categories(self, params: PaginationParams, name: Optional[str] = None):
        return paginate(self.repo.query_categories(self.db, name=name), params)

    def get_category(self, category_id: int) -> ServiceCategory:
        category = self.repo.get_category_by_id(self.db, category_id)
        if not category:
            raise NotFoundError("Service category not found")
        return category

    def create_category(self, data: CategoryCreate) -> ServiceCategory:
        if self.repo.get_category_by_name(self.db, data.name):
            raise ConflictError("A service category with this name already exists")
        category = self.repo.save(self.db, ServiceCategory(**data.model_dump()))
        logger.info(f"✅ Created service category {category.id} '{category.name}'")
        return category

    def update_category(self, category_id: int, data: CategoryUpdate) -> ServiceCategory:
        category = self.get_category(category_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in updates:
            existing = self.repo.get_category_by_name(self.db, updates["name"])
            if existing and existing.id != category.id:
                raise ConflictError("A service category with this name already exists")
        return self.repo.update(self.db, category, **updates)

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        if self.repo.category_has_services(self.db, category.id):
            raise InvalidInputError("Cannot delete a category that still has services")
        self.repo.delete(self.db, category)
        logger.info(f"🗑️ Deleted service category {category_id}")

    def list_category_services(
        self, category_id: int, params: PaginationParams, status: Optional[str] = None
    ):
        category = self.get_category(category_id)
        query = self.repo.query_services(self.db, category_id=category.id, status=status)
        return paginate(query, params)


class CatalogService:
    """Service layer for the services offered (bath, grooming, consultation...)"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def _ensure_category(self, category_id: int) -> None:
        if not self.repo.get_category_by_id(self.db, category_id):
            raise NotFoundError("Service category not found")

    def list_services(self, params: PaginationParams, **filters):
        return paginate(self.repo.query_services(self.db, **filters), params)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        self._ensure_category(data.category_id)
        service = self.repo.save(self.db, Service(**data.model_dump()))
        logger.info(f"✅ Created service {service.id} '{service.name}' ({service.duration} min)")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)
        if "category_id" in updates:
            self._ensure_category(updates["category_id"])
        return self.repo.update(self.db, service, **updates)

    def delete_service(self, service_id: int) -> None:
        service = self.get_service(service_id)
        if self.repo.service_has_appointments(self.db, service.id):
            raise InvalidInputError("Cannot delete a service with appointments")
        self.repo.delete(self.db, service)
        logger.info(f"🗑️ Deleted service {service_id}")

    def list_service_appointments(
        self, service_id: int, params: PaginationParams, status: Optional[str] = None
    ):
        service = self.get_service(service_id)
        query = AppointmentRepository.query_appointments(
            self.db, service_id=service.id, status=status
        )
        return paginate(query, params)
