"""
Company service catalog (grooming, veterinary, boarding offerings).
"""
import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from zootel.models.models import Service
from zootel.schemas.schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from zootel.services.repository import TenantRepository

logger = logging.getLogger(__name__)


def to_service_response(service: Service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        company_id=service.company_id,
        name=service.name,
        description=service.description or "",
        price=float(service.price or 0),
        duration=service.duration,
        category=service.category or "",
        image_url=service.image_url or "",
        active=bool(service.active),
        created_at=service.created_at,
        updated_at=service.updated_at,
    )


class ServiceCatalog:

    def __init__(self, db: Session, company_id: str):
        self.repo = TenantRepository(db, Service, company_id)

    def get_or_404(self, service_id: str) -> Service:
        service = self.repo.get(service_id)
        if not service:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service not found"
            )
        return service

    def list(self, status_filter: Optional[str], offset: int, limit: int) -> Tuple[List[ServiceResponse], int]:
        filters = []
        if status_filter == "active":
            filters.append(Service.active.is_(True))
        elif status_filter == "inactive":
            filters.append(Service.active.is_(False))

        services, total = self.repo.list(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[Service.created_at.desc()],
        )
        return [to_service_response(s) for s in services], total

    def create(self, data: ServiceCreate) -> ServiceResponse:
        service = self.repo.create(
            name=data.name.strip(),
            description=data.description or "",
            price=data.price,
            duration=data.duration,
            category=data.category or "",
            image_url=data.image_url or "",
            active=True,
        )
        logger.info(f"Company {self.repo.company_id} created service {service.id}")
        return to_service_response(service)

    def update(self, service_id: str, data: ServiceUpdate) -> ServiceResponse:
        service = self.get_or_404(service_id)
        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields provided for update"
            )
        service = self.repo.update(service, update_data)
        return to_service_response(service)

    def deactivate(self, service_id: str):
        service = self.get_or_404(service_id)
        self.repo.soft_delete(service)
        logger.info(f"Company {self.repo.company_id} deactivated service {service_id}")
