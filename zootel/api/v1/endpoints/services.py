from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_company
from zootel.schemas.schemas import Principal, ServiceCreate, ServiceUpdate
from zootel.services.service_catalog import ServiceCatalog, to_service_response
from zootel.utils.pagination import pagination_meta, parse_pagination

router = APIRouter()


@router.get("")
def get_services(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Get all services for the company"""
    page, limit, offset = parse_pagination(page, limit, default_limit=20)
    with handle_db_errors(db, "Failed to get services"):
        services, total = ServiceCatalog(db, principal.uid).list(status_filter, offset, limit)
    return {
        "success": True,
        "data": services,
        "pagination": pagination_meta(page, limit, total, "totalServices"),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_service(
    service_data: ServiceCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to create service"):
        service = ServiceCatalog(db, principal.uid).create(service_data)
    return {"success": True, "message": "Service created successfully", "data": service}


@router.get("/{service_id}")
def get_service(
    service_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to get service"):
        service = to_service_response(ServiceCatalog(db, principal.uid).get_or_404(service_id))
    return {"success": True, "data": service}


@router.put("/{service_id}")
def update_service(
    service_id: str,
    service_data: ServiceUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to update service"):
        service = ServiceCatalog(db, principal.uid).update(service_id, service_data)
    return {"success": True, "message": "Service updated successfully", "data": service}


@router.delete("/{service_id}")
def delete_service(
    service_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Deactivate a service; existing bookings keep referencing it"""
    with handle_db_errors(db, "Failed to delete service"):
        ServiceCatalog(db, principal.uid).deactivate(service_id)
    return {"success": True, "message": "Service deactivated successfully"}
