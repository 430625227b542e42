from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import ROLE_PET_OWNER, get_current_principal, require_company, require_pet_owner
from zootel.schemas.schemas import BookingCreate, BookingStatusUpdate, Principal
from zootel.services.booking_service import CompanyBookingService, PetOwnerService
from zootel.utils.availability import parse_date
from zootel.utils.pagination import pagination_meta, parse_pagination

router = APIRouter()


@router.get("")
def get_bookings(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    date: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """
    Pet owners get their own bookings; companies get the bookings made with
    them, filterable by ``status`` and ``date`` (YYYY-MM-DD).
    """
    page, limit, offset = parse_pagination(page, limit, default_limit=20)

    if principal.role == ROLE_PET_OWNER:
        with handle_db_errors(db, "Failed to get bookings"):
            bookings, total = PetOwnerService(db, principal).list_bookings(offset, limit)
    else:
        booking_date = None
        if date:
            try:
                booking_date = parse_date(date)
            except ValueError:
                booking_date = None
        with handle_db_errors(db, "Failed to get bookings"):
            bookings, total = CompanyBookingService(db, principal.uid).list(
                offset, limit, status_filter, booking_date
            )

    return {
        "success": True,
        "data": bookings,
        "pagination": pagination_meta(page, limit, total, "totalBookings"),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: BookingCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_pet_owner)
):
    with handle_db_errors(db, "Failed to create booking"):
        booking = PetOwnerService(db, principal).create_booking(booking_data)
    return {"success": True, "message": "Booking created successfully", "data": booking}


@router.get("/{booking_id}")
def get_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to get booking"):
        booking = CompanyBookingService(db, principal.uid).get(booking_id)
    return {"success": True, "data": booking}


@router.put("/{booking_id}/status")
def update_booking_status(
    booking_id: str,
    status_data: BookingStatusUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to update booking status"):
        booking = CompanyBookingService(db, principal.uid).update_status(booking_id, status_data.status)
    return {"success": True, "message": "Booking status updated successfully", "data": booking}
