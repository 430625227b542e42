from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_company, require_pet_owner
from zootel.schemas.schemas import Principal, ReviewCreate
from zootel.services.booking_service import CompanyBookingService, PetOwnerService
from zootel.utils.pagination import pagination_meta, parse_pagination

router = APIRouter()


@router.get("")
def get_reviews(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Reviews left for the company, newest first"""
    page, limit, offset = parse_pagination(page, limit, default_limit=20)
    with handle_db_errors(db, "Failed to get reviews"):
        reviews, total = CompanyBookingService(db, principal.uid).list_reviews(offset, limit)
    return {
        "success": True,
        "data": reviews,
        "pagination": pagination_meta(page, limit, total, "totalReviews"),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_review(
    review_data: ReviewCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_pet_owner)
):
    """Review a completed booking; one review per booking"""
    with handle_db_errors(db, "Failed to create review"):
        review = PetOwnerService(db, principal).create_review(review_data)
    return {"success": True, "message": "Review submitted successfully", "data": review}
