from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_superadmin
from zootel.schemas.schemas import Principal, WaitlistJoin
from zootel.services.waitlist_service import WaitlistService
from zootel.utils.pagination import pagination_meta, parse_pagination

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def join_waitlist(join_data: WaitlistJoin, db: Session = Depends(get_db)):
    """Public pre-launch signup"""
    with handle_db_errors(db, "Failed to join waitlist"):
        entry = WaitlistService(db).join(join_data)
    return {"success": True, "message": "Successfully joined the waitlist!", "data": entry}


@router.get("")
def get_waitlist(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    entry_type: Optional[str] = Query(None, alias="type"),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_superadmin)
):
    page, limit, offset = parse_pagination(page, limit, default_limit=20)
    with handle_db_errors(db, "Failed to get waitlist entries"):
        entries, total = WaitlistService(db).list(offset, limit, entry_type, search)
    return {
        "success": True,
        "data": entries,
        "pagination": pagination_meta(page, limit, total, "totalEntries"),
    }


@router.get("/stats")
def get_waitlist_stats(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_superadmin)
):
    with handle_db_errors(db, "Failed to get waitlist stats"):
        stats = WaitlistService(db).stats()
    return {"success": True, "data": stats}
