"""
Pre-launch waitlist signups.
"""
import logging
import re
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zootel.models.models import WAITLIST_TYPES, WaitlistEntry
from zootel.schemas.schemas import (
    WaitlistBucket, WaitlistEntryResponse, WaitlistJoin, WaitlistJoined, WaitlistSignup, WaitlistStats,
)
from zootel.utils.ids import new_uuid

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DUPLICATE_MESSAGE = "You are already on the waitlist"
RECENT_SIGNUPS_LIMIT = 10


class WaitlistService:

    def __init__(self, db: Session):
        self.db = db

    def join(self, data: WaitlistJoin) -> WaitlistJoined:
        email = (data.email or "").strip().lower()
        if not email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email is required"
            )
        if not EMAIL_RE.match(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please provide a valid email address"
            )

        entry_type = data.type or "mobile_app"
        if entry_type not in WAITLIST_TYPES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid waitlist type"
            )

        existing = self.db.query(WaitlistEntry).filter(
            WaitlistEntry.email == email,
            WaitlistEntry.type == entry_type
        ).first()
        if existing:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_MESSAGE)

        entry = WaitlistEntry(
            id=new_uuid(),
            email=email,
            phone=(data.phone or "").strip(),
            type=entry_type,
            status="active",
        )
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent signup for the same (email, type)
            self.db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_MESSAGE)

        logger.info(f"New {entry_type} waitlist signup {entry.id}")
        return WaitlistJoined(id=entry.id, email=entry.email, type=entry.type)

    def list(self, offset: int, limit: int, entry_type: Optional[str] = None,
             search: Optional[str] = None) -> Tuple[List[WaitlistEntryResponse], int]:
        query = self.db.query(WaitlistEntry).filter(WaitlistEntry.status == "active")
        if entry_type and entry_type != "all":
            query = query.filter(WaitlistEntry.type == entry_type)
        if search:
            query = query.filter(WaitlistEntry.email.ilike(f"%{search}%"))

        total = query.count()
        entries = query.order_by(WaitlistEntry.created_at.desc()).offset(offset).limit(limit).all()
        return [WaitlistEntryResponse.model_validate(e) for e in entries], total

    def stats(self, now: Optional[datetime] = None) -> WaitlistStats:
        now = now or datetime.utcnow()
        created = WaitlistEntry.created_at
        columns = (
            func.count(WaitlistEntry.id),
            func.count(case((created >= now - timedelta(days=1), 1))),
            func.count(case((created >= now - timedelta(days=7), 1))),
            func.count(case((created >= now - timedelta(days=30), 1))),
        )
        active = WaitlistEntry.status == "active"

        def bucket(row) -> WaitlistBucket:
            total, today, this_week, this_month = row
            return WaitlistBucket(
                total=total or 0,
                today=today or 0,
                this_week=this_week or 0,
                this_month=this_month or 0,
            )

        overall = self.db.query(*columns).filter(active).one()
        by_type = self.db.query(WaitlistEntry.type, *columns).filter(active).group_by(WaitlistEntry.type).all()
        recent = self.db.query(WaitlistEntry).filter(active).order_by(
            created.desc()
        ).limit(RECENT_SIGNUPS_LIMIT).all()

        return WaitlistStats(
            overall=bucket(overall),
            by_type={row[0]: bucket(row[1:]) for row in by_type},
            recent_signups=[
                WaitlistSignup(email=e.email, type=e.type, created_at=e.created_at)
                for e in recent
            ],
        )
