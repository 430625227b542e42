"""
Company profile, public listing and customer queries.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zootel.core.json_fields import BUSINESS_HOURS, IMAGES, default_business_hours
from zootel.models.models import Booking, Company, PetOwner, Review, Service
from zootel.schemas.schemas import (
    CompanyCustomer, CompanyProfile, CompanyProfileUpdate, CompanyPublic, Principal, PublicService,
)

logger = logging.getLogger(__name__)

PUBLIC_PET_TYPES = ["Dog", "Cat", "Bird", "Rabbit", "Other"]


def is_profile_complete(name, address, city, description) -> bool:
    """A profile is complete, and therefore verified, when all four fields are non-empty"""
    return all(value for value in (name, address, city, description))


def rating_summary(db: Session, company_id: str) -> Tuple[float, int]:
    """Average rating (one decimal) and review count for a company"""
    avg_rating, total_reviews = db.query(
        func.avg(Review.rating), func.count(Review.id)
    ).filter(Review.company_id == company_id).one()
    return round(float(avg_rating or 0), 1), total_reviews or 0


def _joined_date(company: Company):
    return (company.created_at or datetime.utcnow()).date()


class CompanyService:
    """Operations on the authenticated company's own profile"""

    def __init__(self, db: Session, principal: Principal):
        self.db = db
        self.principal = principal
        self.company_id = principal.uid

    def _get_company(self) -> Optional[Company]:
        return self.db.query(Company).filter(Company.id == self.company_id).first()

    def _insert_default(self, email: Optional[str]) -> Company:
        company = Company(
            id=self.company_id,
            name="",
            email=email,
            business_hours=BUSINESS_HOURS.dump(default_business_hours()),
            images=IMAGES.dump([]),
            verified=False,
            subscription_plan="basic",
            subscription_status="active",
        )
        self.db.add(company)
        self.db.commit()
        return company

    def get_or_create_company(self) -> Tuple[Company, bool]:
        company = self._get_company()
        if company:
            return company, False

        try:
            company = self._insert_default(self.principal.email)
        except IntegrityError:
            self.db.rollback()
            # Another request created the row first
            existing = self._get_company()
            if existing is not None:
                return existing, False
            if self.principal.email is None:
                raise
            # The email already belongs to another company
            logger.warning(
                f"Email of company {self.company_id} is registered to another company; creating profile without it"
            )
            company = self._insert_default(None)
        self.db.refresh(company)
        logger.info(f"Created default profile for company {self.company_id}")
        return company, True

    def to_profile(self, company: Company) -> CompanyProfile:
        total_bookings = self.db.query(func.count(Booking.id)).filter(
            Booking.company_id == company.id
        ).scalar() or 0
        rating, total_reviews = rating_summary(self.db, company.id)

        return CompanyProfile(
            id=company.id,
            name=company.name or "",
            email=company.email,
            phone=company.phone or "",
            address=company.address or "",
            city=company.city or "",
            state=company.state or "",
            zip_code=company.zip_code or "",
            description=company.description or "",
            business_hours=BUSINESS_HOURS.load(company.business_hours),
            logo_url=company.logo_url or "",
            images=IMAGES.load(company.images),
            verified=bool(company.verified),
            subscription_plan=company.subscription_plan or "basic",
            subscription_status=company.subscription_status or "active",
            total_bookings=total_bookings,
            rating=rating,
            total_reviews=total_reviews,
            joined_date=_joined_date(company),
            updated_at=company.updated_at,
        )

    def get_profile(self) -> CompanyProfile:
        """Return the profile, creating a default one on first access"""
        company, _ = self.get_or_create_company()
        return self.to_profile(company)

    def update_profile(self, data: CompanyProfileUpdate) -> CompanyProfile:
        """
        Overwrite the whole profile with ``data``.

        Fields missing from ``data`` are stored as empty values. The
        ``verified`` flag is recomputed from profile completeness.
        """
        company, _ = self.get_or_create_company()

        was_verified = bool(company.verified)
        verified = is_profile_complete(data.name, data.address, data.city, data.description)

        company.name = data.name or ""
        company.phone = data.phone or ""
        company.address = data.address or ""
        company.city = data.city or ""
        company.state = data.state or ""
        company.zip_code = data.zip_code or ""
        company.description = data.description or ""
        company.business_hours = BUSINESS_HOURS.dump(data.business_hours)
        company.logo_url = data.logo_url or ""
        company.images = IMAGES.dump(data.images)
        company.verified = verified
        company.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(company)

        if verified != was_verified:
            logger.info(
                f"Company {company.id} verification changed: {was_verified} -> {verified} "
                f"(profile {'complete' if verified else 'incomplete'})"
            )
        return self.to_profile(company)

    def list_customers(self, offset: int, limit: int, search: Optional[str] = None) -> Tuple[List[CompanyCustomer], int]:
        """Pet owners that have booked with this company at least once"""
        total_spent = func.coalesce(
            func.sum(case((Booking.status == "completed", Booking.total_amount), else_=0)), 0
        )
        last_booking = func.max(Booking.date)
        query = self.db.query(
            PetOwner,
            func.count(Booking.id).label("total_bookings"),
            total_spent.label("total_spent"),
            last_booking.label("last_booking_date"),
        ).join(
            Booking, Booking.pet_owner_id == PetOwner.id
        ).filter(
            Booking.company_id == self.company_id
        )

        if search:
            query = query.filter(
                or_(
                    PetOwner.name.ilike(f"%{search}%"),
                    PetOwner.email.ilike(f"%{search}%"),
                )
            )

        query = query.group_by(PetOwner.id)
        total = query.count()
        rows = query.order_by(last_booking.desc()).offset(offset).limit(limit).all()

        customers = [
            CompanyCustomer(
                id=owner.id,
                name=owner.name or "",
                email=owner.email,
                phone=owner.phone or "",
                total_bookings=bookings or 0,
                total_spent=round(float(spent or 0), 2),
                last_booking_date=last_date,
            )
            for owner, bookings, spent, last_date in rows
        ]
        return customers, total


class PublicCompanyService:
    """Unauthenticated reads, restricted to verified companies"""

    def __init__(self, db: Session):
        self.db = db

    def _get_verified(self, company_id: str) -> Company:
        company = self.db.query(Company).filter(
            Company.id == company_id,
            Company.verified.is_(True)
        ).first()
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found or not verified"
            )
        return company

    def get_public_profile(self, company_id: str) -> CompanyPublic:
        company = self._get_verified(company_id)
        rating, total_reviews = rating_summary(self.db, company.id)
        return CompanyPublic(
            id=company.id,
            name=company.name or "Unknown Company",
            email=company.email,
            phone=company.phone or "",
            address=company.address or "",
            city=company.city or "",
            state=company.state or "",
            zip_code=company.zip_code or "",
            description=company.description or "",
            business_hours=BUSINESS_HOURS.load(company.business_hours),
            logo_url=company.logo_url or "",
            images=IMAGES.load(company.images),
            verified=bool(company.verified),
            rating=rating,
            total_reviews=total_reviews,
            joined_date=_joined_date(company),
        )

    def list_public_services(self, company_id: str) -> List[PublicService]:
        company = self._get_verified(company_id)
        rating, review_count = rating_summary(self.db, company.id)

        services = self.db.query(Service).filter(
            Service.company_id == company.id,
            Service.active.is_(True)
        ).order_by(Service.created_at.desc()).all()

        return [
            PublicService(
                id=service.id,
                name=service.name,
                description=service.description or "",
                price=float(service.price or 0),
                duration=service.duration,
                category=service.category or "",
                image_url=service.image_url or "",
                rating=rating,
                review_count=review_count,
                pet_types=list(PUBLIC_PET_TYPES),
            )
            for service in services
        ]
