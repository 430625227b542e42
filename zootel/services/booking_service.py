"""
Bookings, reviews and pets.

Companies read and move their own bookings through the status lifecycle and
read their reviews. Pet owners register pets, book services and review
completed bookings; their ``PetOwner`` row is created on first use from the
authenticated principal.
"""
import logging
from datetime import date, datetime
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from zootel.core.json_fields import MEDICAL_INFO, PHOTOS
from zootel.models.models import BOOKING_STATUSES, Booking, Company, Employee, Pet, PetOwner, Review, Service
from zootel.schemas.schemas import (
    BookingCreate, BookingResponse, PetCreate, PetResponse, Principal, ReviewCreate, ReviewResponse,
)
from zootel.services.employee_service import EmployeeService
from zootel.services.repository import TenantRepository
from zootel.utils.availability import combine, get_end_time
from zootel.utils.ids import new_uuid

logger = logging.getLogger(__name__)


def to_booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        company_id=booking.company_id,
        service_id=booking.service_id,
        pet_owner_id=booking.pet_owner_id,
        pet_id=booking.pet_id,
        employee_id=booking.employee_id,
        date=booking.date,
        time=booking.time,
        status=booking.status,
        notes=booking.notes or "",
        total_amount=float(booking.total_amount or 0),
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


def to_review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        company_id=review.company_id,
        pet_owner_id=review.pet_owner_id,
        booking_id=review.booking_id,
        rating=review.rating,
        comment=review.comment or "",
        created_at=review.created_at,
    )


def to_pet_response(pet: Pet) -> PetResponse:
    return PetResponse(
        id=pet.id,
        owner_id=pet.owner_id,
        name=pet.name,
        type=pet.type,
        breed=pet.breed or "",
        age=pet.age or 0,
        weight=float(pet.weight or 0),
        gender=pet.gender or "",
        color=pet.color or "",
        microchip_id=pet.microchip_id or "",
        photos=PHOTOS.load(pet.photos),
        medical_info=MEDICAL_INFO.load(pet.medical_info),
        behavior_notes=pet.behavior_notes or "",
        special_needs=pet.special_needs or "",
        created_at=pet.created_at,
    )


class CompanyBookingService:
    """Bookings and reviews as seen by the company that owns them"""

    def __init__(self, db: Session, company_id: str):
        self.company_id = company_id
        self.bookings = TenantRepository(db, Booking, company_id)
        self.reviews = TenantRepository(db, Review, company_id)

    def get_or_404(self, booking_id: str) -> Booking:
        booking = self.bookings.get(booking_id)
        if not booking:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found"
            )
        return booking

    def list(self, offset: int, limit: int, status_filter: Optional[str] = None,
             booking_date: Optional[date] = None) -> Tuple[List[BookingResponse], int]:
        filters = []
        if status_filter and status_filter != "all":
            filters.append(Booking.status == status_filter)
        if booking_date is not None:
            filters.append(Booking.date == booking_date)

        bookings, total = self.bookings.list(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[Booking.date.desc(), Booking.time.desc()],
        )
        return [to_booking_response(b) for b in bookings], total

    def get(self, booking_id: str) -> BookingResponse:
        return to_booking_response(self.get_or_404(booking_id))

    def update_status(self, booking_id: str, new_status: str) -> BookingResponse:
        if new_status not in BOOKING_STATUSES:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status. Must be one of: {', '.join(BOOKING_STATUSES)}"
            )
        booking = self.get_or_404(booking_id)
        old_status = booking.status
        booking = self.bookings.update(booking, {"status": new_status, "updated_at": datetime.utcnow()})
        logger.info(f"Booking {booking.id} status {old_status} -> {new_status}")
        return to_booking_response(booking)

    def list_reviews(self, offset: int, limit: int) -> Tuple[List[ReviewResponse], int]:
        reviews, total = self.reviews.list(
            offset=offset,
            limit=limit,
            order_by=[Review.created_at.desc()],
        )
        return [to_review_response(r) for r in reviews], total


class PetOwnerService:
    """Pets, bookings and reviews as seen by the pet owner"""

    def __init__(self, db: Session, principal: Principal):
        self.db = db
        self.principal = principal
        self.owner_id = principal.uid

    def get_or_create_owner(self) -> PetOwner:
        owner = self.db.query(PetOwner).filter(PetOwner.id == self.owner_id).first()
        if owner:
            return owner

        owner = PetOwner(id=self.owner_id, name="", email=self.principal.email or "")
        self.db.add(owner)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            owner = self.db.query(PetOwner).filter(PetOwner.id == self.owner_id).first()
            if owner is None:
                raise
            return owner
        self.db.refresh(owner)
        logger.info(f"Created pet owner record {self.owner_id}")
        return owner

    # Pets
    def list_pets(self) -> List[PetResponse]:
        pets = self.db.query(Pet).filter(Pet.owner_id == self.owner_id).order_by(Pet.created_at.desc()).all()
        return [to_pet_response(p) for p in pets]

    def add_pet(self, data: PetCreate) -> PetResponse:
        self.get_or_create_owner()
        pet = Pet(
            id=new_uuid(),
            owner_id=self.owner_id,
            name=data.name.strip(),
            type=data.type.strip(),
            breed=data.breed or "",
            age=data.age or 0,
            weight=data.weight or 0,
            gender=data.gender or "",
            color=data.color or "",
            microchip_id=data.microchip_id or "",
            photos=PHOTOS.dump(data.photos),
            medical_info=MEDICAL_INFO.dump(data.medical_info),
            behavior_notes=data.behavior_notes or "",
            special_needs=data.special_needs or "",
        )
        self.db.add(pet)
        self.db.commit()
        self.db.refresh(pet)
        return to_pet_response(pet)

    # Bookings
    def create_booking(self, data: BookingCreate) -> BookingResponse:
        company = self.db.query(Company).filter(
            Company.id == data.company_id,
            Company.verified.is_(True)
        ).first()
        if not company:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Company not found or not verified"
            )

        service = self.db.query(Service).filter(
            Service.id == data.service_id,
            Service.company_id == company.id,
            Service.active.is_(True)
        ).first()
        if not service:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Service not found"
            )

        pet = self.db.query(Pet).filter(
            Pet.id == data.pet_id,
            Pet.owner_id == self.owner_id
        ).first()
        if not pet:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Pet not found"
            )

        if data.employee_id:
            employees = EmployeeService(self.db, company.id)
            employee = employees.repo.query().filter(
                Employee.id == data.employee_id,
                Employee.active.is_(True)
            ).first()
            if not employee:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Employee not found"
                )
            start = combine(data.date, data.time)
            busy = employees.busy_employee_ids(start, get_end_time(start, service.duration))
            if employee.id in busy:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Employee is not available at the requested time"
                )

        self.get_or_create_owner()
        booking = Booking(
            id=new_uuid(),
            company_id=company.id,
            service_id=service.id,
            pet_owner_id=self.owner_id,
            pet_id=pet.id,
            employee_id=data.employee_id or None,
            date=data.date,
            time=data.time,
            status="pending",
            notes=data.notes or "",
            total_amount=service.price,
        )
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        logger.info(f"Pet owner {self.owner_id} booked {service.id} at company {company.id}")
        return to_booking_response(booking)

    def list_bookings(self, offset: int, limit: int) -> Tuple[List[BookingResponse], int]:
        query = self.db.query(Booking).filter(Booking.pet_owner_id == self.owner_id)
        total = query.count()
        bookings = query.order_by(Booking.date.desc(), Booking.time.desc()).offset(offset).limit(limit).all()
        return [to_booking_response(b) for b in bookings], total

    # Reviews
    def create_review(self, data: ReviewCreate) -> ReviewResponse:
        if not 1 <= data.rating <= 5:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Rating must be between 1 and 5"
            )

        booking = self.db.query(Booking).filter(
            Booking.id == data.booking_id,
            Booking.pet_owner_id == self.owner_id
        ).first()
        if not booking:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Booking not found"
            )
        if booking.status != "completed":
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only completed bookings can be reviewed"
            )

        duplicate = HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This booking has already been reviewed"
        )
        if self.db.query(Review).filter(Review.booking_id == booking.id).first():
            raise duplicate

        review = Review(
            id=new_uuid(),
            company_id=booking.company_id,
            pet_owner_id=self.owner_id,
            booking_id=booking.id,
            rating=data.rating,
            comment=data.comment or "",
        )
        self.db.add(review)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise duplicate
        self.db.refresh(review)
        return to_review_response(review)
