"""
Employee management for a company.

Employees are company records (they do not log in). Removing an employee is
a soft delete, and it is refused while the employee still has bookings that
are pending or confirmed.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from zootel.core.json_fields import SPECIALTIES, WORKING_HOURS
from zootel.models.models import ACTIVE_BOOKING_STATUSES, Booking, Employee, Review, Service
from zootel.schemas.schemas import (
    AvailableEmployee, EmergencyContact, EmployeeCreate, EmployeeResponse, EmployeeStats,
    EmployeeUpdate, PositionCount, TopPerformer,
)
from zootel.services.repository import TenantRepository
from zootel.utils.availability import busy_employee_ids, combine, get_end_time
from zootel.utils.ids import new_employee_id

logger = logging.getLogger(__name__)

DEFAULT_SLOT_MINUTES = 60

# Predefined positions for pet service companies
POSITIONS = [
    {"id": "veterinarian", "name": "Veterinarian", "description": "Licensed veterinary doctor"},
    {"id": "vet_technician", "name": "Veterinary Technician", "description": "Veterinary assistant and technician"},
    {"id": "groomer", "name": "Pet Groomer", "description": "Professional pet grooming specialist"},
    {"id": "trainer", "name": "Pet Trainer", "description": "Animal behavior and training specialist"},
    {"id": "caretaker", "name": "Pet Caretaker", "description": "General pet care and supervision"},
    {"id": "receptionist", "name": "Receptionist", "description": "Front desk and customer service"},
    {"id": "manager", "name": "Manager", "description": "Department or facility manager"},
    {"id": "assistant", "name": "Assistant", "description": "General assistant role"},
    {"id": "boarder", "name": "Pet Boarder", "description": "Pet boarding and overnight care specialist"},
    {"id": "walker", "name": "Pet Walker", "description": "Professional dog walking services"},
]

# Predefined skills for pet service employees
SKILLS = [
    {"id": "animal_handling", "name": "Animal Handling", "category": "Care"},
    {"id": "dog_grooming", "name": "Dog Grooming", "category": "Grooming"},
    {"id": "cat_grooming", "name": "Cat Grooming", "category": "Grooming"},
    {"id": "nail_trimming", "name": "Nail Trimming", "category": "Grooming"},
    {"id": "teeth_cleaning", "name": "Teeth Cleaning", "category": "Health"},
    {"id": "medication_admin", "name": "Medication Administration", "category": "Health"},
    {"id": "first_aid", "name": "Pet First Aid", "category": "Health"},
    {"id": "behavior_training", "name": "Behavior Training", "category": "Training"},
    {"id": "obedience_training", "name": "Obedience Training", "category": "Training"},
    {"id": "puppy_training", "name": "Puppy Training", "category": "Training"},
    {"id": "aggressive_handling", "name": "Aggressive Animal Handling", "category": "Specialized"},
    {"id": "elderly_care", "name": "Elderly Pet Care", "category": "Specialized"},
    {"id": "special_needs", "name": "Special Needs Care", "category": "Specialized"},
    {"id": "customer_service", "name": "Customer Service", "category": "Administrative"},
    {"id": "scheduling", "name": "Appointment Scheduling", "category": "Administrative"},
    {"id": "emergency_response", "name": "Emergency Response", "category": "Health"},
]


def can_deactivate(booking_statuses: Iterable[str]) -> bool:
    """An employee can be deactivated only if none of their bookings is still open"""
    return not any(s in ACTIVE_BOOKING_STATUSES for s in booking_statuses)


def to_employee_response(employee: Employee) -> EmployeeResponse:
    return EmployeeResponse(
        id=employee.id,
        company_id=employee.company_id,
        name=employee.name,
        email=employee.email,
        phone=employee.phone or "",
        position=employee.position or "",
        specialties=SPECIALTIES.load(employee.specialties),
        working_hours=WORKING_HOURS.load(employee.working_hours),
        emergency_contact=EmergencyContact(
            name=employee.emergency_contact_name or "",
            phone=employee.emergency_contact_phone or "",
        ),
        notes=employee.notes or "",
        active=bool(employee.active),
        created_at=employee.created_at,
        updated_at=employee.updated_at,
    )


def to_available_employee(employee: Employee) -> AvailableEmployee:
    return AvailableEmployee(
        id=employee.id,
        name=employee.name,
        position=employee.position or "",
        specialties=SPECIALTIES.load(employee.specialties),
    )


class EmployeeService:

    def __init__(self, db: Session, company_id: str):
        self.db = db
        self.company_id = company_id
        self.repo = TenantRepository(db, Employee, company_id)

    def get_or_404(self, employee_id: str) -> Employee:
        employee = self.repo.get(employee_id)
        if not employee:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Employee not found"
            )
        return employee

    def _email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        query = self.repo.query().filter(Employee.email == email)
        if exclude_id:
            query = query.filter(Employee.id != exclude_id)
        return query.first() is not None

    def list(self, status_filter: Optional[str], offset: int, limit: int) -> Tuple[List[EmployeeResponse], int]:
        filters = []
        if status_filter == "active":
            filters.append(Employee.active.is_(True))
        elif status_filter == "inactive":
            filters.append(Employee.active.is_(False))

        employees, total = self.repo.list(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[Employee.created_at.desc()],
        )
        return [to_employee_response(e) for e in employees], total

    def create(self, data: EmployeeCreate) -> EmployeeResponse:
        email = str(data.email).strip()
        if self._email_taken(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Employee with this email already exists"
            )

        contact = data.emergency_contact or EmergencyContact()
        employee = self.repo.create(
            id=new_employee_id(),
            name=data.name.strip(),
            email=email,
            phone=data.phone or "",
            position=data.position.strip(),
            specialties=SPECIALTIES.dump(data.specialties),
            working_hours=WORKING_HOURS.dump(data.working_hours),
            emergency_contact_name=contact.name or "",
            emergency_contact_phone=contact.phone or "",
            notes=data.notes or "",
            active=True,
        )
        logger.info(f"Company {self.company_id} added employee {employee.id}")
        return to_employee_response(employee)

    def update(self, employee_id: str, data: EmployeeUpdate) -> EmployeeResponse:
        employee = self.get_or_404(employee_id)
        provided = data.model_dump(exclude_unset=True)

        fields = {}
        for name in ("name", "phone", "position", "notes", "active"):
            if provided.get(name) is not None:
                fields[name] = provided[name]
        if provided.get("email") is not None:
            email = str(provided["email"]).strip()
            if email != employee.email and self._email_taken(email, exclude_id=employee.id):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Employee with this email already exists"
                )
            fields["email"] = email
        if "specialties" in provided:
            fields["specialties"] = SPECIALTIES.dump(data.specialties)
        if "working_hours" in provided:
            fields["working_hours"] = WORKING_HOURS.dump(data.working_hours)
        if "emergency_contact" in provided:
            contact = data.emergency_contact or EmergencyContact()
            fields["emergency_contact_name"] = contact.name or ""
            fields["emergency_contact_phone"] = contact.phone or ""

        if not fields:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No valid fields provided for update"
            )

        fields["updated_at"] = datetime.utcnow()
        employee = self.repo.update(employee, fields)
        return to_employee_response(employee)

    def deactivate(self, employee_id: str):
        """Soft delete; refused while the employee has pending or confirmed bookings"""
        employee = self.get_or_404(employee_id)

        statuses = [
            row[0] for row in self.db.query(Booking.status).filter(
                Booking.employee_id == employee.id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES)
            ).all()
        ]
        if not can_deactivate(statuses):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete employee with pending bookings. "
                       "Please reassign or complete bookings first."
            )

        self.repo.soft_delete(employee)
        logger.info(f"Company {self.company_id} deactivated employee {employee.id}")

    def _active_employees(self) -> List[Employee]:
        return self.repo.query().filter(Employee.active.is_(True)).order_by(Employee.name).all()

    def busy_employee_ids(self, start: datetime, end: datetime, exclude_booking_id: Optional[str] = None) -> set:
        """Employees of this company with an open booking overlapping ``[start, end)``"""
        query = self.db.query(
            Booking.employee_id, Booking.date, Booking.time, Service.duration
        ).join(
            Service, Booking.service_id == Service.id
        ).filter(
            Booking.company_id == self.company_id,
            Booking.employee_id.isnot(None),
            Booking.date == start.date(),
            Booking.status.notin_(("cancelled", "completed")),
        )
        if exclude_booking_id:
            query = query.filter(Booking.id != exclude_booking_id)
        return busy_employee_ids(query.all(), start, end)

    def list_available(self, booking_date=None, start_time=None, duration: int = DEFAULT_SLOT_MINUTES) -> List[AvailableEmployee]:
        """
        Active employees, optionally only those free for
        ``[start_time, start_time + duration)`` on ``booking_date``.
        """
        employees = self._active_employees()
        if booking_date is None or start_time is None:
            return [to_available_employee(e) for e in employees]

        start = combine(booking_date, start_time)
        end = get_end_time(start, duration)
        busy = self.busy_employee_ids(start, end)
        return [to_available_employee(e) for e in employees if e.id not in busy]

    def stats(self) -> EmployeeStats:
        active = Employee.active.is_(True)
        total_employees = self.repo.query().filter(active).count()

        month_ago = datetime.utcnow() - timedelta(days=30)
        new_employees = self.repo.query().filter(
            active,
            Employee.created_at >= month_ago
        ).count()

        positions = self.db.query(
            Employee.position, func.count(Employee.id)
        ).filter(
            Employee.company_id == self.company_id,
            active
        ).group_by(Employee.position).all()

        booking_count = func.count(distinct(Booking.id))
        performers = self.db.query(
            Employee.id,
            Employee.name,
            Employee.position,
            booking_count.label("total_bookings"),
            func.avg(Review.rating).label("average_rating"),
        ).outerjoin(
            Booking, Booking.employee_id == Employee.id
        ).outerjoin(
            Review, Review.booking_id == Booking.id
        ).filter(
            Employee.company_id == self.company_id,
            active
        ).group_by(
            Employee.id, Employee.name, Employee.position
        ).order_by(booking_count.desc()).limit(5).all()

        return EmployeeStats(
            total_employees=total_employees,
            new_employees_this_month=new_employees,
            position_distribution=[
                PositionCount(position=position or "", count=count)
                for position, count in positions
            ],
            top_performers=[
                TopPerformer(
                    id=emp_id,
                    name=name,
                    position=position or "",
                    total_bookings=bookings or 0,
                    average_rating=round(float(avg or 0), 1),
                )
                for emp_id, name, position, bookings, avg in performers
            ],
        )
