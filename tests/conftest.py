"""
Test configuration and fixtures
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"

from datetime import date, datetime, time  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from zootel.core.database import Base, create_db_engine, get_db  # noqa: E402
from zootel.core.json_fields import BUSINESS_HOURS, default_business_hours  # noqa: E402
from zootel.core.security import create_access_token  # noqa: E402
from zootel.main import app  # noqa: E402
from zootel.models.models import Booking, Company, Employee, Pet, PetOwner, Service  # noqa: E402
from zootel.utils.ids import new_employee_id, new_uuid  # noqa: E402

COMPANY_ID = "company_test"
OTHER_COMPANY_ID = "company_other"
OWNER_ID = "owner_test"

# Create an in-memory SQLite database for testing
engine = create_db_engine("sqlite://")
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with overridden database dependency"""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app=app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def bearer(uid, role, email=None):
    token = create_access_token({"sub": uid, "role": role, "email": email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def company_headers():
    return bearer(COMPANY_ID, "pet_company", "hello@happypaws.com")


@pytest.fixture
def other_company_headers():
    return bearer(OTHER_COMPANY_ID, "pet_company", "team@otherpets.com")


@pytest.fixture
def owner_headers():
    return bearer(OWNER_ID, "pet_owner", "jane@example.com")


@pytest.fixture
def superadmin_headers():
    return bearer("admin_test", "superadmin", "admin@zootel.com")


@pytest.fixture
def test_company(db):
    """A verified company with a complete profile"""
    company = Company(
        id=COMPANY_ID,
        name="Happy Paws Grooming",
        email="hello@happypaws.com",
        phone="(555) 010-2000",
        address="12 Bark Avenue",
        city="Portland",
        state="OR",
        zip_code="97201",
        description="Grooming and daycare for dogs and cats",
        business_hours=BUSINESS_HOURS.dump(default_business_hours()),
        images="[]",
        verified=True,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def other_company(db):
    company = Company(id=OTHER_COMPANY_ID, name="Other Pets", email="team@otherpets.com", verified=True)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def test_service(db, test_company):
    service = Service(
        id=new_uuid(),
        company_id=test_company.id,
        name="Full Grooming",
        description="Bath, haircut and nail trim",
        price=65.00,
        duration=60,
        category="Grooming",
        active=True,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def test_employee(db, test_company):
    employee = Employee(
        id=new_employee_id(),
        company_id=test_company.id,
        name="Sam Groomer",
        email="sam@happypaws.com",
        position="groomer",
        specialties='["dog_grooming", "nail_trimming"]',
        working_hours="{}",
        active=True,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def test_owner(db):
    owner = PetOwner(id=OWNER_ID, name="Jane Doe", email="jane@example.com")
    db.add(owner)
    db.commit()
    db.refresh(owner)
    return owner


@pytest.fixture
def test_pet(db, test_owner):
    pet = Pet(id=new_uuid(), owner_id=test_owner.id, name="Biscuit", type="Dog", breed="Beagle")
    db.add(pet)
    db.commit()
    db.refresh(pet)
    return pet


@pytest.fixture
def make_owner(db):
    """Create an extra pet owner with one pet; returns ``(owner, pet)``"""
    def _make(name="Owner"):
        owner = PetOwner(id=new_uuid(), name=name, email=f"{name.lower()}@example.com")
        db.add(owner)
        db.flush()
        pet = Pet(id=new_uuid(), owner_id=owner.id, name=f"{name}'s pet", type="Cat")
        db.add(pet)
        db.commit()
        return owner, pet
    return _make


@pytest.fixture
def make_booking(db):
    """Insert a booking directly; ``booking_date`` defaults to today"""
    def _make(company, service, owner, pet, booking_date=None, booking_time=time(10, 0),
              status="pending", amount=None, employee=None, created_at=None):
        booking = Booking(
            id=new_uuid(),
            company_id=company.id,
            service_id=service.id,
            pet_owner_id=owner.id,
            pet_id=pet.id,
            employee_id=employee.id if employee else None,
            date=booking_date or date.today(),
            time=booking_time,
            status=status,
            total_amount=service.price if amount is None else amount,
            created_at=created_at or datetime.utcnow(),
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking
    return _make
