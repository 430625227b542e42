"""
Unit tests for employee endpoints
"""
from datetime import date, time, timedelta

import pytest
from fastapi import status

from zootel.models.models import Employee

NEW_EMPLOYEE = {
    "name": "Riley Trainer",
    "email": "riley@happypaws.com",
    "phone": "555-0101",
    "position": "trainer",
    "specialties": ["obedience_training", "puppy_training"],
    "workingHours": {"monday": {"start": "09:00", "end": "17:00"}},
    "emergencyContact": {"name": "Alex", "phone": "555-0199"},
    "notes": "Weekends only",
}


@pytest.mark.unit
class TestEmployeeCRUD:
    """Tests for employee CRUD operations"""

    def test_create_employee(self, client, test_company, company_headers):
        response = client.post("/api/employees", headers=company_headers, json=NEW_EMPLOYEE)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["id"].startswith("emp_")
        assert data["companyId"] == test_company.id
        assert data["specialties"] == ["obedience_training", "puppy_training"]
        assert data["emergencyContact"] == {"name": "Alex", "phone": "555-0199"}
        assert data["active"] is True

    def test_duplicate_email_rejected(self, client, db, test_employee, company_headers):
        payload = dict(NEW_EMPLOYEE, email=test_employee.email)

        response = client.post("/api/employees", headers=company_headers, json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Employee with this email already exists"
        assert db.query(Employee).filter(
            Employee.company_id == test_employee.company_id,
            Employee.email == test_employee.email
        ).count() == 1

    def test_same_email_allowed_in_other_company(self, client, test_employee, other_company, other_company_headers):
        payload = dict(NEW_EMPLOYEE, email=test_employee.email)

        response = client.post("/api/employees", headers=other_company_headers, json=payload)

        assert response.status_code == status.HTTP_201_CREATED

    def test_missing_required_field(self, client, test_company, company_headers):
        payload = {k: v for k, v in NEW_EMPLOYEE.items() if k != "position"}

        response = client.post("/api/employees", headers=company_headers, json=payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "Bad Request"
        assert "position" in body["message"]

    def test_list_employees(self, client, test_employee, company_headers):
        response = client.get("/api/employees", headers=company_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [e["id"] for e in body["data"]] == [test_employee.id]
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalEmployees": 1,
            "limit": 20,
        }

    def test_malformed_pagination_uses_defaults(self, client, test_employee, company_headers):
        response = client.get("/api/employees?page=abc&limit=-5", headers=company_headers)

        assert response.status_code == status.HTTP_200_OK
        pagination = response.json()["pagination"]
        assert pagination["currentPage"] == 1
        assert pagination["limit"] == 20

    def test_limit_is_capped(self, client, test_employee, company_headers):
        response = client.get("/api/employees?limit=1000", headers=company_headers)

        assert response.json()["pagination"]["limit"] == 100

    def test_get_employee(self, client, test_employee, company_headers):
        response = client.get(f"/api/employees/{test_employee.id}", headers=company_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["name"] == "Sam Groomer"

    def test_cross_tenant_read_is_not_found(self, client, test_employee, other_company, other_company_headers):
        response = client.get(f"/api/employees/{test_employee.id}", headers=other_company_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Employee not found"

    def test_cross_tenant_list_is_empty(self, client, test_employee, other_company, other_company_headers):
        response = client.get("/api/employees", headers=other_company_headers)

        assert response.json()["data"] == []

    def test_update_employee(self, client, test_employee, company_headers):
        response = client.put(
            f"/api/employees/{test_employee.id}",
            headers=company_headers,
            json={"position": "manager", "specialties": ["scheduling"]},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["position"] == "manager"
        assert data["specialties"] == ["scheduling"]
        assert data["name"] == "Sam Groomer"

    def test_empty_update_rejected(self, client, test_employee, company_headers):
        response = client.put(f"/api/employees/{test_employee.id}", headers=company_headers, json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "No valid fields provided for update"

    def test_reference_lists(self, client, company_headers):
        positions = client.get("/api/employees/positions/list", headers=company_headers).json()["data"]
        skills = client.get("/api/employees/skills/list", headers=company_headers).json()["data"]

        assert len(positions) == 10
        assert len(skills) == 16
        assert {"id": "groomer", "name": "Pet Groomer", "description": "Professional pet grooming specialist"} in positions


@pytest.mark.unit
class TestEmployeeDeactivation:
    """Tests for the soft delete guard"""

    @pytest.mark.parametrize("booking_status", ["pending", "confirmed"])
    def test_open_booking_blocks_deactivation(self, client, db, test_company, test_service, test_employee,
                                              test_owner, test_pet, make_booking, company_headers, booking_status):
        make_booking(test_company, test_service, test_owner, test_pet,
                     status=booking_status, employee=test_employee)

        response = client.delete(f"/api/employees/{test_employee.id}", headers=company_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith("Cannot delete employee with pending bookings")
        db.refresh(test_employee)
        assert test_employee.active is True

    def test_deactivate_after_bookings_closed(self, client, db, test_company, test_service, test_employee,
                                              test_owner, test_pet, make_booking, company_headers):
        make_booking(test_company, test_service, test_owner, test_pet, status="completed", employee=test_employee)
        make_booking(test_company, test_service, test_owner, test_pet, status="cancelled", employee=test_employee)

        response = client.delete(f"/api/employees/{test_employee.id}", headers=company_headers)

        assert response.status_code == status.HTTP_200_OK
        employee = db.query(Employee).filter(Employee.id == test_employee.id).first()
        assert employee is not None
        assert employee.active is False

        inactive = client.get("/api/employees?status=inactive", headers=company_headers).json()["data"]
        assert [e["id"] for e in inactive] == [test_employee.id]
        active = client.get("/api/employees?status=active", headers=company_headers).json()["data"]
        assert active == []

    def test_other_company_cannot_deactivate(self, client, test_employee, other_company, other_company_headers):
        response = client.delete(f"/api/employees/{test_employee.id}", headers=other_company_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.unit
class TestEmployeeAvailability:
    """Tests for available employees at a time slot"""

    @pytest.fixture
    def second_employee(self, db, test_company):
        employee = Employee(company_id=test_company.id, name="Alex Walker", email="alex@happypaws.com",
                            position="walker", active=True)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    def _available_ids(self, client, headers, day, start, duration=None):
        url = f"/api/employees/available?date={day.isoformat()}&time={start}"
        if duration is not None:
            url += f"&duration={duration}"
        response = client.get(url, headers=headers)
        assert response.status_code == status.HTTP_200_OK
        return {e["id"] for e in response.json()["data"]}

    def test_overlapping_booking_makes_employee_busy(self, client, test_company, test_service, test_employee,
                                                     second_employee, test_owner, test_pet, make_booking,
                                                     company_headers):
        day = date.today() + timedelta(days=3)
        make_booking(test_company, test_service, test_owner, test_pet, booking_date=day,
                     booking_time=time(10, 0), employee=test_employee)

        ids = self._available_ids(client, company_headers, day, "10:30")

        assert ids == {second_employee.id}

    def test_adjacent_slot_is_free(self, client, test_company, test_service, test_employee, second_employee,
                                   test_owner, test_pet, make_booking, company_headers):
        day = date.today() + timedelta(days=3)
        make_booking(test_company, test_service, test_owner, test_pet, booking_date=day,
                     booking_time=time(10, 0), employee=test_employee)

        # Service lasts 60 minutes, so 11:00 starts exactly when it ends
        ids = self._available_ids(client, company_headers, day, "11:00")

        assert ids == {test_employee.id, second_employee.id}

    def test_duration_extends_requested_slot(self, client, test_company, test_service, test_employee,
                                             second_employee, test_owner, test_pet, make_booking, company_headers):
        day = date.today() + timedelta(days=3)
        make_booking(test_company, test_service, test_owner, test_pet, booking_date=day,
                     booking_time=time(10, 0), employee=test_employee)

        ids = self._available_ids(client, company_headers, day, "09:00", duration=90)

        assert ids == {second_employee.id}

    def test_cancelled_booking_does_not_block(self, client, test_company, test_service, test_employee,
                                              second_employee, test_owner, test_pet, make_booking, company_headers):
        day = date.today() + timedelta(days=3)
        make_booking(test_company, test_service, test_owner, test_pet, booking_date=day,
                     booking_time=time(10, 0), status="cancelled", employee=test_employee)

        ids = self._available_ids(client, company_headers, day, "10:00")

        assert test_employee.id in ids

    def test_without_slot_lists_all_active(self, client, test_employee, second_employee, company_headers):
        response = client.get("/api/employees/available", headers=company_headers)

        assert {e["id"] for e in response.json()["data"]} == {test_employee.id, second_employee.id}

    def test_invalid_date_rejected(self, client, test_employee, company_headers):
        response = client.get("/api/employees/available?date=2024-13-45&time=10:00", headers=company_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.unit
def test_employee_stats(client, test_company, test_service, test_employee, test_owner, test_pet,
                        make_booking, company_headers):
    make_booking(test_company, test_service, test_owner, test_pet, status="completed", employee=test_employee)

    response = client.get("/api/employees/stats", headers=company_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["totalEmployees"] == 1
    assert data["newEmployeesThisMonth"] == 1
    assert data["positionDistribution"] == [{"position": "groomer", "count": 1}]
    assert data["topPerformers"][0]["totalBookings"] == 1
