"""
Unit tests for bookings, reviews and pets
"""
from datetime import date, time, timedelta

import pytest
from fastapi import status

from zootel.models.models import Booking, PetOwner


def booking_payload(company, service, pet, employee=None, day=None, start="10:00"):
    payload = {
        "companyId": company.id,
        "serviceId": service.id,
        "petId": pet.id,
        "date": (day or date.today() + timedelta(days=2)).isoformat(),
        "time": start,
        "notes": "Sensitive skin",
    }
    if employee is not None:
        payload["employeeId"] = employee.id
    return payload


@pytest.mark.unit
class TestPets:
    """Tests for the pet owner's pets"""

    def test_add_pet_creates_owner_record(self, client, db, owner_headers):
        response = client.post(
            "/api/pets",
            headers=owner_headers,
            json={"name": "Mochi", "type": "Cat", "age": 3, "photos": ["a.jpg"],
                  "medicalInfo": {"allergies": ["chicken"]}},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["ownerId"] == "owner_test"
        assert data["photos"] == ["a.jpg"]
        assert data["medicalInfo"] == {"allergies": ["chicken"]}
        owner = db.query(PetOwner).filter(PetOwner.id == "owner_test").one()
        assert owner.email == "jane@example.com"

    def test_list_own_pets(self, client, test_pet, make_owner, owner_headers):
        make_owner("Someone")

        response = client.get("/api/pets", headers=owner_headers)

        assert [p["id"] for p in response.json()["data"]] == [test_pet.id]

    def test_company_cannot_add_pets(self, client, company_headers):
        response = client.post("/api/pets", headers=company_headers, json={"name": "Rex", "type": "Dog"})

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.unit
class TestCreateBooking:
    """Tests for pet owners booking a service"""

    def test_create_booking(self, client, db, test_company, test_service, test_pet, owner_headers):
        response = client.post("/api/bookings", headers=owner_headers,
                               json=booking_payload(test_company, test_service, test_pet))

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["status"] == "pending"
        assert data["totalAmount"] == 65.0
        assert data["petOwnerId"] == "owner_test"
        assert data["time"] == "10:00:00"
        assert db.query(Booking).count() == 1

    def test_unverified_company(self, client, db, test_company, test_service, test_pet, owner_headers):
        test_company.verified = False
        db.commit()

        response = client.post("/api/bookings", headers=owner_headers,
                               json=booking_payload(test_company, test_service, test_pet))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_inactive_service(self, client, db, test_company, test_service, test_pet, owner_headers):
        test_service.active = False
        db.commit()

        response = client.post("/api/bookings", headers=owner_headers,
                               json=booking_payload(test_company, test_service, test_pet))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Service not found"

    def test_someone_elses_pet(self, client, test_company, test_service, make_owner, owner_headers):
        _, other_pet = make_owner("Bob")

        response = client.post("/api/bookings", headers=owner_headers,
                               json=booking_payload(test_company, test_service, other_pet))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Pet not found"

    def test_busy_employee_conflicts(self, client, test_company, test_service, test_employee, test_owner,
                                     test_pet, make_booking, owner_headers):
        day = date.today() + timedelta(days=2)
        make_booking(test_company, test_service, test_owner, test_pet, booking_date=day,
                     booking_time=time(10, 0), employee=test_employee, status="confirmed")

        response = client.post(
            "/api/bookings",
            headers=owner_headers,
            json=booking_payload(test_company, test_service, test_pet, employee=test_employee, day=day, start="10:30"),
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error"] == "Conflict"

    def test_free_employee_assigned(self, client, test_company, test_service, test_employee, test_pet,
                                    owner_headers):
        response = client.post(
            "/api/bookings",
            headers=owner_headers,
            json=booking_payload(test_company, test_service, test_pet, employee=test_employee),
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["data"]["employeeId"] == test_employee.id

    def test_company_cannot_create_booking(self, client, test_company, test_service, test_pet, company_headers):
        response = client.post("/api/bookings", headers=company_headers,
                               json=booking_payload(test_company, test_service, test_pet))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.unit
class TestCompanyBookings:
    """Tests for the company's view of its bookings"""

    def test_list_and_filter(self, client, test_company, test_service, test_owner, test_pet, make_booking,
                             company_headers):
        make_booking(test_company, test_service, test_owner, test_pet, status="pending")
        done = make_booking(test_company, test_service, test_owner, test_pet, status="completed")

        everything = client.get("/api/bookings", headers=company_headers).json()
        completed = client.get("/api/bookings?status=completed", headers=company_headers).json()

        assert everything["pagination"]["totalBookings"] == 2
        assert [b["id"] for b in completed["data"]] == [done.id]

    def test_owner_sees_own_bookings(self, client, test_company, test_service, test_owner, test_pet,
                                     make_owner, make_booking, owner_headers):
        mine = make_booking(test_company, test_service, test_owner, test_pet)
        other_owner, other_pet = make_owner("Bob")
        make_booking(test_company, test_service, other_owner, other_pet)

        data = client.get("/api/bookings", headers=owner_headers).json()["data"]

        assert [b["id"] for b in data] == [mine.id]

    def test_update_status(self, client, test_company, test_service, test_owner, test_pet, make_booking,
                           company_headers):
        booking = make_booking(test_company, test_service, test_owner, test_pet)

        response = client.put(f"/api/bookings/{booking.id}/status", headers=company_headers,
                              json={"status": "confirmed"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["status"] == "confirmed"

    def test_invalid_status(self, client, test_company, test_service, test_owner, test_pet, make_booking,
                            company_headers):
        booking = make_booking(test_company, test_service, test_owner, test_pet)

        response = client.put(f"/api/bookings/{booking.id}/status", headers=company_headers,
                              json={"status": "teleported"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_other_company_cannot_read_booking(self, client, test_company, other_company, test_service,
                                               test_owner, test_pet, make_booking, other_company_headers):
        booking = make_booking(test_company, test_service, test_owner, test_pet)

        response = client.get(f"/api/bookings/{booking.id}", headers=other_company_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.unit
class TestReviews:
    """Tests for reviewing completed bookings"""

    def test_review_completed_booking(self, client, test_company, test_service, test_owner, test_pet,
                                      make_booking, owner_headers, company_headers):
        booking = make_booking(test_company, test_service, test_owner, test_pet, status="completed")

        response = client.post("/api/reviews", headers=owner_headers,
                               json={"bookingId": booking.id, "rating": 5, "comment": "Great job"})

        assert response.status_code == status.HTTP_201_CREATED
        reviews = client.get("/api/reviews", headers=company_headers).json()
        assert reviews["pagination"]["totalReviews"] == 1
        assert reviews["data"][0]["rating"] == 5

        profile = client.get(f"/api/companies/{test_company.id}/public").json()["data"]
        assert profile["rating"] == 5.0
        assert profile["totalReviews"] == 1

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, client, test_company, test_service, test_owner, test_pet, make_booking,
                                 owner_headers, rating):
        booking = make_booking(test_company, test_service, test_owner, test_pet, status="completed")

        response = client.post("/api/reviews", headers=owner_headers,
                               json={"bookingId": booking.id, "rating": rating})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Rating must be between 1 and 5"

    def test_pending_booking_cannot_be_reviewed(self, client, test_company, test_service, test_owner, test_pet,
                                                make_booking, owner_headers):
        booking = make_booking(test_company, test_service, test_owner, test_pet, status="pending")

        response = client.post("/api/reviews", headers=owner_headers,
                               json={"bookingId": booking.id, "rating": 4})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_second_review_conflicts(self, client, test_company, test_service, test_owner, test_pet,
                                     make_booking, owner_headers):
        booking = make_booking(test_company, test_service, test_owner, test_pet, status="completed")
        client.post("/api/reviews", headers=owner_headers, json={"bookingId": booking.id, "rating": 4})

        response = client.post("/api/reviews", headers=owner_headers, json={"bookingId": booking.id, "rating": 2})

        assert response.status_code == status.HTTP_409_CONFLICT
