from fastapi import APIRouter

from zootel.api.v1.endpoints import (
    bookings, companies, currencies, employees, pets, reviews, services, waitlist,
)

api_router = APIRouter()

api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
api_router.include_router(pets.router, prefix="/pets", tags=["pets"])
api_router.include_router(waitlist.router, prefix="/waitlist", tags=["waitlist"])
api_router.include_router(currencies.router, prefix="/currencies", tags=["currencies"])
