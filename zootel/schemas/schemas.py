from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel
from datetime import date, datetime, time
from typing import Optional, List, Dict, Any


class CamelModel(BaseModel):
    """Base for wire schemas: snake_case in Python, camelCase in JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Auth
class Principal(BaseModel):
    uid: str
    email: Optional[str] = None
    role: str


# Company schemas
class CompanyProfileUpdate(CamelModel):
    """Full profile update; omitted fields are stored as empty values"""
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    description: Optional[str] = None
    business_hours: Optional[Dict[str, Dict[str, Any]]] = None  # stored as sent
    logo_url: Optional[str] = None
    images: Optional[List[str]] = None


class CompanyProfile(CamelModel):
    id: str
    name: str = ""
    email: Optional[str] = None
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    description: str = ""
    business_hours: Dict[str, Any] = Field(default_factory=dict)
    logo_url: str = ""
    images: List[Any] = Field(default_factory=list)
    verified: bool = False
    subscription_plan: str = "basic"
    subscription_status: str = "active"
    total_bookings: int = 0
    rating: float = 0.0
    total_reviews: int = 0
    joined_date: date
    updated_at: Optional[datetime] = None


class CompanyPublic(CamelModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    description: str = ""
    business_hours: Dict[str, Any] = Field(default_factory=dict)
    logo_url: str = ""
    images: List[Any] = Field(default_factory=list)
    verified: bool
    rating: float = 0.0
    total_reviews: int = 0
    joined_date: date


class CompanyCustomer(CamelModel):
    id: str
    name: str = ""
    email: str
    phone: str = ""
    total_bookings: int = 0
    total_spent: float = 0.0
    last_booking_date: Optional[date] = None


# Service schemas
class ServiceBase(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    duration: int = Field(default=60, gt=0)
    category: Optional[str] = ""
    image_url: Optional[str] = ""


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration: Optional[int] = Field(default=None, gt=0)
    category: Optional[str] = None
    image_url: Optional[str] = None
    active: Optional[bool] = None


class ServiceResponse(CamelModel):
    id: str
    company_id: str
    name: str
    description: Optional[str] = ""
    price: float
    duration: int
    category: Optional[str] = ""
    image_url: Optional[str] = ""
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicService(CamelModel):
    id: str
    name: str
    description: str = ""
    price: float
    duration: int
    category: str = ""
    image_url: str = ""
    rating: float = 0.0
    review_count: int = 0
    pet_types: List[str] = Field(default_factory=list)


# Employee schemas
class EmergencyContact(CamelModel):
    name: str = ""
    phone: str = ""


class EmployeeCreate(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = ""
    position: str = Field(min_length=1)
    specialties: Optional[List[str]] = None
    working_hours: Optional[Dict[str, Any]] = None
    emergency_contact: Optional[EmergencyContact] = None
    notes: Optional[str] = ""


class EmployeeUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    specialties: Optional[List[str]] = None
    working_hours: Optional[Dict[str, Any]] = None
    emergency_contact: Optional[EmergencyContact] = None
    notes: Optional[str] = None
    active: Optional[bool] = None


class EmployeeResponse(CamelModel):
    id: str
    company_id: str
    name: str
    email: str
    phone: str = ""
    position: str = ""
    specialties: List[Any] = Field(default_factory=list)
    working_hours: Dict[str, Any] = Field(default_factory=dict)
    emergency_contact: EmergencyContact = Field(default_factory=EmergencyContact)
    notes: str = ""
    active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AvailableEmployee(CamelModel):
    id: str
    name: str
    position: str = ""
    specialties: List[Any] = Field(default_factory=list)


# Booking schemas
class BookingCreate(CamelModel):
    company_id: str
    service_id: str
    pet_id: str
    employee_id: Optional[str] = None
    date: date
    time: time
    notes: Optional[str] = ""


class BookingStatusUpdate(CamelModel):
    status: str


class BookingResponse(CamelModel):
    id: str
    company_id: str
    service_id: str
    pet_owner_id: str
    pet_id: str
    employee_id: Optional[str] = None
    date: date
    time: time
    status: str
    notes: Optional[str] = ""
    total_amount: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Review schemas
class ReviewCreate(CamelModel):
    booking_id: str
    rating: int
    comment: Optional[str] = ""


class ReviewResponse(CamelModel):
    id: str
    company_id: str
    pet_owner_id: str
    booking_id: str
    rating: int
    comment: Optional[str] = ""
    created_at: Optional[datetime] = None


# Pet schemas
class PetCreate(CamelModel):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    breed: Optional[str] = ""
    age: Optional[int] = Field(default=0, ge=0)
    weight: Optional[float] = Field(default=0, ge=0)
    gender: Optional[str] = ""
    color: Optional[str] = ""
    microchip_id: Optional[str] = ""
    photos: Optional[List[str]] = None
    medical_info: Optional[Dict[str, Any]] = None
    behavior_notes: Optional[str] = ""
    special_needs: Optional[str] = ""


class PetResponse(CamelModel):
    id: str
    owner_id: str
    name: str
    type: str
    breed: str = ""
    age: int = 0
    weight: float = 0.0
    gender: str = ""
    color: str = ""
    microchip_id: str = ""
    photos: List[Any] = Field(default_factory=list)
    medical_info: Dict[str, Any] = Field(default_factory=dict)
    behavior_notes: str = ""
    special_needs: str = ""
    created_at: Optional[datetime] = None


# Analytics schemas
class AnalyticsOverview(CamelModel):
    total_bookings: int = 0
    period_bookings: int = 0
    total_revenue: float = 0.0
    period_revenue: float = 0.0
    average_rating: float = 0.0
    total_reviews: int = 0
    new_customers: int = 0
    returning_customers: int = 0
    window_days: int
    window_start: date


class CompanyStats(CamelModel):
    total_bookings: int = 0
    period_revenue: float = 0.0
    average_rating: float = 0.0
    total_reviews: int = 0
    new_customers: int = 0
    returning_customers: int = 0


class RecentBooking(CamelModel):
    id: str
    date: date
    time: time
    status: str
    amount: float
    pet_owner_name: str
    pet_name: str
    service_name: str


class MonthlyEarnings(CamelModel):
    month: str
    earnings: float


class DashboardData(CamelModel):
    recent_bookings: List[RecentBooking]
    monthly_earnings: List[MonthlyEarnings]


class PositionCount(CamelModel):
    position: str
    count: int


class TopPerformer(CamelModel):
    id: str
    name: str
    position: str = ""
    total_bookings: int = 0
    average_rating: float = 0.0


class EmployeeStats(CamelModel):
    total_employees: int = 0
    new_employees_this_month: int = 0
    position_distribution: List[PositionCount]
    top_performers: List[TopPerformer]


# Waitlist schemas
class WaitlistJoin(CamelModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    type: Optional[str] = "mobile_app"


class WaitlistJoined(CamelModel):
    id: str
    email: str
    type: str


class WaitlistEntryResponse(CamelModel):
    id: str
    email: str
    phone: Optional[str] = ""
    type: str
    status: str
    created_at: Optional[datetime] = None


class WaitlistBucket(CamelModel):
    total: int = 0
    today: int = 0
    this_week: int = 0
    this_month: int = 0


class WaitlistSignup(CamelModel):
    email: str
    type: str
    created_at: Optional[datetime] = None


class WaitlistStats(CamelModel):
    overall: WaitlistBucket
    by_type: Dict[str, WaitlistBucket]
    recent_signups: List[WaitlistSignup]


# Currency schemas
class CurrencyResponse(CamelModel):
    id: str
    code: str
    name: str
    symbol: str
    flag_emoji: Optional[str] = ""
    is_active: bool
    is_base: bool
    exchange_rate: float
    last_updated: Optional[datetime] = None


class CurrencyConversionRequest(CamelModel):
    from_currency: str = Field(min_length=3, max_length=3)
    to_currency: str = Field(min_length=3, max_length=3)
    amount: float = Field(ge=0)


class CurrencyConversionResponse(CamelModel):
    from_currency: str
    to_currency: str
    original_amount: float
    converted_amount: float
    exchange_rate: float
    last_updated: Optional[datetime] = None
