"""
Read-only analytics over the bookings fact table.

Every figure is recomputed from the source tables on each call. A window of
``days`` days ends today; a pet owner seen in the window is "new" unless it
also has a booking for the same company dated before the window start, in
which case it is "returning".
"""
from collections import OrderedDict
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from zootel.models.models import Booking, Pet, PetOwner, Service
from zootel.schemas.schemas import (
    AnalyticsOverview, CompanyStats, DashboardData, MonthlyEarnings, RecentBooking,
)
from zootel.services.company_service import rating_summary

DEFAULT_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 365
EARNINGS_MONTHS = 6
RECENT_BOOKINGS_LIMIT = 10


def _money(value) -> float:
    return round(float(value or 0), 2)


def _shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class AnalyticsService:

    def __init__(self, db: Session, company_id: str, days: int = DEFAULT_WINDOW_DAYS, today: Optional[date] = None):
        self.db = db
        self.company_id = company_id
        self.days = days
        self.today = today or date.today()
        self.window_start = self.today - timedelta(days=days)

    def _count_bookings(self, *conditions) -> int:
        return self.db.query(func.count(Booking.id)).filter(
            Booking.company_id == self.company_id, *conditions
        ).scalar() or 0

    def _revenue(self, *conditions) -> float:
        total = self.db.query(func.sum(Booking.total_amount)).filter(
            Booking.company_id == self.company_id,
            Booking.status == "completed",
            *conditions
        ).scalar()
        return _money(total)

    def customer_segments(self):
        """Return ``(new_customers, returning_customers)`` for the window"""
        prior_owners = select(Booking.pet_owner_id).where(
            Booking.company_id == self.company_id,
            Booking.date < self.window_start
        )
        in_window = self.db.query(func.count(distinct(Booking.pet_owner_id))).filter(
            Booking.company_id == self.company_id,
            Booking.date >= self.window_start
        )
        new_customers = in_window.filter(Booking.pet_owner_id.notin_(prior_owners)).scalar() or 0
        returning_customers = in_window.filter(Booking.pet_owner_id.in_(prior_owners)).scalar() or 0
        return new_customers, returning_customers

    def overview(self) -> AnalyticsOverview:
        in_window = Booking.date >= self.window_start
        average_rating, total_reviews = rating_summary(self.db, self.company_id)
        new_customers, returning_customers = self.customer_segments()

        return AnalyticsOverview(
            total_bookings=self._count_bookings(),
            period_bookings=self._count_bookings(in_window),
            total_revenue=self._revenue(),
            period_revenue=self._revenue(in_window),
            average_rating=average_rating,
            total_reviews=total_reviews,
            new_customers=new_customers,
            returning_customers=returning_customers,
            window_days=self.days,
            window_start=self.window_start,
        )

    def stats(self) -> CompanyStats:
        overview = self.overview()
        return CompanyStats(
            total_bookings=overview.total_bookings,
            period_revenue=overview.period_revenue,
            average_rating=overview.average_rating,
            total_reviews=overview.total_reviews,
            new_customers=overview.new_customers,
            returning_customers=overview.returning_customers,
        )

    def recent_bookings(self, limit: int = RECENT_BOOKINGS_LIMIT):
        rows = self.db.query(
            Booking, PetOwner.name, Pet.name, Service.name
        ).outerjoin(
            PetOwner, Booking.pet_owner_id == PetOwner.id
        ).outerjoin(
            Pet, Booking.pet_id == Pet.id
        ).outerjoin(
            Service, Booking.service_id == Service.id
        ).filter(
            Booking.company_id == self.company_id
        ).order_by(Booking.created_at.desc()).limit(limit).all()

        return [
            RecentBooking(
                id=booking.id,
                date=booking.date,
                time=booking.time,
                status=booking.status,
                amount=_money(booking.total_amount),
                pet_owner_name=owner_name or "Unknown Customer",
                pet_name=pet_name or "Unknown Pet",
                service_name=service_name or "Unknown Service",
            )
            for booking, owner_name, pet_name, service_name in rows
        ]

    def monthly_earnings(self, months: int = EARNINGS_MONTHS):
        """Completed revenue per calendar month, oldest first, months without revenue included"""
        first_year, first_month = _shift_month(self.today.year, self.today.month, -(months - 1))
        start = date(first_year, first_month, 1)

        buckets = OrderedDict()
        for offset in range(months):
            year, month = _shift_month(first_year, first_month, offset)
            buckets[(year, month)] = 0.0

        rows = self.db.query(Booking.date, Booking.total_amount).filter(
            Booking.company_id == self.company_id,
            Booking.status == "completed",
            Booking.date >= start,
            Booking.date <= self.today
        ).all()
        for booking_date, amount in rows:
            key = (booking_date.year, booking_date.month)
            if key in buckets:
                buckets[key] += float(amount or 0)

        return [
            MonthlyEarnings(month=date(year, month, 1).strftime("%b"), earnings=_money(total))
            for (year, month), total in buckets.items()
        ]

    def dashboard_data(self) -> DashboardData:
        return DashboardData(
            recent_bookings=self.recent_bookings(),
            monthly_earnings=self.monthly_earnings(),
        )
