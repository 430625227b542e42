from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_company
from zootel.schemas.schemas import CompanyProfileUpdate, Principal
from zootel.services.analytics_service import DEFAULT_WINDOW_DAYS, MAX_WINDOW_DAYS, AnalyticsService
from zootel.services.company_service import CompanyService, PublicCompanyService
from zootel.utils.pagination import coerce_int, pagination_meta, parse_pagination

router = APIRouter()


def _analytics(db: Session, principal: Principal, days: Optional[str]) -> AnalyticsService:
    window = coerce_int(days, DEFAULT_WINDOW_DAYS, maximum=MAX_WINDOW_DAYS)
    return AnalyticsService(db, principal.uid, days=window)


@router.get("/profile")
def get_company_profile(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Get the company's profile, creating a default one on first access"""
    with handle_db_errors(db, "Failed to get company profile"):
        profile = CompanyService(db, principal).get_profile()
    return {"success": True, "data": profile}


@router.put("/profile")
def update_company_profile(
    profile_data: CompanyProfileUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Replace the company's profile; the company is verified once the profile is complete"""
    with handle_db_errors(db, "Failed to update company profile"):
        profile = CompanyService(db, principal).update_profile(profile_data)
    return {"success": True, "message": "Profile updated successfully", "data": profile}


@router.get("/analytics/overview")
def get_analytics_overview(
    days: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    with handle_db_errors(db, "Failed to get analytics overview"):
        overview = _analytics(db, principal, days).overview()
    return {"success": True, "data": overview}


@router.get("/analytics/stats")
@router.get("/stats")
def get_company_stats(
    days: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Dashboard cards"""
    with handle_db_errors(db, "Failed to get company stats"):
        stats = _analytics(db, principal, days).stats()
    return {"success": True, "data": stats}


@router.get("/analytics/dashboard-data")
@router.get("/dashboard-data")
def get_dashboard_data(
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    """Recent bookings and monthly earnings for the company dashboard"""
    with handle_db_errors(db, "Failed to get dashboard data"):
        data = AnalyticsService(db, principal.uid).dashboard_data()
    return {"success": True, "data": data}


@router.get("/customers")
def get_company_customers(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_company)
):
    page, limit, offset = parse_pagination(page, limit, default_limit=20)
    with handle_db_errors(db, "Failed to get customers"):
        customers, total = CompanyService(db, principal).list_customers(offset, limit, search)
    return {
        "success": True,
        "data": customers,
        "pagination": pagination_meta(page, limit, total, "totalCustomers"),
    }


@router.get("/{company_id}/public")
def get_public_company(company_id: str, db: Session = Depends(get_db)):
    """Public profile of a verified company (no authentication)"""
    with handle_db_errors(db, "Failed to get company"):
        company = PublicCompanyService(db).get_public_profile(company_id)
    return {"success": True, "data": company}


@router.get("/{company_id}/services/public")
def get_public_company_services(company_id: str, db: Session = Depends(get_db)):
    """Active services of a verified company (no authentication)"""
    with handle_db_errors(db, "Failed to get company services"):
        services = PublicCompanyService(db).list_public_services(company_id)
    return {"success": True, "data": services}
