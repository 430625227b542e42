import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from zootel.core.database import get_db
from zootel.core.errors import handle_db_errors
from zootel.core.security import require_superadmin
from zootel.schemas.schemas import CurrencyConversionRequest, Principal
from zootel.services.currency_service import RATES_TIMEOUT, CurrencyService

router = APIRouter()


def get_rates_client():
    """HTTP client for the exchange rate provider, closed after the request"""
    client = httpx.Client(timeout=RATES_TIMEOUT)
    try:
        yield client
    finally:
        client.close()


@router.get("")
def get_currencies(db: Session = Depends(get_db)):
    """Active currencies, base currency first"""
    with handle_db_errors(db, "Failed to get currencies"):
        currencies = CurrencyService(db).list_active()
    return {"success": True, "data": currencies}


@router.post("/convert")
def convert_currency(conversion: CurrencyConversionRequest, db: Session = Depends(get_db)):
    with handle_db_errors(db, "Failed to convert currency"):
        result = CurrencyService(db).convert(
            conversion.from_currency, conversion.to_currency, conversion.amount
        )
    return {"success": True, "data": result}


@router.post("/refresh")
def refresh_exchange_rates(
    db: Session = Depends(get_db),
    http_client: httpx.Client = Depends(get_rates_client),
    principal: Principal = Depends(require_superadmin)
):
    """Pull the latest exchange rates from the rates provider"""
    with handle_db_errors(db, "Failed to update exchange rates"):
        updated = CurrencyService(db, http_client).refresh_exchange_rates()
    return {"success": True, "message": f"Updated {updated} exchange rates", "data": {"updated": updated}}
