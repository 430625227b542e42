"""
Supported currencies and price conversion.

Every rate is expressed against the single base currency, so any pair is
converted through the base: ``amount / rate(from) * rate(to)``.
"""
import logging
from datetime import datetime
from typing import List, Optional

import httpx
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from zootel.core.config import settings
from zootel.models.models import Currency
from zootel.schemas.schemas import CurrencyConversionResponse, CurrencyResponse

logger = logging.getLogger(__name__)

RATES_TIMEOUT = 10.0

DEFAULT_CURRENCIES = [
    # code, name, symbol, flag, is_base, rate
    ("USD", "US Dollar", "$", "🇺🇸", True, 1.0),
    ("EUR", "Euro", "€", "🇪🇺", False, 0.85),
    ("GBP", "British Pound", "£", "🇬🇧", False, 0.73),
    ("JPY", "Japanese Yen", "¥", "🇯🇵", False, 110.0),
    ("CAD", "Canadian Dollar", "C$", "🇨🇦", False, 1.25),
    ("AUD", "Australian Dollar", "A$", "🇦🇺", False, 1.35),
    ("CHF", "Swiss Franc", "CHF", "🇨🇭", False, 0.92),
    ("CNY", "Chinese Yuan", "¥", "🇨🇳", False, 6.45),
    ("RUB", "Russian Ruble", "₽", "🇷🇺", False, 75.0),
    ("INR", "Indian Rupee", "₹", "🇮🇳", False, 74.0),
]


class CurrencyService:

    def __init__(self, db: Session, http_client: Optional[httpx.Client] = None):
        self.db = db
        self.http_client = http_client

    def list_active(self) -> List[CurrencyResponse]:
        currencies = self.db.query(Currency).filter(
            Currency.is_active.is_(True)
        ).order_by(Currency.is_base.desc(), Currency.name.asc()).all()
        return [CurrencyResponse.model_validate(c) for c in currencies]

    def get_by_code(self, code: str) -> Currency:
        currency = self.db.query(Currency).filter(Currency.code == code.upper()).first()
        if not currency:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Currency not found: {code.upper()}"
            )
        return currency

    def get_base(self) -> Currency:
        base = self.db.query(Currency).filter(Currency.is_base.is_(True)).first()
        if not base:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Base currency is not configured"
            )
        return base

    def convert(self, from_code: str, to_code: str, amount: float) -> CurrencyConversionResponse:
        source = self.get_by_code(from_code)
        target = self.get_by_code(to_code)

        if source.code != target.code:
            for currency in (source, target):
                if not currency.is_base and not (currency.exchange_rate or 0) > 0:
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail=f"Exchange rate unavailable for {currency.code}"
                    )

        if source.code == target.code:
            rate = 1.0
        elif source.is_base:
            rate = target.exchange_rate
        elif target.is_base:
            rate = 1.0 / source.exchange_rate
        else:
            rate = target.exchange_rate / source.exchange_rate

        return CurrencyConversionResponse(
            from_currency=source.code,
            to_currency=target.code,
            original_amount=amount,
            converted_amount=round(amount * rate, 2),
            exchange_rate=rate,
            last_updated=target.last_updated,
        )

    def _fetch_rates(self, base_code: str) -> dict:
        if not settings.EXCHANGE_RATE_API_KEY:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Exchange rate provider is not configured"
            )

        url = f"{settings.EXCHANGE_RATE_API_URL}/{settings.EXCHANGE_RATE_API_KEY}/latest/{base_code}"
        client = self.http_client or httpx.Client(timeout=RATES_TIMEOUT)
        try:
            response = client.get(url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to fetch exchange rates: {e}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to fetch exchange rates"
            )
        finally:
            if self.http_client is None:
                client.close()

        if not isinstance(payload, dict):
            payload = {}
        rates = payload.get("conversion_rates")
        if payload.get("result") != "success" or not isinstance(rates, dict):
            logger.error(f"Exchange rate provider returned an error: {payload.get('result')}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="Failed to fetch exchange rates"
            )
        return rates

    def refresh_exchange_rates(self) -> int:
        """Pull the latest rates for every known currency; returns how many were updated"""
        base = self.get_base()
        rates = self._fetch_rates(base.code)

        now = datetime.utcnow()
        updated = 0
        for currency in self.db.query(Currency).filter(Currency.is_base.is_(False)).all():
            rate = rates.get(currency.code)
            if not isinstance(rate, (int, float)) or isinstance(rate, bool) or rate <= 0:
                if rate is not None:
                    logger.warning(f"Ignoring invalid exchange rate for {currency.code}: {rate!r}")
                continue
            currency.exchange_rate = float(rate)
            currency.last_updated = now
            updated += 1
        base.last_updated = now
        self.db.commit()

        logger.info(f"Refreshed {updated} exchange rates against {base.code}")
        return updated

    def seed_defaults(self) -> int:
        """Insert the default currencies that are missing; returns how many were added"""
        existing = {code for (code,) in self.db.query(Currency.code).all()}
        added = 0
        for code, name, symbol, flag, is_base, rate in DEFAULT_CURRENCIES:
            if code in existing:
                continue
            self.db.add(Currency(
                code=code,
                name=name,
                symbol=symbol,
                flag_emoji=flag,
                is_active=True,
                is_base=is_base,
                exchange_rate=rate,
            ))
            added += 1
        self.db.commit()
        return added
