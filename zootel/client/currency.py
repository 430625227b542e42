"""
Client-side currency selection and price display.

``CurrencyContext`` loads the supported currencies from the API, remembers the
user's selected currency in a small JSON file, and converts prices through
the API's conversion endpoint. Conversion never fails from the caller's point
of view: on any problem the original amount is returned.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_CODE = "USD"


class CurrencyContext:

    def __init__(
        self,
        client: httpx.Client,
        storage_path: Union[str, Path, None] = None,
        api_prefix: str = "/api",
    ):
        self.client = client
        self.storage_path = Path(storage_path) if storage_path else None
        self.api_prefix = api_prefix.rstrip("/")
        self.currencies: List[Dict[str, Any]] = []
        self.selected_currency: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None

    def load_currencies(self) -> List[Dict[str, Any]]:
        """Fetch supported currencies and pick the selected one (saved, USD, or first)"""
        try:
            response = self.client.get(f"{self.api_prefix}/currencies")
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching currencies: {e}")
            self.error = "Failed to load currencies"
            return self.currencies

        if not body.get("success"):
            self.error = "Failed to load currencies"
            return self.currencies

        self.error = None
        self.currencies = body.get("data") or []
        self.selected_currency = (
            self._find(self._load_saved_code())
            or self._find(DEFAULT_CURRENCY_CODE)
            or (self.currencies[0] if self.currencies else None)
        )
        return self.currencies

    def _find(self, code: Optional[str]) -> Optional[Dict[str, Any]]:
        if not code:
            return None
        for currency in self.currencies:
            if currency.get("code") == code:
                return currency
        return None

    def _load_saved_code(self) -> Optional[str]:
        if self.storage_path is None or not self.storage_path.exists():
            return None
        try:
            saved = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Error parsing saved currency: {e}")
            return None
        return saved.get("code") if isinstance(saved, dict) else None

    def change_currency(self, code: str) -> bool:
        """Select ``code`` if it is supported; unknown codes are ignored"""
        currency = self._find(code)
        if currency is None:
            return False
        self.selected_currency = currency
        if self.storage_path is not None:
            try:
                self.storage_path.write_text(json.dumps(currency), encoding="utf-8")
            except OSError as e:
                logger.warning(f"Could not save selected currency: {e}")
        return True

    def convert_price(self, amount: float, from_currency: str = DEFAULT_CURRENCY_CODE) -> float:
        if not self.selected_currency or from_currency == self.selected_currency.get("code"):
            return amount

        try:
            response = self.client.post(
                f"{self.api_prefix}/currencies/convert",
                json={
                    "fromCurrency": from_currency,
                    "toCurrency": self.selected_currency["code"],
                    "amount": amount,
                },
            )
            body = response.json()
            if response.status_code == 200 and body.get("success"):
                return body["data"]["convertedAmount"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Error converting currency: {e}")

        return amount

    def format_price(self, amount: Any, currency: Optional[Dict[str, Any]] = None) -> str:
        currency = currency or self.selected_currency
        if not currency:
            return str(amount)
        return f"{currency.get('symbol', '')}{float(amount):.2f}"
