"""
Unit tests for currencies: server-side conversion and the client context
"""
import json

import httpx
import pytest
from fastapi import status

from zootel.api.v1.endpoints.currencies import get_rates_client
from zootel.client.currency import CurrencyContext
from zootel.core.config import settings
from zootel.main import app
from zootel.models.models import Currency
from zootel.services.currency_service import CurrencyService


@pytest.fixture
def currencies(db):
    CurrencyService(db).seed_defaults()
    return db.query(Currency).all()


def use_rates_transport(handler):
    def override():
        client = httpx.Client(transport=httpx.MockTransport(handler))
        try:
            yield client
        finally:
            client.close()
    app.dependency_overrides[get_rates_client] = override


@pytest.mark.unit
class TestCurrencyAPI:
    """Tests for /currencies"""

    def test_list_base_first(self, client, db, currencies):
        db.query(Currency).filter(Currency.code == "CHF").update({"is_active": False})
        db.commit()

        response = client.get("/api/currencies")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        codes = [c["code"] for c in data]
        assert codes[0] == "USD"
        assert "CHF" not in codes
        names = [c["name"] for c in data[1:]]
        assert names == sorted(names)
        assert data[0]["isBase"] is True

    def test_convert_from_base(self, client, currencies):
        response = client.post("/api/currencies/convert",
                               json={"fromCurrency": "USD", "toCurrency": "EUR", "amount": 100})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["convertedAmount"] == 85.0
        assert data["exchangeRate"] == 0.85
        assert data["originalAmount"] == 100

    def test_convert_to_base(self, client, currencies):
        data = client.post("/api/currencies/convert",
                           json={"fromCurrency": "EUR", "toCurrency": "USD", "amount": 85}).json()["data"]

        assert data["convertedAmount"] == 100.0

    def test_convert_through_base(self, client, currencies):
        data = client.post("/api/currencies/convert",
                           json={"fromCurrency": "EUR", "toCurrency": "JPY", "amount": 17}).json()["data"]

        assert data["convertedAmount"] == 2200.0

    def test_convert_same_currency(self, client, currencies):
        data = client.post("/api/currencies/convert",
                           json={"fromCurrency": "GBP", "toCurrency": "GBP", "amount": 12.5}).json()["data"]

        assert data["convertedAmount"] == 12.5
        assert data["exchangeRate"] == 1.0

    def test_unknown_currency(self, client, currencies):
        response = client.post("/api/currencies/convert",
                               json={"fromCurrency": "USD", "toCurrency": "XYZ", "amount": 1})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Currency not found: XYZ"

    def test_negative_amount_rejected(self, client, currencies):
        response = client.post("/api/currencies/convert",
                               json={"fromCurrency": "USD", "toCurrency": "EUR", "amount": -1})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_zero_stored_rate_rejected(self, client, db, currencies):
        db.query(Currency).filter(Currency.code == "EUR").update({"exchange_rate": 0})
        db.commit()

        response = client.post("/api/currencies/convert",
                               json={"fromCurrency": "EUR", "toCurrency": "USD", "amount": 10})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Exchange rate unavailable for EUR"


@pytest.mark.unit
class TestRefreshRates:
    """Tests for pulling rates from the provider"""

    def test_refresh_updates_rates(self, client, db, currencies, superadmin_headers, monkeypatch):
        monkeypatch.setattr(settings, "EXCHANGE_RATE_API_KEY", "test-key")
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json={
                "result": "success",
                "conversion_rates": {"USD": 1, "EUR": 0.9, "GBP": 0.8},
            })

        use_rates_transport(handler)
        response = client.post("/api/currencies/refresh", headers=superadmin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"] == {"updated": 2}
        assert requested == ["https://v6.exchangerate-api.com/v6/test-key/latest/USD"]
        eur = db.query(Currency).filter(Currency.code == "EUR").one()
        db.refresh(eur)
        assert eur.exchange_rate == 0.9

    def test_refresh_skips_non_positive_rates(self, client, db, currencies, superadmin_headers, monkeypatch):
        monkeypatch.setattr(settings, "EXCHANGE_RATE_API_KEY", "test-key")
        use_rates_transport(lambda request: httpx.Response(200, json={
            "result": "success",
            "conversion_rates": {"USD": 1, "EUR": 0, "GBP": -2, "JPY": 150},
        }))

        response = client.post("/api/currencies/refresh", headers=superadmin_headers)

        assert response.json()["data"] == {"updated": 1}
        eur = db.query(Currency).filter(Currency.code == "EUR").one()
        db.refresh(eur)
        assert eur.exchange_rate == 0.85

    def test_provider_failure_is_bad_gateway(self, client, currencies, superadmin_headers, monkeypatch):
        monkeypatch.setattr(settings, "EXCHANGE_RATE_API_KEY", "test-key")
        use_rates_transport(lambda request: httpx.Response(500, text="down"))

        response = client.post("/api/currencies/refresh", headers=superadmin_headers)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["message"] == "Failed to fetch exchange rates"

    def test_refresh_requires_superadmin(self, client, currencies, company_headers):
        response = client.post("/api/currencies/refresh", headers=company_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.unit
class TestCurrencyContext:
    """Tests for the client-side currency context"""

    def test_load_defaults_to_usd(self, client, currencies, tmp_path):
        context = CurrencyContext(client, storage_path=tmp_path / "currency.json")

        context.load_currencies()

        assert context.error is None
        assert context.selected_currency["code"] == "USD"
        assert len(context.currencies) == 10

    def test_change_currency_persists(self, client, currencies, tmp_path):
        storage = tmp_path / "currency.json"
        context = CurrencyContext(client, storage_path=storage)
        context.load_currencies()

        assert context.change_currency("EUR") is True
        assert json.loads(storage.read_text())["code"] == "EUR"

        reloaded = CurrencyContext(client, storage_path=storage)
        reloaded.load_currencies()
        assert reloaded.selected_currency["code"] == "EUR"

    def test_unknown_code_ignored(self, client, currencies, tmp_path):
        context = CurrencyContext(client, storage_path=tmp_path / "currency.json")
        context.load_currencies()

        assert context.change_currency("XYZ") is False
        assert context.selected_currency["code"] == "USD"

    def test_convert_and_format(self, client, currencies):
        context = CurrencyContext(client)
        context.load_currencies()
        context.change_currency("EUR")

        converted = context.convert_price(100, "USD")

        assert converted == 85.0
        assert context.format_price(converted) == "€85.00"

    def test_same_currency_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        context = CurrencyContext(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api"))
        context.currencies = [{"code": "USD", "symbol": "$"}]
        context.selected_currency = context.currencies[0]

        assert context.convert_price(42.0, "USD") == 42.0

    def test_conversion_failure_falls_back_to_original(self):
        def handler(request):
            if request.url.path.endswith("/convert"):
                return httpx.Response(500, json={"error": "Internal Server Error", "message": "boom"})
            return httpx.Response(200, json={"success": True, "data": [
                {"code": "USD", "symbol": "$"}, {"code": "EUR", "symbol": "€"},
            ]})

        context = CurrencyContext(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api"))
        context.load_currencies()
        context.change_currency("EUR")

        assert context.convert_price(19.99, "USD") == 19.99

    def test_network_error_falls_back_to_original(self):
        def handler(request):
            if request.url.path.endswith("/convert"):
                raise httpx.ConnectError("unreachable", request=request)
            return httpx.Response(200, json={"success": True, "data": [
                {"code": "USD", "symbol": "$"}, {"code": "GBP", "symbol": "£"},
            ]})

        context = CurrencyContext(httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api"))
        context.load_currencies()
        context.change_currency("GBP")

        assert context.convert_price(10, "USD") == 10

    def test_load_failure_sets_error(self):
        context = CurrencyContext(httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(503)), base_url="http://api"
        ))

        context.load_currencies()

        assert context.error == "Failed to load currencies"
        assert context.selected_currency is None
        assert context.format_price(5) == "5"
