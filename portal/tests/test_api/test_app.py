"""Tests for the FastAPI endpoints."""

from datetime import date

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from portal.app import create_app, get_fetcher
from portal.config.schema import PortalConfig
from portal.models.forecast import FetchErrorKind, FetchResult, Forecast


class FakeFetcher:
    def __init__(self, result: FetchResult):
        self.result = result
        self.calls = 0

    async def fetch(self, cancel=None) -> FetchResult:
        self.calls += 1
        return self.result


def _client(config: PortalConfig, result: FetchResult) -> TestClient:
    app = create_app(config)
    app.dependency_overrides[get_fetcher] = lambda: FakeFetcher(result)
    return TestClient(app)


class TestWeatherEndpoint:
    def test_returns_forecasts(self, default_config: PortalConfig):
        result = FetchResult.success(
            [
                Forecast(date=date(2026, 10, 18), temperature_c=0, summary="Freezing"),
                Forecast(date=date(2026, 10, 19), temperature_c=100),
            ]
        )
        resp = _client(default_config, result).get("/api/weather")
        assert resp.status_code == 200
        assert resp.json() == [
            {
                "date": "2026-10-18",
                "temperatureC": 0,
                "temperatureF": 32.0,
                "summary": "Freezing",
            },
            {
                "date": "2026-10-19",
                "temperatureC": 100,
                "temperatureF": 212.0,
                "summary": None,
            },
        ]

    def test_empty_result(self, default_config: PortalConfig):
        resp = _client(default_config, FetchResult.success([])).get("/api/weather")
        assert resp.status_code == 200
        assert resp.json() == []

    @pytest.mark.parametrize(
        ("kind", "status"),
        [
            (FetchErrorKind.TIMEOUT, 504),
            (FetchErrorKind.CANCELLED, 503),
            (FetchErrorKind.REQUEST_FAILED, 502),
            (FetchErrorKind.UNEXPECTED, 502),
        ],
    )
    def test_error_kinds(self, default_config: PortalConfig, kind: FetchErrorKind, status: int):
        result = FetchResult.failure(kind, "upstream trouble")
        resp = _client(default_config, result).get("/api/weather")
        assert resp.status_code == status
        assert resp.json() == {"error": kind.value, "detail": "upstream trouble"}


class TestWeatherEndpointIntegration:
    def test_upstream_through_lifespan(self, default_config: PortalConfig):
        upstream = [
            {"date": "2026-10-18", "temperatureC": 25, "summary": "Hot"},
            {"date": None, "temperatureC": 3, "summary": "Cold"},
        ]
        with respx.mock(assert_all_called=False) as router:
            router.get("https://test-weather.example.com/WeatherForecast").mock(
                return_value=httpx.Response(200, json=upstream)
            )
            with TestClient(create_app(default_config)) as client:
                resp = client.get("/api/weather")

        assert resp.status_code == 200
        body = resp.json()
        assert len(body) == 1
        assert body[0]["temperatureF"] == 77.0


class TestHealthEndpoint:
    def test_health(self, default_config: PortalConfig):
        resp = TestClient(create_app(default_config)).get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["weather_api_base_url"] == "https://test-weather.example.com"
        assert "timestamp" in body
