"""Portal web front-end: FastAPI app serving upstream weather forecasts."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from portal.config.schema import PortalConfig
from portal.ingest.forecast_fetcher import ForecastFetcher
from portal.ingest.weather_client import WeatherApiClient
from portal.models.forecast import FetchErrorKind, Forecast

ERROR_STATUS = {
    FetchErrorKind.TIMEOUT: 504,
    FetchErrorKind.CANCELLED: 503,
    FetchErrorKind.REQUEST_FAILED: 502,
    FetchErrorKind.UNEXPECTED: 502,
}


class ForecastOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: date
    temperature_c: int = Field(serialization_alias="temperatureC")
    temperature_f: float = Field(serialization_alias="temperatureF")
    summary: str | None = None

    @classmethod
    def from_forecast(cls, forecast: Forecast) -> "ForecastOut":
        return cls(
            date=forecast.date,
            temperature_c=forecast.temperature_c,
            temperature_f=forecast.temperature_f,
            summary=forecast.summary,
        )


def build_fetcher(config: PortalConfig, http_client: httpx.AsyncClient) -> ForecastFetcher:
    api = config.weather_api
    client = WeatherApiClient(
        base_url=api.base_url,
        timeout=api.timeout_seconds,
        max_retries=api.max_retries,
        retry_base_delay=api.retry_base_delay,
        http_client=http_client,
    )
    return ForecastFetcher(client, timeout=api.timeout_seconds)


def get_fetcher(request: Request) -> ForecastFetcher:
    return request.app.state.fetcher


def create_app(config: PortalConfig | None = None) -> FastAPI:
    config = config or PortalConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with httpx.AsyncClient() as http_client:
            app.state.fetcher = build_fetcher(config, http_client)
            yield

    app = FastAPI(title="Portal", version="0.1.0", lifespan=lifespan)
    app.state.config = config
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/api/weather", response_model=list[ForecastOut])
    async def get_weather(fetcher: ForecastFetcher = Depends(get_fetcher)):
        """Upstream forecasts, or a JSON error body describing the failure."""
        result = await fetcher.fetch()
        if result.error is not None:
            return JSONResponse(
                status_code=ERROR_STATUS[result.error.kind],
                content={
                    "error": str(result.error.kind),
                    "detail": result.error.message,
                },
            )
        return [ForecastOut.from_forecast(f) for f in result.forecasts]

    @app.get("/api/health")
    def get_health():
        """Quick health check."""
        return {
            "status": "ok",
            "weather_api_base_url": config.weather_api.base_url,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app
