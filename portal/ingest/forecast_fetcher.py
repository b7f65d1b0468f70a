"""Forecast fetcher: retrieves upstream forecasts and classifies failures."""

import asyncio
import logging
from datetime import date, datetime

import httpx
from pydantic import TypeAdapter

from portal.ingest.weather_client import WeatherApiClient
from portal.models.forecast import (
    FetchErrorKind,
    FetchResult,
    Forecast,
    RawForecastRecord,
)

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[RawForecastRecord])


class ForecastFetcher:
    def __init__(self, client: WeatherApiClient, timeout: float = 30.0):
        self.client = client
        self.timeout = timeout

    async def fetch(self, cancel: asyncio.Event | None = None) -> FetchResult:
        """Fetch forecasts, bounded by ``timeout`` and the optional cancel event.

        Never raises for upstream failures; the error is returned in the
        result instead. Cancellation of the calling task still propagates.
        """
        work = asyncio.ensure_future(self._fetch_within_deadline())
        waiters: set[asyncio.Future] = {work}
        if cancel is not None:
            waiters.add(asyncio.ensure_future(cancel.wait()))

        try:
            done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in waiters:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*waiters, return_exceptions=True)

        if work not in done:
            logger.info("Forecast fetch cancelled by caller")
            return FetchResult.failure(
                FetchErrorKind.CANCELLED, "Forecast request was cancelled"
            )

        try:
            forecasts = work.result()
        except TimeoutError:
            return self._timed_out()
        except httpx.TimeoutException as e:
            logger.error("Weather API timed out after retries: %s", e)
            return self._timed_out()
        except httpx.HTTPStatusError as e:
            logger.error("Weather API returned %d: %s", e.response.status_code, e)
            return FetchResult.failure(
                FetchErrorKind.REQUEST_FAILED,
                f"Weather API returned HTTP {e.response.status_code}",
            )
        except httpx.RequestError as e:
            logger.error("Weather API request failed: %s", e)
            return FetchResult.failure(
                FetchErrorKind.REQUEST_FAILED, f"Weather API request failed: {e}"
            )
        except Exception as e:
            logger.exception("Unexpected error fetching forecasts")
            return FetchResult.failure(FetchErrorKind.UNEXPECTED, str(e))

        return FetchResult.success(forecasts)

    async def _fetch_within_deadline(self) -> list[Forecast]:
        async with asyncio.timeout(self.timeout):
            body = await self.client.get_forecasts()
        return parse_forecasts(body)

    def _timed_out(self) -> FetchResult:
        logger.error("Forecast fetch timed out after %ss", self.timeout)
        return FetchResult.failure(
            FetchErrorKind.TIMEOUT,
            f"Request timed out after {self.timeout:g} seconds",
            timeout_seconds=self.timeout,
        )


def parse_forecasts(body: object) -> list[Forecast]:
    """Map an upstream body to forecasts, dropping records without a usable date.

    Raises pydantic.ValidationError when the body is not a list of records.
    """
    if body is None:
        return []
    records = _RECORDS.validate_python(body)

    forecasts: list[Forecast] = []
    for record in records:
        forecast = to_forecast(record)
        if forecast is not None:
            forecasts.append(forecast)
    return forecasts


def to_forecast(record: RawForecastRecord) -> Forecast | None:
    parsed = _parse_date(record.date)
    if parsed is None:
        logger.debug("Dropping forecast record with unusable date: %r", record.date)
        return None
    return Forecast(
        date=parsed,
        temperature_c=record.temperature_c,
        summary=record.summary,
    )


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None
