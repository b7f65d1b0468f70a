"""Upstream weather API client with retry and exponential backoff."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)

FORECAST_PATH = "WeatherForecast"
DEFAULT_USER_AGENT = "portal/0.1.0"
RETRYABLE_STATUSES = frozenset({408})
RETRYABLE_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


def is_retryable_status(status_code: int) -> bool:
    return status_code >= 500 or status_code in RETRYABLE_STATUSES


class WeatherApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.user_agent = user_agent
        self._sleep = sleep
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()

    async def get_forecasts(self) -> Any:
        """Fetch the forecast array from ``{base_url}/WeatherForecast``.

        Retries timeouts, network errors, 5xx and 408 with exponential backoff.
        Returns the decoded JSON body, or None when the body is empty.
        """
        url = f"{self.base_url}/{FORECAST_PATH}"
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        attempt = 0
        while True:
            try:
                resp = await self._http.get(url, headers=headers, timeout=self.timeout)
                if is_retryable_status(resp.status_code) and attempt < self.max_retries:
                    attempt += 1
                    delay = self._backoff(attempt)
                    logger.warning(
                        "Weather API %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        url, resp.status_code, delay, attempt, self.max_retries,
                    )
                    await self._sleep(delay)
                    continue
                resp.raise_for_status()
                if not resp.content.strip():
                    return None
                return resp.json()
            except RETRYABLE_ERRORS as e:
                if attempt >= self.max_retries:
                    raise
                attempt += 1
                delay = self._backoff(attempt)
                logger.warning(
                    "Weather API request error, retrying in %.1fs (attempt %d/%d): %s",
                    delay, attempt, self.max_retries, e,
                )
                await self._sleep(delay)

    def _backoff(self, attempt: int) -> float:
        return self.retry_base_delay * (2**attempt)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
