"""Weather forecast data models."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawForecastRecord(BaseModel):
    """One element of the upstream ``WeatherForecast`` array."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    date: str | None = None
    temperature_c: int = Field(default=0, alias="temperatureC")
    summary: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def non_string_date_is_missing(cls, value: object) -> object:
        return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Forecast:
    date: date
    temperature_c: int
    summary: str | None = None

    @property
    def temperature_f(self) -> float:
        return 32 + self.temperature_c * 9 / 5


class FetchErrorKind(StrEnum):
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    REQUEST_FAILED = "request_failed"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class FetchError:
    kind: FetchErrorKind
    message: str
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class FetchResult:
    forecasts: list[Forecast] = field(default_factory=list)
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, forecasts: list[Forecast]) -> "FetchResult":
        return cls(forecasts=forecasts)

    @classmethod
    def failure(
        cls,
        kind: FetchErrorKind,
        message: str,
        timeout_seconds: float | None = None,
    ) -> "FetchResult":
        return cls(error=FetchError(kind, message, timeout_seconds))
