"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

DEFAULT_WEATHER_API_URL = "http://localhost:5000"


class WeatherApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = DEFAULT_WEATHER_API_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0, le=10)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class PortalConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather_api: WeatherApiConfig = WeatherApiConfig()
    server: ServerConfig = ServerConfig()
