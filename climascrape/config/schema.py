"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from climascrape.config.defaults import (
    DEFAULT_ACCEPT,
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_CITY,
    DEFAULT_COOKIE,
    DEFAULT_STATE,
    DEFAULT_URL,
    DEFAULT_USER_AGENT,
)


class SourceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    url: str = DEFAULT_URL
    city: str = DEFAULT_CITY
    state: str = DEFAULT_STATE


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    connect_timeout_s: float = Field(default=10.0, gt=0.0)
    write_timeout_s: float = Field(default=15.0, gt=0.0)
    read_timeout_s: float = Field(default=30.0, gt=0.0)
    max_redirects: int = Field(default=5, ge=0)
    max_retries: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=1.0, ge=0.0)
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = DEFAULT_ACCEPT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    cache_control: str = "no-cache"
    cookie: str = DEFAULT_COOKIE

    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": self.accept,
            "Accept-Language": self.accept_language,
            "Cache-Control": self.cache_control,
            "Cookie": self.cookie,
        }


class ExtractionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_days: int = Field(default=15, ge=1, le=15)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    ttl_minutes: int = Field(default=30, ge=0)


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    expose_error_details: bool = True


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    source: SourceConfig = SourceConfig()
    http: HttpConfig = HttpConfig()
    extraction: ExtractionConfig = ExtractionConfig()
    cache: CacheConfig = CacheConfig()
    api: ApiConfig = ApiConfig()
