"""Pydantic v2 configuration schema with strict validation."""

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

DEFAULT_BASE_URL = "https://api.weather.yandex.ru"
DEFAULT_USER_AGENT = "forecaster/0.1.0"


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    base_url: str = DEFAULT_BASE_URL
    connect_timeout_seconds: float = Field(default=10.0, gt=0.0)
    timeout_seconds: float = Field(default=20.0, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        text = value.strip().rstrip("/")
        if not text.startswith(("http://", "https://")):
            raise ValueError("http.base_url must be an absolute http(s) URL")
        return text

    @model_validator(mode="after")
    def validate_timeouts(self) -> "HttpConfig":
        if self.timeout_seconds < self.connect_timeout_seconds:
            raise ValueError(
                "http.timeout_seconds must be >= http.connect_timeout_seconds"
            )
        return self


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    api_key: str = Field(
        validation_alias=AliasChoices("api_key", "yandex.api.key"),
        repr=False,
    )
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    days: int = Field(ge=1)
    http: HttpConfig = HttpConfig()

    @field_validator("api_key", mode="before")
    @classmethod
    def coerce_numeric_api_key(cls, value):
        # An unquoted all-digit key is read by YAML as an int.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("api_key must not be empty")
        return text
