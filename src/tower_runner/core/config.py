"""Configuration models for core domain components.

Pydantic-based configuration classes consolidating what the managers need,
so the composition root can inject them and tests can build custom ones.
"""

from pydantic import BaseModel, Field, SecretStr, field_validator


class TowerConnection(BaseModel):
    """Endpoint and credentials of the remote orchestration service.

    Resolved by the hosting pipeline and handed to the core at construction
    time; the core never looks credentials up itself.
    """

    url: str = Field(min_length=1, description="Base URL of the service, e.g. https://tower.example.org")
    username: str = Field(min_length=1)
    password: SecretStr = SecretStr("")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @field_validator("url", mode="before")
    def strip_trailing_slash(cls, value: str) -> str:
        if isinstance(value, str):
            value = value.strip().rstrip("/")
        return value

    @classmethod
    def from_app_settings(cls, settings) -> "TowerConnection":
        return cls(
            url=settings.TOWER_URL,
            username=settings.TOWER_USERNAME,
            password=settings.TOWER_PASSWORD,
        )


class JobRunnerConfig(BaseModel):
    """Configuration for job launching and polling behavior.

    Attributes:
        poll_interval: Seconds to sleep between status polls (float for test flexibility)
        page_size: Number of events requested per job events page
        api_prefix: Path of the versioned REST API below the service URL
        user_agent: Optional User-Agent header sent with every request
        request_timeout: Total timeout in seconds for a single HTTP request
        transport_max_attempts: Attempts per request on transport failures (1 = no retry)
    """

    poll_interval: float = Field(
        default=10.0,
        gt=0,
        description="Interval in seconds between job status polling requests",
    )

    page_size: int = Field(
        default=10,
        ge=1,
        description="Page size used when listing job events",
    )

    api_prefix: str = Field(
        default="/api/v1",
        description="Path prefix of the REST API",
    )

    user_agent: str | None = Field(
        default=None,
        description="User-Agent header forwarded on every request",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Total timeout in seconds for one HTTP request",
    )

    transport_max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Maximum attempts for a request failing at transport level; HTTP errors are never retried",
    )

    transport_retry_base_wait: float = Field(
        default=1.0,
        gt=0,
        description="Base wait time in seconds for exponential backoff between transport retries",
    )

    transport_retry_max_wait: float = Field(
        default=10.0,
        gt=0,
        description="Maximum wait time in seconds between transport retries",
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @classmethod
    def from_app_settings(cls, settings) -> "JobRunnerConfig":
        """Factory method to construct config from a TowerSettings instance."""
        return cls(
            poll_interval=settings.TOWER_POLL_INTERVAL,
            page_size=settings.TOWER_EVENTS_PAGE_SIZE,
            api_prefix=settings.TOWER_API_PREFIX,
            user_agent=settings.TOWER_HTTP_USER_AGENT,
            request_timeout=settings.TOWER_REQUEST_TIMEOUT,
            transport_max_attempts=settings.TOWER_TRANSPORT_MAX_ATTEMPTS,
            # retry wait times use defaults (no settings exist yet)
        )
