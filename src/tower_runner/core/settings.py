# Logging adapter for application-wide logging
from tower_runner.adapters.logging_adapter import LoggingAdapter

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings
from rich import print

from tower_runner.core.interfaces.logging import LoggingPort


# using pydantic_settings to read the pipeline inputs from the environment
# and do automatic type casting in a central place
class TowerSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }
    TOWER_LOG_LEVEL: str = "INFO"
    TOWER_URL: str = ""
    TOWER_USERNAME: str = ""
    TOWER_PASSWORD: SecretStr = SecretStr("")
    TOWER_JOB_TEMPLATE_NAME: str = ""
    TOWER_API_PREFIX: str = "/api/v1"
    TOWER_POLL_INTERVAL: float = 10.0  # seconds
    TOWER_EVENTS_PAGE_SIZE: int = 10
    # Host pipelines expose their user agent; forward it when present
    TOWER_HTTP_USER_AGENT: str | None = None
    TOWER_REQUEST_TIMEOUT: float = 30.0  # seconds
    TOWER_TRANSPORT_MAX_ATTEMPTS: int = 1

    def print_settings(self, logger: LoggingPort):
        """Prints the settings for debugging purposes"""
        logger.info("Tower runner settings:")
        print(self)

    @field_validator("TOWER_API_PREFIX", mode="before")
    def ensure_leading_slash(cls, value: str) -> str:
        """Ensure TOWER_API_PREFIX starts with a slash and has no trailing one."""
        value = "/" + value.strip("/")
        return value.rstrip("/")


# Level is left unset so the one configured by configure_logging applies
logger = LoggingAdapter("tower_runner")
