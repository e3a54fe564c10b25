"""Configuration data model."""

from dataclasses import dataclass
from typing import Optional


BASE_URL = "http://www.omdbapi.com/"

# Lookups always ask for the full plot and the Rotten Tomatoes ratings
PLOT = "full"
TOMATOES = "true"

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass(frozen=True)
class Config:
    """Settings for the OMDb client."""

    # Endpoint configuration
    base_url: str = BASE_URL
    api_key: Optional[str] = None

    # Transport configuration
    timeout: float = 30.0
    user_agent: Optional[str] = None

    # Other configuration
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if not self.base_url.startswith(('http://', 'https://')):
            raise ValueError("base_url must be an http(s) URL")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.log_level not in LOG_LEVELS:
            raise ValueError("log_level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")

    @property
    def has_api_key(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key)
