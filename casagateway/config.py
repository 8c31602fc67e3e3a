"""
Configuration and environment handling for the CASAGATEWAY proxy.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_ENDPOINT = "https://casagateway.ch/rest/publisher-properties"

logger = logging.getLogger(__name__)

PRIVATE_KEY_ENV = "CASAGATEWAY_PRIVATE_KEY"
API_KEY_ENV = "CASAGATEWAY_API_KEY"


def _timeout_from_env() -> Optional[float]:
    raw = os.getenv("CASAGATEWAY_TIMEOUT", "")
    return float(raw) if raw else None


class GatewayConfig(BaseModel):
    """Secrets and upstream settings, handed to the pipeline explicitly."""
    api_key: SecretStr = Field(default_factory=lambda: SecretStr(os.getenv(API_KEY_ENV, "")))
    private_key: SecretStr = Field(default_factory=lambda: SecretStr(os.getenv(PRIVATE_KEY_ENV, "")))
    endpoint: str = Field(default_factory=lambda: os.getenv("CASAGATEWAY_ENDPOINT", DEFAULT_ENDPOINT))
    default_provider: str = Field(default_factory=lambda: os.getenv("CASAGATEWAY_DEFAULT_PROVIDER", ""))
    # None keeps the hosting platform's limit
    timeout: Optional[float] = Field(default_factory=_timeout_from_env)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"), validate_default=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        """Unknown level names fall back to INFO."""
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            logger.warning("Unknown LOG_LEVEL %r, using INFO", v)
            return "INFO"
        return level

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Build a config from the process environment (and a local .env file)."""
        load_dotenv()
        return cls()

    def missing_secrets(self) -> list[str]:
        missing = []
        if not self.private_key.get_secret_value():
            missing.append(PRIVATE_KEY_ENV)
        if not self.api_key.get_secret_value():
            missing.append(API_KEY_ENV)
        return missing
