"""Connection settings loaded from environment variables."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

from snadmin.utils.errors import ConfigError, MissingCredentialError

FEED_ID_VAR = "SNADMIN_FEED_ID"
TOKEN_VAR = "SNADMIN_TOKEN"
BASE_URL_VAR = "SNADMIN_BASE_URL"
TIMEOUT_VAR = "SNADMIN_TIMEOUT"

DEFAULT_TIMEOUT = 30.0


class AdminSettings(BaseModel):
    """Credentials and endpoint for the admin API."""

    feed_id: str
    token: str = Field(repr=False)
    base_url: str
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def feed_url(self) -> str:
        """Root URL for this feed's episode endpoints."""
        return f"{self.base_url}/{self.feed_id}"


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if value is None or not value.strip():
        raise MissingCredentialError(
            f"{name} required in environment",
            suggestion=f"Example: export {name}='...'",
        )
    return value.strip()


def load_settings(env: Mapping[str, str] | None = None) -> AdminSettings:
    """Read and validate settings from the environment.

    Args:
        env: Mapping to read from (default: os.environ)

    Returns:
        Validated AdminSettings

    Raises:
        MissingCredentialError: If a required variable is unset or blank
        ConfigError: If SNADMIN_TIMEOUT is not a positive number
    """
    if env is None:
        env = os.environ

    feed_id = _require(env, FEED_ID_VAR)
    token = _require(env, TOKEN_VAR)
    base_url = _require(env, BASE_URL_VAR)

    timeout = DEFAULT_TIMEOUT
    raw_timeout = env.get(TIMEOUT_VAR)
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigError(f"{TIMEOUT_VAR} must be a number, got '{raw_timeout}'") from e
        if timeout <= 0:
            raise ConfigError(f"{TIMEOUT_VAR} must be positive, got '{raw_timeout}'")

    return AdminSettings(feed_id=feed_id, token=token, base_url=base_url, timeout=timeout)
