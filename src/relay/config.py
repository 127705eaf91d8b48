"""Relay configuration with environment variable loading.

Pydantic-based configuration for the upstream backend the relay forwards to.
Built once at startup and handed to the app factory.
"""

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class RelayConfig(BaseModel):
    """Configuration for the chat relay.

    Attributes:
        backend_url: Base URL of the upstream assistant (None if unset).
        upstream_timeout: Seconds to wait on the upstream (None waits indefinitely).
    """

    backend_url: str | None = Field(
        default_factory=lambda: os.getenv("BACKEND_URL"),
        validate_default=True,
        description="Base URL of the upstream debugging assistant",
    )
    upstream_timeout: float | None = Field(
        default_factory=lambda: os.getenv("UPSTREAM_TIMEOUT"),
        validate_default=True,
        description="Upstream request timeout in seconds (None for no timeout)",
    )

    @field_validator("backend_url")
    @classmethod
    def empty_url_is_unset(cls, v: str | None) -> str | None:
        """Treat a blank backend URL the same as a missing one."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("upstream_timeout", mode="before")
    @classmethod
    def blank_timeout_is_unset(cls, v: Any) -> Any:
        # Raw env strings are left for pydantic's float parsing
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("upstream_timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be a positive number of seconds")
        return v


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        pydantic.ValidationError: If UPSTREAM_TIMEOUT is set to a non-positive
            or non-numeric value.
    """
    return RelayConfig()
