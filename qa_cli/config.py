"""Configuration for the report API client."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from yarl import URL

ENV_VARS: Mapping[str, str] = {
    "QA_API_URL": "api_base_url",
    "QA_POLL_INTERVAL": "poll_interval",
    "QA_MAX_POLL_ATTEMPTS": "max_poll_attempts",
    "QA_REQUEST_TIMEOUT": "request_timeout",
}


class ClientConfig(BaseModel):
    """Configuration for talking to the report API.

    Polling settings are fixed for the duration of one run.
    """

    api_base_url: str = "http://localhost:3000/"
    poll_interval: float = Field(default=2.0, ge=0)
    max_poll_attempts: int = Field(default=10, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)
    color: bool = True

    @field_validator("api_base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        url = URL(value)
        if not url.absolute or url.scheme not in ("http", "https"):
            raise ValueError(f"must be an absolute http(s) URL, got {value!r}")
        return value if value.endswith("/") else f"{value}/"

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> "ClientConfig":
        """Build configuration from QA_* environment variables.

        Keyword overrides (typically CLI flags) win over the environment;
        overrides set to None are ignored. NO_COLOR disables colors.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            field: env[var] for var, field in ENV_VARS.items() if env.get(var)
        }
        if "NO_COLOR" in env:
            values["color"] = False
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
