"""Configuration management for the Firebase Realtime Database client.

This module defines the ``FirebaseConfig`` model and helpers to load it from
environment variables. Validation failures surface as ``ConfigurationError``.
"""

import os
from typing import Any, Self

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

DEFAULT_SCOPE: tuple[str, ...] = (
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/datastore",
    "https://www.googleapis.com/auth/devstorage.read_write",
    "https://www.googleapis.com/auth/firebase",
    "https://www.googleapis.com/auth/identitytoolkit",
    "https://www.googleapis.com/auth/userinfo.email",
)

_TRUTHY = {"1", "true", "yes", "on"}


def _normalize_base_uri(value: str) -> str:
    """Validate an https URI and make sure it ends with a trailing slash."""
    candidate = value.strip()
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        msg = "base_uri must be a valid https uri"
        raise ValueError(msg) from exc
    if url.scheme != "https" or not url.host:
        msg = "base_uri must be a valid https uri"
        raise ValueError(msg)
    if not candidate.endswith("/"):
        candidate += "/"
    return candidate


class FirebaseConfig(BaseModel):
    """Configuration values required to talk to a Realtime Database instance."""

    model_config = ConfigDict(frozen=True)

    base_uri: str
    auth: str | None = None
    env_vars: bool = False
    scope: tuple[str, ...] = DEFAULT_SCOPE
    verify_ssl: bool = True
    timeout_ms: int = Field(default=10000, ge=1000, le=600000)

    @field_validator("base_uri", mode="before")
    @classmethod
    def _validate_base_uri(cls, value: object) -> str:
        if not isinstance(value, str):
            msg = "base_uri must be a valid https uri"
            raise ValueError(msg)  # noqa: TRY004
        return _normalize_base_uri(value)

    @field_validator("scope", mode="before")
    @classmethod
    def _coerce_scope(cls, value: object) -> object:
        if value is None:
            return DEFAULT_SCOPE
        if isinstance(value, str):
            return tuple(item.strip() for item in value.split(",") if item.strip())
        return value

    @classmethod
    def build(cls, **values: Any) -> Self:
        """Validate ``values`` and return a config, raising ``ConfigurationError`` on failure."""
        try:
            return cls(**values)
        except ValidationError as exc:
            messages = "; ".join(err["msg"] for err in exc.errors())
            msg = f"Invalid Firebase configuration: {messages}"
            raise ConfigurationError(msg) from exc

    @classmethod
    def from_env(cls) -> Self:
        """Build a configuration object from environment variables.

        A local ``.env`` file is loaded first for development convenience.
        """
        load_dotenv()
        base_uri = os.getenv("FIREBASE_BASE_URI")
        if not base_uri:
            msg = "FIREBASE_BASE_URI is required to reach the Realtime Database."
            raise ConfigurationError(msg)
        raw_config: dict[str, Any] = {
            "base_uri": base_uri,
            "auth": os.getenv("FIREBASE_AUTH"),
            "env_vars": os.getenv("FIREBASE_ENV_VARS", "").strip().lower() in _TRUTHY,
            "scope": os.getenv("FIREBASE_SCOPE"),
            "verify_ssl": os.getenv("FIREBASE_VERIFY_SSL"),
            "timeout_ms": os.getenv("FIREBASE_TIMEOUT_MS"),
        }
        return cls.build(**{key: value for key, value in raw_config.items() if value is not None})


__all__ = ["DEFAULT_SCOPE", "FirebaseConfig"]
