"""Authentication modes supported by the Realtime Database client.

The mode is chosen once, when the client is built:

- ``OAuthCredentials``: service-account credentials, from a JSON key or from
  the environment. Requests carry an ``Authorization: Bearer`` header.
- ``LegacySecret``: a database secret sent as the ``auth`` query parameter.
- ``NoAuth``: unauthenticated requests.
"""

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import google.auth
from google.auth.credentials import Credentials
from google.oauth2 import service_account

from ..config import FirebaseConfig
from ..response import try_parse_json

logger = logging.getLogger("firebase_rtdb.auth")

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True, slots=True)
class NoAuth:
    """Requests are sent without credentials."""


@dataclass(frozen=True, slots=True)
class LegacySecret:
    """Deprecated database secret appended to every request."""

    secret: str

    def __repr__(self) -> str:
        return "LegacySecret(secret='***')"


@dataclass(frozen=True, slots=True)
class OAuthCredentials:
    """Google OAuth2 credentials minting short-lived access tokens."""

    credentials: Credentials


type AuthMode = NoAuth | LegacySecret | OAuthCredentials


def credentials_from_json_key(info: dict[str, Any], scope: Sequence[str]) -> Credentials:
    """Build scoped credentials from a decoded service-account key."""
    return service_account.Credentials.from_service_account_info(info, scopes=list(scope))


def credentials_from_environment(scope: Sequence[str]) -> Credentials:
    """Build scoped credentials from ambient environment configuration.

    ``GOOGLE_CLIENT_EMAIL`` and ``GOOGLE_PRIVATE_KEY`` describe a service
    account directly. Without them, Application Default Credentials are used.
    """
    client_email = os.getenv("GOOGLE_CLIENT_EMAIL")
    private_key = os.getenv("GOOGLE_PRIVATE_KEY")
    if client_email and private_key:
        info: dict[str, Any] = {
            "type": "service_account",
            "client_email": client_email,
            # Keys copied into env files usually carry escaped newlines
            "private_key": private_key.replace("\\n", "\n"),
            "token_uri": GOOGLE_TOKEN_URI,
        }
        optional = {
            "client_id": os.getenv("GOOGLE_CLIENT_ID"),
            "private_key_id": os.getenv("GOOGLE_PRIVATE_KEY_ID"),
            "project_id": os.getenv("GOOGLE_PROJECT_ID"),
        }
        info.update({key: value for key, value in optional.items() if value})
        logger.debug("Using service account %s from environment variables.", client_email)
        return credentials_from_json_key(info, scope)

    logger.debug("Using Application Default Credentials.")
    credentials, _project = google.auth.default(scopes=list(scope))
    return credentials


def resolve_auth(config: FirebaseConfig) -> AuthMode:
    """Select the authentication mode for ``config``.

    Priority: a JSON object (service-account key) in ``auth``, then environment
    credentials when ``env_vars`` is set, then ``auth`` as a legacy secret.
    """
    if config.auth:
        parsed, info = try_parse_json(config.auth)
        if parsed and isinstance(info, dict):
            return OAuthCredentials(credentials_from_json_key(info, config.scope))
    if config.env_vars:
        return OAuthCredentials(credentials_from_environment(config.scope))
    if config.auth:
        return LegacySecret(config.auth)
    return NoAuth()


__all__ = [
    "AuthMode",
    "LegacySecret",
    "NoAuth",
    "OAuthCredentials",
    "credentials_from_environment",
    "credentials_from_json_key",
    "resolve_auth",
]
