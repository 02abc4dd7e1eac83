"""Access token lifecycle for OAuth2 service-account credentials."""

import logging
import threading
from datetime import UTC, datetime, timedelta
from types import TracebackType
from typing import Self

import requests
from google.auth.credentials import Credentials
from google.auth.transport.requests import Request

logger = logging.getLogger("firebase_rtdb.token_manager")

# Fraction of a token's lifetime after which it is refreshed
EXPIRY_MARGIN = 0.95
# Assumed lifetime when the credential does not report an expiry
DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: datetime) -> datetime:
    # google-auth reports expiry as a naive UTC datetime
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class TokenManager:
    """Keep OAuth2 access tokens fresh, refreshing when they go stale.

    A token issued at ``issued_at`` and valid for ``expires_in`` seconds is
    considered stale once ``issued_at + 0.95 * expires_in`` has passed.
    """

    def __init__(self, credentials: Credentials, *, session: requests.Session | None = None) -> None:
        """Initialize the token manager.

        Args:
            credentials: The google-auth credentials to refresh and apply.
            session: Optional HTTP session used for token requests.

        """
        self._credentials = credentials
        self._session = session or requests.Session()
        self._request = Request(session=self._session)
        self._issued_at: datetime | None = None
        self._expires_in: float | None = None
        self._expires_at: datetime | None = None
        self._lock = threading.Lock()

    def __enter__(self) -> Self:
        """Return the token manager for context manager usage."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close resources when leaving a context manager block."""
        self.close()

    def close(self) -> None:
        """Release the HTTP session used for token requests."""
        self._session.close()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def issued_at(self) -> datetime | None:
        return self._issued_at

    @property
    def expires_in(self) -> float | None:
        """Lifetime in seconds of the current token, as reported at refresh time."""
        return self._expires_in

    @property
    def expires_at(self) -> datetime | None:
        """Moment after which the current token is treated as stale."""
        return self._expires_at

    def is_stale(self, now: datetime | None = None) -> bool:
        """Return True when a token was issued and its refresh deadline has passed."""
        if self._expires_at is None:
            return False
        return (now or _utcnow()) > self._expires_at

    def refresh(self) -> None:
        """Fetch a new access token unconditionally."""
        with self._lock:
            self._refresh_locked()

    def ensure_fresh(self) -> bool:
        """Refresh the token if it is stale.

        Concurrent callers that observe the same stale token refresh it once.

        Returns:
            True if a refresh happened during this call.

        """
        if not self.is_stale():
            return False
        with self._lock:
            if not self.is_stale():
                return False
            self._refresh_locked()
            return True

    def auth_headers(self) -> dict[str, str]:
        """Return the request headers carrying the current bearer token."""
        headers: dict[str, str] = {}
        self._credentials.apply(headers)
        return headers

    def _refresh_locked(self) -> None:
        issued_at = _utcnow()
        try:
            self._credentials.refresh(self._request)
        except Exception:
            logger.exception("Failed to refresh Firebase access token")
            raise

        expiry = self._credentials.expiry
        if expiry is None:
            logger.warning("Credential did not report an expiry, assuming a one hour token lifetime.")
            expires_in = DEFAULT_TOKEN_LIFETIME.total_seconds()
        else:
            expires_in = (_as_utc(expiry) - issued_at).total_seconds()

        self._issued_at = issued_at
        self._expires_in = expires_in
        self._expires_at = issued_at + timedelta(seconds=EXPIRY_MARGIN * expires_in)
        logger.info("Refreshed Firebase access token, next refresh after %s.", self._expires_at.isoformat())


__all__ = ["DEFAULT_TOKEN_LIFETIME", "EXPIRY_MARGIN", "TokenManager"]
