"""HTTP transport setup for the Realtime Database REST API.

Provides the factory that builds the ``httpx.Client`` shared by every request a
``firebase_rtdb.Client`` issues.
"""

import httpx

from ..config import FirebaseConfig

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def create_http_client(
    config: FirebaseConfig,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create an HTTP client bound to the database base URI.

    Args:
        config: The configuration containing base URI, TLS verification, and timeouts.
        transport: Optional transport override, e.g. ``httpx.MockTransport``.

    Returns:
        Configured ``httpx.Client`` that follows redirects.

    """
    timeout = httpx.Timeout(config.timeout_ms / 1000)
    return httpx.Client(
        base_url=config.base_uri,
        headers=DEFAULT_HEADERS,
        timeout=timeout,
        verify=config.verify_ssl,
        follow_redirects=True,
        transport=transport,
    )


__all__ = ["DEFAULT_HEADERS", "create_http_client"]
