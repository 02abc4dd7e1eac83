"""Uniform wrapper around a single Realtime Database HTTP exchange."""

import json
from typing import Any

import httpx


def try_parse_json(text: str) -> tuple[bool, Any]:
    """Decode ``text`` as JSON without raising.

    Returns:
        A ``(parsed, value)`` pair. ``parsed`` is False when ``text`` is not
        valid JSON, in which case ``value`` is None.

    """
    try:
        return True, json.loads(text)
    except (TypeError, ValueError):
        return False, None


class Response:
    """Decoded view of an ``httpx.Response``.

    ``body`` holds the JSON-decoded payload, or the raw text when the server
    did not answer with JSON. ``raw`` gives access to the transport response.
    """

    __slots__ = ("_body", "_raw")

    def __init__(self, raw: httpx.Response) -> None:
        """Wrap ``raw`` and decode its body once."""
        self._raw = raw
        parsed, value = try_parse_json(raw.text)
        self._body = value if parsed else raw.text

    @property
    def raw(self) -> httpx.Response:
        """The underlying transport response."""
        return self._raw

    @property
    def body(self) -> Any:
        """The decoded JSON body, or the raw string if it is not JSON."""
        return self._body

    @property
    def raw_body(self) -> str:
        """The undecoded response text."""
        return self._raw.text

    @property
    def status_code(self) -> int:
        return self._raw.status_code

    @property
    def success(self) -> bool:
        """Whether the server answered with a 2xx status."""
        return self._raw.is_success

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] success={self.success}>"


__all__ = ["Response", "try_parse_json"]
