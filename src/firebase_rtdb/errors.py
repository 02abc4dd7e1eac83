"""Exceptions raised by the Firebase Realtime Database client.

Only local validation failures are represented here. Transport failures from
``httpx`` and credential failures from ``google-auth`` propagate unchanged.
"""


class FirebaseError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(FirebaseError, ValueError):
    """The client configuration (for example ``base_uri``) is invalid."""


class InvalidPathError(FirebaseError, ValueError):
    """A database path was not relative."""

    def __init__(self, path: object) -> None:
        """Store the offending path and build the message."""
        self.path = path
        super().__init__(f"Invalid path: {path}. Path must be relative")


__all__ = ["ConfigurationError", "FirebaseError", "InvalidPathError"]
