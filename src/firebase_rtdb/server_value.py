"""Placeholder values that the Realtime Database resolves on write."""

from typing import Any, ClassVar


class ServerValue:
    """Server-side values to embed in ``set``/``push``/``update`` payloads.

    Example:
        client.update("users/1", {"last_seen": ServerValue.TIMESTAMP})

    """

    TIMESTAMP: ClassVar[dict[str, str]] = {".sv": "timestamp"}

    @staticmethod
    def increment(delta: int | float) -> dict[str, Any]:
        """Return a placeholder that atomically adds ``delta`` to the stored number."""
        return {".sv": {"increment": delta}}


__all__ = ["ServerValue"]
