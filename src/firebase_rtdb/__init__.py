"""Firebase Realtime Database REST client.

Maps ``set``/``get``/``push``/``update``/``delete`` calls onto HTTPS requests
against a database's REST endpoint, authenticating with OAuth2 service-account
credentials or a legacy database secret.
"""

from .config import DEFAULT_SCOPE, FirebaseConfig
from .database import Client
from .errors import ConfigurationError, FirebaseError, InvalidPathError
from .response import Response
from .server_value import ServerValue

__all__ = [
    "DEFAULT_SCOPE",
    "Client",
    "ConfigurationError",
    "FirebaseConfig",
    "FirebaseError",
    "InvalidPathError",
    "Response",
    "ServerValue",
]
