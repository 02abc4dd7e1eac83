"""Realtime Database client mapping CRUD calls onto REST requests.

Each call validates the path, refreshes the OAuth2 token when it is stale,
and sends ``<path>.json`` through the shared ``httpx.Client``. Responses are
returned as ``Response`` objects whatever their status code.
"""

import json
import logging
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Literal, Self

import httpx

from .client.auth import AuthMode, LegacySecret, OAuthCredentials, resolve_auth
from .client.http_client import create_http_client
from .client.token_manager import TokenManager
from .config import FirebaseConfig
from .errors import InvalidPathError
from .response import Response

logger = logging.getLogger("firebase_rtdb.database")

type Verb = Literal["put", "get", "post", "delete", "patch"]
type Query = Mapping[str, Any]

VERBS: frozenset[str] = frozenset({"put", "get", "post", "delete", "patch"})


def validate_path(path: object) -> str:
    """Return ``path`` if it is a relative database path, else raise ``InvalidPathError``."""
    if not isinstance(path, str) or path.startswith("/"):
        raise InvalidPathError(path)
    return path


class Client:
    """Firebase Realtime Database REST client.

    Example:
        with Client("https://my-db.firebaseio.com", auth=service_account_json) as db:
            db.set("users/1", {"name": "Oscar"})
            db.get("users/1").body

    """

    def __init__(
        self,
        base_uri: str,
        auth: str | None = None,
        *,
        env_vars: bool = False,
        scope: Sequence[str] | None = None,
        timeout_ms: int = 10000,
        verify_ssl: bool = True,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Validate settings, build the transport and resolve the auth mode.

        Args:
            base_uri: The https URI of the database.
            auth: A JSON service-account key, or a legacy database secret.
            env_vars: Build OAuth2 credentials from the environment when ``auth`` is not a key.
            scope: OAuth2 scopes; defaults to ``DEFAULT_SCOPE``.
            timeout_ms: Transport timeout in milliseconds.
            verify_ssl: Whether to verify TLS certificates.
            http_client: Optional preconfigured transport; the caller keeps ownership and closes it.

        Raises:
            ConfigurationError: If ``base_uri`` or another setting is invalid.

        """
        config = FirebaseConfig.build(
            base_uri=base_uri,
            auth=auth,
            env_vars=env_vars,
            scope=scope,
            timeout_ms=timeout_ms,
            verify_ssl=verify_ssl,
        )
        self._setup(config, http_client)

    @classmethod
    def from_config(cls, config: FirebaseConfig, *, http_client: httpx.Client | None = None) -> Self:
        """Build a client from an already validated configuration."""
        client = cls.__new__(cls)
        client._setup(config, http_client)
        return client

    @classmethod
    def from_env(cls) -> Self:
        """Build a client from ``FIREBASE_*`` environment variables."""
        return cls.from_config(FirebaseConfig.from_env())

    def _setup(self, config: FirebaseConfig, http_client: httpx.Client | None) -> None:
        self._config = config
        self._owns_http = http_client is None
        self._http = http_client or create_http_client(config)
        self._token_manager: TokenManager | None = None
        try:
            self._auth: AuthMode = resolve_auth(config)
            if isinstance(self._auth, OAuthCredentials):
                self._token_manager = TokenManager(self._auth.credentials)
                self._token_manager.refresh()
        except BaseException:
            self.close()
            raise
        logger.debug("Created client for %s using %s.", config.base_uri, type(self._auth).__name__)

    def __enter__(self) -> Self:
        """Return the client for context manager usage."""
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
        """Close the token session, and the transport unless the caller supplied it."""
        if self._owns_http:
            self._http.close()
        if self._token_manager is not None:
            self._token_manager.close()

    @property
    def base_uri(self) -> str:
        return self._config.base_uri

    @property
    def auth(self) -> AuthMode:
        """The authentication mode chosen at construction."""
        return self._auth

    @property
    def token_manager(self) -> TokenManager | None:
        """The token manager, present only in OAuth2 mode."""
        return self._token_manager

    def set(self, path: str, data: Any, query: Query | None = None) -> Response:
        """Write ``data`` at ``path``, replacing what is there."""
        return self._process("put", path, data, query)

    def get(self, path: str, query: Query | None = None) -> Response:
        """Read the data at ``path``; the body is None when nothing is stored."""
        return self._process("get", path, None, query)

    def push(self, path: str, data: Any, query: Query | None = None) -> Response:
        """Append ``data`` as a new child of ``path``."""
        return self._process("post", path, data, query)

    def delete(self, path: str, query: Query | None = None) -> Response:
        """Remove the data at ``path``."""
        return self._process("delete", path, None, query)

    def update(self, path: str, data: Any, query: Query | None = None) -> Response:
        """Merge ``data`` into ``path`` without deleting omitted children."""
        return self._process("patch", path, data, query)

    def _process(self, verb: Verb, path: str, data: Any = None, query: Query | None = None) -> Response:
        path = validate_path(path)
        if verb not in VERBS:
            msg = f"Unsupported verb: {verb}"
            raise ValueError(msg)
        # NaN and Infinity are not JSON; reject them before any token or network work
        content = json.dumps(data, allow_nan=False)

        headers: dict[str, str] = {}
        if self._token_manager is not None:
            self._token_manager.ensure_fresh()
            headers.update(self._token_manager.auth_headers())

        logger.debug("%s %s.json", verb.upper(), path)
        raw = self._http.request(
            verb.upper(),
            f"{path}.json",
            content=content,
            params=self._build_query(query),
            headers=headers,
            follow_redirects=True,
        )
        return Response(raw)

    def _build_query(self, query: Query | None) -> dict[str, Any]:
        params = dict(query or {})
        if isinstance(self._auth, LegacySecret):
            # The secret overrides any caller-supplied auth parameter
            params["auth"] = self._auth.secret
        return params


__all__ = ["VERBS", "Client", "validate_path"]
