"""Client package for the Firebase Realtime Database library.

Provides the transport setup and authentication pieces used by ``Client``:
- ``http_client``: Factory for the configured ``httpx.Client``
- ``auth``: Authentication modes and credential construction
- ``token_manager``: Access token lifecycle management with automatic refresh
"""
