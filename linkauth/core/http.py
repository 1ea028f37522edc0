"""HTTP client factory for Identity Toolkit calls.

Provides a pooled async client with timeouts and explicit shutdown.
"""

import httpx

# Default timeout configuration (seconds)
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_POOL_TIMEOUT = 5.0

_identity_toolkit_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str = "",
    max_connections: int = 20,
    max_keepalive_connections: int = 10,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Args:
        base_url: Base URL for all requests (empty string for none)
        max_connections: Maximum number of concurrent connections
        max_keepalive_connections: Maximum idle connections to keep alive
        connect_timeout: Timeout for establishing connection
        read_timeout: Timeout for reading response
        write_timeout: Timeout for sending request
        pool_timeout: Timeout for acquiring connection from pool
        transport: Optional httpx transport (e.g. httpx.MockTransport in tests)

    Returns:
        Configured httpx.AsyncClient instance
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=write_timeout,
            pool=pool_timeout,
        ),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
        transport=transport,
    )


def get_identity_toolkit_client() -> httpx.AsyncClient:
    """Get the shared HTTP client for Identity Toolkit requests.

    Lazily created on first use; close it with close_identity_toolkit_client()
    during application shutdown. Requests are issued with absolute URLs so the
    client carries no base URL.
    """
    global _identity_toolkit_client
    if _identity_toolkit_client is None:
        _identity_toolkit_client = create_http_client(
            max_connections=100,
            max_keepalive_connections=20,
        )
    return _identity_toolkit_client


async def close_identity_toolkit_client() -> None:
    """Close the shared Identity Toolkit client, if any."""
    global _identity_toolkit_client
    if _identity_toolkit_client is not None:
        await _identity_toolkit_client.aclose()
        _identity_toolkit_client = None
