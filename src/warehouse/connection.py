"""
HTTP session management for the hosted Postgres REST API and object storage.

This module provides a client that owns a pooled requests.Session and
applies the API key headers and timeout to every call.
"""
import os
from contextlib import contextmanager
from typing import Any

import requests


class SupabaseConfigError(ValueError):
    """Raised when the store URL or API key is missing."""


class StoreClient:
    """
    REST client for the remote data store.

    Wraps a requests.Session so TCP connections are reused across batch
    writes. Paths are relative to the configured base URL.
    """

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize store client

        Args:
            url: Base URL (defaults to env var SUPABASE_URL)
            api_key: API key (defaults to SUPABASE_SERVICE_ROLE_KEY, then SUPABASE_ANON_KEY)
            timeout: Request timeout in seconds (defaults to SUPABASE_TIMEOUT or 30)
            session: Pre-built session (mostly for tests)
        """
        self.url = (url or os.getenv("SUPABASE_URL") or "").rstrip("/")
        self.api_key = (
            api_key
            or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
            or os.getenv("SUPABASE_ANON_KEY")
        )

        if not self.url or not self.api_key:
            raise SupabaseConfigError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables "
                "or pass them to the constructor."
            )

        self.timeout = timeout or float(os.getenv("SUPABASE_TIMEOUT", "30"))
        self._session: requests.Session | None = session

    @property
    def auth_headers(self) -> dict[str, str]:
        """Headers identifying the caller to the store"""
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def open(self) -> None:
        """Create the underlying session if needed"""
        if self._session is None:
            self._session = requests.Session()

    def close(self) -> None:
        """Close the underlying session"""
        if self._session is not None:
            self._session.close()
            self._session = None

    @property
    def session(self) -> requests.Session:
        """
        The open session

        Raises:
            RuntimeError: If the client is not open
        """
        if self._session is None:
            raise RuntimeError("Store client is not open. Call open() first.")
        return self._session

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Send a request to the store

        Args:
            method: HTTP method
            path: Path below the base URL, including any query string
            json: JSON body (optional)
            data: Raw body (optional)
            headers: Extra headers merged over the auth headers

        Returns:
            The response, whatever its status code

        Raises:
            requests.RequestException: On connection errors and timeouts
        """
        merged = dict(self.auth_headers)
        if json is not None:
            merged["Content-Type"] = "application/json"
        if headers:
            merged.update(headers)

        return self.session.request(
            method,
            f"{self.url}/{path.lstrip('/')}",
            headers=merged,
            json=json,
            data=data,
            timeout=self.timeout,
        )

    def __enter__(self):
        """Context manager entry"""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()
        return False


def describe_failure(prefix: str, response: requests.Response) -> str:
    """
    Format a non-success response as ``"<prefix>: <status> - <body>"``.
    """
    return f"{prefix}: {response.status_code} - {response.text}"


# Singleton instance for application-wide use
_global_client: StoreClient | None = None


def get_client() -> StoreClient:
    """
    Get the global store client

    Returns:
        StoreClient instance

    Raises:
        RuntimeError: If the client has not been initialized
    """
    global _global_client
    if _global_client is None:
        raise RuntimeError(
            "Store client not initialized. Call initialize_client() first."
        )
    return _global_client


def initialize_client(**kwargs) -> StoreClient:
    """
    Initialize the global store client

    Args:
        **kwargs: Arguments passed to StoreClient constructor

    Returns:
        Opened StoreClient instance
    """
    global _global_client
    if _global_client is not None:
        _global_client.close()

    _global_client = StoreClient(**kwargs)
    _global_client.open()
    return _global_client


def close_client() -> None:
    """Close the global store client"""
    global _global_client
    if _global_client is not None:
        _global_client.close()
        _global_client = None


@contextmanager
def store_client_context(**kwargs):
    """
    Open a store client for the duration of a block.

    Usage:
        with store_client_context() as client:
            client.request("GET", "rest/v1/uploaded_files")

    Yields:
        Opened StoreClient
    """
    client = StoreClient(**kwargs)
    client.open()
    try:
        yield client
    finally:
        client.close()
