"""HTTP transport for single GET requests against the OMDb endpoint."""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional, Any

import requests
from aiohttp import ClientSession, ClientTimeout, ClientError

from .error_handler import TransportError, UpstreamStatusError
from .logging_config import get_logger, redact_api_key


DEFAULT_USER_AGENT = 'pyomdb/1.0 (+https://www.omdbapi.com/)'

HTTP_OK = 200


@dataclass(frozen=True)
class HttpResponse:
    """Status and body of a completed request; the connection is already released."""

    status: int
    reason: str
    content: bytes
    url: str

    @property
    def ok(self) -> bool:
        return self.status == HTTP_OK

    def raise_for_status(self) -> None:
        """Raise UpstreamStatusError for anything other than 200."""
        if not self.ok:
            raise UpstreamStatusError(self.status)


class HttpClient:
    """Blocking HTTP client built on a requests session.

    One attempt per call: no retries and no rate limiting. The body is
    only read for 200 responses.
    """

    def __init__(self, timeout: float = 30, user_agent: Optional[str] = None):
        """
        Initialize the HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: Custom User-Agent header
        """
        self.timeout = timeout
        self.logger = get_logger(__name__)

        self.default_headers = {
            'User-Agent': user_agent or DEFAULT_USER_AGENT,
            'Accept': 'application/json',
        }

        self._session: Optional[requests.Session] = None
        self._request_count = 0

    def __enter__(self):
        self._ensure_session()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _ensure_session(self) -> requests.Session:
        """Ensure the HTTP session is created."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.default_headers)
            self.logger.debug("Created new HTTP session")
        return self._session

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None
            self.logger.debug("Closed HTTP session")

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> HttpResponse:
        """
        Make a GET request.

        Args:
            url: URL to request
            params: Query parameters

        Returns:
            HttpResponse with the body read for 200 responses

        Raises:
            TransportError: If no response could be obtained
        """
        session = self._ensure_session()
        self._request_count += 1

        try:
            with session.get(url, params=params, timeout=self.timeout, stream=True) as response:
                self.logger.debug(f"Response: {response.status_code} {response.reason}")
                content = response.content if response.status_code == HTTP_OK else b""
                return HttpResponse(
                    status=response.status_code,
                    reason=response.reason or "",
                    content=content,
                    url=response.url,
                )
        except requests.RequestException as e:
            message = redact_api_key(f"Request to {url} failed: {e}")
            self.logger.warning(message)
            raise TransportError(message) from e

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        return {
            'request_count': self._request_count,
            'session_active': self._session is not None,
            'timeout': self.timeout,
        }


class AsyncHttpClient:
    """Async counterpart of HttpClient built on aiohttp."""

    def __init__(self, timeout: float = 30, user_agent: Optional[str] = None):
        """
        Initialize the HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: Custom User-Agent header
        """
        self.timeout = ClientTimeout(total=timeout)
        self.logger = get_logger(__name__)

        self.default_headers = {
            'User-Agent': user_agent or DEFAULT_USER_AGENT,
            'Accept': 'application/json',
        }

        self._session: Optional[ClientSession] = None
        self._request_count = 0

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> ClientSession:
        """Ensure the HTTP session is created."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(
                timeout=self.timeout,
                headers=self.default_headers
            )
            self.logger.debug("Created new HTTP session")
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self.logger.debug("Closed HTTP session")

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> HttpResponse:
        """
        Make a GET request.

        Args:
            url: URL to request
            params: Query parameters

        Returns:
            HttpResponse with the body read for 200 responses

        Raises:
            TransportError: If no response could be obtained
        """
        session = await self._ensure_session()
        self._request_count += 1

        try:
            async with session.get(url, params=params) as response:
                self.logger.debug(f"Response: {response.status} {response.reason}")
                content = await response.read() if response.status == HTTP_OK else b""
                return HttpResponse(
                    status=response.status,
                    reason=response.reason or "",
                    content=content,
                    url=str(response.url),
                )
        except (ClientError, asyncio.TimeoutError) as e:
            message = redact_api_key(f"Request to {url} failed: {e}")
            self.logger.warning(message)
            raise TransportError(message) from e

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        return {
            'request_count': self._request_count,
            'session_active': self._session is not None and not self._session.closed,
            'timeout': self.timeout.total,
        }
