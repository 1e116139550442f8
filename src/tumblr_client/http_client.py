"""Transport layer: the protocol the client talks to, and its aiohttp implementation."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import aiohttp
from aiohttp import ClientTimeout

from .constants import DEFAULT_TIMEOUT, USER_AGENT
from .exceptions import InvalidOperationError, TransportError
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def _without_query(url: str) -> str:
    return url.split("?", 1)[0]


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and raw body of one HTTP exchange."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)
    reason: Optional[str] = None

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding)

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


@runtime_checkable
class Transport(Protocol):
    """
    Anything able to send one HTTP request.

    Implementations must raise ``TransportError`` when no HTTP response is
    obtained and return every response, whatever its status, otherwise.
    """

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> HttpResponse:
        ...

    async def close(self) -> None:
        ...


class AiohttpTransport:
    """Transport backed by an ``aiohttp.ClientSession``.

    Features:
    - Lazily created session with a total ``ClientTimeout``
    - Custom User-Agent
    - Optional token bucket throttling
    - Proper resource management via context manager

    Example:
        ```python
        async with AiohttpTransport(timeout=10.0) as transport:
            response = await transport.send("GET", url, headers={})
        ```
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
        rate_limiter: Optional[RateLimiter] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """Initialize the transport.

        Args:
            timeout: Total request timeout in seconds
            user_agent: User-Agent header value
            rate_limiter: Optional limiter awaited before every request
            session: Existing aiohttp session to use; it is not closed by
                this transport
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._rate_limiter = rate_limiter

        self._session = session
        self._owns_session = session is None
        self._closed = False

        logger.debug(
            f"Initialized AiohttpTransport: timeout={timeout}s, "
            f"rate_limit={'enabled' if rate_limiter else 'disabled'}"
        )

    @property
    def closed(self) -> bool:
        return self._closed

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._closed:
            raise InvalidOperationError("Transport has been closed")

        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={'User-Agent': self.user_agent},
            )
            self._owns_session = True
            logger.debug("Created new aiohttp session")
        return self._session

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> HttpResponse:
        """Send a request and read the whole response body.

        Raises:
            TransportError: On connection failures and timeouts
        """
        session = await self._ensure_session()

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        logger.debug(f"{method} {_without_query(url)}")

        try:
            async with session.request(method, url, headers=dict(headers), data=body) as response:
                content = await response.read()
                result = HttpResponse(
                    status=response.status,
                    body=content,
                    headers=dict(response.headers),
                    reason=response.reason,
                )
        except asyncio.TimeoutError:
            raise TransportError("Request timed out", details=f"after {self.timeout}s", url=url)
        except aiohttp.ClientError as e:
            raise TransportError("Request failed", details=str(e), url=url)

        logger.debug(f"{method} {_without_query(url)} -> {result.status}")
        return result

    async def close(self) -> None:
        """Close the transport and release the session it owns."""
        if self._closed:
            return

        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed aiohttp session")

        self._closed = True

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    def __repr__(self) -> str:
        return f"AiohttpTransport(timeout={self.timeout}, closed={self._closed})"
