"""HTTP transport used to talk to lights.

The driver only depends on the ``HttpClient`` protocol so tests and other
hosts can inject their own transport.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from utils.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class BasicAuth:
    """Basic auth credentials; an empty username means no auth header."""

    username: str = ""
    password: str = ""

    def __bool__(self) -> bool:
        return bool(self.username)


@dataclass(frozen=True)
class HttpResponse:
    """Status code and decoded body of a device response."""

    status_code: int
    body: str


class HttpClient(Protocol):
    """Transport capability injected into the command dispatcher."""

    async def send(
        self,
        url: str,
        body: str | None,
        method: str,
        auth: BasicAuth,
    ) -> HttpResponse:
        """Send a request.

        Raises TransportError on any network failure or error status and
        ConfigurationError when the url cannot be parsed.
        """
        ...

    async def close(self) -> None:
        ...


class HttpxClient:
    """HttpClient backed by httpx.

    Certificate verification is disabled since these devices commonly serve
    self-signed certificates.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.timeout = timeout
        self._client = client

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client exists."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, verify=False)
        return self._client

    async def send(
        self,
        url: str,
        body: str | None,
        method: str,
        auth: BasicAuth,
    ) -> HttpResponse:
        client = await self._ensure_client()
        request_auth = httpx.BasicAuth(auth.username, auth.password) if auth else None

        try:
            response = await client.request(
                method,
                url,
                content=body or None,
                auth=request_auth,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{method} {url} returned {e.response.status_code}")
            raise TransportError(
                f"HTTP {e.response.status_code} from {url}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(f"{method} {url} failed: {e!r}")
            raise TransportError(f"Request to {url} failed: {e!r}") from e
        except httpx.InvalidURL as e:
            logger.error(f"{method} {url} is not a valid url: {e}")
            raise ConfigurationError(f"Invalid url {url!r}: {e}") from e

        return HttpResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
