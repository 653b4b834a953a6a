import asyncio
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import httpx

from app.platform.config import settings
from app.platform.logger import get_logger

logger = get_logger("site_fetcher")


class SiteFetchError(Exception):
    """The page could not be retrieved at all (DNS, timeout, TLS, refused, ...)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class FetchedPage:
    status_code: int
    response_time_ms: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class PageFetcher:
    """
    Issues the single GET a site check needs.
    Any HTTP status is a result; only transport-level failures raise.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = settings.FETCH_TIMEOUT_SECONDS if timeout is None else timeout
        self.max_redirects = settings.FETCH_MAX_REDIRECTS if max_redirects is None else max_redirects
        self.user_agent = user_agent or settings.FETCH_USER_AGENT
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            headers=headers,
            transport=self.transport,
        )

    async def _get(self, url: str):
        async with self._client() as client:
            start = time.perf_counter()
            response = await client.get(url)
            body = response.text
            elapsed_ms = int((time.perf_counter() - start) * 1000)
        return response, body, elapsed_ms

    async def fetch(self, url: str) -> FetchedPage:
        try:
            # the client timeout is per phase; this bounds the whole request
            response, body, elapsed_ms = await asyncio.wait_for(self._get(url), self.timeout)
        except asyncio.TimeoutError as e:
            message = f"timeout of {int(self.timeout * 1000)}ms exceeded"
            logger.warning(f"Fetch failed for {url}: {message}")
            raise SiteFetchError(message) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Fetch failed for {url}: {e!r}")
            raise SiteFetchError(_error_message(e)) from e

        headers = {k.lower(): v for k, v in response.headers.items()}
        logger.info(f"Fetched {url} -> {response.status_code} in {elapsed_ms}ms")
        return FetchedPage(
            status_code=response.status_code,
            response_time_ms=elapsed_ms,
            body=body,
            headers=headers,
        )
