"""HTTP transport for the catalog API."""

import asyncio
import logging
from typing import Any

import niquests
from urllib3.util import Retry

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.core.config import get_settings
from catalog_admin.core.errors import (
    CancelledFailure,
    TransportFailure,
    failure_from_response,
)

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin async client issuing JSON requests against the catalog API.

    Every request may carry a ``CancellationToken``; cancelling the token
    aborts the underlying request and the call raises ``CancelledFailure``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: Any = None,
        retry_config: Retry | None = None,
    ):
        settings = get_settings()
        self._settings = settings
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = settings.request_timeout
        if session is None:
            if retry_config is None:
                # Creates are not idempotent, so only reads are retried
                retry_config = Retry(
                    total=settings.max_retries,
                    backoff_factor=0.5,
                    status_forcelist=[502, 503, 504],
                    allowed_methods=["HEAD", "GET", "OPTIONS"],
                )
            session = niquests.AsyncSession(retries=retry_config)
            if settings.proxy:
                session.proxies = {"http": settings.proxy, "https": settings.proxy}
        self.session = session

    async def aclose(self) -> None:
        """Properly close the internal HTTP session."""
        if self.session:
            await self.session.close()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        token: CancellationToken | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            CancelledFailure: The token was cancelled before the request settled.
            ValidationFailure: The server answered with a 4xx status.
            TransportFailure: Network error, timeout, or a 5xx status.
        """
        if token is not None and token.cancelled:
            raise CancelledFailure()

        task = asyncio.ensure_future(self._send(method, path, body, files))
        if token is not None:
            token.attach(task)
        try:
            return await task
        except asyncio.CancelledError:
            if token is not None and token.cancelled:
                logger.debug(f"{method} {path} cancelled")
                raise CancelledFailure() from None
            raise

    async def _send(
        self,
        method: str,
        path: str,
        body: Any,
        files: dict[str, Any] | None,
    ) -> Any:
        kwargs: dict[str, Any] = {"timeout": self.timeout}
        if body is not None:
            kwargs["json"] = body
        if files is not None:
            kwargs["files"] = files

        url = self.url_for(path)
        try:
            response = await self.session.request(method, url, **kwargs)
        except niquests.exceptions.RequestException as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise TransportFailure(str(exc)) from exc

        if response.status_code is None or response.status_code >= 400:
            failure = failure_from_response(response)
            logger.warning(f"{method} {url} returned {response.status_code}")
            raise failure

        if not response.content:
            return None
        return response.json()
