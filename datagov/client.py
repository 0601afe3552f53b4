# =============================================================================
# datagov/client.py - Outbound HTTP to the CKAN action API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps one httpx.AsyncClient and exposes the only two kinds of request
#   the server ever makes:
#     - get_action(): GET {base_url}/action/<action>?<params> → decoded JSON
#     - get_raw():    GET <absolute url>                     → raw response
#
#   Both raise httpx errors on failure (non-2xx status or transport
#   problems).  Turning those into user-facing text is the job of
#   datagov/failures.py; this module only talks HTTP.
#
# WHAT IT DOES NOT DO:
#   No retries, no caching, no pagination.  One call = one request.
#
# TESTING:
#   Pass transport=httpx.MockTransport(handler) to serve canned responses
#   without touching the network.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

import httpx

from datagov.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class DataGovClient:
    """A thin async client for a CKAN v3 API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: Optional[float] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _http(self) -> httpx.AsyncClient:
        # Built on first use so constructing a client never opens sockets.
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
                transport=self._transport,
            )
        return self._client

    async def get_action(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        """Call a CKAN action and return the decoded body as-is.

        A 2xx body that is not JSON comes back as its raw text.

        Raises:
            httpx.HTTPStatusError: The server answered with a non-2xx status.
            httpx.RequestError: The request never got a response.
        """
        logger.debug("GET %s/action/%s params=%s", self.base_url, action, dict(params or {}))
        response = await self._http().get(f"/action/{action}", params=dict(params or {}))
        response.raise_for_status()
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get_raw(self, url: str) -> httpx.Response:
        """Fetch an absolute URL and return the response with its body read.

        The URL is never resolved against ``base_url``.

        Raises:
            httpx.UnsupportedProtocol: ``url`` is not an absolute http(s) URL.
        """
        target = httpx.URL(url)
        if target.scheme not in ("http", "https") or not target.host:
            raise httpx.UnsupportedProtocol(f"Request URL must be an absolute http(s) URL: {url}")
        logger.debug("GET %s (raw)", url)
        response = await self._http().get(target)
        response.raise_for_status()
        return response

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DataGovClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
