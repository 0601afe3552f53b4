# =============================================================================
# datagov/dispatcher.py - Route a tool call to one validated CKAN request
# =============================================================================
#
# THE FLOW (one call, no shared state):
#   1. Look up the operation by name      → MethodNotFoundError if unknown
#   2. Validate the argument bag          → InvalidParamsError if malformed
#   3. GET {base_url}/action/<action>     → the only I/O of the call
#   4. Wrap the outcome in an envelope:
#        success → pretty-printed JSON body, is_error=False
#        failure → summary text from failures.py, is_error=True
#
#   Steps 1 and 2 raise.  Step 4 never does: for the four query tools a
#   remote failure is an ordinary return value.
#
# RESOURCE READS:
#   read_resource() follows a different rule.  It accepts
#   datagov://resource/<percent-encoded url>, fetches that URL, and returns
#   the body as a base64 data: URI.  When the fetch fails, the failure is
#   summarized like above and then RAISED as ResourceFetchError.  The tools
#   swallow failures; the resource reader raises them.
# =============================================================================

import base64
import json
import logging
import re
from typing import Any, Mapping, Optional
from urllib.parse import unquote

import httpx

from datagov import operations
from datagov.client import DataGovClient
from datagov.config import Settings
from datagov.errors import InvalidRequestError, ResourceFetchError
from datagov.failures import describe_failure
from datagov.models import OperationDescriptor, ResourceContents, ResourceTemplate, ResponseEnvelope

logger = logging.getLogger(__name__)

RESOURCE_URI_TEMPLATE = "datagov://resource/{url}"
_RESOURCE_URI = re.compile(r"^datagov://resource/(.+)$")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _decode_component(text: str) -> str:
    """Percent-decode ``text``, rejecting broken escapes and invalid UTF-8."""
    if _BAD_ESCAPE.search(text):
        raise ValueError(f"malformed percent-escape in {text!r}")
    return unquote(text, errors="strict")


class Dispatcher:
    """Maps named operations onto CKAN action calls.

    Args:
        client: The HTTP client to use.  When omitted, one is built from
            ``settings`` and closed by :meth:`aclose`.
        settings: Runtime settings; defaults reproduce catalog.data.gov.
    """

    def __init__(self, client: Optional[DataGovClient] = None, settings: Optional[Settings] = None) -> None:
        settings = settings or Settings()
        self._owns_client = client is None
        self.client = client or DataGovClient(
            settings.base_url,
            timeout=settings.http_timeout,
            user_agent=settings.user_agent,
        )

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------
    def list_operations(self) -> list[OperationDescriptor]:
        return operations.list_operations()

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> ResponseEnvelope:
        """Run one query operation.

        Args:
            name: Tool name, e.g. ``"package_show"``.
            arguments: The caller's argument bag.

        Returns:
            A single-block envelope; ``is_error`` is set on remote failure.

        Raises:
            MethodNotFoundError: ``name`` is not a known operation.
            InvalidParamsError: ``arguments`` does not fit the schema.
        """
        op = operations.get_operation(name)
        args = operations.validate_arguments(op, arguments)

        try:
            body = await self.client.get_action(op.action, args.to_params())
        except httpx.HTTPError as exc:
            summary = describe_failure(exc)
            logger.warning("%s failed: %s", op.name, summary.replace("\n", " | "))
            return ResponseEnvelope.failure(summary)
        except Exception as exc:
            logger.exception("%s raised an unexpected error", op.name)
            return ResponseEnvelope.failure(describe_failure(exc))

        return ResponseEnvelope.success(json.dumps(body, indent=2, ensure_ascii=False))

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------
    def list_resource_templates(self) -> list[ResourceTemplate]:
        return [
            ResourceTemplate(
                uri_template=RESOURCE_URI_TEMPLATE,
                name="Data.gov Resource",
                description="Access a Data.gov resource by its URL",
            )
        ]

    async def read_resource(self, uri: str) -> ResourceContents:
        """Fetch the URL encoded in a ``datagov://resource/...`` URI.

        Raises:
            InvalidRequestError: ``uri`` does not match the template, or its
                encoded URL has a broken escape.
            ResourceFetchError: The fetch failed; the message is the summary.
        """
        match = _RESOURCE_URI.match(uri)
        if not match:
            raise InvalidRequestError(f"Invalid URI format: {uri}")
        try:
            url = _decode_component(match.group(1))
        except ValueError as exc:
            raise InvalidRequestError(f"Invalid URI format: {uri}") from exc
        return await self._fetch(uri, url)

    async def _fetch(self, uri: str, url: str) -> ResourceContents:
        try:
            response = await self.client.get_raw(url)
        except Exception as exc:
            summary = describe_failure(exc)
            logger.warning("resource read failed for %s: %s", url, summary.replace("\n", " | "))
            raise ResourceFetchError(summary) from exc

        content_type = response.headers.get("content-type", "")
        payload = base64.b64encode(response.content).decode("ascii")
        return ResourceContents(
            uri=uri,
            text=f"data:{content_type};base64,{payload}",
            mime_type=content_type or None,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
