# =============================================================================
# datagov/failures.py - Turning failed requests into readable text
# =============================================================================
#
# The calling LLM only ever sees text, so every failure is summarized as a
# short multi-line message.  The summary looks like this:
#
#     Data.gov API error: Client error '404 Not Found' for url '...'
#     Status: 404
#     Message: Not found
#
# The lines after the first depend on how far the request got:
#   - A response arrived        → "Status: <code>" plus any detail the
#                                 server gave (CKAN error.message, a flat
#                                 error value, or a raw text body).
#   - No response at all        → "No response received from the server."
#   - Not an HTTP error at all  → a single generic line.
# =============================================================================

import json
from typing import Any, Optional

import httpx

API_ERROR_PREFIX = "Data.gov API error"
NO_RESPONSE_NOTE = "No response received from the server."


def _transport_message(exc: Exception) -> str:
    # httpx appends a "For more information check: <mdn link>" line.
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__


def _server_detail(response: httpx.Response) -> Optional[str]:
    """Pull the most specific error detail out of a failed response."""
    try:
        data: Any = response.json()
    except ValueError:
        text = response.text
        return f"Data: {text}" if text else None

    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"Message: {error['message']}"
        if error:
            rendered = error if isinstance(error, str) else json.dumps(error, ensure_ascii=False)
            return f"Message: {rendered}"
    elif isinstance(data, str) and data:
        return f"Data: {data}"
    return None


def _request_was_sent(exc: httpx.RequestError) -> bool:
    try:
        exc.request
    except RuntimeError:
        return False
    return True


def describe_failure(exc: BaseException) -> str:
    """Summarize a failed call as the text of an error envelope.

    Args:
        exc: Whatever the call raised.

    Returns:
        A human-readable, possibly multi-line message.
    """
    if not isinstance(exc, httpx.HTTPError):
        return f"An unexpected error occurred: {exc}"

    lines = [f"{API_ERROR_PREFIX}: {_transport_message(exc)}"]
    if isinstance(exc, httpx.HTTPStatusError):
        lines.append(f"Status: {exc.response.status_code}")
        detail = _server_detail(exc.response)
        if detail:
            lines.append(detail)
    elif isinstance(exc, httpx.RequestError) and _request_was_sent(exc):
        lines.append(NO_RESPONSE_NOTE)
    return "\n".join(lines)
