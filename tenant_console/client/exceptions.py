"""
Errors raised by the platform client.
"""

from typing import Optional

import httpx


class PlatformAPIError(Exception):
    """
    A platform API call failed.

    ``message`` is ready to show to an operator; ``status_code`` is the
    upstream HTTP status when a response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PlatformAuthError(PlatformAPIError):
    """The backend rejected the session token (HTTP 401)."""


class PlatformUnavailableError(PlatformAPIError):
    """The request was sent but no response came back."""


def describe_response_error(response: httpx.Response) -> str:
    """
    Build an operator-facing message for an error response.

    Uses the body's ``message`` or ``error`` field when the body is JSON,
    falling back to the reason phrase.
    """
    detail = None
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        detail = data.get("message") or data.get("error")
        if isinstance(detail, list):
            detail = "; ".join(str(d) for d in detail)

    if not detail:
        detail = response.reason_phrase or "Request failed"

    return f"HTTP {response.status_code}: {detail}"


def error_from_response(response: httpx.Response) -> PlatformAPIError:
    """Map an error response to the matching exception."""
    message = describe_response_error(response)
    if response.status_code == 401:
        return PlatformAuthError(message, status_code=401)
    return PlatformAPIError(message, status_code=response.status_code)
