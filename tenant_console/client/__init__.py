"""
HTTP client for the platform backend.
"""

from tenant_console.client.exceptions import (
    PlatformAPIError,
    PlatformAuthError,
    PlatformUnavailableError,
)
from tenant_console.client.platform import PlatformClient
from tenant_console.client.session import PanelSession

__all__ = [
    "PlatformAPIError",
    "PlatformAuthError",
    "PlatformUnavailableError",
    "PlatformClient",
    "PanelSession",
]
