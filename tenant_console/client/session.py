"""
Panel session holding the operator's bearer token.
"""

import threading
from typing import Optional


class PanelSession:
    """
    Explicit holder of the console session token.

    Passed to the platform client instead of living in global storage.
    Analytics code never touches it.
    """

    def __init__(self, token: Optional[str] = None):
        self._lock = threading.Lock()
        self._token = token

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token

    def clear(self) -> None:
        with self._lock:
            self._token = None

    @property
    def is_authenticated(self) -> bool:
        return self.get() is not None
