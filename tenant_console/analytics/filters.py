"""
Filtering and pagination of log listings.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from tenant_console.models.log_record import LogRecord


T = TypeVar("T")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class StatusClass(str, Enum):
    """HTTP status families selectable in the log views."""
    ALL = "all"
    SUCCESS = "2xx"
    CLIENT_ERROR = "4xx"
    SERVER_ERROR = "5xx"


class LogFilter(BaseModel):
    """Criteria applied to a log listing."""

    tenant_id: Optional[str] = Field(default=None, description="Only this tenant")
    errors_only: bool = Field(default=False, description="Only errors and denials")
    status_class: StatusClass = StatusClass.ALL
    search: Optional[str] = Field(default=None, description="Substring of type, path or message")

    def matches(self, record: LogRecord) -> bool:
        """Check a single record against every criterion."""
        if self.errors_only and not self._is_problem(record):
            return False

        if self.status_class != StatusClass.ALL:
            code = record.status_code or 0
            if self.status_class == StatusClass.SUCCESS and not 200 <= code < 300:
                return False
            if self.status_class == StatusClass.CLIENT_ERROR and not 400 <= code < 500:
                return False
            if self.status_class == StatusClass.SERVER_ERROR and code < 500:
                return False

        if self.tenant_id and record.tenant_id != self.tenant_id:
            return False

        query = (self.search or "").lower()
        if query.strip():
            haystacks = (record.type, record.path or "", record.message or "")
            return any(query in h.lower() for h in haystacks)

        return True

    @staticmethod
    def _is_problem(record: LogRecord) -> bool:
        kind = record.type.lower()
        return record.is_error_status or "error" in kind or "denied" in kind


def filter_logs(logs: Iterable[LogRecord], criteria: LogFilter) -> List[LogRecord]:
    """
    Apply criteria and order the result newest first.

    Records without a timestamp sort after all dated ones.
    """
    matched = [r for r in logs if criteria.matches(r)]
    matched.sort(key=lambda r: r.created_at or _OLDEST, reverse=True)
    return matched


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """Return the 1-based ``page`` of ``items``."""
    page = max(page, 1)
    page_size = max(page_size, 1)
    start = (page - 1) * page_size
    return list(items[start:start + page_size])
