"""
Time-window error summarizer for the dashboard.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from tenant_console.config import get_settings
from tenant_console.models.log_record import LogRecord
from tenant_console.models.summary import ErrorSummary, TenantErrorCount


def is_error_event(record: LogRecord) -> bool:
    """An error status, or an event whose type mentions 'error'."""
    return record.is_error_status or "error" in record.type.lower()


class ErrorSummarizer:
    """
    Summarizes errors over a trailing time window.

    Unlike the endpoint aggregator, records without a status code are
    never counted as errors here: they only reach ``latest_errors`` when
    their type mentions an error.
    """

    def __init__(
        self,
        window_hours: Optional[int] = None,
        top_tenants: Optional[int] = None,
        latest_errors: Optional[int] = None,
    ):
        settings = get_settings()
        self.window = timedelta(
            hours=window_hours if window_hours is not None else settings.error_window_hours
        )
        self.top_tenants = top_tenants if top_tenants is not None else settings.top_tenants_limit
        self.latest_errors = latest_errors if latest_errors is not None else settings.latest_errors_limit

    def summarize(
        self,
        logs: Iterable[LogRecord],
        now: Optional[datetime] = None,
    ) -> ErrorSummary:
        """
        Build the error summary for the window ending at ``now``.

        Args:
            logs: Log records to summarize
            now: Reference time, defaults to the current UTC time.
                 Naive values are taken as UTC.

        Returns:
            ErrorSummary for records with ``created_at >= now - window``
        """
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        window_start = now - self.window
        recent = [
            r for r in logs
            if r.created_at is not None and r.created_at >= window_start
        ]

        errors_4xx = 0
        errors_5xx = 0
        by_tenant: Dict[str, int] = {}

        for record in recent:
            status = record.status_code
            if status is None:
                continue
            if 400 <= status < 500:
                errors_4xx += 1
            elif status >= 500:
                errors_5xx += 1
            if status >= 400 and record.tenant_id:
                by_tenant[record.tenant_id] = by_tenant.get(record.tenant_id, 0) + 1

        ranked = sorted(by_tenant.items(), key=lambda item: item[1], reverse=True)
        top = [
            TenantErrorCount(tenant_id=tenant_id, count=count)
            for tenant_id, count in ranked[:self.top_tenants]
        ]

        latest: List[LogRecord] = sorted(
            (r for r in recent if is_error_event(r)),
            key=lambda r: r.created_at,
            reverse=True,
        )[:self.latest_errors]

        return ErrorSummary(
            window_start=window_start,
            window_end=now,
            errors_4xx=errors_4xx,
            errors_5xx=errors_5xx,
            by_tenant_error_count=by_tenant,
            top_tenants=top,
            latest_errors=latest,
        )


def summarize_errors(
    logs: Iterable[LogRecord],
    now: Optional[datetime] = None,
) -> ErrorSummary:
    """Summarize errors with the configured window and limits."""
    return ErrorSummarizer().summarize(logs, now=now)
