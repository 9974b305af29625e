"""
Error summary over a trailing time window.
"""

from datetime import datetime
from typing import Dict, List

from pydantic import Field

from tenant_console.models.base import CamelModel
from tenant_console.models.log_record import LogRecord


class TenantErrorCount(CamelModel):
    """Number of error responses attributed to one tenant."""
    tenant_id: str
    count: int


class ErrorSummary(CamelModel):
    """4xx/5xx totals, noisiest tenants and latest errors inside a window."""

    window_start: datetime = Field(description="Inclusive lower bound of the window")
    window_end: datetime = Field(description="Reference 'now' the window was computed for")
    errors_4xx: int = Field(default=0, alias="errors4xx")
    errors_5xx: int = Field(default=0, alias="errors5xx")
    by_tenant_error_count: Dict[str, int] = Field(default_factory=dict)
    top_tenants: List[TenantErrorCount] = Field(default_factory=list)
    latest_errors: List[LogRecord] = Field(default_factory=list)
