"""
Per-endpoint statistics derived from request logs.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Set

from pydantic import Field, computed_field

from tenant_console.models.base import CamelModel


# Error rate at which an endpoint is reported as failing
FAILING_ERROR_RATE = 0.3


class EndpointHealth(str, Enum):
    """Health badge of an endpoint."""
    OK = "ok"
    DEGRADED = "degraded"
    FAILING = "failing"


class EndpointStat(CamelModel):
    """
    Traffic and error counters for one (method, normalized path) pair.

    Stats are rebuilt from scratch on every aggregation run; an instance
    exists only if at least one log record mapped to its key, so
    ``total >= 1`` and ``success + errors == total`` always hold.
    """

    key: str = Field(description="Method and normalized path, e.g. 'GET /tenants/:id'")
    method: str
    path: str
    total: int = 0
    success: int = 0
    errors: int = 0
    last_status: Optional[int] = None
    last_message: Optional[str] = None
    last_at: Optional[datetime] = None
    tenants: Set[str] = Field(default_factory=set)

    @computed_field(alias="errorRate")
    @property
    def error_rate(self) -> float:
        return self.errors / max(self.total, 1)

    @computed_field
    @property
    def health(self) -> EndpointHealth:
        if self.errors == 0:
            return EndpointHealth.OK
        if self.error_rate >= FAILING_ERROR_RATE:
            return EndpointHealth.FAILING
        return EndpointHealth.DEGRADED
