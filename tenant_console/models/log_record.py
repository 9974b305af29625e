"""
Raw log record as returned by the platform log endpoints.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dateutil import parser as dtparser
from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tenant_console.models.base import CamelModel


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp into an aware UTC datetime.

    Naive values are assumed to be UTC. Anything that cannot be parsed
    yields None.
    """
    if value is None or value == "":
        return None
    try:
        dt = value if isinstance(value, datetime) else dtparser.isoparse(str(value))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


class LogRecord(CamelModel):
    """
    One request or event log entry belonging to a tenant.

    Records are immutable once received. ``meta`` is opaque: it is carried
    through untouched and only serialized for display or export.
    A ``created_at`` that cannot be parsed is stored as None, which keeps
    the record out of every time-windowed view.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(description="Opaque unique identifier")
    tenant_id: Optional[str] = Field(
        default=None,
        description="Owning tenant"
    )
    type: str = Field(
        default="",
        description="Free-text event category (e.g. 'error', 'denied', 'request')"
    )
    status_code: Optional[int] = Field(
        default=None,
        description="HTTP status, absent for non-HTTP events"
    )
    method: Optional[str] = None
    path: Optional[str] = None
    message: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = Field(
        default=None,
        description="When the event happened, UTC"
    )

    @field_validator("id", "tenant_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("status_code", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: Any) -> Optional[Dict[str, Any]]:
        if value is None or isinstance(value, dict):
            return value
        # Non-mapping payloads are kept under a single key
        return {"value": value}

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @property
    def is_error_status(self) -> bool:
        """True when the record carries an HTTP status of 400 or above."""
        return self.status_code is not None and self.status_code >= 400
