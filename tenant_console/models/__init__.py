"""
Pydantic models for Tenant Console.
"""

from tenant_console.models.log_record import LogRecord
from tenant_console.models.endpoint_stat import EndpointHealth, EndpointStat
from tenant_console.models.summary import ErrorSummary, TenantErrorCount
from tenant_console.models.tenant import (
    DemoRequest,
    DemoRequestStatus,
    ModuleView,
    PlatformSettings,
    PlatformSettingsUpdate,
    Tenant,
    TenantCreate,
    TenantModule,
    TenantPlan,
    TenantStatus,
    TenantUpdate,
)

__all__ = [
    "LogRecord",
    "EndpointHealth",
    "EndpointStat",
    "ErrorSummary",
    "TenantErrorCount",
    "DemoRequest",
    "DemoRequestStatus",
    "ModuleView",
    "PlatformSettings",
    "PlatformSettingsUpdate",
    "Tenant",
    "TenantCreate",
    "TenantModule",
    "TenantPlan",
    "TenantStatus",
    "TenantUpdate",
]
