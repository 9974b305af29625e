"""
FastAPI API routes.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from tenant_console import __version__
from tenant_console.analytics.aggregator import EndpointAggregator
from tenant_console.analytics.filters import LogFilter, StatusClass, filter_logs, paginate
from tenant_console.analytics.modules import merge_modules
from tenant_console.analytics.ranking import rank_endpoints
from tenant_console.analytics.summarizer import ErrorSummarizer
from tenant_console.api.dependencies import (
    get_aggregator,
    get_exporter,
    get_platform_client,
    get_summarizer,
)
from tenant_console.client.platform import PlatformClient
from tenant_console.config import get_settings
from tenant_console.models.base import CamelModel
from tenant_console.models.endpoint_stat import EndpointStat
from tenant_console.models.log_record import LogRecord
from tenant_console.models.summary import ErrorSummary
from tenant_console.models.tenant import (
    DemoRequest,
    ModuleView,
    PlatformSettings,
    PlatformSettingsUpdate,
    Tenant,
    TenantCreate,
    TenantModule,
    TenantUpdate,
)
from tenant_console.reports.exporter import (
    GLOBAL_LOG_COLUMNS,
    TENANT_LOG_COLUMNS,
    LogExporter,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# Request/Response Models
class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class LoginRequest(BaseModel):
    """Panel login form."""
    password: str = Field(min_length=1)


class SessionResponse(BaseModel):
    """Current session state."""
    authenticated: bool


class LogPage(CamelModel):
    """One page of a filtered log listing."""
    items: List[LogRecord]
    total: int
    page: int
    page_size: int


class ModuleToggleRequest(BaseModel):
    """New state of a tenant module."""
    enabled: bool


class TelegramTestRequest(BaseModel):
    """Optional text of the Telegram test message."""
    message: Optional[str] = None


class TelegramTestResponse(BaseModel):
    ok: bool


class PasswordResetEmailRequest(BaseModel):
    """Recipient override; the tenant owner email is used when empty."""
    to: Optional[str] = None


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


def _log_filter(
    tenant_id: Optional[str] = None,
    errors_only: bool = False,
    status: StatusClass = StatusClass.ALL,
    search: Optional[str] = None,
) -> LogFilter:
    """Build log filter criteria from query parameters."""
    return LogFilter(
        tenant_id=tenant_id,
        errors_only=errors_only,
        status_class=status,
        search=search,
    )


def _export_response(
    logs: List[LogRecord],
    fmt: ExportFormat,
    filename: str,
    columns: List[str],
    exporter: LogExporter,
) -> Response:
    if fmt == ExportFormat.JSON:
        content = exporter.to_json(logs)
        media_type = "application/json"
    else:
        content = exporter.to_csv(logs, columns)
        media_type = "text/csv; charset=utf-8"

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}.{fmt.value}"'},
    )


# Routes
@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.post("/session", response_model=SessionResponse)
async def login(
    request: LoginRequest,
    client: PlatformClient = Depends(get_platform_client),
):
    """Forward the panel password to the platform and keep the token."""
    await client.login(request.password)
    return SessionResponse(authenticated=True)


@router.delete("/session", response_model=SessionResponse)
async def logout(client: PlatformClient = Depends(get_platform_client)):
    """Forget the session token."""
    client.logout()
    return SessionResponse(authenticated=False)


@router.get("/endpoints", response_model=List[EndpointStat])
async def endpoint_status(
    tenant_id: Optional[str] = None,
    limit: Optional[int] = None,
    client: PlatformClient = Depends(get_platform_client),
    aggregator: EndpointAggregator = Depends(get_aggregator),
):
    """
    Per-endpoint health derived from the latest logs.

    Endpoints are ranked worst first (error rate, then traffic).
    """
    settings = get_settings()
    logs = await client.fetch_all_logs(limit=limit or settings.endpoint_logs_limit)
    if tenant_id:
        logs = [r for r in logs if r.tenant_id == tenant_id]

    stats = rank_endpoints(aggregator.aggregate(logs))
    logger.debug("Aggregated %d logs into %d endpoints", len(logs), len(stats))
    return stats


@router.get("/logs/summary", response_model=ErrorSummary)
async def error_summary(
    now: Optional[datetime] = None,
    client: PlatformClient = Depends(get_platform_client),
    summarizer: ErrorSummarizer = Depends(get_summarizer),
):
    """4xx/5xx counts, noisiest tenants and latest errors for the last day."""
    logs = await client.fetch_all_logs()
    return summarizer.summarize(logs, now=now)


@router.get("/logs", response_model=LogPage)
async def list_logs(
    page: int = 1,
    page_size: int = 50,
    criteria: LogFilter = Depends(_log_filter),
    client: PlatformClient = Depends(get_platform_client),
):
    """
    Latest logs across all tenants, filtered and paginated.

    Args:
        page: 1-based page number
        page_size: Records per page
    """
    if page < 1 or page_size < 1:
        raise HTTPException(status_code=400, detail="page and page_size must be positive")

    filtered = filter_logs(await client.fetch_all_logs(), criteria)
    return LogPage(
        items=paginate(filtered, page, page_size),
        total=len(filtered),
        page=page,
        page_size=page_size,
    )


@router.get("/logs/export")
async def export_logs(
    format: ExportFormat = ExportFormat.CSV,
    criteria: LogFilter = Depends(_log_filter),
    client: PlatformClient = Depends(get_platform_client),
    exporter: LogExporter = Depends(get_exporter),
):
    """Download the filtered global log listing as CSV or JSON."""
    filtered = filter_logs(await client.fetch_all_logs(), criteria)
    if not filtered:
        raise HTTPException(status_code=404, detail="No logs match the filter")
    return _export_response(filtered, format, "tenant-logs", GLOBAL_LOG_COLUMNS, exporter)


@router.post("/maintenance/prune-reset-tokens", status_code=202)
async def prune_reset_tokens(client: PlatformClient = Depends(get_platform_client)):
    """Ask the platform to purge expired password reset tokens."""
    await client.prune_reset_tokens()
    return {"message": "Reset token cleanup started"}


@router.get("/tenants", response_model=List[Tenant])
async def list_tenants(client: PlatformClient = Depends(get_platform_client)):
    """List all tenants."""
    return await client.list_tenants()


@router.post("/tenants", response_model=Tenant, status_code=201)
async def create_tenant(
    payload: TenantCreate,
    client: PlatformClient = Depends(get_platform_client),
):
    """Create a tenant."""
    return await client.create_tenant(payload)


@router.get("/tenants/{tenant_id}", response_model=Tenant)
async def get_tenant(tenant_id: str, client: PlatformClient = Depends(get_platform_client)):
    """Get a specific tenant by ID."""
    return await client.get_tenant(tenant_id)


@router.patch("/tenants/{tenant_id}", response_model=Tenant)
async def update_tenant(
    tenant_id: str,
    payload: TenantUpdate,
    client: PlatformClient = Depends(get_platform_client),
):
    """Partially update a tenant (status, plan, API access, owner, notes)."""
    if not payload.model_fields_set:
        raise HTTPException(status_code=400, detail="Nothing to update")
    return await client.update_tenant(tenant_id, payload)


@router.get("/tenants/{tenant_id}/logs", response_model=LogPage)
async def list_tenant_logs(
    tenant_id: str,
    page: int = 1,
    page_size: int = 50,
    errors_only: bool = False,
    status: StatusClass = StatusClass.ALL,
    search: Optional[str] = None,
    client: PlatformClient = Depends(get_platform_client),
):
    """Logs of one tenant, filtered and paginated."""
    if page < 1 or page_size < 1:
        raise HTTPException(status_code=400, detail="page and page_size must be positive")

    criteria = LogFilter(errors_only=errors_only, status_class=status, search=search)
    filtered = filter_logs(await client.fetch_tenant_logs(tenant_id), criteria)
    return LogPage(
        items=paginate(filtered, page, page_size),
        total=len(filtered),
        page=page,
        page_size=page_size,
    )


@router.get("/tenants/{tenant_id}/logs/export")
async def export_tenant_logs(
    tenant_id: str,
    format: ExportFormat = ExportFormat.CSV,
    errors_only: bool = False,
    status: StatusClass = StatusClass.ALL,
    search: Optional[str] = None,
    client: PlatformClient = Depends(get_platform_client),
    exporter: LogExporter = Depends(get_exporter),
):
    """Download the filtered logs of one tenant."""
    criteria = LogFilter(errors_only=errors_only, status_class=status, search=search)
    filtered = filter_logs(await client.fetch_tenant_logs(tenant_id), criteria)
    if not filtered:
        raise HTTPException(status_code=404, detail="No logs match the filter")

    tenant = await client.get_tenant(tenant_id)
    filename = f"tenant-logs-{tenant.client_key or 'logs'}"
    return _export_response(filtered, format, filename, TENANT_LOG_COLUMNS, exporter)


@router.post("/tenants/{tenant_id}/password-reset-link")
async def password_reset_link(tenant_id: str, client: PlatformClient = Depends(get_platform_client)):
    """Generate a password reset link for the tenant owner."""
    link = await client.request_password_reset_link(tenant_id)
    return {"link": link}


@router.post("/tenants/{tenant_id}/password-reset-email")
async def password_reset_email(
    tenant_id: str,
    request: Optional[PasswordResetEmailRequest] = None,
    client: PlatformClient = Depends(get_platform_client),
):
    """Email a password reset link."""
    sent_to = await client.send_password_reset_email(tenant_id, request.to if request else None)
    return {"sent_to": sent_to}


@router.get("/tenants/{tenant_id}/modules", response_model=List[ModuleView])
async def list_tenant_modules(
    tenant_id: str,
    client: PlatformClient = Depends(get_platform_client),
):
    """Module catalogue of a tenant, one entry per known module."""
    return merge_modules(await client.list_tenant_modules(tenant_id))


@router.patch("/tenants/{tenant_id}/modules/{module_key}", response_model=TenantModule)
async def toggle_tenant_module(
    tenant_id: str,
    module_key: str,
    request: ModuleToggleRequest,
    client: PlatformClient = Depends(get_platform_client),
):
    """
    Enable or disable a module.

    ``module_key`` must be the ``toggle_key`` reported by the catalogue.
    """
    return await client.toggle_tenant_module(tenant_id, module_key, request.enabled)


@router.get("/demo-requests", response_model=List[DemoRequest])
async def list_demo_requests(
    search: Optional[str] = None,
    client: PlatformClient = Depends(get_platform_client),
):
    """List demo requests, optionally filtered by email, name or phone."""
    requests = await client.list_demo_requests()
    query = (search or "").strip().lower()
    if not query:
        return requests

    return [
        r for r in requests
        if query in r.email.lower()
        or query in f"{r.first_name} {r.last_name}".lower()
        or query in (r.phone or "").lower()
    ]


@router.post("/demo-requests/{request_id}/convert", response_model=Tenant, status_code=201)
async def convert_demo_request(
    request_id: str,
    client: PlatformClient = Depends(get_platform_client),
):
    """Create a tenant from a demo request."""
    requests = await client.list_demo_requests()
    demo = next((r for r in requests if r.id == request_id), None)

    if demo is None:
        raise HTTPException(status_code=404, detail="Demo request not found")

    return await client.convert_demo_request(demo)


@router.get("/settings", response_model=PlatformSettings)
async def get_platform_settings(client: PlatformClient = Depends(get_platform_client)):
    """Platform-wide integration settings."""
    return await client.get_platform_settings()


@router.patch("/settings", response_model=PlatformSettings)
async def update_platform_settings(
    payload: PlatformSettingsUpdate,
    client: PlatformClient = Depends(get_platform_client),
):
    """Update integration settings; omitted fields are left unchanged."""
    return await client.update_platform_settings(payload)


@router.post("/settings/telegram-test", response_model=TelegramTestResponse)
async def telegram_test(
    request: Optional[TelegramTestRequest] = None,
    client: PlatformClient = Depends(get_platform_client),
):
    """Send a test message through the configured Telegram bot."""
    ok = await client.send_telegram_test(request.message if request else None)
    return TelegramTestResponse(ok=ok)
