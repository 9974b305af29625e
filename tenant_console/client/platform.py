"""
Async client for the platform backend REST API.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from tenant_console.client.exceptions import (
    PlatformAPIError,
    PlatformAuthError,
    PlatformUnavailableError,
    error_from_response,
)
from tenant_console.client.session import PanelSession
from tenant_console.config import get_settings
from tenant_console.models.log_record import LogRecord
from tenant_console.models.tenant import (
    DemoRequest,
    DemoRequestStatus,
    PlatformSettings,
    PlatformSettingsUpdate,
    Tenant,
    TenantCreate,
    TenantModule,
    TenantStatus,
    TenantUpdate,
)


logger = logging.getLogger(__name__)


class PlatformClient:
    """
    Async client for platform API interactions.

    Features:
    - Bearer token taken from an explicit PanelSession
    - Typed request/response models
    - Uniform error mapping (PlatformAPIError and subclasses)
    - Session cleared when the backend answers 401
    """

    def __init__(
        self,
        session: PanelSession,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = get_settings()
        self.session = session
        self.client = httpx.AsyncClient(
            base_url=(base_url or self.settings.platform_api_url).rstrip("/"),
            timeout=httpx.Timeout(timeout or self.settings.platform_api_timeout),
            transport=transport,
        )

    async def __aenter__(self) -> "PlatformClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            PlatformAuthError: On HTTP 401 (the session is cleared)
            PlatformAPIError: On any other error status
            PlatformUnavailableError: When no response was received
        """
        headers = {}
        token = self.session.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self.client.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.TransportError as e:
            logger.warning("Platform API %s %s failed: %s", method, path, e)
            raise PlatformUnavailableError(
                f"Platform API did not respond: {e.__class__.__name__}"
            ) from e

        if response.is_error:
            error = error_from_response(response)
            logger.warning("Platform API %s %s -> %s", method, path, error.message)
            if isinstance(error, PlatformAuthError):
                self.session.clear()
            raise error

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise PlatformAPIError(
                f"HTTP {response.status_code}: response is not valid JSON",
                status_code=response.status_code,
            ) from e

    # Session

    async def login(self, password: str) -> str:
        """Forward the panel password and store the returned token."""
        data = await self._request("POST", "/auth/panel-login", json={"password": password})
        token = (data or {}).get("token")
        if not token:
            raise PlatformAuthError("Login response carried no token", status_code=401)
        self.session.set(token)
        return token

    def logout(self) -> None:
        self.session.clear()

    # Tenants

    async def list_tenants(self) -> List[Tenant]:
        data = await self._request("GET", "/tenants")
        return [Tenant.model_validate(t) for t in data or []]

    async def get_tenant(self, tenant_id: str) -> Tenant:
        data = await self._request("GET", f"/tenants/{tenant_id}")
        return Tenant.model_validate(data)

    async def create_tenant(self, payload: TenantCreate) -> Tenant:
        data = await self._request(
            "POST",
            "/tenants",
            json=payload.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        return Tenant.model_validate(data)

    async def update_tenant(self, tenant_id: str, payload: TenantUpdate) -> Tenant:
        """Partial update; only fields set on ``payload`` are sent."""
        data = await self._request(
            "PATCH",
            f"/tenants/{tenant_id}",
            json=payload.model_dump(mode="json", by_alias=True, exclude_unset=True),
        )
        return Tenant.model_validate(data)

    async def enable_tenant(self, tenant_id: str) -> Tenant:
        return await self.update_tenant(tenant_id, TenantUpdate(status=TenantStatus.ACTIVE))

    async def disable_tenant(self, tenant_id: str) -> Tenant:
        return await self.update_tenant(tenant_id, TenantUpdate(status=TenantStatus.BLOCKED))

    async def set_tenant_api(self, tenant_id: str, enabled: bool) -> Tenant:
        return await self.update_tenant(tenant_id, TenantUpdate(api_enabled=enabled))

    async def request_password_reset_link(self, tenant_id: str) -> str:
        data = await self._request("POST", f"/tenants/{tenant_id}/password-reset-link")
        return (data or {}).get("link", "")

    async def send_password_reset_email(self, tenant_id: str, to: Optional[str] = None) -> str:
        """Email a reset link; returns the address it was sent to."""
        body = {"to": to} if to else None
        data = await self._request("POST", f"/tenants/{tenant_id}/password-reset-email", json=body)
        return (data or {}).get("sentTo", "")

    async def prune_reset_tokens(self) -> None:
        await self._request("POST", "/auth/reset-tokens/prune")

    # Modules

    async def list_tenant_modules(self, tenant_id: str) -> List[TenantModule]:
        data = await self._request("GET", f"/platform/tenants/{tenant_id}/modules")
        return [TenantModule.model_validate(m) for m in data or []]

    async def toggle_tenant_module(
        self,
        tenant_id: str,
        module_key: str,
        enabled: bool,
    ) -> TenantModule:
        data = await self._request(
            "PATCH",
            f"/platform/tenants/{tenant_id}/modules/{module_key}",
            json={"enabled": enabled},
        )
        return TenantModule.model_validate(data)

    # Logs

    async def fetch_all_logs(self, limit: Optional[int] = None) -> List[LogRecord]:
        """Latest logs across all tenants."""
        limit = limit or self.settings.global_logs_limit
        data = await self._request("GET", "/logs", params={"limit": limit})
        return [LogRecord.model_validate(r) for r in data or []]

    async def fetch_tenant_logs(
        self,
        tenant_id: str,
        limit: Optional[int] = None,
    ) -> List[LogRecord]:
        params = {"limit": limit} if limit else None
        data = await self._request("GET", f"/tenants/{tenant_id}/logs", params=params)
        return [LogRecord.model_validate(r) for r in data or []]

    # Demo requests

    async def list_demo_requests(self) -> List[DemoRequest]:
        data = await self._request("GET", "/demo-requests")
        return [DemoRequest.model_validate(r) for r in data or []]

    async def update_demo_request_status(self, request_id: str, status: str) -> None:
        await self._request("PATCH", f"/demo-requests/{request_id}", json={"status": status})

    async def convert_demo_request(self, request: DemoRequest) -> Tenant:
        """
        Create a tenant from a demo request and mark the request converted.

        The client key is the lowercased local part of the requester's email.
        """
        full_name = request.full_name
        notes = (
            f"Demo request {request.id}. "
            f"Orders/month: {request.orders_per_month or 'n/a'}. "
            f"Contact: {request.contact_method or '-'}. "
            f"Phone: {request.phone or '-'}"
        )
        tenant = await self.create_tenant(
            TenantCreate(
                name=full_name or request.email,
                client_key=request.email.split("@")[0].lower(),
                owner_email=request.email,
                owner_name=full_name or None,
                owner_full_name=full_name or None,
                notes=notes,
            )
        )
        await self.update_demo_request_status(request.id, DemoRequestStatus.TENANT_CREATED.value)
        logger.info("Demo request %s converted to tenant %s", request.id, tenant.id)
        return tenant

    # Platform settings

    async def get_platform_settings(self) -> PlatformSettings:
        data = await self._request("GET", "/platform/settings")
        return PlatformSettings.model_validate(data or {})

    async def update_platform_settings(self, payload: PlatformSettingsUpdate) -> PlatformSettings:
        data = await self._request(
            "PATCH",
            "/platform/settings",
            json=payload.model_dump(by_alias=True, exclude_unset=True),
        )
        return PlatformSettings.model_validate(data or {})

    async def send_telegram_test(self, message: Optional[str] = None) -> bool:
        body = {"message": message} if message else None
        data = await self._request("POST", "/platform/settings/telegram-test", json=body)
        return bool((data or {}).get("ok"))
