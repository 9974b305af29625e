"""
Tenant, module, demo request and platform settings models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from tenant_console.models.base import CamelModel


class TenantStatus(str, Enum):
    """Tenant lifecycle status."""
    ACTIVE = "active"
    BLOCKED = "blocked"


class TenantPlan(str, Enum):
    """Billing plan."""
    BASIC = "basic"
    PRO = "pro"


class Tenant(CamelModel):
    """A customer organization as returned by the platform API."""

    id: str
    name: str
    client_key: str = Field(description="Unique tenant key used by integrations")
    status: TenantStatus = TenantStatus.ACTIVE
    plan: Optional[TenantPlan] = None
    api_enabled: bool = False
    active_until: Optional[datetime] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TenantCreate(CamelModel):
    """Payload for creating a tenant."""

    name: str = Field(min_length=1)
    client_key: str = Field(min_length=1)
    plan: Optional[TenantPlan] = None
    api_enabled: bool = True
    active_until: Optional[datetime] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_full_name: Optional[str] = None
    notes: Optional[str] = None


class TenantUpdate(CamelModel):
    """
    Partial tenant update.

    Only fields explicitly set are sent, so ``None`` can be used to clear
    a nullable field.
    """

    name: Optional[str] = None
    client_key: Optional[str] = None
    status: Optional[TenantStatus] = None
    plan: Optional[TenantPlan] = None
    api_enabled: Optional[bool] = None
    active_until: Optional[datetime] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    notes: Optional[str] = None


class TenantModule(CamelModel):
    """Module switch as stored by the backend."""
    key: str
    enabled: bool


class ModuleView(CamelModel):
    """Module entry of the console catalogue."""
    key: str
    name: str
    enabled: bool
    toggle_key: str = Field(description="Backend key to send when toggling")


class DemoRequestStatus(str, Enum):
    """Processing state of a demo request."""
    NEW = "new"
    CONTACTED = "contacted"
    TENANT_CREATED = "tenant_created"
    REJECTED = "rejected"


class DemoRequest(CamelModel):
    """A prospect asking for a demo from the public site."""

    id: str
    first_name: str = ""
    last_name: str = ""
    email: str
    phone: Optional[str] = None
    contact_method: Optional[str] = None
    orders_per_month: Optional[str] = None
    status: str = DemoRequestStatus.NEW.value
    created_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class PlatformSettings(CamelModel):
    """Platform-wide integration credentials."""

    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    google_oauth_client_id: Optional[str] = None
    google_oauth_client_secret: Optional[str] = None
    meta_oauth_app_id: Optional[str] = None
    meta_oauth_app_secret: Optional[str] = None
    vk_oauth_client_id: Optional[str] = None
    vk_oauth_client_secret: Optional[str] = None


class PlatformSettingsUpdate(PlatformSettings):
    """Partial settings update; unset fields are left untouched."""
