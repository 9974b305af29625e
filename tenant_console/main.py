"""
FastAPI application entry point.
Tenant Console - operator console for the multi-tenant platform
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tenant_console import __version__
from tenant_console.api.routes import router
from tenant_console.client.exceptions import PlatformAPIError, PlatformUnavailableError
from tenant_console.config import get_settings
from tenant_console.core.logging import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    setup_logging()
    logger.info("Tenant console started against %s", get_settings().platform_api_url)
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Operator console for the multi-tenant platform: tenants, modules, "
                "logs, endpoint health and integration settings.",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(PlatformAPIError)
async def platform_error_handler(request: Request, exc: PlatformAPIError):
    """Relay platform failures with the upstream status when there is one."""
    if isinstance(exc, PlatformUnavailableError):
        status_code = 503
    elif exc.status_code and exc.status_code >= 400:
        status_code = exc.status_code
    else:
        status_code = 502
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Include API routes
app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "tenant_console.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
