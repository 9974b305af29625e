"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from typing import AsyncIterator

from tenant_console.analytics.aggregator import EndpointAggregator
from tenant_console.analytics.summarizer import ErrorSummarizer
from tenant_console.client.platform import PlatformClient
from tenant_console.client.session import PanelSession
from tenant_console.reports.exporter import LogExporter


@lru_cache()
def get_session() -> PanelSession:
    """Get the process-wide panel session."""
    return PanelSession()


@lru_cache()
def get_aggregator() -> EndpointAggregator:
    """Get cached endpoint aggregator instance."""
    return EndpointAggregator()


@lru_cache()
def get_summarizer() -> ErrorSummarizer:
    """Get cached error summarizer instance."""
    return ErrorSummarizer()


@lru_cache()
def get_exporter() -> LogExporter:
    """Get cached log exporter instance."""
    return LogExporter()


async def get_platform_client() -> AsyncIterator[PlatformClient]:
    """Get a platform client (new each request, closed afterwards)."""
    async with PlatformClient(get_session()) as client:
        yield client
