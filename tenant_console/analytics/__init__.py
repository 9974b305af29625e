"""
Log analytics: route normalization, endpoint aggregation, ranking and
error summaries.
"""

from tenant_console.analytics.normalizer import normalize_path
from tenant_console.analytics.aggregator import EndpointAggregator, aggregate_endpoints
from tenant_console.analytics.ranking import rank_endpoints
from tenant_console.analytics.summarizer import ErrorSummarizer, summarize_errors
from tenant_console.analytics.filters import LogFilter, StatusClass, filter_logs, paginate

__all__ = [
    "normalize_path",
    "EndpointAggregator",
    "aggregate_endpoints",
    "rank_endpoints",
    "ErrorSummarizer",
    "summarize_errors",
    "LogFilter",
    "StatusClass",
    "filter_logs",
    "paginate",
]
