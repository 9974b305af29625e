"""
Endpoint aggregator - folds raw request logs into per-endpoint statistics.
"""

from typing import Dict, Iterable, List

from tenant_console.analytics.normalizer import normalize_path
from tenant_console.models.endpoint_stat import EndpointStat
from tenant_console.models.log_record import LogRecord


DEFAULT_METHOD = "ANY"


def endpoint_key(method: str, path: str) -> str:
    """Build the composite key of an endpoint bucket."""
    return f"{method} {path}"


class EndpointAggregator:
    """
    Groups log records by HTTP method and normalized path.

    The aggregator holds no state between calls: every ``aggregate`` run
    builds a fresh set of buckets from the records it is given.

    Two details are deliberate:
    1. A record without a status code counts as a success.
    2. ``last_status``/``last_at`` follow iteration order, not timestamps.
       Unsorted input therefore reports the last record encountered,
       which is not necessarily the most recent one.
    """

    def aggregate(self, logs: Iterable[LogRecord]) -> List[EndpointStat]:
        """
        Aggregate log records into endpoint statistics.

        Args:
            logs: Log records in the order they were fetched

        Returns:
            One EndpointStat per endpoint, in first-seen order
        """
        buckets: Dict[str, EndpointStat] = {}

        for record in logs:
            method = (record.method or DEFAULT_METHOD).upper()
            path = normalize_path(record.path)
            key = endpoint_key(method, path)

            stat = buckets.get(key)
            if stat is None:
                stat = EndpointStat(key=key, method=method, path=path)
                buckets[key] = stat

            stat.total += 1
            if record.is_error_status:
                stat.errors += 1
            else:
                stat.success += 1

            stat.last_status = record.status_code
            stat.last_at = record.created_at
            if record.message is not None:
                stat.last_message = record.message

            if record.tenant_id:
                stat.tenants.add(record.tenant_id)

        return list(buckets.values())


def aggregate_endpoints(logs: Iterable[LogRecord]) -> List[EndpointStat]:
    """Aggregate log records with a default EndpointAggregator."""
    return EndpointAggregator().aggregate(logs)
