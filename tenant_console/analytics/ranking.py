"""
Ordering of endpoint statistics for the API status view.
"""

from typing import Iterable, List

from tenant_console.models.endpoint_stat import EndpointStat


def rank_endpoints(stats: Iterable[EndpointStat]) -> List[EndpointStat]:
    """
    Order endpoints worst first.

    Sorts by error rate descending, then by total traffic descending.
    The sort is stable, so entries equal on both keys keep their input
    order.
    """
    return sorted(
        stats,
        key=lambda s: (-(s.errors / max(s.total, 1)), -s.total),
    )
