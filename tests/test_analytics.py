"""
Tests for route normalization, endpoint aggregation, ranking and the
error summarizer.
"""

import pytest
from datetime import datetime, timedelta, timezone

from tenant_console.models.log_record import LogRecord
from tenant_console.models.endpoint_stat import EndpointHealth, EndpointStat
from tenant_console.analytics.normalizer import normalize_path
from tenant_console.analytics.aggregator import EndpointAggregator, aggregate_endpoints
from tenant_console.analytics.ranking import rank_endpoints
from tenant_console.analytics.summarizer import ErrorSummarizer, summarize_errors


NOW = datetime(2025, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


def create_log(
    log_id: str,
    method: str = "GET",
    path: str = "/tenants",
    status_code=200,
    tenant_id: str = "tenant-a",
    created_at=NOW,
    message=None,
    log_type: str = "request",
) -> LogRecord:
    """Helper to create a log record."""
    return LogRecord(
        id=log_id,
        tenant_id=tenant_id,
        type=log_type,
        status_code=status_code,
        method=method,
        path=path,
        message=message,
        created_at=created_at,
    )


def create_stat(key: str, total: int, errors: int) -> EndpointStat:
    """Helper to create an endpoint stat."""
    method, path = key.split(" ", 1)
    return EndpointStat(
        key=key,
        method=method,
        path=path,
        total=total,
        errors=errors,
        success=total - errors,
    )


class TestNormalizePath:
    """Tests for normalize_path."""

    def test_uuid_and_trailing_slash(self):
        path = "/api/users/123e4567-e89b-12d3-a456-426614174000/"
        assert normalize_path(path) == "/api/users/:id"

    def test_numeric_segment(self):
        assert normalize_path("/orders/42") == "/orders/:id"

    def test_missing_path(self):
        assert normalize_path(None) == "/unknown"
        assert normalize_path("") == "/unknown"

    def test_root_falls_back_to_unknown(self):
        assert normalize_path("/") == "/unknown"
        assert normalize_path("///") == "/unknown"

    def test_multiple_trailing_slashes(self):
        assert normalize_path("/health///") == "/health"

    def test_lowercases(self):
        assert normalize_path("/Tenants/ABC") == "/tenants/abc"

    def test_uppercase_uuid(self):
        path = "/sites/123E4567-E89B-12D3-A456-426614174000/logs"
        assert normalize_path(path) == "/sites/:id/logs"

    def test_consecutive_numeric_segments(self):
        assert normalize_path("/tenants/1/modules/2") == "/tenants/:id/modules/:id"
        assert normalize_path("/a/1/2/3") == "/a/:id/:id/:id"

    def test_mixed_segment_untouched(self):
        assert normalize_path("/orders/42abc") == "/orders/42abc"
        assert normalize_path("/v2/items") == "/v2/items"

    def test_non_canonical_uuid_untouched(self):
        # version nibble 0 is not a canonical UUID
        path = "/x/123e4567-e89b-02d3-a456-426614174000"
        assert normalize_path(path) == path

    def test_query_string_kept(self):
        assert normalize_path("/orders/42?page=2") == "/orders/:id?page=2"

    def test_non_ascii_digits_untouched(self):
        assert normalize_path("/orders/٤٢") == "/orders/٤٢"

    @pytest.mark.parametrize("path", [
        None,
        "",
        "/",
        "/health///",
        "/orders/42",
        "/API/Users/123e4567-e89b-12d3-a456-426614174000/",
        "/tenants/1/modules/2/",
        "/orders/42?page=2",
        "no-leading-slash/7",
    ])
    def test_idempotent(self, path):
        once = normalize_path(path)
        assert normalize_path(once) == once


class TestEndpointAggregator:
    """Tests for EndpointAggregator."""

    def setup_method(self):
        self.aggregator = EndpointAggregator()

    def test_empty_input(self):
        assert self.aggregator.aggregate([]) == []

    def test_ids_fold_into_one_bucket(self):
        logs = [
            create_log("1", path="/tenants/1", status_code=200),
            create_log("2", path="/tenants/2", status_code=500),
        ]

        stats = self.aggregator.aggregate(logs)

        assert len(stats) == 1
        stat = stats[0]
        assert stat.key == "GET /tenants/:id"
        assert stat.method == "GET"
        assert stat.path == "/tenants/:id"
        assert stat.total == 2
        assert stat.success == 1
        assert stat.errors == 1

    def test_totals_match_input(self):
        logs = [
            create_log("1", method="GET", path="/a"),
            create_log("2", method="POST", path="/a", status_code=400),
            create_log("3", method="GET", path="/b/9", status_code=None),
            create_log("4", method=None, path=None),
            create_log("5", method="get", path="/A/"),
        ]

        stats = self.aggregator.aggregate(logs)

        assert sum(s.total for s in stats) == len(logs)
        for stat in stats:
            assert stat.success + stat.errors == stat.total
            assert stat.total >= 1

    def test_method_defaults_and_case(self):
        logs = [
            create_log("1", method=None, path="/x"),
            create_log("2", method="", path="/x"),
            create_log("3", method="post", path="/x"),
        ]

        keys = [s.key for s in self.aggregator.aggregate(logs)]
        assert keys == ["ANY /x", "POST /x"]

    def test_missing_status_counts_as_success(self):
        logs = [create_log("1", status_code=None)]

        stat = self.aggregator.aggregate(logs)[0]
        assert stat.success == 1
        assert stat.errors == 0
        assert stat.last_status is None

    def test_last_values_follow_iteration_order(self):
        """Unsorted input reports the last record seen, not the newest."""
        newer = NOW
        older = NOW - timedelta(hours=3)
        logs = [
            create_log("1", status_code=500, created_at=newer, message="boom"),
            create_log("2", status_code=200, created_at=older, message="fine"),
        ]

        stat = self.aggregator.aggregate(logs)[0]
        assert stat.last_status == 200
        assert stat.last_at == older
        assert stat.last_message == "fine"

    def test_last_message_kept_when_absent(self):
        logs = [
            create_log("1", status_code=500, message="upstream timeout"),
            create_log("2", status_code=200, message=None),
        ]

        stat = self.aggregator.aggregate(logs)[0]
        assert stat.last_status == 200
        assert stat.last_message == "upstream timeout"

    def test_tenants_collected(self):
        logs = [
            create_log("1", tenant_id="t1"),
            create_log("2", tenant_id="t2"),
            create_log("3", tenant_id="t1"),
            create_log("4", tenant_id=None),
        ]

        stat = self.aggregator.aggregate(logs)[0]
        assert stat.tenants == {"t1", "t2"}

    def test_health_badges(self):
        assert create_stat("GET /a", total=10, errors=0).health == EndpointHealth.OK
        assert create_stat("GET /a", total=10, errors=2).health == EndpointHealth.DEGRADED
        assert create_stat("GET /a", total=10, errors=3).health == EndpointHealth.FAILING


class TestRankEndpoints:
    """Tests for rank_endpoints."""

    def test_error_rate_first(self):
        stats = [
            create_stat("GET /busy", total=100, errors=1),
            create_stat("GET /broken", total=2, errors=2),
            create_stat("GET /flaky", total=10, errors=5),
        ]

        ranked = [s.key for s in rank_endpoints(stats)]
        assert ranked == ["GET /broken", "GET /flaky", "GET /busy"]

    def test_equal_rate_higher_total_first(self):
        stats = [
            create_stat("GET /small", total=2, errors=1),
            create_stat("GET /large", total=20, errors=10),
        ]

        ranked = [s.key for s in rank_endpoints(stats)]
        assert ranked == ["GET /large", "GET /small"]

    def test_full_ties_keep_input_order(self):
        stats = [
            create_stat("GET /first", total=5, errors=0),
            create_stat("GET /second", total=5, errors=0),
            create_stat("GET /third", total=5, errors=0),
        ]

        ranked = [s.key for s in rank_endpoints(stats)]
        assert ranked == ["GET /first", "GET /second", "GET /third"]

    def test_does_not_mutate_input(self):
        stats = [
            create_stat("GET /ok", total=5, errors=0),
            create_stat("GET /bad", total=5, errors=5),
        ]

        rank_endpoints(stats)
        assert [s.key for s in stats] == ["GET /ok", "GET /bad"]


class TestErrorSummarizer:
    """Tests for ErrorSummarizer."""

    def setup_method(self):
        self.summarizer = ErrorSummarizer(window_hours=24, top_tenants=5, latest_errors=6)

    def test_old_records_excluded(self):
        logs = [
            create_log("old", status_code=500, created_at=NOW - timedelta(hours=25)),
        ]

        summary = self.summarizer.summarize(logs, now=NOW)

        assert summary.errors_4xx == 0
        assert summary.errors_5xx == 0
        assert summary.top_tenants == []
        assert summary.latest_errors == []
        assert summary.by_tenant_error_count == {}

    def test_window_lower_bound_inclusive(self):
        logs = [
            create_log("edge", status_code=404, created_at=NOW - timedelta(hours=24)),
        ]

        summary = self.summarizer.summarize(logs, now=NOW)
        assert summary.errors_4xx == 1
        assert summary.window_start == NOW - timedelta(hours=24)
        assert summary.window_end == NOW

    def test_status_buckets(self):
        logs = [
            create_log("1", status_code=200),
            create_log("2", status_code=404),
            create_log("3", status_code=499),
            create_log("4", status_code=500),
            create_log("5", status_code=503),
            create_log("6", status_code=None),
        ]

        summary = self.summarizer.summarize(logs, now=NOW)
        assert summary.errors_4xx == 2
        assert summary.errors_5xx == 2

    def test_missing_status_not_a_tenant_error(self):
        logs = [
            create_log("1", tenant_id="t1", status_code=None, log_type="error"),
            create_log("2", tenant_id="t2", status_code=401),
        ]

        summary = self.summarizer.summarize(logs, now=NOW)

        assert summary.by_tenant_error_count == {"t2": 1}
        # the typed error still shows up among the latest errors
        assert [r.id for r in summary.latest_errors] == ["1", "2"]

    def test_top_tenants_sorted_and_truncated(self):
        counts = {"t1": 1, "t2": 4, "t3": 2, "t4": 4, "t5": 3, "t6": 1, "t7": 2}
        logs = []
        for tenant_id, count in counts.items():
            for i in range(count):
                logs.append(create_log(f"{tenant_id}-{i}", tenant_id=tenant_id, status_code=500))

        summary = self.summarizer.summarize(logs, now=NOW)

        top = [(t.tenant_id, t.count) for t in summary.top_tenants]
        assert top == [("t2", 4), ("t4", 4), ("t5", 3), ("t3", 2), ("t7", 2)]

    def test_latest_errors_sorted_and_truncated(self):
        logs = [
            create_log(f"e{i}", status_code=500, created_at=NOW - timedelta(minutes=i))
            for i in range(10)
        ]
        logs.reverse()
        logs.append(create_log("ok", status_code=200))
        logs.append(create_log("typed", status_code=None, log_type="Webhook_ERROR",
                               created_at=NOW + timedelta(seconds=1)))

        summary = self.summarizer.summarize(logs, now=NOW)

        ids = [r.id for r in summary.latest_errors]
        assert ids == ["typed", "e0", "e1", "e2", "e3", "e4"]

    def test_unparseable_timestamp_excluded(self):
        logs = [
            LogRecord(id="bad", tenantId="t1", type="error", statusCode=500, createdAt="not a date"),
        ]

        summary = self.summarizer.summarize(logs, now=NOW)
        assert summary.errors_5xx == 0
        assert summary.latest_errors == []

    def test_out_of_range_timestamp_excluded(self):
        record = LogRecord.model_validate({
            "id": "edge",
            "type": "error",
            "statusCode": 500,
            "createdAt": "0001-01-01T00:00:00+01:00",
        })
        assert record.created_at is None

        summary = self.summarizer.summarize([record], now=NOW)
        assert summary.errors_5xx == 0
        assert summary.latest_errors == []

    def test_naive_now_treated_as_utc(self):
        logs = [create_log("1", status_code=500, created_at=NOW - timedelta(hours=1))]

        summary = self.summarizer.summarize(logs, now=NOW.replace(tzinfo=None))
        assert summary.errors_5xx == 1

    def test_defaults_from_settings(self):
        summarizer = ErrorSummarizer()
        assert summarizer.window == timedelta(hours=24)
        assert summarizer.top_tenants == 5
        assert summarizer.latest_errors == 6


class TestModuleLevelHelpers:
    """Tests for the function-style entry points."""

    def test_aggregate_endpoints(self):
        logs = [create_log("1", path="/tenants/1"), create_log("2", path="/tenants/2")]
        stats = aggregate_endpoints(logs)
        assert [(s.key, s.total) for s in stats] == [("GET /tenants/:id", 2)]

    def test_summarize_errors(self):
        logs = [
            create_log("1", status_code=502, created_at=NOW - timedelta(hours=2)),
            create_log("2", status_code=502, created_at=NOW - timedelta(hours=30)),
        ]
        summary = summarize_errors(logs, now=NOW)
        assert summary.errors_5xx == 1
        assert [r.id for r in summary.latest_errors] == ["1"]
