"""
CSV and JSON export of log listings.
"""

import csv
import io
import json
from typing import Any, Dict, Iterable, List, Sequence

from tenant_console.models.log_record import LogRecord


GLOBAL_LOG_COLUMNS: List[str] = [
    "tenantId", "type", "statusCode", "method", "path", "message", "createdAt", "meta",
]

TENANT_LOG_COLUMNS: List[str] = [
    "id", "type", "statusCode", "method", "path", "message", "createdAt", "meta",
]


class LogExporter:
    """
    Serializes log records for download.

    Columns are named after the wire (camelCase) fields. ``meta`` is
    written as a JSON document, missing values as empty strings.
    """

    def to_csv(
        self,
        logs: Iterable[LogRecord],
        columns: Sequence[str] = GLOBAL_LOG_COLUMNS,
    ) -> str:
        """
        Render records as CSV with every cell quoted.

        Args:
            logs: Records to export
            columns: Wire field names, in output order

        Returns:
            CSV text with a header row
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(columns)

        for record in logs:
            row = self._wire_row(record)
            writer.writerow([self._cell(column, row.get(column)) for column in columns])

        return buffer.getvalue()

    def to_json(self, logs: Iterable[LogRecord]) -> str:
        """Render records as an indented JSON array."""
        return json.dumps(
            [self._wire_row(r) for r in logs],
            indent=2,
            ensure_ascii=False,
        )

    def _wire_row(self, record: LogRecord) -> Dict[str, Any]:
        return record.model_dump(mode="json", by_alias=True)

    def _cell(self, column: str, value: Any) -> str:
        if column == "meta":
            return json.dumps(value or {}, ensure_ascii=False)
        if value is None:
            return ""
        return str(value)
