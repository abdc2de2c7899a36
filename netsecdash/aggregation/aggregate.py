"""Single-pass aggregation of security-event records into dashboard tables.

Records are mappings shaped like Suricata EVE output::

    {"event_type": "alert", "src_ip": "10.0.0.2",
     "timestamp": "2024-01-01T10:05:00Z", "alert": {"category": "scan"}}

Missing or null ``event_type``/``src_ip``/``alert.category`` values are
tabulated under :data:`MISSING` instead of being dropped. A timestamp that does
not parse keeps the record in every non-time table and only removes it from
the two hour-bucket tables.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple

from netsecdash.utils.time import hour_key, safe_parse_ts


MISSING = "(missing)"

Counts = Dict[str, int]
Matrix = Dict[str, Dict[str, int]]
CountsView = Mapping[str, int]
MatrixView = Mapping[str, Mapping[str, int]]


class InvalidInput(ValueError):
    """The batch is not a sequence of record mappings."""


def _key(value: Any) -> str:
    """Map a field value to its table key, rendered the way a JSON/JS object key would be."""
    if value is None:
        return MISSING
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _bump(counts: Counts, key: str) -> None:
    counts[key] = counts.get(key, 0) + 1


def _bump_cell(matrix: Matrix, row: str, col: str) -> None:
    cells = matrix.get(row)
    if cells is None:
        cells = matrix[row] = {}
    cells[col] = cells.get(col, 0) + 1


def _frozen_counts(counts: CountsView) -> CountsView:
    return MappingProxyType(dict(counts))


def _frozen_matrix(matrix: MatrixView) -> MatrixView:
    return MappingProxyType({k: MappingProxyType(dict(v)) for k, v in matrix.items()})


@dataclass(frozen=True)
class AggregateResult:
    """Tables derived from one record batch. Mapping order is first-seen order.

    Every table is copied into a read-only mapping on construction.
    """

    event_type_counts: CountsView = field(default_factory=dict)
    source_counts: CountsView = field(default_factory=dict)
    timestamps: Tuple[Any, ...] = ()
    alert_category_counts: CountsView = field(default_factory=dict)
    source_category_matrix: MatrixView = field(default_factory=dict)
    hour_category_matrix: MatrixView = field(default_factory=dict)
    hour_alert_counts: CountsView = field(default_factory=dict)
    record_count: int = 0
    alert_count: int = 0
    unbucketed_alerts: int = 0
    malformed_timestamps: int = 0

    def __post_init__(self) -> None:
        for name in ("event_type_counts", "source_counts", "alert_category_counts", "hour_alert_counts"):
            object.__setattr__(self, name, _frozen_counts(getattr(self, name)))
        for name in ("source_category_matrix", "hour_category_matrix"):
            object.__setattr__(self, name, _frozen_matrix(getattr(self, name)))
        object.__setattr__(self, "timestamps", tuple(self.timestamps))

    @property
    def categories(self) -> List[str]:
        """Alert categories in first-seen order; the shared axis of every stacked view."""
        return list(self.alert_category_counts)

    def source_category_count(self, source: str, category: str) -> int:
        return self.source_category_matrix.get(source, {}).get(category, 0)

    def hour_category_count(self, hour: str, category: str) -> int:
        return self.hour_category_matrix.get(hour, {}).get(category, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "eventTypeCounts": dict(self.event_type_counts),
            "sourceCounts": dict(self.source_counts),
            "timestamps": list(self.timestamps),
            "alertCategoryCounts": dict(self.alert_category_counts),
            "sourceCategoryMatrix": {k: dict(v) for k, v in self.source_category_matrix.items()},
            "hourBucketCategoryMatrix": {k: dict(v) for k, v in self.hour_category_matrix.items()},
            "hourBucketAlertCount": dict(self.hour_alert_counts),
            "recordCount": self.record_count,
            "alertCount": self.alert_count,
            "unbucketedAlerts": self.unbucketed_alerts,
            "malformedTimestamps": self.malformed_timestamps,
        }


class Aggregator:
    """Accumulates records one at a time; ``result()`` snapshots the tables.

    Feeding a batch in several ``extend`` calls gives the same result as one
    ``aggregate`` call over the whole batch.
    """

    def __init__(self) -> None:
        self._event_types: Counts = {}
        self._sources: Counts = {}
        self._timestamps: List[Any] = []
        self._categories: Counts = {}
        self._source_categories: Matrix = {}
        self._hour_categories: Matrix = {}
        self._hour_alerts: Counts = {}
        self._records = 0
        self._alerts = 0
        self._unbucketed = 0
        self._malformed = 0

    def add(self, record: Mapping[str, Any], index: Optional[int] = None) -> None:
        if not isinstance(record, Mapping):
            where = f" at index {index}" if index is not None else ""
            raise InvalidInput(f"Record{where} is {type(record).__name__}, expected a mapping")

        self._records += 1
        source = _key(record.get("src_ip"))
        _bump(self._event_types, _key(record.get("event_type")))
        _bump(self._sources, source)

        ts = record.get("timestamp")
        self._timestamps.append(ts)
        dt = safe_parse_ts(ts)
        if dt is None:
            self._malformed += 1

        alert = record.get("alert")
        if not isinstance(alert, Mapping):
            return

        self._alerts += 1
        category = _key(alert.get("category"))
        _bump(self._categories, category)
        _bump_cell(self._source_categories, source, category)

        if dt is None:
            self._unbucketed += 1
            return
        hour = hour_key(dt)
        _bump_cell(self._hour_categories, hour, category)
        _bump(self._hour_alerts, hour)

    def extend(self, records: Iterable[Mapping[str, Any]]) -> None:
        start = self._records
        for i, record in enumerate(_iter_records(records)):
            self.add(record, index=start + i)

    def result(self) -> AggregateResult:
        return AggregateResult(
            event_type_counts=self._event_types,
            source_counts=self._sources,
            timestamps=tuple(self._timestamps),
            alert_category_counts=self._categories,
            source_category_matrix=self._source_categories,
            hour_category_matrix=self._hour_categories,
            hour_alert_counts=self._hour_alerts,
            record_count=self._records,
            alert_count=self._alerts,
            unbucketed_alerts=self._unbucketed,
            malformed_timestamps=self._malformed,
        )


def _iter_records(records: Any) -> Iterable[Any]:
    if records is None:
        raise InvalidInput("No records supplied")
    if isinstance(records, (str, bytes, bytearray, Mapping)):
        raise InvalidInput(f"Expected a sequence of records, got {type(records).__name__}")
    try:
        return iter(records)
    except TypeError as e:
        raise InvalidInput(f"Expected a sequence of records, got {type(records).__name__}") from e


def aggregate(records: Iterable[Mapping[str, Any]]) -> AggregateResult:
    """Build every dashboard table from one batch in a single pass."""
    agg = Aggregator()
    agg.extend(records)
    return agg.result()
