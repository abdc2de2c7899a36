"""Chart-ready shapes built from an AggregateResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from netsecdash.aggregation.aggregate import AggregateResult
from netsecdash.config import SETTINGS
from netsecdash.utils.time import HOUR_KEY_FORMAT, hour_key, parse_hour_key


@dataclass(frozen=True)
class Dataset:
    label: str
    data: List[int]


@dataclass(frozen=True)
class ChartSeries:
    labels: List[str]
    datasets: List[Dataset] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": [{"label": d.label, "data": list(d.data)} for d in self.datasets],
        }


def _is_hour_key(key: str) -> bool:
    try:
        parse_hour_key(key)
    except ValueError:
        return False
    return True


def _hour_labels(keys: List[str], fill_gaps: bool, max_hours: Optional[int] = None) -> List[str]:
    """Sorted hour keys; with fill_gaps, every hour from first to last.

    Spans longer than max_hours (default SETTINGS.max_fill_hours) stay unfilled.
    """
    labels = sorted(keys)
    if not fill_gaps or len(labels) < 2 or not all(_is_hour_key(k) for k in labels):
        return labels
    first = parse_hour_key(labels[0])
    last = parse_hour_key(labels[-1])
    limit = SETTINGS.max_fill_hours if max_hours is None else max_hours
    if (last - first) // timedelta(hours=1) + 1 > limit:
        return labels
    try:
        hours = pd.date_range(first, last, freq="h", unit="s")
    except pd.errors.OutOfBoundsDatetime:
        return labels
    return [hour_key(ts) for ts in hours]


def pie_series(counts: Mapping[str, int], label: str) -> ChartSeries:
    return ChartSeries(labels=list(counts), datasets=[Dataset(label=label, data=list(counts.values()))])


def event_type_series(result: AggregateResult) -> ChartSeries:
    return pie_series(result.event_type_counts, "Event Types")


def alert_category_series(result: AggregateResult) -> ChartSeries:
    return pie_series(result.alert_category_counts, "Categories")


def source_category_series(result: AggregateResult) -> ChartSeries:
    """Stacked bar: one bar per source, one dataset per alert category."""
    sources = list(result.source_category_matrix)
    return ChartSeries(
        labels=sources,
        datasets=[
            Dataset(label=c, data=[result.source_category_count(s, c) for s in sources])
            for c in result.categories
        ],
    )


def hour_category_series(
    result: AggregateResult, fill_gaps: bool = False, max_hours: Optional[int] = None
) -> ChartSeries:
    """Stacked series over hour buckets, in chronological order."""
    hours = _hour_labels(list(result.hour_category_matrix), fill_gaps, max_hours)
    return ChartSeries(
        labels=hours,
        datasets=[
            Dataset(label=c, data=[result.hour_category_count(h, c) for h in hours])
            for c in result.categories
        ],
    )


def alert_frequency_series(
    result: AggregateResult, fill_gaps: bool = False, max_hours: Optional[int] = None
) -> ChartSeries:
    hours = _hour_labels(list(result.hour_alert_counts), fill_gaps, max_hours)
    return ChartSeries(
        labels=hours,
        datasets=[Dataset(label="Alert Frequency", data=[result.hour_alert_counts.get(h, 0) for h in hours])],
    )


def top_sources(result: AggregateResult, n: int) -> List[str]:
    """The n sources with the most alerts; ties keep first-seen order."""
    totals = {s: sum(cells.values()) for s, cells in result.source_category_matrix.items()}
    return sorted(totals, key=lambda s: -totals[s])[: max(n, 0)]


def all_series(result: AggregateResult, fill_gaps: bool = False) -> Dict[str, ChartSeries]:
    return {
        "eventTypes": event_type_series(result),
        "alertCategories": alert_category_series(result),
        "sourceCategories": source_category_series(result),
        "hourCategories": hour_category_series(result, fill_gaps=fill_gaps),
        "alertFrequency": alert_frequency_series(result, fill_gaps=fill_gaps),
    }


def counts_frame(counts: Mapping[str, int], key: str) -> pd.DataFrame:
    return pd.DataFrame({key: list(counts), "count": list(counts.values())})


def matrix_frame(matrix: Mapping[str, Mapping[str, int]], row: str, col: str = "category") -> pd.DataFrame:
    """Long-form (row, col, count) frame of a sparse contingency table."""
    rows = [(r, c, n) for r, cells in matrix.items() for c, n in cells.items()]
    return pd.DataFrame(rows, columns=[row, col, "count"])


def hour_frame(result: AggregateResult, fill_gaps: bool = False) -> pd.DataFrame:
    """Alerts per hour with a parsed `hour` column for time axes."""
    series = alert_frequency_series(result, fill_gaps=fill_gaps)
    df = pd.DataFrame({"bucket": series.labels, "count": series.datasets[0].data})
    df["hour"] = pd.to_datetime(df["bucket"], format=HOUR_KEY_FORMAT, errors="coerce")
    return df
