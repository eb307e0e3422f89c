"""
Data models for gantt-timeline.

PURPOSE: Type-safe, immutable dataclasses for records and the derived data view.
AI CONTEXT: These models define the contract between the builder and both encoders.

MODEL HIERARCHY:
- Record: One raw (label, date, value) input triple
- DomainConfig: Caller-supplied date/label universe and date accessor
- Domain: Resolved, ordered date/label universe
- Point: One aggregated (date, value) entry with its domain position
- LabelSeries: Sorted points and summary metrics for one label
- DataView: Domain + ordered label series + global maximum

SERIALIZATION:
Records have from_dict() for JSON loading; all models have to_dict().
date/datetime values serialize as ISO 8601 strings, other dates unchanged.

USAGE:
    record = Record.from_dict({"label": "A", "date": 2020, "value": 3})
    config = DomainConfig(labels=("A", "B"))
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

__all__ = [
    "DateAccessor",
    "default_date_accessor",
    "json_date",
    "Record",
    "DomainConfig",
    "Domain",
    "Point",
    "LabelSeries",
    "DataView",
]

DateAccessor = Callable[[Any], float]


def default_date_accessor(value: Any) -> float:
    """
    Map a date-like value to a number used only for ordering.

    Numbers map to themselves. Dates, datetimes and ISO 8601 strings all
    map to POSIX seconds, so they order correctly against each other; a
    plain date counts as local midnight. Strings are read as numbers when
    possible and otherwise as ISO 8601 dates or datetimes.

    Business context: Records arrive from JSON (years as ints, ISO strings)
    or from Python callers (date objects). One accessor covers all of
    them so callers rarely need to supply their own.

    Args:
        value: Date-like value from a record or domain.

    Returns:
        Float sort key.

    Raises:
        TypeError: If the value has no natural numeric ordering.
        ValueError: If a string is neither numeric nor ISO 8601.

    Example:
        >>> default_date_accessor(2021)
        2021.0
        >>> default_date_accessor(date(2021, 1, 1)) == default_date_accessor("2021-01-01")
        True
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid dates")
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).timestamp()
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    raise TypeError(f"Cannot order date value of type {type(value).__name__}")


def json_date(value: Any) -> Any:
    """Serialize date/datetime to ISO 8601, leave other date values as-is."""
    if isinstance(value, date):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class Record:
    """
    One raw input triple.

    Several records may share (label, date); the builder sums them.
    """

    label: str
    date: Any
    value: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        """
        Deserialize a record from a JSON mapping.

        Args:
            data: Mapping with 'label', 'date' and 'value' keys.

        Returns:
            Record with label coerced to str and value to float.

        Raises:
            KeyError: If a required key is missing.
            ValueError: If value is not numeric.

        Example:
            >>> Record.from_dict({"label": "A", "date": 2020, "value": "3"})
            Record(label='A', date=2020, value=3.0)
        """
        return cls(
            label=str(data["label"]),
            date=data["date"],
            value=float(data["value"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize record for JSON storage."""
        return {"label": self.label, "date": json_date(self.date), "value": self.value}


@dataclass(frozen=True)
class DomainConfig:
    """
    Caller-supplied domain settings.

    Attributes:
        dates: Explicit date universe. None derives it from the records.
        labels: Label universe in display order. None derives it from the
            records in order of first appearance.
        date_accessor: Maps a date to a number, used for ordering only.
    """

    dates: Sequence[Any] | None = None
    labels: Sequence[str] | None = None
    date_accessor: DateAccessor = default_date_accessor


@dataclass(frozen=True)
class Domain:
    """Resolved universe: dates deduplicated and sorted, labels as supplied."""

    dates: tuple[Any, ...]
    labels: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Serialize domain for JSON output."""
        return {
            "dates": [json_date(d) for d in self.dates],
            "labels": list(self.labels),
        }


@dataclass(frozen=True)
class Point:
    """
    One aggregated (date, value) entry of a label series.

    index is the position of date within Domain.dates, or None when the
    date lies outside an explicitly supplied domain.
    """

    date: Any
    value: float
    index: int | None = None

    @property
    def in_domain(self) -> bool:
        """True when the point can be positionally encoded."""
        return self.index is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize point for JSON output."""
        return {"date": json_date(self.date), "value": self.value, "index": self.index}


@dataclass(frozen=True)
class LabelSeries:
    """
    Aggregated time series and summary metrics for one label.

    INVARIANTS:
    - points strictly increase by date accessor, all values > 0
    - sum equals the sum of point values
    - first_date/last_date are None iff points is empty
    - duration is last_index - first_index over the in-domain points
      (a bar count, independent of date spacing)
    """

    label: str
    points: tuple[Point, ...] = ()
    sum: float = 0.0
    first_date: Any = None
    last_date: Any = None
    duration: int = 0
    first_index: int | None = None
    last_index: int | None = None

    @property
    def is_empty(self) -> bool:
        """True when the label has no positive values."""
        return not self.points

    @property
    def domain_points(self) -> tuple[Point, ...]:
        """Points whose dates lie inside the declared domain, in date order."""
        return tuple(p for p in self.points if p.in_domain)

    def to_dict(self) -> dict[str, Any]:
        """Serialize series for JSON output."""
        return {
            "label": self.label,
            "points": [p.to_dict() for p in self.points],
            "sum": self.sum,
            "first_date": json_date(self.first_date),
            "last_date": json_date(self.last_date),
            "duration": self.duration,
            "first_index": self.first_index,
            "last_index": self.last_index,
        }


@dataclass(frozen=True)
class DataView:
    """
    Read-only result of one build pass.

    Holds no reference to the raw records; a new one is built for every
    render pass.
    """

    domain: Domain
    label_series: tuple[LabelSeries, ...]
    global_max: float = 0.0

    @property
    def labels(self) -> tuple[str, ...]:
        """Labels in label-series (display) order."""
        return tuple(s.label for s in self.label_series)

    def get_series(self, label: str) -> LabelSeries | None:
        """
        Look up one label's series.

        Args:
            label: Label to find.

        Returns:
            The LabelSeries, or None if the label is not in the domain.
        """
        for series in self.label_series:
            if series.label == label:
                return series
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the data view for JSON output."""
        return {
            "domain": self.domain.to_dict(),
            "label_series": [s.to_dict() for s in self.label_series],
            "global_max": self.global_max,
        }
