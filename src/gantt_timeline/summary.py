"""
Summary text builder for gantt-timeline.

PURPOSE: Per-label digest shown on hover, in the CLI and through the API.
AI CONTEXT: Reads one LabelSeries; knows nothing about encoding or colors.

LAYOUT (LabelDigest.lines):
    Label: A
    <blank>
    Start: 2020
    End: 2022
    <blank>
    Sum: 15
    <blank>
    2020: 10
    2022: 5
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .config import format_number
from .models import LabelSeries

__all__ = ["LabelDigest", "summarize"]


@dataclass(frozen=True)
class LabelDigest:
    """Formatted summary of one label series."""

    label: str
    first_date: str | None
    last_date: str | None
    sum_text: str
    entries: tuple[str, ...] = ()

    @property
    def lines(self) -> tuple[str, ...]:
        """Tooltip lines, blank strings separating the sections."""
        return (
            f"Label: {self.label}",
            "",
            f"Start: {self.first_date or ''}",
            f"End: {self.last_date or ''}",
            "",
            f"Sum: {self.sum_text}",
            "",
            *self.entries,
        )

    def as_text(self, separator: str = "\n") -> str:
        """Join lines for display; the web layer passes "<br/>"."""
        return separator.join(self.lines)

    def to_dict(self) -> dict[str, Any]:
        """Serialize digest for JSON output."""
        return {
            "label": self.label,
            "first_date": self.first_date,
            "last_date": self.last_date,
            "sum_text": self.sum_text,
            "entries": list(self.entries),
        }


def summarize(
    series: LabelSeries,
    number_format: Callable[[float], str] | None = None,
    date_format: Callable[[Any], str] = str,
) -> LabelDigest:
    """
    Build the digest of one label series.

    Out-of-domain points are listed too: the digest describes the label's
    data, not what the chart could place.

    Args:
        series: Label series from a DataView.
        number_format: Value formatter. None uses format_number().
        date_format: Date formatter, str() by default.

    Returns:
        LabelDigest; an empty series gives empty dates and a zero sum.

    Example:
        >>> digest = summarize(view.get_series("A"))
        >>> digest.entries
        ('2020: 10', '2022: 5')
    """
    fmt = number_format or format_number
    return LabelDigest(
        label=series.label,
        first_date=None if series.first_date is None else date_format(series.first_date),
        last_date=None if series.last_date is None else date_format(series.last_date),
        sum_text=fmt(series.sum),
        entries=tuple(
            f"{date_format(p.date)}: {fmt(p.value)}" for p in series.points if p.value != 0
        ),
    )
