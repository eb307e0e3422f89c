"""
Sort strategy registry for label series.

PURPOSE: Closed set of named, stable orderings over computed label metrics.
AI CONTEXT: Pure functions - the builder calls sort_label_series() once per build.

STRATEGIES:
- alphabetical: label ascending
- duration:     duration ascending
- intensity:    sum ascending
- firstDate:    first date descending (most recent first); labels without
                data count as earliest and therefore come last
- None:         reverse of construction order (last declared label first)

Every strategy is stable: ties keep their original relative order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .errors import InvalidStrategy
from .models import DateAccessor, LabelSeries, default_date_accessor

__all__ = [
    "SortStrategy",
    "SORT_STRATEGIES",
    "strategy_names",
    "validate_strategy",
    "sort_label_series",
]


@dataclass(frozen=True)
class SortStrategy:
    """A named sort key over LabelSeries plus its direction."""

    name: str
    key: Callable[[LabelSeries, DateAccessor], Any]
    descending: bool = False


def _first_date_key(series: LabelSeries, date_accessor: DateAccessor) -> float:
    if series.first_date is None:
        return float("-inf")
    return date_accessor(series.first_date)


SORT_STRATEGIES = MappingProxyType(
    {
        "alphabetical": SortStrategy("alphabetical", lambda s, _acc: s.label),
        "duration": SortStrategy("duration", lambda s, _acc: s.duration),
        "intensity": SortStrategy("intensity", lambda s, _acc: s.sum),
        "firstDate": SortStrategy("firstDate", _first_date_key, descending=True),
    }
)


def strategy_names() -> tuple[str, ...]:
    """Return the registered strategy names in registration order."""
    return tuple(SORT_STRATEGIES)


def validate_strategy(name: str | None) -> SortStrategy | None:
    """
    Resolve a strategy name, failing fast on unknown names.

    Args:
        name: Strategy name, or None for the default reverse order.

    Returns:
        The SortStrategy, or None for the default order.

    Raises:
        InvalidStrategy: If name is not registered.
    """
    if name is None:
        return None
    try:
        return SORT_STRATEGIES[name]
    except KeyError:
        raise InvalidStrategy(name, strategy_names()) from None


def sort_label_series(
    series: Iterable[LabelSeries],
    strategy: str | None = None,
    date_accessor: DateAccessor = default_date_accessor,
) -> tuple[LabelSeries, ...]:
    """
    Order label series with a named strategy.

    Python's sort is stable in both directions, so labels with equal keys
    keep their construction order even for the descending firstDate order.

    Args:
        series: Label series in construction (domain label) order.
        strategy: Registered strategy name, or None.
        date_accessor: Ordering function for dates (firstDate strategy).

    Returns:
        New tuple of series in display order.

    Raises:
        InvalidStrategy: If strategy is not registered.

    Example:
        >>> ordered = sort_label_series(series, "intensity")
        >>> [s.sum for s in ordered]
        [5.0, 10.0]
    """
    chosen = validate_strategy(strategy)
    if chosen is None:
        return tuple(reversed(list(series)))
    return tuple(
        sorted(
            series,
            key=lambda s: chosen.key(s, date_accessor),
            reverse=chosen.descending,
        )
    )
