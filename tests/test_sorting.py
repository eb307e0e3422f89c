"""Tests for sorting module."""

from __future__ import annotations

import pytest

from gantt_timeline.errors import InvalidStrategy
from gantt_timeline.models import LabelSeries, Point
from gantt_timeline.sorting import (
    SORT_STRATEGIES,
    sort_label_series,
    strategy_names,
    validate_strategy,
)


def _series(
    label: str, total: float = 1.0, first: int | None = 1, duration: int = 0
) -> LabelSeries:
    """Build a LabelSeries with just the fields the strategies read."""
    if first is None:
        return LabelSeries(label=label)
    return LabelSeries(
        label=label,
        points=(Point(first, total, 0),),
        sum=total,
        first_date=first,
        last_date=first + duration,
        duration=duration,
        first_index=0,
        last_index=duration,
    )


class TestRegistry:
    """Test suite for the closed strategy registry."""

    def test_registered_names(self) -> None:
        """Verifies exactly the four documented strategies exist."""
        assert strategy_names() == ("alphabetical", "duration", "intensity", "firstDate")

    def test_registry_is_read_only(self) -> None:
        """Verifies callers cannot register strategies at runtime.

        Business context:
        The set is closed so every host offers the same sort menu.
        """
        with pytest.raises(TypeError):
            SORT_STRATEGIES["random"] = SORT_STRATEGIES["duration"]  # type: ignore[index]

    def test_validate_none_is_default(self) -> None:
        """Verifies None selects the default order."""
        assert validate_strategy(None) is None

    def test_validate_unknown_lists_known_names(self) -> None:
        """Verifies the error names the valid choices."""
        with pytest.raises(InvalidStrategy) as exc_info:
            validate_strategy("newest")

        assert exc_info.value.name == "newest"
        assert "alphabetical" in str(exc_info.value)


class TestOrders:
    """Test suite for the direction of each strategy.

    Categories:
    1. Ascending strategies (3 tests)
    2. Descending firstDate (2 tests)
    3. Default reverse order (1 test)
    """

    def test_alphabetical(self) -> None:
        """Verifies labels ascend."""
        ordered = sort_label_series([_series("b"), _series("c"), _series("a")], "alphabetical")
        assert [s.label for s in ordered] == ["a", "b", "c"]

    def test_duration_ascending(self) -> None:
        """Verifies shorter ranges come first."""
        ordered = sort_label_series(
            [_series("long", duration=4), _series("short", duration=0), _series("mid", duration=2)],
            "duration",
        )
        assert [s.label for s in ordered] == ["short", "mid", "long"]

    def test_intensity_ascending(self) -> None:
        """Verifies smaller sums come first."""
        ordered = sort_label_series(
            [_series("hi", total=9), _series("lo", total=1), _series("mid", total=5)],
            "intensity",
        )
        assert [s.label for s in ordered] == ["lo", "mid", "hi"]

    def test_first_date_descending(self) -> None:
        """Verifies the most recently started label comes first."""
        ordered = sort_label_series(
            [_series("old", first=2001), _series("new", first=2010), _series("mid", first=2005)],
            "firstDate",
        )
        assert [s.label for s in ordered] == ["new", "mid", "old"]

    def test_first_date_empty_series_sort_last(self) -> None:
        """Verifies labels without data count as earliest.

        Business context:
        Rows with nothing to draw should not push active rows down.
        """
        ordered = sort_label_series(
            [_series("empty", first=None), _series("a", first=2001), _series("b", first=2002)],
            "firstDate",
        )
        assert [s.label for s in ordered] == ["b", "a", "empty"]

    def test_default_is_reverse_construction_order(self) -> None:
        """Verifies None reverses the input order."""
        ordered = sort_label_series([_series("a"), _series("b"), _series("c")])
        assert [s.label for s in ordered] == ["c", "b", "a"]


class TestStability:
    """Test suite for tie handling.

    Each strategy receives inputs whose keys all tie; the original
    relative order must survive, including for the descending strategy.
    """

    @pytest.mark.parametrize("strategy", ["duration", "intensity", "firstDate"])
    def test_ties_keep_input_order(self, strategy: str) -> None:
        """Verifies equal keys keep construction order.

        Arrangement:
        Three series with identical sum, duration and first date.

        Action:
        Sort with the parametrized strategy.

        Assertion Strategy:
        Output order equals input order.
        """
        series = [_series("z"), _series("m"), _series("a")]
        ordered = sort_label_series(series, strategy)
        assert [s.label for s in ordered] == ["z", "m", "a"]

    def test_partial_ties_keep_input_order(self) -> None:
        """Verifies ties among otherwise ordered keys stay stable."""
        series = [
            _series("x", total=2),
            _series("y", total=1),
            _series("z", total=2),
            _series("w", total=1),
        ]
        ordered = sort_label_series(series, "intensity")
        assert [s.label for s in ordered] == ["y", "w", "x", "z"]

    def test_returns_new_tuple(self) -> None:
        """Verifies the input list is not mutated."""
        series = [_series("b"), _series("a")]
        ordered = sort_label_series(series, "alphabetical")

        assert isinstance(ordered, tuple)
        assert [s.label for s in series] == ["b", "a"]
