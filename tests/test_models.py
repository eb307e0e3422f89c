"""Tests for models module."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from gantt_timeline.models import (
    DataView,
    Domain,
    LabelSeries,
    Point,
    Record,
    default_date_accessor,
    json_date,
)


class TestHelperFunctions:
    """Tests for module-level helper functions."""

    def test_accessor_numbers_map_to_themselves(self) -> None:
        """Ints and floats become floats."""
        assert default_date_accessor(2021) == 2021.0
        assert default_date_accessor(3.5) == 3.5

    def test_accessor_date_is_midnight_timestamp(self) -> None:
        """Dates map to the timestamp of their local midnight."""
        assert default_date_accessor(date(2021, 1, 2)) == datetime(2021, 1, 2).timestamp()
        assert default_date_accessor(date(2021, 1, 2)) == default_date_accessor("2021-01-02")

    def test_accessor_mixed_types_share_one_scale(self) -> None:
        """Dates, datetimes and ISO strings compare on the same time axis.

        Business context:
        One store can hold dates parsed by a Python caller next to ISO
        strings from a JSON import. Their keys must agree on chronology.

        Arrangement:
        Pairs whose calendar order is known.

        Action:
        Map each value through the default accessor.

        Assertion Strategy:
        Keys follow calendar order across types.
        """
        assert default_date_accessor(datetime(1970, 1, 10)) < default_date_accessor(
            date(2021, 1, 1)
        )
        assert default_date_accessor("2019-06-01") < default_date_accessor(date(2021, 1, 1))
        assert default_date_accessor(date(2021, 1, 1)) < default_date_accessor(
            datetime(2021, 1, 1, 12)
        )

    def test_accessor_datetime_uses_timestamp(self) -> None:
        """Datetimes order by their POSIX timestamp."""
        moment = datetime(2021, 1, 1, tzinfo=timezone.utc)
        assert default_date_accessor(moment) == moment.timestamp()

    def test_accessor_numeric_string(self) -> None:
        """Numeric strings are read as numbers."""
        assert default_date_accessor("2020") == 2020.0

    def test_accessor_iso_strings_order_chronologically(self) -> None:
        """ISO 8601 strings order by time, not by text."""
        earlier = default_date_accessor("2021-01-01T09:00:00Z")
        later = default_date_accessor("2021-01-01T10:00:00Z")
        assert earlier < later

    def test_accessor_rejects_unorderable(self) -> None:
        """Booleans, objects and junk strings are refused."""
        with pytest.raises(TypeError):
            default_date_accessor(True)
        with pytest.raises(TypeError):
            default_date_accessor(object())
        with pytest.raises(ValueError):
            default_date_accessor("next tuesday")

    def test_json_date(self) -> None:
        """Dates serialize as ISO strings; other values pass through."""
        assert json_date(date(2021, 5, 1)) == "2021-05-01"
        assert json_date(2021) == 2021
        assert json_date("Q1") == "Q1"


class TestRecord:
    """Tests for Record dataclass."""

    def test_from_dict_coerces_types(self) -> None:
        """from_dict() stringifies labels and floats values."""
        record = Record.from_dict({"label": 7, "date": 2020, "value": "3"})
        assert record == Record("7", 2020, 3.0)

    def test_from_dict_missing_key_raises(self) -> None:
        """Missing keys raise KeyError."""
        with pytest.raises(KeyError):
            Record.from_dict({"label": "A", "date": 2020})

    def test_from_dict_bad_value_raises(self) -> None:
        """Non-numeric values raise ValueError."""
        with pytest.raises(ValueError):
            Record.from_dict({"label": "A", "date": 2020, "value": "lots"})

    def test_to_dict(self) -> None:
        """to_dict() serializes date objects as ISO strings."""
        assert Record("A", date(2020, 1, 1), 2.0).to_dict() == {
            "label": "A",
            "date": "2020-01-01",
            "value": 2.0,
        }

    def test_is_frozen(self) -> None:
        """Records are immutable."""
        record = Record("A", 1, 1.0)
        with pytest.raises(AttributeError):
            record.value = 2.0  # type: ignore[misc]


class TestPoint:
    """Tests for Point dataclass."""

    def test_in_domain(self) -> None:
        """Only indexed points are in the domain."""
        assert Point(1, 2.0, 0).in_domain
        assert not Point(1, 2.0).in_domain

    def test_to_dict(self) -> None:
        """to_dict() includes the index."""
        assert Point(1, 2.0, None).to_dict() == {"date": 1, "value": 2.0, "index": None}


class TestLabelSeries:
    """Tests for LabelSeries dataclass."""

    def test_defaults_are_empty(self) -> None:
        """A bare series has no points and no range."""
        series = LabelSeries(label="A")

        assert series.is_empty
        assert series.sum == 0.0
        assert (series.first_date, series.last_date, series.duration) == (None, None, 0)

    def test_domain_points_filters_unindexed(self) -> None:
        """domain_points drops points outside the domain, keeping order."""
        series = LabelSeries(
            label="A",
            points=(Point(1, 1.0), Point(2, 2.0, 0), Point(3, 3.0, 1)),
            sum=6.0,
        )
        assert [p.date for p in series.domain_points] == [2, 3]

    def test_to_dict(self) -> None:
        """to_dict() includes metrics and serialized points."""
        series = LabelSeries(
            label="A",
            points=(Point(date(2020, 1, 1), 2.0, 0),),
            sum=2.0,
            first_date=date(2020, 1, 1),
            last_date=date(2020, 1, 1),
            first_index=0,
            last_index=0,
        )
        data = series.to_dict()

        assert data["first_date"] == "2020-01-01"
        assert data["points"] == [{"date": "2020-01-01", "value": 2.0, "index": 0}]
        assert data["duration"] == 0


class TestDataView:
    """Tests for DataView dataclass."""

    def _view(self) -> DataView:
        return DataView(
            domain=Domain(dates=(1, 2), labels=("A", "B")),
            label_series=(LabelSeries(label="B"), LabelSeries(label="A")),
            global_max=0.0,
        )

    def test_labels_follow_series_order(self) -> None:
        """labels reflects display order, not domain order."""
        assert self._view().labels == ("B", "A")

    def test_get_series(self) -> None:
        """get_series() finds by label and returns None when missing."""
        view = self._view()

        assert view.get_series("A").label == "A"
        assert view.get_series("Z") is None

    def test_to_dict(self) -> None:
        """to_dict() nests the domain and series."""
        data = self._view().to_dict()

        assert data["domain"] == {"dates": [1, 2], "labels": ["A", "B"]}
        assert [s["label"] for s in data["label_series"]] == ["B", "A"]
        assert data["global_max"] == 0.0
