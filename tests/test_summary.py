"""Tests for summary module."""

from __future__ import annotations

from datetime import date

from gantt_timeline.dataview import build_data_view
from gantt_timeline.models import DomainConfig, LabelSeries, Record
from gantt_timeline.summary import LabelDigest, summarize


class TestSummarize:
    """Test suite for summarize().

    Categories:
    1. Layout (2 tests)
    2. Entry selection (2 tests)
    3. Formatting hooks (2 tests)
    """

    def test_lines_layout(self, yearly_records: list[Record]) -> None:
        """Verifies the tooltip layout of a multi-point label.

        Business context:
        Hovering a bar shows where the label starts and ends, its total,
        and one line per active date.

        Arrangement:
        Alpha: 2018=4, 2020=6, 2021=10.

        Action:
        Summarize Alpha.

        Assertion Strategy:
        Exact line tuple, blank separators included.
        """
        view = build_data_view(yearly_records)
        digest = summarize(view.get_series("Alpha"))

        assert digest.lines == (
            "Label: Alpha",
            "",
            "Start: 2018",
            "End: 2021",
            "",
            "Sum: 20",
            "",
            "2018: 4",
            "2020: 6",
            "2021: 10",
        )

    def test_as_text_separator(self) -> None:
        """Verifies as_text() joins the lines with the given separator."""
        digest = LabelDigest("A", "1", "1", "3", ("1: 3",))
        assert digest.as_text("|") == "Label: A||Start: 1|End: 1||Sum: 3||1: 3"

    def test_zero_values_are_not_listed(self, example_records: list[Record]) -> None:
        """Verifies explicit zeros never show up as entries."""
        view = build_data_view(example_records)
        assert summarize(view.get_series("A")).entries == ("1: 10",)

    def test_out_of_domain_points_are_listed(self, yearly_records: list[Record]) -> None:
        """Verifies the digest describes all data, not just what is drawn."""
        view = build_data_view(yearly_records, DomainConfig(dates=(2020, 2021)))
        digest = summarize(view.get_series("Alpha"))

        assert digest.first_date == "2018"
        assert "2018: 4" in digest.entries

    def test_custom_formatters(self) -> None:
        """Verifies number_format and date_format hooks are applied."""
        view = build_data_view([Record("A", date(2021, 3, 1), 2.5)])
        digest = summarize(
            view.get_series("A"),
            number_format=lambda v: f"{v:.1f}h",
            date_format=lambda d: d.strftime("%b %Y"),
        )

        assert digest.sum_text == "2.5h"
        assert digest.entries == ("Mar 2021: 2.5h",)

    def test_empty_series(self) -> None:
        """Verifies an empty series gives blank dates and a zero sum."""
        digest = summarize(LabelSeries(label="Idle"))

        assert (digest.first_date, digest.last_date, digest.sum_text) == (None, None, "0")
        assert digest.lines[2:4] == ("Start: ", "End: ")
        assert digest.entries == ()

    def test_to_dict(self, example_records: list[Record]) -> None:
        """Verifies the JSON form of a digest."""
        view = build_data_view(example_records)
        assert summarize(view.get_series("B")).to_dict() == {
            "label": "B",
            "first_date": "1",
            "last_date": "1",
            "sum_text": "5",
            "entries": ["1: 5"],
        }
