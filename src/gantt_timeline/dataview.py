"""
DataView builder for gantt-timeline.

PURPOSE: Aggregate raw records into per-label time series and summary metrics.
AI CONTEXT: Pure data processing - no visualization, no I/O.

BUILD STEPS:
1. Reduce records to label -> date -> summed value (one pass, O(records))
2. Resolve the domain (explicit dates/labels, or derived from records)
3. Build one LabelSeries per domain label: positive points sorted by date,
   sum, first/last date, duration as a domain index difference
4. Order the series with the named sort strategy
5. Compute the global maximum point value

USAGE:
    builder = DataViewBuilder()
    view = builder.build(records, DomainConfig(labels=("A", "B")), "alphabetical")
    view.global_max
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .errors import InvalidDomain
from .models import (
    DataView,
    DateAccessor,
    Domain,
    DomainConfig,
    LabelSeries,
    Point,
    Record,
)
from .sorting import sort_label_series, validate_strategy

__all__ = ["DataViewBuilder", "build_data_view"]

logger = logging.getLogger(__name__)


class DataViewBuilder:
    """
    Builder turning unordered records into a frozen DataView.

    DESIGN:
    - Stateless: Each call operates only on the provided arguments
    - Pure: No side effects, a fresh DataView per call
    - Positional: duration and point indices are domain positions, so bar
      counts do not depend on the spacing between dates
    """

    def build(
        self,
        records: Iterable[Record],
        domain_config: DomainConfig | None = None,
        sort_strategy: str | None = None,
    ) -> DataView:
        """
        Build the data view for one render pass.

        Aggregates records by label and date, resolves the domain, derives
        per-label metrics and orders the result. Labels listed in the
        domain but absent from the records still get an (empty) series;
        records for labels outside an explicit label list are ignored.

        Business context: Both encoders and the summary builder read only
        the DataView, so every metric a renderer needs is computed here
        exactly once.

        Args:
            records: Raw records. Multiple records for the same
                (label, date) are summed, never overwritten.
            domain_config: Explicit dates/labels and the date accessor.
                Default derives both dates and labels from the records.
            sort_strategy: Registered sort name, or None for reverse
                construction order.

        Returns:
            DataView with domain, ordered label series and global_max.

        Raises:
            InvalidStrategy: If sort_strategy is not registered.
            InvalidDomain: If the resolved date domain is empty while
                records were supplied.

        Example:
            >>> view = DataViewBuilder().build(
            ...     [Record("A", 1, 10), Record("A", 2, 0), Record("B", 1, 5)],
            ...     DomainConfig(dates=(1, 2), labels=("A", "B")),
            ...     "alphabetical",
            ... )
            >>> [s.sum for s in view.label_series]
            [10.0, 5.0]
        """
        domain_config = domain_config or DomainConfig()
        validate_strategy(sort_strategy)
        accessor = domain_config.date_accessor

        records = list(records)
        by_label = self.aggregate(records)
        domain = self.resolve_domain(records, by_label, domain_config)

        if records and not domain.dates:
            raise InvalidDomain(
                f"Date domain is empty but {len(records)} records were supplied"
            )

        positions = {d: i for i, d in enumerate(domain.dates)}
        series = [
            self.build_series(label, by_label.get(label, {}), positions, accessor)
            for label in domain.labels
        ]
        ordered = sort_label_series(series, sort_strategy, accessor)
        global_max = max((p.value for s in ordered for p in s.points), default=0.0)

        logger.debug(
            f"Built data view: {len(ordered)} labels, {len(domain.dates)} dates, "
            f"max={global_max}, sort={sort_strategy}"
        )
        return DataView(domain=domain, label_series=ordered, global_max=global_max)

    @staticmethod
    def aggregate(records: Iterable[Record]) -> dict[str, dict[Any, float]]:
        """
        Two-level reduction: label -> date -> summed value.

        A single pass over the records; both dict levels keep first-seen
        order, which is the order used for derived label lists.

        Args:
            records: Raw records.

        Returns:
            Nested dict of summed values, zero and negative sums included.

        Example:
            >>> DataViewBuilder.aggregate([Record("A", 1, 2), Record("A", 1, 3)])
            {'A': {1: 5.0}}
        """
        by_label: dict[str, dict[Any, float]] = {}
        for record in records:
            by_date = by_label.setdefault(record.label, {})
            by_date[record.date] = by_date.get(record.date, 0.0) + float(record.value)
        return by_label

    @staticmethod
    def resolve_domain(
        records: list[Record],
        by_label: Mapping[str, Mapping[Any, float]],
        domain_config: DomainConfig,
    ) -> Domain:
        """
        Resolve the ordered date and label universe.

        Explicit dates override the dates found in the records. Dates are
        deduplicated and sorted by the accessor; labels keep the supplied
        order (first occurrence wins for duplicates).

        Args:
            records: Raw records, used when no explicit dates are given.
            by_label: Aggregated values, used when no labels are given.
            domain_config: Caller settings.

        Returns:
            Resolved Domain.
        """
        accessor = domain_config.date_accessor
        if domain_config.dates is not None:
            raw_dates: Iterable[Any] = domain_config.dates
        else:
            raw_dates = (r.date for r in records)
        dates = tuple(sorted(dict.fromkeys(raw_dates), key=accessor))

        if domain_config.labels is not None:
            labels = tuple(dict.fromkeys(domain_config.labels))
        else:
            labels = tuple(by_label)
        return Domain(dates=dates, labels=labels)

    @staticmethod
    def build_series(
        label: str,
        by_date: Mapping[Any, float],
        positions: Mapping[Any, int],
        date_accessor: DateAccessor,
    ) -> LabelSeries:
        """
        Derive one label's points and metrics.

        Non-positive aggregated values are dropped. Points outside the
        domain keep index None: they count toward sum and first/last date
        but not toward the positional span (first_index, last_index,
        duration).

        Args:
            label: Series label.
            by_date: Summed values per date for this label.
            positions: Date -> position within Domain.dates.
            date_accessor: Ordering function for dates.

        Returns:
            LabelSeries; empty (sum 0, dates None) when no value is positive.
        """
        positive = sorted(
            ((d, v) for d, v in by_date.items() if v > 0),
            key=lambda item: date_accessor(item[0]),
        )
        if not positive:
            return LabelSeries(label=label)

        points = tuple(Point(date=d, value=v, index=positions.get(d)) for d, v in positive)
        indices = [p.index for p in points if p.index is not None]
        first_index = indices[0] if indices else None
        last_index = indices[-1] if indices else None
        duration = last_index - first_index if indices else 0

        return LabelSeries(
            label=label,
            points=points,
            sum=sum(p.value for p in points),
            first_date=points[0].date,
            last_date=points[-1].date,
            duration=duration,
            first_index=first_index,
            last_index=last_index,
        )


_DEFAULT_BUILDER = DataViewBuilder()


def build_data_view(
    records: Iterable[Record],
    domain_config: DomainConfig | None = None,
    sort_strategy: str | None = None,
) -> DataView:
    """
    Build a DataView with the shared stateless builder.

    Host-facing entry point; see DataViewBuilder.build() for semantics.
    """
    return _DEFAULT_BUILDER.build(records, domain_config, sort_strategy)
