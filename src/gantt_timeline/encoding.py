"""
Visual encoding engine for gantt-timeline.

PURPOSE: Turn a DataView into a renderer-agnostic visual model.
AI CONTEXT: Pure functions over frozen models - no pixels, no I/O, no globals.

STYLES:
- fraction: one Cell per positive in-domain (label, date) point
- gradient: one GradientBar per label, its stops spanning the active range

GRADIENT STOP RULE:
    duration == 0 (one in-domain point) or duration < 0:
        a single stop at offset 100
    otherwise, for each in-domain point:
        recency = (last_index - index) / duration
        offset  = (1 - recency) * 100

Both encoders receive the resolved ColorMode; neither branches on the mode name.

USAGE:
    view = build_data_view(records, DomainConfig(labels=("A", "B")))
    model = encode_visuals(view, EncodingConfig(style="fraction"))
    for cell in model.cells:
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from .colors import ColorMode, resolve_color_mode
from .config import Config, EncodingConfig
from .errors import InvalidStyle
from .models import DataView, LabelSeries, json_date

__all__ = [
    "Cell",
    "GradientStop",
    "GradientBar",
    "FractionModel",
    "GradientModel",
    "VisualModel",
    "FractionEncoder",
    "GradientEncoder",
    "encode_visuals",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """One discrete (label, date) unit of the fraction style."""

    label: str
    date: Any
    index: int
    value: float
    color: str
    opacity: float
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize cell for JSON output."""
        return {
            "label": self.label,
            "date": json_date(self.date),
            "index": self.index,
            "value": self.value,
            "color": self.color,
            "opacity": self.opacity,
            "text": self.text,
        }


@dataclass(frozen=True)
class GradientStop:
    """One (offset, color, opacity) triple along a gradient bar."""

    offset_percent: float
    color: str
    opacity: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize stop for JSON output."""
        return {
            "offset_percent": self.offset_percent,
            "color": self.color,
            "opacity": self.opacity,
        }


@dataclass(frozen=True)
class GradientBar:
    """
    One continuous bar of the gradient style.

    Attributes:
        label: Series label.
        start_index: Domain position where the bar starts, None if the
            series has no in-domain points.
        span: Number of date bands covered (0 for no in-domain points).
        stops: Ordered gradient stops.
        text: Display text, None for empty series or disabled labels.
    """

    label: str
    start_index: int | None
    span: int
    stops: tuple[GradientStop, ...] = ()
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize bar for JSON output."""
        return {
            "label": self.label,
            "start_index": self.start_index,
            "span": self.span,
            "stops": [s.to_dict() for s in self.stops],
            "text": self.text,
        }


@dataclass(frozen=True)
class FractionModel:
    """Visual model of the fraction style."""

    labels: tuple[str, ...]
    dates: tuple[Any, ...]
    cells: tuple[Cell, ...]
    color_mode: str
    style: ClassVar[str] = "fraction"

    def to_dict(self) -> dict[str, Any]:
        """Serialize model for JSON output."""
        return {
            "style": self.style,
            "color_mode": self.color_mode,
            "labels": list(self.labels),
            "dates": [json_date(d) for d in self.dates],
            "cells": [c.to_dict() for c in self.cells],
        }


@dataclass(frozen=True)
class GradientModel:
    """Visual model of the gradient style."""

    labels: tuple[str, ...]
    dates: tuple[Any, ...]
    bars: tuple[GradientBar, ...]
    color_mode: str
    style: ClassVar[str] = "gradient"

    def to_dict(self) -> dict[str, Any]:
        """Serialize model for JSON output."""
        return {
            "style": self.style,
            "color_mode": self.color_mode,
            "labels": list(self.labels),
            "dates": [json_date(d) for d in self.dates],
            "bars": [b.to_dict() for b in self.bars],
        }


VisualModel = FractionModel | GradientModel


class FractionEncoder:
    """
    Encode each positive in-domain point as one colored cell.

    Points outside the declared domain have no position and are skipped;
    their values still count toward the series sum.
    """

    def __init__(self, encoding_config: EncodingConfig) -> None:
        self.config = encoding_config

    def encode(self, data_view: DataView, color_mode: ColorMode) -> FractionModel:
        fmt = self.config.number_format if self.config.labels else None
        cells = []
        for series in data_view.label_series:
            for point in series.domain_points:
                color, opacity = color_mode.cell_style(
                    series.label, point.value, data_view.global_max
                )
                cells.append(
                    Cell(
                        label=series.label,
                        date=point.date,
                        index=point.index,
                        value=point.value,
                        color=color,
                        opacity=opacity,
                        text=fmt(point.value) if fmt else None,
                    )
                )
        return FractionModel(
            labels=data_view.labels,
            dates=data_view.domain.dates,
            cells=tuple(cells),
            color_mode=color_mode.mode,
        )


class GradientEncoder:
    """Encode each label series as one bar with ordered gradient stops."""

    def __init__(self, encoding_config: EncodingConfig) -> None:
        self.config = encoding_config

    @staticmethod
    def encode_series(
        series: LabelSeries,
        color_mode: ColorMode,
        global_max: float,
    ) -> tuple[GradientStop, ...]:
        """
        Compute the gradient stops of one label series.

        Offsets are positional: a stop sits at the point's share of the
        bar's band span, so the gradient lines up with the date bands
        regardless of the spacing between dates.

        Args:
            series: Label series from the data view.
            color_mode: Resolved color variant.
            global_max: DataView.global_max, the normalization ceiling.

        Returns:
            Stops in date order; () when no point lies in the domain.

        Example:
            >>> # points at positions 2 and 5, duration 3
            >>> [s.offset_percent for s in GradientEncoder.encode_series(series, mode, 10.0)]
            [0.0, 100.0]
        """
        points = series.domain_points
        if not points:
            return ()

        if series.duration <= 0:
            point = points[0]
            color, opacity = color_mode.stop_style(series.label, point.value, global_max)
            return (GradientStop(Config.SINGLE_POINT_OFFSET, color, opacity),)

        stops = []
        for point in points:
            recency = (series.last_index - point.index) / series.duration
            color, opacity = color_mode.stop_style(series.label, point.value, global_max)
            stops.append(GradientStop((1 - recency) * 100, color, opacity))
        return tuple(stops)

    def bar_text(self, series: LabelSeries) -> str | None:
        """Bar text: formatted sum and the number of bands covered."""
        if not self.config.labels or series.is_empty:
            return None
        return (
            f"{self.config.number_format(series.sum)} "
            f"({series.duration + 1} {self.config.span_unit})"
        )

    def encode(self, data_view: DataView, color_mode: ColorMode) -> GradientModel:
        bars = []
        for series in data_view.label_series:
            if series.first_index is None:
                start_index, span = None, 0
            elif series.duration < 0:
                start_index, span = series.last_index, abs(series.duration) + 1
            else:
                start_index, span = series.first_index, series.duration + 1
            bars.append(
                GradientBar(
                    label=series.label,
                    start_index=start_index,
                    span=span,
                    stops=self.encode_series(series, color_mode, data_view.global_max),
                    text=self.bar_text(series),
                )
            )
        return GradientModel(
            labels=data_view.labels,
            dates=data_view.domain.dates,
            bars=tuple(bars),
            color_mode=color_mode.mode,
        )


def encode_visuals(
    data_view: DataView,
    encoding_config: EncodingConfig | None = None,
) -> VisualModel:
    """
    Encode a data view in the configured style.

    Resolves the color mode once for the whole pass, then dispatches to
    the fraction or gradient encoder.

    Business context: Fraction cells show exactly which dates carry data;
    gradient bars show the active range of each label at a glance. Both
    read the same DataView, so switching style never changes the numbers.

    Args:
        data_view: Result of build_data_view().
        encoding_config: Style, color mode and display settings. Default
            is a gradient in multi color mode.

    Returns:
        FractionModel or GradientModel.

    Raises:
        InvalidStyle: If the style is not a known style.
        InvalidColorMode: If the color mode is not a known mode.

    Example:
        >>> model = encode_visuals(view, EncodingConfig(style="fraction"))
        >>> model.style
        'fraction'
    """
    encoding_config = encoding_config or EncodingConfig()
    color_mode = resolve_color_mode(encoding_config, data_view.labels)

    if encoding_config.style == "fraction":
        model: VisualModel = FractionEncoder(encoding_config).encode(data_view, color_mode)
        logger.debug(f"Encoded {len(model.cells)} fraction cells ({color_mode.mode})")
    elif encoding_config.style == "gradient":
        model = GradientEncoder(encoding_config).encode(data_view, color_mode)
        logger.debug(f"Encoded {len(model.bars)} gradient bars ({color_mode.mode})")
    else:
        raise InvalidStyle(encoding_config.style)
    return model
