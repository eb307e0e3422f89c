"""
Presenters for gantt-timeline dashboards.

PURPOSE: Testable layer between the record store, the core engine and the UI.
AI CONTEXT: GanttPresenter is pure data transformation; ChartPresenter draws PNGs.

DESIGN PRINCIPLES:
1. Presenters receive a store, return view models (dataclasses)
2. The core is reached only through build_data_view() and encode_visuals()
3. No dependencies on a specific UI framework
4. Every call rebuilds from current records; nothing is cached

USAGE:
    presenter = GanttPresenter(RecordStore())
    chart = presenter.get_chart(EncodingConfig(style="fraction"), "alphabetical")
    png = ChartPresenter(presenter).render_gantt_chart()
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .config import EncodingConfig, format_number
from .dataview import build_data_view
from .encoding import FractionModel, GradientModel, GradientStop, VisualModel, encode_visuals
from .summary import LabelDigest, summarize

if TYPE_CHECKING:
    from .models import DataView, LabelSeries
    from .storage import RecordStore

__all__ = [
    "LabelRowViewModel",
    "GanttViewModel",
    "GanttPresenter",
    "ChartPresenter",
]

GRID_COLOR = "#e2e8f0"
TEXT_COLOR = "#334155"
GRADIENT_SAMPLES_PER_BAND = 24


@dataclass
class LabelRowViewModel:
    """View model for one row of the label table."""

    label: str
    sum: float
    first_date: Any = None
    last_date: Any = None
    duration: int = 0
    point_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.point_count == 0

    @property
    def sum_display(self) -> str:
        return format_number(self.sum)

    @property
    def date_range_display(self) -> str:
        """
        Format the active range for display.

        Returns:
            "first - last", a single date when both are equal, or "-" for
            labels without data.

        Example:
            >>> LabelRowViewModel("A", 15.0, 2020, 2022).date_range_display
            '2020 - 2022'
        """
        if self.first_date is None:
            return "-"
        if self.first_date == self.last_date:
            return str(self.first_date)
        return f"{self.first_date} - {self.last_date}"

    @classmethod
    def from_series(cls, series: LabelSeries) -> LabelRowViewModel:
        return cls(
            label=series.label,
            sum=series.sum,
            first_date=series.first_date,
            last_date=series.last_date,
            duration=series.duration,
            point_count=len(series.points),
        )


@dataclass
class GanttViewModel:
    """Complete view model for one chart render."""

    data_view: DataView
    visual: VisualModel
    rows: list[LabelRowViewModel] = field(default_factory=list)

    @property
    def style(self) -> str:
        return self.visual.style

    @property
    def color_mode(self) -> str:
        return self.visual.color_mode

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw."""
        return not self.visual.labels or not self.visual.dates

    @property
    def max_display(self) -> str:
        return format_number(self.data_view.global_max)


class GanttPresenter:
    """
    Presenter for the gantt dashboard view.

    Loads records and the stored domain, then runs the core pipeline.
    All methods are read-only with respect to the store.
    """

    def __init__(self, store: RecordStore) -> None:
        """
        Initialize the presenter with its data source.

        Business context: Injecting the store lets tests use a store backed
        by MockFileSystem, so presenter logic is verified without disk I/O.

        Args:
            store: RecordStore supplying records and the label/date domain.
        """
        self.store = store

    def load_data_view(self, sort_strategy: str | None = None) -> DataView:
        """
        Build the data view from the current store contents.

        Args:
            sort_strategy: Registered sort name, or None for reverse order.

        Returns:
            Fresh DataView.

        Raises:
            InvalidStrategy: If sort_strategy is unknown.
            InvalidDomain: If the stored date domain is empty while records exist.
        """
        return build_data_view(
            self.store.load_records(),
            self.store.load_domain_config(),
            sort_strategy,
        )

    def get_rows(self, sort_strategy: str | None = None) -> list[LabelRowViewModel]:
        """Label table rows in display order."""
        view = self.load_data_view(sort_strategy)
        return [LabelRowViewModel.from_series(s) for s in view.label_series]

    def get_chart(
        self,
        encoding_config: EncodingConfig | None = None,
        sort_strategy: str | None = None,
    ) -> GanttViewModel:
        """
        Build the complete chart view model.

        Business context: The dashboard page, the JSON API and the PNG
        renderer all read this one view model, so every surface shows the
        same numbers for the same records.

        Args:
            encoding_config: Style and color settings. Default: gradient, multi.
            sort_strategy: Registered sort name, or None.

        Returns:
            GanttViewModel with the data view, the visual model and rows.

        Raises:
            GanttError: If the domain, strategy, style or color mode is invalid.

        Example:
            >>> chart = presenter.get_chart(EncodingConfig(style="fraction"))
            >>> chart.style
            'fraction'
        """
        view = self.load_data_view(sort_strategy)
        return GanttViewModel(
            data_view=view,
            visual=encode_visuals(view, encoding_config or EncodingConfig()),
            rows=[LabelRowViewModel.from_series(s) for s in view.label_series],
        )

    def get_summary(self, label: str) -> LabelDigest | None:
        """
        Summarize one label.

        Args:
            label: Label to summarize.

        Returns:
            LabelDigest, or None when the label is not in the domain.
        """
        series = self.load_data_view().get_series(label)
        if series is None:
            return None
        return summarize(series)


def _interpolate_stops(
    stops: tuple[GradientStop, ...],
    samples: int,
) -> list[tuple[float, float, float, float]]:
    """
    Sample a gradient into RGBA pixels, left to right.

    Matches SVG linear gradient semantics: before the first stop the
    first stop's color is used, after the last stop the last one's.

    Args:
        stops: Gradient stops in offset order.
        samples: Number of pixels to produce (>= 2).

    Returns:
        List of RGBA tuples with alpha taken from the stop opacity.
    """
    from matplotlib.colors import to_rgba

    rgba = [(s.offset_percent, to_rgba(s.color, alpha=s.opacity)) for s in stops]
    pixels = []
    for i in range(samples):
        offset = 100.0 * i / (samples - 1)
        if offset <= rgba[0][0]:
            pixels.append(rgba[0][1])
            continue
        if offset >= rgba[-1][0]:
            pixels.append(rgba[-1][1])
            continue
        for (lo_offset, lo), (hi_offset, hi) in zip(rgba, rgba[1:], strict=False):
            if lo_offset <= offset <= hi_offset:
                width = hi_offset - lo_offset
                frac = (offset - lo_offset) / width if width > 0 else 0.0
                pixels.append(tuple(a + (b - a) * frac for a, b in zip(lo, hi, strict=True)))
                break
    return pixels


class ChartPresenter:
    """
    Presenter rendering the gantt chart to PNG.

    Uses matplotlib for server-side rendering: fraction cells become
    rectangles, gradient bars become interpolated image strips.
    """

    def __init__(self, presenter: GanttPresenter) -> None:
        """
        Initialize the chart presenter.

        matplotlib is imported lazily in the render methods so the core
        package works without the charts extra.

        Args:
            presenter: GanttPresenter supplying chart view models.

        Example:
            >>> charts = ChartPresenter(GanttPresenter(RecordStore()))
            >>> png_bytes = charts.render_gantt_chart()
        """
        self.presenter = presenter

    def _render_empty_chart(self) -> Any:
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(figsize=(8, 3))
        ax.text(0.5, 0.5, "No records yet", ha="center", va="center", fontsize=14)
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)
        ax.axis("off")
        return fig, ax

    def _draw_fraction(self, ax: Any, model: FractionModel, rows: dict[str, int]) -> None:
        from matplotlib.patches import Rectangle

        for cell in model.cells:
            row = rows[cell.label]
            ax.add_patch(
                Rectangle(
                    (cell.index, row - 0.4),
                    1.0,
                    0.8,
                    facecolor=cell.color,
                    alpha=cell.opacity,
                    edgecolor="white",
                    linewidth=0.5,
                )
            )
            if cell.text:
                ax.text(
                    cell.index + 0.5,
                    row,
                    cell.text,
                    ha="center",
                    va="center",
                    fontsize=7,
                    color=TEXT_COLOR,
                )

    def _draw_gradient(self, ax: Any, model: GradientModel, rows: dict[str, int]) -> None:
        for bar in model.bars:
            row = rows[bar.label]
            if bar.start_index is None or not bar.stops:
                continue
            samples = max(2, bar.span * GRADIENT_SAMPLES_PER_BAND)
            ax.imshow(
                [_interpolate_stops(bar.stops, samples)],
                extent=(bar.start_index, bar.start_index + bar.span, row + 0.4, row - 0.4),
                aspect="auto",
                interpolation="bilinear",
            )
            if bar.text:
                ax.text(
                    bar.start_index + bar.span + 0.1,
                    row,
                    bar.text,
                    ha="left",
                    va="center",
                    fontsize=8,
                    color=TEXT_COLOR,
                )

    def render_gantt_chart(
        self,
        encoding_config: EncodingConfig | None = None,
        sort_strategy: str | None = None,
    ) -> bytes:
        """
        Render the gantt chart as a PNG.

        One row per label in display order (first label on top), one band
        per domain date. The chart grows with the number of labels.

        Business context: A PNG can be embedded in the dashboard, saved by
        the CLI render command, or attached to reports without a browser.

        Args:
            encoding_config: Style and color settings.
            sort_strategy: Registered sort name, or None.

        Returns:
            PNG image as bytes at 100 DPI. Shows placeholder text when
            there are no labels or dates.

        Raises:
            ImportError: If matplotlib is not installed. Caller should
                catch this and provide a fallback (e.g., placeholder SVG).
            GanttError: If the configuration is invalid.
        """
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        chart = self.presenter.get_chart(encoding_config, sort_strategy)
        model = chart.visual

        if chart.is_empty:
            fig, _ax = self._render_empty_chart()
        else:
            rows = {label: i for i, label in enumerate(model.labels)}
            fig, ax = plt.subplots(figsize=(10, max(2.5, 0.45 * len(rows) + 1.5)))

        buf = io.BytesIO()
        try:
            if not chart.is_empty:
                if isinstance(model, FractionModel):
                    self._draw_fraction(ax, model, rows)
                else:
                    self._draw_gradient(ax, model, rows)

                step = max(1, len(model.dates) // 12)
                ticks = list(range(0, len(model.dates), step))
                ax.set_xticks([i + 0.5 for i in ticks])
                ax.set_xticklabels([str(model.dates[i]) for i in ticks], rotation=45, ha="right")
                ax.set_yticks(list(rows.values()))
                ax.set_yticklabels(list(rows))
                ax.set_xlim(0, len(model.dates) + 2)
                ax.set_ylim(len(rows) - 0.5, -0.5)
                ax.grid(axis="x", color=GRID_COLOR, linewidth=0.5)
                ax.set_axisbelow(True)
                ax.set_title(
                    f"Timeline ({chart.style}, {chart.color_mode}, max {chart.max_display})"
                )
                ax.spines["top"].set_visible(False)
                ax.spines["right"].set_visible(False)

            fig.tight_layout()
            fig.savefig(buf, format="png", dpi=100, bbox_inches="tight")
        finally:
            # The dashboard process is long-lived; a failed draw must not leak figures
            plt.close(fig)
        buf.seek(0)
        return buf.read()
