"""
Gantt timeline data views and visual encodings.

PURPOSE: Turn (label, date, value) records into gantt-chart visual models.
AI CONTEXT: The core is pure; storage, PNG rendering, web and CLI are host layers.

PACKAGE STRUCTURE:
- models.py: Records, domain, label series and the DataView
- dataview.py: DataView builder (aggregation, domain, metrics)
- sorting.py: Named sort strategies
- colors.py: Color mode resolution (multi / single)
- encoding.py: Fraction and gradient encoders
- summary.py: Per-label digest text
- config.py: Configuration constants and EncodingConfig
- storage.py: JSON record store
- presenters.py: View models and matplotlib PNG renderer
- web/: FastAPI dashboard and JSON API
- cli.py: Command-line interface

QUICK START:
    from gantt_timeline import Record, DomainConfig, EncodingConfig
    from gantt_timeline import build_data_view, encode_visuals

    view = build_data_view(
        [Record("A", 2020, 10), Record("A", 2022, 5), Record("B", 2021, 3)],
        DomainConfig(dates=(2020, 2021, 2022), labels=("A", "B")),
        "alphabetical",
    )
    model = encode_visuals(view, EncodingConfig(style="gradient"))
"""

from gantt_timeline.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __version__,
    __version_date__,
)
from gantt_timeline.colors import ColorScale, ColorScheme, resolve_color_mode
from gantt_timeline.config import Config, EncodingConfig, format_number
from gantt_timeline.dataview import DataViewBuilder, build_data_view
from gantt_timeline.encoding import (
    Cell,
    FractionModel,
    GradientBar,
    GradientModel,
    GradientStop,
    encode_visuals,
)
from gantt_timeline.errors import (
    GanttError,
    InvalidColorMode,
    InvalidDomain,
    InvalidStrategy,
    InvalidStyle,
)
from gantt_timeline.models import DataView, Domain, DomainConfig, LabelSeries, Point, Record
from gantt_timeline.summary import LabelDigest, summarize

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
    "Record",
    "DomainConfig",
    "Domain",
    "Point",
    "LabelSeries",
    "DataView",
    "DataViewBuilder",
    "build_data_view",
    "Config",
    "EncodingConfig",
    "format_number",
    "ColorScale",
    "ColorScheme",
    "resolve_color_mode",
    "Cell",
    "GradientStop",
    "GradientBar",
    "FractionModel",
    "GradientModel",
    "encode_visuals",
    "LabelDigest",
    "summarize",
    "GanttError",
    "InvalidDomain",
    "InvalidStrategy",
    "InvalidStyle",
    "InvalidColorMode",
]
