"""Version information for gantt-timeline."""

__version__ = "0.3.0"
__version_date__ = "2026-10-12"

__title__ = "gantt_timeline"
__description__ = "Data-view and visual-encoding engine for gantt-style timeline charts"

__author__ = "gantt-timeline contributors"

__license__ = "MIT"
__copyright__ = "Copyright 2026 gantt-timeline contributors"

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__author__",
    "__license__",
    "__copyright__",
]
