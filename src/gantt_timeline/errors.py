"""
Error taxonomy for gantt-timeline.

PURPOSE: Explicit, synchronous failures for invalid chart configuration.
AI CONTEXT: Every core failure is one of these; partial data is never an error.

HIERARCHY:
    GanttError (ValueError)
    ├── InvalidDomain      # empty date domain with non-empty records
    ├── InvalidStrategy    # unknown sort strategy name
    ├── InvalidStyle       # unknown encoding style
    └── InvalidColorMode   # unknown color mode

All operations are pure and deterministic, so none of these are retried.
Host layers decide how to present them (CLI exit code, HTTP 400).
"""

from __future__ import annotations

__all__ = [
    "GanttError",
    "InvalidDomain",
    "InvalidStrategy",
    "InvalidStyle",
    "InvalidColorMode",
]


class GanttError(ValueError):
    """Base class for all gantt-timeline configuration failures."""


class InvalidDomain(GanttError):
    """Raised when the date domain is empty but records are present."""


class InvalidStrategy(GanttError):
    """Raised when a sort strategy name is not registered."""

    def __init__(self, name: str, known: tuple[str, ...] = ()) -> None:
        self.name = name
        self.known = known
        suffix = f" (expected one of: {', '.join(known)})" if known else ""
        super().__init__(f"Unknown sort strategy '{name}'{suffix}")


class InvalidStyle(GanttError):
    """Raised when the encoding style is neither 'fraction' nor 'gradient'."""

    def __init__(self, style: str) -> None:
        self.style = style
        super().__init__(f"Unknown gantt style '{style}' (expected 'fraction' or 'gradient')")


class InvalidColorMode(GanttError):
    """Raised when the color mode is neither 'single' nor 'multi'."""

    def __init__(self, color_mode: str) -> None:
        self.color_mode = color_mode
        super().__init__(
            f"Unknown color mode '{color_mode}' (expected 'single' or 'multi')"
        )
