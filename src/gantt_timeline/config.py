"""
Configuration for gantt-timeline.

PURPOSE: Centralized configuration constants and the per-call encoding settings.
AI CONTEXT: All configurable values live here - modify this file to change behavior.

CONFIGURATION CATEGORIES:
- Storage: Record store directory and file names
- Encoding: Default style, color mode, and the fixed encoding contracts
- Colors: Default continuous scale anchors and categorical scheme
- Web: Dashboard bind address

ENVIRONMENT VARIABLES:
- GANTT_DATA_DIR: Directory holding records.json (default: .gantt)

USAGE:
    from gantt_timeline.config import Config, EncodingConfig
    storage_dir = Config.get_data_dir()
    config = EncodingConfig(style="fraction", color_mode="single")
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar, Literal

from .errors import InvalidColorMode, InvalidStyle

__all__ = ["Config", "EncodingConfig", "format_number"]

Style = Literal["fraction", "gradient"]
ColorModeName = Literal["single", "multi"]


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration container for gantt-timeline.

    DESIGN: Frozen dataclass ensures configuration immutability at runtime.
    All values are class-level constants - no instance creation needed.
    Default color tables are plain tuples so no render pass can mutate them.

    STORAGE STRUCTURE:
        .gantt/
        └── records.json   # {"labels": [...], "dates": [...], "records": [...]}
    """

    # =========================================================================
    # STORAGE CONFIGURATION
    # =========================================================================
    STORAGE_DIR: ClassVar[str] = ".gantt"
    RECORDS_FILE: ClassVar[str] = "records.json"

    # =========================================================================
    # ENCODING DEFAULTS
    # =========================================================================
    STYLES: ClassVar[frozenset[str]] = frozenset({"fraction", "gradient"})
    COLOR_MODES: ClassVar[frozenset[str]] = frozenset({"single", "multi"})

    DEFAULT_STYLE: ClassVar[str] = "gradient"
    DEFAULT_COLOR_MODE: ClassVar[str] = "multi"

    BRUSH_RATIO: ClassVar[float] = 0.5
    """
    Share of the global maximum added to numerator and denominator of the
    single-mode fraction opacity: opacity = (v + brush) / (max + brush).
    Fixed contract: a zero value renders at opacity 1/3, the maximum at 1.
    """

    SINGLE_POINT_OFFSET: ClassVar[float] = 100.0
    """Offset (percent) of the only stop emitted for a one-bar gradient."""

    DEFAULT_SPAN_UNIT: ClassVar[str] = "years"

    # =========================================================================
    # COLOR DEFAULTS
    # =========================================================================
    DEFAULT_COLOR_SCALE: ClassVar[tuple[str, ...]] = (
        "#ffffcc",
        "#a1dab4",
        "#41b6c4",
        "#2c7fb8",
        "#253494",
    )
    """Anchor colors of the default continuous scale, low to high."""

    DEFAULT_COLOR_SCHEME: ClassVar[tuple[str, ...]] = (
        "#1f77b4",
        "#ff7f0e",
        "#2ca02c",
        "#d62728",
        "#9467bd",
        "#8c564b",
        "#e377c2",
        "#7f7f7f",
        "#bcbd22",
        "#17becf",
    )
    """Categorical palette used in single color mode, assigned in label order."""

    # =========================================================================
    # WEB CONFIGURATION
    # =========================================================================
    DEFAULT_HOST: ClassVar[str] = "127.0.0.1"
    DEFAULT_PORT: ClassVar[int] = 8000

    # =========================================================================
    # ENVIRONMENT-BASED SETTINGS (runtime configurable)
    # =========================================================================
    _data_dir_override: ClassVar[str | None] = None

    @classmethod
    def get_data_dir(cls) -> str:
        """
        Get the directory holding the record store.

        Uses a priority system: test overrides first, then the
        GANTT_DATA_DIR environment variable, then STORAGE_DIR.

        Business context: Dashboards and CLI runs usually point at a
        shared data directory; the env var lets a deployment do that
        without passing --data-dir to every command.

        Returns:
            Directory path string (relative paths resolve against cwd).

        Example:
            >>> # With env var: GANTT_DATA_DIR=/srv/gantt
            >>> Config.get_data_dir()
            '/srv/gantt'
        """
        if cls._data_dir_override is not None:
            return cls._data_dir_override
        return os.environ.get("GANTT_DATA_DIR", cls.STORAGE_DIR)

    @classmethod
    def set_test_overrides(cls, data_dir: str | None = None) -> None:
        """
        Set test overrides for environment-based settings.

        Must call reset_test_overrides() in test teardown to avoid
        affecting other tests.

        Args:
            data_dir: Override for the record store directory. None to clear.
        """
        cls._data_dir_override = data_dir

    @classmethod
    def reset_test_overrides(cls) -> None:
        """Reset all test overrides so settings come from the environment again."""
        cls._data_dir_override = None


def format_number(value: float) -> str:
    """
    Default display formatter for values and sums.

    Integral values print without decimals, others with at most two,
    both with thousands separators.

    Args:
        value: Number to format.

    Returns:
        Display string, e.g. '1,234' or '12.5'.

    Example:
        >>> format_number(1234.0)
        '1,234'
        >>> format_number(0.125)
        '0.12'
    """
    number = float(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class EncodingConfig:
    """
    Explicit, immutable settings for one encoding pass.

    Replaces the global mutable chart attribute object: every entry point
    takes one of these instead of reading process-wide state. Style and
    color mode are validated on construction so an invalid value fails
    before any work is done.

    Attributes:
        style: "gradient" (one bar per label) or "fraction" (one cell per date).
        color_mode: "multi" (color encodes value) or "single" (color encodes
            label, opacity encodes value).
        color_scale: Continuous scale [0, 1] -> color used in multi mode.
            None uses Config.DEFAULT_COLOR_SCALE.
        color_scheme: Palette sequence or label -> color callable used in
            single mode. None uses Config.DEFAULT_COLOR_SCHEME.
        number_format: Formatter for display text.
        labels: Whether bar/cell text is produced.
        span_unit: Unit word used in gradient bar text.

    Raises:
        InvalidStyle: If style is not a known style.
        InvalidColorMode: If color_mode is not a known mode.
    """

    style: Style = "gradient"
    color_mode: ColorModeName = "multi"
    color_scale: Callable[[float], str] | Sequence[str] | None = None
    color_scheme: Callable[[str], str] | Sequence[str] | None = None
    number_format: Callable[[float], str] = format_number
    labels: bool = True
    span_unit: str = Config.DEFAULT_SPAN_UNIT

    def __post_init__(self) -> None:
        if self.style not in Config.STYLES:
            raise InvalidStyle(self.style)
        if self.color_mode not in Config.COLOR_MODES:
            raise InvalidColorMode(self.color_mode)
