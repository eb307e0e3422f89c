"""
Color mode resolution for gantt-timeline.

PURPOSE: Turn an EncodingConfig into a resolved color variant, once per pass.
AI CONTEXT: Encoders call cell_style()/stop_style() and never branch on mode.

VARIANTS:
- MultiColor (default): color = scale(value / max), opacity = 1
- SingleColor: color = palette color of the label, opacity carries intensity
    fraction cells: (value + brush) / (max + brush), brush = max * BRUSH_RATIO
    gradient stops: value / max

PRIMITIVES:
- ColorScale: callable [0, 1] -> "#rrggbb", linear RGB interpolation
- ColorScheme: callable label -> "#rrggbb", palette assigned in label order

USAGE:
    mode = resolve_color_mode(EncodingConfig(color_mode="single"), view.labels)
    color, opacity = mode.cell_style("A", 5.0, 10.0)
"""

from __future__ import annotations

import zlib
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar

from .config import Config, EncodingConfig
from .errors import InvalidColorMode

__all__ = [
    "ColorScale",
    "ColorScheme",
    "MultiColor",
    "SingleColor",
    "ColorMode",
    "resolve_color_mode",
]


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Expected a #rrggbb color, got '{color}'")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def _rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    r, g, b = (max(0, min(255, round(c))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


class ColorScale:
    """
    Continuous color scale over [0, 1].

    Interpolates linearly in RGB between evenly spaced anchor colors.
    Inputs outside [0, 1] are clamped.
    """

    def __init__(self, anchors: Sequence[str] = Config.DEFAULT_COLOR_SCALE) -> None:
        """
        Initialize the scale from its anchor colors.

        Args:
            anchors: Hex colors from low (0) to high (1). One anchor
                gives a constant scale.

        Raises:
            ValueError: If anchors is empty or a color is not hex.

        Example:
            >>> scale = ColorScale(("#000000", "#ffffff"))
            >>> scale(0.5)
            '#808080'
        """
        if not anchors:
            raise ValueError("A color scale needs at least one anchor color")
        self.anchors = tuple(anchors)
        self._rgb = tuple(_hex_to_rgb(a) for a in self.anchors)

    def __call__(self, t: float) -> str:
        if len(self._rgb) == 1:
            return _rgb_to_hex(self._rgb[0])
        t = min(max(float(t), 0.0), 1.0)
        position = t * (len(self._rgb) - 1)
        i = min(int(position), len(self._rgb) - 2)
        frac = position - i
        lo, hi = self._rgb[i], self._rgb[i + 1]
        return _rgb_to_hex(tuple(a + (b - a) * frac for a, b in zip(lo, hi, strict=True)))

    def __repr__(self) -> str:
        return f"ColorScale({self.anchors!r})"


class ColorScheme:
    """
    Categorical label -> color mapping.

    Labels known at construction get palette colors in order (cycling);
    any other label falls back to a color picked by a stable hash of its
    name, so the same label always gets the same color.
    """

    def __init__(
        self,
        palette: Sequence[str] = Config.DEFAULT_COLOR_SCHEME,
        labels: Sequence[str] = (),
    ) -> None:
        if not palette:
            raise ValueError("A color scheme needs at least one color")
        self.palette = tuple(palette)
        self._assigned = {
            label: self.palette[i % len(self.palette)]
            for i, label in enumerate(dict.fromkeys(labels))
        }

    def __call__(self, label: str) -> str:
        color = self._assigned.get(label)
        if color is None:
            color = self.palette[zlib.crc32(label.encode("utf-8")) % len(self.palette)]
        return color

    def __repr__(self) -> str:
        return f"ColorScheme({len(self.palette)} colors, {len(self._assigned)} labels)"


@dataclass(frozen=True)
class MultiColor:
    """Color encodes value intensity through a continuous scale."""

    scale: Callable[[float], str]
    mode: ClassVar[str] = "multi"

    def cell_style(
        self, label: str, value: float, max_value: float
    ) -> tuple[str, float]:
        """Return (color, opacity) for a fraction cell."""
        return self.scale(value / max_value), 1.0

    def stop_style(
        self, label: str, value: float, max_value: float
    ) -> tuple[str, float]:
        """Return (color, opacity) for a gradient stop."""
        return self.scale(value / max_value), 1.0


@dataclass(frozen=True)
class SingleColor:
    """Color encodes the label; opacity encodes value intensity."""

    scheme: Callable[[str], str]
    brush_ratio: float = Config.BRUSH_RATIO
    mode: ClassVar[str] = "single"

    def cell_style(self, label: str, value: float, max_value: float) -> tuple[str, float]:
        """
        Return (color, opacity) for a fraction cell.

        The brush offset keeps small values visibly non-transparent:
        with max 10 the brush is 5, so value 0 maps to 5/15.
        """
        brush = max_value * self.brush_ratio
        return self.scheme(label), (value + brush) / (max_value + brush)

    def stop_style(self, label: str, value: float, max_value: float) -> tuple[str, float]:
        """Return (color, opacity) for a gradient stop."""
        return self.scheme(label), value / max_value


ColorMode = MultiColor | SingleColor


def _resolve_scale(
    color_scale: Callable[[float], str] | Sequence[str] | None,
) -> Callable[[float], str]:
    if color_scale is None:
        return ColorScale(Config.DEFAULT_COLOR_SCALE)
    if callable(color_scale):
        return color_scale
    if isinstance(color_scale, str):
        return ColorScale((color_scale,))
    return ColorScale(color_scale)


def _resolve_scheme(
    color_scheme: Callable[[str], str] | Sequence[str] | None,
    labels: Sequence[str],
) -> Callable[[str], str]:
    if color_scheme is None:
        return ColorScheme(Config.DEFAULT_COLOR_SCHEME, labels)
    if callable(color_scheme):
        return color_scheme
    if isinstance(color_scheme, str):
        return ColorScheme((color_scheme,), labels)
    return ColorScheme(color_scheme, labels)


def resolve_color_mode(config: EncodingConfig, labels: Sequence[str] = ()) -> ColorMode:
    """
    Resolve the color variant for one render pass.

    Builds the scale (multi) or assigns palette colors to labels (single)
    exactly once, so encoders pay no per-cell setup cost.

    Business context: Single mode answers "which row is which" when rows
    are compared across charts; multi mode answers "where is the data
    dense" across the whole chart.

    Args:
        config: Encoding settings carrying color_mode, color_scale and
            color_scheme.
        labels: Labels in display order; drives palette assignment.

    Returns:
        MultiColor or SingleColor.

    Raises:
        InvalidColorMode: If config.color_mode is not a known mode.

    Example:
        >>> mode = resolve_color_mode(EncodingConfig(color_mode="single"), ("A",))
        >>> mode.cell_style("A", 0.0, 10.0)[1]
        0.3333333333333333
    """
    if config.color_mode == "multi":
        return MultiColor(scale=_resolve_scale(config.color_scale))
    if config.color_mode == "single":
        return SingleColor(scheme=_resolve_scheme(config.color_scheme, labels))
    raise InvalidColorMode(config.color_mode)
