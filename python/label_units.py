"""Unit conversion between canvas units and printer device dots.

Every conversion passes through device dots at the target resolution, so a
value converted to dots and back returns the original value (within float
precision) for any supported DPI.

Supported units:
- ``dots``: the canvas unit; one canvas unit is one device dot.
- ``px``: screen pixels at 96 per inch.
- ``mm``, ``in``, ``pt``.
"""

from __future__ import annotations

from typing import Dict

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0
PIXELS_PER_INCH = 96.0

# Length of one unit in inches; ``None`` marks the dot itself.
_INCHES_PER_UNIT: Dict[str, float | None] = {
    "dots": None,
    "px": 1.0 / PIXELS_PER_INCH,
    "mm": 1.0 / MM_PER_INCH,
    "in": 1.0,
    "pt": 1.0 / POINTS_PER_INCH,
}

_ALIASES = {
    "dot": "dots",
    "canvas": "dots",
    "pixel": "px",
    "pixels": "px",
    "inch": "in",
    "inches": "in",
    "point": "pt",
    "points": "pt",
}


def normalise_unit(unit: str) -> str:
    """Return the canonical spelling of ``unit`` or raise ``ValueError``."""

    key = str(unit or "dots").strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _INCHES_PER_UNIT:
        options = ", ".join(sorted(_INCHES_PER_UNIT))
        raise ValueError(f"Unknown unit '{unit}'. Supported units: {options}")
    return key


def _check_dpi(dpi: float) -> float:
    value = float(dpi)
    if not value > 0:
        raise ValueError(f"dpi must be positive, got {dpi!r}")
    return value


def to_dots(value: float, unit: str = "dots", dpi: float = 203.0) -> float:
    """Convert ``value`` expressed in ``unit`` into (unrounded) device dots."""

    key = normalise_unit(unit)
    resolution = _check_dpi(dpi)
    inches = _INCHES_PER_UNIT[key]
    if inches is None:
        return float(value)
    return float(value) * inches * resolution


def from_dots(dots: float, unit: str = "dots", dpi: float = 203.0) -> float:
    """Convert device dots back into ``unit``."""

    key = normalise_unit(unit)
    resolution = _check_dpi(dpi)
    inches = _INCHES_PER_UNIT[key]
    if inches is None:
        return float(dots)
    return float(dots) / resolution / inches


def convert(value: float, from_unit: str, to_unit: str, dpi: float = 203.0) -> float:
    """Convert between two units by way of device dots."""

    return from_dots(to_dots(value, from_unit, dpi), to_unit, dpi)


def supported_units() -> list[str]:
    return sorted(_INCHES_PER_UNIT)


__all__ = [
    "MM_PER_INCH",
    "convert",
    "from_dots",
    "normalise_unit",
    "supported_units",
    "to_dots",
]
