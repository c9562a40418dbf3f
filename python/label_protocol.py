"""Shared label protocol primitives for the printer code emitters.

This module exposes:
- :class:`LabelEmitter`, the abstract base every printer language emitter
  implements (header, footer and one encoder per element type).
- The option dataclasses read by the emitters, with their ``DEFAULTS``.
- :func:`round_half_away`, the rounding rule applied to every coordinate.
- :func:`optimize_code`, a small post-processor for generated streams.

Emitters are pure: they read the element list and return a new string, so a
single document can be emitted for several protocols at once.
"""

from __future__ import annotations

import logging
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Callable, ClassVar, Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from label_model import (
    BarcodeElement,
    BoxElement,
    Canvas,
    CircleElement,
    Element,
    ImageElement,
    LabelElement,
    LineElement,
    TextElement,
    coerce_elements,
    is_in_bounds,
)
from label_units import normalise_unit, to_dots

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults used when callers omit options
# ---------------------------------------------------------------------------
DEFAULTS: Dict[str, Dict[str, Any]] = {
    "zpl": {
        "dpi": 203.0,
        "units": "dots",
        "print_speed": 4,
        "density": 8,
        "tear_off": 0,
    },
    "epl": {
        "dpi": 203.0,
        "units": "dots",
        "speed": 4,
        "density": 1,
        "copies": 1,
        "gap": 26,
    },
    "dpl": {
        "dpi": 203.0,
        "units": "dots",
        "quantity": 1,
    },
}

IMAGE_DATA_PLACEHOLDER = "<IMAGE_DATA>"

_WHITE = {"#ffffff", "#fff", "white"}
_NO_FILL = {"", "transparent", "none"}


def round_half_away(value: Any) -> int:
    """Round to the nearest integer, halves away from zero.

    ``None``, NaN, infinities and anything non-numeric become ``0``.
    """

    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(math.copysign(math.floor(abs(number) + 0.5), number))


def as_float(value: Any) -> float:
    """Return ``value`` as a float, or NaN when it is not numeric."""

    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def field_text(value: Any) -> str:
    return "" if value is None else str(value)


def is_white(color: Any) -> bool:
    return str(color or "").strip().lower() in _WHITE


def has_fill(color: Any) -> bool:
    return str(color or "").strip().lower() not in _NO_FILL


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------
def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


O = TypeVar("O", bound="EmitterOptions")


@dataclass(frozen=True)
class EmitterOptions:
    """Options common to every emitter: resolution and canvas unit."""

    dpi: float = 203.0
    units: str = "dots"

    protocol: ClassVar[str] = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "units", normalise_unit(self.units))
        if not float(self.dpi) > 0:
            raise ValueError(f"dpi must be positive, got {self.dpi!r}")

    @classmethod
    def from_mapping(cls: Type[O], options: Union[O, Mapping[str, Any], None] = None) -> O:
        """Build options from snake_case or camelCase keys.

        Missing or unusable values fall back to :data:`DEFAULTS`.
        """

        if isinstance(options, cls):
            return options
        source: Mapping[str, Any] = options or {}  # type: ignore[assignment]
        defaults = DEFAULTS.get(cls.protocol, {})
        values: Dict[str, Any] = {}
        for f in fields(cls):
            default = defaults.get(f.name, f.default)
            raw = source.get(f.name, source.get(_camel(f.name)))
            values[f.name] = _coerce_option(f.name, raw, default)
        return cls(**values)


def _coerce_option(name: str, raw: Any, default: Any) -> Any:
    if raw is None:
        return default
    try:
        if name == "units":
            return normalise_unit(raw)
        if isinstance(default, bool):
            return bool(raw)
        if isinstance(default, int):
            return round_half_away(float(raw)) if math.isfinite(float(raw)) else default
        if isinstance(default, float):
            number = float(raw)
            if not math.isfinite(number) or (name == "dpi" and number <= 0):
                raise ValueError(name)
            return number
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid option %s=%r, using %r", name, raw, default)
        return default
    return raw


@dataclass(frozen=True)
class ZplOptions(EmitterOptions):
    print_speed: int = 4
    density: int = 8
    tear_off: int = 0

    protocol: ClassVar[str] = "zpl"


@dataclass(frozen=True)
class EplOptions(EmitterOptions):
    speed: int = 4
    density: int = 1
    copies: int = 1
    gap: int = 26

    protocol: ClassVar[str] = "epl"


@dataclass(frozen=True)
class DplOptions(EmitterOptions):
    quantity: int = 1

    protocol: ClassVar[str] = "dpl"


# ---------------------------------------------------------------------------
# Emitter base
# ---------------------------------------------------------------------------
def sort_elements(elements: Iterable[LabelElement]) -> List[LabelElement]:
    """Order elements by ``z_index``; ties keep their original order."""

    def _z(element: LabelElement) -> float:
        value = as_float(element.z_index)
        return 0.0 if math.isnan(value) else value

    return sorted(elements, key=_z)


Encoder = Callable[[Any], Iterable[str]]


class LabelEmitter(ABC):
    """Abstract base class describing a printer command language."""

    name: ClassVar[str] = ""
    options_class: ClassVar[Type[EmitterOptions]] = EmitterOptions

    def __init__(self, options: Union[EmitterOptions, Mapping[str, Any], None] = None) -> None:
        self.options = self.options_class.from_mapping(options)
        self._dispatch: Dict[type, Encoder] = {
            TextElement: self.encode_text,
            LineElement: self.encode_line,
            BoxElement: self.encode_box,
            CircleElement: self.encode_circle,
            ImageElement: self.encode_image,
            BarcodeElement: self.encode_barcode,
        }

    # ---- Geometry -----------------------------------------------------
    def dots(self, value: Any) -> int:
        """Convert a canvas-unit value to whole device dots."""

        return round_half_away(to_dots(as_float(value), self.options.units, self.options.dpi))

    # ---- Stream -------------------------------------------------------
    def emit(
        self,
        elements: Iterable[Union[Element, Mapping[str, Any]]],
        canvas: Union[Canvas, Mapping[str, Any], None] = None,
    ) -> str:
        """Return the complete command stream for ``elements``."""

        label = Canvas.from_value(canvas)
        lines: List[str] = list(self.header(label))
        for element in sort_elements(coerce_elements(elements)):
            if not is_in_bounds(element, label):
                logger.warning("Element %s extends beyond the %s canvas", element.id, self.name)
            lines.extend(self.encode(element))
        lines.extend(self.footer())
        return "\n".join(lines) + "\n"

    def encode(self, element: LabelElement) -> List[str]:
        """Encode one element; unknown or failing elements produce no output."""

        handler: Optional[Encoder] = None
        for cls in type(element).__mro__:
            handler = self._dispatch.get(cls)
            if handler is not None:
                break
        if handler is None:
            logger.debug("Skipping element %s of unsupported type for %s", element.id, self.name)
            return []
        try:
            return list(handler(element))
        except (ArithmeticError, AttributeError, TypeError, ValueError) as exc:
            logger.warning("Skipping element %s: %s", element.id, exc)
            return []

    # ---- Protocol surface ---------------------------------------------
    @abstractmethod
    def header(self, canvas: Canvas) -> Iterable[str]:
        """Return the lines that open the label format."""

    @abstractmethod
    def footer(self) -> Iterable[str]:
        """Return the lines that close the format and trigger printing."""

    @abstractmethod
    def encode_text(self, element: TextElement) -> Iterable[str]:
        """Render a text field."""

    @abstractmethod
    def encode_barcode(self, element: BarcodeElement) -> Iterable[str]:
        """Render a barcode field."""

    def encode_line(self, element: LineElement) -> Iterable[str]:
        return []

    def encode_box(self, element: BoxElement) -> Iterable[str]:
        return []

    def encode_circle(self, element: CircleElement) -> Iterable[str]:
        return []

    def encode_image(self, element: ImageElement) -> Iterable[str]:
        return []


# ---------------------------------------------------------------------------
# Post-processing
# ---------------------------------------------------------------------------
_REPEATED_ORIGIN = re.compile(r"(\^FO\d+,\d+)\n\1")
_SPLIT_TEXT_FIELD = re.compile(r"\^FS\n\^FO(\d+),(\d+)\^A")


def optimize_code(code: str, protocol: str) -> str:
    """Collapse repeated field origins and, for ZPL, join text fields."""

    optimized = _REPEATED_ORIGIN.sub(r"\1", code)
    if protocol.strip().upper() == "ZPL":
        optimized = _SPLIT_TEXT_FIELD.sub(r"^FS^FO\1,\2^A", optimized)
    return optimized


__all__ = [
    "DEFAULTS",
    "DplOptions",
    "EmitterOptions",
    "EplOptions",
    "IMAGE_DATA_PLACEHOLDER",
    "LabelEmitter",
    "as_float",
    "field_text",
    "ZplOptions",
    "has_fill",
    "is_white",
    "optimize_code",
    "round_half_away",
    "sort_elements",
]
