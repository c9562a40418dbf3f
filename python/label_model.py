"""Label document model.

Elements form a tagged union: one frozen dataclass per element type, each
carrying its own typed ``properties``. Types the model does not know are
kept as :class:`UnknownElement` so that emitters can skip them.

Documents arriving from the editor are plain JSON objects with camelCase
keys; :func:`load_document` validates their shape against
:data:`LABEL_DOCUMENT_SCHEMA` and converts them into the dataclasses below.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, Tuple, Type, Union

from jsonschema import Draft7Validator, ValidationError

logger = logging.getLogger(__name__)

ROTATIONS = (0, 90, 180, 270)


class LabelDocumentError(ValueError):
    """Raised when a label document does not match the expected shape."""


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TextProperties:
    text: str = ""
    font_size: Optional[float] = 12
    font_weight: str = "normal"
    font_family: str = "Arial"
    color: str = "#000000"
    alignment: str = "left"


@dataclass(frozen=True)
class LineProperties:
    thickness: Optional[float] = 2
    color: str = "#000000"
    style: str = "solid"


@dataclass(frozen=True)
class BoxProperties:
    border_width: Optional[float] = 2
    border_color: str = "#000000"
    fill_color: str = "transparent"
    corner_radius: Optional[float] = 0


@dataclass(frozen=True)
class CircleProperties:
    border_width: Optional[float] = 2
    border_color: str = "#000000"
    fill_color: str = "transparent"


@dataclass(frozen=True)
class ImageProperties:
    src: str = ""
    alt: str = ""
    fit: str = "contain"
    opacity: Optional[float] = 1.0


@dataclass(frozen=True)
class BarcodeProperties:
    data: str = ""
    symbology: str = "CODE128"
    show_text: bool = True
    text_position: str = "bottom"


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Element:
    """Geometry shared by every element. Coordinates are canvas units."""

    id: str = ""
    x: Optional[float] = 0.0
    y: Optional[float] = 0.0
    width: Optional[float] = 0.0
    height: Optional[float] = 0.0
    rotation: int = 0
    z_index: int = 0

    kind: ClassVar[str] = ""


@dataclass(frozen=True)
class TextElement(Element):
    properties: TextProperties = field(default_factory=TextProperties)
    kind: ClassVar[str] = "text"


@dataclass(frozen=True)
class LineElement(Element):
    properties: LineProperties = field(default_factory=LineProperties)
    kind: ClassVar[str] = "line"


@dataclass(frozen=True)
class BoxElement(Element):
    properties: BoxProperties = field(default_factory=BoxProperties)
    kind: ClassVar[str] = "box"


@dataclass(frozen=True)
class CircleElement(Element):
    properties: CircleProperties = field(default_factory=CircleProperties)
    kind: ClassVar[str] = "circle"


@dataclass(frozen=True)
class ImageElement(Element):
    properties: ImageProperties = field(default_factory=ImageProperties)
    kind: ClassVar[str] = "image"


@dataclass(frozen=True)
class BarcodeElement(Element):
    properties: BarcodeProperties = field(default_factory=BarcodeProperties)
    kind: ClassVar[str] = "barcode"


@dataclass(frozen=True)
class UnknownElement(Element):
    """An element whose type is not part of the model."""

    element_type: str = ""
    properties: Mapping[str, Any] = field(default_factory=dict)
    kind: ClassVar[str] = "unknown"


LabelElement = Union[
    TextElement,
    LineElement,
    BoxElement,
    CircleElement,
    ImageElement,
    BarcodeElement,
    UnknownElement,
]

ELEMENT_TYPES: Dict[str, Tuple[Type[Element], type]] = {
    "text": (TextElement, TextProperties),
    "line": (LineElement, LineProperties),
    "box": (BoxElement, BoxProperties),
    "circle": (CircleElement, CircleProperties),
    "image": (ImageElement, ImageProperties),
    "barcode": (BarcodeElement, BarcodeProperties),
}


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Canvas:
    width: float = 400.0
    height: float = 300.0

    @classmethod
    def from_value(cls, value: Union["Canvas", Mapping[str, Any], None]) -> "Canvas":
        if isinstance(value, Canvas):
            return value
        if value is None:
            return cls()
        return cls(
            width=_to_float(value.get("width"), cls.width),
            height=_to_float(value.get("height"), cls.height),
        )


DEFAULT_CANVAS = Canvas()

COMMON_LABEL_SIZES: Dict[str, Canvas] = {
    "2x1": Canvas(200, 100),
    "3x1": Canvas(300, 100),
    "4x2": Canvas(400, 200),
    "4x3": Canvas(400, 300),
    "4x6": Canvas(400, 600),
    "6x4": Canvas(600, 400),
}


@dataclass(frozen=True)
class LabelDocument:
    canvas: Canvas = DEFAULT_CANVAS
    elements: Tuple[LabelElement, ...] = ()


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------
_NUMBER = {"type": ["number", "null"]}

LABEL_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Label document",
    "type": "object",
    "required": ["elements"],
    "properties": {
        "canvas": {"$ref": "#/definitions/size"},
        "labelSize": {"$ref": "#/definitions/size"},
        "elements": {"type": "array", "items": {"$ref": "#/definitions/element"}},
    },
    "definitions": {
        "size": {
            "type": "object",
            "required": ["width", "height"],
            "properties": {
                "width": {"type": "number", "minimum": 0},
                "height": {"type": "number", "minimum": 0},
            },
        },
        "element": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "id": {"type": ["string", "integer"]},
                "type": {"type": "string"},
                "x": _NUMBER,
                "y": _NUMBER,
                "width": _NUMBER,
                "height": _NUMBER,
                "rotation": _NUMBER,
                "zIndex": _NUMBER,
                "z_index": _NUMBER,
                "properties": {"type": "object"},
            },
        },
    },
}

_VALIDATOR = Draft7Validator(LABEL_DOCUMENT_SCHEMA)


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    number = _to_float(value, float(default))
    if math.isnan(number) or math.isinf(number):
        return default
    return int(number)


def normalise_rotation(value: Any) -> int:
    """Snap ``value`` (degrees) to the nearest quarter turn in 0..270."""

    degrees = _to_float(value, 0.0)
    if math.isnan(degrees) or math.isinf(degrees):
        return 0
    return int(round(degrees / 90.0)) % 4 * 90


def _properties(cls: type, raw: Mapping[str, Any], element_type: str) -> Any:
    names = {f.name for f in fields(cls)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        name = _snake(str(key))
        if element_type == "barcode" and name == "type":
            name = "symbology"
        if name in names:
            values[name] = value
        else:
            logger.debug("Ignoring unknown %s property %r", element_type, key)
    return cls(**values)


def element_from_dict(data: Mapping[str, Any], index: int = 0) -> LabelElement:
    """Build an element dataclass from an editor-style mapping."""

    element_type = str(data.get("type", "")).strip().lower()
    raw_props = data.get("properties") or {}
    if not isinstance(raw_props, Mapping):
        raw_props = {}

    raw_id = data.get("id")
    z_value = data.get("zIndex", data.get("z_index"))
    common: Dict[str, Any] = {
        "id": f"element_{index}" if raw_id is None or raw_id == "" else str(raw_id),
        "x": _to_float(data.get("x"), 0.0),
        "y": _to_float(data.get("y"), 0.0),
        "width": max(0.0, _to_float(data.get("width"), 0.0)),
        "height": max(0.0, _to_float(data.get("height"), 0.0)),
        "rotation": normalise_rotation(data.get("rotation")),
        "z_index": _to_int(z_value, 0),
    }

    entry = ELEMENT_TYPES.get(element_type)
    if entry is None:
        logger.debug("Element %s has unknown type %r", common["id"], element_type)
        return UnknownElement(element_type=element_type, properties=dict(raw_props), **common)

    element_cls, props_cls = entry
    return element_cls(properties=_properties(props_cls, raw_props, element_type), **common)  # type: ignore[call-arg]


def coerce_elements(elements: Iterable[Union[Element, Mapping[str, Any]]]) -> list[LabelElement]:
    """Return a list of element dataclasses, converting mappings as needed.

    Entries that are neither elements nor mappings are skipped with a warning.
    """

    result: list[LabelElement] = []
    for index, item in enumerate(elements):
        if isinstance(item, Element):
            result.append(item)  # type: ignore[arg-type]
        elif isinstance(item, Mapping):
            result.append(element_from_dict(item, index))
        else:
            logger.warning(
                "Skipping element %d: expected an element or a mapping, got %s",
                index,
                type(item).__name__,
            )
    return result


def _coerce_payload(payload: Union[Mapping[str, Any], str, Path]) -> Mapping[str, Any]:
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, Path):
        return json.loads(payload.read_text(encoding="utf-8"))
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            return json.loads(Path(payload).read_text(encoding="utf-8"))
    raise TypeError("Unsupported payload type")


def load_document(payload: Union[Mapping[str, Any], str, Path]) -> LabelDocument:
    """Validate and convert a label document from a mapping, JSON text, or file."""

    data = _coerce_payload(payload)
    try:
        _VALIDATOR.validate(data)
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise LabelDocumentError(f"Invalid label document at {location}: {exc.message}") from exc

    canvas = Canvas.from_value(data.get("canvas") or data.get("labelSize"))
    elements = tuple(element_from_dict(item, index) for index, item in enumerate(data["elements"]))
    return LabelDocument(canvas=canvas, elements=elements)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
def _finite(value: Any) -> float:
    number = _to_float(value, 0.0)
    return 0.0 if math.isnan(number) or math.isinf(number) else number


def element_bounds(element: Element) -> Dict[str, float]:
    left, top = _finite(element.x), _finite(element.y)
    width, height = _finite(element.width), _finite(element.height)
    return {
        "left": left,
        "top": top,
        "right": left + width,
        "bottom": top + height,
        "width": width,
        "height": height,
    }


def is_in_bounds(element: Element, canvas: Canvas) -> bool:
    bounds = element_bounds(element)
    return (
        bounds["left"] >= 0
        and bounds["top"] >= 0
        and bounds["right"] <= canvas.width
        and bounds["bottom"] <= canvas.height
    )


__all__ = [
    "BarcodeElement",
    "BarcodeProperties",
    "BoxElement",
    "BoxProperties",
    "COMMON_LABEL_SIZES",
    "Canvas",
    "CircleElement",
    "CircleProperties",
    "DEFAULT_CANVAS",
    "ELEMENT_TYPES",
    "Element",
    "ImageElement",
    "ImageProperties",
    "LABEL_DOCUMENT_SCHEMA",
    "LabelDocument",
    "LabelDocumentError",
    "LabelElement",
    "LineElement",
    "LineProperties",
    "ROTATIONS",
    "TextElement",
    "TextProperties",
    "UnknownElement",
    "coerce_elements",
    "element_bounds",
    "element_from_dict",
    "is_in_bounds",
    "load_document",
    "normalise_rotation",
]
