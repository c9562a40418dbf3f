from __future__ import annotations

import math
from typing import List

from label_barcodes import get_symbol
from label_model import BarcodeElement, BoxElement, Canvas, ImageElement, LineElement, TextElement
from label_protocol import IMAGE_DATA_PLACEHOLDER, EplOptions, LabelEmitter, as_float, field_text, round_half_away

# (minimum font size, EPL font number); smaller sizes use font 1.
FONT_THRESHOLDS = ((20, 5), (16, 4), (12, 3), (10, 2), (8, 1))

NARROW_BAR = 2
WIDE_BAR = 6


def epl_font(size: float) -> int:
    for minimum, font in FONT_THRESHOLDS:
        if size >= minimum:
            return font
    return 1


def rotation_code(rotation: object) -> int:
    return (round_half_away(as_float(rotation)) // 90) % 4


def quote(text: object) -> str:
    """Return ``text`` as an EPL string literal."""

    escaped = field_text(text).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class EplEmitter(LabelEmitter):
    """Eltron Programming Language emitter (``N`` ... ``P<copies>``)."""

    name = "EPL"
    options_class = EplOptions
    options: EplOptions

    def header(self, canvas: Canvas) -> List[str]:
        opts = self.options
        return [
            "N",
            f"S{opts.speed}",
            f"D{opts.density}",
            "ZT",
            f"q{self.dots(canvas.width)}",
            f"Q{self.dots(canvas.height)},{opts.gap}",
        ]

    def footer(self) -> List[str]:
        return [f"P{self.options.copies}"]

    def encode_text(self, element: TextElement) -> List[str]:
        props = element.properties
        size = as_float(props.font_size)
        font = epl_font(0.0 if math.isnan(size) else size)
        return [
            f"A{self.dots(element.x)},{self.dots(element.y)},{rotation_code(element.rotation)},"
            f"{font},1,1,N,{quote(props.text)}"
        ]

    def encode_line(self, element: LineElement) -> List[str]:
        thickness = max(1, self.dots(element.properties.thickness))
        return [f"LO{self.dots(element.x)},{self.dots(element.y)},{self.dots(element.width)},{thickness}"]

    def encode_box(self, element: BoxElement) -> List[str]:
        x, y = as_float(element.x), as_float(element.y)
        return [
            f"X{self.dots(x)},{self.dots(y)},{self.dots(element.properties.border_width)},"
            f"{self.dots(x + as_float(element.width))},{self.dots(y + as_float(element.height))}"
        ]

    def encode_barcode(self, element: BarcodeElement) -> List[str]:
        props = element.properties
        symbol = get_symbol(props.symbology)
        if symbol is None:
            return []
        readable = "B" if props.show_text else "N"
        return [
            f"B{self.dots(element.x)},{self.dots(element.y)},{rotation_code(element.rotation)},"
            f"{symbol.epl},{NARROW_BAR},{WIDE_BAR},{self.dots(element.height)},{readable},{quote(props.data)}"
        ]

    def encode_image(self, element: ImageElement) -> List[str]:
        if not element.properties.src:
            return []
        width_bytes = round_half_away(self.dots(element.width) / 8)
        return [
            f"GW{self.dots(element.x)},{self.dots(element.y)},{width_bytes},"
            f"{self.dots(element.height)},{IMAGE_DATA_PLACEHOLDER}"
        ]
