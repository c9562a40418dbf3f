from __future__ import annotations

import math
from typing import List

from label_barcodes import get_symbol
from label_model import (
    BarcodeElement,
    BoxElement,
    Canvas,
    CircleElement,
    ImageElement,
    LineElement,
    TextElement,
)
from label_protocol import (
    IMAGE_DATA_PLACEHOLDER,
    LabelEmitter,
    ZplOptions,
    as_float,
    field_text,
    has_fill,
    is_white,
    round_half_away,
)

ORIENTATIONS = {0: "N", 90: "R", 180: "I", 270: "B"}

# (upper bound of the font size, ZPL font name); larger sizes use "E".
FONT_BUCKETS = ((8, "0"), (12, "A"), (16, "B"), (24, "D"))

FIELD_BLOCK_ALIGNMENT = {"center": "C", "right": "R"}
FIELD_BLOCK_WIDTH = 200

TWO_D_PARAMETERS = ",Q,7,A,0,0"


def zpl_font(size: float) -> str:
    for limit, font in FONT_BUCKETS:
        if size <= limit:
            return font
    return "E"


def _colour(color: object) -> str:
    return "W" if is_white(color) else "B"


class ZplEmitter(LabelEmitter):
    """Zebra Programming Language emitter (``^XA`` ... ``^XZ``)."""

    name = "ZPL"
    options_class = ZplOptions
    options: ZplOptions

    def header(self, canvas: Canvas) -> List[str]:
        opts = self.options
        lines = [
            "^XA",
            f"^PW{self.dots(canvas.width)}",
            f"^LL{self.dots(canvas.height)}",
            f"^PR{opts.print_speed}",
            f"^MD{opts.density}",
        ]
        if opts.tear_off != 0:
            lines.append(f"^TO{opts.tear_off}")
        return lines

    def footer(self) -> List[str]:
        return ["^XZ"]

    def _origin(self, x: object, y: object) -> str:
        return f"^FO{self.dots(x)},{self.dots(y)}"

    def encode_text(self, element: TextElement) -> List[str]:
        props = element.properties
        size = as_float(props.font_size)
        if math.isnan(size):
            size = 0.0
        height = max(10, round_half_away(size * 1.2))
        width = max(8, round_half_away(size))
        orientation = ORIENTATIONS.get(element.rotation, "N")

        command = self._origin(element.x, element.y)
        command += f"^A{zpl_font(size)}{orientation},{height},{width}"
        justification = FIELD_BLOCK_ALIGNMENT.get(str(props.alignment).lower())
        if justification:
            command += f"^FB{FIELD_BLOCK_WIDTH},1,0,{justification},0"
        command += f"^FD{field_text(props.text)}^FS"
        return [command]

    def encode_line(self, element: LineElement) -> List[str]:
        props = element.properties
        thickness = self.dots(props.thickness)
        return [
            f"{self._origin(element.x, element.y)}"
            f"^GB{self.dots(element.width)},{thickness},{thickness},{_colour(props.color)}^FS"
        ]

    def encode_box(self, element: BoxElement) -> List[str]:
        props = element.properties
        width, height = self.dots(element.width), self.dots(element.height)
        border = self.dots(props.border_width)
        colour = _colour(props.border_color)
        if has_fill(props.fill_color):
            border = min(width, height)
        lines = [f"{self._origin(element.x, element.y)}^GB{width},{height},{border},{colour}^FS"]

        # No native rounded corners: approximate with a bar inset along the top edge.
        radius = as_float(props.corner_radius)
        if radius > 0:
            x = as_float(element.x)
            bar_width = self.dots(as_float(element.width) - 2 * radius)
            lines.append(
                f"{self._origin(x + radius, element.y)}"
                f"^GB{bar_width},{border},{border},{colour}^FS"
            )
        return lines

    def encode_circle(self, element: CircleElement) -> List[str]:
        props = element.properties
        radius = min(as_float(element.width), as_float(element.height)) / 2
        x, y = as_float(element.x), as_float(element.y)
        return [
            f"{self._origin(x + radius, y + radius)}"
            f"^GC{self.dots(radius)},{self.dots(props.border_width)},{_colour(props.border_color)}^FS"
        ]

    def encode_barcode(self, element: BarcodeElement) -> List[str]:
        props = element.properties
        symbol = get_symbol(props.symbology)
        if symbol is None:
            return []
        orientation = ORIENTATIONS.get(element.rotation, "N")
        command = f"{self._origin(element.x, element.y)}{symbol.zpl}{orientation},{self.dots(element.height)}"
        if symbol.two_dimensional:
            command += TWO_D_PARAMETERS
        else:
            command += ",Y" if props.show_text else ",N"
        command += f"^FD{field_text(props.data)}^FS"
        return [command]

    def encode_image(self, element: ImageElement) -> List[str]:
        if not element.properties.src:
            return []
        width, height = self.dots(element.width), self.dots(element.height)
        total = width * height
        row_bytes = round_half_away(width / 8)
        return [
            f"{self._origin(element.x, element.y)}"
            f"^GFA,{total},{total},{row_bytes},{IMAGE_DATA_PLACEHOLDER}^FS"
        ]
