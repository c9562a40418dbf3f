from __future__ import annotations

from typing import List

from label_barcodes import get_symbol
from label_model import BarcodeElement, Canvas, TextElement
from label_protocol import DplOptions, LabelEmitter, field_text

START_OF_LABEL = "\x02L"
END_OF_LABEL = "E"

TEXT_RECORD = "1911A0100000000"
BARCODE_RECORD = "1231100000000"

MAX_FIELD = 9999


class DplEmitter(LabelEmitter):
    """Datamax Programming Language emitter built from fixed-width records.

    Only text and barcode elements produce records; every other element type
    is ignored.
    """

    name = "DPL"
    options_class = DplOptions
    options: DplOptions

    def header(self, canvas: Canvas) -> List[str]:
        return [
            START_OF_LABEL,
            f"H{self.dots(canvas.height)}",
            f"W{self.dots(canvas.width)}",
            f"Q{self.options.quantity}",
        ]

    def footer(self) -> List[str]:
        return [END_OF_LABEL]

    def field(self, value: object) -> str:
        """Four digit, zero padded positional field."""

        return f"{min(max(self.dots(value), 0), MAX_FIELD):04d}"

    def encode_text(self, element: TextElement) -> List[str]:
        return [f"{TEXT_RECORD}{self.field(element.x)}{self.field(element.y)}{field_text(element.properties.text)}"]

    def encode_barcode(self, element: BarcodeElement) -> List[str]:
        props = element.properties
        if get_symbol(props.symbology) is None:
            return []
        return [
            f"{BARCODE_RECORD}{self.field(element.x)}{self.field(element.y)}"
            f"{self.field(element.height)}{field_text(props.data)}"
        ]
