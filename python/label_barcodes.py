"""Barcode symbol table shared by the printer code emitters.

Each logical symbol maps to the command fragment used by ZPL and the
symbol identifier used by EPL. The table is read-only; emitters look symbols
up with :func:`get_symbol` and skip elements whose symbol is unknown.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class BarcodeSymbol:
    key: str
    name: str
    zpl: str
    epl: str
    two_dimensional: bool = False


def _table(*symbols: BarcodeSymbol) -> Mapping[str, BarcodeSymbol]:
    return MappingProxyType({symbol.key: symbol for symbol in symbols})


SYMBOLS: Mapping[str, BarcodeSymbol] = _table(
    BarcodeSymbol("CODE128", "Code 128", "^BC", "1"),
    BarcodeSymbol("CODE39", "Code 39", "^B3", "3"),
    BarcodeSymbol("EAN13", "EAN-13", "^BE", "E"),
    BarcodeSymbol("EAN8", "EAN-8", "^B8", "E8"),
    BarcodeSymbol("UPC_A", "UPC-A", "^BU", "UA"),
    BarcodeSymbol("UPC_E", "UPC-E", "^B9", "UE"),
    BarcodeSymbol("CODABAR", "Codabar", "^BK", "K"),
    BarcodeSymbol("CODE93", "Code 93", "^BA", "A"),
    BarcodeSymbol("CODE11", "Code 11", "^B1", "1"),
    BarcodeSymbol("MSI", "MSI", "^BM", "M"),
    BarcodeSymbol("POSTNET", "POSTNET", "^BP", "P"),
    BarcodeSymbol("QR", "QR Code", "^BQ", "Q", two_dimensional=True),
    BarcodeSymbol("DATAMATRIX", "Data Matrix", "^BX", "X", two_dimensional=True),
    BarcodeSymbol("PDF417", "PDF417", "^B7", "7", two_dimensional=True),
    BarcodeSymbol("MAXICODE", "MaxiCode", "^BD", "D", two_dimensional=True),
    BarcodeSymbol("AZTEC", "Aztec", "^BO", "O", two_dimensional=True),
)

QR_MAX_BYTES = 2953

_PATTERNS: Mapping[str, re.Pattern[str]] = MappingProxyType(
    {
        "CODE128": re.compile(r"[\x00-\x7F]+"),
        "CODE39": re.compile(r"[A-Z0-9\-.$/+%\s]*"),
        "EAN13": re.compile(r"\d{12,13}"),
        "EAN8": re.compile(r"\d{7,8}"),
        "UPC_A": re.compile(r"\d{11,12}"),
    }
)

# Symbol -> payload length without the check digit.
_CHECKSUM_LENGTHS: Mapping[str, int] = MappingProxyType(
    {
        "EAN13": 12,
        "UPC_A": 11,
        "EAN8": 7,
    }
)


def get_symbol(key: object) -> Optional[BarcodeSymbol]:
    """Return the symbol registered under ``key`` (case-insensitive)."""

    if not isinstance(key, str):
        return None
    return SYMBOLS.get(key.strip().upper())


def list_symbols() -> list[str]:
    return sorted(SYMBOLS)


def validate_barcode(data: object, symbol: str) -> bool:
    """Check ``data`` against the pattern and length rules of ``symbol``."""

    if not isinstance(data, str) or not data:
        return False
    entry = get_symbol(symbol)
    if entry is None:
        return False
    if entry.key == "QR":
        return len(data.encode("utf-8")) <= QR_MAX_BYTES
    pattern = _PATTERNS.get(entry.key)
    if pattern is None:
        return True
    return pattern.fullmatch(data) is not None


def barcode_checksum(data: object, symbol: str) -> Optional[int]:
    """Return the modulo-10 check digit for ``data``, or ``None``.

    Weights alternate 3, 1, 3, ... counted from the rightmost digit, as GS1
    defines them. For a full-length payload this gives EAN-13 weights 1, 3
    from position 0 and UPC-A and EAN-8 weights 3, 1. A shorter payload is
    treated as left-padded with zeros, so padding never changes the digit.
    Only all-digit payloads no longer than the symbol's data length are
    accepted.
    """

    entry = get_symbol(symbol)
    if entry is None or not isinstance(data, str):
        return None
    length = _CHECKSUM_LENGTHS.get(entry.key)
    if length is None:
        return None
    if not data or len(data) > length or not data.isascii() or not data.isdigit():
        return None
    total = sum(
        int(digit) * (3 if index % 2 == 0 else 1)
        for index, digit in enumerate(reversed(data))
    )
    return (10 - total % 10) % 10


__all__ = [
    "BarcodeSymbol",
    "QR_MAX_BYTES",
    "SYMBOLS",
    "barcode_checksum",
    "get_symbol",
    "list_symbols",
    "validate_barcode",
]
