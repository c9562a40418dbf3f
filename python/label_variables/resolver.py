"""Placeholder resolution for label text.

Placeholders look like ``{{name}}`` or ``{{name|format}}``. The value bound to
``name`` is formatted according to its kind:

- dates: ``YYYY``, ``YY``, ``MMMM``, ``MMM``, ``MM``, ``M``, ``DD``, ``D``,
  ``HH``, ``H``, ``mm``, ``m``, ``ss``, ``s`` (default ``MM/DD/YYYY``)
- numbers: ``decimal:N``, ``currency``, ``percent``, ``pad:N``; the first
  recognised directive is applied and the rest are ignored
- booleans: ``truePhrase|falsePhrase``
- strings: ``upper``, ``lower``, ``title``, ``trim``, ``truncate:N``,
  ``pad:N``; every directive is applied in order

Resolution never raises. Unbound names are left in the text verbatim and
malformed directives are ignored.
"""

from __future__ import annotations

import datetime
import enum
import logging
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{(.+?)\}\}")
VARIABLE_NAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")

DEFAULT_DATE_FORMAT = "MM/DD/YYYY"

_ISO_DATE_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?)?"
    r"(?:Z|[+-]\d{2}:?\d{2})?"
)

_DATE_TOKEN_RE = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|DD|D|HH|H|mm|m|ss|s")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_WORD_RE = re.compile(r"\w\S*")


class VariableKind(enum.Enum):
    DATE = "date"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"


@dataclass(frozen=True)
class BoundValue:
    """A variable value tagged with the formatter family it uses."""

    kind: VariableKind
    value: Any


Bindings = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Binding construction
# ---------------------------------------------------------------------------
def parse_date(value: str) -> Optional[datetime.datetime]:
    """Parse an ISO-8601 date or date-time string; ``None`` when it is not one."""

    text = value.strip()
    if not _ISO_DATE_RE.fullmatch(text):
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.datetime.fromisoformat(text)
    except ValueError:
        return None


def classify(value: Any) -> BoundValue:
    """Tag ``value`` with its kind. Booleans are checked before numbers."""

    if isinstance(value, BoundValue):
        return value
    if isinstance(value, bool):
        return BoundValue(VariableKind.BOOLEAN, value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return BoundValue(VariableKind.DATE, value)
    if isinstance(value, numbers.Real):
        return BoundValue(VariableKind.NUMBER, value)
    if isinstance(value, str):
        parsed = parse_date(value)
        if parsed is not None:
            return BoundValue(VariableKind.DATE, parsed)
    return BoundValue(VariableKind.STRING, value)


def bind_variables(values: Mapping[str, Any]) -> Dict[str, BoundValue]:
    """Classify raw variable values once so resolution can reuse the tags.

    Names that are not identifiers (letter, then letters, digits or
    underscores) are skipped, as are ``None`` values.
    """

    bindings: Dict[str, BoundValue] = {}
    for name, value in values.items():
        if not isinstance(name, str) or not VARIABLE_NAME_RE.fullmatch(name):
            logger.warning("Skipping variable with invalid name %r", name)
            continue
        if value is None:
            continue
        bindings[name] = classify(value)
    return bindings


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------
def _int_argument(directive: str) -> Optional[int]:
    _, _, raw = directive.partition(":")
    try:
        number = int(raw.strip())
    except ValueError:
        return None
    return number if number >= 0 else None


def _plain_number(value: Any) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def format_date(value: datetime.date, spec: Optional[str]) -> str:
    fmt = spec or DEFAULT_DATE_FORMAT
    hour = getattr(value, "hour", 0)
    minute = getattr(value, "minute", 0)
    second = getattr(value, "second", 0)
    fields = {
        "YYYY": f"{value.year:04d}",
        "YY": f"{value.year % 100:02d}",
        "MMMM": MONTH_NAMES[value.month - 1],
        "MMM": MONTH_NAMES[value.month - 1][:3],
        "MM": f"{value.month:02d}",
        "M": str(value.month),
        "DD": f"{value.day:02d}",
        "D": str(value.day),
        "HH": f"{hour:02d}",
        "H": str(hour),
        "mm": f"{minute:02d}",
        "m": str(minute),
        "ss": f"{second:02d}",
        "s": str(second),
    }
    return _DATE_TOKEN_RE.sub(lambda match: fields[match.group(0)], fmt)


def format_number(value: Any, spec: Optional[str]) -> str:
    if not spec:
        return _plain_number(value)

    for directive in (part.strip() for part in spec.split(",")):
        try:
            if directive.startswith("decimal:"):
                places = _int_argument(directive)
                if places is None:
                    continue
                return f"{float(value):.{places}f}"
            if directive == "currency":
                amount = float(value)
                sign = "-" if amount < 0 else ""
                return f"{sign}${abs(amount):,.2f}"
            if directive == "percent":
                return f"{float(value) * 100:.1f}%"
            if directive.startswith("pad:"):
                width = _int_argument(directive)
                if width is None:
                    continue
                return _plain_number(value).rjust(width, "0")
        except (OverflowError, ValueError):
            logger.debug("Number directive %r failed for %r", directive, value)
            continue

    return _plain_number(value)


def format_boolean(value: bool, spec: Optional[str]) -> str:
    if not spec:
        return "true" if value else "false"
    true_phrase, _, false_phrase = spec.partition("|")
    if value:
        return true_phrase or "true"
    return false_phrase or "false"


def _title(text: str) -> str:
    return _WORD_RE.sub(lambda match: match.group(0)[:1].upper() + match.group(0)[1:].lower(), text)


def format_string(value: str, spec: str) -> str:
    result = value
    for directive in (part.strip() for part in spec.split(",")):
        if directive == "upper":
            result = result.upper()
        elif directive == "lower":
            result = result.lower()
        elif directive == "title":
            result = _title(result)
        elif directive == "trim":
            result = result.strip()
        elif directive.startswith("truncate:"):
            length = _int_argument(directive)
            if length is not None and len(result) > length:
                result = result[:length] + "..."
        elif directive.startswith("pad:"):
            width = _int_argument(directive)
            if width is not None:
                result = result.ljust(width, " ")
    return result


def format_value(bound: BoundValue, spec: Optional[str]) -> str:
    """Render a bound value according to its kind and an optional format spec."""

    if bound.kind is VariableKind.DATE:
        value = bound.value
        if isinstance(value, str):
            value = parse_date(value)
            if value is None:
                return str(bound.value)
        return format_date(value, spec)
    if bound.kind is VariableKind.NUMBER:
        return format_number(bound.value, spec)
    if bound.kind is VariableKind.BOOLEAN:
        return format_boolean(bool(bound.value), spec)
    text = str(bound.value)
    if spec:
        return format_string(text, spec)
    return text


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------
def split_placeholder(content: str) -> tuple[str, Optional[str]]:
    """Split placeholder content into ``(name, format)``."""

    name, sep, spec = content.partition("|")
    spec = spec.strip()
    return name.strip(), (spec if sep and spec else None)


def resolve(text: Any, bindings: Bindings) -> Any:
    """Replace every bound placeholder in ``text``.

    Non-string input is returned unchanged, as are placeholders whose name is
    not bound (or bound to ``None``).
    """

    if not isinstance(text, str) or "{{" not in text:
        return text

    def _replace(match: re.Match[str]) -> str:
        name, spec = split_placeholder(match.group(1))
        value = bindings.get(name)
        if value is None:
            logger.debug("Placeholder %s has no binding", match.group(0))
            return match.group(0)
        return format_value(classify(value), spec)

    return PLACEHOLDER_RE.sub(_replace, text)


__all__ = [
    "BoundValue",
    "DEFAULT_DATE_FORMAT",
    "PLACEHOLDER_RE",
    "VARIABLE_NAME_RE",
    "VariableKind",
    "bind_variables",
    "classify",
    "format_boolean",
    "format_date",
    "format_number",
    "format_string",
    "format_value",
    "parse_date",
    "resolve",
    "split_placeholder",
]
