"""Variable definitions, value validation and sample data."""

from __future__ import annotations

import datetime
import enum
import math
import numbers
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .resolver import VARIABLE_NAME_RE, parse_date


class VariableType(str, enum.Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    BARCODE = "barcode"
    IMAGE = "image"


@dataclass(frozen=True)
class ValidationRules:
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    pattern: Optional[str] = None


@dataclass(frozen=True)
class VariableDefinition:
    name: str
    type: VariableType = VariableType.TEXT
    default_value: Any = None
    description: str = ""
    validation: ValidationRules = field(default_factory=ValidationRules)


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)

    def fail(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)


def validate_variable_name(name: object) -> bool:
    return isinstance(name, str) and VARIABLE_NAME_RE.fullmatch(name) is not None


def create_variable(
    name: str,
    type: VariableType | str = VariableType.TEXT,
    default_value: Any = None,
    description: str = "",
    validation: Optional[ValidationRules] = None,
) -> VariableDefinition:
    """Build a :class:`VariableDefinition`, rejecting invalid names."""

    if not validate_variable_name(name):
        raise ValueError(f"Invalid variable name: {name!r}")
    return VariableDefinition(
        name=name,
        type=VariableType(type),
        default_value=default_value,
        description=description,
        validation=validation or ValidationRules(),
    )


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return not math.isnan(float(value))


def _is_date(value: Any) -> bool:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return True
    return isinstance(value, str) and parse_date(value) is not None


def validate_variable_value(value: Any, definition: VariableDefinition) -> ValidationResult:
    """Check ``value`` against the type and rules of ``definition``.

    The type check runs first; rules are then tried in order and the first
    failing rule ends validation.
    """

    result = ValidationResult()
    kind = definition.type

    if kind is VariableType.TEXT and not isinstance(value, str):
        result.fail("Value must be a string")
    elif kind is VariableType.NUMBER and not _is_number(value):
        result.fail("Value must be a number")
    elif kind is VariableType.DATE and not _is_date(value):
        result.fail("Value must be a valid date")
    elif kind is VariableType.BOOLEAN and not isinstance(value, bool):
        result.fail("Value must be a boolean")
    if not result.is_valid:
        return result

    rules = definition.validation
    if rules.required and value in (None, ""):
        result.fail("Value is required")
    elif rules.min_length is not None and isinstance(value, str) and len(value) < rules.min_length:
        result.fail(f"Minimum length is {rules.min_length}")
    elif rules.max_length is not None and isinstance(value, str) and len(value) > rules.max_length:
        result.fail(f"Maximum length is {rules.max_length}")
    elif rules.minimum is not None and _is_number(value) and value < rules.minimum:
        result.fail(f"Minimum value is {rules.minimum}")
    elif rules.maximum is not None and _is_number(value) and value > rules.maximum:
        result.fail(f"Maximum value is {rules.maximum}")
    elif rules.pattern and isinstance(value, str) and not re.search(rules.pattern, value):
        result.fail("Value does not match required pattern")
    return result


_SAMPLES: Dict[VariableType, Any] = {
    VariableType.TEXT: "Sample Text",
    VariableType.NUMBER: 100,
    VariableType.BOOLEAN: True,
    VariableType.BARCODE: "123456789",
    VariableType.IMAGE: "",
}


def generate_sample_data(
    definitions: Iterable[VariableDefinition],
    today: Optional[datetime.date] = None,
) -> Dict[str, Any]:
    """Return a binding map using each default value, or a typed sample."""

    sample: Dict[str, Any] = {}
    for definition in definitions:
        if definition.default_value is not None and definition.default_value != "":
            sample[definition.name] = definition.default_value
        elif definition.type is VariableType.DATE:
            sample[definition.name] = today or datetime.date.today()
        else:
            sample[definition.name] = _SAMPLES.get(definition.type, "")
    return sample


__all__ = [
    "ValidationResult",
    "ValidationRules",
    "VariableDefinition",
    "VariableType",
    "create_variable",
    "generate_sample_data",
    "validate_variable_name",
    "validate_variable_value",
]
