"""Label variables: placeholder resolution, substitution and presets."""

from __future__ import annotations

from .definitions import (
    ValidationResult,
    ValidationRules,
    VariableDefinition,
    VariableType,
    create_variable,
    generate_sample_data,
    validate_variable_name,
    validate_variable_value,
)
from .registry import get_preset, list_presets
from .resolver import BoundValue, VariableKind, bind_variables, resolve
from .substitution import (
    VariableReference,
    collect_used_variable_names,
    extract_references,
    substitute,
)

__all__ = [
    "BoundValue",
    "ValidationResult",
    "ValidationRules",
    "VariableDefinition",
    "VariableKind",
    "VariableReference",
    "VariableType",
    "bind_variables",
    "collect_used_variable_names",
    "create_variable",
    "extract_references",
    "generate_sample_data",
    "get_preset",
    "list_presets",
    "resolve",
    "substitute",
    "validate_variable_name",
    "validate_variable_value",
]
