"""Apply placeholder resolution across a list of label elements."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from label_model import Element, LabelElement, UnknownElement, coerce_elements

from .resolver import PLACEHOLDER_RE, Bindings, resolve, split_placeholder

# Properties that may carry placeholders.
TEXT_BEARING_PROPERTIES = ("text", "data", "src")


@dataclass(frozen=True)
class VariableReference:
    name: str
    format: Optional[str]
    placeholder: str


def _resolved_fields(properties: Any, bindings: Bindings) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    for key in TEXT_BEARING_PROPERTIES:
        if isinstance(properties, Mapping):
            if key not in properties:
                continue
            current = properties[key]
        elif hasattr(properties, key):
            current = getattr(properties, key)
        else:
            continue
        resolved = resolve(current, bindings)
        if resolved != current:
            changes[key] = resolved
    return changes


def substitute_element(element: LabelElement, bindings: Bindings) -> LabelElement:
    """Return ``element`` with its text-bearing properties resolved."""

    properties = getattr(element, "properties", None)
    changes = _resolved_fields(properties, bindings)
    if not changes:
        return element
    if isinstance(element, UnknownElement):
        return dataclasses.replace(element, properties={**properties, **changes})
    return dataclasses.replace(element, properties=dataclasses.replace(properties, **changes))


def substitute(
    elements: Iterable[Union[Element, Mapping[str, Any]]],
    bindings: Bindings,
) -> List[LabelElement]:
    """Resolve placeholders in every element; the input is left untouched."""

    return [substitute_element(element, bindings) for element in coerce_elements(elements)]


def extract_references(text: Any) -> List[VariableReference]:
    """List the placeholders in ``text`` in order of appearance."""

    if not isinstance(text, str):
        return []
    references = []
    for match in PLACEHOLDER_RE.finditer(text):
        name, spec = split_placeholder(match.group(1))
        references.append(VariableReference(name=name, format=spec, placeholder=match.group(0)))
    return references


def _declared_variables(item: Any) -> List[str]:
    """Names listed in an element's ``properties.variables`` array."""

    if isinstance(item, Mapping):
        properties = item.get("properties")
    else:
        properties = getattr(item, "properties", None)
    if not isinstance(properties, Mapping):
        return []
    declared = properties.get("variables")
    if not isinstance(declared, (list, tuple)):
        return []
    return [name for name in declared if isinstance(name, str) and name]


def collect_used_variable_names(elements: Iterable[Union[Element, Mapping[str, Any]]]) -> List[str]:
    """Return the distinct variable names referenced by ``elements``.

    Placeholders in ``text``, ``data`` and ``src`` are collected first, then
    any names the element declares in ``properties.variables``.
    """

    seen: Dict[str, None] = {}
    for item in elements:
        converted = coerce_elements([item])
        if not converted:
            continue
        properties = getattr(converted[0], "properties", None)
        for key in TEXT_BEARING_PROPERTIES:
            if isinstance(properties, Mapping):
                value = properties.get(key)
            else:
                value = getattr(properties, key, None)
            for reference in extract_references(value):
                seen.setdefault(reference.name, None)
        for name in _declared_variables(item):
            seen.setdefault(name, None)
    return list(seen)


__all__ = [
    "TEXT_BEARING_PROPERTIES",
    "VariableReference",
    "collect_used_variable_names",
    "extract_references",
    "substitute",
    "substitute_element",
]
