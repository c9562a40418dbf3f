"""Tests for substitution across element lists."""

from __future__ import annotations

import copy

from label_model import (
    BarcodeElement,
    BarcodeProperties,
    ImageElement,
    ImageProperties,
    LineElement,
    TextElement,
    TextProperties,
    UnknownElement,
)
from label_variables import bind_variables, collect_used_variable_names, extract_references, substitute
from label_variables.substitution import VariableReference


class TestSubstitute:
    def test_without_placeholders_is_identity(self) -> None:
        elements = [TextElement(id="a", properties=TextProperties(text="plain")), LineElement(id="b")]
        result = substitute(elements, bind_variables({"name": "Doe"}))
        assert result == elements
        assert result[0] is elements[0]

    def test_input_is_not_mutated(self, greeting_elements) -> None:
        snapshot = copy.deepcopy(greeting_elements)
        result = substitute(greeting_elements, bind_variables({"name": "Doe"}))
        assert greeting_elements == snapshot
        assert result[0].properties.text == "Hi Doe"

    def test_element_objects_are_replaced_not_edited(self) -> None:
        original = TextElement(properties=TextProperties(text="{{name}}"))
        (result,) = substitute([original], bind_variables({"name": "Doe"}))
        assert original.properties.text == "{{name}}"
        assert result.properties.text == "Doe"

    def test_barcode_data_and_image_source(self) -> None:
        elements = [
            BarcodeElement(properties=BarcodeProperties(data="{{sku}}")),
            ImageElement(properties=ImageProperties(src="{{logo}}")),
        ]
        barcode, image = substitute(elements, bind_variables({"sku": "A-1", "logo": "logo.png"}))
        assert barcode.properties.data == "A-1"
        assert image.properties.src == "logo.png"

    def test_unknown_element_properties(self) -> None:
        element = UnknownElement(element_type="note", properties={"text": "{{name|upper}}", "size": 3})
        (result,) = substitute([element], bind_variables({"name": "doe"}))
        assert result.properties == {"text": "DOE", "size": 3}

    def test_unbound_placeholder_survives(self) -> None:
        (result,) = substitute([TextElement(properties=TextProperties(text="{{missing}}"))], {})
        assert result.properties.text == "{{missing}}"


class TestReferences:
    def test_extract_in_order(self) -> None:
        assert extract_references("A {{x}} B {{ y | upper }}") == [
            VariableReference(name="x", format=None, placeholder="{{x}}"),
            VariableReference(name="y", format="upper", placeholder="{{ y | upper }}"),
        ]

    def test_extract_from_non_string(self) -> None:
        assert extract_references(None) == []

    def test_collect_used_names_is_distinct_and_ordered(self) -> None:
        elements = [
            {"type": "text", "properties": {"text": "{{b}} {{a}}"}},
            {"type": "barcode", "properties": {"data": "{{a|upper}}"}},
            {"type": "star", "properties": {"text": "{{c}}"}},
        ]
        assert collect_used_variable_names(elements) == ["b", "a", "c"]

    def test_collect_includes_declared_variables(self) -> None:
        elements = [
            {"type": "text", "properties": {"text": "{{a}}", "variables": ["z", "a"]}},
            {"type": "star", "properties": {"variables": ["y", 3]}},
            UnknownElement(element_type="note", properties={"variables": ("x",)}),
            None,
        ]
        assert collect_used_variable_names(elements) == ["a", "z", "y", "x"]
