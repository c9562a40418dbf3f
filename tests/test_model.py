"""Tests for the label document model and loader."""

from __future__ import annotations

import json
import logging

import pytest

from label_model import (
    BarcodeElement,
    Canvas,
    LabelDocumentError,
    TextElement,
    TextProperties,
    UnknownElement,
    coerce_elements,
    element_from_dict,
    is_in_bounds,
    load_document,
    normalise_rotation,
)


class TestElementFromDict:
    def test_camel_case_keys(self) -> None:
        element = element_from_dict(
            {
                "id": "t",
                "type": "text",
                "x": 1,
                "y": 2,
                "zIndex": 3,
                "properties": {"text": "Hi", "fontSize": 14, "fontWeight": "bold"},
            }
        )
        assert isinstance(element, TextElement)
        assert element.z_index == 3
        assert element.properties == TextProperties(text="Hi", font_size=14, font_weight="bold")

    def test_barcode_type_becomes_symbology(self) -> None:
        element = element_from_dict({"type": "barcode", "properties": {"data": "1", "type": "EAN13"}})
        assert isinstance(element, BarcodeElement)
        assert element.properties.symbology == "EAN13"

    def test_unknown_type_is_preserved(self) -> None:
        element = element_from_dict({"type": "star", "properties": {"points": 5}})
        assert isinstance(element, UnknownElement)
        assert element.element_type == "star"
        assert element.properties == {"points": 5}

    def test_missing_id_uses_index(self) -> None:
        assert element_from_dict({"type": "text"}, index=4).id == "element_4"

    def test_integer_zero_id_is_kept(self) -> None:
        assert element_from_dict({"id": 0, "type": "text"}, index=4).id == "0"
        assert element_from_dict({"id": "", "type": "text"}, index=4).id == "element_4"

    def test_negative_size_is_clamped(self) -> None:
        element = element_from_dict({"type": "box", "width": -5, "height": 10})
        assert (element.width, element.height) == (0.0, 10.0)

    def test_unknown_properties_are_ignored(self) -> None:
        element = element_from_dict({"type": "line", "properties": {"thickness": 4, "dash": "x"}})
        assert element.properties.thickness == 4


class TestRotation:
    @pytest.mark.parametrize(
        "value, expected",
        [(0, 0), (95, 90), (180, 180), (-90, 270), (360, 0), (None, 0), ("abc", 0), (float("nan"), 0)],
    )
    def test_snaps_to_quarter_turns(self, value, expected: int) -> None:
        assert normalise_rotation(value) == expected


class TestLoadDocument:
    def test_from_mapping(self, greeting_elements) -> None:
        document = load_document({"canvas": {"width": 600, "height": 400}, "elements": greeting_elements})
        assert document.canvas == Canvas(600, 400)
        assert [element.id for element in document.elements] == ["greeting", "title", "code"]

    def test_default_canvas(self) -> None:
        assert load_document({"elements": []}).canvas == Canvas(400, 300)

    def test_label_size_alias(self) -> None:
        document = load_document({"labelSize": {"width": 200, "height": 100}, "elements": []})
        assert document.canvas == Canvas(200, 100)

    def test_from_json_text(self, greeting_elements) -> None:
        document = load_document(json.dumps({"elements": greeting_elements}))
        assert len(document.elements) == 3

    def test_from_file(self, tmp_path, greeting_elements) -> None:
        path = tmp_path / "label.json"
        path.write_text(json.dumps({"elements": greeting_elements}), encoding="utf-8")
        assert len(load_document(path).elements) == 3
        assert len(load_document(str(path)).elements) == 3

    def test_missing_elements(self) -> None:
        with pytest.raises(LabelDocumentError, match="elements"):
            load_document({"canvas": {"width": 1, "height": 1}})

    def test_bad_coordinate_reports_path(self) -> None:
        with pytest.raises(LabelDocumentError, match="elements/0/x"):
            load_document({"elements": [{"type": "text", "x": "abc"}]})

    def test_null_coordinates_are_accepted(self) -> None:
        document = load_document({"elements": [{"type": "text", "x": None}]})
        assert document.elements[0].x == 0.0


class TestCoerceElements:
    def test_non_elements_are_skipped_with_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="label_model"):
            elements = coerce_elements([None, {"type": "text", "id": "a"}, 42, TextElement(id="b")])
        assert [element.id for element in elements] == ["a", "b"]
        assert len(caplog.records) == 2


class TestBounds:
    def test_inside(self) -> None:
        assert is_in_bounds(TextElement(x=10, y=10, width=100, height=20), Canvas(400, 300))

    def test_outside(self) -> None:
        assert not is_in_bounds(TextElement(x=390, y=10, width=100, height=20), Canvas(400, 300))
        assert not is_in_bounds(TextElement(x=-1, y=0), Canvas(400, 300))
