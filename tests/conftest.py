"""Shared fixtures for the label code generator tests."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from label_model import Canvas


@pytest.fixture()
def canvas() -> Canvas:
    return Canvas(400, 300)


@pytest.fixture()
def greeting_elements() -> List[Dict[str, Any]]:
    """Two text elements and a barcode, as the editor would send them."""
    return [
        {
            "id": "greeting",
            "type": "text",
            "x": 10,
            "y": 20,
            "width": 200,
            "height": 30,
            "zIndex": 0,
            "properties": {"text": "Hi {{name}}", "fontSize": 12},
        },
        {
            "id": "title",
            "type": "text",
            "x": 10,
            "y": 60,
            "width": 200,
            "height": 30,
            "zIndex": 1,
            "properties": {"text": "Label", "fontSize": 20, "alignment": "center"},
        },
        {
            "id": "code",
            "type": "barcode",
            "x": 10,
            "y": 100,
            "width": 200,
            "height": 80,
            "zIndex": 2,
            "properties": {"data": "12345", "type": "CODE128", "showText": True},
        },
    ]
