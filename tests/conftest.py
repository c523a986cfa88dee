"""Shared test fixtures."""

from __future__ import annotations

import pytest

from layoutsight.engine import load_transforms
from layoutsight.engine.context import Element, ElementType
from layoutsight.utils.geometry import Bounds

load_transforms()


def make_element(
    id: str,
    x: float,
    y: float,
    width: float,
    height: float,
    *,
    name: str = "",
    element_type: ElementType = ElementType.OTHER,
    parent_id: str | None = "root",
    characters: str | None = None,
) -> Element:
    return Element(
        id=id,
        bounds=Bounds(x, y, width, height),
        name=name or id,
        element_type=element_type,
        parent_id=parent_id,
        characters=characters,
    )


def node(id: str, x: float, y: float, width: float, height: float, **extra) -> dict:
    """Scene node mapping in the host's wire format."""
    data = {
        "id": id,
        "name": extra.pop("name", id),
        "type": extra.pop("type", "RECTANGLE"),
        "absoluteBoundingBox": {"x": x, "y": y, "width": width, "height": height},
    }
    data.update(extra)
    return data


# Three 100x20 labels in a row with 10px gaps
ROW_ELEMENTS = [
    make_element("a", 0, 0, 100, 20, element_type=ElementType.TEXT),
    make_element("b", 110, 0, 100, 20, element_type=ElementType.TEXT),
    make_element("c", 220, 0, 100, 20, element_type=ElementType.TEXT),
]

# The same labels stacked with 10px gaps
COLUMN_ELEMENTS = [
    make_element("a", 0, 0, 100, 20, element_type=ElementType.TEXT),
    make_element("b", 0, 30, 100, 20, element_type=ElementType.TEXT),
    make_element("c", 0, 60, 100, 20, element_type=ElementType.TEXT),
]

BUTTON_ROW = [
    make_element("btn1", 0, 100, 80, 40, name="Button1"),
    make_element("btn2", 100, 100, 80, 40, name="Button2"),
    make_element("btn3", 200, 100, 80, 40, name="Button3"),
]

ITEM_COLUMN = [
    make_element("item1", 100, 0, 80, 40, name="Item1"),
    make_element("item2", 100, 60, 80, 40, name="Item2"),
    make_element("item3", 100, 120, 80, 40, name="Item3"),
]

# Large hub with four small satellites at 0°, 90°, 180° and 270°, in a 1000x1000 frame
HUB_ELEMENTS = [
    make_element("hub", 80, 80, 840, 840),
    make_element("east", 770, 470, 60, 60),
    make_element("south", 470, 890, 60, 60),
    make_element("west", 170, 470, 60, 60),
    make_element("north", 470, 50, 60, 60),
]

# Four squares whose top edges fall within 2px of each other, in a 1000x1000 frame
TOP_ALIGNED_ELEMENTS = [
    make_element("t1", 0, 100, 50, 50),
    make_element("t2", 200, 101, 50, 50),
    make_element("t3", 400, 102, 50, 50),
    make_element("t4", 600, 100, 50, 50),
]

NAV_SCENE = {
    "id": "frame",
    "name": "Header",
    "type": "FRAME",
    "absoluteBoundingBox": {"x": 1000, "y": 500, "width": 400, "height": 200},
    "children": [
        node("logo", 1010, 510, 30, 30, type="VECTOR"),
        {
            "id": "nav",
            "name": "Nav",
            "type": "FRAME",
            "absoluteBoundingBox": {"x": 1100, "y": 510, "width": 290, "height": 30},
            "children": [
                node("home", 1100, 510, 90, 30, type="TEXT", characters="Home", name="Home link"),
                node("about", 1200, 510, 90, 30, type="TEXT", characters="About", name="About link"),
                node("contact", 1300, 510, 90, 30, type="TEXT", characters="Contact", name="Contact link"),
            ],
        },
        node("hidden", 1010, 600, 100, 50, visible=False),
        node("speck", 1200, 650, 3, 3),
    ],
}


@pytest.fixture
def row_elements() -> list[Element]:
    return list(ROW_ELEMENTS)


@pytest.fixture
def column_elements() -> list[Element]:
    return list(COLUMN_ELEMENTS)


@pytest.fixture
def hub_elements() -> list[Element]:
    return list(HUB_ELEMENTS)


@pytest.fixture
def top_aligned_elements() -> list[Element]:
    return list(TOP_ALIGNED_ELEMENTS)


@pytest.fixture
def nav_scene() -> dict:
    return NAV_SCENE
