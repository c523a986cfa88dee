"""Tests for the direction classifier."""

import pytest

from layoutsight.engine.context import ElementType
from layoutsight.engine.direction import (
    _name_flow,
    _size_flow,
    _text_flow,
    analyze_aspect_ratio,
    analyze_linear_arrangement,
    analyze_optimal_direction,
    combine_heuristics,
)
from layoutsight.models.analysis import HeuristicResult
from tests.conftest import BUTTON_ROW, COLUMN_ELEMENTS, ITEM_COLUMN, ROW_ELEMENTS, make_element


def test_no_elements():
    result = analyze_optimal_direction([])
    assert result.direction == "horizontal"
    assert result.confidence == 0
    assert result.factors.linear_arrangement.reasoning == "No analysis performed"


def test_single_element_defaults_to_horizontal():
    result = analyze_optimal_direction([make_element("solo", 40, 40, 10, 300)])
    assert result.direction == "horizontal"
    assert result.confidence == 1.0
    assert result.factors.aspect_ratio.score == 1.0


def test_row_is_horizontal():
    result = analyze_optimal_direction(ROW_ELEMENTS)
    assert result.direction == "horizontal"
    assert result.confidence > 0.6
    assert result.confidence == pytest.approx(0.77, abs=1e-6)
    assert result.factors.linear_arrangement.direction == "horizontal"
    assert result.factors.linear_arrangement.score == pytest.approx(1.0)
    assert result.factors.aspect_ratio.score == pytest.approx(0.9)


def test_column_is_vertical():
    result = analyze_optimal_direction(COLUMN_ELEMENTS)
    assert result.direction == "vertical"
    assert result.confidence > 0.6
    assert result.confidence == pytest.approx(0.72, abs=1e-6)


def test_named_button_row():
    result = analyze_optimal_direction(BUTTON_ROW)
    assert result.direction == "horizontal"
    assert result.confidence > 0.8


def test_named_item_column():
    result = analyze_optimal_direction(ITEM_COLUMN)
    assert result.direction == "vertical"
    assert result.confidence > 0.8


def test_low_confidence_reported_as_half():
    # Side by side (arrangement says horizontal) but tall overall (aspect says vertical)
    elements = [make_element("l", 0, 0, 20, 100), make_element("r", 30, 0, 20, 100)]
    result = analyze_optimal_direction(elements)
    assert result.direction == "horizontal"
    assert result.confidence == 0.5


def test_linear_arrangement_overlap_penalty():
    # Overlapping by 25px along x halves the horizontal score
    elements = [make_element("a", 0, 0, 100, 20), make_element("b", 75, 0, 100, 20)]
    h = analyze_linear_arrangement(elements)
    assert h.direction == "horizontal"
    assert h.score == pytest.approx(0.5)


def test_linear_arrangement_needs_two():
    result = analyze_linear_arrangement([make_element("a", 0, 0, 10, 10)])
    assert result.score == 0.5


@pytest.mark.parametrize(
    "width, height, direction, score",
    [
        (300, 100, "horizontal", 0.9),
        (160, 100, "horizontal", 0.7),
        (120, 100, "horizontal", 0.6),
        (100, 100, "vertical", 0.6),
        (60, 100, "vertical", 0.7),
        (40, 100, "vertical", 0.9),
    ],
)
def test_aspect_ratio_bands(width, height, direction, score):
    result = analyze_aspect_ratio([make_element("box", 0, 0, width, height)])
    assert result.direction == direction
    assert result.score == pytest.approx(score)


def test_text_flow_list_markers():
    elements = [
        make_element("a", 0, 0, 100, 20, element_type=ElementType.TEXT, characters="1. First step"),
        make_element("b", 0, 30, 100, 20, element_type=ElementType.TEXT, characters="2. Second step"),
    ]
    assert _text_flow(elements) == (0.0, 1.0)


def test_text_flow_navigation_markers():
    elements = [
        make_element("a", 0, 0, 300, 20, element_type=ElementType.TEXT, characters="Home | Products | Pricing"),
        make_element("b", 0, 30, 300, 20, element_type=ElementType.TEXT, characters="About our company story"),
    ]
    assert _text_flow(elements) == (1.0, 0.0)


def test_text_flow_ignores_text_without_content():
    elements = [
        make_element("a", 0, 0, 100, 20, element_type=ElementType.TEXT),
        make_element("b", 0, 30, 100, 20, element_type=ElementType.TEXT),
    ]
    assert _text_flow(elements) == (0.5, 0.5)


def test_text_flow_counts_empty_string_as_short_text():
    elements = [
        make_element("a", 0, 0, 100, 20, element_type=ElementType.TEXT, characters=""),
        make_element("b", 0, 30, 100, 20, element_type=ElementType.TEXT, characters=""),
    ]
    assert _text_flow(elements) == (0.0, 1.0)


def test_text_flow_single_text_leans_horizontal():
    assert _text_flow([make_element("a", 0, 0, 10, 10, element_type=ElementType.TEXT)]) == (0.6, 0.4)


def test_name_flow():
    h, v = _name_flow([make_element("c", 0, 0, 10, 10, name="Product Card")])
    assert v > h
    assert h + v == pytest.approx(1.0)
    h, v = _name_flow([make_element("b", 0, 0, 10, 10, name="Primary CTA")])
    assert h > v


def test_size_flow():
    elements = [make_element("a", 0, 0, 100, 20), make_element("b", 0, 30, 100, 80)]
    h, v = _size_flow(elements)
    assert h == pytest.approx(0.64)
    assert v == pytest.approx(1.0)


def test_combine_ties_go_vertical():
    neutral = HeuristicResult(direction="horizontal", score=0.5)
    assert combine_heuristics([(neutral, 1.0)]) == ("vertical", 0.5)


def test_combine_unanimous():
    strong = HeuristicResult(direction="vertical", score=1.0)
    direction, confidence = combine_heuristics([(strong, 0.4), (strong, 0.3), (strong, 0.3)])
    assert direction == "vertical"
    assert confidence == pytest.approx(1.0)


def test_confidence_always_in_unit_range():
    groups = [ROW_ELEMENTS, COLUMN_ELEMENTS, BUTTON_ROW, ITEM_COLUMN, ROW_ELEMENTS + ITEM_COLUMN]
    for elements in groups:
        result = analyze_optimal_direction(elements)
        assert 0 <= result.confidence <= 1
        for factor in (
            result.factors.linear_arrangement,
            result.factors.content_flow,
            result.factors.aspect_ratio,
        ):
            assert 0 <= factor.score <= 1
