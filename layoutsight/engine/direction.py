"""Direction classifier — recommends a stacking direction for a group of elements.

Three independent heuristics each vote for an axis with a score in [0, 1]:

- linear arrangement (0.4): cross-axis alignment, gap regularity, overlap
- content flow (0.3): text patterns, layer names, size consistency
- aspect ratio (0.3): shape of the group's bounding box

Votes are combined as weighted contributions to both axes; the larger
aggregate wins. Aggregates below 0.6 are reported as exactly 0.5.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from layoutsight.engine.context import Element, ElementType
from layoutsight.models.analysis import DirectionAnalysis, DirectionFactors, HeuristicResult
from layoutsight.utils.geometry import bounding_box_of
from layoutsight.utils.math_helpers import clamp01, mean, std_dev, variance

logger = logging.getLogger(__name__)

ARRANGEMENT_WEIGHT = 0.4
FLOW_WEIGHT = 0.3
ASPECT_WEIGHT = 0.3

MIN_CONFIDENCE = 0.6
UNCERTAIN_CONFIDENCE = 0.5

ALIGNMENT_REFERENCE_PX = 200.0
SPACING_REFERENCE_PX = 50.0
OVERLAP_REFERENCE_PX = 50.0

NAV_MARKERS = ("•", "|", "home", "about", "contact", "menu")
LIST_PATTERN = re.compile(r"^(\d+\.|[•▪▫-])")
SHORT_TEXT_LENGTH = 20

BUTTON_NAMES = ("button", "cta", "link")
CARD_NAMES = ("card", "item", "tile")


def _pick(horizontal: float, vertical: float) -> tuple[str, float]:
    """Higher score wins; ties go to vertical."""
    if horizontal > vertical:
        return "horizontal", horizontal
    return "vertical", vertical


# --- Heuristic 1: linear arrangement ---


def _arrangement_score(elements: Sequence[Element], horizontal: bool) -> float:
    if horizontal:
        ordered = sorted(elements, key=lambda e: e.bounds.x)
        starts = [e.bounds.x for e in ordered]
        ends = [e.bounds.right for e in ordered]
        cross_centers = [e.bounds.center_y for e in ordered]
    else:
        ordered = sorted(elements, key=lambda e: e.bounds.y)
        starts = [e.bounds.y for e in ordered]
        ends = [e.bounds.bottom for e in ordered]
        cross_centers = [e.bounds.center_x for e in ordered]

    alignment = max(0.0, 1 - std_dev(cross_centers) / ALIGNMENT_REFERENCE_PX)

    gaps = [max(0.0, starts[i + 1] - ends[i]) for i in range(len(ordered) - 1)]
    spacing = max(0.0, 1 - std_dev(gaps) / SPACING_REFERENCE_PX)

    penalty = 1.0
    for i in range(len(ordered) - 1):
        overlap = ends[i] - starts[i + 1]
        if overlap > 0:
            penalty *= max(0.0, 1 - overlap / OVERLAP_REFERENCE_PX)

    return alignment * spacing * penalty


def analyze_linear_arrangement(elements: Sequence[Element]) -> HeuristicResult:
    if len(elements) < 2:
        return HeuristicResult(
            direction="horizontal",
            score=0.5,
            reasoning="Insufficient elements for arrangement analysis",
        )

    h = _arrangement_score(elements, horizontal=True)
    v = _arrangement_score(elements, horizontal=False)
    direction, score = _pick(h, v)
    return HeuristicResult(
        direction=direction,
        score=score,
        reasoning=f"Linear arrangement: horizontal={h:.2f}, vertical={v:.2f}",
    )


# --- Heuristic 2: content flow ---


def _text_flow(elements: Sequence[Element]) -> tuple[float, float]:
    texts = [e for e in elements if e.element_type == ElementType.TEXT]
    if not texts:
        return 0.5, 0.5
    if len(texts) == 1:
        return 0.6, 0.4

    h_hits = 0
    v_hits = 0
    for el in texts:
        # No character content at all; an empty string still counts as short text
        if el.characters is None:
            continue
        text = el.characters.lower()
        if any(marker in text for marker in NAV_MARKERS):
            h_hits += 1
        if LIST_PATTERN.match(text) or "\n" in text or el.character_count < SHORT_TEXT_LENGTH:
            v_hits += 1

    total = h_hits + v_hits
    if total == 0:
        return 0.5, 0.5
    return h_hits / total, v_hits / total


def _name_flow(elements: Sequence[Element]) -> tuple[float, float]:
    h = 0.5
    v = 0.5
    names = [e.name.lower() for e in elements]
    if any(token in name for name in names for token in BUTTON_NAMES):
        h += 0.2
    if any(token in name for name in names for token in CARD_NAMES):
        v += 0.2
    total = h + v
    return h / total, v / total


def _consistency(values: list[float]) -> float:
    avg = mean(values)
    if avg == 0:
        return 1.0
    return 1 - min(1.0, variance(values) / (avg * avg))


def _size_flow(elements: Sequence[Element]) -> tuple[float, float]:
    """Matching heights suggest a row; matching widths suggest a column."""
    if len(elements) < 2:
        return 0.5, 0.5
    heights = [e.bounds.height for e in elements]
    widths = [e.bounds.width for e in elements]
    return _consistency(heights), _consistency(widths)


def analyze_content_flow(elements: Sequence[Element]) -> HeuristicResult:
    text = _text_flow(elements)
    names = _name_flow(elements)
    sizes = _size_flow(elements)

    h = (text[0] + names[0] + sizes[0]) / 3
    v = (text[1] + names[1] + sizes[1]) / 3
    direction, score = _pick(h, v)
    return HeuristicResult(
        direction=direction,
        score=score,
        reasoning=(
            f"Content flow: text=({text[0]:.2f}, {text[1]:.2f}), "
            f"names=({names[0]:.2f}, {names[1]:.2f}), sizes=({sizes[0]:.2f}, {sizes[1]:.2f})"
        ),
    )


# --- Heuristic 3: aspect ratio ---


def analyze_aspect_ratio(elements: Sequence[Element]) -> HeuristicResult:
    group = bounding_box_of(e.bounds for e in elements)
    if group is None:
        return HeuristicResult(direction="horizontal", score=0.5, reasoning="No elements to analyze")

    ratio = group.aspect_ratio
    if ratio > 2.0:
        h, v, label = 0.9, 0.1, "Very wide aspect ratio ({:.2f}) strongly suggests horizontal layout"
    elif ratio > 1.5:
        h, v, label = 0.7, 0.3, "Wide aspect ratio ({:.2f}) suggests horizontal layout"
    elif ratio < 0.5:
        h, v, label = 0.1, 0.9, "Very tall aspect ratio ({:.2f}) strongly suggests vertical layout"
    elif ratio < 0.67:
        h, v, label = 0.3, 0.7, "Tall aspect ratio ({:.2f}) suggests vertical layout"
    elif ratio > 1.0:
        h, v, label = 0.6, 0.4, "Slightly wide aspect ratio ({:.2f}) weakly suggests horizontal layout"
    else:
        h, v, label = 0.4, 0.6, "Slightly tall aspect ratio ({:.2f}) weakly suggests vertical layout"

    direction, score = _pick(h, v)
    return HeuristicResult(direction=direction, score=score, reasoning=label.format(ratio))


# --- Combination ---


def combine_heuristics(weighted: Sequence[tuple[HeuristicResult, float]]) -> tuple[str, float]:
    """Weighted vote across heuristics → (direction, confidence)."""
    h = 0.0
    v = 0.0
    total_weight = 0.0
    for result, weight in weighted:
        if result.direction == "horizontal":
            h += weight * result.score
            v += weight * (1 - result.score)
        else:
            v += weight * result.score
            h += weight * (1 - result.score)
        total_weight += weight

    if total_weight > 0:
        h /= total_weight
        v /= total_weight

    direction, confidence = _pick(clamp01(h), clamp01(v))
    if confidence < MIN_CONFIDENCE:
        confidence = UNCERTAIN_CONFIDENCE
    return direction, confidence


def _uniform_factors(score: float, reasoning: str) -> DirectionFactors:
    result = HeuristicResult(direction="horizontal", score=score, reasoning=reasoning)
    return DirectionFactors(linear_arrangement=result, content_flow=result, aspect_ratio=result)


def analyze_optimal_direction(elements: Sequence[Element]) -> DirectionAnalysis:
    """Recommend horizontal or vertical stacking for ``elements``."""
    if len(elements) == 0:
        return DirectionAnalysis(
            direction="horizontal",
            confidence=0.0,
            factors=_uniform_factors(0.0, "No analysis performed"),
        )
    if len(elements) == 1:
        return DirectionAnalysis(
            direction="horizontal",
            confidence=1.0,
            factors=_uniform_factors(1.0, "Single element - default to horizontal"),
        )

    arrangement = analyze_linear_arrangement(elements)
    flow = analyze_content_flow(elements)
    aspect = analyze_aspect_ratio(elements)

    direction, confidence = combine_heuristics(
        [
            (arrangement, ARRANGEMENT_WEIGHT),
            (flow, FLOW_WEIGHT),
            (aspect, ASPECT_WEIGHT),
        ]
    )

    logger.debug(
        "Direction for %d elements: %s (%.2f) [arrangement %s %.2f, flow %s %.2f, aspect %s %.2f]",
        len(elements),
        direction,
        confidence,
        arrangement.direction,
        arrangement.score,
        flow.direction,
        flow.score,
        aspect.direction,
        aspect.score,
    )

    return DirectionAnalysis(
        direction=direction,
        confidence=confidence,
        factors=DirectionFactors(
            linear_arrangement=arrangement,
            content_flow=flow,
            aspect_ratio=aspect,
        ),
    )
