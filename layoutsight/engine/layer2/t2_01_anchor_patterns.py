"""T2.01 — Anchor Patterns.

Find hub elements that other elements are positioned around. For each
candidate hub, every element whose center lies within a plausible
distance band gets an anchor strength:

    0.4 * hub area + 0.4 * angular consistency + 0.2 * max(0, 1 - 2 * distance)

Angular consistency is the share of the remaining elements whose angle
from the hub is within 45° of this element's angle. A hub with at least
two anchored elements becomes a pattern when its confidence

    0.4 * min(1, count / 4) + 0.4 * mean strength + 0.2 * min(1, 3 * hub area)

meets the threshold. The three most confident hubs are kept.
"""

from __future__ import annotations

import logging

from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import AnalysisContext, NormalizedElement
from layoutsight.engine.registry import Layer, transform
from layoutsight.models.analysis import AnchoredElement, AnchorPattern, Point
from layoutsight.utils.geometry import angle_between, angular_difference, point_distance

logger = logging.getLogger(__name__)

MIN_ANCHOR_DISTANCE = 0.05
MAX_ANCHOR_DISTANCE = 0.8
CONSISTENT_ANGLE = 45.0
MAX_PATTERNS = 3


def positional_consistency(
    anchor: NormalizedElement,
    element: NormalizedElement,
    elements: list[NormalizedElement],
) -> float:
    origin = anchor.bounds.center
    target_angle = angle_between(origin, element.bounds.center)

    consistent = 0
    total = 0
    for other in elements:
        if other.element_id in (anchor.element_id, element.element_id):
            continue
        other_angle = angle_between(origin, other.bounds.center)
        if angular_difference(target_angle, other_angle) < CONSISTENT_ANGLE:
            consistent += 1
        total += 1

    return consistent / total if total else 0.0


def anchor_strength(
    anchor: NormalizedElement,
    element: NormalizedElement,
    elements: list[NormalizedElement],
) -> float:
    distance = point_distance(anchor.bounds.center, element.bounds.center)
    return (
        anchor.area * 0.4
        + positional_consistency(anchor, element, elements) * 0.4
        + max(0.0, 1 - distance * 2) * 0.2
    )


def anchor_confidence(anchor: NormalizedElement, anchored: list[AnchoredElement]) -> float:
    count_score = min(1.0, len(anchored) / 4)
    mean_strength = sum(a.anchor_strength for a in anchored) / len(anchored)
    size_score = min(1.0, anchor.area * 3)
    return count_score * 0.4 + mean_strength * 0.4 + size_score * 0.2


def detect_anchor_patterns(
    elements: list[NormalizedElement],
    config: AnalysisConfig,
) -> list[AnchorPattern]:
    if len(elements) < 3:
        return []

    patterns: list[AnchorPattern] = []
    for candidate in elements:
        hub = candidate.bounds.center
        anchored: list[AnchoredElement] = []

        for element in elements:
            if element.element_id == candidate.element_id:
                continue
            center = element.bounds.center
            distance = point_distance(hub, center)
            if not MIN_ANCHOR_DISTANCE < distance < MAX_ANCHOR_DISTANCE:
                continue

            strength = anchor_strength(candidate, element, elements)
            if strength > config.anchor_detection_threshold:
                anchored.append(
                    AnchoredElement(
                        element_id=element.element_id,
                        relative_position=Point(x=center[0] - hub[0], y=center[1] - hub[1]),
                        anchor_strength=min(1.0, strength),
                    )
                )

        if len(anchored) < 2:
            continue

        confidence = anchor_confidence(candidate, anchored)
        if confidence >= config.confidence_threshold:
            patterns.append(
                AnchorPattern(
                    anchor_element_id=candidate.element_id,
                    anchored_elements=anchored,
                    confidence=min(1.0, confidence),
                )
            )

    patterns.sort(key=lambda p: p.confidence, reverse=True)
    return patterns[:MAX_PATTERNS]


@transform(
    id="T2.01",
    layer=Layer.RELATIONSHIPS,
    dependencies=["T0.02"],
    description="Detect hub-and-spoke anchor patterns",
)
def anchor_patterns(ctx: AnalysisContext) -> None:
    ctx.anchor_patterns = detect_anchor_patterns(ctx.normalized, ctx.config)
    logger.debug("Anchor detection: %d patterns", len(ctx.anchor_patterns))
