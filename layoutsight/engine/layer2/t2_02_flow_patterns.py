"""T2.02 — Flow Patterns.

Pairwise center-to-center vectors, grouped first-fit by direction: a
vector joins the first group whose running (circular) mean direction is
within ``flow_angle_threshold``. Groups of two or more vectors become
patterns when their confidence clears the threshold. The spread of a
group's directions names the flow: linear, diagonal, spiral or circular.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import AnalysisContext, NormalizedElement
from layoutsight.engine.registry import Layer, transform
from layoutsight.models.analysis import FlowPattern, FlowVector, Point
from layoutsight.utils.geometry import angle_between, angular_difference, point_distance
from layoutsight.utils.math_helpers import circular_mean, circular_std

logger = logging.getLogger(__name__)

FlowType = Literal["linear", "diagonal", "spiral", "circular"]


@dataclass
class _VectorGroup:
    vectors: list[FlowVector] = field(default_factory=list)
    mean_direction: float = 0.0

    def add(self, vector: FlowVector) -> None:
        self.vectors.append(vector)
        self.mean_direction = circular_mean([v.direction for v in self.vectors])


def flow_vectors(elements: list[NormalizedElement], min_distance: float) -> list[FlowVector]:
    vectors: list[FlowVector] = []
    for i, first in enumerate(elements):
        for second in elements[i + 1:]:
            start = first.bounds.center
            end = second.bounds.center
            distance = point_distance(start, end)
            if distance < min_distance:
                continue
            vectors.append(
                FlowVector(
                    direction=angle_between(start, end),
                    magnitude=min(1.0, distance * 2),
                    from_point=Point(x=start[0], y=start[1]),
                    to_point=Point(x=end[0], y=end[1]),
                    from_element=first.element_id,
                    to_element=second.element_id,
                )
            )
    return vectors


def group_by_direction(vectors: list[FlowVector], angle_threshold: float) -> list[_VectorGroup]:
    groups: list[_VectorGroup] = []
    for vector in vectors:
        for group in groups:
            if angular_difference(vector.direction, group.mean_direction) <= angle_threshold:
                group.add(vector)
                break
        else:
            group = _VectorGroup()
            group.add(vector)
            groups.append(group)
    return groups


def classify_flow_type(vectors: list[FlowVector]) -> FlowType:
    spread = circular_std([v.direction for v in vectors])
    if spread < 15:
        return "linear"
    if spread < 45:
        return "diagonal"
    if spread < 90:
        return "spiral"
    return "circular"


def flow_confidence(vectors: list[FlowVector]) -> float:
    mean_magnitude = sum(v.magnitude for v in vectors) / len(vectors)
    return min(1.0, min(1.0, len(vectors) / 3) * 0.6 + min(1.0, mean_magnitude * 1.5) * 0.4)


def involved_elements(vectors: list[FlowVector]) -> list[str]:
    seen: dict[str, None] = {}
    for v in vectors:
        seen.setdefault(v.from_element, None)
        seen.setdefault(v.to_element, None)
    return list(seen)


def detect_flow_patterns(
    elements: list[NormalizedElement],
    config: AnalysisConfig,
) -> list[FlowPattern]:
    if len(elements) < 3:
        return []

    vectors = flow_vectors(elements, config.normalized_flow_distance)
    groups = group_by_direction(vectors, config.flow_angle_threshold)

    patterns: list[FlowPattern] = []
    for group in groups:
        if len(group.vectors) < 2:
            continue
        confidence = flow_confidence(group.vectors)
        if confidence < config.confidence_threshold:
            continue
        patterns.append(
            FlowPattern(
                flow_type=classify_flow_type(group.vectors),
                vectors=group.vectors,
                involved_elements=involved_elements(group.vectors),
                confidence=confidence,
            )
        )

    logger.debug(
        "Flow detection: %d vectors in %d groups, %d patterns",
        len(vectors),
        len(groups),
        len(patterns),
    )
    return patterns


@transform(
    id="T2.02",
    layer=Layer.RELATIONSHIPS,
    dependencies=["T0.02"],
    description="Detect directional flow between elements",
)
def flow_patterns(ctx: AnalysisContext) -> None:
    ctx.flow_patterns = detect_flow_patterns(ctx.normalized, ctx.config)
