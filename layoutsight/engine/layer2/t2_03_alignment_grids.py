"""T2.03 — Alignment Grids.

Per axis, gather each element's near edge, center and far edge, and merge
them first-fit into lines within ``alignment_tolerance`` (px / 1000 in
normalized space) of a line's first coordinate. Lines with two or more
elements are significant; two or more significant lines form a grid when

    0.7 * mean line strength + 0.3 * min(1, lines / 3)

clears the threshold. Line strength is members / total elements.
Horizontal grids share y coordinates, vertical grids share x coordinates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import AnalysisContext, NormalizedElement
from layoutsight.engine.registry import Layer, transform
from layoutsight.models.analysis import AlignmentGrid, AlignmentLine, Direction

logger = logging.getLogger(__name__)


@dataclass
class _Line:
    position: float
    members: list[str] = field(default_factory=list)


def _axis_coordinates(element: NormalizedElement, grid_type: Direction) -> tuple[float, float, float]:
    b = element.bounds
    if grid_type == "horizontal":
        return b.top, (b.top + b.bottom) / 2, b.bottom
    return b.left, (b.left + b.right) / 2, b.right


def alignment_lines(
    elements: list[NormalizedElement],
    grid_type: Direction,
    tolerance: float,
) -> list[AlignmentLine]:
    lines: list[_Line] = []
    for element in elements:
        for coord in _axis_coordinates(element, grid_type):
            for line in lines:
                if abs(line.position - coord) <= tolerance:
                    if element.element_id not in line.members:
                        line.members.append(element.element_id)
                    break
            else:
                lines.append(_Line(position=coord, members=[element.element_id]))

    total = len(elements)
    return [
        AlignmentLine(
            position=line.position,
            element_ids=line.members,
            strength=min(1.0, len(line.members) / total),
        )
        for line in lines
        if len(line.members) >= 2
    ]


def alignment_confidence(lines: list[AlignmentLine]) -> float:
    mean_strength = sum(line.strength for line in lines) / len(lines)
    return min(1.0, mean_strength * 0.7 + min(1.0, len(lines) / 3) * 0.3)


def detect_axis_grid(
    elements: list[NormalizedElement],
    grid_type: Direction,
    config: AnalysisConfig,
) -> AlignmentGrid | None:
    lines = alignment_lines(elements, grid_type, config.normalized_alignment_tolerance)
    if len(lines) < 2:
        return None
    confidence = alignment_confidence(lines)
    if confidence < config.confidence_threshold:
        return None
    return AlignmentGrid(grid_type=grid_type, alignment_lines=lines, confidence=confidence)


def detect_alignment_grids(
    elements: list[NormalizedElement],
    config: AnalysisConfig,
) -> list[AlignmentGrid]:
    if len(elements) < 3:
        return []
    grids = []
    for grid_type in ("horizontal", "vertical"):
        grid = detect_axis_grid(elements, grid_type, config)
        if grid is not None:
            grids.append(grid)
    return grids


@transform(
    id="T2.03",
    layer=Layer.RELATIONSHIPS,
    dependencies=["T0.02"],
    description="Detect shared edge and center alignment lines",
)
def alignment_grids(ctx: AnalysisContext) -> None:
    ctx.alignment_grids = detect_alignment_grids(ctx.normalized, ctx.config)
    logger.debug(
        "Alignment detection: %s",
        ", ".join(f"{g.grid_type} ({len(g.alignment_lines)} lines)" for g in ctx.alignment_grids) or "none",
    )
