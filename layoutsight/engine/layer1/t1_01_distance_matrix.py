"""T1.01 — Pairwise Distance Matrix.

Edge-to-edge distance for every candidate pair (0 when boxes overlap),
plus the coarse axis along which each pair is separated.
"""

from __future__ import annotations

import logging

from layoutsight.engine.context import AnalysisContext, ElementDistance
from layoutsight.engine.registry import Layer, transform
from layoutsight.utils.geometry import edge_distance_matrix, separation_direction

logger = logging.getLogger(__name__)


@transform(
    id="T1.01",
    layer=Layer.PROXIMITY,
    dependencies=["T0.01"],
    description="Compute pairwise edge-to-edge distances",
)
def distance_matrix(ctx: AnalysisContext) -> None:
    elements = ctx.elements
    n = len(elements)
    if n < 2:
        return

    dmat = edge_distance_matrix([el.bounds for el in elements])
    ctx.distance_matrix = dmat

    distances: list[ElementDistance] = []
    for i in range(n):
        for j in range(i + 1, n):
            distances.append(
                ElementDistance(
                    element1=elements[i].id,
                    element2=elements[j].id,
                    distance=float(dmat[i, j]),
                    direction=separation_direction(elements[i].bounds, elements[j].bounds),
                )
            )
    ctx.distances = distances
    logger.debug("Computed %d pairwise distances for %d elements", len(distances), n)
