"""T1.05 — Cluster Direction.

Turn each surviving component into a ProximityCluster: union bounds plus
the direction classifier's recommendation.
"""

from __future__ import annotations

from layoutsight.engine.context import AnalysisContext
from layoutsight.engine.direction import analyze_optimal_direction
from layoutsight.engine.registry import Layer, transform
from layoutsight.models.analysis import ProximityCluster, Rect
from layoutsight.utils.geometry import bounding_box_of


@transform(
    id="T1.05",
    layer=Layer.PROXIMITY,
    dependencies=["T1.04"],
    description="Classify the stacking direction of each cluster",
)
def cluster_direction(ctx: AnalysisContext) -> None:
    clusters: list[ProximityCluster] = []
    for members in ctx.candidate_clusters:
        bounds = bounding_box_of(el.bounds for el in members)
        if bounds is None:
            continue
        analysis = analyze_optimal_direction(members)
        clusters.append(
            ProximityCluster(
                element_ids=[el.id for el in members],
                bounds=Rect.from_bounds(bounds),
                direction=analysis.direction,
                confidence=analysis.confidence,
            )
        )
    ctx.clusters = clusters
