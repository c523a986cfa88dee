"""T1.02 — Proximity Graph.

Undirected adjacency over the candidates: a pair is connected when its
edge distance is within ``proximity_threshold``. Every candidate gets an
entry, possibly with no edges.
"""

from __future__ import annotations

import logging

from layoutsight.engine.context import AnalysisContext, ElementDistance, ProximityEdge, ProximityGraph
from layoutsight.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


def build_proximity_graph(
    element_ids: list[str],
    distances: list[ElementDistance],
    threshold: float,
) -> ProximityGraph:
    graph: ProximityGraph = {eid: [] for eid in element_ids}
    for d in distances:
        if d.distance <= threshold:
            graph[d.element1].append(ProximityEdge(to=d.element2, distance=d.distance))
            graph[d.element2].append(ProximityEdge(to=d.element1, distance=d.distance))
    return graph


@transform(
    id="T1.02",
    layer=Layer.PROXIMITY,
    dependencies=["T1.01"],
    description="Connect elements within the proximity threshold",
)
def proximity_graph(ctx: AnalysisContext) -> None:
    graph = build_proximity_graph(
        [el.id for el in ctx.elements],
        ctx.distances,
        ctx.config.proximity_threshold,
    )
    ctx.proximity_graph = graph
    logger.debug(
        "Proximity graph: %d nodes, %d edges (threshold %.1fpx)",
        len(graph),
        sum(len(edges) for edges in graph.values()) // 2,
        ctx.config.proximity_threshold,
    )
