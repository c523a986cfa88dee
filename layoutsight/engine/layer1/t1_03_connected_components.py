"""T1.03 — Connected Components.

Depth-first traversal from every unvisited node of the proximity graph,
using an explicit stack. Components keep candidate order for their seed.
"""

from __future__ import annotations

from layoutsight.engine.context import AnalysisContext, ProximityGraph
from layoutsight.engine.registry import Layer, transform


def find_connected_components(graph: ProximityGraph) -> list[list[str]]:
    visited: set[str] = set()
    components: list[list[str]] = []

    for start in graph:
        if start in visited:
            continue
        component: list[str] = []
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            component.append(node)
            for edge in reversed(graph.get(node, [])):
                if edge.to not in visited:
                    stack.append(edge.to)
        components.append(component)

    return components


@transform(
    id="T1.03",
    layer=Layer.PROXIMITY,
    dependencies=["T1.02"],
    description="Find connected components of the proximity graph",
)
def connected_components(ctx: AnalysisContext) -> None:
    by_id = {el.id: el for el in ctx.elements}
    ctx.components = [
        [by_id[eid] for eid in component]
        for component in find_connected_components(ctx.proximity_graph)
    ]
