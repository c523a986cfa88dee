"""T1.04 — Cluster Filtering.

Drop components smaller than ``min_group_size`` and, when container
boundaries are respected, components whose members do not share one
immediate parent.
"""

from __future__ import annotations

import logging

from layoutsight.engine.context import AnalysisContext, Element
from layoutsight.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


def shares_container(members: list[Element]) -> bool:
    return len({el.parent_id for el in members}) <= 1


@transform(
    id="T1.04",
    layer=Layer.PROXIMITY,
    dependencies=["T1.03"],
    description="Filter components by size and container boundaries",
)
def cluster_filtering(ctx: AnalysisContext) -> None:
    cfg = ctx.config
    kept: list[list[Element]] = []
    too_small = 0
    cross_container = 0

    for members in ctx.components:
        if len(members) < cfg.min_group_size:
            too_small += 1
            continue
        if cfg.respect_container_boundaries and not shares_container(members):
            cross_container += 1
            continue
        kept.append(members)

    ctx.candidate_clusters = kept
    logger.debug(
        "Cluster filtering: %d kept, %d below size %d, %d across containers",
        len(kept),
        too_small,
        cfg.min_group_size,
        cross_container,
    )
