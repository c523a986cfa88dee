"""T1.06 — Overlap Resolution.

Greedy largest-first reconciliation: accept a cluster only when it shares
no element with any cluster already accepted. Components from one pass
are disjoint already; this matters when passes are merged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from layoutsight.engine.context import AnalysisContext
from layoutsight.engine.registry import Layer, transform
from layoutsight.models.analysis import ProximityCluster

logger = logging.getLogger(__name__)


def clusters_overlap(a: ProximityCluster, b: ProximityCluster) -> bool:
    """True when the clusters share at least one element id."""
    return not set(a.element_ids).isdisjoint(b.element_ids)


def remove_overlapping_clusters(clusters: Iterable[ProximityCluster]) -> list[ProximityCluster]:
    # Stable sort: equal-sized clusters keep their input order
    ordered = sorted(clusters, key=lambda c: c.size, reverse=True)
    accepted: list[ProximityCluster] = []
    claimed: set[str] = set()

    for cluster in ordered:
        if claimed.isdisjoint(cluster.element_ids):
            accepted.append(cluster)
            claimed.update(cluster.element_ids)
        else:
            logger.debug(
                "Dropping cluster of %d elements overlapping a larger cluster",
                cluster.size,
            )
    return accepted


def merge_cluster_passes(*passes: Iterable[ProximityCluster]) -> list[ProximityCluster]:
    """Combine clusters from several analysis passes into one disjoint set."""
    combined = [cluster for clusters in passes for cluster in clusters]
    return remove_overlapping_clusters(combined)


@transform(
    id="T1.06",
    layer=Layer.PROXIMITY,
    dependencies=["T1.05"],
    description="Resolve overlapping clusters, largest first",
)
def overlap_resolution(ctx: AnalysisContext) -> None:
    before = len(ctx.clusters)
    ctx.clusters = remove_overlapping_clusters(ctx.clusters)
    if len(ctx.clusters) != before:
        logger.info("Overlap resolution dropped %d clusters", before - len(ctx.clusters))
