"""Public entry points for spatial analysis.

Every call builds a fresh AnalysisContext, runs the transform pipeline on
it and formats the result. Nothing is shared between calls apart from the
transform registry.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any

from layoutsight.config import settings
from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import AnalysisContext, Element
from layoutsight.engine.direction import analyze_optimal_direction
from layoutsight.engine.formatter import collect_relationships, context_to_result
from layoutsight.engine.layer1.t1_06_overlap_resolution import (
    clusters_overlap,
    merge_cluster_passes,
    remove_overlapping_clusters,
)
from layoutsight.engine.pipeline import Pipeline, create_pipeline
from layoutsight.models.analysis import AnalysisResult, ProximityCluster, SpatialRelationship
from layoutsight.models.scene import SceneNode
from layoutsight.scene.parser import build_context, context_from_elements, validate_root

logger = logging.getLogger(__name__)

PROXIMITY_TRANSFORMS = {"T1.06"}
RELATIONSHIP_TRANSFORMS = {"T2.01", "T2.02", "T2.03"}

_pipeline: Pipeline | None = None


def get_pipeline() -> Pipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = create_pipeline()
    return _pipeline


def default_config() -> AnalysisConfig:
    """Default thresholds, with caller-policy caps taken from the environment."""
    return AnalysisConfig(
        max_elements=settings.layoutsight_max_elements,
        time_budget_ms=settings.layoutsight_time_budget_ms,
    )


def _run(ctx: AnalysisContext, only: set[str] | None = None) -> AnalysisResult:
    start = time.perf_counter()
    get_pipeline().run(ctx, only=only)
    return context_to_result(ctx, (time.perf_counter() - start) * 1000)


def analyze_scene(
    root: SceneNode | str | Mapping[str, Any] | None,
    atomic_ids: Iterable[str] = (),
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Full analysis of the scene under ``root``: clusters plus relationships.

    Invalid roots give an empty result with ``validation_error`` set.
    Malformed JSON or mappings raise pydantic.ValidationError.
    """
    config = config or default_config()
    if root is None:
        ctx = AnalysisContext(config=config, validation=validate_root(None))
        return context_to_result(ctx)

    ctx = build_context(root, atomic_ids=atomic_ids, config=config)
    result = _run(ctx)
    logger.info(
        "Analyzed %s: %d elements, %d clusters, %d relationships",
        ctx.root_id,
        result.element_count,
        len(result.clusters),
        len(result.relationships),
    )
    return result


def analyze_elements(
    elements: Iterable[Element],
    root_size: tuple[float, float] | None = None,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Full analysis of an already-collected, frame-relative element list."""
    ctx = context_from_elements(elements, root_size=root_size, config=config or default_config())
    return _run(ctx)


def detect_proximity_groups(
    elements: Iterable[Element],
    config: AnalysisConfig | None = None,
) -> list[ProximityCluster]:
    """Clusters of nearby elements, each with its recommended direction."""
    ctx = context_from_elements(elements, config=config or default_config())
    get_pipeline().run(ctx, only=PROXIMITY_TRANSFORMS)
    return ctx.clusters


def analyze_spatial_relationships(
    elements: Iterable[Element],
    root_size: tuple[float, float] | None = None,
    config: AnalysisConfig | None = None,
) -> list[SpatialRelationship]:
    """Anchor, flow and alignment patterns among ``elements``."""
    ctx = context_from_elements(elements, root_size=root_size, config=config or default_config())
    get_pipeline().run(ctx, only=RELATIONSHIP_TRANSFORMS)
    return collect_relationships(ctx)


__all__ = [
    "analyze_scene",
    "analyze_elements",
    "detect_proximity_groups",
    "analyze_spatial_relationships",
    "analyze_optimal_direction",
    "remove_overlapping_clusters",
    "clusters_overlap",
    "merge_cluster_passes",
    "default_config",
]
