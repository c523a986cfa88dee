"""LayoutSight — proximity grouping and spatial relationship analysis for 2D design scenes."""

from layoutsight.analyzer import (
    analyze_elements,
    analyze_optimal_direction,
    analyze_scene,
    analyze_spatial_relationships,
    clusters_overlap,
    detect_proximity_groups,
    merge_cluster_passes,
    remove_overlapping_clusters,
)
from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import Element, ElementType
from layoutsight.utils.geometry import Bounds

__version__ = "0.1.0"

__all__ = [
    "AnalysisConfig",
    "Bounds",
    "Element",
    "ElementType",
    "analyze_elements",
    "analyze_optimal_direction",
    "analyze_scene",
    "analyze_spatial_relationships",
    "clusters_overlap",
    "detect_proximity_groups",
    "merge_cluster_passes",
    "remove_overlapping_clusters",
]
