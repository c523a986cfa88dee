"""Analysis configuration — thresholds for grouping and pattern detection."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AnalysisConfig:
    """Immutable knobs passed into every analysis entry point."""

    # Proximity grouping
    proximity_threshold: float = 50.0  # px, max edge distance for adjacency
    min_group_size: int = 2
    respect_container_boundaries: bool = True
    respect_atomic_protection: bool = True

    # Candidate collection
    min_element_size: float = 5.0  # px, both dimensions

    # Relationship detection
    anchor_detection_threshold: float = 0.3
    flow_angle_threshold: float = 15.0  # degrees
    alignment_tolerance: float = 8.0  # px, divided by 1000 in normalized space
    minimum_flow_distance: float = 50.0  # px, divided by 1000 in normalized space
    confidence_threshold: float = 0.5

    # Caller policy: adaptive gating
    max_elements: int | None = None  # > cap: skip flow/alignment; > 1.5x cap: skip all relationships
    time_budget_ms: float | None = None  # stop starting new transforms past this budget

    def with_overrides(self, **overrides) -> AnalysisConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    @property
    def normalized_alignment_tolerance(self) -> float:
        return self.alignment_tolerance / 1000.0

    @property
    def normalized_flow_distance(self) -> float:
        return self.minimum_flow_distance / 1000.0
