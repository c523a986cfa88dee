"""AnalysisContext — the single mutable state object flowing through all transforms.

Per-element inputs → AnalysisContext.elements (frozen Element records)
Cross-element results → AnalysisContext.* (distances, proximity graph, clusters, patterns)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

import numpy as np
from numpy.typing import NDArray

from layoutsight.engine.config import AnalysisConfig
from layoutsight.models.analysis import (
    AlignmentGrid,
    AnchorPattern,
    FlowPattern,
    ProximityCluster,
)
from layoutsight.utils.geometry import Bounds, NormalizedBounds

if TYPE_CHECKING:
    from layoutsight.models.scene import SceneNode


class ElementType(str, enum.Enum):
    TEXT = "text"
    IMAGE = "image"
    VECTOR = "vector"
    SHAPE = "shape"
    CONTAINER = "container"
    OTHER = "other"


@dataclass(frozen=True)
class Element:
    """A visible node considered for analysis. Bounds are relative to the analysis root."""

    id: str
    bounds: Bounds
    name: str = ""
    element_type: ElementType = ElementType.OTHER
    parent_id: str | None = None
    characters: str | None = None
    font_size: float | None = None
    is_atomic_protected: bool = False

    @property
    def character_count(self) -> int:
        return len(self.characters) if self.characters else 0


@dataclass(frozen=True)
class NormalizedElement:
    element_id: str
    bounds: NormalizedBounds
    area: float


@dataclass(frozen=True)
class ElementDistance:
    element1: str
    element2: str
    distance: float
    direction: Literal["horizontal", "vertical"]


@dataclass(frozen=True)
class ProximityEdge:
    to: str
    distance: float


ProximityGraph = dict[str, list[ProximityEdge]]


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    error: Literal["INVALID_FRAME", "NO_ELIGIBLE_ELEMENTS"] | None = None
    message: str = ""
    eligible_elements: int = 0


@dataclass
class AnalysisContext:
    """Shared state for one analysis call. Created per call, discarded after formatting."""

    config: AnalysisConfig = field(default_factory=AnalysisConfig)

    # --- Input ---
    # Host scene root (None when the caller supplied a flat element list)
    root: SceneNode | None = None
    atomic_ids: frozenset[str] = frozenset()
    # Candidate elements (collected by T0.01 from ``root``, or supplied directly)
    elements: list[Element] = field(default_factory=list)
    root_id: str | None = None
    root_width: float = 0.0
    root_height: float = 0.0

    # --- Layer 0 ---
    normalized: list[NormalizedElement] = field(default_factory=list)

    # --- Layer 1: proximity ---
    # Pairwise edge-to-edge distances, indexed like ``elements``
    distance_matrix: NDArray[np.float64] | None = None
    distances: list[ElementDistance] = field(default_factory=list)
    proximity_graph: ProximityGraph = field(default_factory=dict)
    components: list[list[Element]] = field(default_factory=list)
    candidate_clusters: list[list[Element]] = field(default_factory=list)
    clusters: list[ProximityCluster] = field(default_factory=list)

    # --- Layer 2: relationships ---
    anchor_patterns: list[AnchorPattern] = field(default_factory=list)
    flow_patterns: list[FlowPattern] = field(default_factory=list)
    alignment_grids: list[AlignmentGrid] = field(default_factory=list)

    # --- Pipeline metadata ---
    validation: ValidationResult | None = None
    fallback_mode: str | None = None
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    skipped: set[str] = field(default_factory=set)

    @property
    def num_elements(self) -> int:
        return len(self.elements)

    @property
    def is_valid(self) -> bool:
        return self.validation is None or self.validation.is_valid

    def get_element(self, element_id: str) -> Element | None:
        for el in self.elements:
            if el.id == element_id:
                return el
        return None
