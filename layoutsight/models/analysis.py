"""Analysis output models — what downstream layout and prompt builders consume."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from layoutsight.utils.geometry import Bounds

Direction = Literal["horizontal", "vertical"]
Confidence = Annotated[float, Field(ge=0.0, le=1.0)]


class Rect(BaseModel):
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> Rect:
        return cls(x=bounds.x, y=bounds.y, width=bounds.width, height=bounds.height)

    def to_bounds(self) -> Bounds:
        return Bounds(self.x, self.y, self.width, self.height)


class Point(BaseModel):
    x: float
    y: float


# --- Direction classification ---


class HeuristicResult(BaseModel):
    """Verdict of one direction heuristic."""

    direction: Direction
    score: Confidence
    reasoning: str = ""


class DirectionFactors(BaseModel):
    linear_arrangement: HeuristicResult
    content_flow: HeuristicResult
    aspect_ratio: HeuristicResult


class DirectionAnalysis(BaseModel):
    direction: Direction
    confidence: Confidence
    factors: DirectionFactors


class ProximityCluster(BaseModel):
    """A connected group of nearby elements with its recommended stacking direction."""

    element_ids: list[str] = Field(default_factory=list)
    bounds: Rect
    direction: Direction = "horizontal"
    confidence: Confidence = 0.0

    @property
    def size(self) -> int:
        return len(self.element_ids)


# --- Spatial relationships ---


class AnchoredElement(BaseModel):
    element_id: str
    relative_position: Point  # element center minus anchor center, normalized units
    anchor_strength: Confidence


class AnchorPattern(BaseModel):
    type: Literal["anchor"] = "anchor"
    anchor_element_id: str
    anchored_elements: list[AnchoredElement] = Field(default_factory=list)
    confidence: Confidence

    @property
    def element_ids(self) -> list[str]:
        return [self.anchor_element_id] + [a.element_id for a in self.anchored_elements]


class FlowVector(BaseModel):
    direction: float  # degrees [0, 360), 0 = east, 90 = south
    magnitude: Confidence
    from_point: Point
    to_point: Point
    from_element: str
    to_element: str


class FlowPattern(BaseModel):
    type: Literal["flow"] = "flow"
    flow_type: Literal["linear", "diagonal", "spiral", "circular"]
    vectors: list[FlowVector] = Field(default_factory=list)
    involved_elements: list[str] = Field(default_factory=list)
    confidence: Confidence

    @property
    def element_ids(self) -> list[str]:
        return list(self.involved_elements)


class AlignmentLine(BaseModel):
    position: float  # normalized coordinate on the grid's axis
    element_ids: list[str] = Field(default_factory=list)
    strength: Confidence


class AlignmentGrid(BaseModel):
    type: Literal["alignment"] = "alignment"
    grid_type: Direction
    alignment_lines: list[AlignmentLine] = Field(default_factory=list)
    confidence: Confidence

    @property
    def element_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for line in self.alignment_lines:
            for eid in line.element_ids:
                seen.setdefault(eid, None)
        return list(seen)


SpatialRelationship = Annotated[
    Union[AnchorPattern, FlowPattern, AlignmentGrid],
    Field(discriminator="type"),
]


class AnalysisResult(BaseModel):
    """Everything one analysis call produces."""

    clusters: list[ProximityCluster] = Field(default_factory=list)
    relationships: list[SpatialRelationship] = Field(default_factory=list)
    element_count: int = 0
    fallback_mode: str | None = None
    validation_error: str | None = None
    processing_time_ms: float = 0.0
    transforms_completed: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)
