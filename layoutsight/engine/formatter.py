"""Formatter — finished AnalysisContext → AnalysisResult."""

from __future__ import annotations

from layoutsight.engine.context import AnalysisContext
from layoutsight.models.analysis import AnalysisResult, SpatialRelationship


def collect_relationships(ctx: AnalysisContext) -> list[SpatialRelationship]:
    """Flat list of every detected relationship: anchors, then flows, then grids."""
    return [*ctx.anchor_patterns, *ctx.flow_patterns, *ctx.alignment_grids]


def context_to_result(ctx: AnalysisContext, processing_time_ms: float = 0.0) -> AnalysisResult:
    validation_error = None
    if ctx.validation is not None and not ctx.validation.is_valid:
        validation_error = ctx.validation.error

    return AnalysisResult(
        clusters=ctx.clusters,
        relationships=collect_relationships(ctx),
        element_count=ctx.num_elements,
        fallback_mode=ctx.fallback_mode,
        validation_error=validation_error,
        processing_time_ms=round(processing_time_ms, 2),
        transforms_completed=sorted(ctx.completed_transforms),
        errors=dict(ctx.errors),
        skipped=sorted(ctx.skipped),
    )
