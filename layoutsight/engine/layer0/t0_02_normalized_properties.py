"""T0.02 — Normalized Properties.

Map each candidate's frame-relative bounds onto the unit square of the
analysis root. Relationship detectors work only in this space.

Flat element lists may arrive without a root size; the frame is then the
far corner of the elements' union box, so every element lands in [0, 1].
"""

from __future__ import annotations

import logging

from layoutsight.engine.context import AnalysisContext, NormalizedElement
from layoutsight.engine.registry import Layer, transform
from layoutsight.utils.geometry import bounding_box_of, to_normalized

logger = logging.getLogger(__name__)


def derive_frame(ctx: AnalysisContext) -> None:
    """Fill in the root size from the elements when the caller gave none."""
    if ctx.root is not None or (ctx.root_width > 0 and ctx.root_height > 0):
        return
    union = bounding_box_of(el.bounds for el in ctx.elements)
    if union is None:
        return
    ctx.root_width = max(union.right, 0.0)
    ctx.root_height = max(union.bottom, 0.0)
    logger.debug("Derived frame %.0fx%.0f from %d elements", ctx.root_width, ctx.root_height, len(ctx.elements))


@transform(
    id="T0.02",
    layer=Layer.COLLECTION,
    dependencies=["T0.01"],
    description="Normalize element bounds to the analysis root",
)
def normalized_properties(ctx: AnalysisContext) -> None:
    derive_frame(ctx)
    normalized: list[NormalizedElement] = []
    for el in ctx.elements:
        nb = to_normalized(el.bounds, ctx.root_width, ctx.root_height)
        normalized.append(NormalizedElement(element_id=el.id, bounds=nb, area=nb.area))
    ctx.normalized = normalized
