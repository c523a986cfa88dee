"""T0.01 — Element Collection.

Walk the scene under the analysis root and collect the candidate elements:
visible, drawable, at least ``min_element_size`` on both axes, and not
inside an atomic (protected) container. Atomic containers stand in for
their whole subtree as one element. Each element remembers its
immediate container for the container-boundary filter.
"""

from __future__ import annotations

import logging

from layoutsight.engine.context import AnalysisContext, Element
from layoutsight.engine.registry import Layer, transform
from layoutsight.models.scene import SceneNode
from layoutsight.scene.parser import element_type_of, has_visual_properties, validate_root
from layoutsight.utils.geometry import Bounds, to_relative_bounds

logger = logging.getLogger(__name__)


def _collect(
    node: SceneNode,
    parent_id: str,
    origin: Bounds,
    ctx: AnalysisContext,
    out: list[Element],
) -> None:
    cfg = ctx.config
    if not node.visible:
        return

    bounds = to_relative_bounds(
        node.absolute_bounds.to_bounds() if node.absolute_bounds else None,
        origin,
    )
    if bounds is None:
        return
    if bounds.width < cfg.min_element_size or bounds.height < cfg.min_element_size:
        return

    is_atomic = cfg.respect_atomic_protection and node.id in ctx.atomic_ids
    element = Element(
        id=node.id,
        bounds=bounds,
        name=node.name,
        element_type=element_type_of(node),
        parent_id=parent_id,
        characters=node.characters,
        font_size=node.font_size,
        is_atomic_protected=is_atomic,
    )

    if is_atomic:
        out.append(element)
        return

    if node.children:
        if has_visual_properties(node):
            out.append(element)
        for child in node.children:
            _collect(child, node.id, origin, ctx, out)
        return

    out.append(element)


@transform(
    id="T0.01",
    layer=Layer.COLLECTION,
    description="Collect visible candidate elements under the analysis root",
)
def element_collection(ctx: AnalysisContext) -> None:
    if ctx.root is None:
        # Elements were supplied directly
        return

    ctx.validation = validate_root(ctx.root)
    if not ctx.validation.is_valid:
        logger.info("Root %s rejected: %s", ctx.root.id, ctx.validation.message)
        ctx.elements = []
        return

    origin = ctx.root.absolute_bounds.to_bounds()
    elements: list[Element] = []
    for child in ctx.root.children:
        _collect(child, ctx.root.id, origin, ctx, elements)

    ctx.elements = elements
    logger.debug(
        "Collected %d candidates under %s (%d atomic)",
        len(elements),
        ctx.root.id,
        sum(1 for el in elements if el.is_atomic_protected),
    )
