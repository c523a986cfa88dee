"""Scene parser — host scene snapshot → AnalysisContext.

Handles:
- JSON or mapping input, validated into a SceneNode tree
- Host node type → ElementType mapping
- Root validation (missing frame, nothing eligible inside it)
- Flat element lists supplied without a scene tree
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import AnalysisContext, Element, ElementType, ValidationResult
from layoutsight.models.scene import SceneNode

logger = logging.getLogger(__name__)

VECTOR_TYPES = {"VECTOR", "BOOLEAN_OPERATION", "STAR", "POLYGON", "LINE"}
SHAPE_TYPES = {"RECTANGLE", "ELLIPSE"}
CONTAINER_TYPES = {"FRAME", "GROUP", "COMPONENT", "COMPONENT_SET", "INSTANCE", "SECTION"}


def parse_scene(data: str | bytes | Mapping[str, Any]) -> SceneNode:
    """Validate a host scene snapshot into a SceneNode tree.

    Raises pydantic.ValidationError on malformed input.
    """
    if isinstance(data, (str, bytes)):
        return SceneNode.model_validate_json(data)
    return SceneNode.model_validate(data)


def element_type_of(node: SceneNode) -> ElementType:
    if node.type == "TEXT":
        return ElementType.TEXT
    if node.has_image_fill:
        return ElementType.IMAGE
    if node.type in VECTOR_TYPES:
        return ElementType.VECTOR
    if node.type in SHAPE_TYPES:
        return ElementType.SHAPE
    if node.type in CONTAINER_TYPES or node.children:
        return ElementType.CONTAINER
    return ElementType.OTHER


def has_visual_properties(node: SceneNode) -> bool:
    """True when a container draws something itself, beyond hosting children."""
    if node.type == "TEXT":
        return True
    if node.has_visible_fills or node.has_visible_strokes:
        return True
    return node.type in VECTOR_TYPES or node.type in SHAPE_TYPES


def validate_root(root: SceneNode | None) -> ValidationResult:
    if root is None or root.absolute_bounds is None:
        return ValidationResult(
            is_valid=False,
            error="INVALID_FRAME",
            message="Analysis root is missing or has no bounds",
        )
    if not root.children:
        return ValidationResult(
            is_valid=False,
            error="NO_ELIGIBLE_ELEMENTS",
            message=f"Frame '{root.name or root.id}' has no children",
        )
    visible = sum(1 for child in root.children if child.visible)
    if visible == 0:
        return ValidationResult(
            is_valid=False,
            error="NO_ELIGIBLE_ELEMENTS",
            message=f"Frame '{root.name or root.id}' has no visible children",
        )
    return ValidationResult(is_valid=True, eligible_elements=visible)


def build_context(
    root: SceneNode | str | Mapping[str, Any],
    atomic_ids: Iterable[str] = (),
    config: AnalysisConfig | None = None,
) -> AnalysisContext:
    """Create a context from a scene tree. Candidates are collected by T0.01."""
    if not isinstance(root, SceneNode):
        root = parse_scene(root)

    ctx = AnalysisContext(config=config or AnalysisConfig())
    ctx.root = root
    ctx.root_id = root.id
    ctx.atomic_ids = frozenset(atomic_ids)
    if root.absolute_bounds is not None:
        ctx.root_width = root.absolute_bounds.width
        ctx.root_height = root.absolute_bounds.height
    return ctx


def context_from_elements(
    elements: Iterable[Element],
    root_size: tuple[float, float] | None = None,
    config: AnalysisConfig | None = None,
) -> AnalysisContext:
    """Create a context from an already-collected, frame-relative element list.

    Without ``root_size`` the normalization frame is left unset and T0.02
    derives it from the elements themselves.
    """
    ctx = AnalysisContext(config=config or AnalysisConfig())
    ctx.elements = list(elements)
    if root_size is not None:
        ctx.root_width, ctx.root_height = root_size

    logger.debug("Context from %d elements, root size %s", len(ctx.elements), root_size)
    return ctx

