from layoutsight.scene.parser import (
    build_context,
    context_from_elements,
    element_type_of,
    parse_scene,
    validate_root,
)

__all__ = [
    "build_context",
    "context_from_elements",
    "element_type_of",
    "parse_scene",
    "validate_root",
]
