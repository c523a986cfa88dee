"""LayoutSight spatial analysis engine."""

import importlib
import pkgutil

from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import AnalysisContext, Element, ElementType
from layoutsight.engine.registry import Layer, get_registry, transform

TRANSFORM_PACKAGES = ("layer0", "layer1", "layer2")


def load_transforms() -> None:
    """Import every transform module so the @transform decorators register them."""
    for layer_name in TRANSFORM_PACKAGES:
        package = importlib.import_module(f"{__name__}.{layer_name}")
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package.__name__}.{module_name}")


__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "load_transforms",
    "AnalysisConfig",
    "AnalysisContext",
    "Element",
    "ElementType",
]
