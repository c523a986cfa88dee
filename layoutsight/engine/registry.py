"""Transform registry.

Each analysis step is a plain function taking the AnalysisContext, tagged
with an id (``T<layer>.<nn>``), its layer and the ids it reads from:

    @transform(id="T1.03", layer=Layer.PROXIMITY, dependencies=["T1.02"])
    def connected_components(ctx: AnalysisContext) -> None:
        ctx.components = ...

Modules under ``engine/layer0..2`` register on import; see ``load_transforms``.
"""

from __future__ import annotations

import enum
import heapq
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from layoutsight.engine.context import AnalysisContext

logger = logging.getLogger(__name__)

TransformFn = Callable[["AnalysisContext"], None]


class Layer(enum.IntEnum):
    COLLECTION = 0
    PROXIMITY = 1
    RELATIONSHIPS = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: TransformFn
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Transforms by id, with dependency-ordered lookup."""

    def __init__(self) -> None:
        self._specs: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._specs:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._specs[spec.id] = spec
        logger.debug("Registered %s in layer %s", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._specs[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return [s for s in self.all() if s.layer == layer]

    def all(self) -> list[TransformSpec]:
        return sorted(self._specs.values(), key=lambda s: (s.layer, s.id))

    def _closure(self, ids: set[str]) -> set[str]:
        """``ids`` plus everything they depend on, transitively."""
        found: set[str] = set()
        todo = [tid for tid in ids if tid in self._specs]
        while todo:
            tid = todo.pop()
            if tid not in found:
                found.add(tid)
                todo.extend(d for d in self._specs[tid].dependencies if d in self._specs)
        return found

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Topological order, lowest id first among ready transforms.

        ``None`` selects every registered transform. Raises ValueError on cycles.
        """
        selected = set(self._specs) if requested_ids is None else self._closure(requested_ids)

        waiting: dict[str, int] = {}
        dependents: dict[str, list[str]] = defaultdict(list)
        for tid in selected:
            deps = [d for d in self._specs[tid].dependencies if d in selected]
            waiting[tid] = len(deps)
            for dep in deps:
                dependents[dep].append(tid)

        ready = [tid for tid, n in waiting.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(self._specs[tid])
            for child in dependents[tid]:
                waiting[child] -= 1
                if waiting[child] == 0:
                    heapq.heappush(ready, child)

        if len(ordered) < len(selected):
            blocked = sorted(selected - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {blocked}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._specs)


_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
) -> Callable[[TransformFn], TransformFn]:
    """Register the decorated function in the shared registry and return it unchanged."""

    def register(fn: TransformFn) -> TransformFn:
        _registry.register(TransformSpec(id, layer, fn, list(dependencies or []), description))
        return fn

    return register
