"""Pipeline orchestrator — runs transforms in dependency order with adaptive gating."""

from __future__ import annotations

import logging
import time

from layoutsight.engine.context import AnalysisContext
from layoutsight.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry

logger = logging.getLogger(__name__)

# Relationship detectors dropped first when the candidate set is too large
EXPENSIVE_RELATIONSHIPS = {
    "T2.02",  # Flow patterns (pairwise vectors)
    "T2.03",  # Alignment grids
}
ALL_RELATIONSHIPS = EXPENSIVE_RELATIONSHIPS | {"T2.01"}

FALLBACK_CLUSTERS_AND_ANCHORS = "clusters_and_anchors"
FALLBACK_PROXIMITY_ONLY = "proximity_only"
FALLBACK_TIME_BUDGET = "time_budget_exceeded"


class Pipeline:
    """Orchestrates the analysis transforms."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: AnalysisContext, only: set[str] | None = None) -> AnalysisContext:
        """Run the registered transforms on ``ctx``.

        ``only`` restricts the run to those ids plus their dependencies.

        Layer 0 always runs first; the adaptive gate is evaluated once the
        candidate set is known, before the first later-layer transform.
        """
        start = time.perf_counter()
        ordered = self.registry.resolve_order(only)
        budget_ms = ctx.config.time_budget_ms

        logger.info("Pipeline: %d transforms queued", len(ordered))

        gated = False
        for spec in ordered:
            if not gated and spec.layer > Layer.COLLECTION:
                self._apply_gate(ctx, self._adaptive_gate(ctx), ordered)
                gated = True

            if spec.id in ctx.skipped or self._blocked(spec, ctx):
                ctx.skipped.add(spec.id)
                continue

            if budget_ms is not None and (time.perf_counter() - start) * 1000 > budget_ms:
                if ctx.fallback_mode is None:
                    ctx.fallback_mode = FALLBACK_TIME_BUDGET
                    logger.warning(
                        "Time budget of %.0fms exhausted; skipping remaining transforms",
                        budget_ms,
                    )
                ctx.skipped.add(spec.id)
                continue

            self._run_one(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms in %.0fms (%d skipped, %d failed)",
            len(ctx.completed_transforms),
            len(ordered),
            total,
            len(ctx.skipped),
            len(ctx.errors),
        )
        return ctx

    def run_layer(self, ctx: AnalysisContext, layer: Layer) -> AnalysisContext:
        """Run only transforms in a specific layer, without gating."""
        for spec in self.registry.get_layer(layer):
            self._run_one(spec, ctx)
        return ctx

    def _run_one(self, spec: TransformSpec, ctx: AnalysisContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
            ctx.completed_transforms.add(spec.id)
            logger.debug("  %s completed in %.1fms", spec.id, (time.perf_counter() - t0) * 1000)
        except Exception as e:
            ctx.errors[spec.id] = str(e)
            logger.warning("  %s FAILED: %s", spec.id, e)

    def _blocked(self, spec: TransformSpec, ctx: AnalysisContext) -> bool:
        """A dependency was skipped or failed, so its output is missing."""
        failed = [dep for dep in spec.dependencies if dep in ctx.errors]
        if failed:
            logger.warning("  %s skipped: dependency %s failed", spec.id, ", ".join(failed))
            return True
        return any(dep in ctx.skipped for dep in spec.dependencies)

    def _apply_gate(
        self, ctx: AnalysisContext, skip: set[str], ordered: list[TransformSpec]
    ) -> None:
        present = {s.id for s in ordered}
        ctx.skipped.update(skip & present)

    def _adaptive_gate(self, ctx: AnalysisContext) -> set[str]:
        """Decide which transforms to skip based on the candidate count.

        - Above ``max_elements``: drop flow and alignment detection
        - Above 1.5x ``max_elements``: drop every relationship detector
        """
        cap = ctx.config.max_elements
        n = ctx.num_elements
        if cap is None or n <= cap:
            return set()

        if n > cap * 1.5:
            ctx.fallback_mode = FALLBACK_PROXIMITY_ONLY
            skip = set(ALL_RELATIONSHIPS)
        else:
            ctx.fallback_mode = FALLBACK_CLUSTERS_AND_ANCHORS
            skip = set(EXPENSIVE_RELATIONSHIPS)

        logger.warning(
            "%d candidates exceed cap of %d; fallback %s skips %s",
            n,
            cap,
            ctx.fallback_mode,
            ", ".join(sorted(skip)),
        )
        return skip


def create_pipeline(registry: TransformRegistry | None = None) -> Pipeline:
    """Factory for a pipeline over the shared registry with every transform loaded."""
    if registry is None:
        from layoutsight.engine import load_transforms

        load_transforms()
    return Pipeline(registry=registry)
