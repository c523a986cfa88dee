"""Tests for proximity graph construction, clustering and overlap resolution."""

import pytest

from layoutsight.analyzer import detect_proximity_groups, merge_cluster_passes
from layoutsight.engine.config import AnalysisConfig
from layoutsight.engine.context import ProximityEdge
from layoutsight.engine.layer1.t1_02_proximity_graph import build_proximity_graph
from layoutsight.engine.layer1.t1_03_connected_components import find_connected_components
from layoutsight.engine.layer1.t1_06_overlap_resolution import (
    clusters_overlap,
    remove_overlapping_clusters,
)
from layoutsight.engine.pipeline import create_pipeline
from layoutsight.models.analysis import ProximityCluster, Rect
from layoutsight.scene.parser import context_from_elements
from tests.conftest import COLUMN_ELEMENTS, ROW_ELEMENTS, make_element


def _cluster(*ids: str) -> ProximityCluster:
    return ProximityCluster(element_ids=list(ids), bounds=Rect(x=0, y=0, width=1, height=1))


SCATTER = [
    make_element("a", 0, 0, 40, 40),
    make_element("b", 60, 0, 40, 40),
    make_element("c", 120, 30, 40, 40),
    make_element("d", 400, 400, 30, 30),
    make_element("e", 450, 400, 30, 30),
    make_element("f", 900, 0, 20, 20),
    make_element("g", 0, 300, 100, 10),
]


def test_row_forms_one_horizontal_cluster():
    clusters = detect_proximity_groups(ROW_ELEMENTS, AnalysisConfig(proximity_threshold=50))
    assert len(clusters) == 1
    cluster = clusters[0]
    assert sorted(cluster.element_ids) == ["a", "b", "c"]
    assert cluster.direction == "horizontal"
    assert cluster.confidence > 0.6
    assert cluster.bounds == Rect(x=0, y=0, width=320, height=20)


def test_column_forms_one_vertical_cluster():
    clusters = detect_proximity_groups(COLUMN_ELEMENTS, AnalysisConfig(proximity_threshold=50))
    assert len(clusters) == 1
    assert sorted(clusters[0].element_ids) == ["a", "b", "c"]
    assert clusters[0].direction == "vertical"
    assert clusters[0].confidence > 0.6


def test_far_apart_elements_do_not_cluster():
    elements = [make_element("a", 0, 0, 50, 50), make_element("b", 550, 0, 50, 50)]
    assert detect_proximity_groups(elements, AnalysisConfig(proximity_threshold=50)) == []


def test_threshold_is_inclusive():
    elements = [make_element("a", 0, 0, 50, 50), make_element("b", 100, 0, 50, 50)]
    assert len(detect_proximity_groups(elements, AnalysisConfig(proximity_threshold=50))) == 1
    assert detect_proximity_groups(elements, AnalysisConfig(proximity_threshold=49.9)) == []


def test_graph_is_symmetric():
    ctx = context_from_elements(SCATTER)
    create_pipeline().run(ctx, only={"T1.02"})

    graph = ctx.proximity_graph
    assert set(graph) == {el.id for el in SCATTER}
    for source, edges in graph.items():
        for edge in edges:
            assert any(back.to == source and back.distance == edge.distance for back in graph[edge.to])


def test_graph_keeps_isolated_nodes():
    graph = build_proximity_graph(["x", "y"], [], 50)
    assert graph == {"x": [], "y": []}


def test_distances_record_separation_axis():
    ctx = context_from_elements(ROW_ELEMENTS)
    create_pipeline().run(ctx, only={"T1.01"})
    assert len(ctx.distances) == 3
    assert all(d.direction == "horizontal" for d in ctx.distances)
    assert ctx.distance_matrix[0, 1] == pytest.approx(10)


def test_components_on_scatter():
    ctx = context_from_elements(SCATTER)
    create_pipeline().run(ctx, only={"T1.03"})
    groups = sorted(sorted(el.id for el in comp) for comp in ctx.components)
    assert groups == [["a", "b", "c"], ["d", "e"], ["f"], ["g"]]


def test_components_long_chain_without_recursion():
    n = 5000
    ids = [f"n{i}" for i in range(n)]
    graph = {eid: [] for eid in ids}
    for i in range(n - 1):
        graph[ids[i]].append(ProximityEdge(to=ids[i + 1], distance=1.0))
        graph[ids[i + 1]].append(ProximityEdge(to=ids[i], distance=1.0))

    components = find_connected_components(graph)
    assert len(components) == 1
    assert len(components[0]) == n


def test_min_group_size():
    pair = [make_element("a", 0, 0, 40, 40), make_element("b", 60, 0, 40, 40)]
    assert len(detect_proximity_groups(pair)) == 1
    assert detect_proximity_groups(pair, AnalysisConfig(min_group_size=3)) == []


def test_container_boundaries():
    mixed = [
        make_element("a", 0, 0, 40, 40, parent_id="card-1"),
        make_element("b", 60, 0, 40, 40, parent_id="card-2"),
    ]
    assert detect_proximity_groups(mixed) == []
    clusters = detect_proximity_groups(mixed, AnalysisConfig(respect_container_boundaries=False))
    assert len(clusters) == 1


def test_clusters_are_disjoint():
    clusters = detect_proximity_groups(SCATTER)
    seen: set[str] = set()
    for cluster in clusters:
        assert seen.isdisjoint(cluster.element_ids)
        assert len(cluster.element_ids) >= 2
        seen.update(cluster.element_ids)
    assert len(clusters) == 2


def test_clusters_overlap():
    assert clusters_overlap(_cluster("a", "b"), _cluster("b", "c"))
    assert not clusters_overlap(_cluster("a", "b"), _cluster("c", "d"))


def test_remove_overlapping_prefers_larger():
    kept = remove_overlapping_clusters([_cluster("c", "d"), _cluster("a", "b", "c"), _cluster("e", "f")])
    assert [c.element_ids for c in kept] == [["a", "b", "c"], ["e", "f"]]


def test_remove_overlapping_keeps_input_order_on_ties():
    kept = remove_overlapping_clusters([_cluster("a", "b"), _cluster("b", "c")])
    assert [c.element_ids for c in kept] == [["a", "b"]]


def test_merge_cluster_passes():
    first = [_cluster("a", "b"), _cluster("x", "y")]
    second = [_cluster("a", "b", "c")]
    merged = merge_cluster_passes(first, second)
    assert [c.element_ids for c in merged] == [["a", "b", "c"], ["x", "y"]]


def test_idempotent():
    first = detect_proximity_groups(SCATTER)
    second = detect_proximity_groups(SCATTER)
    assert [c.model_dump() for c in first] == [c.model_dump() for c in second]
