"""
Tests for the Dijkstra search orchestrator.
"""

import concurrent.futures
import itertools
import math
import random
from typing import Dict, List, Optional, Tuple

import pytest

from wayfinder.core.exceptions import NodeNotFoundError, QueueConsistencyError
from wayfinder.core.graph import Graph
from wayfinder.core.models import Point
from wayfinder.core.paths import (
    DefaultRelaxer,
    Dijkstra,
    EuclideanWeightCalculator,
    PathFinding,
    PenaltyRelaxer,
    Relaxer,
    SearchNode,
    StoredWeightCalculator,
)


class RecordingDijkstra(Dijkstra):
    """Dijkstra that remembers every record it closes."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.closed_records: List[Tuple[SearchNode, float]] = []

    def is_done(self, pu: SearchNode) -> bool:
        self.closed_records.append((pu, pu.weight))
        return super().is_done(pu)


class CheckingRelaxer(DefaultRelaxer):
    """Default relaxer asserting search invariants on every call."""

    def __init__(self, search_ref: Dict[str, RecordingDijkstra]):
        self.search_ref = search_ref
        self.improvements: List[Tuple[float, float]] = []

    def relax(self, predecessor, candidate, weight_calculator, modality):
        closed = {record.node for record, _ in self.search_ref["search"].closed_records}
        # Relaxation always starts from the node closed last
        assert self.search_ref["search"].closed_records[-1][0] is predecessor
        assert candidate.node not in closed
        new_weight = super().relax(predecessor, candidate, weight_calculator, modality)
        if new_weight is not None:
            assert new_weight < candidate.weight
            assert new_weight >= 0
            self.improvements.append((candidate.weight, new_weight))
        return new_weight


def run_search(graph, origin, destination, relaxer=None, modality=None, weight_calculator=None):
    """Run a recording search with defaults."""
    relaxer = relaxer or CheckingRelaxer({})
    search = RecordingDijkstra(
        graph,
        origin,
        destination,
        relaxer,
        modality,
        weight_calculator or StoredWeightCalculator(graph),
    )
    if isinstance(relaxer, CheckingRelaxer):
        relaxer.search_ref["search"] = search
    search.execute()
    return search


def brute_force_distance(graph: Graph, origin: Point, destination: Point) -> float:
    """Shortest distance by enumerating every simple path."""
    start = graph.get_internal_node(origin)
    goal = graph.get_internal_node(destination)
    best = math.inf

    def visit(node, weight, seen):
        nonlocal best
        if node == goal:
            best = min(best, weight)
            return
        for target in graph.get_outgoing_edges(node):
            if target not in seen:
                visit(target, weight + graph.get_edge_weight(node, target), seen | {target})

    visit(start, 0.0, {start})
    return best


def random_graph(rng: random.Random, size: int, density: float) -> Tuple[Graph, List[Point]]:
    """Random directed graph with small integer weights, zero included."""
    graph = Graph()
    nodes = [Point(i, rng.randint(0, 20), f"n{i}") for i in range(size)]
    for node in nodes:
        graph.add_node(node)
    for a, b in itertools.permutations(nodes, 2):
        if rng.random() < density:
            graph.add_edge(a, b, float(rng.randint(0, 9)))
    return graph, nodes


def test_reference_example(diamond_graph, points):
    """Test the A-D route goes through B and C with weight 3."""
    path = PathFinding.shortest_path(diamond_graph, points["A"], points["D"])
    assert path.valid
    assert path.nodes == [points["A"], points["B"], points["C"], points["D"]]
    assert path.total_weight == 3.0
    path.validate(diamond_graph, StoredWeightCalculator(diamond_graph))


def test_unreachable_destination(diamond_graph, points):
    """Test an isolated destination yields an invalid result."""
    search = run_search(diamond_graph, points["A"], points["E"])
    result = search.get_result()
    assert not result.valid
    assert result.nodes == []
    # Every node reachable from A was closed once
    assert search.metrics.nodes_closed == 4


def test_first_extraction_is_origin_at_zero(diamond_graph, points):
    """Test the origin is extracted first, with weight zero."""
    search = run_search(diamond_graph, points["A"], points["D"])
    first_record, first_weight = search.closed_records[0]
    assert first_record.node.nodal == points["A"]
    assert first_weight == 0.0
    assert first_record.predecessor is None


def test_closed_once_and_in_weight_order(diamond_graph, points):
    """Test each node closes once and closing weights never decrease."""
    search = run_search(diamond_graph, points["A"], points["D"])
    closed_nodes = [record.node for record, _ in search.closed_records]
    assert len(closed_nodes) == len(set(closed_nodes))
    weights = [weight for _, weight in search.closed_records]
    assert weights == sorted(weights)
    assert search.metrics.nodes_closed == len(closed_nodes)


def test_early_exit_on_destination(diamond_graph, points):
    """Test the search stops once the destination is closed."""
    search = run_search(diamond_graph, points["A"], points["B"])
    assert [record.node.nodal for record, _ in search.closed_records] == [
        points["A"],
        points["B"],
    ]
    assert search.get_result().total_weight == 1.0


def test_origin_equals_destination(diamond_graph, points):
    """Test a search to the origin itself."""
    path = PathFinding.shortest_path(diamond_graph, points["C"], points["C"])
    assert path.valid
    assert path.nodes == [points["C"]]
    assert path.total_weight == 0.0


def test_get_result_before_execute(diamond_graph, points):
    """Test the result is invalid until the search ran."""
    search = PathFinding.create_dijkstra(diamond_graph, points["A"], points["D"])
    assert not search.get_result().valid
    assert search.metrics is None


def test_execute_twice(diamond_graph, points):
    """Test a search instance can be run again with the same outcome."""
    search = PathFinding.create_dijkstra(diamond_graph, points["A"], points["D"])
    search.execute()
    first = search.get_result()
    search.execute()
    assert search.get_result() == first


def test_unknown_nodes_rejected_at_construction(diamond_graph, points):
    """Test unknown origin or destination fail immediately."""
    stranger = Point(100, 100, "Z")
    with pytest.raises(NodeNotFoundError):
        PathFinding.create_dijkstra(diamond_graph, stranger, points["A"])
    with pytest.raises(NodeNotFoundError):
        PathFinding.create_dijkstra(diamond_graph, points["A"], stranger)


def test_decrease_key_used(diamond_graph, points):
    """Test C is first reached via A (4) then improved via B (2)."""
    relaxer = CheckingRelaxer({})
    search = run_search(diamond_graph, points["A"], points["D"], relaxer=relaxer)
    assert (4.0, 2.0) in relaxer.improvements
    assert search.metrics.decrease_keys == search.metrics.relaxations
    assert search.metrics.path_length == 3


def test_cycles_and_self_loops():
    """Test cycles and self loops do not trap the search."""
    a, b, c = Point(0, 0, "a"), Point(1, 0, "b"), Point(2, 0, "c")
    graph = Graph.from_edges([(a, a, 0.0), (a, b, 1.0), (b, a, 1.0), (b, c, 2.0), (c, b, 0.0)])
    path = PathFinding.shortest_path(graph, a, c)
    assert path.nodes == [a, b, c]
    assert path.total_weight == 3.0


def test_zero_weight_edges():
    """Test zero weight edges are followed."""
    a, b, c = Point(0, 0), Point(1, 0), Point(2, 0)
    graph = Graph.from_edges([(a, b, 0.0), (b, c, 0.0), (a, c, 1.0)])
    path = PathFinding.shortest_path(graph, a, c)
    assert path.nodes == [a, b, c]
    assert path.total_weight == 0.0


def test_direction_matters(diamond_graph, points):
    """Test edges are followed in their direction only."""
    assert not PathFinding.shortest_path(diamond_graph, points["D"], points["A"]).valid


@pytest.mark.parametrize("seed", range(25))
def test_optimal_against_brute_force(seed):
    """Test found weights equal the brute force optimum on random graphs."""
    rng = random.Random(seed)
    graph, nodes = random_graph(rng, size=7, density=0.3)
    calculator = StoredWeightCalculator(graph)
    for origin, destination in itertools.permutations(nodes[:4], 2):
        expected = brute_force_distance(graph, origin, destination)
        search = run_search(graph, origin, destination)
        path = search.get_result()
        if math.isinf(expected):
            assert not path.valid
            continue
        assert path.valid
        assert path.total_weight == pytest.approx(expected)
        assert path.origin == origin
        assert path.destination == destination
        path.validate(graph, calculator)


def test_modality_selects_weights():
    """Test per-modality weights change the route."""
    home = Point(0, 0, "home")
    park = Point(1, 1, "park")
    road = Point(1, -1, "road")
    work = Point(2, 0, "work")
    graph = Graph()
    graph.add_edge(home, park, 5.0, modalities={"bike": 1.0})
    graph.add_edge(park, work, 5.0, modalities={"bike": 1.0})
    graph.add_edge(home, road, 1.0, modalities={"bike": 4.0})
    graph.add_edge(road, work, 1.0, modalities={"bike": 4.0})

    car = PathFinding.shortest_path(graph, home, work, modality="car")
    bike = PathFinding.shortest_path(graph, home, work, modality="bike")
    assert car.nodes == [home, road, work]
    assert car.total_weight == 2.0
    assert bike.nodes == [home, park, work]
    assert bike.total_weight == 2.0


def test_context_filters_edges():
    """Test edges closed for the traversal context are skipped."""
    a, b, c = Point(0, 0, "a"), Point(1, 0, "b"), Point(2, 0, "c")
    graph = Graph()
    graph.add_edge(a, c, 1.0, contexts=["day"])
    graph.add_edge(a, b, 1.0)
    graph.add_edge(b, c, 1.0)

    assert PathFinding.shortest_path(graph, a, c).total_weight == 1.0
    assert PathFinding.shortest_path(graph, a, c, context="day").total_weight == 1.0
    night = PathFinding.shortest_path(graph, a, c, context="night")
    assert night.nodes == [a, b, c]
    assert night.total_weight == 2.0


def test_euclidean_weights():
    """Test coordinate based weights through the search."""
    a, b, c = Point(0, 0, "a"), Point(3, 4, "b"), Point(6, 0, "c")
    graph = Graph.from_edges([(a, b, 0.0), (b, c, 0.0), (a, c, 0.0)])
    path = PathFinding.shortest_path(
        graph, a, c, weight_calculator=EuclideanWeightCalculator(), modality="walk"
    )
    assert path.nodes == [a, c]
    assert path.total_weight == pytest.approx(6.0)


def test_penalty_relaxer_prefers_fewer_hops(diamond_graph, points):
    """Test a per-edge penalty favours the shorter hop count."""
    diamond_graph.add_edge(points["A"], points["D"], 3.5)
    plain = PathFinding.shortest_path(diamond_graph, points["A"], points["D"])
    assert plain.total_weight == 3.0
    penalised = PathFinding.shortest_path(
        diamond_graph, points["A"], points["D"], relaxer=PenaltyRelaxer(1.0)
    )
    assert penalised.nodes == [points["A"], points["D"]]
    assert penalised.total_weight == 4.5


def test_negative_weight_rejected(diamond_graph, points):
    """Test a calculator producing negative weights is rejected."""

    def negative(from_node, to_node, modality):
        return -1.0

    with pytest.raises(ValueError, match="non-negative"):
        PathFinding.shortest_path(
            diamond_graph, points["A"], points["D"], weight_calculator=negative
        )


def test_misbehaving_relaxer_is_a_consistency_error(diamond_graph, points):
    """Test a relaxer reporting a non-improvement breaks the search loudly."""

    class StubbornRelaxer(Relaxer):
        def relax(self, predecessor, candidate, weight_calculator, modality) -> Optional[float]:
            return 1.0

    with pytest.raises(QueueConsistencyError):
        PathFinding.shortest_path(
            diamond_graph, points["A"], points["D"], relaxer=StubbornRelaxer()
        )


def test_memory_limit_tracks_peak(diamond_graph, points):
    """Test a generous memory ceiling records peak usage."""
    search = PathFinding.create_dijkstra(
        diamond_graph, points["A"], points["D"], max_memory_mb=4096
    )
    search.execute()
    assert search.get_result().total_weight == 3.0
    assert search.metrics.max_memory_used > 0


def test_concurrent_searches_share_graph():
    """Test searches in parallel threads over one graph agree with sequential ones."""
    rng = random.Random(99)
    graph, nodes = random_graph(rng, size=40, density=0.1)
    pairs = [(rng.choice(nodes), rng.choice(nodes)) for _ in range(40)]
    expected = [PathFinding.shortest_path(graph, o, d).total_weight for o, d in pairs]

    with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
        results = list(
            executor.map(lambda pair: PathFinding.shortest_path(graph, *pair).total_weight, pairs)
        )
    assert results == expected
