from __future__ import annotations

import math
from typing import List, Mapping, Optional

import pytest

from lsrsim.core.spf import INSERTION, SORTED, compute_routes
from lsrsim.core.topology import TopologyStore
from lsrsim.model.routing import build_routing_table


def _store(routers, links) -> TopologyStore:
    return TopologyStore.from_script(routers, links)


def _path(source: str, dst: str, predecessors: Mapping[str, Optional[str]]) -> List[str]:
    path = [dst]
    while path[-1] != source:
        parent = predecessors.get(path[-1])
        if parent is None or parent in path:
            return []
        path.append(parent)
    return list(reversed(path))


def _path_cost(store: TopologyStore, path: List[str]) -> Optional[int]:
    total = 0
    for u, v in zip(path, path[1:]):
        cost = store.link_cost(u, v)
        if cost is None:
            return None
        total += cost
    return total


def test_prefers_two_hop_path_over_expensive_direct_link() -> None:
    store = _store(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1), ("A", "C", 5)])
    distances, predecessors = compute_routes(store, "A")

    assert distances == {"A": 0, "B": 1, "C": 2}
    assert predecessors == {"A": None, "B": "A", "C": "B"}
    assert _path("A", "C", predecessors) == ["A", "B", "C"]


def test_source_distance_is_zero_for_every_router() -> None:
    store = _store(["A", "B", "C", "D"], [("A", "B", 2), ("B", "C", 3), ("C", "D", 1)])
    for name in store.routers():
        distances, predecessors = compute_routes(store, name)
        assert distances[name] == 0
        assert predecessors[name] is None


def test_unreachable_router_is_infinite() -> None:
    store = _store(["A", "B", "C"], [("A", "B", 1)])
    distances, predecessors = compute_routes(store, "A")
    assert math.isinf(distances["C"])
    assert predecessors["C"] is None
    assert _path("A", "C", predecessors) == []


def test_stale_frontier_entries_are_skipped() -> None:
    # B is first pushed at 10, then improved to 2 through C.
    store = _store(["A", "B", "C", "D"], [("A", "B", 10), ("A", "C", 1), ("C", "B", 1), ("B", "D", 1)])
    distances, predecessors = compute_routes(store, "A")
    assert distances["B"] == 2
    assert predecessors["B"] == "C"
    assert distances["D"] == 3
    assert predecessors["D"] == "B"


def test_zero_cost_links() -> None:
    store = _store(["A", "B", "C"], [("A", "B", 0), ("B", "C", 0), ("A", "C", 1)])
    distances, predecessors = compute_routes(store, "A")
    assert distances["C"] == 0
    assert predecessors["C"] == "B"


def test_distance_equals_cost_along_predecessor_chain() -> None:
    links = [
        ("R1", "R2", 4),
        ("R1", "R3", 1),
        ("R3", "R2", 2),
        ("R2", "R4", 5),
        ("R3", "R4", 8),
        ("R4", "R5", 3),
        ("R2", "R5", 9),
        ("R5", "R6", 1),
    ]
    store = _store([f"R{i}" for i in range(1, 7)], links)
    for source in store.routers():
        distances, predecessors = compute_routes(store, source)
        for dst in store.routers():
            path = _path(source, dst, predecessors)
            assert path[0] == source
            assert path[-1] == dst
            assert _path_cost(store, path) == distances[dst]


def _square(links) -> TopologyStore:
    return _store(["A", "B", "C", "D"], links)


def test_sorted_ties_do_not_depend_on_insertion_order() -> None:
    forward = _square([("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "D", 1)])
    backward = _square([("C", "D", 1), ("B", "D", 1), ("A", "C", 1), ("A", "B", 1)])

    for store in (forward, backward):
        distances, predecessors = compute_routes(store, "A", neighbor_order=SORTED)
        assert distances["D"] == 2
        assert predecessors["D"] == "B"


def test_insertion_ties_follow_adjacency_order() -> None:
    # A learns C before B, so C is relaxed and popped first.
    store = _square([("A", "C", 1), ("A", "B", 1), ("B", "D", 1), ("C", "D", 1)])

    by_name = build_routing_table("A", *compute_routes(store, "A", neighbor_order=SORTED))
    by_insertion = build_routing_table("A", *compute_routes(store, "A", neighbor_order=INSERTION))

    assert by_name.next_hop("D") == "B"
    assert by_insertion.next_hop("D") == "C"
    assert by_name.get("D").cost == by_insertion.get("D").cost == 2


def test_negative_cost_edges_are_not_traversed() -> None:
    store = _store(["A", "B", "C"], [("A", "B", -2), ("B", "C", 1), ("A", "C", 4)])
    distances, predecessors = compute_routes(store, "A")
    assert distances["C"] == 4
    assert distances["B"] == 5
    assert predecessors["B"] == "C"


def test_unknown_source_reaches_nothing() -> None:
    store = _store(["A", "B"], [("A", "B", 1)])
    distances, predecessors = compute_routes(store, "Z")
    assert all(math.isinf(d) for d in distances.values())
    assert all(p is None for p in predecessors.values())


def test_rejects_unknown_neighbor_order() -> None:
    store = _store(["A"], [])
    with pytest.raises(ValueError):
        compute_routes(store, "A", neighbor_order="random")
