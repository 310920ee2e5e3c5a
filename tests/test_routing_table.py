from __future__ import annotations

import math

from lsrsim.core.spf import compute_routes
from lsrsim.core.topology import TopologyStore
from lsrsim.model.routing import RouteEntry, RoutingTable, build_routing_table, first_hop


def test_triangle_routes_to_c_through_b() -> None:
    store = TopologyStore.from_script(["A", "B", "C"], [("A", "B", 1), ("B", "C", 1), ("A", "C", 5)])
    distances, predecessors = compute_routes(store, "A")
    table = build_routing_table("A", distances, predecessors)

    assert table.snapshot() == [
        RouteEntry(destination="B", next_hop="B", cost=1),
        RouteEntry(destination="C", next_hop="B", cost=2),
    ]
    assert "A" not in table
    assert [(r.next_hop, r.cost) for r in table] == [("B", 1), ("B", 2)]


def test_next_hop_is_first_router_after_source() -> None:
    predecessors = {"S": None, "X": "S", "Y": "X", "Z": "Y"}
    assert first_hop("S", "X", predecessors) == "X"
    assert first_hop("S", "Z", predecessors) == "X"
    assert first_hop("S", "S", predecessors) is None


def test_unreachable_and_source_have_no_entry() -> None:
    distances = {"S": 0, "X": 3, "U": math.inf}
    predecessors = {"S": None, "X": "S", "U": None}
    table = build_routing_table("S", distances, predecessors)
    assert [r.destination for r in table] == ["X"]
    assert table.get("U") is None
    assert table.next_hop("X") == "X"


def test_broken_or_cyclic_chain_yields_no_entry() -> None:
    distances = {"S": 0, "P": 4, "Q": 5, "R": 6}
    predecessors = {"S": None, "P": "Q", "Q": "P", "R": None}
    table = build_routing_table("S", distances, predecessors)
    assert len(table) == 0


def test_table_equality_ignores_insertion_order() -> None:
    a = RoutingTable([RouteEntry("B", "B", 1), RouteEntry("C", "B", 2)])
    b = RoutingTable([RouteEntry("C", "B", 2), RouteEntry("B", "B", 1)])
    assert a == b
    assert a != RoutingTable([RouteEntry("B", "B", 1)])
