from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from lsrsim.core.types import Cost, RouterName


@dataclass(frozen=True)
class RouteEntry:
    destination: RouterName
    next_hop: RouterName
    cost: Cost

    def to_dict(self) -> Dict[str, Any]:
        return {
            "destination": self.destination,
            "next_hop": self.next_hop,
            "cost": int(self.cost),
        }


class RoutingTable:
    def __init__(self, routes: Iterable[RouteEntry] = ()) -> None:
        self._routes: Dict[RouterName, RouteEntry] = {}
        for route in routes:
            self._routes[route.destination] = route

    def get(self, destination: RouterName) -> Optional[RouteEntry]:
        return self._routes.get(destination)

    def next_hop(self, destination: RouterName) -> Optional[RouterName]:
        route = self._routes.get(destination)
        return route.next_hop if route is not None else None

    def snapshot(self) -> List[RouteEntry]:
        return sorted(self._routes.values(), key=lambda r: r.destination)

    def __contains__(self, destination: object) -> bool:
        return destination in self._routes

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._routes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoutingTable):
            return NotImplemented
        return self._routes == other._routes

    def __repr__(self) -> str:
        return f"RoutingTable({self.snapshot()!r})"


def first_hop(
    source: RouterName,
    destination: RouterName,
    predecessors: Mapping[RouterName, Optional[RouterName]],
) -> Optional[RouterName]:
    """Return the router adjacent to ``source`` on the path to ``destination``.

    Walks the predecessor chain backwards from ``destination``. ``None`` is
    returned when the chain does not lead back to ``source``.
    """
    if destination == source:
        return None
    hop = destination
    seen = set()
    while True:
        parent = predecessors.get(hop)
        if parent is None:
            return None
        if parent == source:
            return hop
        if hop in seen:
            return None
        seen.add(hop)
        hop = parent


def build_routing_table(
    source: RouterName,
    distances: Mapping[RouterName, float],
    predecessors: Mapping[RouterName, Optional[RouterName]],
) -> RoutingTable:
    routes: List[RouteEntry] = []
    for dst in sorted(distances):
        dist = distances[dst]
        if dst == source or math.isinf(dist):
            continue
        hop = first_hop(source, dst, predecessors)
        if hop is None:
            continue
        routes.append(RouteEntry(destination=dst, next_hop=hop, cost=int(dist)))
    return RoutingTable(routes)
