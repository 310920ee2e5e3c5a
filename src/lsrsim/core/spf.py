from __future__ import annotations

import heapq
import itertools
import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from lsrsim.core.topology import TopologyStore
from lsrsim.core.types import NeighborEdge, RouterName

LOG = logging.getLogger("lsrsim.spf")

SORTED = "sorted"
INSERTION = "insertion"
NEIGHBOR_ORDERS = (SORTED, INSERTION)

Distances = Dict[RouterName, float]
Predecessors = Dict[RouterName, Optional[RouterName]]


def _ordered(edges: List[NeighborEdge], neighbor_order: str) -> Iterable[NeighborEdge]:
    if neighbor_order == SORTED:
        return sorted(edges, key=lambda e: (e.dest, e.cost))
    return edges


def compute_routes(
    store: TopologyStore,
    source: RouterName,
    neighbor_order: str = SORTED,
) -> Tuple[Distances, Predecessors]:
    """Single-source shortest paths over the store's adjacency lists.

    Every known router appears in both maps. Unreachable routers keep a
    distance of ``math.inf`` and a ``None`` predecessor. Routers at equal
    distance leave the frontier in the order they were relaxed, so equal-cost
    ties follow ``neighbor_order``. Negative-cost edges are not traversed.
    """
    if neighbor_order not in NEIGHBOR_ORDERS:
        raise ValueError(f"Unsupported neighbor_order: {neighbor_order}")

    distances: Distances = {name: math.inf for name in store.routers()}
    predecessors: Predecessors = {name: None for name in distances}
    if not store.has_router(source):
        return distances, predecessors

    counter = itertools.count()
    distances[source] = 0
    pq: List[Tuple[float, int, RouterName]] = [(0, next(counter), source)]
    while pq:
        dist_u, _, u = heapq.heappop(pq)
        if dist_u > distances.get(u, math.inf):
            continue
        for edge in _ordered(store.neighbors(u), neighbor_order):
            if edge.cost < 0:
                LOG.debug("skipping negative-cost edge %s-%s (%s)", u, edge.dest, edge.cost)
                continue
            nd = dist_u + edge.cost
            if nd < distances.get(edge.dest, math.inf):
                distances[edge.dest] = nd
                predecessors[edge.dest] = u
                heapq.heappush(pq, (nd, next(counter), edge.dest))

    return distances, predecessors
