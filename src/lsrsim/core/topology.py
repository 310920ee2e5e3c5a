from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from lsrsim.core.lsdb import LinkStateDatabase
from lsrsim.core.types import REMOVE_LINK, Cost, LinkFact, NeighborEdge, RouterName
from lsrsim.model.routing import RoutingTable

LOG = logging.getLogger("lsrsim.topology")

PERMISSIVE = "permissive"
STRICT = "strict"
UNKNOWN_ROUTER_POLICIES = (PERMISSIVE, STRICT)


class UnknownRouterError(KeyError):
    """Raised in strict mode when a link references an undeclared router."""

    def __init__(self, name: RouterName) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown router: {self.name}"


@dataclass
class Router:
    name: RouterName
    neighbors: List[NeighborEdge] = field(default_factory=list)
    lsdb: LinkStateDatabase = field(default_factory=LinkStateDatabase)
    routing_table: RoutingTable = field(default_factory=RoutingTable)

    def drop_neighbor(self, dest: RouterName) -> None:
        self.neighbors = [edge for edge in self.neighbors if edge.dest != dest]


class TopologyStore:
    """Owns every router, its adjacency list, LSDB and last routing table.

    Link changes are applied to all LSDBs at once, so every router always
    holds the same view of the topology.
    """

    def __init__(self, unknown_routers: str = PERMISSIVE) -> None:
        if unknown_routers not in UNKNOWN_ROUTER_POLICIES:
            raise ValueError(f"Unsupported unknown_routers policy: {unknown_routers}")
        self.unknown_routers = unknown_routers
        self._routers: Dict[RouterName, Router] = {}
        # Shared view used to seed routers that join after links exist.
        self._link_state = LinkStateDatabase()

    @classmethod
    def from_script(
        cls,
        routers: Iterable[RouterName],
        links: Iterable[Tuple[RouterName, RouterName, Cost]],
        unknown_routers: str = PERMISSIVE,
    ) -> "TopologyStore":
        store = cls(unknown_routers=unknown_routers)
        for name in routers:
            store.declare_router(name)
        for a, b, cost in links:
            try:
                store.add_or_update_link(a, b, cost)
            except UnknownRouterError as exc:
                LOG.warning("skipping initial link %s-%s: %s", a, b, exc)
        return store

    def declare_router(self, name: RouterName) -> bool:
        name = str(name)
        if name in self._routers:
            LOG.debug("router %s already declared", name)
            return False
        self._routers[name] = Router(name=name, lsdb=self._link_state.copy())
        return True

    def has_router(self, name: RouterName) -> bool:
        return name in self._routers

    def routers(self) -> List[RouterName]:
        return sorted(self._routers)

    def router(self, name: RouterName) -> Router:
        return self._routers[name]

    def add_or_update_link(self, a: RouterName, b: RouterName, cost: Cost) -> bool:
        """Install, re-cost or (``cost == -1``) remove the link ``a <-> b``.

        Returns ``True`` when neighbor lists or LSDBs changed.
        """
        a, b, cost = str(a), str(b), int(cost)
        if a == b:
            LOG.warning("ignoring self-link on router %s", a)
            return False
        if cost < 0 and cost != REMOVE_LINK:
            LOG.warning("link %s-%s has negative cost %s, shortest-path search will not use it", a, b, cost)
        self._resolve(a)
        self._resolve(b)

        router_a = self._routers[a]
        router_b = self._routers[b]
        before = (list(router_a.neighbors), list(router_b.neighbors))
        router_a.drop_neighbor(b)
        router_b.drop_neighbor(a)

        if cost == REMOVE_LINK:
            lsdb_changed = self._link_state.remove(a, b)
            for router in self._routers.values():
                router.lsdb.remove(a, b)
            LOG.debug("link %s-%s removed", a, b)
        else:
            router_a.neighbors.append(NeighborEdge(dest=b, cost=cost))
            router_b.neighbors.append(NeighborEdge(dest=a, cost=cost))
            lsdb_changed = self._link_state.set(a, b, cost)
            for router in self._routers.values():
                router.lsdb.set(a, b, cost)
            LOG.debug("link %s-%s cost=%s", a, b, cost)

        return lsdb_changed or before != (router_a.neighbors, router_b.neighbors)

    def neighbors(self, name: RouterName) -> List[NeighborEdge]:
        router = self._routers.get(name)
        return list(router.neighbors) if router is not None else []

    def lsdb(self, name: RouterName) -> List[LinkFact]:
        router = self._routers.get(name)
        return router.lsdb.facts() if router is not None else []

    def link_cost(self, a: RouterName, b: RouterName) -> Optional[Cost]:
        for edge in self.neighbors(a):
            if edge.dest == b:
                return edge.cost
        return None

    def routing_table(self, name: RouterName) -> RoutingTable:
        router = self._routers.get(name)
        return router.routing_table if router is not None else RoutingTable()

    def install_routing_table(self, name: RouterName, table: RoutingTable) -> bool:
        router = self._routers[name]
        changed = router.routing_table != table
        router.routing_table = table
        return changed

    def _resolve(self, name: RouterName) -> None:
        if name in self._routers:
            return
        if self.unknown_routers == STRICT:
            raise UnknownRouterError(name)
        LOG.warning("link references undeclared router %s, creating it", name)
        self.declare_router(name)
