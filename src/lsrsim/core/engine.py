from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from lsrsim.core.convergence import hash_routes
from lsrsim.core.trace import EventTrace
from lsrsim.core.spf import SORTED, compute_routes
from lsrsim.core.topology import PERMISSIVE, TopologyStore, UnknownRouterError
from lsrsim.core.types import LinkCommand, LinkFact, NeighborEdge, RouterName, Script
from lsrsim.model.routing import RouteEntry, RoutingTable, build_routing_table

LOG = logging.getLogger("lsrsim.engine")


@dataclass(frozen=True)
class RouterReport:
    router: RouterName
    neighbors: List[NeighborEdge]
    lsdb: List[LinkFact]
    routes: List[RouteEntry]
    route_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "router": self.router,
            "neighbors": [{"dest": e.dest, "cost": int(e.cost)} for e in self.neighbors],
            "lsdb": [fact.to_dict() for fact in self.lsdb],
            "routes": [route.to_dict() for route in self.routes],
            "route_hash": self.route_hash,
        }


@dataclass
class CommandResult:
    command: LinkCommand
    applied: bool
    reports: List[RouterReport] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.command.source,
            "dest": self.command.dest,
            "cost": int(self.command.cost),
            "report": list(self.command.report),
            "applied": self.applied,
            "error": self.error,
            "reports": [r.to_dict() for r in self.reports],
        }


@dataclass
class RunResult:
    results: List[CommandResult]
    commands_applied: int
    commands_skipped: int
    route_flaps: int

    def reports(self) -> List[RouterReport]:
        return [report for result in self.results for report in result.reports]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commands": [r.to_dict() for r in self.results],
            "commands_applied": self.commands_applied,
            "commands_skipped": self.commands_skipped,
            "route_flaps": self.route_flaps,
        }


class CommandEngine:
    """Drives one MUTATE -> RECOMPUTE -> REPORT cycle per link command.

    Only routers named in a command are recomputed; every other router keeps
    the table from the last time it was selected.
    """

    def __init__(
        self,
        store: TopologyStore,
        neighbor_order: str = SORTED,
        trace: EventTrace | None = None,
    ) -> None:
        self.store = store
        self.neighbor_order = neighbor_order
        self.trace = trace or EventTrace()
        self.route_flaps = 0
        self.commands_applied = 0
        self.commands_skipped = 0

    @classmethod
    def from_script(
        cls,
        script: Script,
        unknown_routers: str = PERMISSIVE,
        neighbor_order: str = SORTED,
        trace: EventTrace | None = None,
    ) -> "CommandEngine":
        store = TopologyStore.from_script(
            script.routers,
            script.links,
            unknown_routers=unknown_routers,
        )
        return cls(store, neighbor_order=neighbor_order, trace=trace)

    def recompute(self, router: RouterName) -> RoutingTable:
        distances, predecessors = compute_routes(self.store, router, self.neighbor_order)
        table = build_routing_table(router, distances, predecessors)
        if self.store.install_routing_table(router, table):
            self.route_flaps += 1
        return table

    def report(self, router: RouterName) -> RouterReport:
        table = self.store.routing_table(router)
        return RouterReport(
            router=router,
            neighbors=self.store.neighbors(router),
            lsdb=self.store.lsdb(router),
            routes=table.snapshot(),
            route_hash=hash_routes({router: table}),
        )

    def apply(self, command: LinkCommand) -> CommandResult:
        try:
            self.store.add_or_update_link(command.source, command.dest, command.cost)
        except UnknownRouterError as exc:
            self.commands_skipped += 1
            LOG.warning("skipping command %s-%s: %s", command.source, command.dest, exc)
            self.trace.record(
                "command_skipped",
                source=command.source,
                dest=command.dest,
                cost=command.cost,
                reason=str(exc),
            )
            return CommandResult(command=command, applied=False, error=str(exc))

        self.commands_applied += 1
        self.trace.record(
            "command_applied",
            source=command.source,
            dest=command.dest,
            cost=command.cost,
        )

        reports: List[RouterReport] = []
        for name in command.report:
            if not self.store.has_router(name):
                LOG.debug("report target %s is not a known router", name)
                continue
            table = self.recompute(name)
            report = self.report(name)
            reports.append(report)
            self.trace.record(
                "routes_computed",
                router=name,
                routes=len(table),
                route_hash=report.route_hash,
            )
        return CommandResult(command=command, applied=True, reports=reports)

    def run(self, commands: Iterable[LinkCommand]) -> RunResult:
        results = [self.apply(command) for command in commands]
        LOG.info(
            "run finished: applied=%s skipped=%s route_flaps=%s",
            self.commands_applied,
            self.commands_skipped,
            self.route_flaps,
        )
        return RunResult(
            results=results,
            commands_applied=self.commands_applied,
            commands_skipped=self.commands_skipped,
            route_flaps=self.route_flaps,
        )
