from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

RouterName = str
Cost = int
LinkKey = Tuple[RouterName, RouterName]

# Cost value in a link command meaning "remove this link".
REMOVE_LINK = -1


def link_key(a: RouterName, b: RouterName) -> LinkKey:
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class NeighborEdge:
    dest: RouterName
    cost: Cost


@dataclass(frozen=True)
class LinkFact:
    """One undirected link as known by an LSDB, endpoints in canonical order."""

    a: RouterName
    b: RouterName
    cost: Cost

    def to_dict(self) -> Dict[str, Any]:
        return {"a": self.a, "b": self.b, "cost": int(self.cost)}


@dataclass(frozen=True)
class LinkCommand:
    source: RouterName
    dest: RouterName
    cost: Cost
    report: Tuple[RouterName, ...] = ()

    @property
    def is_removal(self) -> bool:
        return self.cost == REMOVE_LINK


@dataclass
class Script:
    routers: List[RouterName] = field(default_factory=list)
    links: List[Tuple[RouterName, RouterName, Cost]] = field(default_factory=list)
    commands: List[LinkCommand] = field(default_factory=list)
