from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from lsrsim.core.types import Cost, LinkFact, LinkKey, RouterName, link_key


class LinkStateDatabase:
    """Per-router set of known links, keyed by the canonical endpoint pair.

    Both directions of a link share one key, so ``(X, Y)`` and ``(Y, X)``
    always resolve to the same entry.
    """

    def __init__(self, facts: Iterable[LinkFact] = ()) -> None:
        self._links: Dict[LinkKey, Cost] = {}
        for fact in facts:
            self.set(fact.a, fact.b, fact.cost)

    @staticmethod
    def _key(a: RouterName, b: RouterName) -> LinkKey:
        return link_key(a, b)

    def set(self, a: RouterName, b: RouterName, cost: Cost) -> bool:
        key = self._key(a, b)
        changed = self._links.get(key) != cost
        self._links[key] = int(cost)
        return changed

    def remove(self, a: RouterName, b: RouterName) -> bool:
        return self._links.pop(self._key(a, b), None) is not None

    def get(self, a: RouterName, b: RouterName) -> Optional[Cost]:
        return self._links.get(self._key(a, b))

    def facts(self) -> List[LinkFact]:
        return [LinkFact(a=k[0], b=k[1], cost=c) for k, c in sorted(self._links.items())]

    def copy(self) -> "LinkStateDatabase":
        other = LinkStateDatabase()
        other._links = dict(self._links)
        return other

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        return self._key(str(key[0]), str(key[1])) in self._links

    def __len__(self) -> int:
        return len(self._links)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkStateDatabase):
            return NotImplemented
        return self._links == other._links
