from __future__ import annotations

import hashlib
import json
from typing import Dict, Mapping

from lsrsim.core.types import RouterName
from lsrsim.model.routing import RoutingTable


def hash_routes(route_tables: Mapping[RouterName, RoutingTable]) -> str:
    normalized: Dict[str, Dict[str, list]] = {}
    for node, table in sorted(route_tables.items()):
        normalized[str(node)] = {
            route.destination: [route.next_hop, int(route.cost)] for route in table.snapshot()
        }
    payload = json.dumps(normalized, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
