from __future__ import annotations

from typing import Any, Dict

from lsrsim.core.spf import NEIGHBOR_ORDERS
from lsrsim.core.topology import UNKNOWN_ROUTER_POLICIES

OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def validate_config(cfg: Dict[str, Any]) -> list[str]:
    errors: list[str] = []

    if not isinstance(cfg, dict):
        return ["config root must be a mapping"]

    policy = cfg.get("unknown_routers")
    if policy not in UNKNOWN_ROUTER_POLICIES:
        errors.append(f"unknown_routers must be one of {list(UNKNOWN_ROUTER_POLICIES)}")

    order = cfg.get("neighbor_order")
    if order not in NEIGHBOR_ORDERS:
        errors.append(f"neighbor_order must be one of {list(NEIGHBOR_ORDERS)}")

    output = cfg.get("output", {})
    if not isinstance(output, dict):
        errors.append("'output' must be a dict")
    else:
        if output.get("format") not in OUTPUT_FORMATS:
            errors.append(f"output.format must be one of {list(OUTPUT_FORMATS)}")
        trace = output.get("trace")
        if trace is not None and not isinstance(trace, str):
            errors.append("output.trace must be a path or null")

    level = str(cfg.get("log_level", "")).upper()
    if level not in LOG_LEVELS:
        errors.append(f"log_level must be one of {list(LOG_LEVELS)}")

    return errors
