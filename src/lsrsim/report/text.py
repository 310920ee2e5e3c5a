from __future__ import annotations

import json
from typing import Iterable, List

from lsrsim.core.engine import RouterReport, RunResult


def format_router_report(report: RouterReport) -> str:
    name = report.router
    lines: List[str] = [f"{name} Neighbour Table:"]
    lines.extend(f"{edge.dest}|{edge.cost}" for edge in report.neighbors)
    lines.append("")

    lines.append(f"{name} LSDB:")
    lines.extend(f"{fact.a}|{fact.b}|{fact.cost}" for fact in report.lsdb)
    lines.append("")

    lines.append(f"{name} Routing Table:")
    lines.extend(f"{route.destination}|{route.next_hop}|{route.cost}" for route in report.routes)
    lines.append("")
    return "\n".join(lines) + "\n"


def render_text(reports: Iterable[RouterReport]) -> str:
    return "".join(format_router_report(report) for report in reports)


def render_json(result: RunResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False, sort_keys=True)


def render(result: RunResult, fmt: str = "text") -> str:
    if fmt == "json":
        return render_json(result) + "\n"
    if fmt == "text":
        return render_text(result.reports())
    raise ValueError(f"Unsupported output format: {fmt}")
