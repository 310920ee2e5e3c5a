"""Readers for simulation scripts.

Two framings are accepted. The line-oriented text form lists router names
until ``LINKSTATE``, initial links ``src dest cost`` until ``UPDATE`` and
link commands ``src dest cost [router ...]`` until ``END``::

    A
    B
    LINKSTATE
    A B 1
    UPDATE
    A B 4 A B
    END

The YAML form carries the same data under ``routers``, ``links`` and
``commands``. Malformed lines and records are logged and skipped.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from lsrsim.core.types import Cost, LinkCommand, RouterName, Script
from lsrsim.utils.io import load_yaml

LOG = logging.getLogger("lsrsim.scenario")

LINKSTATE = "LINKSTATE"
UPDATE = "UPDATE"
END = "END"

YAML_SUFFIXES = {".yaml", ".yml"}


def _parse_link(line: str, lineno: int) -> Optional[Tuple[RouterName, RouterName, Cost, List[str]]]:
    fields = line.split()
    if len(fields) < 3:
        LOG.warning("line %s: expected 'src dest cost', got %r", lineno, line)
        return None
    try:
        cost = int(fields[2])
    except ValueError:
        LOG.warning("line %s: cost %r is not an integer", lineno, fields[2])
        return None
    return fields[0], fields[1], cost, fields[3:]


def parse_script_lines(lines: Iterable[str]) -> Script:
    script = Script()
    phase = "routers"
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        if phase == "routers":
            if line == LINKSTATE:
                phase = "links"
            else:
                script.routers.append(line)
            continue
        if phase == "links":
            if line == UPDATE:
                phase = "commands"
                continue
            parsed = _parse_link(line, lineno)
            if parsed is not None:
                src, dst, cost, extra = parsed
                if extra:
                    LOG.debug("line %s: ignoring trailing fields %s", lineno, extra)
                script.links.append((src, dst, cost))
            continue
        if line == END:
            break
        parsed = _parse_link(line, lineno)
        if parsed is not None:
            src, dst, cost, report = parsed
            script.commands.append(LinkCommand(source=src, dest=dst, cost=cost, report=tuple(report)))
    return script


def parse_script_text(text: str) -> Script:
    return parse_script_lines(text.splitlines())


def _names(value: Any, field: str) -> Tuple[RouterName, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(name) for name in value)
    raise TypeError(f"{field} must be a router name or a list of names, got {type(value).__name__}")


def script_from_config(raw: Dict[str, Any]) -> Script:
    script = Script()
    try:
        script.routers = list(_names(raw.get("routers"), "routers"))
    except TypeError as exc:
        LOG.warning("routers: %s", exc)

    for idx, item in enumerate(raw.get("links", []) or []):
        try:
            script.links.append((str(item["u"]), str(item["v"]), int(item["cost"])))
        except (KeyError, TypeError, ValueError) as exc:
            LOG.warning("links[%s]: invalid link record %r (%s)", idx, item, exc)

    for idx, item in enumerate(raw.get("commands", []) or []):
        try:
            command = LinkCommand(
                source=str(item["u"]),
                dest=str(item["v"]),
                cost=int(item["cost"]),
                report=_names(item.get("report"), "report"),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            LOG.warning("commands[%s]: invalid command record %r (%s)", idx, item, exc)
            continue
        script.commands.append(command)
    return script


def load_script(path: str | Path) -> Script:
    """Read a script from ``path``; ``-`` reads the text form from stdin."""
    if str(path) == "-":
        return parse_script_lines(sys.stdin)
    p = Path(path)
    if p.suffix.lower() in YAML_SUFFIXES:
        return script_from_config(load_yaml(p))
    with p.open("r", encoding="utf-8") as f:
        return parse_script_lines(f)
