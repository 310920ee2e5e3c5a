from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from lsrsim.cli.validate import validate_config
from lsrsim.utils.io import deep_merge, load_yaml

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


@dataclass(frozen=True)
class OutputConfig:
    format: str
    trace: Optional[str] = None


@dataclass(frozen=True)
class SimulationConfig:
    unknown_routers: str
    neighbor_order: str
    output: OutputConfig
    log_level: str


def effective_config(raw: Dict[str, Any] | None = None) -> Dict[str, Any]:
    return deep_merge(load_yaml(DEFAULTS_PATH), dict(raw or {}))


def config_from_dict(raw: Dict[str, Any] | None = None) -> SimulationConfig:
    cfg = effective_config(raw)
    errors = validate_config(cfg)
    if errors:
        raise ValueError("Invalid config: " + "; ".join(errors))
    output = dict(cfg["output"])
    return SimulationConfig(
        unknown_routers=str(cfg["unknown_routers"]),
        neighbor_order=str(cfg["neighbor_order"]),
        output=OutputConfig(
            format=str(output["format"]),
            trace=str(output["trace"]) if output.get("trace") else None,
        ),
        log_level=str(cfg["log_level"]).upper(),
    )


def load_sim_config(path: str | Path | None = None) -> SimulationConfig:
    if path is None:
        return config_from_dict({})
    return config_from_dict(load_yaml(path))
