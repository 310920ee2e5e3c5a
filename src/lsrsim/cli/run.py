from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from lsrsim.core.engine import CommandEngine, RunResult
from lsrsim.core.trace import EventTrace
from lsrsim.runtime.config import SimulationConfig
from lsrsim.scenario.script import load_script


def run_script(input_path: str | Path, config: SimulationConfig) -> RunResult:
    script = load_script(input_path)
    with EventTrace(config.output.trace) as trace:
        engine = CommandEngine.from_script(
            script,
            unknown_routers=config.unknown_routers,
            neighbor_order=config.neighbor_order,
            trace=trace,
        )
        return engine.run(script.commands)


def with_overrides(
    config: SimulationConfig,
    fmt: str | None = None,
    trace: str | None = None,
    log_level: str | None = None,
) -> SimulationConfig:
    output = config.output
    if fmt is not None:
        output = replace(output, format=fmt)
    if trace is not None:
        output = replace(output, trace=trace)
    if log_level is not None:
        config = replace(config, log_level=log_level.upper())
    return replace(config, output=output)
