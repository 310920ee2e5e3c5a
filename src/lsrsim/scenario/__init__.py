"""Simulation script readers."""

from lsrsim.scenario.script import load_script, parse_script_lines, parse_script_text, script_from_config

__all__ = ["load_script", "parse_script_lines", "parse_script_text", "script_from_config"]
