"""Simulation configuration."""

from lsrsim.runtime.config import OutputConfig, SimulationConfig, config_from_dict, load_sim_config

__all__ = ["OutputConfig", "SimulationConfig", "config_from_dict", "load_sim_config"]
