from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

import yaml


def load_yaml(path: str | Path) -> Dict[str, Any]:
    """Load a YAML document whose root is a mapping; an empty file gives ``{}``."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{p}: expected a mapping at the root, got {type(data).__name__}")
    return data


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested mappings merge key by key."""
    out: Dict[str, Any] = {}
    for key in set(base) | set(override):
        if key not in override:
            value = base[key]
        elif key in base and isinstance(base[key], Mapping) and isinstance(override[key], Mapping):
            value = deep_merge(base[key], override[key])
        else:
            value = override[key]
        out[key] = dict(value) if isinstance(value, Mapping) else value
    return out
