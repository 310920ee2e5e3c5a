"""Filesystem and serialization helpers."""

from lsrsim.utils.io import deep_merge, load_yaml

__all__ = ["deep_merge", "load_yaml"]
