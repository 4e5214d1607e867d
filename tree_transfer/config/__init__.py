"""Packaged YAML configuration (logging, seed trees, transfer settings) and
the :class:`ConfigManager` that merges it with user overrides.
"""

from .manager import ConfigManager, load_seed_trees

__all__ = [
    "ConfigManager",
    "load_seed_trees",
]
