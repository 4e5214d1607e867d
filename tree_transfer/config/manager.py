from __future__ import annotations

"""Configuration loading and access helpers.

Loads the YAML files packaged with *tree_transfer* and merges them with user
overrides found in the user configuration directory:

- ``$TREE_TRANSFER_CONFIG_DIR`` when set
- otherwise ``%LOCALAPPDATA%\\TreeTransfer\\config`` on Windows
- otherwise ``~/.tree_transfer``

Missing packaged files fall back to built-in defaults.
"""

from importlib import resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from tree_transfer.core.codec import tree_from_mapping, validate_tree
from tree_transfer.core.models import ROOT_ID, TreeNode

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager", "load_seed_trees"]


def _get_user_config_dir() -> Path:
    """Get the user configuration directory."""
    override = os.environ.get("TREE_TRANSFER_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == 'nt':
        local_appdata = os.environ.get('LOCALAPPDATA')
        if local_appdata:
            return Path(local_appdata) / "TreeTransfer" / "config"
        return Path.home() / "AppData" / "Local" / "TreeTransfer" / "config"
    return Path.home() / ".tree_transfer"


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "logging": "logging.yml",
        "seed": "seed_tree.yml",
        "transfer": "transfer.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_seed(self) -> Dict[str, Any]:
        return self._data.get("seed", {})

    def get_transfer_settings(self) -> Dict[str, Any]:
        return self._data.get("transfer", {})

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return

        defaults = self._builtin_defaults()
        startup_summary = []
        user_config_dir = _get_user_config_dir()

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                with resources.files(__package__).joinpath(filename).open("r", encoding="utf-8") as fh:
                    merged_cfg.update(yaml.safe_load(fh) or {})
                    status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
                merged_cfg.update(defaults[key])
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                merged_cfg.update(defaults[key])
                status = "invalid"

            # 2. load user overrides
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    merged_cfg.update(user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.info("Config startup: %s", " | ".join(startup_summary))

    @staticmethod
    def _builtin_defaults() -> Dict[str, Dict[str, Any]]:
        """Neutral fallbacks: no logging config, empty panes, default history."""
        return {
            "logging": {},
            "seed": {
                "left": {"id": ROOT_ID, "children": []},
                "right": {"id": ROOT_ID, "children": []},
            },
            "transfer": {"undo_max_history": 50},
        }


def load_seed_trees(config: ConfigManager | None = None) -> Tuple[TreeNode, TreeNode]:
    """Build the initial left and right pane trees from the seed config.

    Raises
    ------
    TreeStructureError
        If either seed breaks the root sentinel or identifier uniqueness, or
        if an identifier occurs in both seeds.
    """
    seed = (config or ConfigManager()).get_seed()
    left = tree_from_mapping(seed.get("left") or {"id": ROOT_ID})
    right = tree_from_mapping(seed.get("right") or {"id": ROOT_ID})
    validate_tree(left)
    validate_tree(right)
    # The two panes together form one identifier universe under a shared root.
    validate_tree(TreeNode(ROOT_ID, list(left.children) + list(right.children)))
    return left, right
