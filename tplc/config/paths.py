from __future__ import annotations

from pathlib import Path

# Single source of truth for the configuration file location.
CONFIG_FILE = "tplc.yaml"


def config_path(root: Path) -> Path:
    """Path to the configuration file tplc.yaml in the given directory."""
    return (root / CONFIG_FILE).resolve()


__all__ = ["CONFIG_FILE", "config_path"]
