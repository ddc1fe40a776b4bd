from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import CompilerConfig
from .paths import config_path
from ..errors import TplcUserError

logger = logging.getLogger(__name__)

_YAML = YAML(typ="safe")


class ConfigError(TplcUserError):
    """Raised when tplc.yaml cannot be read or validated."""
    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Invalid config {path}: {message}")


def load_config(root: Path, explicit: Optional[Path] = None) -> CompilerConfig:
    """
    Load tplc configuration.

    Args:
        root: Directory searched for tplc.yaml when no explicit path is given
        explicit: Path passed via --config; must exist

    Returns:
        Validated config (defaults when no file is found)
    """
    if explicit is not None:
        path = explicit.resolve()
        if not path.is_file():
            raise ConfigError(path, "file not found")
    else:
        path = config_path(root)
        if not path.is_file():
            logger.debug("No %s found, using defaults", path)
            return CompilerConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(path, f"cannot read file: {e}") from e

    try:
        raw = _YAML.load(text) or {}
    except YAMLError as e:
        raise ConfigError(path, f"invalid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(path, f"expected mapping at top level, got {type(raw).__name__}")

    try:
        cfg = CompilerConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(path, str(e)) from e

    logger.debug("Loaded config from %s: %r", path, cfg)
    return cfg


__all__ = ["ConfigError", "load_config"]
