from .load import ConfigError, load_config
from .model import CompilerConfig
from .paths import CONFIG_FILE, config_path

__all__ = ["ConfigError", "load_config", "CompilerConfig", "CONFIG_FILE", "config_path"]
