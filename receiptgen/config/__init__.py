from .loader import ConfigError, load_config, resolve_config_path

__all__ = [
    "ConfigError",
    "load_config",
    "resolve_config_path",
]
