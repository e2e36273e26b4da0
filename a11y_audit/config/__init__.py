"""Engine configuration (environment, .env and YAML kind maps)."""

from .config import (
    DEFAULT_KIND_MAP,
    EngineConfig,
    get_config,
    load_kind_map,
    reset_config,
)

__all__ = [
    "DEFAULT_KIND_MAP",
    "EngineConfig",
    "get_config",
    "load_kind_map",
    "reset_config",
]
