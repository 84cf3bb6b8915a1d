"""Config loading and schema."""

from .loader import ConfigLoadError, config_from_mapping, load_config
from .schema import DEFAULT_CONFIG, AnalysisConfig

__all__ = [
    "AnalysisConfig",
    "ConfigLoadError",
    "DEFAULT_CONFIG",
    "config_from_mapping",
    "load_config",
]
