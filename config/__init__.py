from .loader import ConfigError, load_config, get_config, reload_config
from .schema import (
    TradeHealthConfig,
    IndicatorConfig,
    HealthCheckThresholds,
    ScanConfig,
    LoggingConfig,
)

__all__ = [
    "ConfigError",
    "load_config",
    "get_config",
    "reload_config",
    "TradeHealthConfig",
    "IndicatorConfig",
    "HealthCheckThresholds",
    "ScanConfig",
    "LoggingConfig",
]
