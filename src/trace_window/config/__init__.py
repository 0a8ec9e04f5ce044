"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    BacktraceConfig,
    FileLoggingConfig,
    LoggingConfig,
    TraceWindowConfig,
    WindowConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "TraceWindowConfig",
    # Section configs
    "WindowConfig",
    "BacktraceConfig",
    "LoggingConfig",
    "FileLoggingConfig",
]
