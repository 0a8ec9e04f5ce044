"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WindowConfig(BaseModel):
    """Context window configuration."""

    context_before: int = Field(8, ge=1, le=100, description="Lines shown before the fault")
    context_after: int = Field(3, ge=0, le=100, description="Lines shown after the fault")


class BacktraceConfig(BaseModel):
    """Backtrace formatting configuration."""

    redact_args: bool = True
    max_arg_length: int = Field(80, ge=8, le=1000, description="Longest stringified argument")


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("trace-window.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class TraceWindowConfig(BaseSettings):
    """Root configuration for trace-window."""

    window: WindowConfig = WindowConfig()
    backtrace: BacktraceConfig = BacktraceConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="TRACE_WINDOW_",
        env_nested_delimiter="__",
    )
