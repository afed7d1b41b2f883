"""Configuration management for fleettree using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".fleettree.json"


class LayoutDirection(str, Enum):
    """Flow direction of the layered drawing."""
    LEFT_RIGHT = "LR"
    TOP_BOTTOM = "TB"


class OutputFormat(str, Enum):
    """Output format types."""
    TEXT = "text"
    MERMAID = "mermaid"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    def to_logging_level(self) -> int:
        """Map to a standard library logging level."""
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.TRACE: logging.NOTSET,
        }[self]


class LayoutConfig(BaseModel):
    """Layout configuration section."""
    node_width: float = Field(alias="nodeWidth", default=220)
    node_height: float = Field(alias="nodeHeight", default=60)
    node_sep: float = Field(alias="nodeSep", default=40)
    rank_sep: float = Field(alias="rankSep", default=100)
    direction: LayoutDirection = LayoutDirection.LEFT_RIGHT

    @field_validator("node_width", "node_height")
    @classmethod
    def validate_node_size(cls, v):
        if v <= 0:
            raise ValueError("node size must be > 0")
        return v

    @field_validator("node_sep", "rank_sep")
    @classmethod
    def validate_spacing(cls, v):
        if v < 0:
            raise ValueError("spacing must be >= 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class ExpansionConfig(BaseModel):
    """Initial expansion policy section."""
    initial_depth: int = Field(alias="initialDepth", default=1)

    @field_validator("initial_depth")
    @classmethod
    def validate_initial_depth(cls, v):
        if v < 0:
            raise ValueError("initial_depth must be >= 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class SearchConfig(BaseModel):
    """Search configuration section."""
    min_length: int = Field(alias="minLength", default=1)
    debounce_ms: int = Field(alias="debounceMs", default=300)  # Hosts debounce; the engine never waits

    @field_validator("min_length")
    @classmethod
    def validate_min_length(cls, v):
        if v < 1:
            raise ValueError("min_length must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TEXT
    max_label_length: int = Field(alias="maxLabelLength", default=30)

    @field_validator("max_label_length")
    @classmethod
    def validate_max_label_length(cls, v):
        if v < 4:
            raise ValueError("max_label_length must be >= 4")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class FleetTreeConfig(BaseModel):
    """Complete fleettree configuration model."""
    data: str | None = None  # Hierarchy JSON file; bundled fixture when unset
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    expansion: ExpansionConfig = Field(default_factory=ExpansionConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> FleetTreeConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .fleettree.json

    Returns:
        FleetTreeConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return FleetTreeConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .fleettree.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> FleetTreeConfig:
    """Create default configuration with sensible defaults."""
    return FleetTreeConfig()
