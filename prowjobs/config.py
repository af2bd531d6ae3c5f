"""
Configuration management for prowjobs.

Loads config.yaml from the prowjobs home directory:

    default_cluster_alias: build01
    logging:
      level: DEBUG
      format: pretty        # or "structured" (JSON lines)
      console: true
      output: /var/log/prowjobs.log

Every key is optional. The home directory is $PROWJOBS_HOME, or
~/.config/prowjobs when unset.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from prowjobs.errors import ConfigError
from prowjobs.schemas import DEFAULT_CLUSTER_ALIAS

LOG_FORMATS = ("structured", "pretty")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_prowjobs_home() -> Path:
    """Get the prowjobs home directory."""
    home = os.environ.get("PROWJOBS_HOME")
    if home:
        return Path(home)
    return Path("~/.config/prowjobs").expanduser()


@dataclass(frozen=True)
class ProwJobsConfig:
    """
    prowjobs configuration.

    Attributes:
        default_cluster_alias: Cluster for kubernetes jobs that name none
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "structured" (JSON) or "pretty" (rich console)
        log_console: Also log to console
        log_file: Optional log file path
    """
    default_cluster_alias: str = DEFAULT_CLUSTER_ALIAS
    log_level: str = "INFO"
    log_format: str = "structured"
    log_console: bool = True
    log_file: Optional[Path] = None

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level '{self.log_level}', expected one of {LOG_LEVELS}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigError(
                f"Invalid log format '{self.log_format}', expected one of {LOG_FORMATS}"
            )
        if not self.default_cluster_alias:
            raise ConfigError("default_cluster_alias must not be empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProwJobsConfig":
        """Build a config from a parsed config.yaml. Unknown keys are ignored."""
        logging_data = data.get("logging") or {}
        if not isinstance(logging_data, dict):
            raise ConfigError("'logging' must be a mapping")

        log_file = logging_data.get("output")
        return cls(
            default_cluster_alias=data.get("default_cluster_alias", DEFAULT_CLUSTER_ALIAS),
            log_level=str(logging_data.get("level", "INFO")).upper(),
            log_format=logging_data.get("format", "structured"),
            log_console=logging_data.get("console", True),
            log_file=Path(log_file).expanduser() if log_file else None,
        )


def load_config(config_path: Optional[Path] = None) -> ProwJobsConfig:
    """
    Load prowjobs configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to config.yaml in the prowjobs home

    Returns:
        ProwJobsConfig instance

    Raises:
        FileNotFoundError: If the config file does not exist
        ConfigError: If the config is not valid YAML or not a mapping
    """
    if config_path is None:
        config_path = get_prowjobs_home() / "config.yaml"

    if not config_path.exists():
        raise FileNotFoundError(f"prowjobs config.yaml not found at {config_path}")

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    return ProwJobsConfig.from_dict(data)
