"""
config.py - Library configuration

Provides configuration loading from a JSON file, environment variables,
and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

logger = logging.getLogger(__name__)


TRANCHE_ORDERINGS = ("registration", "alphabetical")

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class TrancheConfig:
    """Tranche generation settings."""

    # Order of names inside a tranche: first registration or sorted by name
    ordering: str = "registration"

    def __post_init__(self):
        if self.ordering not in TRANCHE_ORDERINGS:
            raise ValueError(
                f"Unknown tranche ordering {self.ordering!r}, "
                f"expected one of {', '.join(TRANCHE_ORDERINGS)}"
            )

    @classmethod
    def from_env(cls) -> "TrancheConfig":
        return cls(
            ordering=os.getenv("DEPPER_TRANCHE_ORDERING", "registration").lower(),
        )


@dataclass
class ValidationConfig:
    """Validation diagnostics settings."""

    report_cycles: bool = True
    max_reported_cycles: int = 10

    def __post_init__(self):
        if self.max_reported_cycles < 1:
            raise ValueError("max_reported_cycles must be at least 1")

    @classmethod
    def from_env(cls) -> "ValidationConfig":
        return cls(
            report_cycles=os.getenv("DEPPER_REPORT_CYCLES", "true").lower() == "true",
            max_reported_cycles=int(os.getenv("DEPPER_MAX_REPORTED_CYCLES", "10")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("DEPPER_LOG_LEVEL", "INFO"),
            format=os.getenv("DEPPER_LOG_FORMAT", DEFAULT_LOG_FORMAT),
            log_file=os.getenv("DEPPER_LOG_FILE"),
            json_logs=os.getenv("DEPPER_JSON_LOGS", "false").lower() == "true",
        )


@dataclass
class DepperConfig:
    """Root configuration."""

    tranches: TrancheConfig = field(default_factory=TrancheConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "DepperConfig":
        """Create configuration from environment variables."""
        return cls(
            tranches=TrancheConfig.from_env(),
            validation=ValidationConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "DepperConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "DepperConfig":
        """Create config from dictionary, file values override the environment."""
        env = cls.from_env()

        tranches = {**env.tranches.__dict__, **(data.get("tranches") or {})}
        validation = {**env.validation.__dict__, **(data.get("validation") or {})}
        log = {**env.logging.__dict__, **(data.get("logging") or {})}

        # Re-run __post_init__ checks on the merged values
        return cls(
            tranches=TrancheConfig(**_known_fields(TrancheConfig, tranches)),
            validation=ValidationConfig(**_known_fields(ValidationConfig, validation)),
            logging=LoggingConfig(**_known_fields(LoggingConfig, log)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "tranches": {
                "ordering": self.tranches.ordering,
            },
            "validation": {
                "report_cycles": self.validation.report_cycles,
                "max_reported_cycles": self.validation.max_reported_cycles,
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


def _known_fields(config_cls: type, values: Dict[str, Any]) -> Dict[str, Any]:
    known = config_cls.__dataclass_fields__
    return {k: v for k, v in values.items() if k in known}


# Global config instance
_config: Optional[DepperConfig] = None


def load_config(filepath: str = None) -> DepperConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        DepperConfig instance
    """
    global _config

    if filepath:
        _config = DepperConfig.from_file(filepath)
    else:
        default_paths = [
            "./depper.json",
            os.path.expanduser("~/.depper/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = DepperConfig.from_file(path)
                return _config

        _config = DepperConfig.from_env()

    return _config


def get_config() -> DepperConfig:
    """
    Get current configuration.

    Falls back to environment variables until load_config() is called;
    config files are never read implicitly.
    """
    global _config
    if _config is None:
        _config = DepperConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config
    _config = None
