"""
Checker configuration.

Settings come from a YAML file (``PROPCHECK_CONFIG``, default
``config/propcheck.yaml``) and single-field environment overrides::

    checker:
      strategy: auto          # auto | scalar | vectorized
      batch_size: 65536       # assignments per vectorized chunk
      vectorize_threshold: 12 # auto: vectorize from this many variables
    logging:
      level: WARNING
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from propositions.errors import ConfigError

logger = logging.getLogger(__name__)

STRATEGIES = ("auto", "scalar", "vectorized")

DEFAULT_CONFIG_PATH = "config/propcheck.yaml"
CONFIG_ENV = "PROPCHECK_CONFIG"
STRATEGY_ENV = "PROPCHECK_STRATEGY"
BATCH_SIZE_ENV = "PROPCHECK_BATCH_SIZE"


@dataclass(slots=True)
class CheckerConfig:
    """How the entailment checker walks the assignment space."""

    strategy: str = "auto"
    batch_size: int = 1 << 16
    vectorize_threshold: int = 12
    log_level: Optional[str] = None

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ConfigError(
                f"Unknown strategy {self.strategy!r}; expected one of {', '.join(STRATEGIES)}"
            )
        if self.batch_size < 1:
            raise ConfigError(f"batch_size must be positive, got {self.batch_size}")
        if self.vectorize_threshold < 0:
            raise ConfigError(
                f"vectorize_threshold must be non-negative, got {self.vectorize_threshold}"
            )
        if self.log_level is not None:
            self.log_level = self.log_level.upper()
            if not isinstance(logging.getLevelName(self.log_level), int):
                raise ConfigError(f"Unknown log level {self.log_level!r}")

    def resolve_strategy(self, variable_count: int) -> str:
        """Concrete strategy ("scalar" or "vectorized") for a problem size."""
        if self.strategy != "auto":
            return self.strategy
        if variable_count >= self.vectorize_threshold:
            return "vectorized"
        return "scalar"

    def with_overrides(self, **overrides: Any) -> "CheckerConfig":
        """Copy with every non-None keyword applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CheckerConfig":
        checker = data.get("checker") or {}
        logging_cfg = data.get("logging") or {}
        if not isinstance(checker, Mapping) or not isinstance(logging_cfg, Mapping):
            raise ConfigError("'checker' and 'logging' sections must be mappings")
        level = logging_cfg.get("level")
        try:
            return cls(
                strategy=str(checker.get("strategy", "auto")),
                batch_size=int(checker.get("batch_size", 1 << 16)),
                vectorize_threshold=int(checker.get("vectorize_threshold", 12)),
                log_level=str(level) if level is not None else None,
            )
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid checker configuration: {exc}") from exc

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CheckerConfig":
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"Configuration {path} must be a mapping")
        return cls.from_mapping(data)


def load_config_from_env(path: Optional[Union[str, Path]] = None) -> CheckerConfig:
    """
    Build the configuration from file and environment.

    An explicit ``path`` must exist. Without one, ``PROPCHECK_CONFIG`` (or the
    default location) is used when present and defaults apply otherwise.
    ``PROPCHECK_STRATEGY`` and ``PROPCHECK_BATCH_SIZE`` override the file.
    """
    if path is not None:
        config = CheckerConfig.from_file(path)
    else:
        config_path = Path(os.getenv(CONFIG_ENV, DEFAULT_CONFIG_PATH))
        if config_path.exists():
            config = CheckerConfig.from_file(config_path)
        else:
            logger.debug("no configuration at %s, using defaults", config_path)
            config = CheckerConfig()

    strategy = os.getenv(STRATEGY_ENV)
    batch_size = os.getenv(BATCH_SIZE_ENV)
    if batch_size is not None:
        try:
            batch_size = int(batch_size)
        except ValueError as exc:
            raise ConfigError(f"{BATCH_SIZE_ENV} must be an integer, got {batch_size!r}") from exc
    return config.with_overrides(strategy=strategy, batch_size=batch_size)


__all__ = [
    "STRATEGIES",
    "DEFAULT_CONFIG_PATH",
    "CheckerConfig",
    "load_config_from_env",
]
