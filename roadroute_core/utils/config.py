"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")


@dataclass
class RouterConfig:
    """Router configuration."""

    # Scheme reserved for data lookups (compared case-insensitively)
    data_scheme: str = "data"

    # Parsing
    strip_fragment: bool = False
    decode_query_values: bool = True

    # Logging
    log_level: str = "INFO"
    log_dispatch: bool = True

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary.

        Unknown keys are ignored; values are converted to the declared
        field type.

        Raises:
            ValueError: If a value cannot be converted
        """
        fields = cls.__dataclass_fields__
        filtered = {
            k: _coerce(k, fields[k].type, v) for k, v in data.items() if k in fields
        }
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROADROUTE_") -> T:
        """Load config from environment variables over defaults."""
        return cls.from_dict(env_overrides(prefix))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for field_name in self.__dataclass_fields__:
            result[field_name] = getattr(self, field_name)
        return result

    def merge(self, overrides: Dict[str, Any]) -> "RouterConfig":
        """Return a copy with overrides applied (overrides take precedence)."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data)


_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def _coerce(name: str, field_type: Any, value: Any) -> Any:
    """Convert a raw config value to its field's declared type."""
    # Annotations are strings under postponed evaluation
    type_name = field_type if isinstance(field_type, str) else field_type.__name__

    if type_name == "bool":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ValueError(f"Invalid boolean for {name}: {value!r}")

    if type_name == "str":
        if isinstance(value, bool):
            raise ValueError(f"Invalid string for {name}: {value!r}")
        return str(value)

    return value


def env_overrides(prefix: str = "ROADROUTE_") -> Dict[str, Any]:
    """Collect raw config values from environment variables.

    Values stay strings; ``RouterConfig.from_dict`` converts them to
    each field's type.
    """
    data: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if key.startswith(prefix):
            data[key[len(prefix):].lower()] = value

    return data


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROADROUTE_",
) -> RouterConfig:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = RouterConfig()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = RouterConfig.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = RouterConfig.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables
    return config.merge(env_overrides(env_prefix))


def configure_logging(config: Optional[RouterConfig] = None) -> None:
    """Apply the configured log level to the package logger."""
    config = config or RouterConfig()
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    logging.getLogger("roadroute_core").setLevel(level)


__all__ = [
    "RouterConfig",
    "env_overrides",
    "load_config",
    "configure_logging",
]
