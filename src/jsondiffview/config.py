"""Configuration for the diff pipeline.

Supports:
- Environment variable configuration
- YAML file configuration
- Runtime overrides (CLI flags, request bodies)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from jsondiffview.errors import ConfigError
from jsondiffview.normalize import NormalizationOptions

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

# Every stage recurses once per nesting level; this keeps the deepest
# accepted document well inside the interpreter's recursion limit.
MAX_DEPTH_LIMIT = 200


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class DiffConfig:
    """Settings for parsing, normalization and canonical output.

    Defaults match the interactive viewer: keys sorted, array order respected.
    """

    # Normalization
    sort_keys: bool = True
    ignore_array_order: bool = False

    # Canonical output
    indent: int = 2

    # Input limits
    max_depth: int = 100
    max_input_bytes: int = 5 * 1024 * 1024  # 5MB

    def __post_init__(self):
        """Validate configuration."""
        for name in ("sort_keys", "ignore_array_order"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean, got {getattr(self, name)!r}")
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) or not 1 <= self.indent <= 8:
            raise ConfigError(f"indent must be an integer between 1 and 8, got {self.indent!r}")
        if (
            isinstance(self.max_depth, bool)
            or not isinstance(self.max_depth, int)
            or not 1 <= self.max_depth <= MAX_DEPTH_LIMIT
        ):
            raise ConfigError(
                f"max_depth must be an integer between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth!r}"
            )
        if (
            isinstance(self.max_input_bytes, bool)
            or not isinstance(self.max_input_bytes, int)
            or self.max_input_bytes < 1
        ):
            raise ConfigError(f"max_input_bytes must be a positive integer, got {self.max_input_bytes!r}")

    @property
    def options(self) -> NormalizationOptions:
        """Normalization options carried by this config."""
        return NormalizationOptions(sort_keys=self.sort_keys, ignore_array_order=self.ignore_array_order)

    def with_overrides(self, **overrides: Any) -> DiffConfig:
        """Copy with the given non-None values replaced."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    @classmethod
    def from_env(cls) -> DiffConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            JSONDIFF_SORT_KEYS: Sort object keys (true/false)
            JSONDIFF_IGNORE_ARRAY_ORDER: Ignore array element order (true/false)
            JSONDIFF_INDENT: Indentation width of canonical output
            JSONDIFF_MAX_DEPTH: Maximum nesting depth accepted by the parser
            JSONDIFF_MAX_INPUT_BYTES: Maximum input size accepted by the parser
        """
        values: dict[str, Any] = {}
        if (raw := os.getenv("JSONDIFF_SORT_KEYS")) is not None:
            values["sort_keys"] = _parse_bool("JSONDIFF_SORT_KEYS", raw)
        if (raw := os.getenv("JSONDIFF_IGNORE_ARRAY_ORDER")) is not None:
            values["ignore_array_order"] = _parse_bool("JSONDIFF_IGNORE_ARRAY_ORDER", raw)
        if (raw := os.getenv("JSONDIFF_INDENT")) is not None:
            values["indent"] = _parse_int("JSONDIFF_INDENT", raw)
        if (raw := os.getenv("JSONDIFF_MAX_DEPTH")) is not None:
            values["max_depth"] = _parse_int("JSONDIFF_MAX_DEPTH", raw)
        if (raw := os.getenv("JSONDIFF_MAX_INPUT_BYTES")) is not None:
            values["max_input_bytes"] = _parse_int("JSONDIFF_MAX_INPUT_BYTES", raw)
        return cls(**values)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DiffConfig:
        """Create configuration from dictionary (e.g., YAML).

        Unknown keys are rejected so typos do not pass silently.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(map(str, set(data) - known))
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> DiffConfig:
        """Load configuration from a YAML file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "sort_keys": self.sort_keys,
            "ignore_array_order": self.ignore_array_order,
            "indent": self.indent,
            "max_depth": self.max_depth,
            "max_input_bytes": self.max_input_bytes,
        }


DEFAULT_CONFIG = DiffConfig()
