"""tomlguard: validate TOML configuration trees against declarative schemas."""

from __future__ import annotations

from .errors import (
    ConfigError,
    FormatError,
    LoadError,
    MissingFieldError,
    SchemaError,
    TypeMismatchError,
    ValidationError,
)
from .formats import FORMAT_MATCHERS, match_format
from .loader import load_config, load_toml
from .schema import Schema, SchemaOption, parse_schema
from .secret import REDACTED, Secret
from .validator import ValidatedConfig, validate

__all__ = [
    "ConfigError",
    "FORMAT_MATCHERS",
    "FormatError",
    "LoadError",
    "MissingFieldError",
    "REDACTED",
    "Schema",
    "SchemaError",
    "SchemaOption",
    "Secret",
    "TypeMismatchError",
    "ValidatedConfig",
    "ValidationError",
    "load_config",
    "load_toml",
    "match_format",
    "parse_schema",
    "validate",
]
