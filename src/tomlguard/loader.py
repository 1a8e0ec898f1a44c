"""Configuration loading and merging utilities."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union
from urllib.parse import unquote, urlparse

import tomllib
from platformdirs import user_config_dir

from .errors import LoadError, ValidationError
from .schema import Schema, parse_schema
from .validator import ValidatedConfig, validate

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _base_dir(base: PathLike) -> Path:
    """Resolve ``base`` (file, directory or ``file://`` URL) to a directory."""
    text = str(base)
    if text.startswith("file://"):
        base = Path(unquote(urlparse(text).path))
    path = Path(base).expanduser()
    return path if path.is_dir() else path.parent


def load_toml(base: PathLike, relative_path: PathLike) -> dict[str, Any]:
    """
    Read and parse a TOML document relative to ``base``.

    ``base`` is typically ``__file__`` of the calling module; when it names a
    file its parent directory is used.

    Raises:
        LoadError: The file cannot be read or decoded, is not valid TOML, or
            does not parse into a table.
    """
    path = _base_dir(base) / relative_path
    LOGGER.debug("Loading config from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Unable to read config file {path}: {exc}") from exc
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise LoadError(f"Config file {path} is not valid TOML: {exc}") from exc
    if raw is None or not isinstance(raw, dict):
        raise LoadError(f"Config file {path} expected to be parsed as a TOML table")
    return raw


def read_toml(path: Path) -> dict[str, Any]:
    """Read a TOML file if it exists."""
    if not path.exists():
        return {}
    return load_toml(path.parent, path.name)


def discover_config_path(explicit: PathLike | None, app_name: str) -> Path | None:
    """Determine the config file to load based on precedence."""
    if explicit:
        candidate = Path(explicit).expanduser()
        return candidate if candidate.exists() else None

    cwd_candidate = Path(f"{app_name}.toml")
    if cwd_candidate.exists():
        return cwd_candidate

    user_candidate = Path(user_config_dir(app_name)) / "config.toml"
    if user_candidate.exists():
        return user_candidate

    return None


def parse_scalar(value: str) -> Any:
    """Coerce scalar strings (from env or CLI) into native Python types."""
    lower_value = value.lower()
    if lower_value in {"true", "false"}:
        return lower_value == "true"
    try:
        if "." in value:
            return float(value)
        return int(value)
    except ValueError:
        return value


def env_to_dict(env: Mapping[str, str], prefix: str, *, coerce: bool = True) -> dict[str, Any]:
    """
    Parse ``PREFIX__SECTION__KEY`` environment variables into a nested dictionary.

    With ``coerce=False`` values are kept as the raw strings.
    """
    result: dict[str, Any] = {}
    for key, value in env.items():
        if not key.startswith(prefix):
            continue
        parts = key[len(prefix) :].lower().split("__")
        ref = result
        for part in parts[:-1]:
            ref = ref.setdefault(part, {})
        ref[parts[-1]] = parse_scalar(value) if coerce else value
    return result


def merge_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dictionary with ``override`` merged into ``base`` recursively."""
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def parse_cli_overrides(entries: Iterable[str], *, coerce: bool = True) -> dict[str, Any]:
    """Parse ``key=value`` pairs into a nested dictionary."""
    result: dict[str, Any] = {}
    for entry in entries:
        if "=" not in entry:
            continue
        key, raw = entry.split("=", 1)
        ref = result
        parts = key.split(".")
        for part in parts[:-1]:
            ref = ref.setdefault(part, {})
        ref[parts[-1]] = parse_scalar(raw) if coerce else raw
    return result


def coerce_overrides(overrides: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Convert raw override strings using the kind declared for each field."""
    result: dict[str, Any] = {}
    for key, value in overrides.items():
        option = schema.get(key)
        if isinstance(value, Mapping):
            nested = option.properties if option is not None and option.kind == "object" else None
            result[key] = coerce_overrides(value, nested or {})
        elif option is not None and option.kind == "string":
            result[key] = value
        else:
            result[key] = parse_scalar(value)
    return result


def default_env_prefix(app_name: str) -> str:
    return f"{app_name.upper().replace('-', '_')}__"


def load_config(
    schema: Mapping[str, Any],
    config_path: PathLike | None = None,
    cli_sets: Iterable[str] = (),
    *,
    app_name: str,
    env_prefix: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ValidatedConfig:
    """
    Load configuration using the precedence rules and validate it.

    Later layers win: config file, then ``PREFIX__`` environment variables,
    then ``key=value`` CLI overrides. Override strings are kept as text for
    ``string`` fields and parsed with :func:`parse_scalar` otherwise.
    """
    merged: dict[str, Any] = {}

    discovered = discover_config_path(config_path, app_name)
    if discovered:
        merged = merge_dicts(merged, read_toml(discovered))
    elif config_path:
        raise LoadError(f"Config file {config_path} not found")

    parsed = parse_schema(schema)
    prefix = env_prefix or default_env_prefix(app_name)
    overrides = merge_dicts(
        env_to_dict(os.environ if env is None else env, prefix, coerce=False),
        parse_cli_overrides(cli_sets, coerce=False),
    )
    merged = merge_dicts(merged, coerce_overrides(overrides, parsed))

    try:
        return validate(parsed, merged)
    except ValidationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        raise
