"""Recursive validation of input trees against a schema."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from .errors import FormatError, MissingFieldError, TypeMismatchError
from .formats import match_format
from .schema import Schema, SchemaOption, kind_of, parse_schema
from .secret import REDACTED, Secret

LOGGER = logging.getLogger(__name__)


class ValidatedConfig(Mapping):
    """
    Read-only result of :func:`validate`.

    Every schema field is present as a key; optional fields without input or
    default map to ``None``. Fields are reachable by item or attribute access
    (``config["nested"]["name"]`` or ``config.nested.name``).
    """

    __slots__ = ("_values",)

    def __init__(self, values: Dict[str, Any]) -> None:
        object.__setattr__(self, "_values", dict(values))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ValidatedConfig is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ValidatedConfig is read-only")

    def __reduce__(self):
        return (type(self), (self._values,))

    def __repr__(self) -> str:
        return f"ValidatedConfig({self._values!r})"

    def to_dict(self, *, reveal: bool = False) -> Dict[str, Any]:
        """
        Return a plain nested ``dict`` copy.

        Secrets are rendered as the redaction marker unless ``reveal`` is set,
        in which case their wrapped values are returned.
        """
        result: Dict[str, Any] = {}
        for key, value in self._values.items():
            if isinstance(value, ValidatedConfig):
                result[key] = value.to_dict(reveal=reveal)
            elif isinstance(value, Secret):
                result[key] = value.reveal() if reveal else REDACTED
            else:
                result[key] = value
        return result


def validate(schema: Mapping[str, Any], input: Optional[Mapping[str, Any]] = None) -> ValidatedConfig:
    """
    Validate ``input`` against ``schema`` and return the normalized config.

    Args:
        schema: Mapping of field names to :class:`SchemaOption` instances or to
            plain mappings that parse into them.
        input: Loosely typed tree, usually parsed from TOML. Keys missing from
            the schema are ignored. Defaults to an empty mapping.

    Raises:
        SchemaError: The schema definition itself is invalid.
        MissingFieldError: A required field is absent and has no default.
        TypeMismatchError: A resolved value has the wrong kind.
        FormatError: A string value fails its declared format.
    """
    parsed = parse_schema(schema)
    config = _validate_level(parsed, input if input is not None else {}, prefix="")
    LOGGER.debug("Validated %d top-level config fields", len(config))
    return config


def _validate_level(schema: Schema, tree: Mapping[str, Any], *, prefix: str) -> ValidatedConfig:
    values: Dict[str, Any] = {}
    for key, option in schema.items():
        values[key] = _resolve_field(key, option, tree.get(key), path=f"{prefix}{key}")
    return ValidatedConfig(values)


def _resolve_field(key: str, option: SchemaOption, value: Any, *, path: str) -> Any:
    if value is None and not option.is_optional:
        raise MissingFieldError(key, path=path)
    resolved = option.default if value is None else value

    if option.kind == "object":
        if resolved is None:
            resolved = {}
        elif not isinstance(resolved, Mapping):
            raise TypeMismatchError(key, "object", kind_of(resolved), path=path)
        LOGGER.debug("Descending into %s", path)
        return _validate_level(option.properties or {}, resolved, prefix=f"{path}.")

    if resolved is None:
        return None

    actual = kind_of(resolved)
    if actual != option.kind:
        raise TypeMismatchError(key, option.kind, actual, path=path)

    if option.format is not None and not match_format(option.format, resolved):
        shown = Secret(resolved) if option.secret else resolved
        raise FormatError(key, option.format, shown, path=path)

    if option.secret:
        return Secret(resolved)
    return resolved
