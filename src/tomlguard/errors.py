"""Exception hierarchy shared by the validator and the loader."""

from __future__ import annotations

from typing import Any


class ConfigError(Exception):
    """Base class for every error raised by tomlguard."""


class SchemaError(ConfigError):
    """Raised when a schema definition breaks its own invariants."""


class LoadError(ConfigError):
    """Raised when a configuration document cannot be read or parsed."""


class ValidationError(ConfigError):
    """Raised when an input tree does not satisfy its schema."""

    def __init__(self, message: str, *, key: str, path: str) -> None:
        super().__init__(message)
        self.key = key
        self.path = path


class MissingFieldError(ValidationError):
    """A required field is absent and has no default."""

    def __init__(self, key: str, *, path: str) -> None:
        super().__init__(f"Config item {path} not found", key=key, path=path)


class TypeMismatchError(ValidationError):
    """A resolved value does not have the declared kind."""

    def __init__(self, key: str, expected: str, actual: str, *, path: str) -> None:
        super().__init__(
            f"Config item {path} has invalid type. Received {actual}, expecting {expected}",
            key=key,
            path=path,
        )
        self.expected = expected
        self.actual = actual


class FormatError(ValidationError):
    """A string value does not match its declared format."""

    def __init__(
        self,
        key: str,
        format: str,
        value: Any,
        *,
        path: str,
    ) -> None:
        super().__init__(
            f"Config item {path} is not a valid {format}: {value!r}",
            key=key,
            path=path,
        )
        self.format = format
        self.value = value
