"""Holder that keeps sensitive configuration values out of logs and dumps."""

from __future__ import annotations

from typing import Any, Generic, TypeVar, Union

Scalar = Union[str, bool, int, float]
T = TypeVar("T", str, bool, int, float)

REDACTED = "**********"


class Secret(Generic[T]):
    """
    Wrap a scalar configuration value.

    The payload is only reachable through :meth:`reveal`; ``str``, ``repr``,
    ``format`` and :meth:`ValidatedConfig.to_dict` all render the fixed
    marker ``**********`` instead. Pickling is refused.
    """

    __slots__ = ("_secret_value",)

    def __init__(self, value: T) -> None:
        if isinstance(value, Secret):
            raise TypeError("Secret values cannot be nested")
        self._secret_value = value

    def reveal(self) -> T:
        """Return the wrapped value."""
        return self._secret_value

    def __str__(self) -> str:
        return REDACTED

    def __repr__(self) -> str:
        return f"Secret({REDACTED!r})"

    def __format__(self, format_spec: str) -> str:
        return format(REDACTED, format_spec)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return self._secret_value == other._secret_value

    def __hash__(self) -> int:
        return hash(self._secret_value)

    def __copy__(self) -> "Secret[T]":
        return self

    def __deepcopy__(self, memo: dict) -> "Secret[T]":
        return self

    def __reduce__(self):
        raise TypeError("Secret values cannot be pickled")
