"""Pydantic model describing schema options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import SchemaError

Kind = Literal["string", "boolean", "number", "object"]
FormatName = Literal["url", "http", "https", "email"]

SCALAR_KINDS = frozenset({"string", "boolean", "number"})


def kind_of(value: Any) -> str:
    """Return the schema kind name describing a runtime value."""
    # bool is an int subclass and must be checked first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    if value is None:
        return "undefined"
    return type(value).__name__


class SchemaOption(BaseModel):
    """Contract for a single configuration field."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Kind = Field(validation_alias=AliasChoices("kind", "type"))
    required: bool = True
    default: Any = None
    format: Optional[FormatName] = None
    secret: bool = False
    properties: Optional[Dict[str, "SchemaOption"]] = None

    @property
    def has_default(self) -> bool:
        return self.default is not None

    @property
    def is_optional(self) -> bool:
        """True when an absent input value is acceptable."""
        return self.has_default or not self.required

    @model_validator(mode="after")
    def _check_shape(self) -> "SchemaOption":
        if self.kind == "object":
            if self.properties is None:
                raise ValueError("object options must declare properties")
            if self.secret:
                raise ValueError("secret is only supported on scalar options")
        elif self.properties is not None:
            raise ValueError(f"{self.kind} options cannot declare properties")
        if self.format is not None and self.kind != "string":
            raise ValueError("format is only supported on string options")
        if self.has_default and kind_of(self.default) != self.kind:
            raise ValueError(
                f"default {self.default!r} is a {kind_of(self.default)}, expecting {self.kind}"
            )
        return self


Schema = Dict[str, SchemaOption]

_SCHEMA_ADAPTER = TypeAdapter(Schema)


def parse_schema(schema: Mapping[str, Any]) -> Schema:
    """Coerce a literal schema mapping into :class:`SchemaOption` instances."""
    try:
        return _SCHEMA_ADAPTER.validate_python(schema)
    except PydanticValidationError as exc:
        raise SchemaError(f"Invalid schema definition:\n{exc}") from exc
