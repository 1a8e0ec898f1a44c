"""Tests for schema option parsing."""

from __future__ import annotations

import pytest

from tomlguard import SchemaError, SchemaOption, parse_schema, validate
from tomlguard.schema import kind_of


def test_parse_literal_schema() -> None:
    schema = parse_schema(
        {
            "name": {"kind": "string"},
            "server": {"kind": "object", "properties": {"port": {"kind": "number", "default": 80}}},
        }
    )
    assert isinstance(schema["name"], SchemaOption)
    assert schema["name"].required is True
    assert schema["name"].is_optional is False
    assert schema["server"].properties["port"].has_default


def test_type_is_accepted_as_kind_alias() -> None:
    schema = parse_schema({"name": {"type": "string", "required": False}})
    assert schema["name"].kind == "string"
    assert schema["name"].is_optional


@pytest.mark.parametrize(
    "option",
    [
        {"kind": "object"},
        {"kind": "string", "properties": {}},
        {"kind": "number", "format": "url"},
        {"kind": "object", "secret": True, "properties": {}},
        {"kind": "number", "default": "five"},
        {"kind": "boolean", "default": 1},
        {"kind": "object", "default": "x", "properties": {}},
        {"kind": "array"},
        {"kind": "string", "format": "uuid"},
        {"kind": "string", "unknown_option": True},
    ],
)
def test_invalid_options_are_rejected(option: dict) -> None:
    with pytest.raises(SchemaError):
        parse_schema({"field": option})


def test_nested_invalid_option_is_rejected() -> None:
    with pytest.raises(SchemaError):
        validate(
            {"outer": {"kind": "object", "properties": {"inner": {"kind": "object"}}}},
            {"outer": {}},
        )


def test_options_are_frozen() -> None:
    option = SchemaOption(kind="string")
    with pytest.raises(Exception):
        option.required = False  # type: ignore[misc]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("x", "string"),
        (True, "boolean"),
        (3, "number"),
        (2.5, "number"),
        ({}, "object"),
        ([1], "array"),
        (None, "undefined"),
    ],
)
def test_kind_of(value: object, expected: str) -> None:
    assert kind_of(value) == expected
