"""Tests for the string format matchers."""

from __future__ import annotations

import pytest

from tomlguard.formats import FORMAT_MATCHERS, is_email, is_http_url, is_https_url, is_url, match_format


@pytest.mark.parametrize(
    "name, value",
    [
        ("email", "a$a.com"),
        ("email", "a b@example.com"),
        ("email", "user@localhost"),
        ("email", "user@@example.com"),
        ("email", "ops@example.com\n"),
        ("http", "ftp://whatever.com"),
        ("http", "ftp"),
        ("https", "http://whatever.com"),
        ("https", "foobar"),
        ("url", "foobar z zzxczx"),
        ("url", " https://example.com"),
    ],
)
def test_rejects_invalid_values(name: str, value: str) -> None:
    assert match_format(name, value) is False


@pytest.mark.parametrize(
    "name, value",
    [
        ("email", "ops@example.com"),
        ("email", "first.last+tag@mail.example.org"),
        ("http", "http://whatever.com"),
        ("http", "https://whatever.com/path?q=1"),
        ("https", "https://whatever.com"),
        ("url", "ftp://files.example.com/pub"),
        ("url", "https://example.com:8443/"),
    ],
)
def test_accepts_valid_values(name: str, value: str) -> None:
    assert match_format(name, value) is True


def test_non_strings_never_match() -> None:
    assert not is_url(42)
    assert not is_http_url(None)
    assert not is_https_url(True)
    assert not is_email(1.5)


def test_registry_covers_all_formats() -> None:
    assert set(FORMAT_MATCHERS) == {"url", "http", "https", "email"}
    with pytest.raises(KeyError):
        match_format("uuid", "0000")
