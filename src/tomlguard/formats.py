"""String format matchers used by ``format`` schema options."""

from __future__ import annotations

import re
from typing import Any, Callable, Dict

from pydantic import AnyUrl, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

FormatMatcher = Callable[[Any], bool]

_ANY_URL = TypeAdapter(AnyUrl)
_HTTP_URL = TypeAdapter(HttpUrl)

# local@domain.tld; no whitespace, one "@", non-empty dot separated labels
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)+$")


def _parse(adapter: TypeAdapter, value: Any):
    if not isinstance(value, str) or value != value.strip():
        return None
    try:
        return adapter.validate_python(value)
    except PydanticValidationError:
        return None


def is_url(value: Any) -> bool:
    """Return True for any absolute URL carrying a scheme."""
    return _parse(_ANY_URL, value) is not None


def is_http_url(value: Any) -> bool:
    """Return True for ``http://`` and ``https://`` URLs."""
    return _parse(_HTTP_URL, value) is not None


def is_https_url(value: Any) -> bool:
    parsed = _parse(_HTTP_URL, value)
    return parsed is not None and parsed.scheme == "https"


def is_email(value: Any) -> bool:
    return isinstance(value, str) and _EMAIL_PATTERN.fullmatch(value) is not None


FORMAT_MATCHERS: Dict[str, FormatMatcher] = {
    "url": is_url,
    "http": is_http_url,
    "https": is_https_url,
    "email": is_email,
}


def match_format(name: str, value: Any) -> bool:
    """Run the matcher registered for ``name`` against ``value``."""
    return FORMAT_MATCHERS[name](value)
