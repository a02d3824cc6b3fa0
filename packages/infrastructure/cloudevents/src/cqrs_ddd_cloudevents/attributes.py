"""Attribute resolution — single-valued CloudEvent attributes from message headers."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from pydantic import AnyUrl

from .exceptions import (
    AmbiguousAttributeError,
    ConfigurationError,
    MissingAttributeError,
    TypeMismatchError,
)
from .patterns import HeaderPattern, parse_pattern

Converter = Callable[[str, Any], Any]

_WHITESPACE = re.compile(r"\s")


class AttributeKind(str, Enum):
    """Closed set of value shapes a CloudEvent attribute can take."""

    STRING = "string"
    URI = "uri"
    TIMESTAMP = "timestamp"


def to_string(attribute: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    raise TypeMismatchError(attribute, type(value).__name__, "a String")


def to_uri(attribute: str, value: Any) -> str:
    """Accept a URI-reference string or a pydantic ``AnyUrl``."""
    if isinstance(value, AnyUrl):
        return str(value)
    if not isinstance(value, str):
        raise TypeMismatchError(attribute, type(value).__name__, "a String or URI")
    if not value or _WHITESPACE.search(value):
        raise TypeMismatchError(
            attribute, "str", "a String or URI", f"{value!r} is not a URI reference"
        )
    try:
        urlsplit(value)
    except ValueError as e:
        raise TypeMismatchError(
            attribute, "str", "a String or URI", f"{value!r} is not a URI reference"
        ) from e
    return value


def to_timestamp(attribute: str, value: Any) -> datetime:
    """Accept a ``datetime`` or an RFC 3339 string; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as e:
            raise TypeMismatchError(
                attribute, "str", "a timestamp", f"{value!r} is not RFC 3339"
            ) from e
    else:
        raise TypeMismatchError(attribute, type(value).__name__, "a timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


CONVERTERS: dict[AttributeKind, Converter] = {
    AttributeKind.STRING: to_string,
    AttributeKind.URI: to_uri,
    AttributeKind.TIMESTAMP: to_timestamp,
}


def matching_keys(headers: Mapping[str, Any], pattern: HeaderPattern) -> list[str]:
    """Return the header keys satisfying *pattern*, in header order."""
    return [key for key in headers if pattern.matches(key)]


def resolve(
    headers: Mapping[str, Any],
    pattern: str,
    default: Any,
    converter: Converter,
    *,
    attribute: str | None = None,
    required: bool = True,
) -> Any:
    """Resolve one attribute value from *headers*.

    Exactly one matching header is converted with *converter*; none falls back
    to *default* (already converted). Two or more matches are always an error.

    Raises:
        AmbiguousAttributeError: if two or more header keys match *pattern*.
        MissingAttributeError: if nothing matches, *default* is ``None`` and
            the attribute is *required*.
        TypeMismatchError: if the converter rejects the header value.
    """
    name = attribute or pattern
    keys = matching_keys(headers, parse_pattern(pattern, allow_negation=False))
    if len(keys) > 1:
        raise AmbiguousAttributeError(name, pattern, keys)
    if keys:
        return converter(name, headers[keys[0]])
    if default is None and required:
        raise MissingAttributeError(name, pattern)
    return default


@dataclass(frozen=True)
class AttributeSpec:
    """How a single CloudEvent attribute is resolved.

    ``default`` is converted once at construction, so a bad default surfaces as
    a :class:`ConfigurationError` rather than on the first message.
    """

    name: str
    kind: AttributeKind
    pattern: str | None = None
    default: Any = None
    required: bool = False

    def __post_init__(self) -> None:
        if self.pattern is not None:
            parse_pattern(self.pattern, allow_negation=False)
        if self.default is not None:
            try:
                converted = self.converter(self.name, self.default)
            except TypeMismatchError as e:
                raise ConfigurationError(
                    f"Invalid default for attribute '{self.name}': {e}"
                ) from e
            object.__setattr__(self, "default", converted)
        if self.required and self.pattern is None and self.default is None:
            raise ConfigurationError(
                f"Attribute '{self.name}' needs a header pattern or a default"
            )

    @property
    def converter(self) -> Converter:
        return CONVERTERS[self.kind]

    @property
    def header_pattern(self) -> HeaderPattern | None:
        if self.pattern is None:
            return None
        return parse_pattern(self.pattern, allow_negation=False)

    def resolve(self, headers: Mapping[str, Any]) -> Any:
        """Resolve this attribute from *headers* (see :func:`resolve`)."""
        if self.pattern is None:
            return self.default
        return resolve(
            headers,
            self.pattern,
            self.default,
            self.converter,
            attribute=self.name,
            required=self.required,
        )
