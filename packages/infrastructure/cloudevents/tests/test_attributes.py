"""Tests for attribute resolution and conversion."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import AnyUrl

from cqrs_ddd_cloudevents.attributes import (
    AttributeKind,
    AttributeSpec,
    resolve,
    to_string,
    to_timestamp,
    to_uri,
)
from cqrs_ddd_cloudevents.exceptions import (
    AmbiguousAttributeError,
    ConfigurationError,
    MissingAttributeError,
    TypeMismatchError,
)


def test_resolve_single_match() -> None:
    headers = {"test_id": "abc", "other": "x"}
    assert resolve(headers, "test_i*", None, to_string) == "abc"


def test_resolve_multiple_matches_is_ambiguous() -> None:
    headers = {"id1": "a", "id2": "b"}
    with pytest.raises(AmbiguousAttributeError, match="Multiple headers") as exc_info:
        resolve(headers, "id*", None, to_string, attribute="id")
    assert exc_info.value.pattern == "id*"
    assert exc_info.value.keys == ["id1", "id2"]


def test_resolve_ambiguity_checked_even_with_default() -> None:
    with pytest.raises(AmbiguousAttributeError):
        resolve({"id1": "a", "id2": "b"}, "id*", "fallback", to_string)


def test_resolve_falls_back_to_default() -> None:
    assert resolve({"x": 1}, "missing_id*", "fallback", to_string) == "fallback"


def test_resolve_missing_without_default_fails() -> None:
    with pytest.raises(MissingAttributeError, match="missing_id") as exc_info:
        resolve({"x": 1}, "missing_id*", None, to_string, attribute="id")
    assert exc_info.value.attribute == "id"
    assert exc_info.value.pattern == "missing_id*"


def test_resolve_optional_missing_returns_none() -> None:
    assert resolve({}, "subject", None, to_string, required=False) is None


def test_resolve_type_mismatch_names_runtime_type() -> None:
    with pytest.raises(TypeMismatchError, match="must be a String") as exc_info:
        resolve({"id_test": 1234}, "id_*", None, to_string, attribute="id")
    assert exc_info.value.attribute == "id"
    assert exc_info.value.value_type == "int"
    assert "int" in str(exc_info.value)


def test_to_uri_accepts_string_and_any_url() -> None:
    assert to_uri("source", "urn:test") == "urn:test"
    assert to_uri("source", "/relative/path") == "/relative/path"
    assert to_uri("source", AnyUrl("https://example.com/orders")).startswith(
        "https://example.com/orders"
    )


@pytest.mark.parametrize("value", [42, b"urn:x", None, ["urn:x"]])
def test_to_uri_rejects_other_types(value: object) -> None:
    with pytest.raises(TypeMismatchError, match="String or URI"):
        to_uri("source", value)


@pytest.mark.parametrize("value", ["", "has space", "http://[::1"])
def test_to_uri_rejects_malformed_strings(value: str) -> None:
    with pytest.raises(TypeMismatchError, match="not a URI reference"):
        to_uri("source", value)


def test_to_timestamp_parses_rfc3339() -> None:
    parsed = to_timestamp("time", "2024-05-01T10:00:00Z")
    assert parsed == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)


def test_to_timestamp_keeps_offset_and_assumes_utc_for_naive() -> None:
    offset = timezone(timedelta(hours=2))
    aware = datetime(2024, 5, 1, 12, tzinfo=offset)
    assert to_timestamp("time", aware) is aware
    naive = to_timestamp("time", datetime(2024, 5, 1, 12))
    assert naive.tzinfo == timezone.utc


def test_to_timestamp_rejects_garbage() -> None:
    with pytest.raises(TypeMismatchError, match="RFC 3339"):
        to_timestamp("time", "yesterday")
    with pytest.raises(TypeMismatchError, match="timestamp"):
        to_timestamp("time", 1714557600)


def test_attribute_spec_converts_default_once() -> None:
    spec = AttributeSpec("time", AttributeKind.TIMESTAMP, default="2024-05-01T10:00:00Z")
    assert isinstance(spec.default, datetime)
    assert spec.resolve({}) == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)


def test_attribute_spec_invalid_default_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Invalid default"):
        AttributeSpec("source", AttributeKind.URI, default=123)


def test_attribute_spec_required_needs_pattern_or_default() -> None:
    with pytest.raises(ConfigurationError, match="needs a header pattern"):
        AttributeSpec("id", AttributeKind.STRING, required=True)


def test_attribute_spec_rejects_negated_pattern() -> None:
    with pytest.raises(ConfigurationError):
        AttributeSpec("id", AttributeKind.STRING, pattern="!id", required=True)


def test_attribute_spec_without_pattern_uses_default() -> None:
    spec = AttributeSpec("type", AttributeKind.STRING, default="demo", required=True)
    assert spec.resolve({"type": "ignored"}) == "demo"
