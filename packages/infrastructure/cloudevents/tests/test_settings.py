"""Tests for TransformerSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cqrs_ddd_cloudevents.attributes import AttributeKind
from cqrs_ddd_cloudevents.exceptions import ConfigurationError
from cqrs_ddd_cloudevents.settings import TransformerSettings


def test_from_mapping() -> None:
    settings = TransformerSettings.from_mapping(
        {
            "id_pattern": "test_i*",
            "source_default": "urn:app",
            "type_default": "demo",
            "extension_patterns": ["trace-*", "!trace-internal"],
        }
    )
    assert settings.extension_patterns == ("trace-*", "!trace-internal")
    assert settings.source_pattern is None
    assert settings.data_content_type_pattern == "contentType"


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigurationError, match="Invalid transformer settings"):
        TransformerSettings.from_mapping({"id_patern": "x"})


def test_settings_are_frozen() -> None:
    settings = TransformerSettings(id_pattern="x")
    with pytest.raises(ValidationError):
        settings.id_pattern = "y"  # type: ignore[misc]


def test_attribute_specs_cover_all_attributes() -> None:
    settings = TransformerSettings(
        id_pattern="test_i*",
        source_pattern="test_s*",
        type_default="demo",
        data_content_type_pattern="contentType",
    )
    specs = {spec.name: spec for spec in settings.attribute_specs()}

    assert list(specs) == [
        "id",
        "source",
        "type",
        "time",
        "datacontenttype",
        "dataschema",
        "subject",
    ]
    assert specs["id"].required is True
    assert specs["subject"].required is False
    assert specs["source"].kind is AttributeKind.URI
    assert specs["type"].default == "demo"
    assert specs["datacontenttype"].pattern == "contentType"


def test_data_content_type_pattern_can_be_disabled() -> None:
    settings = TransformerSettings(
        id_pattern="i", source_pattern="s", type_pattern="t", data_content_type_pattern=None
    )
    specs = {spec.name: spec for spec in settings.attribute_specs()}
    assert specs["datacontenttype"].pattern is None
