"""Pytest fixtures for cloudevents tests."""

from __future__ import annotations

from typing import Any

import pytest

from cqrs_ddd_cloudevents import (
    CloudEventTransformer,
    JsonFormat,
    Message,
    TransformerSettings,
    XmlFormat,
)

PAYLOAD = b"test message"


@pytest.fixture
def base_headers() -> dict[str, Any]:
    return {
        "test_id": "test-id",
        "test_source": "test-source",
        "test_type": "test-type",
    }


@pytest.fixture
def settings() -> TransformerSettings:
    return TransformerSettings(
        id_pattern="test_i*",
        source_pattern="test_s*",
        type_pattern="test_t*",
        extension_patterns=("customer-header", "!notme-header"),
    )


@pytest.fixture
def transformer(settings: TransformerSettings) -> CloudEventTransformer:
    return CloudEventTransformer(settings, formats=[JsonFormat(), XmlFormat()])


@pytest.fixture
def message(base_headers: dict[str, Any]) -> Message:
    return Message(
        payload=PAYLOAD,
        headers={
            **base_headers,
            "customer-header": "extension-value",
            "other-header": "other-value",
            "notme-header": "novalue",
        },
    )
