"""Tests for the CloudEvents XML format."""

from __future__ import annotations

import xml.etree.ElementTree as ET  # noqa: N817
from datetime import datetime, timezone

import pytest

from cqrs_ddd_cloudevents.envelope import CloudEvent
from cqrs_ddd_cloudevents.exceptions import EncodingError
from cqrs_ddd_cloudevents.formats.xml_format import XML_NAMESPACE, XmlFormat

NS = {"ce": XML_NAMESPACE}


def test_serialize_minimal_event_is_byte_exact() -> None:
    event = CloudEvent(id="test-id", source="test-source", type="test-type", data=b"test message")
    assert XmlFormat().serialize(event) == (
        b'<?xml version="1.0" encoding="UTF-8" standalone="no"?>'
        b'<event xmlns:xs="http://www.w3.org/2001/XMLSchema" '
        b'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        b'specversion="1.0" xmlns="http://cloudevents.io/xmlformat/V1">'
        b"<id>test-id</id><source>test-source</source>"
        b"<type>test-type</type>"
        b'<data xsi:type="xs:base64Binary">dGVzdCBtZXNzYWdl</data></event>'
    )


def test_serialize_is_well_formed_with_typed_extensions() -> None:
    event = CloudEvent(
        id="1",
        source="urn:x",
        type="t",
        time=datetime(2024, 5, 1, 10, tzinfo=timezone.utc),
        subject="a < b",
        extensions={"retries": 3, "sampled": False, "custom-header": "x"},
    )
    root = ET.fromstring(XmlFormat().serialize(event))
    assert root.tag == f"{{{XML_NAMESPACE}}}event"
    assert root.find("ce:time", NS).text == "2024-05-01T10:00:00Z"  # type: ignore[union-attr]
    assert root.find("ce:subject", NS).text == "a < b"  # type: ignore[union-attr]
    assert root.find("ce:retries", NS).text == "3"  # type: ignore[union-attr]
    assert root.find("ce:sampled", NS).text == "false"  # type: ignore[union-attr]
    assert root.find("ce:custom-header", NS).text == "x"  # type: ignore[union-attr]
    assert root.find("ce:data", NS) is None


def test_serialize_rejects_invalid_element_name() -> None:
    event = CloudEvent(id="1", source="urn:x", type="t", extensions={"bad name": "x"})
    with pytest.raises(EncodingError, match="not a valid XML element name"):
        XmlFormat().serialize(event)


@pytest.mark.parametrize("name", ["data", "specversion", "data_base64"])
def test_serialize_rejects_envelope_member_extension(name: str) -> None:
    event = CloudEvent(id="1", source="urn:x", type="t", data=b"x", extensions={name: "shadow"})
    with pytest.raises(EncodingError, match="collides"):
        XmlFormat().serialize(event)
