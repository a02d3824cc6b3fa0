"""AvroCompactFormat — CloudEvents in Avro single-object encoding."""

from __future__ import annotations

import io
from typing import Any

from fastavro import parse_schema, schemaless_reader, schemaless_writer
from fastavro.schema import fingerprint, to_parsing_canonical_form

from ..envelope import CloudEvent
from ..exceptions import EncodingError
from .base import extension_value

MEDIA_TYPE = "application/cloudevents+avrocompact"

#: Avro single-object encoding marker.
SINGLE_OBJECT_MARKER = b"\xc3\x01"

_NULLABLE_STRING = ["null", "string"]

SCHEMA: dict[str, Any] = {
    "type": "record",
    "name": "CloudEvent",
    "namespace": "io.cloudevents.v1.avro.compact",
    "fields": [
        {"name": "id", "type": "string"},
        {"name": "source", "type": "string"},
        {"name": "type", "type": "string"},
        {"name": "datacontenttype", "type": _NULLABLE_STRING, "default": None},
        {"name": "dataschema", "type": _NULLABLE_STRING, "default": None},
        {"name": "subject", "type": _NULLABLE_STRING, "default": None},
        {
            "name": "time",
            "type": ["null", {"type": "long", "logicalType": "timestamp-micros"}],
            "default": None,
        },
        {
            "name": "extensions",
            "type": {
                "type": "map",
                "values": ["boolean", "int", "long", "string", "bytes"],
            },
            "default": {},
        },
        {"name": "data", "type": ["bytes", "null"]},
    ],
}

PARSED_SCHEMA = parse_schema(SCHEMA)

#: CRC-64-AVRO fingerprint of the schema, little-endian as Avro single-object encoding requires.
SCHEMA_FINGERPRINT = bytes.fromhex(
    fingerprint(to_parsing_canonical_form(PARSED_SCHEMA), "CRC-64-AVRO")
)


class AvroCompactFormat:
    """Serialize CloudEvents to a compact Avro record.

    Output is ``C3 01`` + the 8-byte schema fingerprint + the Avro binary body.
    """

    media_type = MEDIA_TYPE

    def to_record(self, event: CloudEvent) -> dict[str, Any]:
        return {
            "id": event.id,
            "source": event.source,
            "type": event.type,
            "time": event.time,
            "datacontenttype": event.data_content_type,
            "dataschema": event.data_schema,
            "subject": event.subject,
            "extensions": {
                name: extension_value(name, value)
                for name, value in event.extensions.items()
            },
            "data": event.data,
        }

    def serialize(self, event: CloudEvent) -> bytes:
        record = self.to_record(event)
        buffer = io.BytesIO()
        buffer.write(SINGLE_OBJECT_MARKER)
        buffer.write(SCHEMA_FINGERPRINT)
        try:
            schemaless_writer(buffer, PARSED_SCHEMA, record)
        except (TypeError, ValueError, OverflowError) as e:
            raise EncodingError(f"Avro encoding failed: {e}") from e
        return buffer.getvalue()

    def deserialize(self, raw: bytes) -> CloudEvent:
        """Decode single-object encoded bytes written by :meth:`serialize`."""
        header = SINGLE_OBJECT_MARKER + SCHEMA_FINGERPRINT
        if not raw.startswith(header):
            raise EncodingError("Not an Avro single-object CloudEvent for this schema")
        try:
            record = schemaless_reader(io.BytesIO(raw[len(header) :]), PARSED_SCHEMA)
        except (EOFError, TypeError, ValueError) as e:
            raise EncodingError(f"Avro decoding failed: {e}") from e
        if not isinstance(record, dict):
            raise EncodingError("Avro body did not decode to a record")
        return CloudEvent(
            id=record["id"],
            source=record["source"],
            type=record["type"],
            time=record["time"],
            data_content_type=record["datacontenttype"],
            data_schema=record["dataschema"],
            subject=record["subject"],
            data=record["data"] or b"",
            extensions=record["extensions"],
        )
