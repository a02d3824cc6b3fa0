"""JsonFormat — CloudEvents JSON event format."""

from __future__ import annotations

import base64
import json
from typing import Any

from ..envelope import CloudEvent
from ..exceptions import EncodingError
from .base import extension_value, format_time

MEDIA_TYPE = "application/cloudevents+json"

_MEMBERS = frozenset(
    {
        "specversion",
        "id",
        "source",
        "type",
        "time",
        "datacontenttype",
        "dataschema",
        "subject",
        "data",
        "data_base64",
    }
)


def _is_json(content_type: str | None) -> bool:
    if content_type is None:
        return True
    base = content_type.split(";", 1)[0].strip().lower()
    return base == "application/json" or base.endswith("+json") or base == "text/json"


def _is_text(content_type: str | None) -> bool:
    if _is_json(content_type):
        return True
    base = (content_type or "").split(";", 1)[0].strip().lower()
    return base.startswith("text/") or base == "application/xml" or base.endswith("+xml")


def _json_serializer(obj: Any) -> Any:
    """Serialize bytes extensions and other non-JSON types."""
    if isinstance(obj, bytes):
        return base64.b64encode(obj).decode("ascii")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonFormat:
    """Serialize CloudEvents to the JSON event format.

    ``data`` is embedded as a JSON value when the content type is JSON (or
    absent) and the bytes parse; otherwise UTF-8 text goes into ``data`` for
    textual content types and everything else into ``data_base64``. Empty data
    is omitted.
    """

    media_type = MEDIA_TYPE

    def to_dict(self, event: CloudEvent) -> dict[str, Any]:
        """Return the JSON object for *event* (before encoding)."""
        doc: dict[str, Any] = {}
        for name, value in event.attributes().items():
            doc[name] = format_time(value) if name == "time" else value
        for name, value in event.extensions.items():
            if name in _MEMBERS:
                raise EncodingError(
                    f"Extension '{name}' collides with a JSON format member"
                )
            doc[name] = extension_value(name, value)
        if event.data:
            doc.update(self._data_member(event))
        return doc

    def serialize(self, event: CloudEvent) -> bytes:
        """Encode *event* to compact JSON bytes."""
        doc = self.to_dict(event)
        try:
            return json.dumps(
                doc, default=_json_serializer, separators=(",", ":"), ensure_ascii=False
            ).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(str(e)) from e

    def deserialize(self, raw: bytes) -> CloudEvent:
        """Decode JSON bytes back into a CloudEvent."""
        try:
            doc = json.loads(raw.decode("utf-8"))
            if not isinstance(doc, dict):
                raise ValueError("CloudEvent JSON must be an object")
            if doc.get("specversion") != "1.0":
                raise ValueError(f"Unsupported specversion {doc.get('specversion')!r}")
            content_type = doc.get("datacontenttype")
            if "data_base64" in doc:
                data = base64.b64decode(doc["data_base64"], validate=True)
            elif "data" not in doc:
                data = b""
            elif isinstance(doc["data"], str) and (
                content_type is None or not _is_json(content_type)
            ):
                data = doc["data"].encode("utf-8")
            else:
                data = json.dumps(doc["data"], separators=(",", ":")).encode("utf-8")
            return CloudEvent(
                id=doc["id"],
                source=doc["source"],
                type=doc["type"],
                time=doc.get("time"),
                data_content_type=content_type,
                data_schema=doc.get("dataschema"),
                subject=doc.get("subject"),
                data=data,
                extensions={k: v for k, v in doc.items() if k not in _MEMBERS},
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EncodingError(f"Invalid CloudEvent JSON: {e}") from e

    @staticmethod
    def _data_member(event: CloudEvent) -> dict[str, Any]:
        content_type = event.data_content_type
        if not _is_text(content_type):
            return {"data_base64": base64.b64encode(event.data).decode("ascii")}
        try:
            text = event.data.decode("utf-8")
        except UnicodeDecodeError:
            return {"data_base64": base64.b64encode(event.data).decode("ascii")}
        if _is_json(content_type):
            try:
                return {"data": json.loads(text)}
            except ValueError:
                pass
        return {"data": text}
