"""CloudEvent — immutable event envelope produced from a message."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SPEC_VERSION = "1.0"

#: Context attribute names an extension may never use.
RESERVED_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "id",
        "source",
        "type",
        "time",
        "datacontenttype",
        "dataschema",
        "subject",
    }
)

#: Names an extension may never use: the context attributes plus the envelope
#: members every event format writes itself.
EXTENSION_FORBIDDEN_NAMES: frozenset[str] = RESERVED_ATTRIBUTES | {
    "specversion",
    "data",
    "data_base64",
}


class CloudEvent(BaseModel):
    """Canonical CloudEvents 1.0 envelope.

    Carries the required context attributes, the optional ones, the event data
    as raw bytes and the open extension map.
    """

    model_config = ConfigDict(frozen=True)

    specversion: str = SPEC_VERSION
    id: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1, description="URI-reference")
    type: str = Field(..., min_length=1)
    time: datetime | None = None
    data_content_type: str | None = None
    data_schema: str | None = None
    subject: str | None = None
    data: bytes = b""
    extensions: dict[str, Any] = Field(default_factory=dict)

    def attributes(self) -> dict[str, Any]:
        """Return the populated context attributes under their CloudEvents names."""
        attrs: dict[str, Any] = {
            "specversion": self.specversion,
            "id": self.id,
            "source": self.source,
            "type": self.type,
        }
        optional = {
            "time": self.time,
            "datacontenttype": self.data_content_type,
            "dataschema": self.data_schema,
            "subject": self.subject,
        }
        attrs.update({k: v for k, v in optional.items() if v is not None})
        return attrs


def to_data(payload: Any) -> bytes:
    """Coerce a message payload into event data.

    ``bytes``-like payloads pass through, ``str`` is UTF-8 encoded and
    ``None`` becomes empty data. Anything else is rendered with ``str()`` and
    UTF-8 encoded: this is best-effort and does not round-trip, so callers
    that need structured data should serialize it before transforming.
    """
    if isinstance(payload, bytes):
        return payload
    if isinstance(payload, (bytearray, memoryview)):
        return bytes(payload)
    if payload is None:
        return b""
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return str(payload).encode("utf-8")
