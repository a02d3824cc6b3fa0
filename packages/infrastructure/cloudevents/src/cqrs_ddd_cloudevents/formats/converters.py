"""Message converters — CloudEvents binary and structured content modes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..message import Message
from .base import EventFormat, extension_text, format_time

if TYPE_CHECKING:
    from ..envelope import CloudEvent

HEADER_PREFIX = "ce-"
CONTENT_TYPE_HEADER = "content-type"


class BinaryModeConverter:
    """Frames CloudEvent attributes as ``ce-`` prefixed headers.

    The message payload is the event data unchanged. ``datacontenttype``
    travels as the ``content-type`` header and every extension as
    ``ce-<name>`` in its string form.
    """

    def __init__(self, prefix: str = HEADER_PREFIX) -> None:
        self._prefix = prefix

    def convert(self, event: CloudEvent, headers: Mapping[str, Any]) -> Message:
        out: dict[str, Any] = dict(headers)
        for name, value in event.attributes().items():
            if name == "datacontenttype":
                out[CONTENT_TYPE_HEADER] = value
            elif name == "time":
                out[self._prefix + name] = format_time(value)
            else:
                out[self._prefix + name] = value
        for name, value in event.extensions.items():
            out[self._prefix + name] = extension_text(name, value)
        return Message(payload=event.data, headers=out)


class StructuredModeConverter:
    """Serializes the whole event into the payload using an :class:`EventFormat`.

    The filtered headers pass through and ``content-type`` is set to the
    format's media type.
    """

    def __init__(self, event_format: EventFormat) -> None:
        self._format = event_format

    @property
    def event_format(self) -> EventFormat:
        return self._format

    def convert(self, event: CloudEvent, headers: Mapping[str, Any]) -> Message:
        out: dict[str, Any] = dict(headers)
        out[CONTENT_TYPE_HEADER] = self._format.media_type
        return Message(payload=self._format.serialize(event), headers=out)
