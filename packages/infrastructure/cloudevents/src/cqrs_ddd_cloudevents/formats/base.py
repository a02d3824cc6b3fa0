"""Encoding ports — event formats and message converters."""

from __future__ import annotations

import base64
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pydantic import AnyUrl

from ..envelope import EXTENSION_FORBIDDEN_NAMES
from ..exceptions import EncodingError

if TYPE_CHECKING:
    from ..envelope import CloudEvent
    from ..message import Message

ExtensionValue = bool | int | str | bytes


@runtime_checkable
class EventFormat(Protocol):
    """Port for rendering a CloudEvent into transport bytes.

    Implementations declare the media type they produce and are registered
    with a :class:`~.registry.FormatRegistry` under it.
    """

    @property
    def media_type(self) -> str:
        """Media type of the serialized output, e.g. ``application/cloudevents+json``."""
        ...

    def serialize(self, event: CloudEvent) -> bytes:
        """Encode *event*.

        Raises:
            EncodingError: if the event cannot be represented in this format.
        """
        ...


@runtime_checkable
class MessageConverter(Protocol):
    """Port for transports that frame CloudEvent attributes themselves.

    The converter receives the envelope and the already-filtered headers and
    owns the shape of the resulting message.
    """

    def convert(self, event: CloudEvent, headers: Mapping[str, Any]) -> Message:
        """Build the outgoing message for *event*."""
        ...


def format_time(value: datetime) -> str:
    """Render a timestamp as RFC 3339, using ``Z`` for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    rendered = value.isoformat()
    if rendered.endswith("+00:00"):
        rendered = rendered[: -len("+00:00")] + "Z"
    return rendered


def extension_value(name: str, value: Any) -> ExtensionValue:
    """Map an extension value onto the CloudEvents type system.

    Booleans, integers, strings and bytes are kept; timestamps, URIs and UUIDs
    become their canonical strings. Anything else is rejected, as is a name
    that collides with a context attribute or an envelope member.
    """
    if name in EXTENSION_FORBIDDEN_NAMES:
        raise EncodingError(f"Extension '{name}' collides with an envelope member")
    if isinstance(value, (bool, int, str, bytes)):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, (AnyUrl, uuid.UUID)):
        return str(value)
    raise EncodingError(
        f"Extension '{name}' has unsupported type {type(value).__name__}"
    )


def extension_text(name: str, value: Any) -> str:
    """String form of an extension value, as used in header-based framing."""
    canonical = extension_value(name, value)
    if isinstance(canonical, bool):
        return "true" if canonical else "false"
    if isinstance(canonical, bytes):
        return base64.b64encode(canonical).decode("ascii")
    return str(canonical)
