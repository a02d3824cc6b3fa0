"""CloudEventBuilder — assembles a CloudEvent from resolved attributes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from .attributes import AttributeKind, AttributeSpec
from .envelope import EXTENSION_FORBIDDEN_NAMES, CloudEvent, to_data
from .exceptions import ConfigurationError, EventMappingError

MANDATORY_ATTRIBUTES = ("id", "source", "type")
OPTIONAL_ATTRIBUTES = ("time", "datacontenttype", "dataschema", "subject")

ATTRIBUTE_KINDS: dict[str, AttributeKind] = {
    "id": AttributeKind.STRING,
    "source": AttributeKind.URI,
    "type": AttributeKind.STRING,
    "time": AttributeKind.TIMESTAMP,
    "datacontenttype": AttributeKind.STRING,
    "dataschema": AttributeKind.URI,
    "subject": AttributeKind.STRING,
}


class CloudEventBuilder:
    """Resolves context attributes from headers and builds the envelope.

    Usage::

        builder = CloudEventBuilder([
            AttributeSpec("id", AttributeKind.STRING, pattern="test_i*", required=True),
            AttributeSpec("source", AttributeKind.URI, pattern="test_s*", required=True),
            AttributeSpec("type", AttributeKind.STRING, default="demo", required=True),
        ])
        attributes = builder.resolve_attributes(headers)
        event = builder.build(attributes, payload, extensions)
    """

    def __init__(self, specs: Iterable[AttributeSpec]) -> None:
        self._specs: dict[str, AttributeSpec] = {}
        for spec in specs:
            if spec.name not in ATTRIBUTE_KINDS:
                raise ConfigurationError(f"Unknown CloudEvent attribute '{spec.name}'")
            if spec.kind is not ATTRIBUTE_KINDS[spec.name]:
                raise ConfigurationError(
                    f"Attribute '{spec.name}' must be of kind "
                    f"{ATTRIBUTE_KINDS[spec.name].value}, got {spec.kind.value}"
                )
            self._specs[spec.name] = spec
        missing = [
            name
            for name in MANDATORY_ATTRIBUTES
            if name not in self._specs or not self._specs[name].required
        ]
        if missing:
            raise ConfigurationError(
                f"Mandatory attribute(s) not configured as required: {', '.join(missing)}"
            )

    @property
    def specs(self) -> tuple[AttributeSpec, ...]:
        return tuple(self._specs.values())

    def resolve_attributes(self, headers: Mapping[str, Any]) -> dict[str, Any]:
        """Resolve every configured attribute; unresolved optional ones are omitted."""
        resolved: dict[str, Any] = {}
        for name, spec in self._specs.items():
            value = spec.resolve(headers)
            if value is not None:
                resolved[name] = value
        return resolved

    def build(
        self,
        attributes: Mapping[str, Any],
        payload: Any,
        extensions: Mapping[str, Any] | None = None,
    ) -> CloudEvent:
        """Assemble the envelope; see :func:`~.envelope.to_data` for payload rules."""
        extensions = dict(extensions or {})
        clashing = sorted(EXTENSION_FORBIDDEN_NAMES.intersection(extensions))
        if clashing:
            raise ConfigurationError(
                f"Extension name(s) collide with context attributes or envelope members: {', '.join(clashing)}"
            )
        try:
            return CloudEvent(
                id=attributes["id"],
                source=attributes["source"],
                type=attributes["type"],
                time=attributes.get("time"),
                data_content_type=attributes.get("datacontenttype"),
                data_schema=attributes.get("dataschema"),
                subject=attributes.get("subject"),
                data=to_data(payload),
                extensions=extensions,
            )
        except ValidationError as e:
            raise EventMappingError(f"Invalid CloudEvent attributes: {e}") from e
