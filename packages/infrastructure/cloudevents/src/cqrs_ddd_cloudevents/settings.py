"""TransformerSettings — declarative configuration of the CloudEvent transformer."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, ValidationError

from .attributes import AttributeSpec
from .builder import ATTRIBUTE_KINDS, MANDATORY_ATTRIBUTES
from .exceptions import ConfigurationError

#: Message header the data content type is read from by default.
CONTENT_TYPE_HEADER = "contentType"


class TransformerSettings(BaseModel):
    """Header patterns, defaults and extension patterns for one transformer.

    Every attribute has a ``*_pattern`` (a header pattern, see
    :mod:`~.patterns`) and a ``*_default`` used when no header matches.
    ``id``, ``source`` and ``type`` need at least one of the two.
    ``datacontenttype`` is read from the ``contentType`` header unless
    ``data_content_type_pattern`` says otherwise (``None`` disables it).

    Extension header values must fit the CloudEvents type system: ``bool``,
    ``int``, ``str`` and ``bytes`` are kept, timestamps, URIs and UUIDs are
    written as strings. Any other value (``float``, ``None``, containers)
    makes every encoder fail with :class:`~.exceptions.EncodingError`, so
    exclude such headers with a ``!`` token or stringify them upstream.

    Usage::

        settings = TransformerSettings(
            id_pattern="test_i*",
            source_pattern="test_s*",
            type_pattern="test_t*",
            extension_patterns=("trace-*", "!trace-internal"),
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id_pattern: str | None = None
    source_pattern: str | None = None
    type_pattern: str | None = None
    time_pattern: str | None = None
    data_content_type_pattern: str | None = CONTENT_TYPE_HEADER
    data_schema_pattern: str | None = None
    subject_pattern: str | None = None

    id_default: str | None = None
    source_default: str | AnyUrl | None = None
    type_default: str | None = None
    time_default: datetime | str | None = None
    data_content_type_default: str | None = None
    data_schema_default: str | AnyUrl | None = None
    subject_default: str | None = None

    extension_patterns: tuple[str, ...] | None = Field(
        default=None,
        description=(
            "Ordered extension patterns; '!' marks exclusion. None disables mapping. "
            "Matched values must be bool, int, str, bytes, datetime, URI or UUID."
        ),
    )
    default_media_type: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransformerSettings:
        """Validate a plain mapping, e.g. a section of application config."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid transformer settings: {e}") from e

    def attribute_specs(self) -> list[AttributeSpec]:
        """Build one :class:`AttributeSpec` per CloudEvent attribute.

        Raises:
            ConfigurationError: on bad pattern syntax, an invalid default, or a
                mandatory attribute with neither pattern nor default.
        """
        specs: list[AttributeSpec] = []
        for name, kind in ATTRIBUTE_KINDS.items():
            field = _FIELD_NAMES[name]
            specs.append(
                AttributeSpec(
                    name=name,
                    kind=kind,
                    pattern=getattr(self, f"{field}_pattern"),
                    default=getattr(self, f"{field}_default"),
                    required=name in MANDATORY_ATTRIBUTES,
                )
            )
        return specs


_FIELD_NAMES = {
    "id": "id",
    "source": "source",
    "type": "type",
    "time": "time",
    "datacontenttype": "data_content_type",
    "dataschema": "data_schema",
    "subject": "subject",
}
