"""Message-to-CloudEvent transformation for CQRS/DDD messaging — JSON, XML, Avro and header framing."""

from __future__ import annotations

from .attributes import AttributeKind, AttributeSpec, resolve
from .builder import CloudEventBuilder
from .classification import Classification, ClassificationResult, HeaderClassifier
from .envelope import (
    EXTENSION_FORBIDDEN_NAMES,
    RESERVED_ATTRIBUTES,
    SPEC_VERSION,
    CloudEvent,
    to_data,
)
from .exceptions import (
    AmbiguousAttributeError,
    CloudEventsError,
    ConfigurationError,
    EncodingError,
    EventMappingError,
    MissingAttributeError,
    TransformationError,
    TypeMismatchError,
    UnsupportedFormatError,
)
from .formats import (
    AvroCompactFormat,
    BinaryModeConverter,
    EventFormat,
    FormatRegistry,
    JsonFormat,
    MessageConverter,
    StructuredModeConverter,
    XmlFormat,
)
from .message import Message
from .patterns import HeaderPattern, PatternKind, matches, parse_pattern
from .settings import TransformerSettings
from .transformer import CloudEventTransformer

__all__ = [
    "EXTENSION_FORBIDDEN_NAMES",
    "RESERVED_ATTRIBUTES",
    "SPEC_VERSION",
    "AmbiguousAttributeError",
    "AttributeKind",
    "AttributeSpec",
    "AvroCompactFormat",
    "BinaryModeConverter",
    "Classification",
    "ClassificationResult",
    "CloudEvent",
    "CloudEventBuilder",
    "CloudEventTransformer",
    "CloudEventsError",
    "ConfigurationError",
    "EncodingError",
    "EventFormat",
    "EventMappingError",
    "FormatRegistry",
    "HeaderClassifier",
    "HeaderPattern",
    "JsonFormat",
    "Message",
    "MessageConverter",
    "MissingAttributeError",
    "PatternKind",
    "StructuredModeConverter",
    "TransformationError",
    "TransformerSettings",
    "TypeMismatchError",
    "UnsupportedFormatError",
    "XmlFormat",
    "matches",
    "parse_pattern",
    "resolve",
    "to_data",
]
