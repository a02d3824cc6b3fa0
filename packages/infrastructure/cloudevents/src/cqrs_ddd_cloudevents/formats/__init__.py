"""Event formats and message converters for CloudEvents."""

from __future__ import annotations

from .avro_format import AvroCompactFormat
from .base import EventFormat, MessageConverter
from .converters import BinaryModeConverter, StructuredModeConverter
from .json_format import JsonFormat
from .registry import FormatRegistry, normalize_media_type
from .xml_format import XmlFormat

__all__ = [
    "AvroCompactFormat",
    "BinaryModeConverter",
    "EventFormat",
    "FormatRegistry",
    "JsonFormat",
    "MessageConverter",
    "StructuredModeConverter",
    "XmlFormat",
    "normalize_media_type",
]
