"""FormatRegistry — selects an EventFormat by media type."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..exceptions import ConfigurationError, UnsupportedFormatError
from .base import EventFormat

logger = logging.getLogger("cqrs_ddd.cloudevents.formats")


def normalize_media_type(media_type: str) -> str:
    """Lower-case *media_type* and drop any parameters (``; charset=...``)."""
    return media_type.split(";", 1)[0].strip().lower()


def _structured_suffix(media_type: str) -> tuple[str, str] | None:
    """Split ``application/cloudevents+json`` into ``("application", "json")``."""
    top, _, subtype = media_type.partition("/")
    if "+" not in subtype:
        return None
    return top, subtype.rsplit("+", 1)[1]


class FormatRegistry:
    """Registry of event formats keyed by their declared media type.

    Lookup tries an exact (normalized) match first. A plain request such as
    ``application/json`` then falls back to the first registered structured
    type with the same suffix (``application/cloudevents+json``).

    Usage::

        registry = FormatRegistry([JsonFormat(), XmlFormat()])
        registry.get("application/json")  # -> JsonFormat
    """

    def __init__(self, formats: Iterable[EventFormat] | None = None) -> None:
        self._formats: dict[str, EventFormat] = {}
        for event_format in formats or ():
            self.register(event_format)

    def register(self, event_format: EventFormat) -> None:
        """Register *event_format* under its declared media type."""
        if not isinstance(event_format, EventFormat):
            raise ConfigurationError(
                f"{type(event_format).__name__} does not implement EventFormat"
            )
        key = normalize_media_type(event_format.media_type)
        if key in self._formats:
            raise ConfigurationError(f"Media type '{key}' is already registered")
        self._formats[key] = event_format
        logger.info("Registered event format: %s -> %s", key, type(event_format).__name__)

    def get(self, media_type: str) -> EventFormat:
        """Return the format serving *media_type*.

        Raises:
            UnsupportedFormatError: if no registered format matches.
        """
        key = normalize_media_type(media_type)
        if key in self._formats:
            return self._formats[key]
        if "/" in key and "+" not in key:
            top, _, subtype = key.partition("/")
            for declared, event_format in self._formats.items():
                if _structured_suffix(declared) == (top, subtype):
                    return event_format
        raise UnsupportedFormatError(media_type, self.media_types())

    def has(self, media_type: str) -> bool:
        """Return ``True`` if :meth:`get` would succeed for *media_type*."""
        try:
            self.get(media_type)
        except UnsupportedFormatError:
            return False
        return True

    def first(self) -> EventFormat:
        """Return the earliest registered format."""
        if not self._formats:
            raise UnsupportedFormatError("<default>", [])
        return next(iter(self._formats.values()))

    def media_types(self) -> list[str]:
        """Return all registered media types in registration order."""
        return list(self._formats)

    def __len__(self) -> int:
        return len(self._formats)
