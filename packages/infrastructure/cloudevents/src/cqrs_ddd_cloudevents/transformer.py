"""CloudEventTransformer — turns a message into a CloudEvent message."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .builder import CloudEventBuilder
from .classification import Classification, HeaderClassifier
from .envelope import EXTENSION_FORBIDDEN_NAMES, CloudEvent
from .exceptions import ConfigurationError, EncodingError, TransformationError
from .formats.base import EventFormat, MessageConverter
from .formats.registry import FormatRegistry
from .message import Message
from .settings import TransformerSettings

logger = logging.getLogger("cqrs_ddd.cloudevents")


class CloudEventTransformer:
    """Pure, synchronous message-to-CloudEvent transformation.

    Exactly one encoding strategy must be configured: either one or more
    event formats (selected per call by media type) or a single message
    converter that frames the event itself.

    Each :meth:`transform` call:

    1. snapshots the message headers;
    2. classifies them into extensions, excluded and pass-through headers;
    3. resolves the context attributes from the snapshot;
    4. builds the :class:`~.envelope.CloudEvent`;
    5. encodes it, with the output headers being the snapshot minus
       extension and excluded keys.

    Any failure aborts the call with a :class:`TransformationError` whose
    ``__cause__`` is the originating error. The instance holds no mutable
    state and can be shared between threads.

    Usage::

        transformer = CloudEventTransformer(
            TransformerSettings(
                id_pattern="test_i*",
                source_pattern="test_s*",
                type_pattern="test_t*",
                extension_patterns=("custom-header",),
            ),
            formats=[JsonFormat(), XmlFormat()],
        )
        out = transformer.transform(message, media_type="application/json")
    """

    def __init__(
        self,
        settings: TransformerSettings,
        *,
        formats: Iterable[EventFormat] | None = None,
        converter: MessageConverter | None = None,
    ) -> None:
        format_list = list(formats or ())
        if bool(format_list) == (converter is not None):
            raise ConfigurationError(
                "Configure exactly one encoding strategy: event formats or a message converter"
            )
        if converter is not None and not isinstance(converter, MessageConverter):
            raise ConfigurationError(
                f"{type(converter).__name__} does not implement MessageConverter"
            )

        self._settings = settings
        self._registry = FormatRegistry(format_list)
        self._converter = converter
        self._builder = CloudEventBuilder(settings.attribute_specs())
        self._classifier = HeaderClassifier(settings.extension_patterns)

        if settings.default_media_type is not None:
            if converter is not None:
                raise ConfigurationError(
                    "default_media_type only applies when event formats are configured"
                )
            if not self._registry.has(settings.default_media_type):
                raise ConfigurationError(
                    f"No event format registered for default media type "
                    f"'{settings.default_media_type}'"
                )

        self._check_reserved_names()
        self._check_pattern_overlap()

    @property
    def settings(self) -> TransformerSettings:
        return self._settings

    @property
    def media_types(self) -> list[str]:
        return self._registry.media_types()

    def transform(self, message: Message, media_type: str | None = None) -> Message:
        """Transform *message* into its CloudEvent representation.

        Args:
            message: The inbound message; it is never modified.
            media_type: Requested output format. Defaults to the configured
                ``default_media_type`` or the first registered format. Ignored
                when a message converter is configured.

        Raises:
            TransformationError: wrapping the originating failure.
        """
        try:
            return self._transform(message, media_type)
        except Exception as e:
            logger.warning("Failed to transform message into CloudEvent: %s", e)
            raise TransformationError() from e

    def to_cloud_event(self, message: Message) -> CloudEvent:
        """Build the envelope for *message* without encoding it."""
        event, _ = self._build(message.snapshot(), message.payload)
        return event

    # ── Internals ────────────────────────────────────────────────

    def _transform(self, message: Message, media_type: str | None) -> Message:
        snapshot = message.snapshot()
        event, removed = self._build(snapshot, message.payload)
        headers = {k: v for k, v in snapshot.items() if k not in removed}

        if self._converter is not None:
            result = self._converter.convert(event, headers)
            if not isinstance(result, Message):
                raise EncodingError(
                    f"{type(self._converter).__name__} was unable to convert the CloudEvent"
                )
            logger.debug(
                "Converted CloudEvent id=%s type=%s with %s",
                event.id,
                event.type,
                type(self._converter).__name__,
            )
            return result

        event_format = self._select_format(media_type)
        payload = event_format.serialize(event)
        logger.debug(
            "Serialized CloudEvent id=%s type=%s as %s",
            event.id,
            event.type,
            event_format.media_type,
        )
        return Message(payload=payload, headers=headers)

    def _build(
        self, snapshot: Mapping[str, Any], payload: Any
    ) -> tuple[CloudEvent, frozenset[str]]:
        classified = self._classifier.classify(snapshot)
        attributes = self._builder.resolve_attributes(snapshot)
        event = self._builder.build(attributes, payload, classified.extensions)
        return event, classified.removed_keys

    def _select_format(self, media_type: str | None) -> EventFormat:
        requested = media_type or self._settings.default_media_type
        if requested is None:
            return self._registry.first()
        return self._registry.get(requested)

    def _check_reserved_names(self) -> None:
        clashing = [
            name
            for name in sorted(EXTENSION_FORBIDDEN_NAMES)
            if self._classifier.classify_key(name) is Classification.EXTENSION
        ]
        if clashing:
            raise ConfigurationError(
                "Extension patterns would promote reserved attribute or envelope member name(s): "
                + ", ".join(clashing)
            )

    def _check_pattern_overlap(self) -> None:
        for spec in self._builder.specs:
            attribute_pattern = spec.header_pattern
            if attribute_pattern is None:
                continue
            for pattern in self._classifier.patterns:
                if attribute_pattern.overlaps(pattern):
                    raise ConfigurationError(
                        f"Pattern '{attribute_pattern}' for attribute '{spec.name}' "
                        f"overlaps extension pattern '{pattern}'"
                    )
