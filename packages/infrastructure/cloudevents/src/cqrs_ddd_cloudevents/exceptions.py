"""CloudEvent mapping exceptions for cqrs-ddd-cloudevents."""

from __future__ import annotations


class CloudEventsError(Exception):
    """Root exception for the cloudevents package."""


class ConfigurationError(CloudEventsError):
    """Raised at construction time when the transformer configuration is invalid.

    Covers invalid pattern syntax, reserved-name collisions, overlapping
    attribute/extension patterns and an invalid encoding strategy setup.
    """


class EventMappingError(CloudEventsError):
    """Base class for all per-message mapping failures."""


class MissingAttributeError(EventMappingError):
    """Raised when a mandatory attribute has no matching header and no default."""

    def __init__(self, attribute: str, pattern: str | None) -> None:
        self.attribute = attribute
        self.pattern = pattern
        super().__init__(
            f"No header found for CloudEvent attribute '{attribute}' "
            f"(pattern {pattern!r}) and no default configured"
        )


class AmbiguousAttributeError(EventMappingError):
    """Raised when two or more headers match a single-valued attribute pattern."""

    def __init__(self, attribute: str, pattern: str, keys: list[str]) -> None:
        self.attribute = attribute
        self.pattern = pattern
        self.keys = keys
        super().__init__(
            f"Multiple headers match the '{pattern}' pattern for "
            f"attribute '{attribute}': {', '.join(keys)}"
        )


class TypeMismatchError(EventMappingError):
    """Raised when a header value cannot be converted to the attribute's type."""

    def __init__(
        self,
        attribute: str,
        value_type: str,
        expected: str,
        reason: str | None = None,
    ) -> None:
        self.attribute = attribute
        self.value_type = value_type
        self.expected = expected
        msg = (
            f"CloudEvent attribute '{attribute}' must be {expected} "
            f"but header contains: {value_type}"
        )
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class UnsupportedFormatError(EventMappingError):
    """Raised when no encoder is registered for the requested media type."""

    def __init__(self, media_type: str, available: list[str]) -> None:
        self.media_type = media_type
        self.available = available
        super().__init__(
            f"No event format registered for media type '{media_type}' "
            f"(available: {', '.join(available) or 'none'})"
        )


class EncodingError(EventMappingError):
    """Raised when an encoder fails on a structurally valid envelope."""


class TransformationError(CloudEventsError):
    """Unified per-message failure raised by the transformer.

    The originating error is always available as ``__cause__``.
    """

    def __init__(self, message: str = "failed to transform message") -> None:
        super().__init__(message)
