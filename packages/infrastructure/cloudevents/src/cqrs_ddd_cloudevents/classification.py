"""HeaderClassifier — sorts message headers into extensions, exclusions and pass-through."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .patterns import HeaderPattern, parse_pattern

logger = logging.getLogger("cqrs_ddd.cloudevents")


class Classification(str, Enum):
    """Per-header outcome of classification."""

    EXTENSION = "extension"
    EXCLUDED = "excluded"
    UNCLASSIFIED = "unclassified"


def _empty_extensions() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ClassificationResult:
    """Extensions (unconverted header values) and the keys to drop from the output."""

    extensions: Mapping[str, Any] = field(default_factory=_empty_extensions)
    excluded_keys: frozenset[str] = frozenset()

    @property
    def removed_keys(self) -> frozenset[str]:
        """Every key that must not be passed through to the output message."""
        return self.excluded_keys | frozenset(self.extensions)


class HeaderClassifier:
    """Classifies header keys against an ordered list of pattern tokens.

    The first token (left to right) whose body matches a key decides its
    outcome: a negated token excludes it, any other token promotes it to an
    extension. Keys no token matches are left unclassified. An empty or
    ``None`` pattern list disables extension mapping entirely.

    Usage::

        classifier = HeaderClassifier(["trace-id", "!trace-id-internal"])
        classifier.classify_key("trace-id")           # EXTENSION
        classifier.classify_key("trace-id-internal")  # EXCLUDED
    """

    def __init__(self, patterns: Iterable[str] | None = None) -> None:
        self._patterns: tuple[HeaderPattern, ...] = tuple(
            parse_pattern(token) for token in (patterns or ())
        )

    @property
    def patterns(self) -> tuple[HeaderPattern, ...]:
        return self._patterns

    @property
    def enabled(self) -> bool:
        return bool(self._patterns)

    def classify_key(self, key: str) -> Classification:
        """Run the first-decisive-match reduction for a single key."""
        state = Classification.UNCLASSIFIED
        for pattern in self._patterns:
            if state is not Classification.UNCLASSIFIED:
                break
            if pattern.matches(key):
                state = (
                    Classification.EXCLUDED
                    if pattern.negated
                    else Classification.EXTENSION
                )
        return state

    def classify(self, headers: Mapping[str, Any]) -> ClassificationResult:
        """Classify every header in *headers* without modifying it."""
        if not self._patterns:
            return ClassificationResult()

        extensions: dict[str, Any] = {}
        excluded: set[str] = set()
        for key, value in headers.items():
            outcome = self.classify_key(key)
            if outcome is Classification.EXTENSION:
                extensions[key] = value
            elif outcome is Classification.EXCLUDED:
                excluded.add(key)

        logger.debug(
            "Classified %d headers: %d extension(s), %d excluded",
            len(headers),
            len(extensions),
            len(excluded),
        )
        return ClassificationResult(
            extensions=MappingProxyType(extensions),
            excluded_keys=frozenset(excluded),
        )
