"""Message — transport-agnostic payload plus read-only headers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _freeze(headers: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class Message:
    """A message entering or leaving the transformer.

    ``headers`` is copied on construction and exposed read-only, so neither
    the caller's mapping nor the message can be changed afterwards.
    """

    payload: Any
    headers: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze(self.headers))

    def snapshot(self) -> dict[str, Any]:
        """Return a detached copy of the headers."""
        return dict(self.headers)
