"""Header patterns — wildcard matching of header keys.

Supported token bodies::

    exact-key       literal match
    prefix*         key starts with ``prefix``
    *suffix         key ends with ``suffix``
    *fragment*      key contains ``fragment``
    *               matches every key

A token may be prefixed with ``!`` to mark it as a negation. Negation only
means something to the header classifier; attribute patterns reject it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from .exceptions import ConfigurationError

NEGATION_MARKER = "!"
WILDCARD = "*"


class PatternKind(str, Enum):
    """Shape of a pattern body."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    CONTAINS = "contains"
    ANY = "any"


@dataclass(frozen=True)
class HeaderPattern:
    """A parsed header pattern token.

    ``fragment`` is the body with its wildcards stripped.
    """

    token: str
    kind: PatternKind
    fragment: str
    negated: bool = False

    def matches(self, key: str) -> bool:
        """Return ``True`` if *key* satisfies the body (negation is ignored)."""
        if self.kind is PatternKind.ANY:
            return True
        if self.kind is PatternKind.EXACT:
            return key == self.fragment
        if self.kind is PatternKind.PREFIX:
            return key.startswith(self.fragment)
        if self.kind is PatternKind.SUFFIX:
            return key.endswith(self.fragment)
        return self.fragment in key

    def overlaps(self, other: HeaderPattern) -> bool:
        """Return ``True`` if some key could satisfy both bodies."""
        if self.kind is PatternKind.EXACT:
            return other.matches(self.fragment)
        if other.kind is PatternKind.EXACT:
            return self.matches(other.fragment)
        if self.kind is PatternKind.PREFIX and other.kind is PatternKind.PREFIX:
            return self.fragment.startswith(other.fragment) or other.fragment.startswith(
                self.fragment
            )
        if self.kind is PatternKind.SUFFIX and other.kind is PatternKind.SUFFIX:
            return self.fragment.endswith(other.fragment) or other.fragment.endswith(
                self.fragment
            )
        # Any remaining combination (any/contains/prefix+suffix) can always
        # be satisfied by concatenating the two fragments.
        return True

    def __str__(self) -> str:
        return self.token


@lru_cache(maxsize=1024)
def parse_pattern(token: str, *, allow_negation: bool = True) -> HeaderPattern:
    """Parse *token* into a :class:`HeaderPattern`.

    Raises:
        ConfigurationError: if the token is empty, negated where negation is
            not allowed, or uses a wildcard anywhere but at its ends.
    """
    if not isinstance(token, str):
        raise ConfigurationError(
            f"Header pattern must be a string, got {type(token).__name__}"
        )

    negated = token.startswith(NEGATION_MARKER)
    if negated and not allow_negation:
        raise ConfigurationError(f"Negated pattern '{token}' is not allowed here")
    body = token[len(NEGATION_MARKER) :] if negated else token

    if not body:
        raise ConfigurationError(f"Header pattern '{token}' has an empty body")
    if body == WILDCARD:
        return HeaderPattern(token=token, kind=PatternKind.ANY, fragment="", negated=negated)

    leading = body.startswith(WILDCARD)
    trailing = body.endswith(WILDCARD)
    fragment = body[1 if leading else 0 : len(body) - 1 if trailing else len(body)]
    if not fragment or WILDCARD in fragment:
        raise ConfigurationError(
            f"Header pattern '{token}' may only use '*' at its start or end"
        )
    if fragment.startswith(NEGATION_MARKER):
        raise ConfigurationError(f"Header pattern '{token}' has a misplaced '!'")

    if leading and trailing:
        kind = PatternKind.CONTAINS
    elif leading:
        kind = PatternKind.SUFFIX
    elif trailing:
        kind = PatternKind.PREFIX
    else:
        kind = PatternKind.EXACT
    return HeaderPattern(token=token, kind=kind, fragment=fragment, negated=negated)


def matches(key: str, token: str) -> bool:
    """Return ``True`` if header *key* satisfies the (non-negated) *token*."""
    return parse_pattern(token, allow_negation=False).matches(key)
