"""
ETFI Text Composition

The host turns localization tags (LOC_*) into display text. A composer that
cannot resolve a tag hands the tag back unchanged; callers treat that as
"composition failed" and fall back to the raw tag.
"""
from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

_PLACEHOLDER = re.compile(r"\{(\d+)(?:_[A-Za-z]+)?\}")


@runtime_checkable
class TextComposer(Protocol):
    """Protocol for the host localization service."""

    def compose(self, identifier: str, *args: Any) -> str:
        ...


class LocaleTable:
    """
    Dictionary-backed TextComposer.

    Positional placeholders use the host convention, 1-based:
    "{1}" or "{1_Name}" is replaced by the first argument.
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        self._entries: dict[str, str] = dict(entries or {})

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def compose(self, identifier: str, *args: Any) -> str:
        text = self._entries.get(identifier)
        if text is None:
            return identifier
        if not args:
            return text

        def substitute(match: re.Match) -> str:
            index = int(match.group(1)) - 1
            if 0 <= index < len(args):
                return str(args[index])
            return match.group(0)

        return _PLACEHOLDER.sub(substitute, text)


def compose_text(composer: Optional[TextComposer], identifier: Optional[str]) -> Optional[str]:
    """
    Compose an identifier, returning None when composition fails.

    Failure means: no composer, an empty identifier, or a composer that
    returned the identifier unchanged (or nothing at all).
    """
    if composer is None or not identifier:
        return None
    composed = composer.compose(identifier)
    if composed and composed != identifier:
        return composed
    return None


def compose_or_raw(composer: Optional[TextComposer], identifier: str) -> str:
    """Composed text when available, else the identifier itself."""
    return compose_text(composer, identifier) or identifier
