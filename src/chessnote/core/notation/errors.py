"""Exceptions raised by the notation parsers."""

from __future__ import annotations


class NotationError(ValueError):
    """Base class for notation input that cannot be parsed."""


class PgnSyntaxError(NotationError):
    """A PGN game could not be parsed.

    Args:
        reason: What went wrong.
        offset: Character offset into the decoded text where parsing stopped.
    """

    def __init__(self, reason: str, offset: int) -> None:
        super().__init__(f"{reason} (at offset {offset})")
        self.reason = reason
        self.offset = offset
