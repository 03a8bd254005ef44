"""PGN data models: tags, movetext nodes and games."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import TypeAlias

from chessnote.core.enums import GameResult
from chessnote.core.notation.san import San


class TagKey(StrEnum):
    """The seven-tag roster every PGN game is expected to carry, in order."""

    EVENT = "Event"
    SITE = "Site"
    DATE = "Date"
    ROUND = "Round"
    WHITE = "White"
    BLACK = "Black"
    RESULT = "Result"


def tag_key(name: str) -> TagKey | str:
    """Promote a roster tag name to :class:`TagKey`; other names stay plain."""
    try:
        return TagKey(name)
    except ValueError:
        return name


@dataclass(frozen=True, slots=True)
class Tag:
    """One ``[Key "Value"]`` pair.

    ``value`` is the text between the quotes exactly as written, escapes
    included, so a tag always writes back the way it was read.
    """

    key: TagKey | str
    value: str

    @property
    def is_roster(self) -> bool:
        return isinstance(self.key, TagKey)

    @property
    def text(self) -> str:
        """The value with ``\\"`` and ``\\\\`` escapes resolved."""
        out: list[str] = []
        chars = iter(self.value)
        for ch in chars:
            if ch == "\\":
                ch = next(chars, "\\")
            out.append(ch)
        return "".join(out)


# ── Movetext nodes ───────────────────────────────────────────────────────────


class MoveNumberStyle(IntEnum):
    """How many periods followed a move number."""

    NONE = 0
    ONE = 1
    THREE = 3
    OTHER = -1

    @classmethod
    def from_count(cls, periods: int) -> MoveNumberStyle:
        if periods in (0, 1, 3):
            return cls(periods)
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class Comment:
    """``{...}`` text (or a ``;`` rest-of-line comment), verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class EscapeComment:
    """A ``%`` escape line without the leading ``%``."""

    text: str


@dataclass(frozen=True, slots=True)
class Nag:
    """Numeric annotation glyph ``$n``."""

    glyph: int


@dataclass(frozen=True, slots=True)
class MoveNumber:
    number: int
    style: MoveNumberStyle = MoveNumberStyle.ONE


@dataclass(frozen=True, slots=True)
class MoveNode:
    san: San


@dataclass(frozen=True, slots=True)
class StartVariation:
    pass


@dataclass(frozen=True, slots=True)
class EndVariation:
    pass


Node: TypeAlias = (
    Comment | EscapeComment | Nag | MoveNumber | MoveNode | StartVariation | EndVariation
)


# ── Game ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Game:
    """One parsed PGN game.

    Variations stay flat: ``StartVariation``/``EndVariation`` markers sit in
    ``nodes`` where the parentheses were.
    """

    tags: tuple[Tag, ...]
    nodes: tuple[Node, ...]
    result: GameResult

    def tag(self, key: str) -> str | None:
        """Raw value of the first tag named *key*, if any."""
        for tag in self.tags:
            if tag.key == key:
                return tag.value
        return None

    @property
    def headers(self) -> dict[str, str]:
        """Tags as a plain dict; on duplicate keys the first one wins."""
        headers: dict[str, str] = {}
        for tag in self.tags:
            headers.setdefault(str(tag.key), tag.text)
        return headers

    def mainline(self) -> Iterator[San]:
        """SAN values outside any variation, in order."""
        depth = 0
        for node in self.nodes:
            if isinstance(node, StartVariation):
                depth += 1
            elif isinstance(node, EndVariation):
                depth -= 1
            elif depth == 0 and isinstance(node, MoveNode):
                yield node.san


@dataclass(slots=True, frozen=True)
class PgnParseOptions:
    """Knobs for reading PGN text.

    Args:
        skip_invalid_games: Log and skip a game that fails to parse instead
            of raising; reading resumes at the next line starting with ``[``.
        result_from_tag: Accept a game whose movetext lacks a result token
            and take the result from its ``Result`` tag.
        max_variation_depth: Reject variations nested deeper than this.
    """

    skip_invalid_games: bool = False
    result_from_tag: bool = False
    max_variation_depth: int | None = None
