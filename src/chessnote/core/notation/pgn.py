"""PGN reading and writing.

The reader is a small recursive-descent parser over a cursor into the
decoded text.  Variations are not recursed into: parentheses become
``StartVariation``/``EndVariation`` nodes and only a depth counter is kept,
so nesting depth costs nothing but an integer.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from typing import Final

from chessnote.core.enums import GameResult
from chessnote.core.notation.bom import UTF8_BOM, strip_utf8_bom
from chessnote.core.notation.errors import PgnSyntaxError
from chessnote.core.notation.models import (
    Comment,
    EndVariation,
    EscapeComment,
    Game,
    MoveNode,
    MoveNumber,
    MoveNumberStyle,
    Nag,
    Node,
    PgnParseOptions,
    StartVariation,
    Tag,
    TagKey,
    tag_key,
)
from chessnote.core.notation.san import parse_san, san_to_str

_LOGGER = logging.getLogger(__name__)

_SYMBOL_CHARS: Final = r"A-Za-z0-9_#=:+\-"
_TAG_NAME_RE = re.compile(rf"[A-Za-z0-9][{_SYMBOL_CHARS}]*")
_TAG_VALUE_RE = re.compile(r'[^"\\]*(?:\\.[^"\\]*)*', re.DOTALL)
_RESULT_RE = re.compile(rf"(1-0|0-1|1/2-1/2|\*)(?![{_SYMBOL_CHARS}/])")
_MOVE_NUMBER_RE = re.compile(rf"(\d+)(?:(\.+)|(?![{_SYMBOL_CHARS}]))")
_NAG_RE = re.compile(r"\$(\d+)")
_SAN_TOKEN_RE = re.compile(rf"(?:--[+#]?|[A-Za-z0-9][{_SYMBOL_CHARS}]*)[!?]*")

_RESULT_TOKENS: dict[str, GameResult] = {
    "1-0": GameResult.WHITE_WINS,
    "0-1": GameResult.BLACK_WINS,
    "1/2-1/2": GameResult.DRAW,
    "*": GameResult.OTHER,
}
_PERIODS: dict[MoveNumberStyle, str] = {
    MoveNumberStyle.NONE: "",
    MoveNumberStyle.ONE: ".",
    MoveNumberStyle.THREE: "...",
    MoveNumberStyle.OTHER: "..",
}


def pgn_result_token(result: GameResult) -> str:
    """Convert :class:`GameResult` to a PGN result token."""
    if result == GameResult.WHITE_WINS:
        return "1-0"
    if result == GameResult.BLACK_WINS:
        return "0-1"
    if result == GameResult.DRAW:
        return "1/2-1/2"
    return "*"


def game_result_from_pgn(token: str) -> GameResult:
    """Convert PGN result token to :class:`GameResult`; unknown text is OTHER."""
    return _RESULT_TOKENS.get(token, GameResult.OTHER)


# ── Reader ───────────────────────────────────────────────────────────────────


class _PgnReader:
    """Cursor over decoded PGN text."""

    __slots__ = ("_text", "_end", "pos", "_options")

    def __init__(self, text: str, options: PgnParseOptions, pos: int = 0) -> None:
        self._text = text
        self._end = len(text)
        self.pos = pos
        self._options = options

    @property
    def at_end(self) -> bool:
        return self.pos >= self._end

    def _fail(self, reason: str, offset: int | None = None) -> PgnSyntaxError:
        return PgnSyntaxError(reason, self.pos if offset is None else offset)

    def _at_line_start(self) -> bool:
        pos = self.pos
        if pos == 0 or self._text[pos - 1] in "\r\n":
            return True
        # A byte-order mark does not occupy a column.
        return pos == 1 and self._text[0] == UTF8_BOM

    def skip_blank(self, escapes: list[Node] | None = None) -> None:
        """Skip whitespace and ``%`` escape lines.

        Escape lines are collected into *escapes* when given, dropped otherwise.
        """
        text = self._text
        while self.pos < self._end:
            ch = text[self.pos]
            if ch.isspace():
                self.pos += 1
            elif ch == "%" and self._at_line_start():
                eol = text.find("\n", self.pos)
                if eol < 0:
                    eol = self._end
                if escapes is not None:
                    escapes.append(EscapeComment(text[self.pos + 1 : eol].rstrip("\r")))
                self.pos = eol
            else:
                return

    def only_blank_left(self) -> bool:
        """True when nothing but whitespace and escape lines remain."""
        pos = self.pos
        self.skip_blank()
        done = self.at_end
        self.pos = pos
        return done

    # -- Tags -----------------------------------------------------------------

    def _skip_spaces(self) -> None:
        text = self._text
        while self.pos < self._end and text[self.pos].isspace():
            self.pos += 1

    def _expect(self, ch: str, reason: str) -> None:
        if self.pos >= self._end or self._text[self.pos] != ch:
            raise self._fail(reason)
        self.pos += 1

    def read_tag(self) -> Tag:
        self._expect("[", "Malformed tag: expected '['")
        self._skip_spaces()
        name = _TAG_NAME_RE.match(self._text, self.pos)
        if name is None:
            raise self._fail("Malformed tag: expected tag name")
        self.pos = name.end()
        self._skip_spaces()

        opening = self.pos
        self._expect('"', "Malformed tag: expected '\"' before value")
        value = _TAG_VALUE_RE.match(self._text, self.pos)
        assert value is not None  # the pattern accepts the empty string
        self.pos = value.end()
        if self.pos >= self._end:
            raise self._fail("Unterminated tag value", opening)
        self.pos += 1

        self._skip_spaces()
        self._expect("]", "Malformed tag: expected ']'")
        return Tag(tag_key(name.group()), value.group())

    def read_tags(self, leading: list[Node]) -> list[Tag]:
        """Read the tag section; escape lines after the last tag go to *leading*."""
        tags: list[Tag] = []
        while True:
            leading.clear()
            self.skip_blank(leading)
            if self.pos >= self._end or self._text[self.pos] != "[":
                return tags
            tags.append(self.read_tag())

    # -- Movetext -------------------------------------------------------------

    def _missing_result(self, tags: list[Tag], depth: int) -> GameResult:
        if depth:
            raise self._fail("Unterminated variation")
        if self._options.result_from_tag:
            for tag in tags:
                if tag.key == TagKey.RESULT:
                    return game_result_from_pgn(tag.value)
        raise self._fail("Missing game result")

    def read_movetext(self, tags: list[Tag], nodes: list[Node]) -> GameResult:
        """Append movetext nodes to *nodes* and return the game result."""
        text = self._text
        max_depth = self._options.max_variation_depth
        depth = 0
        while True:
            self.skip_blank(nodes)
            if self.pos >= self._end:
                return self._missing_result(tags, depth)

            ch = text[self.pos]
            if ch == "{":
                close = text.find("}", self.pos + 1)
                if close < 0:
                    raise self._fail("Unterminated comment")
                nodes.append(Comment(text[self.pos + 1 : close]))
                self.pos = close + 1
            elif ch == ";":
                eol = text.find("\n", self.pos)
                if eol < 0:
                    eol = self._end
                nodes.append(Comment(text[self.pos + 1 : eol].rstrip("\r")))
                self.pos = eol
            elif ch == "(":
                depth += 1
                if max_depth is not None and depth > max_depth:
                    raise self._fail(f"Variation nesting deeper than {max_depth}")
                nodes.append(StartVariation())
                self.pos += 1
            elif ch == ")":
                if depth == 0:
                    raise self._fail("Unbalanced ')'")
                depth -= 1
                nodes.append(EndVariation())
                self.pos += 1
            elif ch == "$":
                nag = _NAG_RE.match(text, self.pos)
                if nag is None:
                    raise self._fail("Malformed NAG")
                nodes.append(Nag(int(nag.group(1))))
                self.pos = nag.end()
            elif ch == "[":
                # Next game's tags: this one never wrote a result.
                return self._missing_result(tags, depth)
            elif ch == ".":
                self.pos += 1
            elif (result := _RESULT_RE.match(text, self.pos)) is not None:
                if depth:
                    raise self._fail("Game result inside a variation")
                self.pos = result.end()
                return game_result_from_pgn(result.group(1))
            elif (number := _MOVE_NUMBER_RE.match(text, self.pos)) is not None:
                periods = len(number.group(2) or "")
                nodes.append(
                    MoveNumber(int(number.group(1)), MoveNumberStyle.from_count(periods))
                )
                self.pos = number.end()
            elif (token := _SAN_TOKEN_RE.match(text, self.pos)) is not None:
                nodes.append(MoveNode(parse_san(token.group())))
                self.pos = token.end()
            else:
                raise self._fail(f"Unexpected character {ch!r} in movetext")

    def read_game(self) -> Game:
        leading: list[Node] = []
        tags = self.read_tags(leading)
        nodes = leading
        result = self.read_movetext(tags, nodes)
        game = Game(tuple(tags), tuple(nodes), result)
        _LOGGER.debug(
            "Parsed PGN game: %d tags, %d nodes, result %s",
            len(game.tags),
            len(game.nodes),
            pgn_result_token(game.result),
        )
        return game

    def resync(self, failed_at: int, game_start: int) -> None:
        """Move to the next line that starts with ``[`` after a failure."""
        text = self._text
        if (
            game_start < failed_at < self._end
            and text[failed_at] == "["
            and (text[failed_at - 1] in "\r\n")
        ):
            self.pos = failed_at
            return
        nxt = text.find("\n[", max(failed_at, game_start + 1))
        self.pos = self._end if nxt < 0 else nxt + 1


def _decode(data: str | bytes) -> str:
    if isinstance(data, bytes):
        # Strict: a buffer that is not UTF-8 is the caller's contract violation.
        return data.decode("utf-8")
    return data


def read_pgn_game(
    text: str, pos: int = 0, options: PgnParseOptions | None = None
) -> tuple[Game, int]:
    """Parse exactly one game starting at *pos*.

    Returns the game and the offset just past its result token.  Raises
    :class:`PgnSyntaxError` carrying the offset where parsing stopped.
    """
    reader = _PgnReader(text, options or PgnParseOptions(), pos)
    game = reader.read_game()
    return game, reader.pos


def iter_pgn_games(
    data: str | bytes, options: PgnParseOptions | None = None
) -> Iterator[Game]:
    """Yield every game in a PGN buffer.

    A leading UTF-8 byte-order mark is skipped once.  Offsets in errors are
    relative to the decoded text, BOM included.
    """
    options = options or PgnParseOptions()
    text = _decode(data)
    _, bom_length = strip_utf8_bom(text)
    if bom_length:
        _LOGGER.debug("Skipping UTF-8 byte-order mark")

    reader = _PgnReader(text, options, bom_length)
    while True:
        if reader.only_blank_left():
            return
        start = reader.pos
        try:
            game = reader.read_game()
        except PgnSyntaxError as exc:
            if not options.skip_invalid_games:
                raise
            _LOGGER.warning("Skipping invalid PGN game at offset %d: %s", start, exc)
            reader.resync(exc.offset, start)
            continue
        yield game


def parse_pgn(data: str | bytes, options: PgnParseOptions | None = None) -> list[Game]:
    """Parse all games in a PGN buffer."""
    return list(iter_pgn_games(data, options))


def parse_pgn_game(data: str | bytes, options: PgnParseOptions | None = None) -> Game:
    """Parse the first game in a PGN buffer."""
    for game in iter_pgn_games(data, options):
        return game
    raise PgnSyntaxError("No PGN game found", 0)


# ── Writer ───────────────────────────────────────────────────────────────────


def tag_to_str(tag: Tag) -> str:
    return f'[{tag.key} "{tag.value}"]'


def node_to_str(node: Node) -> str:
    """Render one movetext node; escape lines and ``;`` comments end in a newline."""
    match node:
        case Comment(text=text):
            if "}" not in text:
                return f"{{{text}}}"
            if "\n" not in text:
                return f";{text}\n"
            # PGN comments cannot contain a closing brace.
            return "{" + text.replace("}", "]") + "}"
        case EscapeComment(text=text):
            return f"%{text}\n"
        case Nag(glyph=glyph):
            return f"${glyph}"
        case MoveNumber(number=number, style=style):
            return f"{number}{_PERIODS[style]}"
        case MoveNode(san=san):
            return san_to_str(san)
        case StartVariation():
            return "("
        case EndVariation():
            return ")"
    raise TypeError(f"Unknown PGN node: {node!r}")


def movetext_to_str(nodes: Iterable[Node], result: GameResult) -> str:
    parts: list[str] = []
    for node in nodes:
        text = node_to_str(node)
        if isinstance(node, EscapeComment):
            # Escape lines are only recognised at the start of a line.
            if parts and not parts[-1].endswith("\n"):
                parts.append("\n")
        elif parts and not parts[-1].endswith("\n"):
            parts.append(" ")
        parts.append(text)
    if parts and not parts[-1].endswith("\n"):
        parts.append(" ")
    parts.append(pgn_result_token(result))
    return "".join(parts)


def game_to_pgn(game: Game) -> str:
    """Serialise a :class:`Game`; parsing the output yields an equal game."""
    lines = [tag_to_str(tag) for tag in game.tags]
    if lines:
        lines.append("")
    lines.append(movetext_to_str(game.nodes, game.result))
    lines.append("")
    return "\n".join(lines)


def games_to_pgn(games: Iterable[Game]) -> str:
    return "\n".join(game_to_pgn(game) for game in games)
