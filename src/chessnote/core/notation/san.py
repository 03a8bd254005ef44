"""SAN (Standard Algebraic Notation) move descriptions.

A SAN token describes a move without a board: which piece moves, an
optional hint about where it comes from, where it goes, and decorations.
Turning a description into a concrete :class:`~chessnote.core.move.Move`
needs a position and is left to the caller.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from chessnote.core.enums import PieceType
from chessnote.core.types import (
    File,
    Rank,
    Square,
    file_name,
    make_square,
    parse_file,
    parse_rank,
    parse_square,
    rank_name,
    square_name,
)

_LOGGER = logging.getLogger(__name__)

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

# Suffix alternatives are ordered longest first.
_ANNOTATION = r"(?P<annotation>!!|\?\?|!\?|\?!|!|\?)?"
_CHECK = r"(?P<check>[+#])?"

_PIECE_MOVE_RE = re.compile(
    r"(?P<piece>[PNBRQK])?"
    r"(?P<file>[a-h])?"
    r"(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<square>[a-h][1-8])?"
    r"(?:=?(?P<promotion>[NBRQ]))?" + _CHECK + _ANNOTATION
)
_CASTLE_RE = re.compile(r"(?P<castle>O-O-O|O-O|0-0-0|0-0)" + _CHECK + _ANNOTATION)
_NULL_RE = re.compile(r"(?:--|Z0|z0)" + _CHECK + _ANNOTATION)


class MoveOrCapture(StrEnum):
    MOVE = ""
    CAPTURE = "x"


class Check(StrEnum):
    NONE = ""
    CHECK = "+"
    CHECKMATE = "#"


class MoveAnnotation(StrEnum):
    """Traditional move-quality suffix; the value is the suffix text."""

    NONE = ""
    BRILLIANT = "!!"
    BLUNDER = "??"
    INTERESTING = "!?"
    DUBIOUS = "?!"
    STRONG = "!"
    MISTAKE = "?"


# ── Source hints ─────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class NoSource:
    """No disambiguation was written."""


@dataclass(frozen=True, slots=True)
class SourceFile:
    file: File


@dataclass(frozen=True, slots=True)
class SourceRank:
    rank: Rank


@dataclass(frozen=True, slots=True)
class SourceSquare:
    square: Square


Source: TypeAlias = NoSource | SourceFile | SourceRank | SourceSquare


# ── Move descriptions ────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SanMove:
    """A piece or pawn move such as ``Nbd7`` or ``exd8=Q+``."""

    piece: PieceType
    source: Source
    action: MoveOrCapture
    to_square: Square
    promotion: PieceType | None = None
    check: Check = Check.NONE
    annotation: MoveAnnotation = MoveAnnotation.NONE

    @property
    def is_capture(self) -> bool:
        return self.action == MoveOrCapture.CAPTURE


@dataclass(frozen=True, slots=True)
class CastleKingSide:
    check: Check = Check.NONE
    annotation: MoveAnnotation = MoveAnnotation.NONE


@dataclass(frozen=True, slots=True)
class CastleQueenSide:
    check: Check = Check.NONE
    annotation: MoveAnnotation = MoveAnnotation.NONE


@dataclass(frozen=True, slots=True)
class NullMove:
    check: Check = Check.NONE
    annotation: MoveAnnotation = MoveAnnotation.NONE


@dataclass(frozen=True, slots=True)
class InvalidMove:
    """A token that does not follow the SAN grammar, kept verbatim."""

    token: str


San: TypeAlias = SanMove | CastleKingSide | CastleQueenSide | NullMove | InvalidMove


# ── Parsing ──────────────────────────────────────────────────────────────────


def _decorations(match: re.Match[str]) -> tuple[Check, MoveAnnotation]:
    return Check(match["check"] or ""), MoveAnnotation(match["annotation"] or "")


def _resolve_source(
    file: str | None, rank: str | None, square: str | None
) -> tuple[Source, Square] | None:
    """Decide the source hint and destination from the optional fragments.

    A lone file+rank pair is the destination; with a trailing square it is
    the full origin instead.
    """
    if square is None:
        if file is None or rank is None:
            return None
        return NoSource(), make_square(parse_file(file), parse_rank(rank))

    to_sq = parse_square(square)
    if file is not None and rank is not None:
        return SourceSquare(make_square(parse_file(file), parse_rank(rank))), to_sq
    if file is not None:
        return SourceFile(parse_file(file)), to_sq
    if rank is not None:
        return SourceRank(parse_rank(rank)), to_sq
    return NoSource(), to_sq


def _parse_piece_move(token: str) -> SanMove | None:
    match = _PIECE_MOVE_RE.fullmatch(token)
    if match is None:
        return None
    resolved = _resolve_source(match["file"], match["rank"], match["square"])
    if resolved is None:
        return None
    # A capture mark must be followed by an explicit destination square.
    if match["capture"] and match["square"] is None:
        return None
    source, to_sq = resolved
    check, annotation = _decorations(match)
    promotion = match["promotion"]
    return SanMove(
        piece=_SAN_PIECE_REV[match["piece"] or "P"],
        source=source,
        action=MoveOrCapture.CAPTURE if match["capture"] else MoveOrCapture.MOVE,
        to_square=to_sq,
        promotion=_SAN_PIECE_REV[promotion] if promotion else None,
        check=check,
        annotation=annotation,
    )


def parse_san(token: str) -> San:
    """Parse one SAN token.

    Malformed input yields :class:`InvalidMove` rather than raising, so a
    single bad token does not spoil the surrounding game.
    """
    match = _CASTLE_RE.fullmatch(token)
    if match is not None:
        check, annotation = _decorations(match)
        if len(match["castle"]) == 5:
            return CastleQueenSide(check, annotation)
        return CastleKingSide(check, annotation)

    match = _NULL_RE.fullmatch(token)
    if match is not None:
        return NullMove(*_decorations(match))

    move = _parse_piece_move(token)
    if move is not None:
        return move

    _LOGGER.debug("Unparseable SAN token %r", token)
    return InvalidMove(token)


# ── Serialisation ────────────────────────────────────────────────────────────


def _source_to_str(source: Source) -> str:
    match source:
        case NoSource():
            return ""
        case SourceFile(file=file):
            return file_name(file)
        case SourceRank(rank=rank):
            return rank_name(rank)
        case SourceSquare(square=square):
            return square_name(square)
    raise TypeError(f"Unknown SAN source: {source!r}")


def san_to_str(san: San) -> str:
    """Render *san* back to text; ``parse_san(san_to_str(x)) == x``."""
    match san:
        case SanMove():
            piece = "" if san.piece == PieceType.PAWN else _SAN_PIECE[san.piece]
            promotion = f"={_SAN_PIECE[san.promotion]}" if san.promotion else ""
            return (
                f"{piece}{_source_to_str(san.source)}{san.action}"
                f"{square_name(san.to_square)}{promotion}{san.check}{san.annotation}"
            )
        case CastleKingSide():
            return f"O-O{san.check}{san.annotation}"
        case CastleQueenSide():
            return f"O-O-O{san.check}{san.annotation}"
        case NullMove():
            return f"--{san.check}{san.annotation}"
        case InvalidMove(token=token):
            return token
    raise TypeError(f"Unknown SAN value: {san!r}")
