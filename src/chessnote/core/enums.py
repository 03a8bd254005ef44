"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from collections.abc import Iterator
from enum import IntEnum, IntFlag
from typing import Final


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1
    NO_COLOR = 2

    @property
    def opposite(self) -> Color:
        assert self != Color.NO_COLOR, "NO_COLOR has no opposite"
        return Color(self.value ^ Color.BLACK.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value.

    The ordinals are part of the move encoding: a promotion stores
    ``piece_type - KNIGHT`` in two bits.
    """

    NONE = 0
    ALL_PIECES = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


PIECE_TYPE_NB: Final = 8

PROMOTION_TYPES: Final = (
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
)


class MoveType(IntEnum):
    """Special move classification, already shifted into bits 14-15."""

    NORMAL = 0
    PROMOTION = 1 << 14
    EN_PASSANT = 2 << 14
    CASTLING = 3 << 14


class CastlingSide(IntEnum):
    KING_SIDE = 0
    QUEEN_SIDE = 1


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_OO = 1
    WHITE_OOO = 1 << 1
    BLACK_OO = 1 << 2
    BLACK_OOO = 1 << 3

    WHITE_BOTH = WHITE_OO | WHITE_OOO
    BLACK_BOTH = BLACK_OO | BLACK_OOO
    ALL = WHITE_BOTH | BLACK_BOTH


_SINGLE_RIGHTS: Final = (
    CastlingRights.WHITE_OO,
    CastlingRights.WHITE_OOO,
    CastlingRights.BLACK_OO,
    CastlingRights.BLACK_OOO,
)


def castling_right(color: Color, side: CastlingSide) -> CastlingRights:
    """Single right for *color* castling towards *side*."""
    assert color != Color.NO_COLOR
    return CastlingRights(CastlingRights.WHITE_OO << (int(side) + 2 * int(color)))


def iter_castling_rights(rights: CastlingRights) -> Iterator[CastlingRights]:
    """Yield the single rights contained in *rights*, in bit order."""
    for right in _SINGLE_RIGHTS:
        if rights & right:
            yield right


class GameResult(IntEnum):
    """Outcome of a game as recorded by a PGN result token."""

    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
    OTHER = 4
