"""16-bit packed move value.

    bit  0- 5: destination square (0–63)
    bit  6-11: origin square (0–63)
    bit 12-13: promotion piece type - KNIGHT (KNIGHT..QUEEN)
    bit 14-15: move type: promotion (1), en passant (2), castling (3)

``MOVE_NONE`` (0) and ``MOVE_NULL`` (65) both decode to equal origin and
destination squares (a1/a1 and b1/b1), which no real move has.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Final

from chessnote.core.enums import PROMOTION_TYPES, MoveType, PieceType
from chessnote.core.types import PackedInt, Square, square_name

_SQUARE_MASK: Final = 0x3F
_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True, order=True)
class Move(PackedInt):
    """Immutable value object representing a single chess move."""

    BITS: ClassVar[int] = 16

    @property
    def from_sq(self) -> Square:
        return from_square(self)

    @property
    def to_sq(self) -> Square:
        return to_square(self)

    @property
    def move_type(self) -> MoveType:
        return type_of_move(self)

    @property
    def promotion(self) -> PieceType | None:
        if self.move_type != MoveType.PROMOTION:
            return None
        return promotion_type_of(self)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        if not is_move_ok(self):
            return "0000"
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    def __repr__(self) -> str:
        if self == MOVE_NONE:
            return "Move(none)"
        if self == MOVE_NULL:
            return "Move(null)"
        return f"Move({self}, {self.move_type.name.lower()})"

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)


def _pack(move_type: MoveType, from_sq: Square, to_sq: Square, promo_bits: int = 0) -> Move:
    return Move(int(move_type) | (promo_bits << 12) | (from_sq.value << 6) | to_sq.value)


def make_move_simple(from_sq: Square, to_sq: Square) -> Move:
    return _pack(MoveType.NORMAL, from_sq, to_sq)


def make_move_with_promotion(from_sq: Square, to_sq: Square, piece_type: PieceType) -> Move:
    assert piece_type in PROMOTION_TYPES, f"Cannot promote to {piece_type.name}"
    return _pack(MoveType.PROMOTION, from_sq, to_sq, piece_type - PieceType.KNIGHT)


def make_en_passant_move(from_sq: Square, to_sq: Square) -> Move:
    return _pack(MoveType.EN_PASSANT, from_sq, to_sq)


def make_castling_move(king_from: Square, rook_from: Square) -> Move:
    """Castling is encoded as "king captures own rook"."""
    return _pack(MoveType.CASTLING, king_from, rook_from)


def from_square(move: Move) -> Square:
    return Square((move.value >> 6) & _SQUARE_MASK)


def to_square(move: Move) -> Square:
    return Square(move.value & _SQUARE_MASK)


def type_of_move(move: Move) -> MoveType:
    return MoveType(move.value & (3 << 14))


def promotion_type_of(move: Move) -> PieceType:
    return PieceType(((move.value >> 12) & 3) + PieceType.KNIGHT)


def is_move_ok(move: Move) -> bool:
    """False for ``MOVE_NONE`` and ``MOVE_NULL``."""
    return from_square(move) != to_square(move)


MOVE_NONE: Final = Move(0)
MOVE_NULL: Final = Move(65)
