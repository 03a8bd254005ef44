"""Piece value object packed as ``(color << 3) | piece_type``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from chessnote.core.enums import Color, PieceType
from chessnote.core.types import PackedInt

_COLOR_BIT: Final = 8

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(frozen=True, slots=True, order=True)
class Piece(PackedInt):
    """Immutable packed piece; ``NO_PIECE`` (0) is the empty marker."""

    @property
    def piece_type(self) -> PieceType:
        return type_of_piece(self)

    @property
    def color(self) -> Color:
        return color_of(self)

    def flipped(self) -> Piece:
        """Same piece type, other color."""
        assert self != NO_PIECE, "NO_PIECE has no color"
        return self.xor(_COLOR_BIT)

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        if self == NO_PIECE:
            return "Piece(none)"
        return f"Piece({self})"

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return make_piece(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]


def make_piece(color: Color, piece_type: PieceType) -> Piece:
    assert color != Color.NO_COLOR
    return Piece((int(color) << 3) | int(piece_type))


def type_of_piece(piece: Piece) -> PieceType:
    return PieceType(piece.value & 7)


def color_of(piece: Piece) -> Color:
    assert piece != NO_PIECE, "NO_PIECE has no color"
    return Color(piece.value >> 3)


NO_PIECE: Final = Piece(0)

W_PAWN, W_KNIGHT, W_BISHOP, W_ROOK, W_QUEEN, W_KING = (
    make_piece(Color.WHITE, PieceType(pt)) for pt in range(1, 7)
)
B_PAWN, B_KNIGHT, B_BISHOP, B_ROOK, B_QUEEN, B_KING = (
    make_piece(Color.BLACK, PieceType(pt)) for pt in range(1, 7)
)

PIECES: Final = (
    W_PAWN, W_KNIGHT, W_BISHOP, W_ROOK, W_QUEEN, W_KING,
    B_PAWN, B_KNIGHT, B_BISHOP, B_ROOK, B_QUEEN, B_KING,
)
