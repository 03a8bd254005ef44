"""FEN parsing and serialization."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, TypeAlias

from chessnote.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    PieceType,
    castling_right,
    iter_castling_rights,
)
from chessnote.core.piece import Piece
from chessnote.core.types import (
    FILE_A,
    FILE_E,
    FILE_H,
    File,
    Rank,
    Square,
    file_of,
    make_square,
    parse_file,
    parse_square,
    rank_of,
    square_name,
)

STARTING_FEN: Final = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


# ── Tokens ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Drop:
    """An occupied square."""

    piece: Piece


@dataclass(frozen=True, slots=True)
class Skip:
    """``count`` consecutive empty squares (1–8)."""

    count: int


@dataclass(frozen=True, slots=True)
class NextRank:
    """The ``/`` separator."""


PlacementToken: TypeAlias = Drop | Skip | NextRank


@dataclass(frozen=True, slots=True)
class Castle:
    """Castling availability for *color* with the rook on *file*."""

    color: Color
    file: File


@dataclass(frozen=True, slots=True)
class NoCastling:
    """The ``-`` castling field."""


CastlingToken: TypeAlias = Castle | NoCastling

_STANDARD_CASTLING: dict[str, Castle] = {
    "K": Castle(Color.WHITE, FILE_H),
    "Q": Castle(Color.WHITE, FILE_A),
    "k": Castle(Color.BLACK, FILE_H),
    "q": Castle(Color.BLACK, FILE_A),
}

_RIGHT_LETTERS: dict[CastlingRights, str] = {
    CastlingRights.WHITE_OO: "K",
    CastlingRights.WHITE_OOO: "Q",
    CastlingRights.BLACK_OO: "k",
    CastlingRights.BLACK_OOO: "q",
}


# ── Piece placement ──────────────────────────────────────────────────────────


def parse_piece_placement(text: str) -> tuple[PlacementToken, ...]:
    """Tokenize the placement field without checking the board shape."""
    tokens: list[PlacementToken] = []
    for ch in text:
        if ch == "/":
            tokens.append(NextRank())
        elif ch in "12345678":
            tokens.append(Skip(int(ch)))
        else:
            try:
                tokens.append(Drop(Piece.from_char(ch)))
            except ValueError:
                raise ValueError(f"Invalid FEN placement character {ch!r}: {text!r}") from None
    return tuple(tokens)


def validate_piece_placement(tokens: Iterable[PlacementToken]) -> None:
    """Raise ``ValueError`` unless *tokens* describe exactly 8 ranks of 8 files."""
    ranks = 1
    width = 0
    for token in tokens:
        if isinstance(token, NextRank):
            if width != 8:
                raise ValueError(f"Invalid FEN rank width on rank {9 - ranks}")
            ranks += 1
            width = 0
        elif isinstance(token, Skip):
            width += token.count
        else:
            width += 1
        if width > 8:
            raise ValueError(f"Invalid FEN rank width on rank {9 - ranks}")
    if ranks != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks, got {ranks})")
    if width != 8:
        raise ValueError("Invalid FEN rank width on rank 1")


def expand_piece_placement(tokens: Iterable[PlacementToken]) -> dict[Square, Piece]:
    """Map each occupied square to its piece; assumes validated tokens."""
    board: dict[Square, Piece] = {}
    rank = 7
    file = 0
    for token in tokens:
        if isinstance(token, NextRank):
            rank -= 1
            file = 0
        elif isinstance(token, Skip):
            file += token.count
        else:
            board[make_square(File(file), Rank(rank))] = token.piece
            file += 1
    return board


def piece_placement_to_str(tokens: Iterable[PlacementToken]) -> str:
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, NextRank):
            parts.append("/")
        elif isinstance(token, Skip):
            parts.append(str(token.count))
        else:
            parts.append(str(token.piece))
    return "".join(parts)


# ── Side to move ─────────────────────────────────────────────────────────────


def parse_side_to_move(text: str) -> Color:
    if text == "w":
        return Color.WHITE
    if text == "b":
        return Color.BLACK
    if text == "-":
        return Color.NO_COLOR
    raise ValueError(f"Invalid FEN side-to-move field: {text!r}")


# ── Castling ─────────────────────────────────────────────────────────────────


def parse_castling_field(text: str) -> tuple[CastlingToken, ...]:
    """Tokenize a castling field in either ``KQkq`` or Shredder (``HAha``) form."""
    if text == "-":
        return (NoCastling(),)
    if not text:
        raise ValueError("Invalid FEN castling field: ''")

    tokens: list[CastlingToken] = []
    seen: set[str] = set()
    for ch in text:
        if ch in seen:
            raise ValueError(f"Invalid FEN castling field: {text!r}")
        seen.add(ch)
        token = _STANDARD_CASTLING.get(ch)
        if token is None:
            file = parse_file(ch)
            if not ch.isalpha() or file.value > 7:
                raise ValueError(f"Invalid FEN castling field: {text!r}")
            token = Castle(Color.WHITE if ch.isupper() else Color.BLACK, file)
        tokens.append(token)
    return tuple(tokens)


def castling_rights_from_tokens(
    tokens: Iterable[CastlingToken],
    white_king_file: File = FILE_E,
    black_king_file: File = FILE_E,
) -> CastlingRights:
    """Collapse castling tokens into the 4-bit rights set.

    A rook on a file beyond the king is a king-side right, one before it a
    queen-side right.
    """
    rights = CastlingRights.NONE
    for token in tokens:
        if isinstance(token, NoCastling):
            continue
        king_file = white_king_file if token.color == Color.WHITE else black_king_file
        if token.file == king_file:
            raise ValueError(
                f"Invalid FEN castling rook file {token.file!r} (king on the same file)"
            )
        side = CastlingSide.KING_SIDE if token.file > king_file else CastlingSide.QUEEN_SIDE
        rights |= castling_right(token.color, side)
    return rights


def parse_castling_rights(text: str) -> CastlingRights:
    """Parse a castling field assuming kings on the e-file."""
    return castling_rights_from_tokens(parse_castling_field(text))


def castling_rights_to_str(rights: CastlingRights) -> str:
    letters = "".join(_RIGHT_LETTERS[right] for right in iter_castling_rights(rights))
    return letters or "-"


# ── Full record ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Fen:
    """All six FEN fields, parsed."""

    placement: tuple[PlacementToken, ...]
    side_to_move: Color
    castling: CastlingRights
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def pieces(self) -> dict[Square, Piece]:
        return expand_piece_placement(self.placement)


def _king_file(board: dict[Square, Piece], color: Color) -> File:
    for sq, piece in board.items():
        if piece.piece_type == PieceType.KING and piece.color == color:
            return file_of(sq)
    return FILE_E


def parse_fen(fen: str) -> Fen:
    """Parse a FEN string into a :class:`Fen` record."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement_part, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    placement = parse_piece_placement(placement_part)
    validate_piece_placement(placement)
    board = expand_piece_placement(placement)

    # 2. Side to move
    side = parse_side_to_move(side_part)

    # 3. Castling
    castling = castling_rights_from_tokens(
        parse_castling_field(castling_part),
        white_king_file=_king_file(board, Color.WHITE),
        black_king_file=_king_file(board, Color.BLACK),
    )

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        ep_rank = rank_of(ep).value
        if ep_rank not in (2, 5):
            raise ValueError(f"Invalid FEN en-passant square: {ep_part!r}")
        if side != Color.NO_COLOR:
            expected_ep_rank = 5 if side == Color.WHITE else 2
            if ep_rank != expected_ep_rank:
                raise ValueError(
                    f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
                )

    # 5–6. Clocks (optional)
    halfmove = _parse_counter(parts, 4, default=0, minimum=0, name="halfmove clock")
    fullmove = _parse_counter(parts, 5, default=1, minimum=1, name="fullmove number")

    return Fen(placement, side, castling, ep, halfmove, fullmove)


def _parse_counter(parts: list[str], index: int, *, default: int, minimum: int, name: str) -> int:
    if len(parts) <= index:
        return default
    text = parts[index]
    if not text.isdigit() or int(text) < minimum:
        raise ValueError(f"Invalid FEN {name}: {text!r}")
    return int(text)


def fen_to_str(fen: Fen) -> str:
    """Serialise a :class:`Fen` record; castling is always written as ``KQkq``."""
    side_str = {Color.WHITE: "w", Color.BLACK: "b", Color.NO_COLOR: "-"}[fen.side_to_move]
    ep_str = square_name(fen.en_passant) if fen.en_passant is not None else "-"
    return (
        f"{piece_placement_to_str(fen.placement)} {side_str} "
        f"{castling_rights_to_str(fen.castling)} {ep_str} "
        f"{fen.halfmove_clock} {fen.fullmove_number}"
    )
