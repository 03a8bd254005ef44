"""UCI move strings (``e2e4``, ``e7e8q``, ``0000``)."""

from __future__ import annotations

from typing import Final

from chessnote.core.enums import PieceType
from chessnote.core.move import (
    MOVE_NULL,
    Move,
    is_move_ok,
    make_move_simple,
    make_move_with_promotion,
)
from chessnote.core.types import parse_square

UCI_NULL_MOVE: Final = "0000"

_PROMOTION_CHARS: dict[str, PieceType] = {
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
}


def parse_uci(text: str) -> Move:
    """Parse a UCI move string into a packed :class:`Move`.

    UCI input is machine generated, so anything malformed raises
    ``ValueError`` instead of producing a placeholder.
    """
    if text == UCI_NULL_MOVE:
        return MOVE_NULL
    if len(text) not in (4, 5):
        raise ValueError(f"Invalid UCI move: {text!r}")

    from_sq = parse_square(text[0:2])
    to_sq = parse_square(text[2:4])
    if len(text) == 4:
        move = make_move_simple(from_sq, to_sq)
    else:
        promotion = _PROMOTION_CHARS.get(text[4].lower())
        if promotion is None:
            raise ValueError(f"Invalid UCI promotion piece in {text!r}")
        move = make_move_with_promotion(from_sq, to_sq, promotion)

    if not is_move_ok(move):
        raise ValueError(f"Invalid UCI move (same origin and destination): {text!r}")
    return move


def move_to_uci(move: Move) -> str:
    """Lower-case UCI text; sentinels render as ``0000``."""
    return move.uci
