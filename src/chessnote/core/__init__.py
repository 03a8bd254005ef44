"""Core layer: packed chess primitives plus the notation grammars built on them.

Quick start::

    from chessnote.core import parse_pgn, parse_san, parse_uci

    for game in parse_pgn(open("games.pgn", "rb").read()):
        print(game.headers.get("White"), list(game.mainline()))
"""

from chessnote.core.enums import (
    CastlingRights,
    CastlingSide,
    Color,
    GameResult,
    MoveType,
    PieceType,
    castling_right,
)
from chessnote.core.move import (
    MOVE_NONE,
    MOVE_NULL,
    Move,
    from_square,
    is_move_ok,
    make_castling_move,
    make_en_passant_move,
    make_move_simple,
    make_move_with_promotion,
    promotion_type_of,
    to_square,
    type_of_move,
)
from chessnote.core.notation import (
    STARTING_FEN,
    Fen,
    Game,
    PgnParseOptions,
    PgnSyntaxError,
    parse_fen,
    parse_pgn,
    parse_pgn_game,
    parse_san,
    parse_uci,
)
from chessnote.core.piece import NO_PIECE, Piece, color_of, make_piece, type_of_piece
from chessnote.core.types import (
    SQ_NONE,
    File,
    Rank,
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    relative_rank,
    relative_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "CastlingSide",
    "Color",
    "GameResult",
    "MoveType",
    "PieceType",
    "castling_right",
    # Types / helpers
    "File",
    "Rank",
    "Square",
    "SQ_NONE",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "relative_rank",
    "relative_square",
    "square_name",
    # Pieces
    "NO_PIECE",
    "Piece",
    "color_of",
    "make_piece",
    "type_of_piece",
    # Moves
    "MOVE_NONE",
    "MOVE_NULL",
    "Move",
    "from_square",
    "is_move_ok",
    "make_castling_move",
    "make_en_passant_move",
    "make_move_simple",
    "make_move_with_promotion",
    "promotion_type_of",
    "to_square",
    "type_of_move",
    # Notation
    "STARTING_FEN",
    "Fen",
    "Game",
    "PgnParseOptions",
    "PgnSyntaxError",
    "parse_fen",
    "parse_pgn",
    "parse_pgn_game",
    "parse_san",
    "parse_uci",
]
