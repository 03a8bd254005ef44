"""Notation package: SAN / UCI / FEN / PGN parsing and serialization."""

from chessnote.core.notation.bom import UTF8_BOM, UTF8_BOM_BYTES, has_utf8_bom, strip_utf8_bom
from chessnote.core.notation.errors import NotationError, PgnSyntaxError
from chessnote.core.notation.fen import (
    STARTING_FEN,
    Castle,
    Drop,
    Fen,
    NextRank,
    NoCastling,
    Skip,
    castling_rights_from_tokens,
    castling_rights_to_str,
    expand_piece_placement,
    fen_to_str,
    parse_castling_field,
    parse_castling_rights,
    parse_fen,
    parse_piece_placement,
    parse_side_to_move,
    piece_placement_to_str,
    validate_piece_placement,
)
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
)
from chessnote.core.notation.pgn import (
    game_result_from_pgn,
    game_to_pgn,
    games_to_pgn,
    iter_pgn_games,
    node_to_str,
    parse_pgn,
    parse_pgn_game,
    pgn_result_token,
    read_pgn_game,
)
from chessnote.core.notation.san import (
    CastleKingSide,
    CastleQueenSide,
    Check,
    InvalidMove,
    MoveAnnotation,
    MoveOrCapture,
    NoSource,
    NullMove,
    San,
    SanMove,
    SourceFile,
    SourceRank,
    SourceSquare,
    parse_san,
    san_to_str,
)
from chessnote.core.notation.uci import UCI_NULL_MOVE, move_to_uci, parse_uci

__all__ = [
    # Errors
    "NotationError",
    "PgnSyntaxError",
    # BOM
    "UTF8_BOM",
    "UTF8_BOM_BYTES",
    "has_utf8_bom",
    "strip_utf8_bom",
    # SAN
    "San",
    "SanMove",
    "CastleKingSide",
    "CastleQueenSide",
    "NullMove",
    "InvalidMove",
    "NoSource",
    "SourceFile",
    "SourceRank",
    "SourceSquare",
    "MoveOrCapture",
    "Check",
    "MoveAnnotation",
    "parse_san",
    "san_to_str",
    # UCI
    "UCI_NULL_MOVE",
    "parse_uci",
    "move_to_uci",
    # FEN
    "STARTING_FEN",
    "Fen",
    "Drop",
    "Skip",
    "NextRank",
    "Castle",
    "NoCastling",
    "parse_piece_placement",
    "validate_piece_placement",
    "expand_piece_placement",
    "piece_placement_to_str",
    "parse_side_to_move",
    "parse_castling_field",
    "castling_rights_from_tokens",
    "parse_castling_rights",
    "castling_rights_to_str",
    "parse_fen",
    "fen_to_str",
    # PGN
    "Tag",
    "TagKey",
    "Node",
    "Comment",
    "EscapeComment",
    "Nag",
    "MoveNumber",
    "MoveNumberStyle",
    "MoveNode",
    "StartVariation",
    "EndVariation",
    "Game",
    "PgnParseOptions",
    "parse_pgn",
    "parse_pgn_game",
    "read_pgn_game",
    "iter_pgn_games",
    "game_to_pgn",
    "games_to_pgn",
    "node_to_str",
    "pgn_result_token",
    "game_result_from_pgn",
]
