"""Chess notation parsing: SAN, UCI, FEN and PGN over packed move values."""

from chessnote.core import (
    Game,
    GameResult,
    Move,
    PgnParseOptions,
    PgnSyntaxError,
    parse_fen,
    parse_pgn,
    parse_pgn_game,
    parse_san,
    parse_uci,
)

__version__ = "0.1.0"

__all__ = [
    "Game",
    "GameResult",
    "Move",
    "PgnParseOptions",
    "PgnSyntaxError",
    "parse_fen",
    "parse_pgn",
    "parse_pgn_game",
    "parse_san",
    "parse_uci",
    "__version__",
]
