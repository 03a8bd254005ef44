"""Tests for PGN reading and writing."""

import logging

import pytest

from chessnote.core.enums import GameResult
from chessnote.core.notation.bom import UTF8_BOM, UTF8_BOM_BYTES
from chessnote.core.notation.errors import NotationError, PgnSyntaxError
from chessnote.core.notation.models import (
    Comment,
    EndVariation,
    EscapeComment,
    Game,
    MoveNode,
    MoveNumber,
    MoveNumberStyle,
    Nag,
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
from chessnote.core.notation.san import InvalidMove, parse_san

ANNOTATED_GAME = """[Event "Tony Rotella"]
[Site "?"]
[Date "2017.01.01"]
[Round "?"]
[White "aaaaaaa \\" aaaaaaa"]
[Black "Black, Player"]
[Result "*"]
[Annotator "Someone"]
[PlyCount "2"]
[SourceDate "2017.01.01"]

{This game was annotated
over several lines.} 1. e4 c5 {The Sicilian.} *
"""


def _moves(*tokens: str) -> list[MoveNode]:
    return [MoveNode(parse_san(token)) for token in tokens]


class TestPgnTags:
    def test_tag_order_and_raw_values(self) -> None:
        game = parse_pgn_game('[Event "Tony Rotella"]\n[Date "2017.01.01"]\n\n*')
        assert game.tags == (
            Tag(TagKey.EVENT, "Tony Rotella"),
            Tag(TagKey.DATE, "2017.01.01"),
        )

    def test_escaped_quote_is_kept_verbatim(self) -> None:
        game = parse_pgn_game('[White "aaaaaaa \\" aaaaaaa"]\n*')
        tag = game.tags[0]
        assert tag.value == 'aaaaaaa \\" aaaaaaa'
        assert tag.text == 'aaaaaaa " aaaaaaa'

    def test_roster_keys_are_distinguished(self) -> None:
        game = parse_pgn_game(ANNOTATED_GAME)
        assert [tag.key for tag in game.tags[:7]] == list(TagKey)
        assert all(tag.is_roster for tag in game.tags[:7])
        assert [tag.key for tag in game.tags[7:]] == ["Annotator", "PlyCount", "SourceDate"]
        assert not any(tag.is_roster for tag in game.tags[7:])

    def test_duplicates_are_preserved(self) -> None:
        game = parse_pgn_game('[Site "a"]\n[Site "b"]\n*')
        assert [tag.value for tag in game.tags] == ["a", "b"]
        assert game.tag("Site") == "a"
        assert game.headers == {"Site": "a"}

    def test_whitespace_inside_brackets(self) -> None:
        game = parse_pgn_game('[ Event   "x" ]*')
        assert game.tags == (Tag(TagKey.EVENT, "x"),)


class TestPgnScenario:
    def test_annotated_game(self) -> None:
        game = parse_pgn_game(ANNOTATED_GAME)

        assert [tag.key for tag in game.tags[:7]] == [
            "Event",
            "Site",
            "Date",
            "Round",
            "White",
            "Black",
            "Result",
        ]
        assert game.nodes[0] == Comment("This game was annotated\nover several lines.")
        assert game.nodes[1] == MoveNumber(1, MoveNumberStyle.ONE)
        assert list(game.nodes[2:4]) == _moves("e4", "c5")
        assert Comment("The Sicilian.") in game.nodes[4:]
        assert game.result == GameResult.OTHER

    def test_helpers(self) -> None:
        game = parse_pgn_game(ANNOTATED_GAME)
        assert game.tag(TagKey.EVENT) == "Tony Rotella"
        assert game.tag("Missing") is None
        assert game.headers["White"] == 'aaaaaaa " aaaaaaa'
        assert list(game.mainline()) == [parse_san("e4"), parse_san("c5")]


class TestPgnMovetext:
    def test_results(self) -> None:
        assert parse_pgn_game("1-0").result == GameResult.WHITE_WINS
        assert parse_pgn_game("0-1").result == GameResult.BLACK_WINS
        assert parse_pgn_game("1/2-1/2").result == GameResult.DRAW
        assert parse_pgn_game("*").result == GameResult.OTHER

    def test_move_number_styles(self) -> None:
        game = parse_pgn_game("12 e4 12. e4 12... e5 12.. e5 *")
        numbers = [node for node in game.nodes if isinstance(node, MoveNumber)]
        assert numbers == [
            MoveNumber(12, MoveNumberStyle.NONE),
            MoveNumber(12, MoveNumberStyle.ONE),
            MoveNumber(12, MoveNumberStyle.THREE),
            MoveNumber(12, MoveNumberStyle.OTHER),
        ]

    def test_number_glued_to_move(self) -> None:
        game = parse_pgn_game("1.e4 1...e5 *")
        assert game.nodes == (
            MoveNumber(1),
            *_moves("e4"),
            MoveNumber(1, MoveNumberStyle.THREE),
            *_moves("e5"),
        )

    def test_variations_are_flat(self) -> None:
        game = parse_pgn_game("1. e4 e5 (1... c5 2. Nf3 (2. c3)) 2. Nf3 $1 *")
        assert game.nodes == (
            MoveNumber(1),
            *_moves("e4", "e5"),
            StartVariation(),
            MoveNumber(1, MoveNumberStyle.THREE),
            *_moves("c5"),
            MoveNumber(2),
            *_moves("Nf3"),
            StartVariation(),
            MoveNumber(2),
            *_moves("c3"),
            EndVariation(),
            EndVariation(),
            MoveNumber(2),
            *_moves("Nf3"),
            Nag(1),
        )
        assert list(game.mainline()) == [parse_san("e4"), parse_san("e5"), parse_san("Nf3")]

    def test_castling_and_null_moves(self) -> None:
        game = parse_pgn_game("1. O-O 0-0-0+ 2. -- Z0 *")
        assert [node for node in game.nodes if isinstance(node, MoveNode)] == _moves(
            "O-O", "0-0-0+", "--", "Z0"
        )

    def test_annotated_moves(self) -> None:
        game = parse_pgn_game("1. e4!? e5?? 2. Qh5+! *")
        assert [node for node in game.nodes if isinstance(node, MoveNode)] == _moves(
            "e4!?", "e5??", "Qh5+!"
        )

    def test_bad_san_degrades_to_invalid_move(self) -> None:
        game = parse_pgn_game("1. e4 Xyz9 2. Nf3 *")
        assert MoveNode(InvalidMove("Xyz9")) in game.nodes
        assert len([node for node in game.nodes if isinstance(node, MoveNode)]) == 3

    def test_overlong_annotation_degrades_to_invalid_move(self) -> None:
        game = parse_pgn_game("1. e4!!! e5?!? 2. Nf3 *")
        assert MoveNode(InvalidMove("e4!!!")) in game.nodes
        assert MoveNode(InvalidMove("e5?!?")) in game.nodes
        assert len([node for node in game.nodes if isinstance(node, MoveNode)]) == 3
        assert game.result == GameResult.OTHER

    def test_comment_keeps_bytes_verbatim(self) -> None:
        game = parse_pgn_game("{  spaced ( not a variation ) $1 \n } *")
        assert game.nodes == (Comment("  spaced ( not a variation ) $1 \n "),)

    def test_semicolon_comment(self) -> None:
        game = parse_pgn_game("1. e4 ;king pawn } here\ne5 *")
        assert game.nodes == (
            MoveNumber(1),
            *_moves("e4"),
            Comment("king pawn } here"),
            *_moves("e5"),
        )


class TestPgnEscapeLines:
    def test_escape_after_tags_is_kept(self) -> None:
        text = '%before tags\n[Event "x"]\n%between\n[Site "y"]\n%after tags\n\n1. e4 *'
        game = parse_pgn_game(text)
        assert len(game.tags) == 2
        assert game.nodes[0] == EscapeComment("after tags")
        assert EscapeComment("before tags") not in game.nodes
        assert EscapeComment("between") not in game.nodes

    def test_escape_in_movetext(self) -> None:
        game = parse_pgn_game("1. e4\n%engine output\ne5 *")
        assert game.nodes == (
            MoveNumber(1),
            *_moves("e4"),
            EscapeComment("engine output"),
            *_moves("e5"),
        )

    def test_percent_inside_comment_is_text(self) -> None:
        game = parse_pgn_game("{line\n%not escape} *")
        assert game.nodes == (Comment("line\n%not escape"),)

    def test_percent_mid_line_is_an_error(self) -> None:
        with pytest.raises(PgnSyntaxError, match="Unexpected character"):
            parse_pgn_game("1. e4 %x *")

    def test_escape_before_tagless_movetext_is_kept(self) -> None:
        text = "%x\n1. e4 *"
        game = parse_pgn_game(text)
        assert game.nodes == (EscapeComment("x"), MoveNumber(1), *_moves("e4"))
        assert read_pgn_game(text)[0] == game

    def test_escape_only_buffer_has_no_games(self) -> None:
        assert parse_pgn("%x\n\n%y\n") == []


class TestPgnErrors:
    def test_unterminated_comment(self) -> None:
        text = '[Event "x"]\n\n1. e4 {never closed'
        with pytest.raises(PgnSyntaxError, match="Unterminated comment") as exc:
            parse_pgn_game(text)
        assert exc.value.offset == text.index("{")

    def test_missing_result(self) -> None:
        text = "1. e4 e5"
        with pytest.raises(PgnSyntaxError, match="Missing game result") as exc:
            parse_pgn_game(text)
        assert exc.value.offset == len(text)

    def test_missing_result_before_next_game(self) -> None:
        text = '[Event "a"]\n\n1. e4\n\n[Event "b"]\n\n1. d4 *'
        with pytest.raises(PgnSyntaxError, match="Missing game result") as exc:
            parse_pgn(text)
        assert exc.value.offset == text.index('[Event "b"]')

    def test_malformed_tag(self) -> None:
        with pytest.raises(PgnSyntaxError, match="Malformed tag"):
            parse_pgn_game('[Event "x"\n1. e4 *')
        with pytest.raises(PgnSyntaxError, match="Malformed tag"):
            parse_pgn_game("[Event x]\n1. e4 *")

    def test_unterminated_tag_value(self) -> None:
        text = '[Event "abc'
        with pytest.raises(PgnSyntaxError, match="Unterminated tag value") as exc:
            parse_pgn_game(text)
        assert exc.value.offset == text.index('"')

    def test_unbalanced_parentheses(self) -> None:
        with pytest.raises(PgnSyntaxError, match="Unbalanced"):
            parse_pgn_game("1. e4 ) *")
        with pytest.raises(PgnSyntaxError, match="Unterminated variation"):
            parse_pgn_game("1. e4 (1. d4")

    def test_result_inside_variation(self) -> None:
        with pytest.raises(PgnSyntaxError, match="inside a variation"):
            parse_pgn_game("1. e4 (1. d4 *) *")

    def test_malformed_nag(self) -> None:
        with pytest.raises(PgnSyntaxError, match="NAG"):
            parse_pgn_game("1. e4 $ *")

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_pgn_game("1. e4")
        assert issubclass(PgnSyntaxError, NotationError)

    def test_empty_input(self) -> None:
        assert parse_pgn("") == []
        assert parse_pgn("  \n\n") == []
        with pytest.raises(PgnSyntaxError, match="No PGN game found"):
            parse_pgn_game("")


class TestPgnOptions:
    def test_result_from_tag(self) -> None:
        text = '[Event "NoResultToken"]\n[Result "0-1"]\n\n1. d4 d5\n'
        game = parse_pgn_game(text, PgnParseOptions(result_from_tag=True))
        assert game.result == GameResult.BLACK_WINS
        assert list(game.mainline()) == [parse_san("d4"), parse_san("d5")]

    def test_result_from_tag_still_needs_a_tag(self) -> None:
        with pytest.raises(PgnSyntaxError, match="Missing game result"):
            parse_pgn_game("1. d4 d5", PgnParseOptions(result_from_tag=True))

    def test_max_variation_depth(self) -> None:
        text = "1. e4 (1. d4 (1. c4)) *"
        assert len(parse_pgn_game(text, PgnParseOptions(max_variation_depth=2)).nodes) == 10
        with pytest.raises(PgnSyntaxError, match="deeper than 1"):
            parse_pgn_game(text, PgnParseOptions(max_variation_depth=1))

    def test_skip_invalid_games(self, caplog) -> None:
        text = (
            '[Event "bad"]\n\n1. e4 {never closed\n\n'
            '[Event "missing result"]\n\n1. e4\n'
            '[Event "good"]\n\n1. d4 *\n'
        )
        with caplog.at_level(logging.WARNING, logger="chessnote.core.notation.pgn"):
            games = parse_pgn(text, PgnParseOptions(skip_invalid_games=True))
        assert [game.tag("Event") for game in games] == ["good"]
        assert caplog.text.count("Skipping invalid PGN game") == 2

    def test_invalid_games_raise_by_default(self) -> None:
        with pytest.raises(PgnSyntaxError):
            parse_pgn('[Event "bad"]\n\n1. e4 {never closed\n\n[Event "good"]\n\n1. d4 *\n')


class TestPgnBuffers:
    def test_multiple_games(self) -> None:
        text = '[Event "one"]\n\n1. e4 1-0\n\n[Event "two"]\n\n1. d4 0-1\n'
        games = parse_pgn(text)
        assert [game.tag("Event") for game in games] == ["one", "two"]
        assert [game.result for game in games] == [GameResult.WHITE_WINS, GameResult.BLACK_WINS]

    def test_bom_bytes(self, caplog) -> None:
        data = UTF8_BOM_BYTES + '[Event "été"]\n\n1. e4 *\n\n[Event "b"]\n\n*\n'.encode()
        with caplog.at_level(logging.DEBUG, logger="chessnote.core.notation.pgn"):
            games = parse_pgn(data)
        assert [game.tag("Event") for game in games] == ["été", "b"]
        assert "byte-order mark" in caplog.text

    def test_bom_text(self) -> None:
        games = parse_pgn(UTF8_BOM + "1. e4 *")
        assert games[0].nodes == (MoveNumber(1), *_moves("e4"))

    def test_bom_only_stripped_once(self) -> None:
        with pytest.raises(PgnSyntaxError, match="Unexpected character"):
            parse_pgn(UTF8_BOM * 2 + "*")

    def test_escape_line_right_after_bom(self) -> None:
        text = '%generated\n[Event "x"]\n\n1. e4 *\n'
        for data in (UTF8_BOM + text, UTF8_BOM_BYTES + text.encode()):
            games = parse_pgn(data)
            assert len(games) == 1
            assert games[0].tags == (Tag(TagKey.EVENT, "x"),)
            assert games[0].nodes == (MoveNumber(1), *_moves("e4"))

    def test_offsets_count_the_bom(self) -> None:
        text = UTF8_BOM + "1. e4 {x"
        with pytest.raises(PgnSyntaxError) as exc:
            parse_pgn(text)
        assert exc.value.offset == text.index("{")

    def test_invalid_utf8_raises(self) -> None:
        with pytest.raises(UnicodeDecodeError):
            parse_pgn(b"[Event \"\xff\"]\n*")

    def test_iter_is_lazy(self) -> None:
        games = iter_pgn_games("1. e4 * 1. e4 {broken")
        assert next(games).nodes == (MoveNumber(1), *_moves("e4"))
        with pytest.raises(PgnSyntaxError):
            next(games)

    def test_read_pgn_game_reports_end_offset(self) -> None:
        text = "1. e4 * 1. d4 0-1"
        first, end = read_pgn_game(text)
        assert end == text.index("*") + 1
        second, end = read_pgn_game(text, end)
        assert end == len(text)
        assert list(first.mainline()) == [parse_san("e4")]
        assert second.result == GameResult.BLACK_WINS


class TestPgnWriter:
    def test_result_token_mapping(self) -> None:
        assert pgn_result_token(GameResult.WHITE_WINS) == "1-0"
        assert pgn_result_token(GameResult.BLACK_WINS) == "0-1"
        assert pgn_result_token(GameResult.DRAW) == "1/2-1/2"
        assert pgn_result_token(GameResult.OTHER) == "*"

        assert game_result_from_pgn("1-0") == GameResult.WHITE_WINS
        assert game_result_from_pgn("0-1") == GameResult.BLACK_WINS
        assert game_result_from_pgn("1/2-1/2") == GameResult.DRAW
        assert game_result_from_pgn("*") == GameResult.OTHER
        assert game_result_from_pgn("?") == GameResult.OTHER

    def test_node_text(self) -> None:
        assert node_to_str(Comment("hi")) == "{hi}"
        assert node_to_str(Comment("a}b")) == ";a}b\n"
        assert node_to_str(EscapeComment("x")) == "%x\n"
        assert node_to_str(Nag(14)) == "$14"
        assert node_to_str(MoveNumber(3, MoveNumberStyle.THREE)) == "3..."
        assert node_to_str(MoveNumber(3, MoveNumberStyle.NONE)) == "3"
        assert node_to_str(MoveNode(parse_san("exd8=Q#"))) == "exd8=Q#"
        assert node_to_str(StartVariation()) + node_to_str(EndVariation()) == "()"

    def test_game_text(self) -> None:
        game = Game(
            tags=(Tag(TagKey.EVENT, "x"),),
            nodes=(MoveNumber(1), *_moves("e4"), Comment("ok")),
            result=GameResult.DRAW,
        )
        assert game_to_pgn(game) == '[Event "x"]\n\n1. e4 {ok} 1/2-1/2\n'

    def test_tagless_game_text(self) -> None:
        assert game_to_pgn(Game((), (), GameResult.OTHER)) == "*\n"

    def test_reparse_is_identity(self) -> None:
        sources = [
            ANNOTATED_GAME,
            "1. e4 e5 (1... c5 2. Nf3 (2. c3)) 2. Nf3 $1 *",
            '[Event "x"]\n%after tags\n1. e4\n%engine\ne5 ;brace } inside\n1/2-1/2',
            "12 e4 12.. e5 Xyz9 O-O-O+ -- 0-1",
            "%x\n1. e4 *",
            "1. e4!!! e5 *",
        ]
        for text in sources:
            game = parse_pgn_game(text)
            assert parse_pgn_game(game_to_pgn(game)) == game, text

    def test_many_games_reparse(self) -> None:
        games = parse_pgn(ANNOTATED_GAME + "\n" + '[Event "two"]\n\n1. d4 1-0\n')
        assert parse_pgn(games_to_pgn(games)) == games

    def test_leading_escape_survives_reparse(self) -> None:
        game = Game((), (EscapeComment("x"), MoveNumber(1), *_moves("e4")), GameResult.OTHER)
        assert game_to_pgn(game) == "%x\n1. e4 *\n"
        assert parse_pgn_game(game_to_pgn(game)) == game
