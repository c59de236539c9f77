from __future__ import annotations

from datetime import datetime

import pytest

from obstacle_chess.engine.board import BLACK, KING_SLOT, KINGSIDE_ROOK, PLACEMENT, QUEENSIDE_ROOK, WHITE
from obstacle_chess.engine.boardfile import content_lines, format_board, parse_board, parse_cell
from obstacle_chess.engine.errors import BoardFileError, NotationError
from obstacle_chess.engine.game import Game


START = """% start position
r n b q k b n r
p p p p p p p p
. . . . . . . .
. . . . . . . .
. . . . . . . .
. . . . . . . .
P P P P P P P P
R N B Q K B N R
w 3 3 ++++ - 0
"""

OBSTACLES = """r n b q k . n r
p p p p . p p p
. . D . . . . .
. . b . p . . .
. . | M P . . .
. . . . . N . .
P P P P _ P P P
R N B Q K B |_ R
b 2 1 +-+- e4 3
"""


def test_startpos_save_matches_file_layout() -> None:
    text = Game.new().save_board()
    lines = text.splitlines()
    assert lines[0].startswith("% Game Saved: ")
    assert lines[-1] == "% --- End ---"
    assert content_lines(text) == content_lines(START)


def test_load_startpos() -> None:
    game = Game.from_board_text(START)
    assert game.status().phase == PLACEMENT
    assert game.status().active == WHITE
    assert game.board.castling_rights() == "++++"
    assert game.snapshot_count() == 0


def test_load_obstacles_and_status() -> None:
    board = parse_board(OBSTACLES)
    assert board.obstacles[2][2] == "D"
    assert board.obstacles[4][3] == "M"
    assert board.walls[4][2] == "|"
    assert board.walls[6][4] == "_"
    assert board.walls[7][6] == "L"
    assert board.pieces[4][4] == "P"
    assert board.side_to_move == BLACK
    assert board.walls_remaining == {WHITE: 2, BLACK: 1}
    assert board.ep_square == (4, 4)
    assert board.fifty_counter == 3
    assert board.has_moved[WHITE] == [False, False, True]
    assert board.has_moved[BLACK] == [False, False, True]


def test_round_trip_is_identity() -> None:
    game = Game.from_board_text(OBSTACLES)
    assert content_lines(game.save_board()) == content_lines(OBSTACLES)


@pytest.mark.parametrize(
    "token,cell",
    [
        (".", (".", ".", ".")),
        ("k", ("k", ".", ".")),
        ("X", (".", "X", ".")),
        ("|_", (".", ".", "L")),
        ("P|", ("P", ".", "|")),
        ("nD", ("n", "D", ".")),
        ("M_", (".", "M", "_")),
        ("qO|_", ("q", "O", "L")),
    ],
)
def test_parse_cell(token: str, cell: tuple[str, str, str]) -> None:
    assert parse_cell(token) == cell


@pytest.mark.parametrize("token", ["Z", "PP", "P|x", "_|", "DM", "1"])
def test_parse_cell_rejects_garbage(token: str) -> None:
    with pytest.raises(NotationError):
        parse_cell(token)


def test_multi_layer_cells_survive_round_trip(make_game) -> None:
    game = make_game({"e1": "K", "e8": "k", "d4": "P"}, obstacles={"d4": "D", "e5": "M"}, walls={"d4": "L", "e5": "_"})
    text = game.save_board()
    rows = content_lines(text)
    assert rows[4].split()[3] == "PD|_"
    assert rows[3].split()[4] == "M_"
    reloaded = Game.from_board_text(text)
    assert reloaded.board.pieces == game.board.pieces
    assert reloaded.board.obstacles == game.board.obstacles
    assert reloaded.board.walls == game.board.walls


def test_castling_field_reflects_moved_pieces() -> None:
    game = Game.new()
    for mv in ("g1-f3", "b8-c6", "h1-g1", "a8-b8"):
        game.submit(mv)
    status_line = content_lines(game.save_board())[8]
    assert status_line == "w 3 3 -++- - 4"
    reloaded = Game.from_board_text(game.save_board())
    assert reloaded.board.has_moved[WHITE][KINGSIDE_ROOK]
    assert not reloaded.board.has_moved[WHITE][KING_SLOT]
    assert reloaded.board.has_moved[BLACK][QUEENSIDE_ROOK]


def test_load_computes_check_and_checkmate() -> None:
    text = START.replace("p p p p p p p p", "p p p p p Q p p").replace("w 3 3", "b 3 3")
    game = Game.from_board_text(text)
    assert game.status().check_black
    assert not game.status().checkmate


def test_wrong_line_count() -> None:
    text = "\n".join(START.splitlines()[:-1])
    with pytest.raises(BoardFileError):
        parse_board(text)


@pytest.mark.parametrize(
    "old,new",
    [
        ("R N B Q K B N R", "R N B Q K B N"),
        ("R N B Q K B N R", "R N B Q K B N Y"),
        ("w 3 3 ++++ - 0", "x 3 3 ++++ - 0"),
        ("w 3 3 ++++ - 0", "w 3 ++++ - 0"),
        ("w 3 3 ++++ - 0", "w 3 3 +++ - 0"),
        ("w 3 3 ++++ - 0", "w 3 3 ++++ e9 0"),
        ("w 3 3 ++++ - 0", "w -1 3 ++++ - 0"),
        ("w 3 3 ++++ - 0", "w 3 3 ++++ - x"),
        ("R N B Q K B N R", "R N B Q . B N R"),
    ],
)
def test_malformed_board_files(old: str, new: str) -> None:
    with pytest.raises(NotationError):
        parse_board(START.replace(old, new))


def test_failed_load_keeps_previous_state() -> None:
    game = Game.new()
    game.submit("e2-e4")
    with pytest.raises(NotationError):
        game.load_board(START.replace("w 3 3", "q 3 3"))
    assert game.snapshot_count() == 1
    assert game.board.pieces[4][4] == "P"


def test_save_header_timestamp() -> None:
    text = format_board(Game.new().board, now=datetime(2024, 3, 9, 14, 5, 7))
    assert text.splitlines()[0] == "% Game Saved: 09-March-2024 - 14:05:07"


def test_file_helpers(tmp_path) -> None:
    path = tmp_path / "board.txt"
    game = Game.new()
    game.submit("d2-d4")
    game.save_board_file(str(path))
    other = Game.new()
    other.load_board_file(str(path))
    assert other.board.pieces == game.board.pieces
    assert other.status().active == BLACK
    with pytest.raises(BoardFileError):
        other.load_board_file(str(tmp_path / "missing.txt"))
