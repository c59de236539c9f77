from __future__ import annotations

from obstacle_chess.engine.board import BLACK, WHITE
from obstacle_chess.engine.game import Game
from obstacle_chess.engine.geometry import wall_between, wall_diag
from obstacle_chess.engine.move import str_to_square


def test_default_opening_e4() -> None:
    game = Game.new()
    game.submit("e2-e4")
    assert game.status().active == BLACK
    assert game.board.ep_square == str_to_square("e4")
    assert game.board.pieces[6][4] == "."
    assert game.board.pieces[4][4] == "P"


def test_startpos_pawn_and_knight_targets() -> None:
    game = Game.new()
    assert game.legal_targets("e2") == {"e3", "e4"}
    assert game.legal_targets("g1") == {"f3", "h3"}
    assert game.legal_targets("e1") == set()
    assert game.legal_targets("e4") == set()


def test_south_wall_blocks_rook(make_game) -> None:
    game = make_game({"a1": "R", "h2": "K", "h8": "k"}, walls={"a3": "_"})
    found = game.legal_targets("a1")
    assert "a2" in found
    assert "a3" not in found
    assert "a4" not in found
    assert {"b1", "c1", "h1"} <= found


def test_wall_between_pawn_and_empty_square_blocks_push(make_game) -> None:
    game = make_game({"e2": "P", "e1": "K", "e8": "k"}, walls={"e3": "_"})
    assert game.legal_targets("e2") == set()


def test_wall_before_second_step_allows_single_push(make_game) -> None:
    game = make_game({"e2": "P", "e1": "K", "e8": "k"}, walls={"e4": "_"})
    assert game.legal_targets("e2") == {"e3"}


def test_knight_ignores_walls(make_game) -> None:
    game = make_game({"d4": "N", "h1": "K", "h8": "k"})
    for row in game.board.walls:
        row[:] = ["L"] * 8
    assert game.legal_targets("d4") == {"b3", "b5", "c2", "c6", "e2", "e6", "f3", "f5"}


def test_west_wall_blocks_king_step(make_game) -> None:
    game = make_game({"e4": "K", "h8": "k"}, walls={"f4": "|"})
    found = game.legal_targets("e4")
    assert "f4" not in found
    assert "d4" in found
    assert "f5" in found


def test_corner_wall_only_blocks_northeast_diagonal(make_game) -> None:
    game = make_game({"e4": "B", "a1": "K", "h8": "k"}, walls={"f5": "L", "d3": "L"})
    found = game.legal_targets("e4")
    # f5 is the NE neighbour and carries the corner
    assert "f5" not in found
    assert "g6" not in found
    # d3 is the SW neighbour; only the NE square of the pair matters
    assert "d3" in found
    assert "d5" in found


def test_wall_diag_direction() -> None:
    walls = [["."] * 8 for _ in range(8)]
    walls[3][5] = "L"
    assert wall_diag(walls, (4, 4), (3, 5))
    assert wall_diag(walls, (3, 5), (4, 4))
    assert not wall_diag(walls, (3, 5), (2, 6))
    assert not wall_between(walls, (4, 4), (3, 5))


def test_wall_shields_king_from_rook(make_game) -> None:
    open_file = make_game({"e1": "K", "e8": "r", "a8": "k"})
    assert open_file.in_check(WHITE)
    walled = make_game({"e1": "K", "e8": "r", "a8": "k"}, walls={"e4": "_"})
    assert not walled.in_check(WHITE)


def test_pawn_attacks_diagonally_only(make_game) -> None:
    game = make_game({"e4": "K", "e5": "p", "a8": "k"})
    assert not game.in_check(WHITE)
    game = make_game({"e4": "K", "d5": "p", "a8": "k"})
    assert game.in_check(WHITE)
