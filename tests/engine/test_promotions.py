from __future__ import annotations

import pytest

from obstacle_chess.engine.board import BLACK
from obstacle_chess.engine.config import GameConfig, PromotionMode
from obstacle_chess.engine.errors import IllegalMove
from obstacle_chess.engine.game import Game


PIECES = {"a7": "P", "h1": "K", "h6": "k"}


def test_auto_queen(make_game) -> None:
    game = make_game(dict(PIECES))
    game.submit("a7-a8")
    assert game.board.pieces[0][0] == "Q"
    assert game.status().active == BLACK


def test_auto_queen_can_be_replaced(make_game) -> None:
    game = make_game(dict(PIECES))
    game.submit("a7-a8")
    game.submit("=N")
    assert game.board.pieces[0][0] == "N"
    assert game.history_labels() == ["a7-a8", "=N"]
    with pytest.raises(IllegalMove):
        game.submit("=R")


def test_ask_mode_waits_for_choice(make_game) -> None:
    game = make_game(dict(PIECES), config=GameConfig(promotion=PromotionMode.ASK))
    game.submit("a7-a8")
    assert game.board.pieces[0][0] == "P"
    assert game.board.pending_promotion == (0, 0)
    with pytest.raises(IllegalMove):
        game.submit("h6-h5")
    game.submit("=r")
    assert game.board.pieces[0][0] == "R"
    assert game.board.pending_promotion is None
    game.submit("h6-h5")


def test_ask_mode_detects_mate_after_choice(make_game) -> None:
    pieces = {"b7": "P", "a1": "K", "d8": "k", "c7": "p", "d7": "p", "e7": "p"}
    game = make_game(pieces, config=GameConfig(promotion=PromotionMode.ASK))
    game.submit("b7-b8")
    assert not game.status().checkmate
    game.submit("=Q")
    assert game.status().check_black
    assert game.status().checkmate


def test_promotion_without_pawn_rejected() -> None:
    with pytest.raises(IllegalMove):
        Game.new().submit("=Q")


def test_black_promotes_to_lowercase(make_game) -> None:
    game = make_game({"h2": "p", "a1": "K", "a8": "k"}, active=BLACK)
    game.submit("h2-h1")
    assert game.board.pieces[7][7] == "q"
    game.submit("=B")
    assert game.board.pieces[7][7] == "b"
