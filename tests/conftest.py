from __future__ import annotations

import os
import sys
from typing import Callable, Dict, Optional

import pytest

# Ensure the repository root is on sys.path for `from obstacle_chess...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from obstacle_chess.engine.board import WHITE, Board
from obstacle_chess.engine.config import GameConfig
from obstacle_chess.engine.game import Game
from obstacle_chess.engine.move import str_to_square


def build_board(
    pieces: Dict[str, str],
    *,
    active: str = WHITE,
    obstacles: Optional[Dict[str, str]] = None,
    walls: Optional[Dict[str, str]] = None,
) -> Board:
    """Board with only the given pieces, obstacles and walls (keyed by square name)."""
    board = Board.empty()
    for name, piece in pieces.items():
        board.set_piece(str_to_square(name), piece)
    for name, cell in (obstacles or {}).items():
        r, c = str_to_square(name)
        board.obstacles[r][c] = cell
    for name, cell in (walls or {}).items():
        r, c = str_to_square(name)
        board.walls[r][c] = cell
    board.side_to_move = active
    return board


@pytest.fixture
def make_game() -> Callable[..., Game]:
    def _make(pieces: Dict[str, str], *, config: Optional[GameConfig] = None, **kwargs) -> Game:
        return Game(board=build_board(pieces, **kwargs), config=config or GameConfig())

    return _make
