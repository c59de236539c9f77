from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .move import Square


WHITE = "w"
BLACK = "b"
COLORS = (WHITE, BLACK)

EMPTY = "."

# Obstacle grid cells
TRAP = "D"
OPEN_TRAP = "O"
MINE = "M"
MINE_AND_TRAP = "X"
OBSTACLES = {TRAP, OPEN_TRAP, MINE, MINE_AND_TRAP}

# Wall grid cells; a cell owns its west and south edges
WEST_WALL = "|"
SOUTH_WALL = "_"
BOTH_WALLS = "L"

PIECES = set("KQRBNPkqrbnp")

# has_moved slots
KING_SLOT = 0
KINGSIDE_ROOK = 1
QUEENSIDE_ROOK = 2

PLACEMENT = "placement"
PLAYING = "playing"

BACK_RANK = "rnbqkbnr"


def other(color: str) -> str:
    return BLACK if color == WHITE else WHITE


def _grid(fill: str = EMPTY) -> List[List[str]]:
    return [[fill] * 8 for _ in range(8)]


@dataclass
class Board:
    """Complete mutable state of one game.

    Notes:
    - Three co-indexed 8x8 grids addressed by ``(row, col)``; row 0 is rank 8,
      col 0 is file a.
    - Scalars are keyed by colour (``"w"``/``"b"``) so both sides read alike.
    - ``ep_square`` names the pawn that just advanced two ranks, not the
      square behind it.
    """

    pieces: List[List[str]] = field(default_factory=_grid)
    obstacles: List[List[str]] = field(default_factory=_grid)
    walls: List[List[str]] = field(default_factory=_grid)
    side_to_move: str = WHITE
    has_moved: Dict[str, List[bool]] = field(
        default_factory=lambda: {WHITE: [False, False, False], BLACK: [False, False, False]}
    )
    ep_square: Optional[Square] = None
    fifty_counter: int = 0
    walls_remaining: Dict[str, int] = field(default_factory=lambda: {WHITE: 3, BLACK: 3})
    mine_used: Dict[str, bool] = field(default_factory=lambda: {WHITE: False, BLACK: False})
    trap_used: Dict[str, bool] = field(default_factory=lambda: {WHITE: False, BLACK: False})
    check: Dict[str, bool] = field(default_factory=lambda: {WHITE: False, BLACK: False})
    phase: str = PLACEMENT
    # Square of a pawn that reached the last rank and may still be (re)promoted
    pending_promotion: Optional[Square] = None
    # Terminal condition that ended the game, if any
    result: Optional[str] = None

    @classmethod
    def empty(cls, wall_budget: int = 3) -> "Board":
        """Create a board without pieces, obstacles or walls."""
        board = cls()
        board.walls_remaining = {WHITE: wall_budget, BLACK: wall_budget}
        return board

    @classmethod
    def startpos(cls, wall_budget: int = 3) -> "Board":
        """Create a board in the standard starting layout, placement phase.

        Returns:
            Board: White to move with every castling right available.
        """
        board = cls.empty(wall_budget)
        board.pieces[0] = list(BACK_RANK)
        board.pieces[1] = ["p"] * 8
        board.pieces[6] = ["P"] * 8
        board.pieces[7] = list(BACK_RANK.upper())
        return board

    def piece_at(self, sq: Square) -> str:
        return self.pieces[sq[0]][sq[1]]

    def set_piece(self, sq: Square, piece: str) -> None:
        self.pieces[sq[0]][sq[1]] = piece

    def obstacle_at(self, sq: Square) -> str:
        return self.obstacles[sq[0]][sq[1]]

    def wall_at(self, sq: Square) -> str:
        return self.walls[sq[0]][sq[1]]

    def squares(self) -> Iterator[Tuple[Square, str]]:
        """Yield ``((row, col), piece)`` for every occupied square."""
        for r in range(8):
            for c in range(8):
                p = self.pieces[r][c]
                if p != EMPTY:
                    yield (r, c), p

    def king_square(self, color: str) -> Optional[Square]:
        target = "K" if color == WHITE else "k"
        for sq, p in self.squares():
            if p == target:
                return sq
        return None

    def walls_on_board(self) -> int:
        """Number of wall edges on the board, ``L`` counting as two."""
        total = 0
        for row in self.walls:
            for w in row:
                if w == BOTH_WALLS:
                    total += 2
                elif w != EMPTY:
                    total += 1
        return total

    def castling_rights(self) -> str:
        """Return the four-character ``+``/``-`` castling field of the board file.

        Order: white king-side, white queen-side, black king-side, black
        queen-side. A side is disabled when the king or that rook has moved.
        """
        out = []
        for color in COLORS:
            moved = self.has_moved[color]
            for slot in (KINGSIDE_ROOK, QUEENSIDE_ROOK):
                out.append("-" if moved[KING_SLOT] or moved[slot] else "+")
        return "".join(out)

    def set_castling_rights(self, rights: str) -> None:
        """Inverse of ``castling_rights``; the king slot is set when both sides are off."""
        for i, color in enumerate(COLORS):
            king_side = rights[2 * i] == "-"
            queen_side = rights[2 * i + 1] == "-"
            self.has_moved[color] = [king_side and queen_side, king_side, queen_side]
