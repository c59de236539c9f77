from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .board import BLACK, WHITE, Board
from .move import Square


Rows = Tuple[str, ...]


def _freeze(grid: List[List[str]]) -> Rows:
    return tuple("".join(row) for row in grid)


def _thaw(rows: Rows) -> List[List[str]]:
    return [list(row) for row in rows]


@dataclass(frozen=True)
class Snapshot:
    """Immutable deep copy of a ``Board``.

    Grids are stored as tuples of row strings so a snapshot never aliases the
    live board and the piece grid can be compared and hashed directly (used
    by the threefold-repetition detector).
    """

    pieces: Rows
    obstacles: Rows
    walls: Rows
    side_to_move: str
    has_moved: Tuple[Tuple[bool, ...], Tuple[bool, ...]]
    ep_square: Optional[Square]
    fifty_counter: int
    walls_remaining: Tuple[int, int]
    mine_used: Tuple[bool, bool]
    trap_used: Tuple[bool, bool]
    check: Tuple[bool, bool]
    phase: str
    pending_promotion: Optional[Square]
    result: Optional[str]

    @classmethod
    def capture(cls, board: Board) -> "Snapshot":
        return cls(
            pieces=_freeze(board.pieces),
            obstacles=_freeze(board.obstacles),
            walls=_freeze(board.walls),
            side_to_move=board.side_to_move,
            has_moved=(tuple(board.has_moved[WHITE]), tuple(board.has_moved[BLACK])),
            ep_square=board.ep_square,
            fifty_counter=board.fifty_counter,
            walls_remaining=(board.walls_remaining[WHITE], board.walls_remaining[BLACK]),
            mine_used=(board.mine_used[WHITE], board.mine_used[BLACK]),
            trap_used=(board.trap_used[WHITE], board.trap_used[BLACK]),
            check=(board.check[WHITE], board.check[BLACK]),
            phase=board.phase,
            pending_promotion=board.pending_promotion,
            result=board.result,
        )

    def to_board(self) -> Board:
        """Build a fresh ``Board`` holding this snapshot's state."""
        board = Board()
        self.apply_to(board)
        return board

    def apply_to(self, board: Board) -> None:
        """Overwrite every field of ``board`` with this snapshot's state."""
        board.pieces = _thaw(self.pieces)
        board.obstacles = _thaw(self.obstacles)
        board.walls = _thaw(self.walls)
        board.side_to_move = self.side_to_move
        board.has_moved = {WHITE: list(self.has_moved[0]), BLACK: list(self.has_moved[1])}
        board.ep_square = self.ep_square
        board.fifty_counter = self.fifty_counter
        board.walls_remaining = {WHITE: self.walls_remaining[0], BLACK: self.walls_remaining[1]}
        board.mine_used = {WHITE: self.mine_used[0], BLACK: self.mine_used[1]}
        board.trap_used = {WHITE: self.trap_used[0], BLACK: self.trap_used[1]}
        board.check = {WHITE: self.check[0], BLACK: self.check[1]}
        board.phase = self.phase
        board.pending_promotion = self.pending_promotion
        board.result = self.result


@dataclass(frozen=True)
class Entry:
    label: str
    snapshot: Snapshot


class History:
    """Stack of ``(label, snapshot)`` pairs, oldest first.

    Each snapshot holds the state *before* the action named by its label, so
    popping an entry and applying its snapshot undoes exactly that action.
    """

    def __init__(self) -> None:
        self._entries: List[Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def push(self, label: str, board: Board) -> None:
        self._entries.append(Entry(label, Snapshot.capture(board)))

    def pop(self) -> Entry:
        if not self._entries:
            raise IndexError("history is empty")
        return self._entries.pop()

    def truncate(self, index: int) -> Entry:
        """Drop entries ``index`` and later; return the entry at ``index``."""
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"no restore point {index}")
        entry = self._entries[index]
        del self._entries[index:]
        return entry

    def labels(self) -> List[str]:
        return [e.label for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()
