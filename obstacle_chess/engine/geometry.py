from __future__ import annotations

from typing import List, Optional

from .board import BLACK, BOTH_WALLS, EMPTY, SOUTH_WALL, WEST_WALL, WHITE
from .move import Square


def color_of(piece: str) -> Optional[str]:
    if piece == EMPTY:
        return None
    return WHITE if piece.isupper() else BLACK


def is_enemy(piece: str, other: str) -> bool:
    """Return True if both cells hold pieces of opposite colours."""
    if piece == EMPTY or other == EMPTY:
        return False
    return piece.isupper() != other.isupper()


def wall_between(walls: List[List[str]], a: Square, b: Square) -> bool:
    """Return True if a wall lies on the edge shared by two orthogonal neighbours.

    The wall between ``(r, c)`` and ``(r, c+1)`` is stored at ``(r, c+1)`` as
    ``|``; the wall between ``(r, c)`` and ``(r+1, c)`` at ``(r, c)`` as ``_``.
    Non-adjacent squares never have a wall between them.
    """
    (r1, c1), (r2, c2) = a, b
    if r1 == r2 and abs(c1 - c2) == 1:
        cell = walls[r1][max(c1, c2)]
        return cell in (WEST_WALL, BOTH_WALLS)
    if c1 == c2 and abs(r1 - r2) == 1:
        cell = walls[min(r1, r2)][c1]
        return cell in (SOUTH_WALL, BOTH_WALLS)
    return False


def wall_diag(walls: List[List[str]], a: Square, b: Square) -> bool:
    """Return True if a wall corner closes the diagonal between ``a`` and ``b``.

    Walls only sit on west and south edges, so the only closed corner is the
    south-west corner of a cell carrying ``L``. Hence only the NE<->SW
    diagonal is ever blocked, and only when the north-east square is ``L``.
    """
    (r1, c1), (r2, c2) = a, b
    if abs(r1 - r2) != 1 or abs(c1 - c2) != 1:
        return False
    if r1 < r2 and c1 > c2:
        return walls[r1][c1] == BOTH_WALLS
    if r2 < r1 and c2 > c1:
        return walls[r2][c2] == BOTH_WALLS
    return False


def step_blocked(walls: List[List[str]], a: Square, b: Square) -> bool:
    """Wall test for a single king-like step, orthogonal or diagonal."""
    if a[0] == b[0] or a[1] == b[1]:
        return wall_between(walls, a, b)
    return wall_diag(walls, a, b)
