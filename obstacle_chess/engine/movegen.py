from __future__ import annotations

from typing import Set

from .board import EMPTY, WHITE, Board
from .geometry import color_of, is_enemy, step_blocked, wall_between, wall_diag
from .move import Square, on_board


KNIGHT_STEPS = ((-1, -2), (-2, -1), (-2, 1), (-1, 2), (1, -2), (2, -1), (2, 1), (1, 2))
DIAGONALS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ORTHOGONALS = ((-1, 0), (1, 0), (0, -1), (0, 1))
KING_STEPS = DIAGONALS + ORTHOGONALS


def targets(board: Board, sq: Square) -> Set[Square]:
    """Return the destinations the piece on ``sq`` could reach.

    Walls, captures and en passant are honoured; obstacle activation, check
    and castling are not (those belong to the executor).

    Args:
        board (Board): Position to inspect.
        sq (Square): Origin square; an empty square yields no targets.

    Returns:
        Set[Square]: Reachable ``(row, col)`` squares.
    """
    piece = board.piece_at(sq)
    kind = piece.upper()
    if kind == "P":
        return _pawn_targets(board, sq)
    if kind == "N":
        return _leaper_targets(board, sq, KNIGHT_STEPS, walls_block=False)
    if kind == "K":
        return _leaper_targets(board, sq, KING_STEPS, walls_block=True)
    if kind == "R":
        return _slider_targets(board, sq, ORTHOGONALS)
    if kind == "B":
        return _slider_targets(board, sq, DIAGONALS)
    if kind == "Q":
        return _slider_targets(board, sq, KING_STEPS)
    return set()


def pawn_direction(piece: str) -> int:
    return -1 if color_of(piece) == WHITE else 1


def _pawn_targets(board: Board, sq: Square) -> Set[Square]:
    out: Set[Square] = set()
    r, c = sq
    piece = board.piece_at(sq)
    d = pawn_direction(piece)
    start_row = 6 if d == -1 else 1
    one = (r + d, c)
    if not on_board(*one):
        return out

    # Pushes
    if board.piece_at(one) == EMPTY and not wall_between(board.walls, sq, one):
        out.add(one)
        two = (r + 2 * d, c)
        if r == start_row and board.piece_at(two) == EMPTY and not wall_between(board.walls, one, two):
            out.add(two)

    # Captures
    for dc in (-1, 1):
        diag = (r + d, c + dc)
        if not on_board(*diag):
            continue
        if is_enemy(piece, board.piece_at(diag)) and not wall_diag(board.walls, sq, diag):
            out.add(diag)

    # En passant: the vulnerable pawn sits beside us, we land behind it
    ep = board.ep_square
    if ep is not None and ep[0] == r and abs(ep[1] - c) == 1:
        victim = board.piece_at(ep)
        if victim.upper() == "P" and is_enemy(piece, victim):
            behind = (ep[0] + d, ep[1])
            if board.piece_at(behind) == EMPTY and not wall_diag(board.walls, sq, behind):
                out.add(behind)
    return out


def _leaper_targets(board: Board, sq: Square, steps, *, walls_block: bool) -> Set[Square]:
    out: Set[Square] = set()
    piece = board.piece_at(sq)
    r, c = sq
    for dr, dc in steps:
        to = (r + dr, c + dc)
        if not on_board(*to):
            continue
        occupant = board.piece_at(to)
        if occupant != EMPTY and not is_enemy(piece, occupant):
            continue
        if walls_block and step_blocked(board.walls, sq, to):
            continue
        out.add(to)
    return out


def _slider_targets(board: Board, sq: Square, directions) -> Set[Square]:
    out: Set[Square] = set()
    piece = board.piece_at(sq)
    for dr, dc in directions:
        prev = sq
        while True:
            to = (prev[0] + dr, prev[1] + dc)
            if not on_board(*to):
                break
            if step_blocked(board.walls, prev, to):
                break
            occupant = board.piece_at(to)
            if occupant == EMPTY:
                out.add(to)
                prev = to
                continue
            if is_enemy(piece, occupant):
                out.add(to)
            break
    return out


def is_attacked(board: Board, sq: Square, by: str) -> bool:
    """Return True if any piece of colour ``by`` could capture on ``sq``.

    Pawns attack diagonally only, so empty squares are judged correctly too
    (castling transit test).
    """
    for origin, piece in board.squares():
        if color_of(piece) != by:
            continue
        if piece.upper() == "P":
            d = pawn_direction(piece)
            if sq[0] == origin[0] + d and abs(sq[1] - origin[1]) == 1:
                if not wall_diag(board.walls, origin, sq):
                    return True
            continue
        if piece.upper() in ("K", "N"):
            # Leapers: target generation would skip a friendly-occupied square
            steps = KING_STEPS if piece.upper() == "K" else KNIGHT_STEPS
            for dr, dc in steps:
                if (origin[0] + dr, origin[1] + dc) == sq:
                    if piece.upper() == "N" or not step_blocked(board.walls, origin, sq):
                        return True
            continue
        if _slider_reaches(board, origin, sq, piece.upper()):
            return True
    return False


def _slider_reaches(board: Board, origin: Square, sq: Square, kind: str) -> bool:
    dr = sq[0] - origin[0]
    dc = sq[1] - origin[1]
    if dr == 0 and dc == 0:
        return False
    straight = dr == 0 or dc == 0
    diagonal = abs(dr) == abs(dc)
    if not (straight or diagonal):
        return False
    if kind == "R" and not straight:
        return False
    if kind == "B" and not diagonal:
        return False
    step = ((dr > 0) - (dr < 0), (dc > 0) - (dc < 0))
    prev = origin
    while True:
        to = (prev[0] + step[0], prev[1] + step[1])
        if step_blocked(board.walls, prev, to):
            return False
        if to == sq:
            return True
        if board.piece_at(to) != EMPTY:
            return False
        prev = to
