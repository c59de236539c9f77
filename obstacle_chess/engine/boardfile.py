from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple

from .board import (
    BLACK,
    BOTH_WALLS,
    EMPTY,
    OBSTACLES,
    PIECES,
    SOUTH_WALL,
    WEST_WALL,
    WHITE,
    Board,
)
from .errors import BoardFileError, NotationError
from .move import square_to_str, str_to_square


COMMENT = "%"
END_MARKER = "% --- End ---"

_WALL_TOKENS = {"": EMPTY, WEST_WALL: WEST_WALL, SOUTH_WALL: SOUTH_WALL, "|_": BOTH_WALLS}


def read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise BoardFileError(f"could not read {path}: {e}") from e


def write_text(path: str, text: str) -> None:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise BoardFileError(f"could not write {path}: {e}") from e


def timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%d-%B-%Y - %H:%M:%S")


def content_lines(text: str) -> List[str]:
    """Return the stripped lines that are neither blank nor ``%`` comments."""
    out = []
    for line in text.splitlines():
        s = line.strip()
        if s and not s.startswith(COMMENT):
            out.append(s)
    return out


def parse_cell(token: str) -> Tuple[str, str, str]:
    """Split a board-file token into ``(piece, obstacle, wall)`` cells.

    A token is an optional piece letter, then an optional obstacle letter,
    then an optional wall part (``|``, ``_`` or ``|_``); ``.`` is an empty
    cell. Examples: ``P``, ``M``, ``|_``, ``kD``, ``P|``, ``X_``.

    Raises:
        NotationError: If the token does not follow that grammar.
    """
    if token == EMPTY:
        return EMPTY, EMPTY, EMPTY
    i = 0
    piece = obstacle = EMPTY
    if i < len(token) and token[i] in PIECES:
        piece = token[i]
        i += 1
    if i < len(token) and token[i] in OBSTACLES:
        obstacle = token[i]
        i += 1
    rest = token[i:]
    if rest not in _WALL_TOKENS or (i == 0 and not rest):
        raise NotationError(f"invalid board token: {token!r}")
    return piece, obstacle, _WALL_TOKENS[rest]


def format_cell(piece: str, obstacle: str, wall: str) -> str:
    token = ""
    if piece != EMPTY:
        token += piece
    if obstacle != EMPTY:
        token += obstacle
    if wall == BOTH_WALLS:
        token += "|_"
    elif wall != EMPTY:
        token += wall
    return token or EMPTY


def parse_board(text: str) -> Board:
    """Build a ``Board`` from board-file text.

    The text holds eight rows of eight tokens (rank 8 first) followed by a
    status line ``<active> <walls-w> <walls-b> <castling> <ep> <fifty>``.
    Lines starting with ``%`` and blank lines are ignored. The result is in
    the placement phase with check flags unset.

    Raises:
        BoardFileError: If there are not exactly nine content lines.
        NotationError: If a token, a row or the status line is malformed.
    """
    lines = content_lines(text)
    if len(lines) != 9:
        raise BoardFileError(f"invalid board file: expected 9 lines, found {len(lines)}")

    board = Board.empty()
    for r, line in enumerate(lines[:8]):
        tokens = line.split()
        if len(tokens) != 8:
            raise NotationError(f"invalid board file: rank {8 - r} has {len(tokens)} squares")
        for c, token in enumerate(tokens):
            piece, obstacle, wall = parse_cell(token)
            board.pieces[r][c] = piece
            board.obstacles[r][c] = obstacle
            board.walls[r][c] = wall

    kings = [p for row in board.pieces for p in row if p in ("K", "k")]
    if sorted(kings) != ["K", "k"]:
        raise NotationError("invalid board file: need exactly one king per side")

    _parse_status(board, lines[8])
    return board


def _parse_status(board: Board, line: str) -> None:
    fields = line.split()
    if len(fields) != 6:
        raise NotationError(f"invalid status line: {line!r}")
    active, walls_w, walls_b, castling, ep, fifty = fields
    if active not in (WHITE, BLACK):
        raise NotationError(f"invalid active player: {active!r}")
    if len(castling) != 4 or any(ch not in "+-" for ch in castling):
        raise NotationError(f"invalid castling field: {castling!r}")
    try:
        counts = [int(walls_w), int(walls_b), int(fifty)]
    except ValueError:
        raise NotationError(f"invalid status line: {line!r}")
    if any(n < 0 for n in counts):
        raise NotationError(f"invalid status line: {line!r}")

    board.side_to_move = active
    board.walls_remaining = {WHITE: counts[0], BLACK: counts[1]}
    board.set_castling_rights(castling)
    board.ep_square = None if ep == "-" else str_to_square(ep)
    board.fifty_counter = counts[2]


def format_board(board: Board, now: Optional[datetime] = None) -> str:
    """Serialize ``board`` in board-file form, comment header and footer included."""
    lines = [f"% Game Saved: {timestamp(now)}"]
    for r in range(8):
        lines.append(
            " ".join(
                format_cell(board.pieces[r][c], board.obstacles[r][c], board.walls[r][c])
                for c in range(8)
            )
        )
    ep = square_to_str(board.ep_square) if board.ep_square is not None else "-"
    lines.append(
        f"{board.side_to_move} {board.walls_remaining[WHITE]} {board.walls_remaining[BLACK]} "
        f"{board.castling_rights()} {ep} {board.fifty_counter}"
    )
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"
