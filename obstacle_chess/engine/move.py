from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import NotationError


# (row, col) with row 0 = rank 8 and col 0 = file a
Square = Tuple[int, int]

FILES = "abcdefgh"
PROMOTION_PIECES = {"Q", "R", "B", "N"}

MOVE = "move"
CASTLE = "castle"
PLACE = "place"
WALL = "wall"
PASS = "pass"
PROMOTE = "promote"

KINGSIDE = "kingside"
QUEENSIDE = "queenside"

PASS_TOKEN = "..."


@dataclass(frozen=True)
class Action:
    """One entry of the action grammar accepted by ``Game.submit``.

    Attributes:
        kind (str): One of ``move``, ``castle``, ``place``, ``wall``, ``pass``
            or ``promote``.
        origin (Optional[Square]): Origin square of a coordinate move.
        target (Optional[Square]): Destination of a move, or the cell a wall,
            mine or trap door is placed on.
        symbol (Optional[str]): ``M``/``D`` for placements, ``|``/``_``/``L``
            for walls, the promotion piece letter for ``=X``, or the castle
            side (``kingside``/``queenside``).
    """

    kind: str
    origin: Optional[Square] = None
    target: Optional[Square] = None
    symbol: Optional[str] = None

    def to_notation(self) -> str:
        """Serialize the action in game-log form.

        Returns:
            str: Canonical text such as ``"e2-e4"``, ``"0-0-0"``, ``"Md5"``,
                ``"|_c3"``, ``"=N"`` or ``"..."``.
        """
        if self.kind == MOVE:
            assert self.origin is not None and self.target is not None
            return square_to_str(self.origin) + "-" + square_to_str(self.target)
        if self.kind == CASTLE:
            return "0-0" if self.symbol == KINGSIDE else "0-0-0"
        if self.kind == PLACE:
            assert self.target is not None
            return f"{self.symbol}{square_to_str(self.target)}"
        if self.kind == WALL:
            assert self.target is not None
            prefix = "|_" if self.symbol == "L" else self.symbol
            return f"{prefix}{square_to_str(self.target)}"
        if self.kind == PROMOTE:
            return f"={self.symbol}"
        return PASS_TOKEN


def parse_action(text: str) -> Action:
    """Parse one action of the game-log grammar.

    Args:
        text (str): Action such as ``"e2-e4"``, ``"0-0"``, ``"Me4"``,
            ``"De3"``, ``"|d4"``, ``"_d4"``, ``"|_d4"``, ``"=Q"`` or ``"..."``.

    Returns:
        Action: Parsed action.

    Raises:
        NotationError: If the text does not match the grammar or names an
            invalid square.
    """
    s = text.strip()
    if not s:
        raise NotationError("empty action")
    if s == PASS_TOKEN:
        return Action(PASS)
    if s == "0-0":
        return Action(CASTLE, symbol=KINGSIDE)
    if s == "0-0-0":
        return Action(CASTLE, symbol=QUEENSIDE)
    if s[0] in ("M", "D"):
        return Action(PLACE, target=str_to_square(s[1:]), symbol=s[0])
    if s.startswith("|_"):
        return Action(WALL, target=str_to_square(s[2:]), symbol="L")
    if s[0] in ("|", "_"):
        return Action(WALL, target=str_to_square(s[1:]), symbol=s[0])
    if s[0] == "=":
        piece = s[1:].upper()
        if len(piece) != 1 or piece not in PROMOTION_PIECES:
            raise NotationError(f"invalid promotion piece: {s[1:]!r}")
        return Action(PROMOTE, symbol=piece)
    parts = s.split("-")
    if len(parts) != 2:
        raise NotationError(f"invalid action: {s!r}")
    origin = str_to_square(parts[0])
    target = str_to_square(parts[1])
    if origin == target:
        raise NotationError(f"origin and destination are the same square: {s!r}")
    return Action(MOVE, origin=origin, target=target)


def str_to_square(s: str) -> Square:
    """Convert file-rank notation into a ``(row, col)`` pair.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: Zero-based ``(row, col)``; row 0 is rank 8.

    Raises:
        NotationError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] not in FILES or s[1] < "1" or s[1] > "8":
        raise NotationError(f"invalid square: {s!r}")
    return 8 - int(s[1]), FILES.index(s[0])


def square_to_str(sq: Square) -> str:
    """Convert a ``(row, col)`` pair into file-rank notation.

    Raises:
        NotationError: If the pair lies off the board.
    """
    row, col = sq
    if not on_board(row, col):
        raise NotationError(f"invalid square index: {sq}")
    return FILES[col] + str(8 - row)


def is_valid_square(s: str) -> bool:
    try:
        str_to_square(s)
    except NotationError:
        return False
    return True


def on_board(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8
