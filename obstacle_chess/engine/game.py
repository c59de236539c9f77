from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

from . import boardfile, gamelog
from .board import (
    BLACK,
    BOTH_WALLS,
    COLORS,
    EMPTY,
    KING_SLOT,
    KINGSIDE_ROOK,
    MINE,
    MINE_AND_TRAP,
    OPEN_TRAP,
    PLACEMENT,
    PLAYING,
    QUEENSIDE_ROOK,
    TRAP,
    WHITE,
    Board,
    other,
)
from .config import GameConfig, PromotionMode
from .errors import (
    EngineError,
    GameOverError,
    IllegalMove,
    NoRestorePoint,
    PhaseError,
    QuotaExceeded,
)
from .geometry import color_of, is_enemy, step_blocked
from .history import History, Snapshot
from .move import (
    CASTLE,
    KINGSIDE,
    MOVE,
    PASS,
    PASS_TOKEN,
    PLACE,
    PROMOTE,
    QUEENSIDE,
    WALL,
    Action,
    Square,
    on_board,
    parse_action,
    square_to_str,
    str_to_square,
)
from .movegen import KING_STEPS, is_attacked, pawn_direction, targets


logger = logging.getLogger(__name__)


CHECKMATE = "checkmate"
STALEMATE = "stalemate"
FIFTY_MOVE = "fifty_move"
THREEFOLD = "threefold"

_RESULT_MESSAGES = {
    CHECKMATE: "checkmate",
    STALEMATE: "stalemate",
    FIFTY_MOVE: "draw due to fifty moves",
    THREEFOLD: "draw due to threefold repetition",
}

# Log labels whose snapshots do not count towards repetition
_NON_BOARD_PREFIXES = ("=", "M", "D", "|", "_")

_TRIAL_LABEL = "?"


class ObstacleEvent(str, Enum):
    TRAP = "trap"
    MINE = "mine"


@dataclass(frozen=True)
class GameStatus:
    active: str
    check_white: bool
    check_black: bool
    checkmate: bool
    stalemate: bool
    fifty_draw: bool
    threefold_draw: bool
    phase: str

    @property
    def game_over(self) -> bool:
        return self.checkmate or self.stalemate or self.fifty_draw or self.threefold_draw


@dataclass
class Game:
    """Rules engine and state machine for obstacle chess.

    Responsibility: validate and commit actions, keep the snapshot history
    used for rollback and undo, detect terminal conditions, and read/write
    the board-file and game-log formats.

    Every action is applied tentatively on top of a pushed snapshot; if the
    result is illegal the snapshot is popped and restored, so a rejected
    action leaves the state exactly as it was.
    """

    board: Board
    config: GameConfig = field(default_factory=GameConfig)
    history: History = field(default_factory=History)
    _obstacle_event: Optional[ObstacleEvent] = field(default=None, repr=False)
    _ep_capture: Optional[Square] = field(default=None, repr=False)

    @classmethod
    def new(cls, config: Optional[GameConfig] = None) -> "Game":
        config = config or GameConfig()
        return cls(board=Board.startpos(config.wall_budget), config=config)

    @classmethod
    def from_board_text(cls, text: str, config: Optional[GameConfig] = None) -> "Game":
        game = cls.new(config)
        game.load_board(text)
        return game

    # --- Lifecycle ---
    def new_game(self) -> None:
        """Reset to the standard layout in the placement phase."""
        self.board = Board.startpos(self.config.wall_budget)
        self.history.clear()
        self._obstacle_event = None
        self._ep_capture = None

    def load_board(self, text: str) -> None:
        """Replace the full state with the position described by board-file text.

        Raises:
            BoardFileError: If the text does not have nine non-comment lines.
            NotationError: If a token or the status line is malformed.
        """
        board = boardfile.parse_board(text)
        self.board = board
        self.history.clear()
        self._obstacle_event = None
        self._ep_capture = None
        for color in COLORS:
            board.check[color] = self.in_check(color)
        self._detect_end()
        logger.info("board loaded, %s to move", _color_name(board.side_to_move))

    def save_board(self) -> str:
        return boardfile.format_board(self.board)

    def load_log(self, text: str) -> int:
        """Replay a game log on top of the current state.

        A first action of ``...`` while white is active marks black as the
        first mover. Every other line is submitted; failures are counted and
        replay continues.

        Returns:
            int: Number of actions that were rejected.
        """
        actions = gamelog.parse_log(text)
        failed = 0
        for i, line in enumerate(actions):
            if i == 0 and line == PASS_TOKEN and self.board.side_to_move == WHITE:
                self.board.side_to_move = BLACK
                continue
            try:
                self.submit(line)
            except EngineError:
                failed += 1
        if failed:
            logger.warning("replayed %d actions, %d failed", len(actions), failed)
        else:
            logger.info("replayed %d actions", len(actions))
        return failed

    def save_log(self) -> str:
        black_first = len(self.history) > 0 and self.history[0].snapshot.side_to_move == BLACK
        return gamelog.format_log(self.history.labels(), black_first=black_first)

    def load_board_file(self, path: str) -> None:
        self.load_board(boardfile.read_text(path))

    def save_board_file(self, path: str) -> None:
        boardfile.write_text(path, self.save_board())
        logger.info("board saved to %s", path)

    def load_log_file(self, path: str) -> int:
        return self.load_log(boardfile.read_text(path))

    def save_log_file(self, path: str) -> None:
        boardfile.write_text(path, self.save_log())
        logger.info("game log saved to %s", path)

    # --- Actions ---
    def submit(self, text: str) -> None:
        """Validate and commit one action of the game-log grammar.

        Args:
            text (str): Action such as ``"e2-e4"``, ``"0-0"``, ``"Md5"``,
                ``"|_c3"``, ``"=N"`` or ``"..."``.

        Raises:
            NotationError: If ``text`` is malformed.
            GameOverError: If the game has already ended.
            IllegalMove: If the move is not allowed in this position.
            QuotaExceeded: If no walls, mines or trap doors are left, or a
                placement rank restriction is violated.
            PhaseError: If a placement action is attempted after play began.
        """
        try:
            action = parse_action(text)
            self._dispatch(action)
        except EngineError as e:
            logger.debug("rejected %r: %s", text, e)
            raise

    def _dispatch(self, action: Action) -> None:
        board = self.board
        promoting = action.kind == PROMOTE and board.pending_promotion is not None
        if board.result is not None and not promoting:
            raise GameOverError(f"game is over: {_RESULT_MESSAGES[board.result]}")
        if action.kind != PROMOTE and self._awaiting_choice():
            assert board.pending_promotion is not None
            raise IllegalMove(
                f"pawn on {square_to_str(board.pending_promotion)} must be promoted first"
            )

        if action.kind == PASS:
            self._pass_turn()
        elif action.kind == PLACE:
            assert action.target is not None and action.symbol is not None
            self._place_obstacle(action.target, action.symbol, action.to_notation())
        elif action.kind == WALL:
            assert action.target is not None and action.symbol is not None
            self._place_wall(action.target, action.symbol, action.to_notation())
        elif action.kind == PROMOTE:
            assert action.symbol is not None
            self._promote(action.symbol)
        elif action.kind == CASTLE:
            assert action.symbol is not None
            self._castle(action.symbol)
        elif action.kind == MOVE:
            assert action.origin is not None and action.target is not None
            self._play_move(action.origin, action.target, action.to_notation())

    def _awaiting_choice(self) -> bool:
        sq = self.board.pending_promotion
        if sq is None or self.config.promotion is not PromotionMode.ASK:
            return False
        return self.board.piece_at(sq).upper() == "P"

    def _pass_turn(self) -> None:
        if self.board.phase != PLACEMENT:
            raise PhaseError("passing is only allowed before the game starts")
        self.history.push(PASS_TOKEN, self.board)
        self.board.side_to_move = other(self.board.side_to_move)

    def _place_obstacle(self, sq: Square, kind: str, label: str) -> None:
        board = self.board
        color = board.side_to_move
        name = "trap door" if kind == TRAP else "mine"
        if board.phase != PLACEMENT:
            raise PhaseError("cannot add mine or trap after game has started")
        if kind == TRAP and not 2 <= sq[0] <= 5:
            raise QuotaExceeded("traps can only be placed in ranks 3 - 6")
        if kind == MINE and not 3 <= sq[0] <= 4:
            raise QuotaExceeded("mines can only be placed in middle 2 ranks (4 and 5)")
        used = board.trap_used if kind == TRAP else board.mine_used
        if used[color]:
            raise QuotaExceeded(f"{_color_name(color)} has no {name}s left")

        cell = board.obstacle_at(sq)
        if kind == TRAP:
            if cell in (TRAP, OPEN_TRAP, MINE_AND_TRAP):
                raise IllegalMove(f"{square_to_str(sq)} already has a trap door")
            new_cell = MINE_AND_TRAP if cell == MINE else TRAP
        else:
            if cell in (MINE, MINE_AND_TRAP):
                raise IllegalMove(f"{square_to_str(sq)} already has a mine")
            new_cell = MINE if cell == EMPTY else MINE_AND_TRAP

        self.history.push(label, board)
        board.obstacles[sq[0]][sq[1]] = new_cell
        used[color] = True
        board.side_to_move = other(color)

    def _place_wall(self, sq: Square, kind: str, label: str) -> None:
        board = self.board
        color = board.side_to_move
        cost = 2 if kind == BOTH_WALLS else 1
        remaining = board.walls_remaining[color]
        if remaining < cost:
            if remaining == 0:
                raise QuotaExceeded("you have no walls remaining")
            raise QuotaExceeded(f"you have only {remaining} wall remaining")

        cell = board.wall_at(sq)
        if kind == BOTH_WALLS:
            if cell != EMPTY:
                raise IllegalMove(f"{square_to_str(sq)} already has a wall")
            new_cell = BOTH_WALLS
        elif cell == EMPTY:
            new_cell = kind
        elif cell == BOTH_WALLS or cell == kind:
            raise IllegalMove(f"{square_to_str(sq)} already has a wall there")
        else:
            # West wall joined by a south wall or vice versa
            new_cell = BOTH_WALLS

        self.history.push(label, board)
        board.walls[sq[0]][sq[1]] = new_cell
        board.pending_promotion = None
        board.walls_remaining[color] = remaining - cost
        # Walls may cut an attack line; the turn does not pass
        for c in COLORS:
            board.check[c] = self.in_check(c)
        self._detect_end()
        left = board.walls_remaining[color]
        logger.info(
            "[%s] %d %s remaining", _color_name(color), left, "wall" if left == 1 else "walls"
        )

    def _promote(self, symbol: str) -> None:
        board = self.board
        sq = board.pending_promotion
        if sq is None:
            raise IllegalMove("no pawn awaiting promotion")
        piece = board.piece_at(sq)
        self.history.push(f"={symbol}", board)
        board.set_piece(sq, symbol.upper() if piece.isupper() else symbol.lower())
        board.pending_promotion = None
        for c in COLORS:
            board.check[c] = self.in_check(c)
        self._detect_end()

    def _play_move(self, origin: Square, target: Square, label: str) -> None:
        board = self.board
        mover = board.side_to_move
        piece = board.piece_at(origin)
        if piece == EMPTY:
            raise IllegalMove(f"no piece on {square_to_str(origin)}")
        if color_of(piece) != mover:
            raise IllegalMove(f"it is {_color_name(mover)}'s turn to move")

        side = self._castle_alias(origin, target)
        if side is not None:
            self._castle(side)
            return

        if target not in targets(board, origin):
            raise IllegalMove(f"illegal move {label}")

        was_in_check = board.check[mover]
        self.history.push(label, board)
        try:
            board.phase = PLAYING
            board.pending_promotion = None
            event, ep_victim = self._displace(origin, target)
            self._verify_kings(mover, was_in_check)
        except EngineError:
            self._rollback()
            raise

        home = 7 if mover == WHITE else 0
        if origin == (home, 0):
            board.has_moved[mover][QUEENSIDE_ROOK] = True
        elif origin == (home, 4):
            board.has_moved[mover][KING_SLOT] = True
        elif origin == (home, 7):
            board.has_moved[mover][KINGSIDE_ROOK] = True

        self._obstacle_event = event
        self._ep_capture = ep_victim
        # An unresolved promotion choice defers the end-of-game scan
        self._finish_turn(mover, detect=not self._awaiting_choice())

    def _displace(self, origin: Square, target: Square, *, trial: bool = False):
        """Move a piece and apply every side effect except the legality test.

        Covers the fifty-move counter, en-passant capture, promotion, obstacle
        activation and the en-passant flag.

        Returns:
            Tuple[Optional[ObstacleEvent], Optional[Square]]: Obstacle that
                fired, and the square of a pawn taken en passant.
        """
        board = self.board
        piece = board.piece_at(origin)
        captured = board.piece_at(target)
        is_pawn = piece.upper() == "P"

        if captured != EMPTY or is_pawn:
            board.fifty_counter = 0
        else:
            board.fifty_counter += 1

        board.set_piece(target, piece)
        board.set_piece(origin, EMPTY)

        ep_victim: Optional[Square] = None
        ep = board.ep_square
        if is_pawn and ep is not None and ep[0] == origin[0]:
            if target == (ep[0] + pawn_direction(piece), ep[1]) and is_enemy(piece, board.piece_at(ep)):
                board.set_piece(ep, EMPTY)
                ep_victim = ep

        if is_pawn and target[0] in (0, 7):
            board.pending_promotion = target
            if trial or self.config.promotion is PromotionMode.AUTO_QUEEN:
                board.set_piece(target, "Q" if piece.isupper() else "q")

        event = self._activate_obstacle(target)
        if board.piece_at(target) == EMPTY:
            board.pending_promotion = None

        if is_pawn and abs(target[0] - origin[0]) == 2 and board.piece_at(target) != EMPTY:
            board.ep_square = target
        else:
            board.ep_square = None
        return event, ep_victim

    def _activate_obstacle(self, sq: Square) -> Optional[ObstacleEvent]:
        """Spring a trap door or detonate a mine under a piece that landed on ``sq``."""
        board = self.board
        cell = board.obstacle_at(sq)
        r, c = sq
        if cell in (TRAP, OPEN_TRAP):
            board.set_piece(sq, EMPTY)
            board.obstacles[r][c] = OPEN_TRAP
            return ObstacleEvent.TRAP
        if cell in (MINE, MINE_AND_TRAP):
            for dr, dc in KING_STEPS:
                nb = (r + dr, c + dc)
                if on_board(*nb) and not step_blocked(board.walls, sq, nb):
                    board.set_piece(nb, EMPTY)
            board.set_piece(sq, EMPTY)
            board.obstacles[r][c] = OPEN_TRAP if cell == MINE_AND_TRAP else EMPTY
            return ObstacleEvent.MINE
        return None

    def _castle_alias(self, origin: Square, target: Square) -> Optional[str]:
        """Map king-to-rook (``e1-h1``) and king-two-files (``e1-g1``) moves to a castle."""
        color = self.board.side_to_move
        home = 7 if color == WHITE else 0
        king = "K" if color == WHITE else "k"
        if origin != (home, 4) or target[0] != home:
            return None
        if self.board.piece_at(origin) != king:
            return None
        if target[1] in (6, 7):
            return KINGSIDE
        if target[1] in (0, 2):
            return QUEENSIDE
        return None

    def _castle_squares(self, color: str, side: str) -> Tuple[Square, Square, Square, Square]:
        row = 7 if color == WHITE else 0
        if side == KINGSIDE:
            return (row, 4), (row, 6), (row, 7), (row, 5)
        return (row, 4), (row, 2), (row, 0), (row, 3)

    def _castle_problem(self, color: str, side: str) -> Optional[str]:
        """Return why ``color`` may not castle on ``side`` now, or None if it may try."""
        board = self.board
        slot = KINGSIDE_ROOK if side == KINGSIDE else QUEENSIDE_ROOK
        moved = board.has_moved[color]
        if moved[KING_SLOT] or moved[slot]:
            return f"illegal {side} castling"
        king_from, king_to, rook_from, rook_to = self._castle_squares(color, side)
        king, rook = ("K", "R") if color == WHITE else ("k", "r")
        if board.piece_at(king_from) != king or board.piece_at(rook_from) != rook:
            return f"illegal {side} castling"
        if rook_to not in targets(board, rook_from):
            return f"cannot perform {side} castling: path is blocked"
        if board.piece_at(rook_to) != EMPTY or board.piece_at(king_to) != EMPTY:
            return f"cannot perform {side} castling: path is blocked"
        if self.in_check(color):
            return f"cannot perform {side} castling while in check"
        if self.config.strict_castling and is_attacked(board, rook_to, other(color)):
            return f"cannot perform {side} castling through check"
        return None

    def _castle(self, side: str) -> None:
        board = self.board
        color = board.side_to_move
        label = "0-0" if side == KINGSIDE else "0-0-0"
        problem = self._castle_problem(color, side)
        if problem is not None:
            raise IllegalMove(problem)

        self.history.push(label, board)
        try:
            board.phase = PLAYING
            board.pending_promotion = None
            event = self._displace_castle(color, side)
            self._verify_kings(color, False)
        except EngineError:
            self._rollback()
            raise

        board.has_moved[color][KING_SLOT] = True
        board.has_moved[color][KINGSIDE_ROOK if side == KINGSIDE else QUEENSIDE_ROOK] = True
        self._obstacle_event = event
        self._ep_capture = None
        self._finish_turn(color)

    def _displace_castle(self, color: str, side: str) -> Optional[ObstacleEvent]:
        board = self.board
        king_from, king_to, rook_from, rook_to = self._castle_squares(color, side)
        king = board.piece_at(king_from)
        rook = board.piece_at(rook_from)
        board.set_piece(king_from, EMPTY)
        board.set_piece(rook_from, EMPTY)
        board.set_piece(king_to, king)
        board.set_piece(rook_to, rook)
        board.fifty_counter += 1
        board.ep_square = None
        event = self._activate_obstacle(rook_to)
        event = self._activate_obstacle(king_to) or event
        return event

    def _verify_kings(self, mover: str, was_in_check: bool) -> None:
        board = self.board
        for color in COLORS:
            if board.king_square(color) is None:
                raise IllegalMove("move would destroy a king")
        if self.in_check(mover):
            if was_in_check:
                raise IllegalMove(f"{_color_name(mover)} king is still in check")
            raise IllegalMove("cannot put yourself in check")

    def _kings_safe(self, mover: str) -> bool:
        try:
            self._verify_kings(mover, False)
        except IllegalMove:
            return False
        return True

    def _rollback(self) -> None:
        entry = self.history.pop()
        entry.snapshot.apply_to(self.board)
        logger.debug("rolled back %r", entry.label)

    def _finish_turn(self, mover: str, *, detect: bool = True) -> None:
        board = self.board
        opponent = other(mover)
        board.check[mover] = False
        board.check[opponent] = self.in_check(opponent)
        board.side_to_move = opponent
        if detect:
            self._detect_end()

    # --- Tentative commits ---
    def _trial(self, origin: Square, target: Square) -> bool:
        """Return True if moving ``origin`` to ``target`` keeps the mover safe."""
        mover = color_of(self.board.piece_at(origin))
        assert mover is not None
        self.history.push(_TRIAL_LABEL, self.board)
        try:
            self._displace(origin, target, trial=True)
            return self._kings_safe(mover)
        finally:
            self._rollback()

    def _trial_castle(self, color: str, side: str) -> bool:
        if self._castle_problem(color, side) is not None:
            return False
        self.history.push(_TRIAL_LABEL, self.board)
        try:
            self._displace_castle(color, side)
            return self._kings_safe(color)
        finally:
            self._rollback()

    def _has_legal_action(self, color: str) -> bool:
        for sq, piece in list(self.board.squares()):
            if color_of(piece) != color:
                continue
            for t in targets(self.board, sq):
                if self._trial(sq, t):
                    return True
        return any(self._trial_castle(color, side) for side in (KINGSIDE, QUEENSIDE))

    # --- Terminal detectors ---
    def in_check(self, color: str) -> bool:
        """Return True if ``color``'s king is attacked (False if it has no king)."""
        king = self.board.king_square(color)
        if king is None:
            return False
        return is_attacked(self.board, king, other(color))

    def is_checkmate(self) -> bool:
        color = self.board.side_to_move
        return self.in_check(color) and not self._has_legal_action(color)

    def is_stalemate(self) -> bool:
        color = self.board.side_to_move
        return not self.in_check(color) and not self._has_legal_action(color)

    def is_fifty_move_draw(self) -> bool:
        return self.board.fifty_counter >= self.config.fifty_move_limit

    def is_threefold_repetition(self) -> bool:
        """Return True if a piece configuration occurred three times.

        Counted over the positions before every coordinate move or castle in
        history plus the current position; placement, wall, pass and
        promotion entries are skipped.
        """
        seen: Counter = Counter()
        for entry in self.history:
            if entry.label == PASS_TOKEN or entry.label.startswith(_NON_BOARD_PREFIXES):
                continue
            seen[entry.snapshot.pieces] += 1
        seen[Snapshot.capture(self.board).pieces] += 1
        return max(seen.values()) >= 3

    def _detect_end(self) -> None:
        board = self.board
        board.result = None
        if self.is_checkmate():
            board.result = CHECKMATE
        elif self.is_stalemate():
            board.result = STALEMATE
        elif self.is_fifty_move_draw():
            board.result = FIFTY_MOVE
        elif self.is_threefold_repetition():
            board.result = THREEFOLD
        if board.result is not None:
            logger.info(_RESULT_MESSAGES[board.result])

    # --- Queries ---
    def status(self) -> GameStatus:
        b = self.board
        return GameStatus(
            active=b.side_to_move,
            check_white=b.check[WHITE],
            check_black=b.check[BLACK],
            checkmate=b.result == CHECKMATE,
            stalemate=b.result == STALEMATE,
            fifty_draw=b.result == FIFTY_MOVE,
            threefold_draw=b.result == THREEFOLD,
            phase=b.phase,
        )

    def legal_targets(self, square: str) -> Set[str]:
        """Return the generator's destinations for the piece on ``square``.

        Walls, captures and en passant are honoured; self-check, obstacles and
        castling are not.
        """
        return {square_to_str(t) for t in targets(self.board, str_to_square(square))}

    def safe_targets(self, square: str) -> Set[str]:
        """Destinations that survive a tentative commit, plus castling squares for the king."""
        sq = str_to_square(square)
        board = self.board
        color = color_of(board.piece_at(sq))
        if color is None:
            return set()
        out = {square_to_str(t) for t in targets(board, sq) if self._trial(sq, t)}
        if board.piece_at(sq).upper() == "K":
            for side in (KINGSIDE, QUEENSIDE):
                king_from, king_to, _, _ = self._castle_squares(color, side)
                if sq == king_from and self._trial_castle(color, side):
                    out.add(square_to_str(king_to))
        return out

    def can_castle_kingside(self) -> bool:
        moved = self.board.has_moved[self.board.side_to_move]
        return not (moved[KING_SLOT] or moved[KINGSIDE_ROOK])

    def can_castle_queenside(self) -> bool:
        moved = self.board.has_moved[self.board.side_to_move]
        return not (moved[KING_SLOT] or moved[QUEENSIDE_ROOK])

    def king_square(self, color: str) -> Optional[str]:
        sq = self.board.king_square(color)
        return square_to_str(sq) if sq is not None else None

    def last_obstacle_event(self) -> Optional[ObstacleEvent]:
        """Return the obstacle the last committed move set off; cleared on read."""
        event, self._obstacle_event = self._obstacle_event, None
        return event

    def last_en_passant_capture(self) -> Optional[str]:
        """Return the square of the pawn last taken en passant; cleared on read."""
        sq, self._ep_capture = self._ep_capture, None
        return square_to_str(sq) if sq is not None else None

    # --- History ---
    def snapshot_count(self) -> int:
        return len(self.history)

    def history_labels(self) -> List[str]:
        return self.history.labels()

    def view_state(self, index: int) -> Snapshot:
        """Return the snapshot taken before action ``index`` without changing the game."""
        if index < 0 or index >= len(self.history):
            raise NoRestorePoint(f"board state {index} could not be retrieved")
        return self.history[index].snapshot

    def restore_last(self) -> None:
        """Undo the most recent action."""
        if not self.history:
            raise NoRestorePoint("no restore points available")
        self._rollback()
        self._obstacle_event = None
        self._ep_capture = None

    def restore_to(self, index: int) -> None:
        """Return to the state before action ``index``, discarding it and everything after."""
        if index < 0 or index >= len(self.history):
            raise NoRestorePoint(f"could not restore game to point {index}")
        entry = self.history.truncate(index)
        entry.snapshot.apply_to(self.board)
        self._obstacle_event = None
        self._ep_capture = None

    def render(self) -> str:
        """Text diagram of the piece grid with a banner naming the side to move."""
        b = self.board
        banner = _color_name(b.side_to_move)
        if b.result == CHECKMATE:
            banner += "-CHECKMATE"
        elif b.check[WHITE] or b.check[BLACK]:
            banner += "-CHECK"
        lines = [f"   A B C D E F G H  [{banner}]"]
        for r in range(8):
            lines.append(f"{8 - r}  " + " ".join(b.pieces[r]))
        return "\n".join(lines)


def _color_name(color: str) -> str:
    return "white" if color == WHITE else "black"
