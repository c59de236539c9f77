from __future__ import annotations

import sys
from typing import Callable, List, Optional

from ...engine.config import GameConfig
from ...engine.errors import EngineError
from ...engine.game import Game


Writer = Callable[[str], None]

HELP = [
    "commands:",
    "  <action>   play an action, e.g. e2-e4, 0-0, Md5, De3, |c4, _c4, |_c4, =N, ...",
    "  restore    undo the last action",
    "  rs N       restore the game to history point N",
    "  gb FILE    load a board file",
    "  gl FILE    replay a game log",
    "  sb FILE    save the board",
    "  sl FILE    save the game log",
    "  help       show this text",
    "  exit       quit",
]


class ConsoleSession:
    """Line-oriented console around the rules engine.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Every handler reports through a ``Writer`` so tests can capture output.
    - Engine errors are reported as ``ERROR: <reason>`` and the session goes on.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.game: Game = Game.new(config)

    # ---- Command handlers ----
    def cmd_help(self, write: Writer) -> None:
        for line in HELP:
            write(line)

    def cmd_restore(self, write: Writer) -> None:
        self.game.restore_last()
        write(f"INFO: restored, {self.game.snapshot_count()} restore points left")

    def cmd_restore_to(self, args: List[str], write: Writer) -> None:
        if len(args) != 1 or not args[0].isdigit():
            write("ERROR: usage: rs N")
            return
        self.game.restore_to(int(args[0]))
        write(f"INFO: restored to point {args[0]}")

    def cmd_load_board(self, args: List[str], write: Writer) -> None:
        path = self._path(args, "gb", write)
        if path is not None:
            self.game.load_board_file(path)
            write(f"INFO: loaded board {path}")

    def cmd_load_log(self, args: List[str], write: Writer) -> None:
        path = self._path(args, "gl", write)
        if path is not None:
            failed = self.game.load_log_file(path)
            if failed:
                write(f"INFO: replayed {path}, {failed} actions failed")
            else:
                write(f"INFO: replayed {path}")

    def cmd_save_board(self, args: List[str], write: Writer) -> None:
        path = self._path(args, "sb", write)
        if path is not None:
            self.game.save_board_file(path)
            write(f"INFO: saved board {path}")

    def cmd_save_log(self, args: List[str], write: Writer) -> None:
        path = self._path(args, "sl", write)
        if path is not None:
            self.game.save_log_file(path)
            write(f"INFO: saved log {path}")

    def cmd_action(self, text: str, write: Writer) -> None:
        self.game.submit(text)
        event = self.game.last_obstacle_event()
        if event is not None:
            write(f"INFO: {event.value} triggered")
        status = self.game.status()
        if status.checkmate:
            write("INFO: checkmate")
        elif status.stalemate:
            write("INFO: stalemate")
        elif status.fifty_draw:
            write("INFO: draw due to fifty moves")
        elif status.threefold_draw:
            write("INFO: draw due to threefold repetition")

    def cmd_board(self, write: Writer) -> None:
        for line in self.game.render().splitlines():
            write(line)

    def handle(self, line: str, write: Writer) -> bool:
        """Run one console line; return False when the session should end."""
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0], parts[1:]
        if cmd == "exit":
            return False
        try:
            if cmd == "help":
                self.cmd_help(write)
                return True
            if cmd == "restore":
                self.cmd_restore(write)
            elif cmd == "rs":
                self.cmd_restore_to(args, write)
            elif cmd == "gb":
                self.cmd_load_board(args, write)
            elif cmd == "gl":
                self.cmd_load_log(args, write)
            elif cmd == "sb":
                self.cmd_save_board(args, write)
            elif cmd == "sl":
                self.cmd_save_log(args, write)
            else:
                self.cmd_action(line.strip(), write)
        except EngineError as e:
            write(f"ERROR: {e}")
        self.cmd_board(write)
        return True

    def _path(self, args: List[str], cmd: str, write: Writer) -> Optional[str]:
        if len(args) != 1:
            write(f"ERROR: usage: {cmd} FILE")
            return None
        return args[0]


def _default_writer(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_console(config: Optional[GameConfig] = None) -> None:
    session = ConsoleSession(config)
    session.cmd_board(_default_writer)
    for raw in sys.stdin:
        if not session.handle(raw, _default_writer):
            break
