from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from ..engine.config import GameConfig, PromotionMode
from ..engine.errors import EngineError
from ..engine.game import Game
from ..protocol.console.loop import run_console


logger = logging.getLogger(__name__)


def replay(board_path: str, log_path: str, out_path: str, config: Optional[GameConfig] = None) -> int:
    """Load a board, replay a game log on it and save the result.

    Returns:
        int: Process exit code, 0 on success and 1 if a file could not be
            read, parsed or written.
    """
    game = Game.new(config)
    try:
        game.load_board_file(board_path)
        if game.status().checkmate:
            print("INFO: checkmate")
            return 0
        game.load_log_file(log_path)
        game.save_board_file(out_path)
    except EngineError as e:
        logger.debug("replay failed", exc_info=True)
        print(f"ERROR: {e}")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="obstacle-chess",
        description=(
            "Obstacle chess engine. No arguments: serve the HTTP API. "
            "'cli': interactive console. BOARD LOG OUT: replay LOG on BOARD and save to OUT."
        ),
    )
    parser.add_argument("args", nargs="*", help="cli | BOARD LOG OUT")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="HTTP bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="HTTP port (default: 8000)")
    parser.add_argument(
        "--promotion",
        choices=[m.value for m in PromotionMode],
        default=PromotionMode.AUTO_QUEEN.value,
        help="promotion policy for console and replay (default: auto_queen)",
    )
    ns = parser.parse_args(argv)
    config = GameConfig(promotion=PromotionMode(ns.promotion))

    if not ns.args:
        uvicorn.run(
            "obstacle_chess.protocol.http.app:create_app", factory=True, host=ns.host, port=ns.port
        )
        return 0

    logging.basicConfig(level=logging.WARNING)
    if ns.args == ["cli"]:
        run_console(config)
        return 0
    if len(ns.args) == 3:
        return replay(*ns.args, config=config)
    parser.error("expected no arguments, 'cli', or BOARD LOG OUT")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
