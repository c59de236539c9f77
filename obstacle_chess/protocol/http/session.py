from __future__ import annotations

import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional

from ...engine.config import GameConfig
from ...engine.game import Game


logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Thread-safe in-memory store of running games.

    Responsibilities:
    - Create sessions with unique ``game_id``s
    - Look sessions up, marking them as recently used
    - Evict the least recently used session beyond ``max_sessions``
    """

    def __init__(self, max_sessions: int = 1000) -> None:
        self._lock = threading.RLock()
        self._games: "OrderedDict[str, Game]" = OrderedDict()
        self.max_sessions = max_sessions

    def create(self, config: Optional[GameConfig] = None) -> str:
        gid = str(uuid.uuid4())
        game = Game.new(config)
        with self._lock:
            self._games[gid] = game
            while len(self._games) > self.max_sessions:
                evicted, _ = self._games.popitem(last=False)
                logger.info("session evicted", extra={"game_id": evicted})
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            game = self._games.get(game_id)
            if game is not None:
                self._games.move_to_end(game_id)
            return game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._games.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)
