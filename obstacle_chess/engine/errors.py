from __future__ import annotations


class EngineError(ValueError):
    """Base class for every error the rules engine raises."""


class BoardFileError(EngineError):
    """A board or game-log file could not be opened, read, written or has the wrong shape."""


class NotationError(EngineError):
    """Malformed square, action or board-file token."""


class IllegalMove(EngineError):
    """The action is well-formed but not allowed in the current position."""


class GameOverError(IllegalMove):
    """The game has reached a terminal condition; no further actions are accepted."""


class QuotaExceeded(EngineError):
    """No walls, mines or trap doors left, or a placement rank restriction was violated."""


class PhaseError(EngineError):
    """Placement actions attempted after play has begun."""


class NoRestorePoint(EngineError):
    """The requested history index does not exist."""
