from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PromotionMode(str, Enum):
    """How a pawn reaching the last rank is promoted."""

    AUTO_QUEEN = "auto_queen"  # promote to a queen immediately
    ASK = "ask"  # wait for an explicit ``=X`` action from the front-end


@dataclass(frozen=True)
class GameConfig:
    """Engine options chosen by the front-end.

    Attributes:
        promotion (PromotionMode): Promotion policy, see ``PromotionMode``.
        wall_budget (int): Walls each player may place in a new game.
        fifty_move_limit (int): Half-moves without capture or pawn move that
            end the game in a draw.
        strict_castling (bool): Also forbid castling through an attacked
            square. Off by default; only the start and end squares are tested.
    """

    promotion: PromotionMode = PromotionMode.AUTO_QUEEN
    wall_budget: int = 3
    fifty_move_limit: int = 50
    strict_castling: bool = False

    def __post_init__(self) -> None:
        if self.wall_budget < 0:
            raise ValueError("wall_budget must be >= 0")
        if self.fifty_move_limit < 1:
            raise ValueError("fifty_move_limit must be >= 1")
