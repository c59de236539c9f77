from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    engine_exception_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ...engine.board import BLACK, WHITE, Board
from ...engine.boardfile import format_cell
from ...engine.config import GameConfig, PromotionMode
from ...engine.errors import EngineError
from ...engine.game import Game
from ...engine.move import square_to_str


logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    promotion: PromotionMode = PromotionMode.AUTO_QUEEN
    wall_budget: int = Field(default=3, ge=0, le=64)
    fifty_move_limit: int = Field(default=50, ge=1)
    strict_castling: bool = False


class ActionRequest(BaseModel):
    action: str = Field(..., description="Game-log action, e.g. e2-e4, 0-0, Md5, |_c3, =N, ...")


class TextRequest(BaseModel):
    text: str = Field(..., description="Board-file or game-log contents")


class RestoreRequest(BaseModel):
    index: int = Field(..., ge=0)


class TextResponse(BaseModel):
    text: str


class GameState(BaseModel):
    game_id: str
    board: List[str]
    active: str
    phase: str
    check_white: bool
    check_black: bool
    checkmate: bool
    stalemate: bool
    fifty_draw: bool
    threefold_draw: bool
    game_over: bool
    walls_remaining: Dict[str, int]
    castling: str
    en_passant: Optional[str]
    fifty_counter: int
    pending_promotion: Optional[str]
    history: List[str]


class ActionResponse(GameState):
    obstacle_event: Optional[str] = None
    en_passant_capture: Optional[str] = None


class ReplayResponse(GameState):
    failed: int


class TargetsResponse(BaseModel):
    square: str
    targets: List[str]


class SnapshotView(BaseModel):
    index: int
    label: str
    board: List[str]
    active: str
    phase: str


def create_app(max_sessions: int = 1000, config: Optional[GameConfig] = None) -> FastAPI:
    app = FastAPI(title="Obstacle Chess API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=logging.INFO)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(EngineError, engine_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore(max_sessions=max_sessions)
    default_config = config or GameConfig()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=GameState)
    async def create_game(req: Optional[CreateGameRequest] = None) -> GameState:
        game_config = default_config
        if req is not None:
            game_config = GameConfig(
                promotion=req.promotion,
                wall_budget=req.wall_budget,
                fifty_move_limit=req.fifty_move_limit,
                strict_castling=req.strict_castling,
            )
        game_id = store.create(game_config)
        logger.info("game created", extra={"game_id": game_id})
        return _state(game_id, _require_game(store, game_id))

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return _state(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/actions", response_model=ActionResponse)
    async def submit_action(game_id: str, req: ActionRequest) -> ActionResponse:
        game = _require_game(store, game_id)
        game.submit(req.action)
        event = game.last_obstacle_event()
        return ActionResponse(
            **_state(game_id, game).model_dump(),
            obstacle_event=event.value if event is not None else None,
            en_passant_capture=game.last_en_passant_capture(),
        )

    @app.get("/api/games/{game_id}/targets/{square}", response_model=TargetsResponse)
    async def get_targets(game_id: str, square: str, safe: bool = False) -> TargetsResponse:
        game = _require_game(store, game_id)
        found = game.safe_targets(square) if safe else game.legal_targets(square)
        return TargetsResponse(square=square, targets=sorted(found))

    @app.post("/api/games/{game_id}/board", response_model=GameState)
    async def load_board(game_id: str, req: TextRequest) -> GameState:
        game = _require_game(store, game_id)
        game.load_board(req.text)
        return _state(game_id, game)

    @app.get("/api/games/{game_id}/board", response_model=TextResponse)
    async def save_board(game_id: str) -> TextResponse:
        return TextResponse(text=_require_game(store, game_id).save_board())

    @app.post("/api/games/{game_id}/log", response_model=ReplayResponse)
    async def load_log(game_id: str, req: TextRequest) -> ReplayResponse:
        game = _require_game(store, game_id)
        failed = game.load_log(req.text)
        return ReplayResponse(**_state(game_id, game).model_dump(), failed=failed)

    @app.get("/api/games/{game_id}/log", response_model=TextResponse)
    async def save_log(game_id: str) -> TextResponse:
        return TextResponse(text=_require_game(store, game_id).save_log())

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        game.restore_last()
        return _state(game_id, game)

    @app.post("/api/games/{game_id}/restore", response_model=GameState)
    async def restore(game_id: str, req: RestoreRequest) -> GameState:
        game = _require_game(store, game_id)
        game.restore_to(req.index)
        return _state(game_id, game)

    @app.get("/api/games/{game_id}/history/{index}", response_model=SnapshotView)
    async def view_snapshot(game_id: str, index: int) -> SnapshotView:
        game = _require_game(store, game_id)
        snapshot = game.view_state(index)
        board = snapshot.to_board()
        return SnapshotView(
            index=index,
            label=game.history[index].label,
            board=_rows(board),
            active=board.side_to_move,
            phase=board.phase,
        )

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _rows(board: Board) -> List[str]:
    return [
        " ".join(format_cell(board.pieces[r][c], board.obstacles[r][c], board.walls[r][c]) for c in range(8))
        for r in range(8)
    ]


def _state(game_id: str, game: Game) -> GameState:
    board = game.board
    st = game.status()
    return GameState(
        game_id=game_id,
        board=_rows(board),
        active=st.active,
        phase=st.phase,
        check_white=st.check_white,
        check_black=st.check_black,
        checkmate=st.checkmate,
        stalemate=st.stalemate,
        fifty_draw=st.fifty_draw,
        threefold_draw=st.threefold_draw,
        game_over=st.game_over,
        walls_remaining={WHITE: board.walls_remaining[WHITE], BLACK: board.walls_remaining[BLACK]},
        castling=board.castling_rights(),
        en_passant=square_to_str(board.ep_square) if board.ep_square is not None else None,
        fifty_counter=board.fifty_counter,
        pending_promotion=(
            square_to_str(board.pending_promotion) if board.pending_promotion is not None else None
        ),
        history=game.history_labels(),
    )


# Default app for non-factory servers
app = create_app()
