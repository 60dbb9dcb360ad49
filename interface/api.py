"""FastAPI REST interface for the engine."""

import threading
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from checkers_engine.config import CONFIG
from checkers_engine.core.board import Side, state_from_rows, state_to_rows
from checkers_engine.core.errors import BoardFormatError, IllegalMoveError, NotationError
from checkers_engine.core.search import SearchEngine
from checkers_engine.main import Engine
from checkers_engine.notation import format_move, parse_move

app = FastAPI(title=CONFIG.ui.engine_name, version="1.0.0")

# Shared game, one position for all clients.
engine = Engine(depth=CONFIG.search.depth, pruning=CONFIG.search.pruning)
_engine_lock = threading.Lock()


class PositionRequest(BaseModel):
    rows: List[str]  # 8 strings of '.', 'l', 'L', 'd', 'D'
    side: Side = Side.LIGHT


class MoveRequest(BaseModel):
    move: str  # e.g. "c3 d4" or "c3d4"


class SearchRequest(BaseModel):
    depth: Optional[int] = None
    pruning: Optional[bool] = None


def _board_payload():
    winner = engine.winner()
    return {
        "rows": state_to_rows(engine.state),
        "side": engine.state.side.value,
        "legal_moves": engine.get_legal_moves(),
        "is_game_over": engine.is_game_over(),
        "winner": winner.value if winner else None,
    }


@app.get("/board")
def get_board():
    with _engine_lock:
        return _board_payload()


@app.post("/position")
def set_position(req: PositionRequest):
    with _engine_lock:
        try:
            state = state_from_rows(req.rows, req.side)
        except BoardFormatError as e:
            raise HTTPException(status_code=400, detail=f"Invalid position: {e}")
        engine.set_state(state)
        return _board_payload()


@app.post("/move")
def make_move(req: MoveRequest):
    with _engine_lock:
        try:
            move = parse_move(req.move)
        except NotationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        try:
            engine.push(move)
        except IllegalMoveError:
            raise HTTPException(status_code=400, detail=f"Illegal move: {req.move}")
        return {"rows": state_to_rows(engine.state), "move": format_move(move)}


@app.post("/search")
def search_move(req: SearchRequest = SearchRequest()):
    with _engine_lock:
        if engine.is_game_over():
            raise HTTPException(status_code=400, detail="Game is already over")
        depth = CONFIG.search.depth if req.depth is None else req.depth
        if depth < 1:
            raise HTTPException(status_code=400, detail="depth must be a positive integer")
        pruning = engine.search.pruning if req.pruning is None else req.pruning
        state = engine.state

    search = SearchEngine(engine.search.evaluator, depth=depth, pruning=pruning)
    best = search.choose_best_move(state)
    return {
        "best_move": format_move(best) if best else None,
        "score": search.last_score,
        "nodes": search.nodes,
        "depth": depth,
    }


@app.post("/reset")
def reset_board():
    with _engine_lock:
        engine.reset()
        return _board_payload()
