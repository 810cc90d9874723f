"""
FastAPI web application for the mini-shogi engine.

Exposes a small JSON API around the engine. Positions travel as 5x5 SFEN
strings and moves in the project's move notation (see interface.notation).

    GET  /api/position      starting position
    POST /api/legal-moves   legal moves for a position
    POST /api/play          apply one move after a legality check
    POST /api/move          engine search: best move, score, resulting position

Architecture notes:
- Sync endpoints (not async): FastAPI runs sync handlers in a thread pool,
  which is the correct pattern for CPU-bound blocking calls like the search.
- Stateless per request: the client sends the full position each time; no
  server-side game is kept between requests.

Run with: uvicorn web.app:app
"""

import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from engine.board import BoardState
from engine.constants import MAX_REQUEST_DEPTH, SEARCH_DEPTH
from engine.movegen import find_legal_move, generate_moves
from engine.rules import apply_move, game_outcome
from engine.search import get_best_move
from interface.notation import INITIAL_SFEN, format_move, parse_move, parse_sfen, to_sfen

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Mini-shogi AI", version="1.0.0")


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class PositionRequest(BaseModel):
    sfen: str


class PlayRequest(BaseModel):
    sfen: str
    move: str


class SearchRequest(BaseModel):
    """
    Client request for an engine move.

    Fields:
        sfen:  Position to search.
        depth: Search depth in plies, clamped to [1, MAX_REQUEST_DEPTH] so a
               single request cannot run for minutes.
    """

    sfen: str
    depth: int = SEARCH_DEPTH

    @field_validator("depth")
    @classmethod
    def clamp_depth(cls, v: int) -> int:
        """Clamp depth to a safe operating range."""
        return max(1, min(v, MAX_REQUEST_DEPTH))


class PositionResponse(BaseModel):
    """
    A position plus its game status.

    Fields:
        sfen:   Position string.
        over:   True once a king has been captured.
        winner: "first" or "second" when over, otherwise None.
    """

    sfen: str
    over: bool
    winner: str | None = None


class LegalMovesResponse(BaseModel):
    moves: list[str]


class MoveResponse(BaseModel):
    """
    Engine response after computing the best move.

    Fields:
        move:  Chosen move in move notation.
        sfen:  Position after the engine's move is applied.
        score: Minimax value, positive = First is ahead.
        nodes: Positions visited during the search.
    """

    move: str
    sfen: str
    score: int
    nodes: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load(sfen: str) -> BoardState:
    try:
        return parse_sfen(sfen)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid SFEN: {exc}") from exc


def _position(state: BoardState) -> PositionResponse:
    outcome = game_outcome(state)
    return PositionResponse(
        sfen=to_sfen(state),
        over=outcome.over,
        winner=outcome.winner.value if outcome.winner is not None else None,
    )


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/position", response_model=PositionResponse)
def api_initial_position() -> PositionResponse:
    return _position(parse_sfen(INITIAL_SFEN))


@app.post("/api/legal-moves", response_model=LegalMovesResponse)
def api_legal_moves(request: PositionRequest) -> LegalMovesResponse:
    state = _load(request.sfen)
    if game_outcome(state).over:
        return LegalMovesResponse(moves=[])
    return LegalMovesResponse(moves=[format_move(m) for m in generate_moves(state)])


@app.post("/api/play", response_model=PositionResponse)
def api_play(request: PlayRequest) -> PositionResponse:
    """
    Apply a client move after checking it against the legal move list.

    Raises:
        HTTPException 400: Malformed SFEN or move, game already over, or the
                           move is not legal in the position.
    """
    state = _load(request.sfen)
    if game_outcome(state).over:
        raise HTTPException(status_code=400, detail="Game is already over")

    try:
        candidate = parse_move(request.move)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    move = find_legal_move(state, candidate)
    if move is None:
        raise HTTPException(status_code=400, detail=f"Illegal move: {request.move}")

    apply_move(state, move)
    return _position(state)


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: SearchRequest) -> MoveResponse:
    """
    Compute the engine's best move for the given position.

    Raises:
        HTTPException 400: Malformed SFEN, game already over, or the side to
                           move has no legal move.
        HTTPException 500: Unexpected engine failure.
    """
    state = _load(request.sfen)

    outcome = game_outcome(state)
    if outcome.over:
        raise HTTPException(
            status_code=400,
            detail=f"Game is already over: {outcome.winner.value} wins",
        )

    try:
        move, score, nodes = get_best_move(state, request.depth)
    except Exception as exc:
        _log.exception("Engine search failed for SFEN=%s", request.sfen)
        raise HTTPException(status_code=500, detail=f"Engine error: {exc}") from exc

    if move is None:
        raise HTTPException(status_code=400, detail="Side to move has no legal move")

    _log.info(
        "Move=%s score=%d nodes=%d depth=%d sfen=%s",
        format_move(move),
        score,
        nodes,
        request.depth,
        request.sfen,
    )

    apply_move(state, move)
    return MoveResponse(
        move=format_move(move),
        sfen=to_sfen(state),
        score=score,
        nodes=nodes,
    )
