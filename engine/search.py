"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

get_best_move() is the interface the front ends (CLI, USI handler, web API)
depend on. It always searches to the same fixed depth; there is no time
control and no iterative deepening, so a call blocks until the whole pruned
tree has been visited.

Score convention:
    Scores are always from First's point of view (see engine.evaluate). First
    is the maximizing side and Second the minimizing side, so unlike a negamax
    search the sign of the score never flips between plies.

State handling:
    Every child is searched on its own copy of the parent state. Sibling
    branches never see each other's moves, and the caller's state is never
    modified. The board is tiny, so copying is cheap compared to generating
    moves.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

from engine.board import BoardState, Move
from engine.constants import SCORE_BOUND, SEARCH_DEPTH, Player
from engine.evaluate import evaluate
from engine.movegen import generate_moves
from engine.rules import apply_move, game_outcome

_log = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    """
    Result of one minimax call.

    move is None at leaves, at terminal positions, and when the side to move
    has no legal move; in every other case it is the move that produced score.
    """

    score: int
    move: Move | None


@dataclass
class SearchStats:
    """
    Counters collected during a search. Purely informational.

    Attributes:
        node_count: Number of positions visited (interior nodes and leaves).
        cutoffs:    Number of times the remaining siblings were pruned.
    """

    node_count: int = 0
    cutoffs: int = 0


def minimax(
    state: BoardState,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    stats: SearchStats | None = None,
) -> SearchResult:
    """
    Minimax with alpha-beta pruning.

    Args:
        state:      Position to search. Not modified.
        depth:      Remaining plies. At 0 the position is scored statically.
        alpha:      Best score the maximizing side can already guarantee.
        beta:       Best score the minimizing side can already guarantee.
        maximizing: True when First is to move in ``state``.
        stats:      Optional counters updated in place.

    Returns:
        SearchResult(score, move). On ties the earliest generated move wins;
        a later move replaces the incumbent only with a strictly better score.

    Pruning:
        Once beta <= alpha the remaining siblings cannot change the value
        chosen higher up the tree, so they are skipped. The returned score at
        the root is identical to an unpruned minimax of the same depth.
    """
    if stats is not None:
        stats.node_count += 1

    if depth == 0 or game_outcome(state).over:
        return SearchResult(evaluate(state), None)

    moves = generate_moves(state)
    if not moves:
        return SearchResult(evaluate(state), None)

    best_move: Move | None = None

    if maximizing:
        best_score = -SCORE_BOUND
        for move in moves:
            child = state.copy()
            apply_move(child, move)
            score = minimax(child, depth - 1, alpha, beta, False, stats).score

            if score > best_score:
                best_score = score
                best_move = move

            alpha = max(alpha, score)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
    else:
        best_score = SCORE_BOUND
        for move in moves:
            child = state.copy()
            apply_move(child, move)
            score = minimax(child, depth - 1, alpha, beta, True, stats).score

            if score < best_score:
                best_score = score
                best_move = move

            beta = min(beta, score)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break

    return SearchResult(best_score, best_move)


def get_best_move(
    state: BoardState,
    depth: int = SEARCH_DEPTH,
) -> tuple[Move | None, int, int]:
    """
    Choose a move for the side to move in ``state``.

    Runs one full-window alpha-beta search to ``depth`` plies. First
    maximizes and Second minimizes the First-perspective score.

    Args:
        state: Current position. Not modified.
        depth: Search depth in plies (SEARCH_DEPTH by default).

    Returns:
        Tuple of (move, score, nodes):
            - move:  The chosen move, or None if the game is over or the side
                     to move has no legal move.
            - score: Minimax value from First's perspective.
            - nodes: Positions visited, for reporting and benchmarking.
    """
    stats = SearchStats()
    maximizing = state.turn is Player.FIRST
    result = minimax(state, depth, -SCORE_BOUND, SCORE_BOUND, maximizing, stats)

    _log.debug(
        "search depth=%d turn=%s score=%d nodes=%d cutoffs=%d move=%r",
        depth,
        state.turn.name,
        result.score,
        stats.node_count,
        stats.cutoffs,
        result.move,
    )
    return result.move, result.score, stats.node_count
