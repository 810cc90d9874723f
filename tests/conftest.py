"""Shared fixtures: hand-built positions and seeded random games."""

import random

import pytest

from engine.board import BoardState, Piece
from engine.constants import PieceKind, Player
from engine.movegen import generate_moves
from engine.rules import apply_move, game_outcome

F = Player.FIRST
S = Player.SECOND


def build_state(pieces, turn=Player.FIRST, hands=None):
    """
    Build a position from {(row, col): (kind, owner)} and
    {player: {kind: count}} hands.
    """
    state = BoardState(turn=turn)
    for (row, col), (kind, owner) in pieces.items():
        state.put(row, col, Piece(kind, owner))
    for player, kinds in (hands or {}).items():
        for kind, count in kinds.items():
            state.add_to_hand(player, kind, count)
    return state


def random_game(seed, plies):
    """Yield (state_before, move) pairs along a seeded random legal game."""
    rng = random.Random(seed)
    state = BoardState.initial()
    for _ in range(plies):
        if game_outcome(state).over:
            return
        moves = generate_moves(state)
        if not moves:
            return
        move = rng.choice(moves)
        yield state.copy(), move
        apply_move(state, move)


def boxed_king_state():
    """First to move with no legal move at all; both kings on the board."""
    return build_state(
        {
            (0, 0): (PieceKind.KING, F),
            (0, 1): (PieceKind.PAWN, F),
            (1, 0): (PieceKind.PAWN, F),
            (1, 1): (PieceKind.PAWN, F),
            (4, 4): (PieceKind.KING, S),
        },
        turn=F,
    )


@pytest.fixture
def make_state():
    return build_state


@pytest.fixture
def playout():
    return random_game


@pytest.fixture
def boxed_king():
    return boxed_king_state()
