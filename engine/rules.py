"""
Move application and game-end detection.

apply_move trusts its caller: it is only ever handed moves taken from
generate_moves (the search) or moves that passed find_legal_move (front ends).
"""

from typing import NamedTuple

from engine.board import BoardState, DropMove, Move, Piece
from engine.constants import PROMOTES_TO, PieceKind, Player, base_kind


class Outcome(NamedTuple):
    over: bool
    winner: Player | None


def apply_move(state: BoardState, move: Move) -> None:
    """
    Play ``move`` for ``state.turn`` in place, then pass the turn.

    Captured pieces go to the capturer's hand in their unpromoted form.
    """
    mover = state.turn

    if isinstance(move, DropMove):
        state.put(move.to_row, move.to_col, Piece(move.kind, mover))
        state.remove_from_hand(mover, move.kind)
    else:
        piece = state.piece_at(move.from_row, move.from_col)
        captured = state.piece_at(move.to_row, move.to_col)

        if captured is not None:
            state.add_to_hand(mover, base_kind(captured.kind))

        if move.promote:
            piece = Piece(PROMOTES_TO[piece.kind], piece.owner)

        state.put(move.to_row, move.to_col, piece)
        state.put(move.from_row, move.from_col, None)

    state.turn = mover.opponent


def game_outcome(state: BoardState) -> Outcome:
    """
    The game is over once a king has been captured; the other king's owner wins.

    Having no legal move is not an ending: there is no checkmate or stalemate
    detection, play only stops when a king leaves the board.
    """
    kings = {
        piece.owner
        for _, _, piece in state.pieces()
        if piece.kind is PieceKind.KING
    }
    if Player.FIRST not in kings:
        return Outcome(True, Player.SECOND)
    if Player.SECOND not in kings:
        return Outcome(True, Player.FIRST)
    return Outcome(False, None)
