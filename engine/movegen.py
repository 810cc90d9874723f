"""
Legal move generation for the side to move.

Board moves come from the static MOVEMENT table in engine.constants: every
(kind, owner) pair has a list of single steps and a list of slide directions.
Promotable kinds (Silver, Bishop, Rook, Pawn) get a second, promoting copy of
every move whose destination lies in the mover's promotion zone; the
promoting copy is emitted immediately before the plain one.

Drops are generated for every distinct kind in the mover's hand onto every
empty cell, except the two forbidden pawn drops:
    - into a column that already holds one of the mover's unpromoted pawns
    - onto the mover's farthest row, where the pawn could never move again

There is no check or checkmate logic here. A move that leaves one's own king
capturable is still legal; the game simply ends when a king is taken.
"""

from engine.board import BoardMove, BoardState, DropMove, Move, in_bounds
from engine.constants import (
    BOARD_SIZE,
    FARTHEST_ROW,
    MOVEMENT,
    PROMOTES_TO,
    PieceKind,
    Player,
)


def in_promotion_zone(player: Player, row: int) -> bool:
    """True if ``row`` is a promotion destination for ``player``."""
    if player is Player.FIRST:
        return row <= FARTHEST_ROW[Player.FIRST]
    return row >= FARTHEST_ROW[Player.SECOND]


def _board_moves_from(state: BoardState, row: int, col: int) -> list[Move]:
    piece = state.cells[row][col]
    movement = MOVEMENT[(piece.kind, piece.owner)]
    can_promote = piece.kind in PROMOTES_TO
    moves: list[Move] = []

    def emit(to_row: int, to_col: int) -> None:
        if can_promote and in_promotion_zone(piece.owner, to_row):
            moves.append(BoardMove(row, col, to_row, to_col, promote=True))
        moves.append(BoardMove(row, col, to_row, to_col))

    for dr, dc in movement.slides:
        to_row, to_col = row + dr, col + dc
        while in_bounds(to_row, to_col):
            target = state.cells[to_row][to_col]
            if target is not None and target.owner is piece.owner:
                break
            emit(to_row, to_col)
            if target is not None:
                break
            to_row += dr
            to_col += dc

    for dr, dc in movement.steps:
        to_row, to_col = row + dr, col + dc
        if not in_bounds(to_row, to_col):
            continue
        target = state.cells[to_row][to_col]
        if target is None or target.owner is not piece.owner:
            emit(to_row, to_col)

    return moves


def _has_unpromoted_pawn(state: BoardState, col: int, player: Player) -> bool:
    for row in range(BOARD_SIZE):
        piece = state.cells[row][col]
        if piece is not None and piece.owner is player and piece.kind is PieceKind.PAWN:
            return True
    return False


def _drop_moves(state: BoardState) -> list[Move]:
    player = state.turn
    moves: list[Move] = []

    held = sorted(kind for kind, count in state.hand(player).items() if count > 0)
    for kind in held:
        for row in range(BOARD_SIZE):
            if kind is PieceKind.PAWN and row == FARTHEST_ROW[player]:
                continue
            for col in range(BOARD_SIZE):
                if state.cells[row][col] is not None:
                    continue
                if kind is PieceKind.PAWN and _has_unpromoted_pawn(state, col, player):
                    continue
                moves.append(DropMove(row, col, kind))

    return moves


def generate_moves(state: BoardState) -> list[Move]:
    """
    Return every legal move for ``state.turn``: board moves, then drops.

    The order is deterministic (cells row-major, catalog direction order,
    drops by PieceKind then cell). The search breaks score ties in favour of
    the first move seen, so this order decides between equal moves.

    Returns an empty list when the side to move has nothing to play.
    """
    moves: list[Move] = []
    for row, col, piece in state.pieces():
        if piece.owner is state.turn:
            moves.extend(_board_moves_from(state, row, col))
    moves.extend(_drop_moves(state))
    return moves


def find_legal_move(state: BoardState, move: Move) -> Move | None:
    """
    Legality check for externally constructed moves.

    Returns the generated move equal to ``move`` in every field, or None if
    ``move`` is not legal in ``state``.
    """
    for candidate in generate_moves(state):
        if candidate == move:
            return candidate
    return None


def promotion_available(state: BoardState, move: Move) -> bool:
    """
    True if ``move`` is a board move whose piece could promote on arrival.

    Front ends use this to decide whether a move that failed the legality
    check as typed should be offered again with ``promote=True``.
    """
    if not isinstance(move, BoardMove):
        return False
    if not (in_bounds(move.from_row, move.from_col) and in_bounds(move.to_row, move.to_col)):
        return False
    piece = state.cells[move.from_row][move.from_col]
    if piece is None or piece.owner is not state.turn:
        return False
    return piece.kind in PROMOTES_TO and in_promotion_zone(piece.owner, move.to_row)
