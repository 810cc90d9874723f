"""
Position model: pieces, moves, and the mutable board state.

A BoardState is the 5x5 grid plus both hands plus the side to move. It is
mutated in place one move at a time by ``engine.rules.apply_move``. The search
never touches the caller's state directly: it works on ``copy()`` results,
which share nothing mutable with the original.

Hands are stored as count-per-kind mappings. A kind is present as a key only
while its count is positive, so the keys are exactly the kinds available to
drop.
"""

from collections import Counter
from dataclasses import dataclass
from typing import NamedTuple, Union

from engine.constants import BOARD_SIZE, PieceKind, Player


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    owner: Player


@dataclass(frozen=True)
class BoardMove:
    """Move a piece already on the board, optionally promoting it."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    promote: bool = False


@dataclass(frozen=True)
class DropMove:
    """Place a piece from the mover's hand on an empty cell."""

    to_row: int
    to_col: int
    kind: PieceKind


Move = Union[BoardMove, DropMove]


class BoardSnapshot(NamedTuple):
    """
    Read-only view of a position for display code.

    cells is a tuple of row tuples; hands maps each player to a tuple of
    (kind, count) pairs in PieceKind order.
    """

    cells: tuple[tuple[Piece | None, ...], ...]
    hands: dict[Player, tuple[tuple[PieceKind, int], ...]]
    turn: Player


class BoardState:
    def __init__(
        self,
        cells: list[list[Piece | None]] | None = None,
        hands: dict[Player, Counter] | None = None,
        turn: Player = Player.FIRST,
    ) -> None:
        self.cells: list[list[Piece | None]] = (
            cells if cells is not None
            else [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        )
        self.hands: dict[Player, Counter] = (
            hands if hands is not None
            else {Player.FIRST: Counter(), Player.SECOND: Counter()}
        )
        self.turn: Player = turn

    @classmethod
    def initial(cls) -> "BoardState":
        """The standard 5x5 starting layout, First to move."""
        state = cls()
        back_rank = (PieceKind.ROOK, PieceKind.BISHOP, PieceKind.SILVER,
                     PieceKind.GOLD, PieceKind.KING)
        for col, kind in enumerate(back_rank):
            state.cells[0][col] = Piece(kind, Player.SECOND)
            # First's back rank is the same row read right-to-left.
            state.cells[BOARD_SIZE - 1][BOARD_SIZE - 1 - col] = Piece(kind, Player.FIRST)
        state.cells[1][BOARD_SIZE - 1] = Piece(PieceKind.PAWN, Player.SECOND)
        state.cells[BOARD_SIZE - 2][0] = Piece(PieceKind.PAWN, Player.FIRST)
        return state

    def copy(self) -> "BoardState":
        """Independent deep copy. Pieces are immutable, so row copies suffice."""
        return BoardState(
            cells=[row[:] for row in self.cells],
            hands={player: Counter(hand) for player, hand in self.hands.items()},
            turn=self.turn,
        )

    # -----------------------------------------------------------------------
    # Cell and hand access
    # -----------------------------------------------------------------------

    def piece_at(self, row: int, col: int) -> Piece | None:
        return self.cells[row][col]

    def put(self, row: int, col: int, piece: Piece | None) -> None:
        self.cells[row][col] = piece

    def hand(self, player: Player) -> Counter:
        return self.hands[player]

    def add_to_hand(self, player: Player, kind: PieceKind, count: int = 1) -> None:
        self.hands[player][kind] += count

    def remove_from_hand(self, player: Player, kind: PieceKind) -> None:
        hand = self.hands[player]
        hand[kind] -= 1
        if hand[kind] <= 0:
            del hand[kind]

    def pieces(self):
        """Yield (row, col, piece) for every occupied cell, row-major."""
        for row, cells in enumerate(self.cells):
            for col, piece in enumerate(cells):
                if piece is not None:
                    yield row, col, piece

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            cells=tuple(tuple(row) for row in self.cells),
            hands={
                player: tuple((kind, hand[kind]) for kind in sorted(hand))
                for player, hand in self.hands.items()
            },
            turn=self.turn,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.cells == other.cells
            and self.turn == other.turn
            and all(+self.hands[p] == +other.hands[p] for p in Player)
        )

    def __repr__(self) -> str:
        return f"BoardState(turn={self.turn.name}, hands={dict(self.hands)!r})"


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE
