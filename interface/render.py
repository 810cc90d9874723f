"""Plain-text board diagram for terminals."""

from engine.board import BoardSnapshot, Piece
from engine.constants import BOARD_SIZE, PieceKind, Player

SYMBOLS: dict[PieceKind, str] = {
    PieceKind.KING:            "玉",
    PieceKind.GOLD:            "金",
    PieceKind.SILVER:          "銀",
    PieceKind.BISHOP:          "角",
    PieceKind.ROOK:            "飛",
    PieceKind.PAWN:            "歩",
    PieceKind.PROMOTED_SILVER: "全",
    PieceKind.PROMOTED_BISHOP: "馬",
    PieceKind.PROMOTED_ROOK:   "龍",
    PieceKind.PROMOTED_PAWN:   "と",
}

_EMPTY = " ・"


def _cell(piece: Piece | None) -> str:
    # Second's pieces carry a leading "v", as in printed shogi diagrams.
    if piece is None:
        return _EMPTY
    mark = " " if piece.owner is Player.FIRST else "v"
    return mark + SYMBOLS[piece.kind]


def _hand(entries: tuple[tuple[PieceKind, int], ...]) -> str:
    if not entries:
        return "none"
    return " ".join(f"{SYMBOLS[kind]}x{count}" for kind, count in entries)


def render(snapshot: BoardSnapshot) -> str:
    """
    Draw the board, both hands and the side to move.

    Columns and rows are labelled 1..5, matching the move notation.
    """
    lines = ["   " + "".join(f" {c + 1} " for c in range(BOARD_SIZE))]
    lines.append("  +" + "---" * BOARD_SIZE + "+")
    for row, cells in enumerate(snapshot.cells):
        lines.append(f"  |{''.join(_cell(p) for p in cells)}| {row + 1}")
    lines.append("  +" + "---" * BOARD_SIZE + "+")
    lines.append(f"First hand:  {_hand(snapshot.hands[Player.FIRST])}")
    lines.append(f"Second hand: {_hand(snapshot.hands[Player.SECOND])}")
    lines.append(f"To move: {snapshot.turn.name.title()}")
    return "\n".join(lines)
