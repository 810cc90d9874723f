"""
Text formats at the boundary of the engine: move notation and SFEN positions.

Move notation (all coordinates 1-indexed, column first):
    board move   c1 r1 c2 r2 [+]   e.g. "1524", "4241+"
    drop         <letter> c r       e.g. "S42" (a Silver dropped on column 4, row 2)

Drop letters are P, S, G, B, R, case-insensitive. A trailing "+" on a board
move requests promotion.

Position notation is SFEN adapted to the 5x5 board:
    rbsgk/4p/5/P4/KGSBR b - 1
rows from top (row 1) to bottom (row 5), uppercase = First, lowercase =
Second, "+" before a letter = promoted, digits = runs of empty cells; then
the side to move ("b" = First, "w" = Second), then the hands ("-" if both
are empty, otherwise count+letter pairs such as "S2p"), then an optional
move number which is accepted and ignored.

Every parser raises ValueError on malformed input. Nothing here checks
legality; that is engine.movegen.find_legal_move's job.
"""

import re

from engine.board import BoardMove, BoardState, DropMove, Move, Piece
from engine.constants import BOARD_SIZE, PROMOTES_TO, PieceKind, Player, base_kind

INITIAL_SFEN = "rbsgk/4p/5/P4/KGSBR b -"

_LETTERS: dict[PieceKind, str] = {
    PieceKind.KING:   "K",
    PieceKind.GOLD:   "G",
    PieceKind.SILVER: "S",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK:   "R",
    PieceKind.PAWN:   "P",
}
_KINDS_BY_LETTER: dict[str, PieceKind] = {v: k for k, v in _LETTERS.items()}

# Kinds that may legally sit in a hand (and so be dropped).
DROPPABLE = (PieceKind.GOLD, PieceKind.SILVER, PieceKind.BISHOP,
             PieceKind.ROOK, PieceKind.PAWN)

_BOARD_MOVE_RE = re.compile(r"^([1-5])([1-5])([1-5])([1-5])(\+?)$")
_DROP_RE = re.compile(r"^([PSGBR])([1-5])([1-5])$", re.IGNORECASE)
_HAND_RE = re.compile(r"(\d*)([A-Za-z])")


# ---------------------------------------------------------------------------
# Moves
# ---------------------------------------------------------------------------


def parse_move(text: str) -> Move:
    """
    Parse move notation into a Move.

    Raises:
        ValueError: ``text`` is not a well-formed board move or drop.
    """
    token = text.strip()

    match = _BOARD_MOVE_RE.match(token)
    if match:
        from_col, from_row, to_col, to_row = (int(g) - 1 for g in match.groups()[:4])
        return BoardMove(from_row, from_col, to_row, to_col, promote=bool(match.group(5)))

    match = _DROP_RE.match(token)
    if match:
        kind = _KINDS_BY_LETTER[match.group(1).upper()]
        col, row = int(match.group(2)) - 1, int(match.group(3)) - 1
        return DropMove(row, col, kind)

    raise ValueError(f"Invalid move notation: {text!r}")


def format_move(move: Move) -> str:
    if isinstance(move, DropMove):
        return f"{_LETTERS[move.kind]}{move.to_col + 1}{move.to_row + 1}"
    suffix = "+" if move.promote else ""
    return (
        f"{move.from_col + 1}{move.from_row + 1}"
        f"{move.to_col + 1}{move.to_row + 1}{suffix}"
    )


def kind_name(kind: PieceKind) -> str:
    return kind.name.replace("_", " ").title()


def describe_move(state: BoardState, move: Move) -> str:
    """
    Human-readable description of ``move`` as played from ``state``.

    ``state`` must be the position *before* the move so the moving and the
    captured piece can be named.
    """
    if isinstance(move, DropMove):
        return f"drops {kind_name(move.kind)} at {move.to_col + 1},{move.to_row + 1}"

    piece = state.piece_at(move.from_row, move.from_col)
    captured = state.piece_at(move.to_row, move.to_col)
    text = (
        f"{kind_name(piece.kind)} {move.from_col + 1},{move.from_row + 1}"
        f" -> {move.to_col + 1},{move.to_row + 1}"
    )
    if captured is not None:
        text += f" takes {kind_name(captured.kind)}"
    if move.promote:
        text += " and promotes"
    return text


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


def _piece_token(piece: Piece) -> str:
    prefix = "+" if piece.kind not in _LETTERS else ""
    letter = _LETTERS[base_kind(piece.kind)]
    return prefix + (letter if piece.owner is Player.FIRST else letter.lower())


def to_sfen(state: BoardState) -> str:
    rows = []
    for cells in state.cells:
        out, empty = "", 0
        for piece in cells:
            if piece is None:
                empty += 1
                continue
            if empty:
                out += str(empty)
                empty = 0
            out += _piece_token(piece)
        if empty:
            out += str(empty)
        rows.append(out)

    hands = ""
    for player in Player:
        hand = state.hand(player)
        for kind in DROPPABLE:
            count = hand[kind]
            if count <= 0:
                continue
            letter = _LETTERS[kind] if player is Player.FIRST else _LETTERS[kind].lower()
            hands += (str(count) if count > 1 else "") + letter

    side = "b" if state.turn is Player.FIRST else "w"
    return f"{'/'.join(rows)} {side} {hands or '-'}"


def _parse_row(text: str, row: int) -> list[Piece | None]:
    cells: list[Piece | None] = []
    promoted = False
    for ch in text:
        if ch == "+":
            if promoted:
                raise ValueError(f"Row {row + 1}: repeated '+'")
            promoted = True
            continue
        if ch.isdigit():
            if promoted:
                raise ValueError(f"Row {row + 1}: '+' before a digit")
            cells.extend([None] * int(ch))
            continue
        kind = _KINDS_BY_LETTER.get(ch.upper())
        if kind is None:
            raise ValueError(f"Row {row + 1}: unknown piece {ch!r}")
        if promoted:
            if kind not in PROMOTES_TO:
                raise ValueError(f"Row {row + 1}: {kind_name(kind)} cannot promote")
            kind = PROMOTES_TO[kind]
            promoted = False
        owner = Player.FIRST if ch.isupper() else Player.SECOND
        cells.append(Piece(kind, owner))
    if promoted:
        raise ValueError(f"Row {row + 1}: dangling '+'")
    if len(cells) != BOARD_SIZE:
        raise ValueError(f"Row {row + 1}: expected {BOARD_SIZE} cells, got {len(cells)}")
    return cells


def parse_sfen(text: str) -> BoardState:
    """
    Build a BoardState from a 5x5 SFEN string.

    Raises:
        ValueError: malformed string, wrong board size, unknown pieces,
                    more than one king per side, or undroppable hand pieces.
    """
    fields = text.split()
    if len(fields) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 SFEN fields, got {len(fields)}")
    board_field, side_field, hand_field = fields[:3]

    row_texts = board_field.split("/")
    if len(row_texts) != BOARD_SIZE:
        raise ValueError(f"Expected {BOARD_SIZE} rows, got {len(row_texts)}")
    state = BoardState(cells=[_parse_row(t, r) for r, t in enumerate(row_texts)])

    kings = [p.owner for _, _, p in state.pieces() if p.kind is PieceKind.KING]
    for player in Player:
        if kings.count(player) > 1:
            raise ValueError(f"{player.name} has more than one king")

    if side_field not in ("b", "w"):
        raise ValueError(f"Side to move must be 'b' or 'w', got {side_field!r}")
    state.turn = Player.FIRST if side_field == "b" else Player.SECOND

    if hand_field != "-":
        consumed = 0
        for match in _HAND_RE.finditer(hand_field):
            if match.start() != consumed:
                break
            consumed = match.end()
            kind = _KINDS_BY_LETTER.get(match.group(2).upper())
            if kind not in DROPPABLE:
                raise ValueError(f"Piece {match.group(2)!r} cannot be held in hand")
            owner = Player.FIRST if match.group(2).isupper() else Player.SECOND
            count = int(match.group(1)) if match.group(1) else 1
            if count <= 0:
                raise ValueError(f"Hand count must be positive: {match.group(0)!r}")
            state.add_to_hand(owner, kind, count)
        if consumed != len(hand_field):
            raise ValueError(f"Malformed hand field: {hand_field!r}")

    return state
