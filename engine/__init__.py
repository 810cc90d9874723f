"""
Mini-shogi engine package.

Rules and search for the 5x5 shogi variant: legal move generation with drops
and promotion, move application, king-capture game end, material evaluation,
and a fixed-depth minimax search with alpha-beta pruning.

Modules:
    constants — Piece kinds, players, movement tables, values, search parameters
    board     — Piece, BoardState, and the BoardMove / DropMove types
    movegen   — Legal move generation and the legality check for outside moves
    rules     — Move application and game-outcome detection
    evaluate  — Static material evaluation (First-positive)
    search    — Minimax with alpha-beta pruning, get_best_move entry point
"""
