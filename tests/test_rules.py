"""
Tests for move application (captures, promotion, drops, turn passing) and
game-outcome detection.
"""

from collections import Counter

from engine.board import BoardMove, BoardState, DropMove, Piece
from engine.constants import PieceKind, Player, base_kind
from engine.movegen import generate_moves
from engine.rules import Outcome, apply_move, game_outcome

F = Player.FIRST
S = Player.SECOND

K, G, SI, B, R, P = (PieceKind.KING, PieceKind.GOLD, PieceKind.SILVER,
                     PieceKind.BISHOP, PieceKind.ROOK, PieceKind.PAWN)


def material(state):
    """Count of every base kind across the board and both hands."""
    counts = Counter()
    for _, _, piece in state.pieces():
        counts[base_kind(piece.kind)] += 1
    for hand in state.hands.values():
        for kind, count in hand.items():
            counts[base_kind(kind)] += count
    return counts


# ════════════════════════════════════════════════════════════════════════════
#  BOARD MOVES
# ════════════════════════════════════════════════════════════════════════════

class TestBoardMoves:
    def test_first_pawn_push(self):
        state = BoardState.initial()
        apply_move(state, BoardMove(3, 0, 2, 0))
        assert state.turn is S
        assert state.piece_at(2, 0) == Piece(P, F)
        assert state.piece_at(3, 0) is None
        assert not state.hand(F)

    def test_capture_goes_to_hand(self):
        state = BoardState.initial()
        apply_move(state, BoardMove(4, 4, 1, 4))
        assert state.hand(F) == Counter({P: 1})
        assert state.piece_at(1, 4) == Piece(R, F)
        assert state.piece_at(4, 4) is None

    def test_captured_promoted_piece_is_demoted(self, make_state):
        state = make_state({
            (2, 2): (R, F),
            (1, 2): (PieceKind.PROMOTED_ROOK, S),
            (4, 4): (K, F),
            (0, 4): (K, S),
        })
        apply_move(state, BoardMove(2, 2, 1, 2))
        assert state.hand(F) == Counter({R: 1})
        assert PieceKind.PROMOTED_ROOK not in state.hand(F)

    def test_promotion_replaces_kind(self, make_state):
        state = make_state({(1, 2): (SI, F), (4, 0): (K, F), (0, 4): (K, S)})
        apply_move(state, BoardMove(1, 2, 0, 2, promote=True))
        assert state.piece_at(0, 2) == Piece(PieceKind.PROMOTED_SILVER, F)

    def test_move_without_promotion_keeps_kind(self, make_state):
        state = make_state({(1, 2): (SI, F), (4, 0): (K, F), (0, 4): (K, S)})
        apply_move(state, BoardMove(1, 2, 0, 2))
        assert state.piece_at(0, 2) == Piece(SI, F)

    def test_capture_and_promote_together(self, make_state):
        state = make_state({(1, 1): (P, F), (0, 1): (PieceKind.PROMOTED_BISHOP, S),
                            (4, 0): (K, F), (0, 4): (K, S)})
        apply_move(state, BoardMove(1, 1, 0, 1, promote=True))
        assert state.piece_at(0, 1) == Piece(PieceKind.PROMOTED_PAWN, F)
        assert state.hand(F) == Counter({B: 1})


# ════════════════════════════════════════════════════════════════════════════
#  DROPS
# ════════════════════════════════════════════════════════════════════════════

class TestDrops:
    def test_second_drops_captured_silver(self, make_state):
        state = make_state({(4, 0): (K, F), (0, 4): (K, S)}, turn=S, hands={S: {SI: 1}})
        apply_move(state, DropMove(2, 3, SI))
        assert state.piece_at(2, 3) == Piece(SI, S)
        assert state.hand(S)[SI] == 0
        assert SI not in state.hand(S)
        assert state.turn is F

    def test_drop_removes_exactly_one(self, make_state):
        state = make_state({(4, 0): (K, F), (0, 4): (K, S)}, hands={F: {P: 2}})
        apply_move(state, DropMove(2, 2, P))
        assert state.hand(F)[P] == 1

    def test_captured_then_dropped_round_trip(self):
        state = BoardState.initial()
        apply_move(state, BoardMove(4, 4, 1, 4))   # First takes the pawn
        apply_move(state, BoardMove(0, 4, 1, 4))   # Second king takes the rook
        assert state.hand(S) == Counter({R: 1})
        apply_move(state, BoardMove(3, 0, 2, 0))
        apply_move(state, DropMove(2, 2, R))
        assert state.piece_at(2, 2) == Piece(R, S)
        assert not state.hand(S)


# ════════════════════════════════════════════════════════════════════════════
#  INVARIANTS OVER RANDOM GAMES
# ════════════════════════════════════════════════════════════════════════════

class TestInvariants:
    def test_turn_flips_every_move(self, playout):
        for seed in range(5):
            for state, move in playout(seed=seed, plies=40):
                before = state.turn
                apply_move(state, move)
                assert state.turn is before.opponent

    def test_material_is_conserved(self, playout):
        expected = material(BoardState.initial())
        assert expected == Counter({K: 2, G: 2, SI: 2, B: 2, R: 2, P: 2})
        for seed in range(5):
            for state, move in playout(seed=seed, plies=60):
                apply_move(state, move)
                assert material(state) == expected

    def test_hands_hold_only_base_kinds(self, playout):
        for seed in range(5):
            for state, move in playout(seed=seed, plies=60):
                apply_move(state, move)
                for hand in state.hands.values():
                    assert all(base_kind(kind) is kind for kind in hand)

    def test_applying_to_copy_leaves_original(self, playout):
        for state, move in playout(seed=9, plies=30):
            before = state.copy()
            snapshot = state.snapshot()
            clone = state.copy()
            apply_move(clone, move)
            assert state == before
            assert state.snapshot() == snapshot


# ════════════════════════════════════════════════════════════════════════════
#  OUTCOME
# ════════════════════════════════════════════════════════════════════════════

class TestOutcome:
    def test_initial_not_over(self):
        assert game_outcome(BoardState.initial()) == Outcome(False, None)

    def test_second_king_removed(self):
        state = BoardState.initial()
        state.put(0, 4, None)
        assert game_outcome(state) == Outcome(True, F)

    def test_first_king_removed(self):
        state = BoardState.initial()
        state.put(4, 0, None)
        assert game_outcome(state) == Outcome(True, S)

    def test_king_capture_ends_game(self, make_state):
        state = make_state({(2, 2): (R, F), (0, 2): (K, S), (4, 4): (K, F)})
        apply_move(state, BoardMove(2, 2, 0, 2))
        outcome = game_outcome(state)
        assert outcome.over
        assert outcome.winner is F

    def test_no_legal_moves_is_not_game_over(self, boxed_king):
        assert generate_moves(boxed_king) == []
        assert game_outcome(boxed_king) == Outcome(False, None)
