"""
Tests for the position model: initial layout, copying, hands, snapshots.
"""

from collections import Counter

from engine.board import BoardMove, BoardState, DropMove, Piece, in_bounds
from engine.constants import BASE_KIND, MOVEMENT, PROMOTES_TO, PieceKind, Player, base_kind

F = Player.FIRST
S = Player.SECOND


# ════════════════════════════════════════════════════════════════════════════
#  INITIAL POSITION
# ════════════════════════════════════════════════════════════════════════════

class TestInitialPosition:
    def test_second_back_rank(self):
        state = BoardState.initial()
        kinds = [state.piece_at(0, c).kind for c in range(5)]
        assert kinds == [PieceKind.ROOK, PieceKind.BISHOP, PieceKind.SILVER,
                         PieceKind.GOLD, PieceKind.KING]
        assert all(state.piece_at(0, c).owner is S for c in range(5))

    def test_first_back_rank_is_mirrored(self):
        state = BoardState.initial()
        kinds = [state.piece_at(4, c).kind for c in range(5)]
        assert kinds == [PieceKind.KING, PieceKind.GOLD, PieceKind.SILVER,
                         PieceKind.BISHOP, PieceKind.ROOK]
        assert all(state.piece_at(4, c).owner is F for c in range(5))

    def test_pawns(self):
        state = BoardState.initial()
        assert state.piece_at(1, 4) == Piece(PieceKind.PAWN, S)
        assert state.piece_at(3, 0) == Piece(PieceKind.PAWN, F)

    def test_twelve_pieces_one_king_each(self):
        state = BoardState.initial()
        pieces = list(state.pieces())
        assert len(pieces) == 12
        kings = [p.owner for _, _, p in pieces if p.kind is PieceKind.KING]
        assert sorted(k.value for k in kings) == ["first", "second"]

    def test_first_to_move_with_empty_hands(self):
        state = BoardState.initial()
        assert state.turn is F
        assert not state.hand(F)
        assert not state.hand(S)

    def test_middle_row_empty(self):
        state = BoardState.initial()
        assert all(state.piece_at(2, c) is None for c in range(5))


# ════════════════════════════════════════════════════════════════════════════
#  COPY / EQUALITY
# ════════════════════════════════════════════════════════════════════════════

class TestCopy:
    def test_copy_is_equal(self):
        state = BoardState.initial()
        assert state.copy() == state

    def test_copy_grid_is_independent(self):
        state = BoardState.initial()
        clone = state.copy()
        clone.put(2, 2, Piece(PieceKind.GOLD, F))
        clone.put(4, 0, None)
        assert state.piece_at(2, 2) is None
        assert state.piece_at(4, 0) == Piece(PieceKind.KING, F)

    def test_copy_hands_are_independent(self):
        state = BoardState.initial()
        state.add_to_hand(S, PieceKind.SILVER)
        clone = state.copy()
        clone.add_to_hand(F, PieceKind.PAWN)
        clone.remove_from_hand(S, PieceKind.SILVER)
        assert state.hand(S) == Counter({PieceKind.SILVER: 1})
        assert not state.hand(F)

    def test_copy_turn_is_independent(self):
        state = BoardState.initial()
        clone = state.copy()
        clone.turn = S
        assert state.turn is F

    def test_states_differing_in_turn_are_not_equal(self):
        a = BoardState.initial()
        b = BoardState.initial()
        b.turn = S
        assert a != b


# ════════════════════════════════════════════════════════════════════════════
#  HANDS
# ════════════════════════════════════════════════════════════════════════════

class TestHands:
    def test_add_and_count(self):
        state = BoardState()
        state.add_to_hand(F, PieceKind.PAWN)
        state.add_to_hand(F, PieceKind.PAWN)
        assert state.hand(F)[PieceKind.PAWN] == 2

    def test_remove_last_drops_the_key(self):
        state = BoardState()
        state.add_to_hand(S, PieceKind.ROOK)
        state.remove_from_hand(S, PieceKind.ROOK)
        assert PieceKind.ROOK not in state.hand(S)
        assert list(state.hand(S)) == []

    def test_remove_one_of_many(self):
        state = BoardState()
        state.add_to_hand(F, PieceKind.GOLD, 3)
        state.remove_from_hand(F, PieceKind.GOLD)
        assert state.hand(F)[PieceKind.GOLD] == 2


# ════════════════════════════════════════════════════════════════════════════
#  SNAPSHOT
# ════════════════════════════════════════════════════════════════════════════

class TestSnapshot:
    def test_snapshot_is_tuples(self):
        snap = BoardState.initial().snapshot()
        assert isinstance(snap.cells, tuple)
        assert all(isinstance(row, tuple) for row in snap.cells)

    def test_snapshot_hands_sorted_by_kind(self):
        state = BoardState()
        state.add_to_hand(F, PieceKind.PAWN, 2)
        state.add_to_hand(F, PieceKind.GOLD)
        snap = state.snapshot()
        assert snap.hands[F] == ((PieceKind.GOLD, 1), (PieceKind.PAWN, 2))
        assert snap.hands[S] == ()

    def test_snapshot_does_not_follow_later_moves(self):
        state = BoardState.initial()
        snap = state.snapshot()
        state.put(2, 2, Piece(PieceKind.GOLD, S))
        state.add_to_hand(F, PieceKind.PAWN)
        assert snap.cells[2][2] is None
        assert snap.hands[F] == ()


# ════════════════════════════════════════════════════════════════════════════
#  MOVES AND CATALOG
# ════════════════════════════════════════════════════════════════════════════

class TestMoveTypes:
    def test_board_moves_compare_by_fields(self):
        assert BoardMove(3, 0, 2, 0) == BoardMove(3, 0, 2, 0, promote=False)
        assert BoardMove(1, 2, 0, 2) != BoardMove(1, 2, 0, 2, promote=True)

    def test_drop_and_board_move_never_equal(self):
        assert DropMove(2, 0, PieceKind.PAWN) != BoardMove(2, 0, 2, 0)

    def test_moves_are_hashable(self):
        moves = {BoardMove(3, 0, 2, 0), BoardMove(3, 0, 2, 0), DropMove(1, 1, PieceKind.GOLD)}
        assert len(moves) == 2


class TestCatalog:
    def test_promotion_map_round_trips(self):
        for kind, promoted in PROMOTES_TO.items():
            assert BASE_KIND[promoted] is kind
            assert base_kind(promoted) is kind

    def test_king_and_gold_never_promote(self):
        assert PieceKind.KING not in PROMOTES_TO
        assert PieceKind.GOLD not in PROMOTES_TO
        assert base_kind(PieceKind.GOLD) is PieceKind.GOLD

    def test_every_kind_has_movement_for_both_players(self):
        for kind in PieceKind:
            for player in Player:
                movement = MOVEMENT[(kind, player)]
                assert movement.steps or movement.slides

    def test_pawn_forward_depends_on_owner(self):
        assert MOVEMENT[(PieceKind.PAWN, F)].steps == ((-1, 0),)
        assert MOVEMENT[(PieceKind.PAWN, S)].steps == ((1, 0),)

    def test_in_bounds(self):
        assert in_bounds(0, 0) and in_bounds(4, 4)
        assert not in_bounds(-1, 0)
        assert not in_bounds(0, 5)
