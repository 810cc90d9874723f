"""
Smoke test for the benchmark driver: one real USI subprocess per position.
"""

import pytest

from tools.bench import POSITIONS, run_position


class TestBench:
    def test_start_position_depth_one(self):
        result = run_position("Start", "startpos", depth=1)
        assert result["label"] == "Start"
        assert result["move"] == "5552"
        assert result["score"] == 180
        assert result["nodes"] == 15

    @pytest.mark.parametrize("label, pos_spec", POSITIONS)
    def test_every_position_yields_a_move(self, label, pos_spec):
        result = run_position(label, pos_spec, depth=1)
        assert result["move"] != "resign"
        assert result["nodes"] > 0
