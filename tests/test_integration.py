"""
Integration test suite for the checkers engine.

Tests components working together end-to-end:
- Engine wrapper games (notation in, notation out)
- Self-play with and without pruning
- Command line front end
- FastAPI REST API
"""

import builtins
import logging

import pytest

from checkers_engine.core.board import (
    Side,
    initial_position,
    is_game_over,
    state_from_rows,
    state_to_rows,
)
from checkers_engine.core.moves import apply_move, legal_moves
from checkers_engine.core.search import SearchEngine
from checkers_engine.main import Engine, self_play
from checkers_engine.notation import parse_move
from interface import cli

START_ROWS = state_to_rows(initial_position())

# ════════════════════════════════════════════════════════════════════════════
#  ENGINE WRAPPER
# ════════════════════════════════════════════════════════════════════════════


class TestEngineWrapper:
    """Tests the Engine wrapper class (checkers_engine/main.py)."""

    def test_make_legal_move(self):
        eng = Engine(depth=1)
        assert eng.make_move("b6 a5") is True
        assert eng.state.side is Side.DARK
        assert len(eng.move_history) == 1

    def test_make_illegal_move(self):
        eng = Engine(depth=1)
        assert eng.make_move("b6 b5") is False
        assert eng.make_move("a3 b4") is False  # dark piece, light to move
        assert eng.state == initial_position()
        assert eng.move_history == []

    def test_make_garbage_input(self):
        eng = Engine(depth=1)
        assert eng.make_move("zzzz") is False
        assert eng.make_move("") is False
        assert eng.make_move("12345") is False
        assert eng.state == initial_position()

    def test_undo_move(self):
        eng = Engine(depth=1)
        eng.make_move("b6 a5")
        eng.make_move("a3 b4")
        eng.undo_move()
        eng.undo_move()
        assert eng.state == initial_position()
        assert eng.move_history == []

    def test_undo_empty(self):
        eng = Engine(depth=1)
        eng.undo_move()  # Should not crash
        assert eng.state == initial_position()

    def test_reset(self):
        eng = Engine(depth=1)
        eng.make_move("b6 a5")
        eng.reset()
        assert eng.state == initial_position()

    def test_get_legal_moves_initial(self):
        eng = Engine(depth=1)
        moves = eng.get_legal_moves()
        assert len(moves) == 7
        assert "b6 a5" in moves

    def test_full_game_via_wrapper(self):
        """Play several moves using the Engine wrapper."""
        eng = Engine(depth=2)
        moves_played = 0

        for _ in range(10):
            if eng.is_game_over():
                break
            move_str, score = eng.get_best_move()
            assert move_str is not None
            assert isinstance(score, int)
            assert eng.make_move(move_str) is True
            moves_played += 1

        assert moves_played == 10

    def test_best_move_none_when_stuck(self):
        eng = Engine(depth=2)
        eng.set_state(state_from_rows([
            "d.d.....",
            ".l......",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
        ], Side.LIGHT))
        assert eng.get_best_move() == (None, None)
        assert not eng.is_game_over()
        assert eng.winner() is None

    def test_winner(self):
        eng = Engine(depth=1)
        rows = ["........"] * 4 + ["....l..."] + ["........"] * 3
        eng.set_state(state_from_rows(rows, Side.DARK))
        assert eng.is_game_over()
        assert eng.winner() is Side.LIGHT


# ════════════════════════════════════════════════════════════════════════════
#  SELF-PLAY / PRUNING EQUIVALENCE
# ════════════════════════════════════════════════════════════════════════════


class TestSelfPlay:
    @pytest.mark.parametrize("depth, plies", [(1, 10), (2, 10), (3, 4)])
    def test_pruning_yields_identical_games(self, depth, plies):
        pruned_state, pruned_moves, pruned_nodes = self_play(depth, plies, pruning=True)
        full_state, full_moves, full_nodes = self_play(depth, plies, pruning=False)
        assert pruned_moves == full_moves
        assert pruned_state == full_state
        assert pruned_nodes <= full_nodes

    def test_self_play_moves_are_legal(self):
        state = initial_position()
        _final, moves, _nodes = self_play(2, 8)
        for move in moves:
            assert move in legal_moves(state)
            state = apply_move(state, move)

    def test_self_play_stops_when_game_over(self):
        start = state_from_rows(["........"] * 3 + ["...d...."] + ["....l..."] + ["........"] * 3,
                                Side.LIGHT)
        final, moves, _nodes = self_play(3, 10, state=start)
        assert moves == [parse_move("e5 c3")]
        assert is_game_over(final)

    def test_engine_vs_engine_completes(self):
        """Two engines play until the game ends or the ply limit is hit."""
        engine = SearchEngine(depth=1)
        state = initial_position()
        plies = 0
        while not is_game_over(state) and plies < 150:
            move = engine.choose_best_move(state)
            if move is None:
                break
            assert move in legal_moves(state)
            state = apply_move(state, move)
            plies += 1
        assert plies > 10


# ════════════════════════════════════════════════════════════════════════════
#  COMMAND LINE
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        for h in root.handlers:
            if h not in handlers:
                h.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_perft(self, capsys):
        assert cli.main(["perft", "--depth", "2"]) == 0
        assert capsys.readouterr().out.strip() == "49"

    def test_perft_divide(self, capsys):
        assert cli.main(["perft", "--depth", "1", "--divide"]) == 0
        out = capsys.readouterr().out
        assert "b6 a5: 1" in out
        assert "Total: 7" in out

    def test_show(self, capsys):
        assert cli.main(["show"]) == 0
        out = capsys.readouterr().out
        assert "A   B   C" in out
        assert "light to move" in out

    def test_compare(self, capsys):
        assert cli.main(["compare", "--depth", "1", "--plies", "4"]) == 0
        assert "Final positions identical: yes" in capsys.readouterr().out

    def test_selfplay(self, capsys):
        assert cli.main(["selfplay", "--depth", "1", "--plies", "2"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("1. ")
        assert "\n2. " in out

    def test_bad_depth(self, capsys):
        assert cli.main(["selfplay", "--depth", "0"]) == 2

    def test_play_rejects_illegal_then_plays(self, monkeypatch, capsys):
        answers = iter(["zz", "b6 b5", "b6 a5", "quit"])
        monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))
        assert cli.main(["play", "--human", "light", "--depth", "1", "--no-clear"]) == 0
        out = capsys.readouterr().out
        assert out.count("Illegal move, try again.") == 2
        assert "Engine plays:" in out

    def test_play_eof_exits(self, monkeypatch):
        def _eof(prompt=""):
            raise EOFError

        monkeypatch.setattr(builtins, "input", _eof)
        assert cli.main(["play", "--depth", "1", "--no-clear"]) == 0

    def test_log_file(self, tmp_path):
        log_path = tmp_path / "engine.log"
        assert cli.main(["--log-file", str(log_path), "--log-level", "INFO",
                         "selfplay", "--depth", "1", "--plies", "1"]) == 0
        assert "info depth 1" in log_path.read_text(encoding="utf-8")


# ════════════════════════════════════════════════════════════════════════════
#  API INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app, engine

        self.client = TestClient(app)
        # Reset state before each test
        engine.reset()

    def test_get_board_initial(self):
        response = self.client.get("/board")
        assert response.status_code == 200
        data = response.json()
        assert data["rows"] == START_ROWS
        assert data["side"] == "light"
        assert data["is_game_over"] is False
        assert data["winner"] is None
        assert len(data["legal_moves"]) == 7

    def test_post_move_valid(self):
        response = self.client.post("/move", json={"move": "b6a5"})
        assert response.status_code == 200
        data = response.json()
        assert data["move"] == "b6 a5"
        assert data["rows"][4][0] == "l"
        assert self.client.get("/board").json()["side"] == "dark"

    def test_post_move_illegal(self):
        response = self.client.post("/move", json={"move": "b6 b5"})
        assert response.status_code == 400
        assert self.client.get("/board").json()["rows"] == START_ROWS

    def test_post_move_invalid_format(self):
        response = self.client.post("/move", json={"move": "zzzz"})
        assert response.status_code == 400

    def test_set_position_valid(self):
        rows = ["........"] * 3 + ["...d...."] + ["....l..."] + ["........"] * 3
        response = self.client.post("/position", json={"rows": rows, "side": "light"})
        assert response.status_code == 200
        data = response.json()
        assert data["rows"] == rows
        assert data["legal_moves"] == ["e5 c3"]

    def test_set_position_invalid(self):
        response = self.client.post("/position", json={"rows": ["invalid"], "side": "light"})
        assert response.status_code == 400

    def test_search_returns_move(self):
        response = self.client.post("/search", json={"depth": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["best_move"] in [m for m in self.client.get("/board").json()["legal_moves"]]
        assert data["depth"] == 2
        assert data["nodes"] > 0

    def test_search_pruning_flag(self):
        pruned = self.client.post("/search", json={"depth": 2, "pruning": True}).json()
        full = self.client.post("/search", json={"depth": 2, "pruning": False}).json()
        assert pruned["best_move"] == full["best_move"]
        assert pruned["score"] == full["score"]
        assert pruned["nodes"] <= full["nodes"]

    def test_search_bad_depth(self):
        response = self.client.post("/search", json={"depth": 0})
        assert response.status_code == 400

    def test_search_game_over_returns_400(self):
        rows = ["........"] * 4 + ["....l..."] + ["........"] * 3
        self.client.post("/position", json={"rows": rows, "side": "dark"})
        assert self.client.get("/board").json()["winner"] == "light"
        response = self.client.post("/search", json={"depth": 2})
        assert response.status_code == 400

    def test_reset_board(self):
        self.client.post("/move", json={"move": "b6 a5"})
        response = self.client.post("/reset")
        assert response.status_code == 200
        assert response.json()["rows"] == START_ROWS

    def test_full_api_game_flow(self):
        r = self.client.get("/board")
        assert r.json()["side"] == "light"

        self.client.post("/move", json={"move": "b6 a5"})
        assert self.client.get("/board").json()["side"] == "dark"

        best = self.client.post("/search", json={"depth": 2}).json()["best_move"]
        assert best is not None
        assert self.client.post("/move", json={"move": best}).status_code == 200
        assert self.client.get("/board").json()["side"] == "light"
