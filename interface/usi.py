"""
USI-style protocol handler for the mini-shogi engine.

USI is the shogi counterpart of the chess UCI protocol: a GUI or a test
harness talks to the engine over stdin/stdout, one command per line. This
handler implements the subset needed to drive the engine from scripts and
tools/bench.py, using this project's move notation (see interface.notation).

Protocol overview:
    Driver -> Engine: usi, isready, usinewgame, position, go, quit
    Engine -> Driver: id name, id author, usiok, readyok, info, bestmove

    position startpos [moves m1 m2 ...]
    position sfen <board> <side> <hands> [<n>] [moves m1 m2 ...]
    go [depth N]

The search is synchronous: "go" blocks until the fixed-depth search is done,
then prints one info line and "bestmove <move>", or "bestmove resign" when the
side to move has no legal move or the game is already over.

Run with: python -m interface.usi

Critical rule: NEVER print to stdout except for protocol responses.
Diagnostics go to stderr.
"""

import sys
import time

from engine.board import BoardState
from engine.constants import MAX_REQUEST_DEPTH, SEARCH_DEPTH
from engine.movegen import find_legal_move
from engine.rules import apply_move, game_outcome
from engine.search import get_best_move
from interface.notation import format_move, parse_move, parse_sfen


def _send(line: str) -> None:
    """Write one protocol line to stdout and flush it immediately."""
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic line to stderr, keeping stdout protocol-clean."""
    print(message, file=sys.stderr, flush=True)


class UsiHandler:
    """
    Stateful handler for the protocol.

    Attributes:
        state: The current position, replaced by every "position" command.
    """

    def __init__(self) -> None:
        self.state: BoardState = BoardState.initial()

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_usi(self) -> None:
        _send("id name MiniShogiAI")
        _send("id author MiniShogi Project")
        _send("usiok")

    def handle_isready(self) -> None:
        _send("readyok")

    def handle_usinewgame(self) -> None:
        self.state = BoardState.initial()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Moves after "moves" are replayed one by one; replay stops at the
        first malformed or illegal move, which is reported on stderr. On a
        malformed SFEN the current position is left untouched.

        Args:
            tokens: The command tokens with "position" already stripped.
        """
        if not tokens:
            return

        if "moves" in tokens:
            moves_idx = tokens.index("moves")
            setup, move_tokens = tokens[:moves_idx], tokens[moves_idx + 1:]
        else:
            setup, move_tokens = tokens, []

        if setup[0] == "startpos":
            state = BoardState.initial()
        elif setup[0] == "sfen":
            try:
                state = parse_sfen(" ".join(setup[1:]))
            except ValueError as e:
                _log(f"usi: bad sfen in position command: {e}")
                return
        else:
            _log(f"usi: unknown position type: {setup[0]}")
            return

        for token in move_tokens:
            try:
                move = find_legal_move(state, parse_move(token))
            except ValueError:
                move = None
            if move is None:
                _log(f"usi: illegal move in position command: {token}")
                break
            apply_move(state, move)

        self.state = state

    def handle_go(self, tokens: list[str]) -> None:
        """Search the current position and reply with info and bestmove."""
        depth = self._parse_go_depth(tokens)

        if game_outcome(self.state).over:
            _send("bestmove resign")
            return

        start = time.monotonic()
        move, score, nodes = get_best_move(self.state, depth)
        elapsed_ms = max(1, int((time.monotonic() - start) * 1000))

        if move is None:
            _send("bestmove resign")
            return

        nps = nodes * 1000 // elapsed_ms
        _send(
            f"info depth {depth} score cp {score} "
            f"nodes {nodes} nps {nps} time {elapsed_ms}"
        )
        _send(f"bestmove {format_move(move)}")

    def handle_quit(self) -> None:
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """
        Extract "depth N" from go tokens, clamped to [1, MAX_REQUEST_DEPTH].

        Anything else ("go", "go infinite", time controls) searches at the
        default SEARCH_DEPTH; the engine has no time management.
        """
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                return max(1, min(int(tokens[idx + 1]), MAX_REQUEST_DEPTH))
            except (ValueError, IndexError):
                _log(f"usi: bad depth in go command: {' '.join(tokens)}")
        return SEARCH_DEPTH


def run_usi_loop(stream=None) -> None:
    """
    Main protocol loop: read commands until "quit" or end of input.

    Each command is wrapped so that a failure in one handler is logged to
    stderr and the loop keeps running.
    """
    handler = UsiHandler()

    for raw_line in stream if stream is not None else sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "usi":
                handler.handle_usi()
            elif command == "isready":
                handler.handle_isready()
            elif command == "usinewgame":
                handler.handle_usinewgame()
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "quit":
                handler.handle_quit()
            else:
                _log(f"usi: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"usi: unhandled error for command {command!r}: {e}")


if __name__ == "__main__":
    run_usi_loop()
