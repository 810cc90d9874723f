"""
Interactive terminal game: one human against the engine.

The loop owns the single authoritative BoardState. On the engine's turn it
calls get_best_move and announces the result; on the human's turn it parses
the typed move, checks it against the legal move list, and asks about
promotion when the move is only legal as a promoting move.

Usage:
    minishogi                 # human plays First, engine plays Second
    minishogi --ai first      # engine plays First
    minishogi --depth 2 -v    # shallower search, debug logging on stderr

Input: "1524" moves the piece on column 1 row 5 to column 2 row 4; "S42"
drops a Silver from hand on column 4 row 2; "quit" ends the session.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Callable

from engine.board import BoardMove, BoardState
from engine.constants import MAX_REQUEST_DEPTH, SEARCH_DEPTH, Player
from engine.movegen import find_legal_move, generate_moves, promotion_available
from engine.rules import apply_move, game_outcome
from engine.search import get_best_move
from interface.notation import describe_move, format_move, parse_move
from interface.render import render

_log = logging.getLogger(__name__)

_QUIT_WORDS = {"quit", "exit", "q"}


def _send(line: str) -> None:
    print(line, flush=True)


def _read_human_move(
    state: BoardState,
    read: Callable[[str], str],
    write: Callable[[str], None],
):
    """
    Prompt until the human enters a legal move.

    Returns the legal Move, or None if the human quits or input runs out.
    """
    while True:
        try:
            text = read("Your move: ").strip()
        except EOFError:
            return None
        if text.lower() in _QUIT_WORDS:
            return None

        try:
            move = parse_move(text)
        except ValueError:
            write("Invalid input. Board move: 1524 (col row col row), drop: S42.")
            continue

        legal = find_legal_move(state, move)
        if isinstance(move, BoardMove) and not move.promote and promotion_available(state, move):
            promoting = find_legal_move(state, replace(move, promote=True))
            if promoting is not None:
                try:
                    answer = read("Promote? (y/n): ").strip().lower()
                except EOFError:
                    return None
                if answer.startswith("y"):
                    legal = promoting

        if legal is None:
            write("That move is not legal here.")
            continue
        return legal


def play_game(
    ai_player: Player = Player.SECOND,
    depth: int = SEARCH_DEPTH,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = _send,
    state: BoardState | None = None,
) -> Player | None:
    """
    Run the game loop until a king is captured or the session ends.

    Args:
        ai_player: Side the engine plays.
        depth:     Engine search depth in plies.
        read:      Prompt function returning one line (``input`` by default).
                   Raising EOFError ends the session.
        write:     Output function for one line of text.
        state:     Starting position; the standard layout if omitted.

    Returns:
        The winner, or None if the session ended without a captured king
        (the human quit, or the side to move had no legal move).
    """
    state = state or BoardState.initial()

    while True:
        write("")
        write(render(state.snapshot()))

        outcome = game_outcome(state)
        if outcome.over:
            write(f"{outcome.winner.name.title()} wins!")
            return outcome.winner

        write(f"{state.turn.name.title()} to move.")

        if state.turn is ai_player:
            write("Engine is thinking...")
            move, score, nodes = get_best_move(state, depth)
            if move is None:
                write("Engine has no legal move.")
                return None
            _log.info("engine move=%s score=%d nodes=%d", format_move(move), score, nodes)
            write(f"Engine: {describe_move(state, move)} ({format_move(move)})")
        else:
            if not generate_moves(state):
                write("You have no legal move.")
                return None
            move = _read_human_move(state, read, write)
            if move is None:
                write("Game abandoned.")
                return None

        apply_move(state, move)


def _depth(value: str) -> int:
    depth = int(value)
    if not 1 <= depth <= MAX_REQUEST_DEPTH:
        raise argparse.ArgumentTypeError(f"depth must be between 1 and {MAX_REQUEST_DEPTH}")
    return depth


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="minishogi", description="Play 5x5 shogi against the engine.")
    parser.add_argument("--ai", choices=("first", "second"), default="second",
                        help="side played by the engine (default: second)")
    parser.add_argument("--depth", type=_depth, default=SEARCH_DEPTH,
                        help=f"engine search depth in plies (default: {SEARCH_DEPTH})")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    play_game(ai_player=Player(args.ai), depth=args.depth)
    return 0


if __name__ == "__main__":
    sys.exit(main())
