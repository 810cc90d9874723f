#!/usr/bin/env python3
"""
Benchmark: measure nodes visited and time per move at a fixed search depth.

Run before and after each search change (move generation speed-ups, pruning
tweaks) to quantify the effect. Fewer nodes at the same depth means better
pruning; higher NPS means faster move generation and evaluation. The chosen
move and score must not change unless the evaluation did.

Usage: python3 tools/bench.py [depth]
"""
import os
import subprocess
import sys

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
PYTHON = sys.executable

# Fixed positions spanning the opening, drop-heavy middlegames and a king hunt.
# Same positions for every comparison.
POSITIONS = [
    ("Start",         "startpos"),
    ("Pawn push",     "startpos moves 1413"),
    ("Rook out",      "startpos moves 5554 1112"),
    ("Bishop out",    "sfen rbsgk/4p/5/P4/KGSBR b - 1 moves 4523"),
    ("Hands",         "sfen r1sgk/4p/5/P4/KGS1R b Bb 1"),
    ("Promoted",      "sfen 2sgk/4p/+R4/P4/KGSB1 b Br 1"),
    ("King hunt",     "sfen 4k/5/2G2/5/K4 b 2S 1"),
]


def run_position(label: str, pos_spec: str, depth: int = 3) -> dict:
    """Run a single position through the engine and return metrics.

    Spawns the USI handler as a subprocess, sends the position and a
    "go depth" command, then parses the info line for node count, NPS,
    and time.

    Args:
        label: Human-readable position name for display.
        pos_spec: USI position string (e.g. "startpos" or "sfen <SFEN>").
        depth: Search depth in plies.

    Returns:
        Dict with keys: label, move, score, nodes, nps, time_ms.
    """
    env = {**os.environ, "PYTHONPATH": REPO}
    proc = subprocess.Popen(
        [PYTHON, "-m", "interface.usi"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        text=True,
        env=env,
        cwd=REPO,
    )
    cmds = f"usi\nisready\nposition {pos_spec}\ngo depth {depth}\nquit\n"
    out, _ = proc.communicate(cmds, timeout=600)

    nodes = time_ms = nps = score = 0
    move = "resign"
    for line in out.splitlines():
        line = line.strip()
        if line.startswith("info depth"):
            parts = line.split()

            def _get(key: str) -> int:
                try:
                    return int(parts[parts.index(key) + 1])
                except (ValueError, IndexError):
                    return 0

            score = _get("cp")
            nodes = _get("nodes")
            nps = _get("nps")
            time_ms = _get("time")
        elif line.startswith("bestmove"):
            move = line.split()[1]

    return {
        "label": label,
        "move": move,
        "score": score,
        "nodes": nodes,
        "nps": nps,
        "time_ms": time_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    print(f"Mini-shogi engine benchmark — {PYTHON}, depth {depth}")
    print()
    print(
        f"{'Position':<14} {'Move':<7} {'Score':>7} "
        f"{'Nodes':>9} {'NPS':>8} {'Time(ms)':>9}"
    )
    print("-" * 60)

    results = []
    for label, pos in POSITIONS:
        r = run_position(label, pos, depth)
        results.append(r)
        print(
            f"{r['label']:<14} {r['move']:<7} {r['score']:>7} "
            f"{r['nodes']:>9,} {r['nps']:>8,} {r['time_ms']:>9,}"
        )

    valid = [r for r in results if r["nodes"] > 0]
    if valid:
        avg_nodes = sum(r["nodes"] for r in valid) // len(valid)
        avg_time = sum(r["time_ms"] for r in valid) // len(valid)
        avg_nps = sum(r["nps"] for r in valid) // len(valid)
        print("-" * 60)
        print(
            f"{'AVERAGE':<14} {'':<7} {'':>7} "
            f"{avg_nodes:>9,} {avg_nps:>8,} {avg_time:>9,}"
        )


if __name__ == "__main__":
    main()
