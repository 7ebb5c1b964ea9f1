"""
flowsolver — entry point.

Usage:
    python -m flowsolver solve puzzle.json --method astar --out result.json
    python -m flowsolver shuffle --width 8 --height 8 --pairs 5 --seed 1
    python -m flowsolver serve --port 3000
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from flowsolver.config import PUZZLE_RULES


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="flowsolver", description="Sequential multi-pair grid routing")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("solve", help="Route every pair of a puzzle.json file")
    s.add_argument("puzzle", help="Path to puzzle.json")
    s.add_argument("--method", default=PUZZLE_RULES.default_method, help="dfs, bfs or astar")
    s.add_argument("--out", default=None, help="Write the routing result here (default: stdout)")
    s.add_argument("--no-trace", action="store_true", help="Skip visited-cell traces")

    sh = sub.add_parser("shuffle", help="Generate a random puzzle")
    sh.add_argument("--width", type=int, default=PUZZLE_RULES.grid_width)
    sh.add_argument("--height", type=int, default=PUZZLE_RULES.grid_height)
    sh.add_argument("--pairs", type=int, default=PUZZLE_RULES.num_pairs)
    sh.add_argument("--seed", type=int, default=None)
    sh.add_argument("--out", default=None, help="Write the puzzle here (default: stdout)")

    sv = sub.add_parser("serve", help="Start the web API server")
    sv.add_argument("--host", default="127.0.0.1", help="Host to bind")
    sv.add_argument("--port", type=int, default=8000, help="Port to bind")

    return p


def _emit(data: dict, out: str | None) -> None:
    text = json.dumps(data, indent=2)
    if out is None:
        print(text)
    else:
        Path(out).write_text(text, encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "solve":
        from flowsolver.solver import (
            PuzzleError, SolverConfig, parse_puzzle, routing_to_dict,
            solve_puzzle, validate_puzzle,
        )

        try:
            data = json.loads(Path(args.puzzle).read_text(encoding="utf-8"))
            puzzle = parse_puzzle(data)
            errors = validate_puzzle(puzzle)
            if errors:
                raise PuzzleError(errors)
            config = SolverConfig(record_trace=not args.no_trace)
            result = solve_puzzle(puzzle, args.method, config=config)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        _emit(routing_to_dict(result), args.out)
        if not result.ok:
            print(f"No path for {result.failed_pair} using {result.method.value}.", file=sys.stderr)
            return 1
        return 0

    if args.cmd == "shuffle":
        from flowsolver.solver import Puzzle, generate_pairs, puzzle_to_dict

        try:
            pairs = generate_pairs(args.width, args.height, args.pairs, rng=random.Random(args.seed))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
        _emit(puzzle_to_dict(Puzzle(args.width, args.height, pairs)), args.out)
        return 0

    if args.cmd == "serve":
        from flowsolver.web.server import main as serve
        serve(host=args.host, port=args.port)
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
