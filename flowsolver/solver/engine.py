"""Sequential multi-pair router — connects every endpoint pair in turn.

Algorithm overview:
  1. Build a fresh grid and block every endpoint of every pair.
  2. For each pair, in input order, run the chosen search against the
     current grid.
  3. On success, block every cell of the path (reservation) so later
     pairs route around it, and hand the pair result to the sink.
  4. On the first failure, abort the whole run.  Earlier reservations
     stay in place and no pair is retried.

Solvability is order dependent: the router is greedy and never tries a
different ordering or a different search strategy.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .grid import Grid
from .models import (
    EndpointPair, PairResult, Position, RoutingResult, SolveMethod, SolverConfig,
)
from .pairs import place_endpoints
from .pathfinder import PathFinder


log = logging.getLogger(__name__)


PairSink = Callable[[PairResult], None]


# ── Puzzle description ─────────────────────────────────────────────


@dataclass
class Puzzle:
    """Board size, the ordered endpoint pairs to connect, and fixed walls."""

    width: int
    height: int
    pairs: list[EndpointPair] = field(default_factory=list)
    walls: list[Position] = field(default_factory=list)

    def build_grid(self) -> Grid:
        """Fresh grid with every wall and every endpoint pre-blocked."""
        grid = Grid(self.width, self.height)
        for pos in self.walls:
            grid.set_blocked(pos, True)
        place_endpoints(grid, self.pairs)
        return grid


# ── Main entry points ──────────────────────────────────────────────


def route_pairs(
    grid: Grid,
    pairs: Sequence[EndpointPair],
    method: SolveMethod | str | None = None,
    *,
    config: SolverConfig | None = None,
    sink: PairSink | None = None,
) -> RoutingResult:
    """Route *pairs* one at a time on *grid*, reserving each solved path.

    Parameters
    ----------
    grid : Grid
        Board with all endpoints already blocked.  Mutated in place:
        every committed path ends up blocked, including when the run
        aborts part-way.
    pairs : Sequence[EndpointPair]
        Pairs in routing order.
    method : SolveMethod | str | None
        Search strategy; falls back to ``config.method``.
    config : SolverConfig | None
        Tuneable parameters.  Uses defaults when *None*.
    sink : callable | None
        Called with each committed ``PairResult`` before the next pair
        is attempted (presentation layer hook).

    Returns
    -------
    RoutingResult
        One entry per attempted pair; ``failed_pair`` names the pair that
        aborted the run, if any.
    """
    if config is None:
        config = SolverConfig()
    method = SolveMethod.parse(method if method is not None else config.method)

    log.info("Router: starting — %dx%d grid, %d pairs, method=%s",
             grid.width, grid.height, len(pairs), method.value)

    finder = PathFinder(grid)
    results: list[PairResult] = []
    start_time = time.monotonic()

    for i, pair in enumerate(pairs):
        visited: list[Position] | None = [] if config.record_trace else None
        path = finder.solve(method, pair.start, pair.end, visited)
        result = PairResult(
            label=pair.label,
            start=pair.start,
            end=pair.end,
            path=path,
            visited=visited if visited is not None else [],
        )
        results.append(result)

        if path is None:
            elapsed = time.monotonic() - start_time
            log.warning("No path for %s using %s. Aborting after %d/%d pairs.",
                        pair.label or f"pair {i}", method.value, i, len(pairs))
            return RoutingResult(
                method=method,
                pairs=results,
                failed_pair=pair.label or str(i),
                elapsed_s=elapsed,
            )

        # Reserve the path so later pairs route around it
        for pos in path:
            grid.set_blocked(pos, True)

        log.debug("  %-8s OK — %d cells, %d visited",
                  pair.label, len(path), len(result.visited))
        if sink is not None:
            sink(result)

    elapsed = time.monotonic() - start_time
    log.info("Router: all %d pairs solved in %.3fs", len(pairs), elapsed)
    return RoutingResult(method=method, pairs=results, elapsed_s=elapsed)


def solve_puzzle(
    puzzle: Puzzle,
    method: SolveMethod | str | None = None,
    *,
    config: SolverConfig | None = None,
    sink: PairSink | None = None,
) -> RoutingResult:
    """Route *puzzle* from scratch on a freshly built grid."""
    return route_pairs(puzzle.build_grid(), puzzle.pairs, method, config=config, sink=sink)
