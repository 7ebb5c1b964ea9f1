"""Tests for the sequential multi-pair router.

Uses two fixtures:
  - three_lane: 5x5 board, three horizontal pairs, solvable by every method
  - order_sensitive: 3x4 board where only one pair ordering succeeds

Validates:
  - Each committed path is reserved (blocked) before the next pair
  - The first unsolvable pair aborts the run; nothing is rolled back
  - Solvability depends on pair order
"""

from __future__ import annotations

import unittest

from flowsolver.solver import (
    EndpointPair, Grid, PairResult, Puzzle, SolveMethod, SolverConfig,
    place_endpoints, route_pairs, solve_puzzle, validate_solution,
)
from tests.puzzle_fixture import (
    BLUE, make_order_sensitive_puzzle, make_three_lane_puzzle,
)


class TestThreeLaneRouting(unittest.TestCase):
    """Every method routes the three-lane board cleanly."""

    def test_all_methods_succeed(self):
        puzzle = make_three_lane_puzzle()
        for method in SolveMethod:
            result = solve_puzzle(puzzle, method)
            self.assertTrue(result.ok, f"{method.value} failed on {result.failed_pair}")
            self.assertIs(result.method, method)
            self.assertEqual([p.label for p in result.pairs], ["red", "blue", "green"])
            self.assertEqual(validate_solution(puzzle, result), [])

    def test_straight_lanes(self):
        result = solve_puzzle(make_three_lane_puzzle(), SolveMethod.BFS)
        for pr in result.pairs:
            self.assertEqual(len(pr.path), 5)
            self.assertEqual({p.y for p in pr.path}, {pr.start.y})

    def test_paths_are_reserved(self):
        puzzle = make_three_lane_puzzle()
        grid = puzzle.build_grid()
        result = route_pairs(grid, puzzle.pairs, SolveMethod.ASTAR)
        self.assertTrue(result.ok)
        for pr in result.pairs:
            for pos in pr.path:
                self.assertTrue(grid.blocked(pos))
        self.assertFalse(grid.blocked((2, 1)))

    def test_sink_sees_each_pair_in_order(self):
        seen: list[PairResult] = []
        result = solve_puzzle(make_three_lane_puzzle(), "bfs", sink=seen.append)
        self.assertEqual([p.label for p in seen], ["red", "blue", "green"])
        self.assertEqual(seen, result.pairs)

    def test_trace_recording(self):
        result = solve_puzzle(make_three_lane_puzzle(), "bfs")
        self.assertTrue(all(pr.visited for pr in result.pairs))

        quiet = solve_puzzle(
            make_three_lane_puzzle(), "bfs",
            config=SolverConfig(record_trace=False),
        )
        self.assertTrue(quiet.ok)
        self.assertTrue(all(pr.visited == [] for pr in quiet.pairs))

    def test_method_defaults_to_config(self):
        result = solve_puzzle(
            make_three_lane_puzzle(),
            config=SolverConfig(method=SolveMethod.DFS),
        )
        self.assertIs(result.method, SolveMethod.DFS)

    def test_elapsed_time_recorded(self):
        result = solve_puzzle(make_three_lane_puzzle(), "astar")
        self.assertGreaterEqual(result.elapsed_s, 0.0)


class TestOrderSensitivity(unittest.TestCase):
    """Greedy, one-pair-at-a-time routing depends on pair order."""

    def test_blue_first_succeeds(self):
        puzzle = make_order_sensitive_puzzle(blue_first=True)
        for method in SolveMethod:
            result = solve_puzzle(puzzle, method)
            self.assertTrue(result.ok, f"{method.value}: failed on {result.failed_pair}")
            self.assertEqual(result.paths["blue"], [(1, 3), (1, 2), (1, 1)])
            # Red goes the long way round the bottom
            self.assertEqual(len(result.paths["red"]), 7)
            self.assertEqual(validate_solution(puzzle, result), [])

    def test_red_first_fails_on_blue(self):
        puzzle = make_order_sensitive_puzzle(blue_first=False)
        for method in SolveMethod:
            result = solve_puzzle(puzzle, method)
            self.assertFalse(result.ok)
            self.assertEqual(result.failed_pair, "blue")
            self.assertEqual(result.paths["red"], [(0, 2), (1, 2), (2, 2)])
            self.assertIsNone(result.pairs[-1].path)

    def test_abort_keeps_committed_paths(self):
        """No rollback: red's reservation survives the aborted run."""
        puzzle = make_order_sensitive_puzzle(blue_first=False)
        grid = puzzle.build_grid()
        result = route_pairs(grid, puzzle.pairs, "bfs")
        self.assertFalse(result.ok)
        self.assertTrue(grid.blocked((1, 2)))

    def test_abort_skips_remaining_pairs(self):
        puzzle = make_order_sensitive_puzzle(blue_first=False)
        extra = EndpointPair(start=(2, 0), end=(2, 1), label="green")
        puzzle.pairs.append(extra)
        committed: list[PairResult] = []
        result = solve_puzzle(puzzle, "bfs", sink=committed.append)
        self.assertEqual(result.failed_pair, "blue")
        self.assertEqual([p.label for p in result.pairs], ["red", "blue"])
        self.assertEqual([p.label for p in committed], ["red"])

    def test_failed_pair_still_reports_trace(self):
        result = solve_puzzle(make_order_sensitive_puzzle(blue_first=False), "bfs")
        self.assertEqual(result.pairs[-1].visited[0], BLUE.start)


class TestRouteOnExistingGrid(unittest.TestCase):

    def test_endpoints_of_later_pairs_are_avoided(self):
        """Pre-blocked endpoints of pending pairs are routed around."""
        grid = Grid(3, 3)
        first = EndpointPair(start=(0, 1), end=(2, 1), label="a")
        second = EndpointPair(start=(1, 1), end=(1, 2), label="b")
        place_endpoints(grid, [first, second])
        result = route_pairs(grid, [first], "bfs")
        self.assertTrue(result.ok)
        self.assertNotIn((1, 1), result.paths["a"])
        self.assertEqual(len(result.paths["a"]), 5)

    def test_empty_pair_list(self):
        result = route_pairs(Grid(2, 2), [], "bfs")
        self.assertTrue(result.ok)
        self.assertEqual(result.pairs, [])

    def test_walls_are_blocked_in_built_grid(self):
        puzzle = Puzzle(
            width=3, height=3,
            pairs=[EndpointPair((0, 0), (2, 0), "x")],
            walls=[(1, 0)],
        )
        grid = puzzle.build_grid()
        self.assertTrue(grid.blocked((1, 0)))
        self.assertTrue(grid.blocked((0, 0)))
        self.assertTrue(grid.blocked((2, 0)))
        result = route_pairs(grid, puzzle.pairs, "bfs")
        self.assertEqual(len(result.paths["x"]), 5)


if __name__ == "__main__":
    unittest.main()
