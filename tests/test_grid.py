"""Tests for the grid model and the A* open-set priority queue."""

from __future__ import annotations

import unittest

from flowsolver.solver import (
    Grid, Position, PriorityQueue,
    OutOfBoundsError, EmptyQueueError,
)


class TestGrid(unittest.TestCase):
    """Unit tests for the grid."""

    def setUp(self):
        self.grid = Grid(4, 3)

    def test_grid_dimensions(self):
        self.assertEqual(self.grid.width, 4)
        self.assertEqual(self.grid.height, 3)
        self.assertEqual(len(self.grid), 12)

    def test_cell_positions_match_index(self):
        """Every cell's stored position equals where it lives."""
        for y in range(3):
            for x in range(4):
                self.assertEqual(self.grid.cell((x, y)).position, Position(x, y))

    def test_cells_start_free(self):
        self.assertTrue(all(not c.blocked for c in self.grid))
        self.assertEqual(self.grid.blocked_positions(), [])

    def test_in_bounds(self):
        self.assertTrue(self.grid.in_bounds((0, 0)))
        self.assertTrue(self.grid.in_bounds((3, 2)))
        self.assertFalse(self.grid.in_bounds((4, 0)))
        self.assertFalse(self.grid.in_bounds((0, 3)))
        self.assertFalse(self.grid.in_bounds((-1, 0)))

    def test_set_blocked_and_clear(self):
        self.grid.set_blocked((2, 1))
        self.assertTrue(self.grid.blocked((2, 1)))
        self.assertEqual(self.grid.blocked_positions(), [Position(2, 1)])
        self.grid.set_blocked((2, 1), False)
        self.assertFalse(self.grid.blocked((2, 1)))

    def test_set_blocked_touches_one_cell(self):
        self.grid.set_blocked((1, 1))
        blocked = [c.position for c in self.grid if c.blocked]
        self.assertEqual(blocked, [Position(1, 1)])

    def test_out_of_bounds_access_raises(self):
        """Out-of-bounds queries fail instead of clamping."""
        with self.assertRaises(OutOfBoundsError):
            self.grid.blocked((4, 0))
        with self.assertRaises(OutOfBoundsError):
            self.grid.set_blocked((0, -1))
        with self.assertRaises(IndexError):
            self.grid.cell((10, 10))

    def test_reset_frees_everything(self):
        self.grid.set_blocked((0, 0))
        self.grid.set_blocked((3, 2))
        self.grid.reset()
        self.assertEqual(self.grid.blocked_positions(), [])

    def test_snapshot_restore(self):
        snap = self.grid.snapshot()
        self.grid.set_blocked((1, 2))
        self.grid.restore(snap)
        self.assertFalse(self.grid.blocked((1, 2)))

    def test_restore_rejects_wrong_size(self):
        with self.assertRaises(ValueError):
            self.grid.restore(bytearray(5))

    def test_invalid_size(self):
        with self.assertRaises(ValueError):
            Grid(0, 3)

    def test_position_equals_plain_tuple(self):
        self.assertEqual(Position(1, 2), (1, 2))
        self.assertIn((1, 2), {Position(1, 2)})


class TestPriorityQueue(unittest.TestCase):
    """Unit tests for the linear-scan priority queue."""

    def test_dequeue_lowest_first(self):
        q = PriorityQueue()
        q.enqueue("a", 3.0)
        q.enqueue("b", 1.0)
        q.enqueue("c", 2.0)
        self.assertEqual([q.dequeue() for _ in range(3)], ["b", "c", "a"])

    def test_ties_go_to_earliest_inserted(self):
        q = PriorityQueue()
        q.enqueue("a", 1.0)
        q.enqueue("b", 1.0)
        q.enqueue("c", 0.5)
        q.enqueue("d", 1.0)
        self.assertEqual([q.dequeue() for _ in range(4)], ["c", "a", "b", "d"])

    def test_enqueue_does_not_dedup(self):
        """No decrease-key: the same item can be queued twice."""
        q = PriorityQueue()
        q.enqueue(Position(0, 0), 5.0)
        q.enqueue(Position(0, 0), 2.0)
        self.assertEqual(len(q), 2)
        self.assertEqual(q.dequeue(), (0, 0))
        self.assertTrue(q.contains((0, 0)))

    def test_contains(self):
        q = PriorityQueue()
        q.enqueue(Position(1, 1), 0.0)
        self.assertTrue(q.contains(Position(1, 1)))
        self.assertIn((1, 1), q)
        self.assertFalse(q.contains(Position(2, 2)))

    def test_empty_dequeue_raises(self):
        q = PriorityQueue()
        self.assertFalse(q)
        with self.assertRaises(EmptyQueueError):
            q.dequeue()


if __name__ == "__main__":
    unittest.main()
