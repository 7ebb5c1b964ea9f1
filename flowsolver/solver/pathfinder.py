"""Path search over the puzzle grid.

Four independent searches share one movement model (right, up, left,
down — in that order, which fixes DFS/BFS tie-breaking) and one
traversal rule: a cell may be entered when it is in bounds and either
free or one of the search's own endpoints.  Endpoints are pre-blocked
to reserve them from *other* pairs, so each search has to let its own
pair in:

  solve_dfs     depth-first with backtracking; some simple path
  solve_bfs     breadth-first; shortest path, blocked ``end`` allowed
  is_reachable  breadth-first predicate; no blocked-cell exception at all
  solve_astar   A* with Manhattan heuristic; shortest path, blocked ``end`` allowed

Visited/closed sets are fresh per call, so a ``PathFinder`` can be reused
across solves while the router mutates the grid in between.
"""

from __future__ import annotations

from collections import deque

from .grid import Grid
from .models import OutOfBoundsError, Position, SolveMethod
from .priority_queue import PriorityQueue


# Manhattan directions: right, up, left, down
DIRS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class PathFinder:
    """Search engine bound to one grid."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid

    def solve(
        self,
        method: SolveMethod | str,
        start: tuple[int, int],
        end: tuple[int, int],
        visited: list[Position] | None = None,
    ) -> list[Position] | None:
        """Dispatch to the solver selected by *method*."""
        method = SolveMethod.parse(method)
        if method is SolveMethod.DFS:
            return self.solve_dfs(start, end, visited)
        if method is SolveMethod.BFS:
            return self.solve_bfs(start, end, visited)
        return self.solve_astar(start, end, visited)

    # ── DFS with backtracking ──────────────────────────────────────

    def solve_dfs(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
        visited: list[Position] | None = None,
    ) -> list[Position] | None:
        """Depth-first search; returns the first path found, not the shortest.

        Runs the recursive formulation on an explicit stack: each path
        entry carries the index of the next direction to try, and a cell
        whose four directions are exhausted is popped (backtrack).
        Every cell is entered at most once per call.
        """
        start, end = self._check_endpoints(start, end)

        W = self.grid.width
        H = self.grid.height
        cells = self.grid._cells
        seen = bytearray(W * H)
        record = visited.append if visited is not None else None

        path: list[Position] = []
        next_dir: list[int] = []

        def enter(pos: Position) -> bool:
            x, y = pos
            if not (0 <= x < W and 0 <= y < H):
                return False
            key = y * W + x
            if seen[key]:
                return False
            if cells[key].blocked and pos != start and pos != end:
                return False
            seen[key] = 1
            if record is not None:
                record(pos)
            path.append(pos)
            next_dir.append(0)
            return True

        enter(start)
        if start == end:
            return path

        while path:
            d = next_dir[-1]
            if d == len(DIRS):
                path.pop()
                next_dir.pop()
                continue
            next_dir[-1] = d + 1

            cx, cy = path[-1]
            dx, dy = DIRS[d]
            nxt = Position(cx + dx, cy + dy)
            if enter(nxt) and nxt == end:
                return path

        return None

    # ── BFS shortest path ──────────────────────────────────────────

    def solve_bfs(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
        visited: list[Position] | None = None,
    ) -> list[Position] | None:
        """Breadth-first search; returns a shortest path by edge count.

        The trace records *start*, then every dequeued cell and every
        newly discovered neighbour, in that order.
        """
        start, end = self._check_endpoints(start, end)

        W = self.grid.width
        H = self.grid.height
        cells = self.grid._cells
        seen = bytearray(W * H)
        record = visited.append if visited is not None else None

        frontier: deque[Position] = deque([start])
        seen[start.y * W + start.x] = 1
        parents: dict[Position, Position] = {}
        if record is not None:
            record(start)

        found = False
        while frontier:
            cur = frontier.popleft()
            if record is not None:
                record(cur)
            if cur == end:
                found = True
                break

            for dx, dy in DIRS:
                nx, ny = cur.x + dx, cur.y + dy
                if not (0 <= nx < W and 0 <= ny < H):
                    continue
                nkey = ny * W + nx
                if seen[nkey]:
                    continue
                nxt = Position(nx, ny)
                if cells[nkey].blocked and nxt != end:
                    continue
                seen[nkey] = 1
                if record is not None:
                    record(nxt)
                parents[nxt] = cur
                frontier.append(nxt)

        if not found:
            return None

        path = [end]
        node = end
        while node != start:
            node = parents[node]
            path.append(node)
        path.reverse()
        return path

    # ── BFS reachability ───────────────────────────────────────────

    def is_reachable(self, start: tuple[int, int], end: tuple[int, int]) -> bool:
        """True if *end* can be reached through free cells only.

        Unlike ``solve_bfs`` there is no exception for a blocked *end*;
        only *start* is seeded regardless of its own flag.
        """
        start, end = self._check_endpoints(start, end)

        W = self.grid.width
        H = self.grid.height
        cells = self.grid._cells
        seen = bytearray(W * H)

        frontier: deque[Position] = deque([start])
        seen[start.y * W + start.x] = 1

        while frontier:
            cur = frontier.popleft()
            if cur == end:
                return True
            for dx, dy in DIRS:
                nx, ny = cur.x + dx, cur.y + dy
                if not (0 <= nx < W and 0 <= ny < H):
                    continue
                nkey = ny * W + nx
                if seen[nkey] or cells[nkey].blocked:
                    continue
                seen[nkey] = 1
                frontier.append(Position(nx, ny))

        return False

    # ── A* shortest path ───────────────────────────────────────────

    def solve_astar(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
        visited: list[Position] | None = None,
    ) -> list[Position] | None:
        """A* with the Manhattan heuristic; returns a shortest path.

        The open set never decrease-keys: a neighbour already queued keeps
        its original priority even when a cheaper route to it is found
        (its g-score and parent are still updated).  The heuristic is
        consistent on a unit-cost 4-connected grid, so results stay
        optimal.  The trace records *start*, every popped cell and
        every newly pushed cell.
        """
        start, end = self._check_endpoints(start, end)

        W = self.grid.width
        H = self.grid.height
        cells = self.grid._cells
        closed = bytearray(W * H)
        record = visited.append if visited is not None else None

        open_set: PriorityQueue[Position] = PriorityQueue()
        came_from: dict[Position, Position] = {}
        g_scores: dict[Position, float] = {start: 0.0}
        f_scores: dict[Position, float] = {start: float(start.manhattan(end))}

        open_set.enqueue(start, 0.0)
        if record is not None:
            record(start)

        while open_set:
            cur = open_set.dequeue()
            ckey = cur.y * W + cur.x
            if record is not None:
                record(cur)

            if cur == end:
                return _reconstruct(came_from, cur)

            closed[ckey] = 1
            cur_g = g_scores[cur]

            for dx, dy in DIRS:
                nx, ny = cur.x + dx, cur.y + dy
                if not (0 <= nx < W and 0 <= ny < H):
                    continue
                nkey = ny * W + nx
                if closed[nkey]:
                    continue
                nxt = Position(nx, ny)
                if cells[nkey].blocked and nxt != end:
                    continue

                tentative_g = cur_g + 1.0
                if nxt not in g_scores or tentative_g < g_scores[nxt]:
                    came_from[nxt] = cur
                    g_scores[nxt] = tentative_g
                    f_scores[nxt] = tentative_g + nxt.manhattan(end)
                    if not open_set.contains(nxt):
                        open_set.enqueue(nxt, f_scores[nxt])
                        if record is not None:
                            record(nxt)

        return None

    # ── Helpers ────────────────────────────────────────────────────

    def _check_endpoints(
        self,
        start: tuple[int, int],
        end: tuple[int, int],
    ) -> tuple[Position, Position]:
        """Normalise to Position and fail fast on out-of-bounds endpoints."""
        start = Position(*start)
        end = Position(*end)
        for pos in (start, end):
            if not self.grid.in_bounds(pos):
                raise OutOfBoundsError(pos, self.grid.width, self.grid.height)
        return start, end


def _reconstruct(came_from: dict[Position, Position], current: Position) -> list[Position]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path
