"""Puzzle grid — a fixed-size rectangle of cells, each free or blocked.

Endpoints are blocked before any pair is routed, and every committed path
gets blocked by the router so later pairs route around it.  The grid holds
no search logic; see ``pathfinder`` for that.
"""

from __future__ import annotations

from collections.abc import Iterator

from .models import Cell, OutOfBoundsError, Position


class Grid:
    """A ``width × height`` array of cells stored row-major.

    Cell ``(x, y)`` lives at index ``y * width + x``; its stored position
    always equals that index.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells: list[Cell] = []
        self.reset()

    def reset(self) -> None:
        """Replace every cell with a fresh, unblocked one."""
        self._cells = [
            Cell(Position(x, y))
            for y in range(self.height)
            for x in range(self.width)
        ]

    # ── Cell queries ───────────────────────────────────────────────

    def in_bounds(self, pos: tuple[int, int]) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, pos: tuple[int, int]) -> int:
        """Flat index of *pos*.  Raises OutOfBoundsError outside the grid."""
        if not self.in_bounds(pos):
            raise OutOfBoundsError(pos, self.width, self.height)
        return pos[1] * self.width + pos[0]

    def cell(self, pos: tuple[int, int]) -> Cell:
        return self._cells[self.index(pos)]

    def blocked(self, pos: tuple[int, int]) -> bool:
        return self._cells[self.index(pos)].blocked

    def blocked_positions(self) -> list[Position]:
        return sorted(c.position for c in self._cells if c.blocked)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    # ── Cell mutation ──────────────────────────────────────────────

    def set_blocked(self, pos: tuple[int, int], blocked: bool = True) -> None:
        self._cells[self.index(pos)].blocked = blocked

    # ── Snapshot / restore ─────────────────────────────────────────

    def snapshot(self) -> bytearray:
        """Return a copy of the blocked flags for later restore."""
        return bytearray(c.blocked for c in self._cells)

    def restore(self, snap: bytearray) -> None:
        """Restore blocked flags from a snapshot."""
        if len(snap) != len(self._cells):
            raise ValueError(
                f"Snapshot has {len(snap)} cells, grid has {len(self._cells)}"
            )
        for cell, flag in zip(self._cells, snap):
            cell.blocked = bool(flag)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, blocked={sum(c.blocked for c in self._cells)})"
