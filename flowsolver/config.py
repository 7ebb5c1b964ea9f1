"""Shared puzzle rules.

The CLI, the web server and the router all read their defaults from
``PUZZLE_RULES`` so a board generated in one place solves the same way
everywhere else.
"""

from __future__ import annotations

from dataclasses import dataclass


PAIR_LABELS: tuple[str, ...] = (
    "red", "blue", "green", "yellow",
    "orange", "purple", "black", "cyan",
)


@dataclass(frozen=True)
class PuzzleRules:
    """Board and run defaults."""

    grid_width: int = 5
    """Default board width in cells."""

    grid_height: int = 5
    """Default board height in cells."""

    num_pairs: int = 3
    """Default number of endpoint pairs for a shuffled board."""

    default_method: str = "bfs"
    """Search strategy used when the caller doesn't pick one."""

    record_trace: bool = True
    """Collect the visited-cell trace for every pair."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def max_pairs(self) -> int:
        """One label per pair, so the palette caps the pair count."""
        return len(PAIR_LABELS)


# Module-level singleton — importable everywhere.
PUZZLE_RULES = PuzzleRules()
