"""Solver dataclasses, errors and configuration constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from flowsolver.config import PUZZLE_RULES


# ── Grid primitives ────────────────────────────────────────────────


class Position(NamedTuple):
    """A grid cell coordinate.  Compares equal to a plain ``(x, y)`` tuple."""

    x: int
    y: int

    def manhattan(self, other: tuple[int, int]) -> int:
        return abs(self.x - other[0]) + abs(self.y - other[1])


@dataclass
class Cell:
    """One grid cell.  Only ``blocked`` ever changes."""

    position: Position
    blocked: bool = False


@dataclass(frozen=True)
class EndpointPair:
    """The two cells a single path must connect."""

    start: Position
    end: Position
    label: str = ""

    def __post_init__(self) -> None:
        # Accept plain tuples / lists from callers and parsers
        object.__setattr__(self, "start", Position(*self.start))
        object.__setattr__(self, "end", Position(*self.end))


class SolveMethod(str, Enum):
    """Search strategy used by the router."""

    DFS = "dfs"
    BFS = "bfs"
    ASTAR = "astar"

    @classmethod
    def parse(cls, value: str | SolveMethod) -> SolveMethod:
        if isinstance(value, SolveMethod):
            return value
        key = value.strip().lower().replace("*", "star").replace("-", "")
        try:
            return cls(key)
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown solve method '{value}' (expected one of: {names})") from None


# ── Errors ─────────────────────────────────────────────────────────


class OutOfBoundsError(IndexError):
    """A position outside the grid was passed where a grid cell is required."""

    def __init__(self, pos: tuple[int, int], width: int, height: int) -> None:
        self.pos = pos
        self.width = width
        self.height = height
        super().__init__(f"Position {tuple(pos)} is outside the {width}x{height} grid")


class EmptyQueueError(IndexError):
    """dequeue() was called on an empty priority queue."""


class PuzzleError(ValueError):
    """A puzzle description could not be parsed or is not solvable input."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


# ── Output dataclasses ─────────────────────────────────────────────


@dataclass
class PairResult:
    """Outcome of routing one endpoint pair."""

    label: str
    start: Position
    end: Position
    path: list[Position] | None
    visited: list[Position] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.path is not None


@dataclass
class RoutingResult:
    """A complete multi-pair run, in the order the pairs were attempted."""

    method: SolveMethod
    pairs: list[PairResult]
    failed_pair: str | None = None      # label of the pair that aborted the run
    elapsed_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.failed_pair is None

    @property
    def paths(self) -> dict[str, list[Position]]:
        return {p.label: p.path for p in self.pairs if p.path is not None}


# ── Solver configuration ──────────────────────────────────────────


@dataclass
class SolverConfig:
    """Router knobs.  Defaults come from ``PUZZLE_RULES``."""

    method: SolveMethod = SolveMethod(PUZZLE_RULES.default_method)
    record_trace: bool = PUZZLE_RULES.record_trace

