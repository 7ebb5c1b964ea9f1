"""Puzzle and solution validation.  Each check returns error messages (empty = valid)."""

from __future__ import annotations

from shapely.geometry import LineString, Point

from .engine import Puzzle
from .models import Position, RoutingResult


def validate_puzzle(puzzle: Puzzle) -> list[str]:
    """Check board size and endpoint placement."""
    errors: list[str] = []

    if puzzle.width <= 0 or puzzle.height <= 0:
        errors.append(f"Grid size must be positive, got {puzzle.width}x{puzzle.height}")
        return errors

    # ── Endpoints in bounds and distinct ──
    owner: dict[Position, str] = {}
    for i, pair in enumerate(puzzle.pairs):
        name = pair.label or f"#{i}"
        for role, pos in (("start", pair.start), ("end", pair.end)):
            if not (0 <= pos.x < puzzle.width and 0 <= pos.y < puzzle.height):
                errors.append(f"Pair '{name}': {role} {tuple(pos)} is outside the grid")
                continue
            if pos in owner:
                errors.append(
                    f"Pair '{name}': {role} {tuple(pos)} coincides with an endpoint of '{owner[pos]}'"
                )
                continue
            owner[pos] = name

    # ── Walls in bounds and off the endpoints ──
    for x, y in puzzle.walls:
        if not (0 <= x < puzzle.width and 0 <= y < puzzle.height):
            errors.append(f"Wall ({x}, {y}) is outside the grid")
        elif (x, y) in owner:
            errors.append(f"Wall ({x}, {y}) sits on an endpoint of '{owner[(x, y)]}'")

    # ── Labels must be unique ──
    seen: set[str] = set()
    for pair in puzzle.pairs:
        if not pair.label:
            continue
        if pair.label in seen:
            errors.append(f"Duplicate pair label '{pair.label}'")
        seen.add(pair.label)

    return errors


def validate_solution(puzzle: Puzzle, result: RoutingResult) -> list[str]:
    """Check every routed path connects its pair and no two paths touch.

    Paths are compared as shapely geometries through cell centres.  Two
    orthogonal unit-step lattice paths can only meet at a lattice point,
    so they intersect exactly when they share a cell.
    """
    errors: list[str] = []
    pair_by_label = {p.label: p for p in puzzle.pairs}
    shapes: list[tuple[str, Point | LineString]] = []
    walls = set(puzzle.walls)

    for pr in result.pairs:
        if not pr.solved:
            continue
        name = pr.label
        path = pr.path
        pair = pair_by_label.get(name)
        if pair is None:
            errors.append(f"Path '{name}': no such pair in the puzzle")
            continue

        if not path:
            errors.append(f"Path '{name}': empty")
            continue
        if path[0] != pair.start or path[-1] != pair.end:
            errors.append(
                f"Path '{name}': runs {tuple(path[0])} -> {tuple(path[-1])}, "
                f"expected {tuple(pair.start)} -> {tuple(pair.end)}"
            )

        for x, y in path:
            if not (0 <= x < puzzle.width and 0 <= y < puzzle.height):
                errors.append(f"Path '{name}': cell ({x}, {y}) is outside the grid")
                break

        for i in range(1, len(path)):
            dx = abs(path[i][0] - path[i - 1][0])
            dy = abs(path[i][1] - path[i - 1][1])
            if dx + dy != 1:
                errors.append(f"Path '{name}': non-orthogonal step at index {i}")
                break

        if len(set(path)) != len(path):
            errors.append(f"Path '{name}': revisits a cell")

        hit = walls.intersection(path)
        if hit:
            errors.append(f"Path '{name}': crosses wall {tuple(min(hit))}")

        if len(path) == 1:
            shapes.append((name, Point(path[0])))
        else:
            shapes.append((name, LineString(path)))

    # ── Paths must be disjoint ──
    for i in range(len(shapes)):
        name_a, geom_a = shapes[i]
        for j in range(i + 1, len(shapes)):
            name_b, geom_b = shapes[j]
            if geom_a.intersects(geom_b):
                errors.append(f"Paths '{name_a}' and '{name_b}' share a cell")

    return errors
