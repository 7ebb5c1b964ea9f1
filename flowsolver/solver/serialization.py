"""Puzzle and routing serialization — JSON conversion."""

from __future__ import annotations

from .engine import Puzzle
from .models import (
    EndpointPair, PairResult, Position, PuzzleError, RoutingResult, SolveMethod,
)


def _pos(value, what: str) -> Position:
    try:
        x, y = value
        return Position(int(x), int(y))
    except (TypeError, ValueError):
        raise PuzzleError([f"{what}: expected [x, y], got {value!r}"]) from None


def _list_field(data: dict, key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise PuzzleError([f"'{key}' must be a list, got {type(value).__name__}"])
    return value


def puzzle_to_dict(puzzle: Puzzle) -> dict:
    """Serialize a Puzzle to a JSON-safe dict."""
    return {
        "width": puzzle.width,
        "height": puzzle.height,
        "pairs": [
            {
                "label": p.label,
                "start": list(p.start),
                "end": list(p.end),
            }
            for p in puzzle.pairs
        ],
        "walls": [list(w) for w in puzzle.walls],
    }


def parse_puzzle(data: dict) -> Puzzle:
    """Parse a puzzle.json dict back into a Puzzle.

    Raises PuzzleError when required fields are missing or malformed.
    Endpoint placement is checked separately by ``validate_puzzle``.
    """
    if not isinstance(data, dict):
        raise PuzzleError([f"Puzzle must be an object, got {type(data).__name__}"])
    missing = [k for k in ("width", "height") if k not in data]
    if missing:
        raise PuzzleError([f"Missing field '{k}'" for k in missing])

    try:
        width = int(data["width"])
        height = int(data["height"])
    except (TypeError, ValueError):
        raise PuzzleError(["'width' and 'height' must be integers"]) from None

    raw_pairs = _list_field(data, "pairs")
    raw_walls = _list_field(data, "walls")

    pairs = []
    for i, p in enumerate(raw_pairs):
        if not isinstance(p, dict):
            raise PuzzleError([f"Pair #{i}: expected an object, got {type(p).__name__}"])
        label = str(p.get("label", f"pair{i}"))
        if "start" not in p or "end" not in p:
            raise PuzzleError([f"Pair '{label}': needs 'start' and 'end'"])
        pairs.append(EndpointPair(
            start=_pos(p["start"], f"Pair '{label}' start"),
            end=_pos(p["end"], f"Pair '{label}' end"),
            label=label,
        ))

    walls = [_pos(w, "Wall") for w in raw_walls]

    return Puzzle(width=width, height=height, pairs=pairs, walls=walls)


def routing_to_dict(result: RoutingResult) -> dict:
    """Serialize a RoutingResult to a JSON-safe dict."""
    return {
        "method": result.method.value,
        "ok": result.ok,
        "failed_pair": result.failed_pair,
        "elapsed_s": result.elapsed_s,
        "pairs": [
            {
                "label": p.label,
                "start": list(p.start),
                "end": list(p.end),
                "path": [list(c) for c in p.path] if p.path is not None else None,
                "visited": [list(c) for c in p.visited],
            }
            for p in result.pairs
        ],
    }


def parse_routing(data: dict) -> RoutingResult:
    """Parse a routing.json dict back into a RoutingResult.

    Raises PuzzleError when a pair entry is missing fields or malformed.
    """
    if not isinstance(data, dict):
        raise PuzzleError([f"Routing result must be an object, got {type(data).__name__}"])

    pairs = []
    for i, p in enumerate(_list_field(data, "pairs")):
        if not isinstance(p, dict):
            raise PuzzleError([f"Pair #{i}: expected an object, got {type(p).__name__}"])
        missing = [k for k in ("label", "start", "end") if k not in p]
        if missing:
            raise PuzzleError([f"Pair #{i}: missing field '{k}'" for k in missing])
        label = str(p["label"])
        path = p.get("path")
        try:
            pairs.append(PairResult(
                label=label,
                start=_pos(p["start"], f"Pair '{label}' start"),
                end=_pos(p["end"], f"Pair '{label}' end"),
                path=[_pos(c, f"Pair '{label}' path") for c in path] if path is not None else None,
                visited=[_pos(c, f"Pair '{label}' visited") for c in p.get("visited", [])],
            ))
        except TypeError:
            raise PuzzleError([f"Pair '{label}': path and visited must be lists"]) from None

    try:
        elapsed_s = float(data.get("elapsed_s", 0.0))
    except (TypeError, ValueError):
        raise PuzzleError(["'elapsed_s' must be a number"]) from None

    method = data.get("method", "bfs")
    if not isinstance(method, str):
        raise PuzzleError([f"'method' must be a string, got {type(method).__name__}"])

    return RoutingResult(
        method=SolveMethod.parse(method),
        pairs=pairs,
        failed_pair=data.get("failed_pair"),
        elapsed_s=elapsed_s,
    )
