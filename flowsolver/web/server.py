"""
FastAPI web server — JSON endpoints for shuffling boards and running solves.

Every solve builds a fresh grid, so requests never share routing state.
The response carries each pair's visited trace and final path; the
front end replays them at its own pace.
"""

from __future__ import annotations

import logging
import random

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from flowsolver.config import PUZZLE_RULES
from flowsolver.solver import (
    EndpointPair, Position, Puzzle, SolveMethod, SolverConfig,
    generate_pairs, puzzle_to_dict, routing_to_dict,
    solve_puzzle, validate_puzzle,
)


log = logging.getLogger(__name__)

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="flowsolver")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Models ─────────────────────────────────────────────────────────

class PairModel(BaseModel):
    start: tuple[int, int]
    end: tuple[int, int]
    label: str = ""


class SolveRequest(BaseModel):
    width: int = PUZZLE_RULES.grid_width
    height: int = PUZZLE_RULES.grid_height
    pairs: list[PairModel]
    walls: list[tuple[int, int]] = []
    method: str = PUZZLE_RULES.default_method
    record_trace: bool = PUZZLE_RULES.record_trace


class ShuffleRequest(BaseModel):
    width: int = Field(PUZZLE_RULES.grid_width, gt=0)
    height: int = Field(PUZZLE_RULES.grid_height, gt=0)
    num_pairs: int = Field(PUZZLE_RULES.num_pairs, ge=0)
    seed: int | None = None


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/methods")
def list_methods():
    """Return the available solve methods and the default."""
    return {
        "methods": [m.value for m in SolveMethod],
        "default": PUZZLE_RULES.default_method,
    }


@app.post("/api/shuffle")
def shuffle_pairs(req: ShuffleRequest):
    """Generate a new random board."""
    rng = random.Random(req.seed)
    try:
        pairs = generate_pairs(req.width, req.height, req.num_pairs, rng=rng)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return puzzle_to_dict(Puzzle(width=req.width, height=req.height, pairs=pairs))


@app.post("/api/solve")
def solve(req: SolveRequest):
    """Route every pair in order and return traces + paths.

    A run that aborts on an unsolvable pair is still a 200 response;
    ``ok`` is false and ``failed_pair`` names the pair.
    """
    try:
        method = SolveMethod.parse(req.method)
    except ValueError as e:
        raise HTTPException(400, str(e))

    puzzle = Puzzle(
        width=req.width,
        height=req.height,
        pairs=[EndpointPair(start=p.start, end=p.end, label=p.label) for p in req.pairs],
        walls=[Position(*w) for w in req.walls],
    )
    errors = validate_puzzle(puzzle)
    if errors:
        raise HTTPException(400, {"errors": errors})

    result = solve_puzzle(puzzle, method, config=SolverConfig(method=method, record_trace=req.record_trace))
    if not result.ok:
        log.info("Solve request aborted on pair %s", result.failed_pair)
    return routing_to_dict(result)


def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("flowsolver.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
