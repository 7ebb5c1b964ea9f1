"""Solver — grid routing for flow-style puzzles.

Submodules:
  models          Dataclasses, errors and configuration constants.
  grid            Fixed-size grid of free/blocked cells.
  priority_queue  Linear-scan priority queue (A* open set).
  pathfinder      DFS, BFS, BFS reachability and A* searches.
  pairs           Random endpoint pair generation and placement.
  engine          Sequential multi-pair router.
  validation      Puzzle and solution checks.
  serialization   JSON conversion (puzzle_to_dict, routing_to_dict, ...).
"""

from .models import (
    Position, Cell, EndpointPair, SolveMethod,
    PairResult, RoutingResult, SolverConfig,
    OutOfBoundsError, EmptyQueueError, PuzzleError,
)
from .grid import Grid
from .priority_queue import PriorityQueue
from .pathfinder import PathFinder
from .pairs import generate_pairs, place_endpoints
from .engine import Puzzle, route_pairs, solve_puzzle
from .validation import validate_puzzle, validate_solution
from .serialization import puzzle_to_dict, parse_puzzle, routing_to_dict, parse_routing

__all__ = [
    # Models
    "Position", "Cell", "EndpointPair", "SolveMethod",
    "PairResult", "RoutingResult", "SolverConfig",
    "OutOfBoundsError", "EmptyQueueError", "PuzzleError",
    # Grid / search
    "Grid", "PriorityQueue", "PathFinder",
    # Router
    "Puzzle", "route_pairs", "solve_puzzle",
    "generate_pairs", "place_endpoints",
    # Validation
    "validate_puzzle", "validate_solution",
    # Serialization
    "puzzle_to_dict", "parse_puzzle", "routing_to_dict", "parse_routing",
]
