"""Endpoint pair generation and placement."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from flowsolver.config import PAIR_LABELS

from .grid import Grid
from .models import EndpointPair, Position


log = logging.getLogger(__name__)


def generate_pairs(
    width: int,
    height: int,
    num_pairs: int,
    *,
    rng: random.Random | None = None,
    labels: Sequence[str] = PAIR_LABELS,
) -> list[EndpointPair]:
    """Draw *num_pairs* random pairs with no endpoint shared between any two.

    Each pair takes the next label from *labels*.
    """
    if num_pairs < 0:
        raise ValueError(f"num_pairs must be non-negative, got {num_pairs}")
    if num_pairs > len(labels):
        raise ValueError(f"Only {len(labels)} labels available, asked for {num_pairs} pairs")
    if 2 * num_pairs > width * height:
        raise ValueError(
            f"{num_pairs} pairs need {2 * num_pairs} cells, "
            f"the {width}x{height} grid has {width * height}"
        )
    if rng is None:
        rng = random.Random()

    used: set[Position] = set()

    def draw() -> Position:
        while True:
            pos = Position(rng.randrange(width), rng.randrange(height))
            if pos not in used:
                used.add(pos)
                return pos

    pairs = []
    for i in range(num_pairs):
        start = draw()
        end = draw()
        pairs.append(EndpointPair(start=start, end=end, label=labels[i]))

    log.debug("Generated %d pairs on %dx%d grid", num_pairs, width, height)
    return pairs


def place_endpoints(grid: Grid, pairs: Sequence[EndpointPair]) -> None:
    """Block both endpoints of every pair so no other pair routes through them."""
    for pair in pairs:
        grid.set_blocked(pair.start, True)
        grid.set_blocked(pair.end, True)
