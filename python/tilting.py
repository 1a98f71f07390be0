"""
Rolling rocks on a tilted platform.

Round rocks (O) slide across empty space (.) until stopped by a cube rock (#),
another round rock or the edge of the grid.
"""

from __future__ import annotations

import logging

from grid_types import Direction, Grid, Position

logger = logging.getLogger(__name__)

ROUND_ROCK = "O"
CUBE_ROCK = "#"
EMPTY_SPACE = "."

SPIN_ORDER = (Direction.N, Direction.W, Direction.S, Direction.E)


def _rocks_nearest_first(grid: Grid[str], direction: Direction) -> list[Position]:
    """Round rocks ordered so the ones closest to the wall being tilted toward roll first."""
    rocks = grid.find_all(ROUND_ROCK)
    match direction:
        case Direction.N:
            return sorted(rocks, key=lambda p: p.y)
        case Direction.S:
            return sorted(rocks, key=lambda p: -p.y)
        case Direction.W:
            return sorted(rocks, key=lambda p: p.x)
        case Direction.E:
            return sorted(rocks, key=lambda p: -p.x)


def tilt(grid: Grid[str], direction: Direction) -> None:
    """Tilt the platform in place so every round rock rolls as far as it can."""
    for rock in _rocks_nearest_first(grid, direction):
        current = rock
        while (current + direction) in grid and grid.get(current + direction) == EMPTY_SPACE:
            grid.swap(current, current + direction)
            current = current + direction


def spin_cycle(grid: Grid[str]) -> None:
    """Tilt north, west, south, then east."""
    for direction in SPIN_ORDER:
        tilt(grid, direction)


def north_load(grid: Grid[str]) -> int:
    """Sum over round rocks of their distance from the south edge (counting their own row)."""
    return sum(grid.height - rock.y for rock in grid.find_all(ROUND_ROCK))


def load_after_cycles(grid: Grid[str], cycles: int) -> int:
    """
    North load after running spin cycles on a copy of the grid.

    Once a layout repeats, the remaining cycles are skipped modulo the period.

    Args:
        grid: Starting platform (not modified)
        cycles: Number of spin cycles

    Returns:
        North load of the final layout
    """
    work = grid.copy()
    seen: dict[Grid[str], int] = {}
    cycle = 1
    while cycle <= cycles:
        spin_cycle(work)
        if work in seen:
            period = cycle - seen[work]
            remaining = (cycles - cycle) % period
            logger.info(
                "load_after_cycles: layout repeats at cycle %d (period %d), %d left",
                cycle,
                period,
                remaining,
            )
            for _ in range(remaining):
                spin_cycle(work)
            return north_load(work)
        seen[work.copy()] = cycle
        cycle += 1

    return north_load(work)
