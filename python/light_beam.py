"""
Light beam propagation through mirrors and splitters.

A beam state is a (position, heading) pair. Propagation is a breadth-first
search over beam states; a cell is energized if any reached state sits on it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from grid_types import Direction, Grid, Position

logger = logging.getLogger(__name__)

EMPTY_SPACE = "."
MIRROR_SLASH = "/"
MIRROR_BACKSLASH = "\\"
SPLITTER_VERTICAL = "|"
SPLITTER_HORIZONTAL = "-"

_VERTICAL = (Direction.N, Direction.S)
_HORIZONTAL = (Direction.W, Direction.E)

_SLASH_REFLECTIONS = {
    Direction.E: Direction.N,
    Direction.N: Direction.E,
    Direction.W: Direction.S,
    Direction.S: Direction.W,
}

_BACKSLASH_REFLECTIONS = {
    Direction.E: Direction.S,
    Direction.S: Direction.E,
    Direction.W: Direction.N,
    Direction.N: Direction.W,
}


@dataclass(frozen=True)
class BeamState:
    """A beam at a position, travelling in a heading."""

    position: Position
    heading: Direction


def deflect(tile: str, heading: Direction) -> tuple[Direction, ...]:
    """
    Headings a beam leaves tile with after entering it with heading.

    Args:
        tile: One of . / \\ | -
        heading: Heading the beam entered with

    Returns:
        One heading, or two when a splitter is hit side-on

    Raises:
        ValueError: If tile is not a known tile
    """
    match tile:
        case ".":
            return (heading,)
        case "/":
            return (_SLASH_REFLECTIONS[heading],)
        case "\\":
            return (_BACKSLASH_REFLECTIONS[heading],)
        case "|":
            return (heading,) if heading in _VERTICAL else _VERTICAL
        case "-":
            return (heading,) if heading in _HORIZONTAL else _HORIZONTAL
        case _:
            raise ValueError(
                f"Unknown tile '{tile}'\n"
                f"  Valid tiles: '.', '/', '\\', '|', '-'"
            )


def trace_beam(grid: Grid[str], start: Position, heading: Direction) -> frozenset[BeamState]:
    """
    Every beam state reachable from a beam entering start with heading.

    Each state is queued at most once, so the search ends after at most
    4 * width * height states.

    Raises:
        IndexError: If start is outside the grid
    """
    first = BeamState(start, heading)
    grid.get(start)  # bounds check
    visited = {first}
    queue = deque([first])

    while queue:
        state = queue.popleft()
        for direction in deflect(grid.get(state.position), state.heading):
            next_state = BeamState(state.position + direction, direction)
            if next_state.position in grid and next_state not in visited:
                visited.add(next_state)
                queue.append(next_state)

    return frozenset(visited)


def energized_cells(grid: Grid[str], start: Position, heading: Direction) -> frozenset[Position]:
    """Positions touched by any beam state reachable from the start."""
    return frozenset(state.position for state in trace_beam(grid, start, heading))


def energize(grid: Grid[str], start: Position = Position(0, 0), heading: Direction = Direction.E) -> int:
    """Number of energized cells for a beam entering at start."""
    count = len(energized_cells(grid, start, heading))
    logger.debug("energize: start=%s heading=%s energized=%d", start, heading.value, count)
    return count


def edge_entries(grid: Grid[str]) -> list[BeamState]:
    """
    Every edge cell paired with the heading that points into the grid.

    Top row heads south, bottom row north, left column east, right column west.
    Corner cells appear twice, once per edge.
    """
    w, h = grid.size()
    entries = [BeamState(Position(x, 0), Direction.S) for x in range(w)]
    entries += [BeamState(Position(x, h - 1), Direction.N) for x in range(w)]
    entries += [BeamState(Position(0, y), Direction.E) for y in range(h)]
    entries += [BeamState(Position(w - 1, y), Direction.W) for y in range(h)]
    return entries


def max_energized(grid: Grid[str]) -> int:
    """Most cells energized by any single beam entering from the edge."""
    best_entry: BeamState | None = None
    best = 0
    for entry in edge_entries(grid):
        count = energize(grid, entry.position, entry.heading)
        if count > best:
            best, best_entry = count, entry

    logger.info("max_energized: best=%d entry=%s", best, best_entry)
    return best
