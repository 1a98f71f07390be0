"""
Pipe loop tracing and interior classification.

Two-phase algorithm: trace (follows the pipe from the start marker and records
the loop) -> classify (flood fills one side of the loop and decides which side
is inside).

Dig plans describe a loop as straight runs instead of pipe tiles; lagoon_area
counts the cells they enclose without building a grid.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from grid_parser import find_marker
from grid_types import CARDINAL_DIRECTIONS, Direction, Grid, Position

logger = logging.getLogger(__name__)

START = "S"
GROUND = "."

# Sides of the cell each pipe tile connects
PIPE_CONNECTIONS: dict[str, frozenset[Direction]] = {
    "|": frozenset({Direction.N, Direction.S}),
    "-": frozenset({Direction.E, Direction.W}),
    "L": frozenset({Direction.N, Direction.E}),
    "J": frozenset({Direction.N, Direction.W}),
    "7": frozenset({Direction.S, Direction.W}),
    "F": frozenset({Direction.S, Direction.E}),
}

# (tile, incoming heading) -> outgoing heading
PIPE_MOVES: dict[tuple[str, Direction], Direction] = {
    (tile, side.opposite()): other
    for tile, sides in PIPE_CONNECTIONS.items()
    for side in sides
    for other in sides - {side}
}

CORNERS = frozenset({"L", "J", "7", "F"})


class MalformedLoopError(ValueError):
    """Raised when the pipes around the start marker do not form a single closed loop."""


# =============================================================================
# Tracing
# =============================================================================


@dataclass(frozen=True)
class LoopStep:
    """One cell of the loop with the heading it was entered and left by."""

    position: Position
    incoming: Direction
    outgoing: Direction


@dataclass(frozen=True)
class PipeLoop:
    """
    The closed loop through the start marker.

    steps is in walk order and begins with the start cell, whose incoming
    heading is the one the walk arrived back with.
    """

    start: Position
    start_tile: str
    steps: tuple[LoopStep, ...]
    cells: frozenset[Position]

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def farthest_distance(self) -> int:
        """Steps along the loop to the point farthest from the start."""
        return len(self.cells) // 2


# Called before each move with (current, incoming, outgoing)
StepHook = Callable[[Position, Direction, Direction], None]


def pipe_exit(tile: str, heading: Direction) -> Direction | None:
    """Heading leaving tile when entered with heading, or None if the tile does not accept it."""
    return PIPE_MOVES.get((tile, heading))


def infer_start_tile(first: Direction, last: Direction) -> str:
    """
    The pipe tile the start marker stands for.

    Args:
        first: Heading the walk left the start cell with
        last: Heading the walk arrived back at the start cell with
    """
    sides = frozenset({first, last.opposite()})
    for tile, connections in PIPE_CONNECTIONS.items():
        if connections == sides:
            return tile
    raise MalformedLoopError(f"No pipe tile connects {first.value} and {last.opposite().value}")


def start_headings(grid: Grid[str], start: Position) -> tuple[Direction, ...]:
    """Headings from start toward neighbours whose pipe accepts them, in probe order."""
    headings = []
    for heading in CARDINAL_DIRECTIONS:
        neighbor = start + heading
        if neighbor in grid and pipe_exit(grid.get(neighbor), heading) is not None:
            headings.append(heading)
    return tuple(headings)


def trace_loop(grid: Grid[str], start: Position, on_step: StepHook | None = None) -> PipeLoop:
    """
    Follow the pipe loop from the start marker until it returns to the start.

    Args:
        grid: Grid of pipe tiles
        start: Position of the start marker
        on_step: Optional hook called before each move away from a non-start
                 cell with (current, incoming, outgoing)

    Returns:
        PipeLoop with every cell of the loop, start included

    Raises:
        MalformedLoopError: If the start does not connect to exactly two
            neighbours, the pipe dead-ends or leaves the grid, or the walk
            exceeds width * height + 1 moves
    """
    headings = start_headings(grid, start)
    if len(headings) != 2:
        raise MalformedLoopError(
            f"Start {start} must connect to exactly two neighbouring pipes\n"
            f"  Found {len(headings)}: {', '.join(h.value for h in headings) or 'none'}"
        )

    first = headings[0]
    heading = first
    current = start + heading
    walked: list[LoopStep] = []
    max_moves = grid.width * grid.height + 1
    moves = 1

    while current != start:
        tile = grid.get(current)
        outgoing = pipe_exit(tile, heading)
        if outgoing is None:
            raise MalformedLoopError(
                f"Pipe dead-ends at {current}\n"
                f"  Tile '{tile}' does not accept heading {heading.value}"
            )
        if on_step is not None:
            on_step(current, heading, outgoing)
        walked.append(LoopStep(current, heading, outgoing))

        heading = outgoing
        current = current + heading
        moves += 1
        if current not in grid:
            raise MalformedLoopError(f"Pipe leaves the grid after {walked[-1].position}")
        if moves > max_moves:
            raise MalformedLoopError(f"Loop did not close within {max_moves} moves")

    steps = (LoopStep(start, heading, first), *walked)
    loop = PipeLoop(
        start=start,
        start_tile=infer_start_tile(first, heading),
        steps=steps,
        cells=frozenset(step.position for step in steps),
    )
    logger.info("trace_loop: start=%s length=%d start_tile=%s", start, len(loop), loop.start_tile)
    return loop


# =============================================================================
# Classification
# =============================================================================


class CellKind(Enum):
    """Classification of a cell relative to the loop."""

    LOOP = "loop"
    INSIDE = "inside"
    OUTSIDE = "outside"


_FILL = "O"


def _flood_fill(work: Grid[str], seed: Position) -> int:
    """Convert every ground cell 4-connected to seed into the fill marker."""
    filled = 0
    queue = deque([seed])
    while queue:
        pos = queue.popleft()
        if pos not in work or work.get(pos) != GROUND:
            continue
        work.set(pos, _FILL)
        filled += 1
        queue.extend(pos.neighbors(Position.moves()))
    return filled


def _border_positions(grid: Grid[str]) -> list[Position]:
    """Corners first, then the rest of the border row-major."""
    w, h = grid.size()
    corners = [Position(0, 0), Position(w - 1, 0), Position(0, h - 1), Position(w - 1, h - 1)]
    rest = [
        p for p in grid.positions()
        if (p.x in (0, w - 1) or p.y in (0, h - 1)) and p not in corners
    ]
    return list(dict.fromkeys(corners)) + rest


def classify_cells(grid: Grid[str], loop: PipeLoop) -> Grid[CellKind]:
    """
    Classify every cell as on the loop, inside it or outside it.

    Walking the loop, the cell on the left of each heading is flood filled
    (both headings at a corner). All filled cells lie on the same side of
    the loop. A border cell that is not on the loop is always outside, so it
    tells which side was filled.

    The input grid is not modified.

    Args:
        grid: The grid the loop was traced in
        loop: Result of trace_loop on that grid

    Returns:
        New grid of CellKind values
    """
    work = grid.map(lambda _: GROUND)
    for pos in loop.cells:
        work.set(pos, grid.get(pos))
    work.set(loop.start, loop.start_tile)

    filled = 0
    for step in loop.steps:
        filled += _flood_fill(work, step.position + step.incoming.turn_left())
        if work.get(step.position) in CORNERS:
            filled += _flood_fill(work, step.position + step.outgoing.turn_left())

    exterior = next((p for p in _border_positions(work) if p not in loop.cells), None)
    if exterior is None:
        # Loop runs along the whole border
        fill_is_inside = True
        everything_inside = True
    else:
        fill_is_inside = work.get(exterior) != _FILL
        everything_inside = False

    logger.debug(
        "classify_cells: filled=%d exterior_seed=%s fill_is_inside=%s",
        filled,
        exterior,
        fill_is_inside,
    )

    def kind(pos: Position) -> CellKind:
        if pos in loop.cells:
            return CellKind.LOOP
        if everything_inside or (work.get(pos) == _FILL) == fill_is_inside:
            return CellKind.INSIDE
        return CellKind.OUTSIDE

    return Grid([kind(Position(x, y)) for x in range(grid.width)] for y in range(grid.height))


def count_enclosed(grid: Grid[str], start: Position | None = None) -> int:
    """Number of cells enclosed by the loop through the start marker."""
    if start is None:
        start = find_marker(grid, START)
    loop = trace_loop(grid, start)
    return len(classify_cells(grid, loop).find_all(CellKind.INSIDE))


# =============================================================================
# Dig plans
# =============================================================================


def lagoon_area(steps: Iterable[tuple[Direction, int]]) -> int:
    """
    Number of cells enclosed by a dug boundary, boundary cells included.

    The boundary starts and ends at the origin and is given as straight runs
    of (heading, length). The interior area comes from the shoelace formula
    over the run corners; Pick's theorem (A = i + b/2 - 1) then gives
    interior + boundary = A + b/2 + 1.

    Raises:
        ValueError: If a run has a negative length
        MalformedLoopError: If the runs do not return to the origin
    """
    origin = Position(0, 0)
    corner = origin
    twice_area = 0
    boundary = 0
    for heading, length in steps:
        if length < 0:
            raise ValueError(f"Run length must not be negative, got {heading.value} {length}")
        following = corner + heading.delta * length
        twice_area += corner.x * following.y - following.x * corner.y
        boundary += length
        corner = following

    if corner != origin:
        raise MalformedLoopError(f"Dig plan does not close\n  Ends at {corner}, expected {origin}")

    area = abs(twice_area) // 2 + boundary // 2 + 1
    logger.debug("lagoon_area: boundary=%d area=%d", boundary, area)
    return area
