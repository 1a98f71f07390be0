"""
Least-cost paths under run-length limits.

Dijkstra's algorithm over (position, heading, run) states, where run counts
the consecutive moves made in the current heading. Limits on the run decide
when a path may go straight, turn, or stop.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass

from grid_types import Direction, Grid, Position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunLimits:
    """
    Rules for how long a path may (or must) keep going in one heading.

    min_run: moves in the current heading required before turning or stopping
    max_run: most moves allowed in one heading, None for no limit
    """

    min_run: int = 0
    max_run: int | None = None

    def __post_init__(self) -> None:
        if self.min_run < 0:
            raise ValueError(f"min_run must be >= 0, got {self.min_run}")
        if self.max_run is not None and self.max_run < max(self.min_run, 1):
            raise ValueError(
                f"max_run must be >= max(min_run, 1)\n"
                f"  Got min_run={self.min_run}, max_run={self.max_run}"
            )

    @classmethod
    def unconstrained(cls) -> RunLimits:
        return cls()

    @classmethod
    def at_most(cls, max_run: int) -> RunLimits:
        return cls(max_run=max_run)

    @classmethod
    def between(cls, min_run: int, max_run: int) -> RunLimits:
        return cls(min_run=min_run, max_run=max_run)

    def allows(self, next_heading: Direction, heading: Direction, run: int) -> bool:
        """Whether a move in next_heading is legal after run moves in heading."""
        if next_heading == heading:
            return self.max_run is None or run < self.max_run
        return run >= self.min_run

    def can_stop(self, run: int) -> bool:
        return run >= self.min_run


@dataclass(frozen=True)
class SearchState:
    """Search node: distinct runs at the same position are distinct nodes."""

    position: Position
    heading: Direction
    run: int


@dataclass(frozen=True)
class PathResult:
    """A least-cost path: its total cost and the states along it, seed first."""

    cost: int
    states: tuple[SearchState, ...]

    @property
    def positions(self) -> tuple[Position, ...]:
        return tuple(state.position for state in self.states)


def _cost(grid: Grid[int], pos: Position) -> int:
    cost = grid.get(pos)
    if not isinstance(cost, int) or not 0 <= cost <= 9:
        raise ValueError(f"Cell {pos} holds {cost!r}, expected a single-digit int cost")
    return cost


def successors(
    grid: Grid[int], state: SearchState, limits: RunLimits
) -> list[tuple[SearchState, int]]:
    """
    Legal next states and the cost of entering them.

    Candidates are straight on, left and right; reversing is never considered.
    """
    result = []
    for heading in (state.heading, state.heading.turn_left(), state.heading.turn_right()):
        if not limits.allows(heading, state.heading, state.run):
            continue
        position = state.position + heading
        if position not in grid:
            continue
        run = state.run + 1 if heading == state.heading else 1
        result.append((SearchState(position, heading, run), _cost(grid, position)))
    return result


def _dijkstra(
    grid: Grid[int], seed: SearchState, goal: Position, limits: RunLimits
) -> PathResult | None:
    """Single-seed search. Equal costs pop in insertion order."""
    counter = itertools.count()
    best: dict[SearchState, int] = {seed: 0}
    parents: dict[SearchState, SearchState] = {}
    heap: list[tuple[int, int, SearchState]] = [(0, next(counter), seed)]
    expanded = 0

    while heap:
        cost, _, state = heapq.heappop(heap)
        if cost > best[state]:
            continue  # Stale entry
        expanded += 1

        if state.position == goal and limits.can_stop(state.run):
            path = [state]
            while path[-1] in parents:
                path.append(parents[path[-1]])
            logger.debug(
                "dijkstra: seed=%s cost=%d expanded=%d", seed.heading.value, cost, expanded
            )
            return PathResult(cost, tuple(reversed(path)))

        for next_state, step_cost in successors(grid, state, limits):
            next_cost = cost + step_cost
            if next_cost < best.get(next_state, next_cost + 1):
                best[next_state] = next_cost
                parents[next_state] = state
                heapq.heappush(heap, (next_cost, next(counter), next_state))

    logger.debug("dijkstra: seed=%s exhausted after %d states", seed.heading.value, expanded)
    return None


def shortest_path(
    grid: Grid[int],
    start: Position,
    goal: Position,
    limits: RunLimits,
    seeds: tuple[Direction, ...] = (Direction.E, Direction.S),
) -> PathResult | None:
    """
    Least-cost path from start to goal that respects the run limits.

    The cost of a path is the sum of the costs of the cells it enters (the
    start cell is free). A search is run from each seed heading, because a
    minimum run makes the first move depend on the initial heading; the
    cheapest result wins.

    Args:
        grid: Grid of single-digit costs
        start: Start position
        goal: Goal position
        limits: Run-length rules
        seeds: Initial headings to search from, each with a run of 0

    Returns:
        The cheapest PathResult, or None if no legal path reaches the goal

    Raises:
        IndexError: If start or goal is outside the grid
        ValueError: If no seed headings are given
    """
    grid.get(start)
    grid.get(goal)
    if not seeds:
        raise ValueError("shortest_path needs at least one seed heading")

    best: PathResult | None = None
    for heading in seeds:
        result = _dijkstra(grid, SearchState(start, heading, 0), goal, limits)
        if result is not None and (best is None or result.cost < best.cost):
            best = result

    logger.info(
        "shortest_path: %s -> %s limits=%s cost=%s",
        start,
        goal,
        limits,
        best.cost if best is not None else None,
    )
    return best


def least_cost(
    grid: Grid[int],
    limits: RunLimits,
    start: Position | None = None,
    goal: Position | None = None,
) -> int | None:
    """Cost of the cheapest legal path, corner to corner by default."""
    if start is None:
        start = Position(0, 0)
    if goal is None:
        goal = Position(grid.width - 1, grid.height - 1)
    result = shortest_path(grid, start, goal, limits)
    return result.cost if result is not None else None
