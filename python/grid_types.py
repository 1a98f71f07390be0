"""
Shared type definitions for the gridsearch toolkit.

Direction and Position are small value types; Grid is a dense, fixed-size
container indexed by Position. Nothing here wraps around the edges unless
asked to explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing y)
    S = "S"  # Down (increasing y)
    E = "E"  # Right (increasing x)
    W = "W"  # Left (decreasing x)

    @property
    def delta(self) -> Position:
        return _DELTAS[self]

    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def turn_left(self) -> Direction:
        """Rotate 90° counter-clockwise (as seen on screen, y pointing down)."""
        return _LEFT_TURNS[self]

    def turn_right(self) -> Direction:
        """Rotate 90° clockwise."""
        return _RIGHT_TURNS[self]

    @classmethod
    def from_delta(cls, delta: Position) -> Direction:
        """Map a unit displacement back to its direction."""
        for direction, d in _DELTAS.items():
            if d == delta:
                return direction
        raise ValueError(f"Not a unit cardinal displacement: {delta}")


# =============================================================================
# Position
# =============================================================================


@dataclass(frozen=True, order=True)
class Position:
    """A point on the integer plane. No implicit bounds."""

    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def __add__(self, other: Position | Direction) -> Position:
        if isinstance(other, Direction):
            other = other.delta
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: int) -> Position:
        return Position(self.x * factor, self.y * factor)

    def manhattan(self, other: Position) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def is_within(self, width: int, height: int) -> bool:
        """True if 0 <= x < width and 0 <= y < height."""
        return 0 <= self.x < width and 0 <= self.y < height

    def wrapped(self, width: int, height: int) -> Position:
        """Wrap onto a width x height torus. Only used where wrapping is wanted."""
        return Position(self.x % width, self.y % height)

    @staticmethod
    def moves(diagonals: bool = False, zero_move: bool = False) -> list[Position]:
        """
        Offsets to neighbouring positions.

        Args:
            diagonals: Include the four diagonal offsets
            zero_move: Include the (0, 0) offset

        Returns:
            List of offsets, orthogonal ones first (N, S, W, E)
        """
        result = [Position(0, -1), Position(0, 1), Position(-1, 0), Position(1, 0)]
        if diagonals:
            result.extend([Position(-1, -1), Position(-1, 1), Position(1, -1), Position(1, 1)])
        if zero_move:
            result.append(Position(0, 0))
        return result

    def neighbors(self, moves: Iterable[Position]) -> list[Position]:
        return [self + move for move in moves]

    def neighbors_within(self, moves: Iterable[Position], width: int, height: int) -> list[Position]:
        """Neighbours that fall inside a width x height rectangle."""
        return [p for p in self.neighbors(moves) if p.is_within(width, height)]


_DELTAS: dict[Direction, Position] = {
    Direction.N: Position(0, -1),
    Direction.S: Position(0, 1),
    Direction.E: Position(1, 0),
    Direction.W: Position(-1, 0),
}

_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

_RIGHT_TURNS = {
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
}

_LEFT_TURNS = {after: before for before, after in _RIGHT_TURNS.items()}

# Neighbour probe order (matches Position.moves())
CARDINAL_DIRECTIONS = (Direction.N, Direction.S, Direction.W, Direction.E)


# =============================================================================
# Grid
# =============================================================================


class Grid(Generic[T]):
    """
    A dense rectangular grid of cells, indexed by Position.

    The size is fixed at construction. Cells can be read and written, but any
    access outside [0, width) x [0, height) raises IndexError.
    """

    def __init__(self, rows: Iterable[Iterable[T]]) -> None:
        cells = [list(row) for row in rows]
        if not cells or not cells[0]:
            raise ValueError("A grid needs at least one row and one column")

        width = len(cells[0])
        mismatched = [(i, len(row)) for i, row in enumerate(cells) if len(row) != width]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths\n"
                f"  Expected: {width} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual in mismatched:
                error_msg += f"    Row {row_idx}: {actual} columns\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

        self._cells = cells

    @property
    def width(self) -> int:
        return len(self._cells[0])

    @property
    def height(self) -> int:
        return len(self._cells)

    def size(self) -> tuple[int, int]:
        """Return (width, height)."""
        return (self.width, self.height)

    def in_bounds(self, pos: Position) -> bool:
        return pos.is_within(self.width, self.height)

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, Position) and self.in_bounds(pos)

    def _check(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise IndexError(
                f"Position {pos} is outside the grid\n"
                f"  Valid range: 0 <= x < {self.width}, 0 <= y < {self.height}"
            )

    def get(self, pos: Position) -> T:
        self._check(pos)
        return self._cells[pos.y][pos.x]

    def set(self, pos: Position, value: T) -> None:
        self._check(pos)
        self._cells[pos.y][pos.x] = value

    def swap(self, a: Position, b: Position) -> None:
        self._check(a)
        self._check(b)
        row_a, row_b = self._cells[a.y], self._cells[b.y]
        row_a[a.x], row_b[b.x] = row_b[b.x], row_a[a.x]

    __getitem__ = get
    __setitem__ = set

    def positions(self) -> Iterator[Position]:
        """All positions, row-major."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def find_all(self, value: T) -> list[Position]:
        """Positions of every cell equal to value, row-major."""
        return [
            Position(x, y)
            for y, row in enumerate(self._cells)
            for x, cell in enumerate(row)
            if cell == value
        ]

    def for_each(self, fn: Callable[[int, int, T], None]) -> None:
        """Call fn(x, y, value) for every cell, row-major."""
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                fn(x, y, cell)

    def copy(self) -> Grid[T]:
        return Grid(self._cells)

    def map(self, fn: Callable[[T], U]) -> Grid[U]:
        return Grid([fn(cell) for cell in row] for row in self._cells)

    def rows(self) -> tuple[tuple[T, ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    def lines(self) -> list[str]:
        """Rows joined into strings (character grids only)."""
        return ["".join(str(cell) for cell in row) for row in self._cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    # Only stable while the grid is not mutated
    def __hash__(self) -> int:
        return hash(self.rows())

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
