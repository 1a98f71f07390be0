"""
ASCII rendering for gridsearch results.

Grids are drawn as boxed character displays. Highlighted cells (visited beam
cells, loop cells, path cells) are coloured with simple_chalk.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import Grid, Position
from pipe_loop import CellKind

logger = logging.getLogger(__name__)

KIND_CHARS = {
    CellKind.LOOP: "*",
    CellKind.INSIDE: "I",
    CellKind.OUTSIDE: "O",
}


def render_grid(
    grid: Grid,
    highlight: Iterable[Position] | None = None,
    cell_width: int = 1,
    color: Callable[[str], str] = chalk.yellow,
    title: str | None = None,
    char_fn: Callable[[object], str] | None = None,
) -> str:
    """
    Render a grid as a boxed character display.

    Args:
        grid: The grid to render
        highlight: Optional positions to colour
        cell_width: Characters per cell (default 1)
        color: Colouriser applied to highlighted cells
        title: Optional title centred in the top border
        char_fn: Optional function mapping a cell value to its character
                 (default: first character of str(value))

    Returns:
        Rendered string, one line per grid row plus the borders
    """
    marked = set(highlight) if highlight is not None else set()
    if char_fn is None:
        char_fn = lambda value: str(value)[:1] or "?"

    inner_width = grid.width * cell_width
    top = "┌" + "─" * inner_width + "┐"
    if title is not None:
        label = f" {title} "
        if len(label) <= inner_width:
            start = (inner_width - len(label)) // 2
            top = "┌" + "─" * start + label + "─" * (inner_width - start - len(label)) + "┐"

    rows: list[list[str]] = [[] for _ in range(grid.height)]

    def draw(x: int, y: int, value: object) -> None:
        content = char_fn(value)
        if cell_width > 1:
            content = content.center(cell_width)
        if Position(x, y) in marked:
            content = color(content)
        rows[y].append(content)

    grid.for_each(draw)

    lines = [top]
    lines.extend("│" + "".join(row) + "│" for row in rows)
    lines.append("└" + "─" * inner_width + "┘")
    return "\n".join(lines)


def render_visited(grid: Grid, visited: Iterable[Position], title: str | None = None) -> str:
    """Show visited positions as # and everything else as ."""
    seen = set(visited)
    marks = Grid(
        ["#" if Position(x, y) in seen else "." for x in range(grid.width)]
        for y in range(grid.height)
    )
    return render_grid(marks, highlight=seen, title=title)


def render_classification(kinds: Grid[CellKind], title: str | None = None) -> str:
    """Show loop cells as *, inside cells as I and outside cells as O, with inside highlighted."""
    inside = kinds.find_all(CellKind.INSIDE)
    logger.debug("render_classification: %d inside cells", len(inside))
    return render_grid(
        kinds,
        highlight=inside,
        color=chalk.green,
        title=title,
        char_fn=lambda kind: KIND_CHARS[kind],
    )
