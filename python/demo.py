#!/usr/bin/env python3
"""
Demonstration of the gridsearch routines on small reference layouts.

Usage:
    python demo.py            # run every demo
    python demo.py beam       # run one demo: loop, beam, crucible or tilt
    python demo.py -v beam    # same, with debug logging
"""

import logging
import sys

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_classification, render_grid, render_visited
from crucible import RunLimits, shortest_path
from grid_parser import find_marker, parse_digit_grid, parse_grid
from grid_types import Direction, Position
from light_beam import energized_cells, max_energized
from pipe_loop import CellKind, classify_cells, trace_loop
from tilting import load_after_cycles, north_load, tilt

LAYOUTS = dict(
    loop="""
...........
.S-------7.
.|F-----7|.
.||.....||.
.||.....||.
.|L-7.F-J|.
.|..|.|..|.
.L--J.L--J.
...........
""",
    beam="\n".join([
        ".|...\\....",
        "|.-.\\.....",
        ".....|-...",
        "........|.",
        "..........",
        ".........\\",
        "..../.\\\\..",
        ".-.-/..|..",
        ".|....-|.\\",
        "..//.|....",
    ]),
    crucible="""
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
""",
    tilt="""
O....#....
O.OO#....#
.....##...
OO.#O....O
.O.....O#.
O.#..O.#.#
..O..#O..O
.......O..
#....###..
#OO..#....
""",
)


def demo_loop(console: Console) -> None:
    """Trace the pipe loop and classify the cells it encloses."""
    grid = parse_grid(LAYOUTS["loop"])
    loop = trace_loop(grid, find_marker(grid, "S"))
    kinds = classify_cells(grid, loop)

    status = Text()
    status.append(Text.from_ansi(render_classification(kinds, title="loop")))
    status.append("\n\nLoop length: ", style="bold")
    status.append(f"{len(loop)} (farthest point {loop.farthest_distance} steps away)\n")
    status.append("Enclosed cells: ", style="bold")
    status.append(f"{len(kinds.find_all(CellKind.INSIDE))}")
    console.print(Panel(status, title="Pipe loop", border_style="green"))


def demo_beam(console: Console) -> None:
    """Energize the contraption from the top-left corner and from the best edge entry."""
    grid = parse_grid(LAYOUTS["beam"])
    cells = energized_cells(grid, Position(0, 0), Direction.E)

    status = Text()
    status.append(Text.from_ansi(render_visited(grid, cells, title="energized")))
    status.append("\n\nFrom (0, 0) heading E: ", style="bold")
    status.append(f"{len(cells)}\n")
    status.append("Best edge entry: ", style="bold")
    status.append(f"{max_energized(grid)}")
    console.print(Panel(status, title="Light beam", border_style="yellow"))


def demo_crucible(console: Console) -> None:
    """Least heat loss across the city with short and long run limits."""
    grid = parse_digit_grid(LAYOUTS["crucible"])
    goal = Position(grid.width - 1, grid.height - 1)

    status = Text()
    for name, limits in (("at most 3", RunLimits.at_most(3)), ("4 to 10", RunLimits.between(4, 10))):
        result = shortest_path(grid, Position(0, 0), goal, limits)
        if result is None:
            status.append(f"{name}: no path\n", style="bold red")
            continue
        status.append(Text.from_ansi(render_grid(grid, highlight=result.positions, title=name)))
        status.append("\nCost: ", style="bold")
        status.append(f"{result.cost}\n\n")
    console.print(Panel(status, title="Crucible", border_style="red"))


def demo_tilt(console: Console) -> None:
    """Tilt the platform north once, then spin it a billion times."""
    grid = parse_grid(LAYOUTS["tilt"])
    spun_load = load_after_cycles(grid, 1_000_000_000)
    tilt(grid, Direction.N)

    status = Text()
    status.append(Text.from_ansi(render_grid(grid, highlight=grid.find_all("O"), title="tilted north")))
    status.append("\n\nNorth load after one tilt: ", style="bold")
    status.append(f"{north_load(grid)}\n")
    status.append("North load after 1e9 spin cycles: ", style="bold")
    status.append(f"{spun_load}")
    console.print(Panel(status, title="Tilting", border_style="blue"))


DEMOS = dict(
    loop=demo_loop,
    beam=demo_beam,
    crucible=demo_crucible,
    tilt=demo_tilt,
)


def main(args: list[str]) -> None:
    """Run the requested demos."""
    if args and args[0] == "-v":
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(name)s: %(message)s')
        args = args[1:]
    else:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')

    unknown = [name for name in args if name not in DEMOS]
    if unknown:
        print(f"Unknown demo(s): {', '.join(unknown)}")
        print(f"Available: {', '.join(DEMOS)}")
        sys.exit(1)

    console = Console()
    for name in args or DEMOS:
        DEMOS[name](console)


if __name__ == "__main__":
    main(sys.argv[1:])
