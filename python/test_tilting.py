"""
Tests for rolling rocks on a tilted platform.
"""

from grid_parser import parse_grid
from grid_types import Direction
from tilting import load_after_cycles, north_load, spin_cycle, tilt

PLATFORM = """
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
"""

TILTED_NORTH = """
OOOO.#.O..
OO..#....#
OO..O##..O
O..#.OO...
........#.
..#....#.#
..O..#.O.O
..O.......
#....###..
#....#....
"""

ONE_CYCLE = """
.....#....
....#...O#
...OO##...
.OO#......
.....OOO#.
.O#...O#.#
....O#....
......OOOO
#...O###..
#..OO#....
"""


class TestTilt:
    """Tests for single tilts."""

    def test_tilt_north(self) -> None:
        grid = parse_grid(PLATFORM)
        tilt(grid, Direction.N)
        assert grid == parse_grid(TILTED_NORTH)
        assert north_load(grid) == 136

    def test_rocks_are_conserved(self) -> None:
        grid = parse_grid(PLATFORM)
        rocks = len(grid.find_all("O"))
        cubes = grid.find_all("#")
        for direction in Direction:
            tilt(grid, direction)
            assert len(grid.find_all("O")) == rocks
            assert grid.find_all("#") == cubes

    def test_tilt_is_stable(self) -> None:
        """Tilting twice in the same direction changes nothing the second time."""
        grid = parse_grid(PLATFORM)
        tilt(grid, Direction.W)
        once = grid.copy()
        tilt(grid, Direction.W)
        assert grid == once

    def test_single_row(self) -> None:
        grid = parse_grid(".O.#O.O.")
        tilt(grid, Direction.E)
        assert grid.lines() == ["..O#..OO"]
        tilt(grid, Direction.W)
        assert grid.lines() == ["O..#OO.."]


class TestSpinCycle:
    """Tests for spin cycles and cycle detection."""

    def test_one_cycle(self) -> None:
        grid = parse_grid(PLATFORM)
        spin_cycle(grid)
        assert grid == parse_grid(ONE_CYCLE)

    def test_billion_cycles(self) -> None:
        assert load_after_cycles(parse_grid(PLATFORM), 1_000_000_000) == 64

    def test_matches_direct_spinning(self) -> None:
        """Skipping ahead by the period agrees with spinning every cycle."""
        for cycles in (1, 3, 10, 25):
            grid = parse_grid(PLATFORM)
            for _ in range(cycles):
                spin_cycle(grid)
            assert load_after_cycles(parse_grid(PLATFORM), cycles) == north_load(grid)

    def test_input_untouched(self) -> None:
        grid = parse_grid(PLATFORM)
        load_after_cycles(grid, 5)
        assert grid == parse_grid(PLATFORM)
