"""Tests for grid_parser module."""

import pytest

from grid_parser import DigStep, find_marker, parse_dig_plan, parse_digit_grid, parse_grid
from grid_types import Direction, Position


class TestParseGrid:
    """Tests for the character grid parser."""

    def test_simple_grid(self) -> None:
        """Parse a small grid, one cell per character."""
        definition = """
.S-7
.L-J
"""
        grid = parse_grid(definition)

        assert grid.size() == (4, 2)
        assert grid.get(Position(1, 0)) == "S"
        assert grid.get(Position(3, 1)) == "J"

    def test_surrounding_blank_lines_ignored(self) -> None:
        grid = parse_grid("\n\n..\n..\n\n")
        assert grid.size() == (2, 2)

    def test_trailing_whitespace_ignored(self) -> None:
        grid = parse_grid("ab  \ncd\n")
        assert grid.lines() == ["ab", "cd"]

    def test_backslash_cells(self) -> None:
        grid = parse_grid("\\/\n|-")
        assert grid.get(Position(0, 0)) == "\\"
        assert grid.get(Position(1, 0)) == "/"

    def test_inconsistent_rows(self) -> None:
        """Rows of different lengths are reported with their index."""
        with pytest.raises(ValueError, match="Inconsistent row lengths") as excinfo:
            parse_grid("...\n..\n...")
        assert "Row 1: 2 columns" in str(excinfo.value)

    def test_empty_definition(self) -> None:
        with pytest.raises(ValueError, match="Empty grid definition"):
            parse_grid("\n\n")


class TestParseDigitGrid:
    """Tests for the digit grid parser."""

    def test_digits(self) -> None:
        grid = parse_digit_grid("241\n321")
        assert grid.rows() == ((2, 4, 1), (3, 2, 1))

    def test_invalid_character(self) -> None:
        """A non-digit cell is reported with its row and column."""
        with pytest.raises(ValueError, match="Invalid character 'x'") as excinfo:
            parse_digit_grid("123\n4x6")
        assert "Row 1, column 1" in str(excinfo.value)

    def test_inconsistent_rows(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent row lengths"):
            parse_digit_grid("12\n345")


class TestFindMarker:
    """Tests for locating marker characters."""

    def test_found(self) -> None:
        grid = parse_grid("...\n..S")
        assert find_marker(grid, "S") == Position(2, 1)

    def test_missing(self) -> None:
        with pytest.raises(ValueError, match="found 0"):
            find_marker(parse_grid("..\n.."), "S")

    def test_duplicate(self) -> None:
        with pytest.raises(ValueError, match="found 2"):
            find_marker(parse_grid("S.\n.S"), "S")


class TestParseDigPlan:
    """Tests for dig plan parsing."""

    PLAN = """
R 6 (#70c710)
D 5 (#0dc571)
L 2 (#5713f0)
U 2 (#caa173)
"""

    def test_letters(self) -> None:
        assert parse_dig_plan(self.PLAN) == [
            DigStep(Direction.E, 6),
            DigStep(Direction.S, 5),
            DigStep(Direction.W, 2),
            DigStep(Direction.N, 2),
        ]

    def test_decoded_colour(self) -> None:
        assert parse_dig_plan(self.PLAN, decode_colour=True) == [
            DigStep(Direction.E, 461937),
            DigStep(Direction.S, 56407),
            DigStep(Direction.E, 356671),
            DigStep(Direction.N, 829975),
        ]

    def test_colour_is_optional_for_letters(self) -> None:
        assert parse_dig_plan("R 3\nL 3") == [DigStep(Direction.E, 3), DigStep(Direction.W, 3)]

    def test_steps_unpack_as_pairs(self) -> None:
        heading, length = parse_dig_plan("D 4 (#000000)")[0]
        assert (heading, length) == (Direction.S, 4)

    def test_invalid_line(self) -> None:
        with pytest.raises(ValueError, match="Invalid dig plan line 1"):
            parse_dig_plan("R 6 (#70c710)\nX 6 (#70c710)")

    def test_missing_colour_cannot_decode(self) -> None:
        with pytest.raises(ValueError, match="Cannot decode colour"):
            parse_dig_plan("R 6", decode_colour=True)

    def test_unknown_direction_digit(self) -> None:
        with pytest.raises(ValueError, match="Cannot decode colour"):
            parse_dig_plan("R 6 (#70c714)", decode_colour=True)
