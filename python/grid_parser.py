"""
Grid parsing utilities for gridsearch.

Provides three parsing formats:
1. Character grids, one cell per character
2. Digit grids, one single-digit cost per character
3. Dig plans, one straight run per line
"""

from __future__ import annotations

import re
from typing import NamedTuple

from grid_types import Direction, Grid, Position

__all__ = ["DigStep", "parse_grid", "parse_digit_grid", "find_marker", "parse_dig_plan"]


def _split_rows(text: str) -> list[str]:
    """Split text into rows, dropping blank lines around the grid and trailing whitespace."""
    lines = [line.rstrip() for line in text.strip("\n").split("\n")]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise ValueError("Empty grid definition")
    return lines


def _check_row_lengths(row_strings: list[str]) -> None:
    cols = len(row_strings[0])
    mismatched = [(i, len(row)) for i, row in enumerate(row_strings) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in grid\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += f"  All rows must have the same number of cells"
        raise ValueError(error_msg)


def parse_grid(text: str) -> Grid[str]:
    """
    Parse a character grid.

    Format:
    - One row per line
    - One cell per character
    - Blank lines before and after the grid are ignored, as is trailing whitespace

    Example:
        \"\"\"
        .....
        .S-7.
        .|.|.
        .L-J.
        .....
        \"\"\"
        Creates a 5x5 grid with Grid.get(Position(1, 1)) == "S"

    Args:
        text: Multi-line grid text

    Returns:
        Grid of single-character strings

    Raises:
        ValueError: If the text is empty or rows have different lengths
    """
    row_strings = _split_rows(text)
    _check_row_lengths(row_strings)
    return Grid(list(row) for row in row_strings)


def parse_digit_grid(text: str) -> Grid[int]:
    """
    Parse a grid of single-digit movement costs.

    Format:
    - Same layout as parse_grid
    - Every character must be a digit 0-9

    Example:
        \"\"\"
        241
        321
        \"\"\"
        Creates a 3x2 grid with Grid.get(Position(2, 0)) == 1

    Args:
        text: Multi-line grid text

    Returns:
        Grid of ints

    Raises:
        ValueError: If the text is empty, rows have different lengths, or a
            character is not a digit
    """
    row_strings = _split_rows(text)
    _check_row_lengths(row_strings)

    rows: list[list[int]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[int] = []
        for col_idx, char in enumerate(row_str):
            if not ("0" <= char <= "9"):
                raise ValueError(
                    f"Invalid character '{char}' in digit grid\n"
                    f"  Row {row_idx}, column {col_idx}\n"
                    f"  Valid characters: digits (0-9)"
                )
            cells.append(int(char))
        rows.append(cells)

    return Grid(rows)


def find_marker(grid: Grid[str], marker: str) -> Position:
    """
    Find the unique position of a marker character (e.g. the "S" start tile).

    Raises:
        ValueError: If the marker is missing or appears more than once
    """
    found = grid.find_all(marker)
    if len(found) != 1:
        raise ValueError(
            f"Expected exactly one '{marker}' in grid, found {len(found)}\n"
            f"  Positions: {', '.join(str(p) for p in found) or 'none'}"
        )
    return found[0]


class DigStep(NamedTuple):
    """One straight run of a dig plan."""

    heading: Direction
    length: int


_DIG_LINE = re.compile(r"^([URDL])\s+(\d+)(?:\s+\(#([0-9a-fA-F]{6})\))?$")

_DIG_LETTERS = {"U": Direction.N, "R": Direction.E, "D": Direction.S, "L": Direction.W}

# Last digit of the colour code in the decoded form
_DIG_DIGITS = {"0": Direction.E, "1": Direction.S, "2": Direction.W, "3": Direction.N}


def parse_dig_plan(text: str, decode_colour: bool = False) -> list[DigStep]:
    """
    Parse a dig plan.

    Format:
    - One run per line: direction letter (U, R, D, L), length, colour code
    - Blank lines are ignored

    Example:
        \"\"\"
        R 6 (#70c710)
        D 5 (#0dc571)
        \"\"\"
        Gives [DigStep(E, 6), DigStep(S, 5)]; with decode_colour=True the
        colour code is read instead: its first five hex digits are the length
        and its last digit the direction (0=R, 1=D, 2=L, 3=U), giving
        [DigStep(E, 461937), DigStep(S, 56407)]

    Args:
        text: Multi-line dig plan
        decode_colour: Take each run from its colour code rather than the
            letter and length

    Returns:
        List of DigStep in plan order

    Raises:
        ValueError: If a line is malformed, or decode_colour is set and a
            line has no colour code or an unknown direction digit
    """
    steps: list[DigStep] = []
    for line_idx, line in enumerate(text.strip("\n").split("\n")):
        line = line.strip()
        if not line:
            continue
        match = _DIG_LINE.match(line)
        if match is None:
            raise ValueError(
                f"Invalid dig plan line {line_idx}: \"{line}\"\n"
                f"  Expected: <U|R|D|L> <length> (#rrggbb)"
            )
        letter, length, colour = match.groups()
        if not decode_colour:
            steps.append(DigStep(_DIG_LETTERS[letter], int(length)))
            continue

        if colour is None or colour[5] not in _DIG_DIGITS:
            raise ValueError(
                f"Cannot decode colour on dig plan line {line_idx}: \"{line}\"\n"
                f"  Expected a colour code whose last digit is 0-3"
            )
        steps.append(DigStep(_DIG_DIGITS[colour[5]], int(colour[:5], 16)))
    return steps
