"""
Grid Model
===========
The maze as a rectangular grid of cells with toroidal edges.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class Cell(Enum):
    """Contents of a single maze cell. Values are the maze-file characters."""
    WALL = '#'
    DOT = '.'
    PILL = 'X'
    EMPTY = ' '


class Direction(Enum):
    """Movement directions as (d_row, d_col) deltas."""
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)
    NONE = (0, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


# Directions a pursuer may pick from
MOVES = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


@dataclass(frozen=True)
class Position:
    """A (row, col) cell coordinate."""
    row: int
    col: int


class Grid:
    """
    Rectangular cell grid with a live count of remaining dots.

    Only the simulation loop mutates the grid. Positions outside the
    grid are programming errors and raise IndexError.
    """

    def __init__(self, rows: List[List[Cell]]):
        if not rows or not rows[0]:
            raise ValueError('grid must have at least one row and column')
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError('grid rows must all have the same length')

        self._cells = [list(row) for row in rows]
        self.row_count = len(rows)
        self.col_count = width
        self.dots_remaining = sum(
            1 for row in self._cells for cell in row if cell is Cell.DOT
        )

    def _check(self, position: Position):
        if not (0 <= position.row < self.row_count and
                0 <= position.col < self.col_count):
            raise IndexError(
                f'position {position} outside {self.row_count}x{self.col_count} grid'
            )

    def cell_at(self, position: Position) -> Cell:
        self._check(position)
        return self._cells[position.row][position.col]

    def can_enter(self, position: Position) -> bool:
        """False iff the cell at position is a wall."""
        return self.cell_at(position) is not Cell.WALL

    def consume(self, position: Position) -> Cell:
        """
        Eat whatever is at position and return what was there.

        Dots and pills become empty; eating a dot decrements the
        remaining-dot counter.
        """
        cell = self.cell_at(position)
        if cell is Cell.DOT or cell is Cell.PILL:
            self._cells[position.row][position.col] = Cell.EMPTY
            if cell is Cell.DOT:
                self.dots_remaining -= 1
        return cell

    def wrap(self, position: Position, direction: Direction) -> Position:
        """Step one cell in direction, re-entering at the opposite edge."""
        self._check(position)
        d_row, d_col = direction.delta
        return Position(
            (position.row + d_row) % self.row_count,
            (position.col + d_col) % self.col_count,
        )

    def rows(self) -> List[List[Cell]]:
        """Copy of the cell rows, safe to hand to the renderer."""
        return [list(row) for row in self._cells]
