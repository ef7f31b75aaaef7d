"""
Maze Loading
=============
Parses a text map into a Grid plus agent and pursuer start positions.

    #  wall        .  dot        X  power pill
    P  agent       G  pursuer    anything else is empty
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .grid import Cell, Grid, Position

logger = logging.getLogger(__name__)

AGENT_CHAR = 'P'
PURSUER_CHAR = 'G'

_CELL_CHARS = {cell.value: cell for cell in Cell}


class MazeError(ValueError):
    """The maze file could not be read or is malformed."""


@dataclass
class MazeLayout:
    """A parsed maze, ready to seed a simulation."""
    grid: Grid
    agent_start: Position
    pursuer_starts: List[Position] = field(default_factory=list)


def parse_maze(lines: List[str]) -> MazeLayout:
    """Build a MazeLayout from map lines. Rows must all be the same width."""
    lines = [line.rstrip('\r\n') for line in lines]
    # Trailing blank lines are common at the end of map files
    while lines and not lines[-1]:
        lines.pop()
    if not lines:
        raise MazeError('maze is empty')

    width = len(lines[0])
    rows: List[List[Cell]] = []
    agent_start: Optional[Position] = None
    pursuer_starts: List[Position] = []

    for row, line in enumerate(lines):
        if len(line) != width:
            raise MazeError(
                f'maze row {row} has width {len(line)}, expected {width}'
            )
        cells = []
        for col, char in enumerate(line):
            if char == AGENT_CHAR:
                if agent_start is not None:
                    raise MazeError(f'second agent start at row {row}, col {col}')
                agent_start = Position(row, col)
            elif char == PURSUER_CHAR:
                pursuer_starts.append(Position(row, col))
            cells.append(_CELL_CHARS.get(char, Cell.EMPTY))
        rows.append(cells)

    if agent_start is None:
        raise MazeError(f"maze has no agent start ('{AGENT_CHAR}')")

    return MazeLayout(Grid(rows), agent_start, pursuer_starts)


def load_maze(path) -> MazeLayout:
    """Read and parse a maze file."""
    try:
        text = Path(path).read_text(encoding='utf-8')
    except OSError as exc:
        raise MazeError(f'cannot read maze file {path}: {exc}') from exc
    except UnicodeDecodeError as exc:
        raise MazeError(f'maze file {path} is not valid UTF-8: {exc}') from exc

    layout = parse_maze(text.splitlines())
    logger.info(
        'Loaded maze %s: %dx%d, %d dots, %d pursuers',
        path, layout.grid.row_count, layout.grid.col_count,
        layout.grid.dots_remaining, len(layout.pursuer_starts),
    )
    return layout
