"""
Rendering Engine
=================
Double-buffered terminal renderer. Only changed cells are redrawn.

Emoji glyphs take two screen columns. put_glyph() stores the glyph in
its first cell and marks the rest of its span as continuation cells
(char None); present() skips those, so the terminal advances the cursor
over them when it prints the wide glyph.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from blessed import Terminal


# ANSI 256 color constants
NEON_CYAN = 51
NEON_MAGENTA = 201
NEON_YELLOW = 226
NEON_GREEN = 46
NEON_RED = 196
NEON_BLUE = 27

GRAY_MED = 245

WHITE = 255
DEFAULT_FG = 7


@dataclass
class ScreenCell:
    """
    A single cell in the render buffer.

    char holds the whole glyph. A wide glyph fills the cells to its right
    with continuation cells (char is None) that are never written out.
    """
    char: Optional[str] = ' '
    fg_color: int = DEFAULT_FG
    bg_color: int = -1  # -1 = transparent/default

    def matches(self, other: 'ScreenCell') -> bool:
        """Check if two cells are visually identical."""
        return (
            self.char == other.char and
            self.fg_color == other.fg_color and
            self.bg_color == other.bg_color
        )

    def reset(self):
        self.char = ' '
        self.fg_color = DEFAULT_FG
        self.bg_color = -1


class DoubleBuffer:
    """
    Writes go to a back buffer; present() diffs it against the front
    buffer and emits escape sequences for the changed cells only.
    """

    def __init__(self, term: Terminal):
        self.term = term
        self.width = term.width
        self.height = term.height
        self.front: List[List[ScreenCell]] = []
        self.back: List[List[ScreenCell]] = []
        self._init_buffers()
        self._normal = term.normal  # Cache reset sequence

    def _init_buffers(self):
        self.front = [
            [ScreenCell() for _ in range(self.width)]
            for _ in range(self.height)
        ]
        self.back = [
            [ScreenCell() for _ in range(self.width)]
            for _ in range(self.height)
        ]

    def clear_back(self):
        """Clear the back buffer by resetting cells in-place."""
        for row in self.back:
            for cell in row:
                cell.reset()

    def put(self, x: int, y: int, char: Optional[str], fg_color: int = DEFAULT_FG,
            bg_color: int = -1):
        """Put a glyph in the back buffer at exact position."""
        if 0 <= x < self.width and 0 <= y < self.height:
            cell = self.back[y][x]
            cell.char = char
            cell.fg_color = fg_color
            cell.bg_color = bg_color

    def put_glyph(self, x: int, y: int, glyph: str, span: int = 1,
                  fg_color: int = DEFAULT_FG):
        """Put a glyph occupying span screen columns."""
        self.put(x, y, glyph, fg_color)
        for i in range(1, span):
            self.put(x + i, y, None, fg_color)

    def put_string(self, x: int, y: int, text: str, fg_color: int = DEFAULT_FG,
                   bg_color: int = -1):
        for i, char in enumerate(text):
            self.put(x + i, y, char, fg_color, bg_color)

    def present(self) -> str:
        """Swap buffers and return output for the changed cells."""
        output_parts = []
        normal = self._normal

        for y in range(self.height):
            for x in range(self.width):
                back_cell = self.back[y][x]
                front_cell = self.front[y][x]

                if back_cell.matches(front_cell) or back_cell.char is None:
                    continue

                output_parts.append(self.term.move_xy(x, y))
                # Reset colors to prevent bleed
                output_parts.append(normal)
                if back_cell.bg_color >= 0:
                    output_parts.append(self.term.on_color(back_cell.bg_color))
                output_parts.append(self.term.color(back_cell.fg_color))
                output_parts.append(back_cell.char if back_cell.char else ' ')

        # Swap: back becomes the new front, old front becomes next back
        self.front, self.back = self.back, self.front

        return ''.join(output_parts)


@dataclass
class GameRenderer:
    """Maze-aware wrapper around the double buffer."""
    term: Terminal
    cell_width: int = 1  # Screen columns per maze column
    buffer: DoubleBuffer = field(init=False)

    def __post_init__(self):
        self.buffer = DoubleBuffer(self.term)

    def begin_frame(self):
        self.buffer.clear_back()

    def end_frame(self) -> str:
        return self.buffer.present()

    def put_cell(self, row: int, col: int, glyph: str, fg_color: int = DEFAULT_FG):
        """Draw a glyph at a maze coordinate."""
        self.buffer.put_glyph(col * self.cell_width, row, glyph,
                              self.cell_width, fg_color)

    def put_string(self, x: int, y: int, text: str, fg_color: int = DEFAULT_FG):
        self.buffer.put_string(x, y, text, fg_color)

