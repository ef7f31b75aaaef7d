"""
Frame Rendering
================
Draws a simulation Frame: maze, sprites, HUD and the game-over banner.
"""

from .components import Outcome, PursuerStatus
from .config import Theme
from .engine import (
    GameRenderer, NEON_BLUE, NEON_CYAN, NEON_GREEN, NEON_MAGENTA,
    NEON_RED, NEON_YELLOW, GRAY_MED, WHITE
)
from .grid import Cell
from .simulation import Frame


_CELL_COLORS = {
    Cell.WALL: NEON_BLUE,
    Cell.DOT: GRAY_MED,
    Cell.PILL: NEON_MAGENTA,
    Cell.EMPTY: WHITE,
}


def cell_glyph(theme: Theme, cell: Cell) -> str:
    if cell is Cell.WALL:
        return theme.wall
    if cell is Cell.DOT:
        return theme.dot
    if cell is Cell.PILL:
        return theme.pill
    return theme.space


def lives_text(theme: Theme, lives: int) -> str:
    """Lives as a number, or one player glyph per life in emoji mode."""
    if theme.use_emoji:
        return theme.player * max(0, lives)
    return str(lives)


def render_maze(renderer: GameRenderer, frame: Frame, theme: Theme):
    for row, cells in enumerate(frame.cells):
        for col, cell in enumerate(cells):
            renderer.put_cell(row, col, cell_glyph(theme, cell), _CELL_COLORS[cell])


def render_sprites(renderer: GameRenderer, frame: Frame, theme: Theme):
    """Agent first, then pursuers on top, like the arcade original."""
    agent = frame.agent
    if frame.dying:
        renderer.put_cell(agent.row, agent.col, theme.death, NEON_RED)
    else:
        renderer.put_cell(agent.row, agent.col, theme.player, NEON_YELLOW)

    for position, status in frame.pursuers:
        if status is PursuerStatus.EMPOWERED_PREY:
            renderer.put_cell(position.row, position.col, theme.ghost_blue, NEON_CYAN)
        else:
            renderer.put_cell(position.row, position.col, theme.ghost, NEON_RED)


def render_hud(renderer: GameRenderer, frame: Frame, theme: Theme):
    """Score and lives one row below the maze."""
    y = len(frame.cells) + 1
    renderer.put_string(0, y, f'Score: {frame.score}', WHITE)
    renderer.put_string(14, y, 'Lives: ', NEON_YELLOW)
    if theme.use_emoji:
        # Wide glyphs need their own cells or they overlap on redraw
        for i in range(max(0, frame.lives)):
            renderer.buffer.put_glyph(21 + i * 2, y, theme.player, 2, NEON_YELLOW)
    else:
        renderer.put_string(21, y, lives_text(theme, frame.lives), NEON_YELLOW)


def render_game_over(renderer: GameRenderer, frame: Frame):
    if frame.outcome is Outcome.RUNNING:
        return
    y = len(frame.cells) + 2
    if frame.outcome is Outcome.WON:
        renderer.put_string(0, y, '[ MAZE CLEARED ]', NEON_GREEN)
    else:
        renderer.put_string(0, y, '[ GAME OVER ]', NEON_RED)


def render_frame(renderer: GameRenderer, frame: Frame, theme: Theme) -> str:
    """Draw one frame and return the terminal output for it."""
    renderer.begin_frame()
    render_maze(renderer, frame, theme)
    render_sprites(renderer, frame, theme)
    render_hud(renderer, frame, theme)
    render_game_over(renderer, frame)
    return renderer.end_frame()
