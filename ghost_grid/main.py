#!/usr/bin/env python3
"""
GHOST_GRID - Terminal Maze Chase
=================================
Eat every dot in the maze while the ghosts wander. Power pills turn the
ghosts into prey for a while.

Controls:
    Arrows / WASD   - Move
    ESC / Q         - Quit
"""

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import List, Optional

from blessed import Terminal

from .components import GameResult
from .config import (
    ConfigError, DEFAULT_MAZE_FILE, DEFAULT_THEME_FILE, Theme, load_theme
)
from .engine import GameRenderer
from .input import InputChannel, terminal_reader
from .maze import MazeError, MazeLayout, load_maze
from .render import render_frame
from .simulation import Frame, Simulation, SimulationSettings

logger = logging.getLogger(__name__)

GAME_OVER_PAUSE = 1.5  # Seconds the final frame stays up
HUD_ROWS = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Terminal maze chase game')
    parser.add_argument(
        '--maze-file', type=Path, default=DEFAULT_MAZE_FILE,
        help='path to a custom maze file',
    )
    parser.add_argument(
        '--config-file', type=Path, default=DEFAULT_THEME_FILE,
        help='path to a custom theme/configuration file',
    )
    parser.add_argument(
        '--log-file', type=Path, default=None,
        help='write logs here (the game owns the terminal, so no console logs)',
    )
    parser.add_argument(
        '--log-level', default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
    )
    parser.add_argument('--seed', type=int, default=None, help='seed for ghost movement')
    return parser


def configure_logging(log_file: Optional[Path], level: str):
    """File logging when requested; otherwise logs are discarded."""
    if log_file is None:
        # The game owns the terminal; stderr output would draw over it
        logging.basicConfig(handlers=[logging.NullHandler()])
        return
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, level),
        format='%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s',
    )


def load_game(maze_file: Path, config_file: Path):
    """Load maze and theme. Raises MazeError or ConfigError."""
    layout = load_maze(maze_file)
    theme = load_theme(config_file)
    return layout, theme


def fits_terminal(term: Terminal, layout: MazeLayout, theme: Theme) -> bool:
    return (term.width >= layout.grid.col_count * theme.cell_width and
            term.height >= layout.grid.row_count + HUD_ROWS)


def play(term: Terminal, layout: MazeLayout, theme: Theme,
         seed: Optional[int] = None) -> GameResult:
    """Run one game on an already-prepared terminal."""
    renderer = GameRenderer(term, cell_width=theme.cell_width)

    def draw(frame: Frame):
        output = render_frame(renderer, frame, theme)
        if output:
            print(output, end='', flush=True)

    channel = InputChannel(terminal_reader(term)).start()
    simulation = Simulation(
        layout,
        poll_input=channel.poll,
        render=draw,
        settings=SimulationSettings(pill_duration=theme.pill_duration_secs),
        rng=random.Random(seed),
    )
    return simulation.run()


def main(argv: Optional[List[str]] = None):
    """Entry point. Loads the game, then runs it inside the terminal."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    try:
        layout, theme = load_game(args.maze_file, args.config_file)
    except (MazeError, ConfigError) as exc:
        logger.error('Failed to load game: %s', exc)
        print(f'ERROR: {exc}', file=sys.stderr)
        sys.exit(1)

    term = Terminal()
    if not fits_terminal(term, layout, theme):
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {layout.grid.col_count * theme.cell_width}x'
            f'{layout.grid.row_count + HUD_ROWS}'
        )
        sys.exit(1)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        # Initial clear (only time we clear the whole screen)
        print(term.home + term.clear, end='', flush=True)
        result = play(term, layout, theme, seed=args.seed)
        time.sleep(GAME_OVER_PAUSE)

        # Restore terminal
        print(term.normal, end='', flush=True)

    if result.won:
        verdict = 'Maze cleared!'
    elif result.quit:
        verdict = 'Quit.'
    else:
        verdict = 'Game over.'
    print(f'{verdict} Score: {result.score}  Lives: {result.lives}')


if __name__ == '__main__':
    main()
