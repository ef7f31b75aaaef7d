"""
Configuration
==============
Game constants and the JSON theme (glyphs, display mode, pill duration).
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

TICK_TIME = 0.15          # Seconds per simulation tick
RESPAWN_PAUSE = 1.0       # Freeze after losing a life
STARTING_LIVES = 3

DOT_SCORE = 1
PILL_SCORE = 10
PURSUER_BONUS = 10        # Eating an empowered pursuer

DEFAULT_PILL_DURATION = 10.0

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_MAZE_FILE = PACKAGE_DIR / 'maps' / 'maze01.txt'
DEFAULT_THEME_FILE = PACKAGE_DIR / 'themes' / 'default.json'


# =============================================================================
# THEME
# =============================================================================

class ConfigError(ValueError):
    """The theme file could not be read or holds invalid values."""


@dataclass
class Theme:
    """Display glyphs plus the pill duration. Keys match the JSON file."""
    player: str = '@'
    ghost: str = 'G'
    ghost_blue: str = 'g'
    wall: str = '#'
    dot: str = '.'
    pill: str = 'o'
    death: str = 'X'
    space: str = ' '
    use_emoji: bool = False
    pill_duration_secs: float = DEFAULT_PILL_DURATION

    @property
    def cell_width(self) -> int:
        """Screen columns per maze column. Emoji glyphs are double width."""
        return 2 if self.use_emoji else 1


_GLYPH_FIELDS = ('player', 'ghost', 'ghost_blue', 'wall', 'dot', 'pill', 'death', 'space')


def theme_from_dict(data: dict) -> Theme:
    """Build a Theme, taking defaults for missing keys and ignoring unknown ones."""
    if not isinstance(data, dict):
        raise ConfigError('theme must be a JSON object')

    known = {f.name for f in fields(Theme)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning('Ignoring unknown theme keys: %s', ', '.join(unknown))

    values = {key: value for key, value in data.items() if key in known}

    for key in _GLYPH_FIELDS:
        if key in values and not isinstance(values[key], str):
            raise ConfigError(f"theme key '{key}' must be a string")

    if 'use_emoji' in values and not isinstance(values['use_emoji'], bool):
        raise ConfigError("theme key 'use_emoji' must be true or false")

    if 'pill_duration_secs' in values:
        duration = values['pill_duration_secs']
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise ConfigError("theme key 'pill_duration_secs' must be a number")
        if duration <= 0:
            raise ConfigError("theme key 'pill_duration_secs' must be positive")
        values['pill_duration_secs'] = float(duration)

    return Theme(**values)


def load_theme(path) -> Theme:
    """Read a theme JSON file."""
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except OSError as exc:
        raise ConfigError(f'cannot read config file {path}: {exc}') from exc
    except UnicodeDecodeError as exc:
        raise ConfigError(f'config file {path} is not valid UTF-8: {exc}') from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f'invalid JSON in config file {path}: {exc}') from exc

    theme = theme_from_dict(data)
    logger.info('Loaded theme %s (emoji=%s, pill=%.1fs)',
                path, theme.use_emoji, theme.pill_duration_secs)
    return theme
