"""
Input Channel
==============
Background key reader feeding a single-slot channel.

The reader thread blocks on the terminal and publishes decoded commands.
The game loop polls without waiting and takes at most one command per
tick. Leftover keys wait in the slot for later ticks.
"""

import logging
import queue
import threading
from enum import Enum
from typing import Callable, Optional

from .grid import Direction

logger = logging.getLogger(__name__)


class Command(Enum):
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'
    ESCAPE = 'escape'
    NONE = 'none'

    @property
    def direction(self) -> Direction:
        """Movement direction for this command (NONE for non-moves)."""
        return _DIRECTIONS.get(self, Direction.NONE)


_DIRECTIONS = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}

_KEY_NAMES = {
    'KEY_UP': Command.UP,
    'KEY_DOWN': Command.DOWN,
    'KEY_LEFT': Command.LEFT,
    'KEY_RIGHT': Command.RIGHT,
    'KEY_ESCAPE': Command.ESCAPE,
}

_KEY_CHARS = {
    'w': Command.UP,
    's': Command.DOWN,
    'a': Command.LEFT,
    'd': Command.RIGHT,
    'q': Command.ESCAPE,
}


def decode_key(key) -> Command:
    """Decode a blessed Keystroke. Arrows or WASD move, Esc or Q quits."""
    if key is None or not key:
        return Command.NONE

    if key.is_sequence:
        return _KEY_NAMES.get(key.name, Command.NONE)

    return _KEY_CHARS.get(key.lower(), Command.NONE)


def terminal_reader(term) -> Callable[[], Command]:
    """Blocking read of one key from a blessed Terminal."""
    def read() -> Command:
        return decode_key(term.inkey())
    return read


class InputChannel:
    """
    Runs read_command() forever on a daemon thread.

    A failed read is published as ESCAPE and the thread keeps going; it
    is never joined and simply dies with the process.
    """

    def __init__(self, read_command: Callable[[], Command]):
        self._read_command = read_command
        self._slot: 'queue.Queue[Command]' = queue.Queue(maxsize=1)
        self._thread = threading.Thread(
            target=self._run, name='input-reader', daemon=True
        )

    def start(self) -> 'InputChannel':
        self._thread.start()
        return self

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self):
        while True:
            try:
                command = self._read_command()
            except Exception:
                logger.exception('Error reading input')
                command = Command.ESCAPE
            # Blocks while the previous command is still waiting
            self._slot.put(command)

    def poll(self) -> Optional[Command]:
        """Take one waiting command, or None if there is none."""
        try:
            return self._slot.get_nowait()
        except queue.Empty:
            return None
