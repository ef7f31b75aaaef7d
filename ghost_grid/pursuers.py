"""
Pursuer Roster
===============
Owns the pursuers and guards their status with a reader/writer lock.

Positions are only ever touched by the game loop thread. Status is also
written by the power-up timer thread, so every status access goes
through this roster.
"""

from typing import Iterator, List, Tuple

from .components import Pursuer, PursuerStatus
from .grid import Position
from .sync import ReadWriteLock


class PursuerRoster:
    """Fixed set of pursuers created at load time."""

    def __init__(self, starts: List[Position]):
        self.pursuers: List[Pursuer] = [Pursuer(start) for start in starts]
        self.status_lock = ReadWriteLock()

    def __len__(self) -> int:
        return len(self.pursuers)

    def __iter__(self) -> Iterator[Pursuer]:
        return iter(self.pursuers)

    def set_all(self, status: PursuerStatus):
        """Set every pursuer's status (exclusive lock)."""
        with self.status_lock.write_locked():
            for pursuer in self.pursuers:
                pursuer.status = status

    def set_status(self, index: int, status: PursuerStatus):
        """Set a single pursuer's status (exclusive lock)."""
        with self.status_lock.write_locked():
            self.pursuers[index].status = status

    def status_of(self, index: int) -> PursuerStatus:
        with self.status_lock.read_locked():
            return self.pursuers[index].status

    def snapshot(self) -> List[Tuple[Position, PursuerStatus]]:
        """Positions and statuses as one consistent read."""
        with self.status_lock.read_locked():
            return [(p.position, p.status) for p in self.pursuers]
