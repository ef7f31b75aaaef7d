"""
Power-Up Timer
===============
Eating a pill turns every pursuer into prey for a fixed duration.

Each pill starts a fresh PowerTimer. Only one timer is current at a
time; a second pill cancels the running timer and installs a new one,
so durations reset rather than stack.

Lock order is slot lock, then the roster's status lock. The game loop
never holds the status lock while taking the slot lock.
"""

import logging
import threading
import time
from enum import Enum
from typing import Callable, Optional

from .components import PursuerStatus
from .pursuers import PursuerRoster

logger = logging.getLogger(__name__)


class TimerState(Enum):
    IDLE = 'idle'
    RUNNING = 'running'
    EXPIRED = 'expired'
    CANCELLED = 'cancelled'


class PowerTimer:
    """
    A single cancellable countdown.

    The countdown runs on a daemon threading.Timer that calls
    on_expire(self) when it elapses. State transitions after start()
    happen under the owning PowerUp's slot lock.
    """

    def __init__(self, duration: float, on_expire: Callable[['PowerTimer'], None],
                 clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self.state = TimerState.IDLE
        self.started_at: Optional[float] = None
        self._on_expire = on_expire
        self._clock = clock
        self._timer: Optional[threading.Timer] = None

    def start(self):
        if self.state is not TimerState.IDLE:
            raise RuntimeError(f'cannot start a {self.state.value} timer')
        self.started_at = self._clock()
        self.state = TimerState.RUNNING
        self._timer = threading.Timer(self.duration, self._on_expire, args=(self,))
        self._timer.daemon = True
        self._timer.start()

    def cancel(self):
        """Stop the countdown. A cancelled timer never applies its expiry."""
        if self.state is TimerState.RUNNING:
            self._timer.cancel()
            self.state = TimerState.CANCELLED

    def remaining(self) -> float:
        """Seconds left on the countdown, 0 unless running."""
        if self.state is not TimerState.RUNNING:
            return 0.0
        return max(0.0, self.duration - (self._clock() - self.started_at))


class PowerUp:
    """
    Owns the current-timer slot and applies the pill effect.

    trigger() runs on the game loop thread; expiry runs on the timer
    thread. Both hold the slot lock for their whole transition.

    expirations counts countdowns that ran out and restored the
    pursuers, for diagnostics. Cancelled timers are not counted.
    """

    def __init__(self, roster: PursuerRoster, duration: float,
                 clock: Callable[[], float] = time.monotonic):
        if duration <= 0:
            raise ValueError(f'pill duration must be positive, got {duration}')
        self.roster = roster
        self.duration = duration
        self.expirations = 0
        self._clock = clock
        self._slot_lock = threading.Lock()
        self._current: Optional[PowerTimer] = None

    @property
    def active(self) -> bool:
        with self._slot_lock:
            return self._current is not None

    @property
    def current(self) -> Optional[PowerTimer]:
        with self._slot_lock:
            return self._current

    def remaining(self) -> float:
        with self._slot_lock:
            return self._current.remaining() if self._current else 0.0

    def trigger(self):
        """
        Empower all pursuers and (re)start the countdown at full duration.

        The status write happens here, synchronously, so the collision
        pass of the same tick already sees the pursuers as prey.
        """
        with self._slot_lock:
            self.roster.set_all(PursuerStatus.EMPOWERED_PREY)
            if self._current is not None:
                self._current.cancel()
                logger.debug('Power-up re-triggered, previous timer cancelled')
            timer = PowerTimer(self.duration, self._expire, clock=self._clock)
            self._current = timer
            timer.start()
        logger.info('Power-up active for %.1fs', self.duration)

    def _expire(self, timer: PowerTimer):
        with self._slot_lock:
            # A replaced or cancelled timer may still fire; ignore it
            if timer is not self._current or timer.state is not TimerState.RUNNING:
                return
            self.roster.set_all(PursuerStatus.NORMAL)
            timer.state = TimerState.EXPIRED
            self._current = None
            self.expirations += 1
        logger.info('Power-up expired (%d so far), pursuers back to normal',
                    self.expirations)

    def shutdown(self):
        """Cancel any running timer and calm the pursuers. Called at game end."""
        with self._slot_lock:
            if self._current is not None:
                self._current.cancel()
                self._current = None
                self.roster.set_all(PursuerStatus.NORMAL)
