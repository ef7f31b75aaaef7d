"""
Component Definitions
======================
Entity records for the agent and pursuers. Plain dataclasses; pursuer
status is only touched through PursuerRoster.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .grid import Position


# =============================================================================
# ENTITIES
# =============================================================================

class PursuerStatus(Enum):
    """Whether a pursuer is dangerous or can be eaten."""
    NORMAL = 'normal'
    EMPOWERED_PREY = 'empowered_prey'


@dataclass
class Agent:
    """The player-controlled agent."""
    start: Position
    position: Optional[Position] = None

    def __post_init__(self):
        if self.position is None:
            self.position = self.start

    def respawn(self):
        self.position = self.start


@dataclass
class Pursuer:
    """An autonomous pursuer. Status is shared with the power-up timer."""
    start: Position
    position: Optional[Position] = None
    status: PursuerStatus = PursuerStatus.NORMAL

    def __post_init__(self):
        if self.position is None:
            self.position = self.start

    def respawn(self):
        self.position = self.start


# =============================================================================
# GAME OUTCOME
# =============================================================================

class Outcome(Enum):
    RUNNING = 'running'
    WON = 'won'
    LOST = 'lost'


@dataclass
class GameResult:
    """Final numbers handed back to the caller when the loop exits."""
    outcome: Outcome
    score: int
    lives: int
    quit: bool = False  # Player asked to leave (Esc or broken input)

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WON
