"""
Simulation Loop
================
Fixed-cadence game loop: input, agent, pursuers, collisions, render,
termination check, sleep.

Score, lives and the dot counter are only written from here. Pursuer
status is shared with the power-up timer thread and is always accessed
through the roster's reader/writer lock.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from . import config
from .components import Agent, GameResult, Outcome, PursuerStatus
from .grid import Cell, Direction, Grid, MOVES, Position
from .input import Command
from .maze import MazeLayout
from .power import PowerUp
from .pursuers import PursuerRoster

logger = logging.getLogger(__name__)


def resolve_move(grid: Grid, position: Position, direction: Direction) -> Position:
    """Step one cell with wraparound; a wall leaves the position unchanged."""
    if direction is Direction.NONE:
        return position
    candidate = grid.wrap(position, direction)
    if not grid.can_enter(candidate):
        return position
    return candidate


@dataclass
class Frame:
    """Everything the renderer needs for one tick."""
    cells: List[List[Cell]]
    agent: Position
    pursuers: List[Tuple[Position, PursuerStatus]]
    score: int
    lives: int
    dying: bool = False  # Draw the death glyph on the agent
    outcome: Outcome = Outcome.RUNNING


@dataclass
class SimulationSettings:
    """Tunable numbers, defaulting to the game constants."""
    tick_time: float = config.TICK_TIME
    respawn_pause: float = config.RESPAWN_PAUSE
    lives: int = config.STARTING_LIVES
    pill_duration: float = config.DEFAULT_PILL_DURATION
    dot_score: int = config.DOT_SCORE
    pill_score: int = config.PILL_SCORE
    pursuer_bonus: int = config.PURSUER_BONUS


class Simulation:
    """
    Central game state and the tick that advances it.

    Collaborators are injected so the loop can run without a terminal:
    poll_input returns at most one Command or None, render receives a
    Frame, sleep blocks the loop thread.
    """

    def __init__(self, layout: MazeLayout,
                 poll_input: Callable[[], Optional[Command]],
                 render: Callable[[Frame], None],
                 settings: Optional[SimulationSettings] = None,
                 rng: Optional[random.Random] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.perf_counter):
        self.settings = settings or SimulationSettings()
        self.grid = layout.grid
        self.agent = Agent(layout.agent_start)
        self.roster = PursuerRoster(layout.pursuer_starts)
        self.power = PowerUp(self.roster, self.settings.pill_duration)

        self.score = 0
        self.lives = self.settings.lives
        self.outcome = Outcome.RUNNING
        self.quit_requested = False
        self.ticks = 0

        self._poll_input = poll_input
        self._render = render
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._clock = clock
        self._dying = False

    # -------------------------------------------------------------------------
    # Tick phases
    # -------------------------------------------------------------------------

    def step_agent(self, command: Optional[Command]):
        """Apply at most one command, then eat whatever is under the agent."""
        if command is Command.ESCAPE:
            logger.info('Quit requested')
            self.quit_requested = True
            self.lives = 0
            return

        if command is not None:
            self.agent.position = resolve_move(
                self.grid, self.agent.position, command.direction
            )

        eaten = self.grid.consume(self.agent.position)
        if eaten is Cell.DOT:
            self.score += self.settings.dot_score
        elif eaten is Cell.PILL:
            self.score += self.settings.pill_score
            self.power.trigger()

    def move_pursuers(self):
        """Each pursuer tries one uniformly random direction."""
        for pursuer in self.roster:
            direction = self._rng.choice(MOVES)
            pursuer.position = resolve_move(self.grid, pursuer.position, direction)

    def resolve_collisions(self):
        """
        Settle every pursuer standing on the agent's cell.

        The agent's cell is fixed for the whole pass, so two pursuers on
        it are both resolved even if the first one respawns the agent.
        """
        agent_position = self.agent.position
        for index, pursuer in enumerate(self.roster.pursuers):
            if pursuer.position != agent_position:
                continue

            status = self.roster.status_of(index)
            if status is PursuerStatus.NORMAL:
                self._lethal_hit()
            else:
                self.roster.set_status(index, PursuerStatus.NORMAL)
                pursuer.respawn()
                self.score += self.settings.pursuer_bonus
                logger.info('Pursuer %d eaten at %s', index, agent_position)

    def _lethal_hit(self):
        if self.lives <= 0:
            return
        self.lives -= 1
        logger.info('Agent caught at %s, %d lives left', self.agent.position, self.lives)
        if self.lives > 0:
            self._render(self.snapshot(dying=True))
            self._sleep(self.settings.respawn_pause)
            self.agent.respawn()
        else:
            self._dying = True

    def check_game_over(self) -> Outcome:
        if self.grid.dots_remaining == 0:
            self.outcome = Outcome.WON
        elif self.lives <= 0:
            self.outcome = Outcome.LOST
        return self.outcome

    def snapshot(self, dying: bool = False) -> Frame:
        return Frame(
            cells=self.grid.rows(),
            agent=self.agent.position,
            pursuers=self.roster.snapshot(),
            score=self.score,
            lives=self.lives,
            dying=dying,
            outcome=self.outcome,
        )

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def tick(self) -> Outcome:
        """Run one tick. Returns the outcome (RUNNING while the game goes on)."""
        self.ticks += 1

        self.step_agent(self._poll_input())
        self.move_pursuers()
        self.resolve_collisions()

        outcome = self.check_game_over()
        self._render(self.snapshot(dying=self._dying))
        return outcome

    def result(self) -> GameResult:
        return GameResult(self.outcome, self.score, self.lives, self.quit_requested)

    def run(self) -> GameResult:
        """Tick until the game is won or lost, then stop the power-up timer."""
        try:
            while True:
                started = self._clock()
                if self.tick() is not Outcome.RUNNING:
                    break

                # Sleep for remaining tick time
                elapsed = self._clock() - started
                sleep_time = self.settings.tick_time - elapsed
                if sleep_time > 0:
                    self._sleep(sleep_time)
        finally:
            self.power.shutdown()

        result = self.result()
        logger.info('Game over after %d ticks: %s, score %d, lives %d',
                    self.ticks, result.outcome.value, result.score, result.lives)
        return result
