"""Shared fixtures and fakes for the game tests."""

from __future__ import annotations

import time
from typing import Callable, Iterable, List, Optional

import pytest

from ghost_grid.grid import Position
from ghost_grid.input import Command
from ghost_grid.maze import MazeLayout, parse_maze
from ghost_grid.simulation import Frame, Simulation, SimulationSettings


def make_layout(lines: List[str], pursuers: Iterable[tuple] = ()) -> MazeLayout:
    """Parse map lines and add pursuers at explicit (row, col) cells."""
    layout = parse_maze(lines)
    layout.pursuer_starts.extend(Position(r, c) for r, c in pursuers)
    return layout


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class ScriptedInput:
    """Hands out one scripted command per poll, then None."""

    def __init__(self, commands: Iterable[Optional[Command]] = ()):
        self.commands = list(commands)

    def __call__(self) -> Optional[Command]:
        if self.commands:
            return self.commands.pop(0)
        return None


class FirstChoice:
    """Stand-in RNG that always picks the first option (UP)."""

    def choice(self, seq):
        return seq[0]


class FakeTerminal:
    """Just enough of blessed.Terminal for the double buffer."""

    width = 40
    height = 12
    normal = '<n>'

    def move_xy(self, x: int, y: int) -> str:
        return f'<{x},{y}>'

    def color(self, n: int) -> str:
        return f'<c{n}>'

    def on_color(self, n: int) -> str:
        return f'<b{n}>'


@pytest.fixture
def frames() -> List[Frame]:
    return []


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def build_simulation(frames, sleeps):
    """Factory for simulations with recording render and sleep."""
    created: List[Simulation] = []

    def build(layout: MazeLayout, commands: Iterable[Optional[Command]] = (),
              lives: int = 3, pill_duration: float = 10.0, rng=None) -> Simulation:
        simulation = Simulation(
            layout,
            poll_input=ScriptedInput(commands),
            render=frames.append,
            settings=SimulationSettings(lives=lives, pill_duration=pill_duration),
            rng=rng or FirstChoice(),
            sleep=sleeps.append,
            clock=lambda: 0.0,
        )
        created.append(simulation)
        return simulation

    yield build

    for simulation in created:
        simulation.power.shutdown()
