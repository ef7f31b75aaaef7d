"""Tests for ghost_grid.maze."""

from __future__ import annotations

import pytest

from ghost_grid.config import DEFAULT_MAZE_FILE
from ghost_grid.grid import Cell, Position
from ghost_grid.maze import MazeError, load_maze, parse_maze


class TestParseMaze:
    def test_positions_and_cells(self) -> None:
        layout = parse_maze([
            '#####',
            '#P.G#',
            '#X.G#',
            '#####',
        ])
        assert layout.agent_start == Position(1, 1)
        assert layout.pursuer_starts == [Position(1, 3), Position(2, 3)]
        assert layout.grid.dots_remaining == 2
        assert layout.grid.cell_at(Position(2, 1)) is Cell.PILL
        # Sprite start cells are empty floor
        assert layout.grid.cell_at(Position(1, 1)) is Cell.EMPTY
        assert layout.grid.cell_at(Position(1, 3)) is Cell.EMPTY

    def test_unknown_characters_are_empty(self) -> None:
        layout = parse_maze(['P?~ '])
        assert [layout.grid.cell_at(Position(0, c)) for c in range(4)] == [Cell.EMPTY] * 4

    def test_trailing_blank_lines_ignored(self) -> None:
        layout = parse_maze(['#P#', '', ''])
        assert layout.grid.row_count == 1

    def test_ragged_rows_rejected(self) -> None:
        with pytest.raises(MazeError, match='row 1'):
            parse_maze(['#P#', '##'])

    def test_missing_agent_rejected(self) -> None:
        with pytest.raises(MazeError, match='no agent'):
            parse_maze(['#.#'])

    def test_second_agent_rejected(self) -> None:
        with pytest.raises(MazeError):
            parse_maze(['PP'])

    def test_empty_rejected(self) -> None:
        with pytest.raises(MazeError):
            parse_maze([])


class TestLoadMaze:
    def test_bundled_maze_loads(self) -> None:
        layout = load_maze(DEFAULT_MAZE_FILE)
        assert layout.grid.dots_remaining > 0
        assert len(layout.pursuer_starts) == 6
        assert layout.grid.can_enter(layout.agent_start)

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(MazeError, match='cannot read'):
            load_maze(tmp_path / 'nope.txt')

    def test_non_utf8_file(self, tmp_path) -> None:
        path = tmp_path / 'maze.txt'
        path.write_bytes(b'#P\xff.#\n')
        with pytest.raises(MazeError, match='not valid UTF-8'):
            load_maze(path)

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / 'maze.txt'
        path.write_text('####\n#P.#\n####\n', encoding='utf-8')
        layout = load_maze(path)
        assert layout.grid.dots_remaining == 1
        assert layout.agent_start == Position(1, 1)
