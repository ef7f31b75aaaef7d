"""Tests for ghost_grid.config."""

from __future__ import annotations

import json

import pytest

from ghost_grid.config import (
    DEFAULT_PILL_DURATION,
    DEFAULT_THEME_FILE,
    ConfigError,
    Theme,
    load_theme,
    theme_from_dict,
)


class TestThemeFromDict:
    def test_empty_dict_uses_defaults(self) -> None:
        theme = theme_from_dict({})
        assert theme == Theme()
        assert theme.pill_duration_secs == DEFAULT_PILL_DURATION
        assert theme.cell_width == 1

    def test_values_override_defaults(self) -> None:
        theme = theme_from_dict({'player': '😃', 'use_emoji': True, 'pill_duration_secs': 3})
        assert theme.player == '😃'
        assert theme.cell_width == 2
        assert theme.pill_duration_secs == 3.0

    def test_unknown_keys_ignored(self) -> None:
        assert theme_from_dict({'sparkles': True}) == Theme()

    @pytest.mark.parametrize('duration', [0, -1, 'ten', True])
    def test_bad_duration_rejected(self, duration) -> None:
        with pytest.raises(ConfigError, match='pill_duration_secs'):
            theme_from_dict({'pill_duration_secs': duration})

    def test_non_string_glyph_rejected(self) -> None:
        with pytest.raises(ConfigError, match='wall'):
            theme_from_dict({'wall': 7})

    def test_non_bool_emoji_flag_rejected(self) -> None:
        with pytest.raises(ConfigError, match='use_emoji'):
            theme_from_dict({'use_emoji': 'yes'})

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ConfigError):
            theme_from_dict(['player'])


class TestLoadTheme:
    def test_bundled_themes_load(self) -> None:
        themes_dir = DEFAULT_THEME_FILE.parent
        paths = sorted(themes_dir.glob('*.json'))
        assert len(paths) >= 4
        for path in paths:
            assert isinstance(load_theme(path), Theme)

    def test_space_theme_takes_default_duration(self) -> None:
        theme = load_theme(DEFAULT_THEME_FILE.parent / 'space.json')
        assert theme.pill_duration_secs == DEFAULT_PILL_DURATION

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match='cannot read'):
            load_theme(tmp_path / 'missing.json')

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / 'bad.json'
        path.write_text('{"player": ', encoding='utf-8')
        with pytest.raises(ConfigError, match='invalid JSON'):
            load_theme(path)

    def test_non_utf8_file(self, tmp_path) -> None:
        path = tmp_path / 'theme.json'
        path.write_bytes(b'{"player": "\xff"}')
        with pytest.raises(ConfigError, match='not valid UTF-8'):
            load_theme(path)

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / 'theme.json'
        path.write_text(json.dumps({'ghost': 'M', 'pill_duration_secs': 2.5}), encoding='utf-8')
        theme = load_theme(path)
        assert theme.ghost == 'M'
        assert theme.pill_duration_secs == 2.5
