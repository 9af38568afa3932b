"""Tests for the game configuration dataclass."""

import json

import pytest

from classic_snake.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert (cfg.start_x, cfg.start_y) == (10, 10)
        assert cfg.initial_interval_ms == 200
        assert cfg.min_interval_ms == 25
        assert cfg.results_key == "gameResults"
        assert cfg.results_limit == 3
        assert cfg.restart_on_collision is True

    def test_grid_too_small(self):
        with pytest.raises(ValueError, match="at least 4"):
            GameConfig(grid_size=3, start_x=1, start_y=1)

    def test_start_outside_grid(self):
        with pytest.raises(ValueError, match="inside the grid"):
            GameConfig(grid_size=8)

    def test_interval_below_floor(self):
        with pytest.raises(ValueError, match="min_interval_ms"):
            GameConfig(initial_interval_ms=10)

    def test_results_limit(self):
        with pytest.raises(ValueError, match="results_limit"):
            GameConfig(results_limit=0)

    def test_to_dict_serializable(self):
        serialized = json.dumps(GameConfig().to_dict())
        assert isinstance(serialized, str)

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=12, start_x=6, start_y=6,
                         food_avoids_snake=False)
        path = tmp_path / "game.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg
