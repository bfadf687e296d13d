"""Tests for engine configuration."""

import json

import pytest
from pydantic import ValidationError

from depthcrawl.config import EngineConfig, load_config, save_config
from depthcrawl.errors import ConfigError


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.max_level == 100
        assert config.ambush_chance == pytest.approx(0.30)
        assert config.chamber_seal_chance == pytest.approx(0.20)
        assert config.seal_guaranteed_progress == pytest.approx(0.75)
        assert config.milestone_floors == [10, 25, 50, 75, 100]

    @pytest.mark.parametrize("level,expected", [
        (1, 10), (9, 10), (10, 11), (55, 15), (99, 19), (100, 20),
    ])
    def test_room_count_grows_with_depth(self, level, expected):
        assert EngineConfig().room_count(level) == expected

    def test_room_count_respects_bounds(self):
        config = EngineConfig(room_count_base=2, min_rooms=5, max_rooms=6)
        assert config.room_count(1) == 5
        assert config.room_count(90) == 6

    @pytest.mark.parametrize("level,expected", [(-3, 1), (0, 1), (42, 42), (101, 100)])
    def test_clamp_level(self, level, expected):
        assert EngineConfig().clamp_level(level) == expected

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            EngineConfig(ambush=0.5)

    def test_rejects_out_of_range_probability(self):
        with pytest.raises(ValidationError):
            EngineConfig(trap_chance=1.5)

    def test_rejects_inverted_room_bounds(self):
        with pytest.raises(ValidationError, match="min_rooms"):
            EngineConfig(min_rooms=12, max_rooms=9)

    def test_rejects_inverted_seal_thresholds(self):
        with pytest.raises(ValidationError):
            EngineConfig(seal_min_progress=0.9, seal_guaranteed_progress=0.6)


class TestLoadSave:
    def test_round_trip(self, tmp_path):
        config = EngineConfig(ambush_chance=0.1, milestone_floors=[5])
        path = tmp_path / "nested" / "engine.json"
        save_config(config, path)
        assert load_config(path) == config

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"max_level": 50}))
        config = load_config(path)
        assert config.max_level == 50
        assert config.trap_chance == pytest.approx(0.15)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text("max_level = 3")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "engine.json"
        path.write_text(json.dumps({"max_level": 0}))
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)
