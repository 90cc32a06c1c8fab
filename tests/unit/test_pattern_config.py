"""
Unit tests for pattern threshold configuration.
"""

import json
import pytest
from decimal import Decimal
from pathlib import Path

from candlescan.patterns.pattern_config import (
    EveningStarConfig,
    PatternDetectionConfig,
    ThreeWhiteSoldiersConfig,
    get_pattern_config,
    load_pattern_config,
    reset_pattern_config,
    save_pattern_config,
    set_pattern_config,
)


class TestPatternDetectionConfig:
    """Test configuration defaults and serialization."""

    def test_defaults(self):
        config = PatternDetectionConfig()

        assert config.three_white_soldiers.min_body_range_ratio == Decimal('0.5')
        assert config.three_white_soldiers.max_upper_shadow_ratio == Decimal('0.2')
        assert config.evening_star.min_first_body_ratio == Decimal('0.008')
        assert config.evening_star.max_star_ratio == Decimal('0.3')

    def test_to_dict_uses_strings(self):
        data = PatternDetectionConfig().to_dict()

        assert data["evening_star"]["max_star_ratio"] == "0.3"
        assert data["three_white_soldiers"]["min_body_range_ratio"] == "0.5"

    def test_from_dict_partial(self):
        config = PatternDetectionConfig.from_dict({"evening_star": {"max_star_ratio": "0.25"}})

        assert config.evening_star.max_star_ratio == Decimal('0.25')
        assert config.evening_star.min_first_body_ratio == Decimal('0.008')
        assert config.three_white_soldiers == ThreeWhiteSoldiersConfig()

    def test_from_dict_accepts_numbers(self):
        config = PatternDetectionConfig.from_dict({"three_white_soldiers": {"min_body_range_ratio": 0.6}})

        assert config.three_white_soldiers.min_body_range_ratio == Decimal('0.6')

    @pytest.mark.parametrize("data", [
        {"hammer": {}},
        {"evening_star": {"max_gap": "1"}},
        {"evening_star": {"max_star_ratio": "abc"}},
        {"evening_star": {"max_star_ratio": "-0.1"}},
        {"evening_star": {"max_star_ratio": True}},
        {"evening_star": "0.3"},
    ])
    def test_from_dict_rejects_bad_values(self, data):
        with pytest.raises(ValueError):
            PatternDetectionConfig.from_dict(data)

    def test_file_round_trip(self, temp_dir: Path):
        path = temp_dir / "patterns.json"
        config = PatternDetectionConfig(evening_star=EveningStarConfig(max_star_ratio=Decimal('0.15')))

        config.save_to_file(path)

        assert json.loads(path.read_text())["evening_star"]["max_star_ratio"] == "0.15"
        assert PatternDetectionConfig.load_from_file(path) == config


class TestGlobalPatternConfig:
    """Test the process-wide configuration helpers."""

    def test_get_returns_defaults(self):
        assert get_pattern_config() == PatternDetectionConfig()

    def test_get_is_cached(self):
        assert get_pattern_config() is get_pattern_config()

    def test_set_and_reset(self):
        custom = PatternDetectionConfig(evening_star=EveningStarConfig(max_star_ratio=Decimal('0.1')))

        set_pattern_config(custom)
        assert get_pattern_config() is custom

        reset_pattern_config()
        assert get_pattern_config() == PatternDetectionConfig()

    def test_load_and_save(self, temp_dir: Path):
        path = temp_dir / "patterns.json"
        path.write_text(json.dumps({"three_white_soldiers": {"max_upper_shadow_ratio": "0.1"}}))

        loaded = load_pattern_config(path)

        assert get_pattern_config() is loaded
        assert loaded.three_white_soldiers.max_upper_shadow_ratio == Decimal('0.1')

        out = temp_dir / "saved.json"
        save_pattern_config(out)
        assert PatternDetectionConfig.load_from_file(out) == loaded

    @pytest.mark.parametrize("content", ["[1, 2]", '"evening_star"', "3"])
    def test_load_non_object_file(self, temp_dir: Path, content):
        path = temp_dir / "patterns.json"
        path.write_text(content)

        with pytest.raises(ValueError):
            PatternDetectionConfig.load_from_file(path)
