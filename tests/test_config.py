"""
Tests for Comparison Configuration
===================================
"""

import logging

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from signmatch.core.errors import ConfigError
from signmatch.utils.config import (
    DEFAULT_CONFIG_PATH, ComparisonConfig, config_from_data, load_config, load_raw_config,
)


class TestComparisonConfig:
    """Test suite for ComparisonConfig."""

    def test_default_values(self):
        config = ComparisonConfig()

        assert config.similarity_threshold == 0.8
        assert config.target_frames == 40
        assert config.min_quality_frames == 20
        assert config.feature_length == 140
        assert config.dtw_weight == 0.6
        assert config.cosine_weight == 0.4
        assert config.max_expected_distance == 10.0
        assert config.sharpening_exponent == 1.0
        assert config.anchor == "face"
        assert config.max_workers == 1

    def test_from_dict(self):
        config = ComparisonConfig.from_dict({
            "similarity_threshold": 0.92,
            "target_frames": 60,
            "feature_length": 156,
            "dtw_weight": 0.7,
            "cosine_weight": 0.3,
            "anchor": "Wrist",
        })

        assert config.similarity_threshold == 0.92
        assert config.target_frames == 60
        assert config.feature_length == 156
        assert config.dtw_weight == 0.7
        assert config.anchor == "wrist"

    def test_from_dict_partial(self):
        config = ComparisonConfig.from_dict({"target_frames": 60})

        assert config.target_frames == 60
        assert config.similarity_threshold == 0.8

    def test_defaults_validate(self):
        assert ComparisonConfig().validate() is not None

    @pytest.mark.parametrize("overrides", [
        {"dtw_weight": 0.5, "cosine_weight": 0.4},
        {"target_frames": 0},
        {"similarity_threshold": 1.5},
        {"sharpening_exponent": 0.0},
        {"anchor": "shoulder"},
        {"max_expected_distance": 0.0},
        {"max_workers": 0},
        {"feature_length": 0},
    ])
    def test_validate_rejects(self, overrides):
        with pytest.raises(ConfigError):
            ComparisonConfig(**overrides).validate()

    def test_to_dict(self):
        assert ComparisonConfig().to_dict()["target_frames"] == 40


class TestLoadConfig:
    """Test suite for YAML loading."""

    def test_shipped_file_matches_defaults(self):
        assert load_config(DEFAULT_CONFIG_PATH) == ComparisonConfig()

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = load_config(str(tmp_path / "missing.yaml"))

        assert config == ComparisonConfig()
        assert "not found" in caplog.text

    def test_yaml_overrides(self, tmp_path):
        path = tmp_path / "comparison.yaml"
        path.write_text("comparison:\n  similarity_threshold: 0.92\n  target_frames: 60\n")

        config = load_config(str(path))

        assert config.similarity_threshold == 0.92
        assert config.target_frames == 60
        assert config.feature_length == 140

    def test_explicit_overrides_win(self, tmp_path):
        path = tmp_path / "comparison.yaml"
        path.write_text("comparison:\n  target_frames: 60\n")

        config = load_config(str(path), overrides={"target_frames": 50})
        assert config.target_frames == 50

    def test_type_warning(self, tmp_path, caplog):
        path = tmp_path / "comparison.yaml"
        path.write_text("comparison:\n  target_frames: '60'\n  colour: blue\n")

        with caplog.at_level(logging.WARNING):
            data = load_raw_config(str(path))

        assert "comparison.target_frames" in caplog.text
        assert "comparison.colour" in caplog.text
        assert config_from_data(data).target_frames == 60

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "comparison.yaml"
        path.write_text("comparison:\n  dtw_weight: 0.9\n")

        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "comparison.yaml"
        path.write_text("comparison: [unclosed\n")

        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_numeric_raises(self):
        with pytest.raises(ConfigError):
            config_from_data({"comparison": {"target_frames": "many"}})

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "comparison.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_raw_config(str(path))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
