"""Tests for scorer configuration loading."""

import pytest

from platform_scorer.config import (
    ScorerConfig,
    find_config_file,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)
from platform_scorer.exceptions import ConfigError
from platform_scorer.schema import ScoringWeights


class TestDefaults:
    """Tests for built-in defaults."""

    def test_default_weights(self):
        assert get_config().scoring_weights.to_weights() == ScoringWeights()

    def test_default_thresholds(self):
        config = get_config()

        assert config.budget_fit.excellent_ratio == 0.70
        assert config.budget_fit.moderate_ratio == 1.20
        assert config.feedback.min_samples_for_patterns == 5
        assert config.feedback.min_samples_for_optimization == 10
        assert config.advisor.enabled is False


class TestLoadConfig:
    """Tests for YAML loading."""

    def test_partial_override(self, tmp_path):
        path = tmp_path / "scorer-config.yaml"
        path.write_text("scoring_weights:\n  roi_weight: 0.5\n  pain_point_weight: 0.0\n")

        config = load_config(path)

        assert config.scoring_weights.roi_weight == 0.5
        assert config.scoring_weights.compliance_weight == 0.25
        assert get_config() is config

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "scorer-config.yaml"
        path.write_text("")

        assert load_config(path) == ScorerConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "scorer-config.yaml"
        path.write_text("scoring_weights: [unclosed\n")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "scorer-config.yaml"
        path.write_text("scoring_weights:\n  roi_weight: -0.1\n")

        with pytest.raises(ConfigError, match="Invalid scorer config"):
            load_config(path)

    def test_reset(self, tmp_path):
        path = tmp_path / "scorer-config.yaml"
        path.write_text("advisor:\n  enabled: true\n")
        load_config(path)

        reset_config()
        assert get_config().advisor.enabled is False


class TestFindConfigFile:
    """Tests for config discovery order."""

    @pytest.fixture
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PLATFORM_SCORER_CONFIG", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        monkeypatch.chdir(tmp_path)
        return tmp_path

    def test_nothing_found(self, isolated):
        assert find_config_file() is None

    def test_environment_variable(self, isolated, monkeypatch):
        path = isolated / "custom.yaml"
        path.write_text("")
        (isolated / "scorer-config.yaml").write_text("")
        monkeypatch.setenv("PLATFORM_SCORER_CONFIG", str(path))

        assert find_config_file() == path

    def test_current_directory(self, isolated):
        (isolated / "scorer-config.yml").write_text("")
        assert find_config_file().name == "scorer-config.yml"

    def test_user_config(self, isolated):
        user_config = isolated / "home" / ".config" / "platform-scorer" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("")

        assert find_config_file() == user_config


class TestSaveDefaultConfig:
    """Tests for writing the default config."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "scorer-config.yaml"
        save_default_config(path)

        assert path.read_text().startswith("# AI Platform Scorer Configuration")
        assert load_config(path) == ScorerConfig()
