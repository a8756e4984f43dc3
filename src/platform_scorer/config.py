"""Centralized configuration management for the platform scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError
from .schema import ScoringWeights


class ScoringWeightsConfig(BaseModel):
    """Default weights for the four scoring components.

    Used when neither refined weights nor assessment-level custom weights
    are supplied. They should sum to 1.0.
    """
    roi_weight: float = Field(
        0.35,
        ge=0,
        description="Weight for normalized first-year ROI"
    )
    compliance_weight: float = Field(
        0.25,
        ge=0,
        description="Weight for compliance certification coverage"
    )
    integration_weight: float = Field(
        0.25,
        ge=0,
        description="Weight for integration support coverage"
    )
    pain_point_weight: float = Field(
        0.15,
        ge=0,
        description="Weight for pain-point alignment"
    )

    def to_weights(self) -> ScoringWeights:
        """Convert to the ScoringWeights value threaded through ranking."""
        return ScoringWeights(**self.model_dump())


class BudgetFitConfig(BaseModel):
    """Ratios of annual cost to annual budget for each budget-fit class."""
    excellent_ratio: float = Field(0.70, description="Cost at or below this share of budget is excellent")
    good_ratio: float = Field(1.00, description="Cost at or below this share of budget is good")
    moderate_ratio: float = Field(1.20, description="Cost at or below this share of budget is moderate")


class FeedbackConfig(BaseModel):
    """Thresholds for feedback pattern analysis and weight re-optimization."""
    min_samples_for_patterns: int = Field(
        5,
        description="Minimum feedback records before running pattern analysis"
    )
    min_samples_for_optimization: int = Field(
        10,
        description="Minimum feedback records before proposing new weights"
    )
    min_platform_samples_for_flags: int = Field(
        10,
        description="Minimum records for a platform before flagging it over/underrated"
    )
    overrated_accuracy_below: float = Field(
        0.5,
        description="Flag as overrated when the good-fit rate is below this"
    )
    underrated_accuracy_above: float = Field(
        0.8,
        description="Flag as underrated when the good-fit rate is above this"
    )
    missing_feature_rate_above: float = Field(
        0.3,
        description="Flag missing-feature concern when that rate is above this"
    )
    weight_sum_tolerance: float = Field(
        0.01,
        description="Accepted deviation of a proposed weight sum from 1.0"
    )
    max_adjustment_pct: float = Field(
        0.15,
        description="Soft limit on per-weight change communicated to the advisor"
    )


class AdvisorConfig(BaseModel):
    """Configuration for the LLM-backed weight advisor."""
    enabled: bool = Field(False, description="Call the advisor when adjusting weights")
    model: str = Field(
        "openai:gpt-4o",
        description="pydantic-ai model identifier, e.g. 'openai:gpt-4o' or 'anthropic:claude-sonnet-4-0'"
    )


class ScorerConfig(BaseModel):
    """Complete configuration for the platform scorer."""
    scoring_weights: ScoringWeightsConfig = Field(default_factory=ScoringWeightsConfig)
    budget_fit: BudgetFitConfig = Field(default_factory=BudgetFitConfig)
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)


# Global config instance
_config: Optional[ScorerConfig] = None


def get_config() -> ScorerConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = ScorerConfig()
    return _config


def load_config(path: Path) -> ScorerConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded ScorerConfig.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    global _config

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        _config = ScorerConfig.model_validate(data or {})
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"Invalid scorer config {path}: {e}") from e
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = ScorerConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. PLATFORM_SCORER_CONFIG environment variable
    2. ./scorer-config.yaml
    3. ./scorer-config.yml
    4. ~/.config/platform-scorer/config.yaml
    """
    env_path = os.environ.get("PLATFORM_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["scorer-config.yaml", "scorer-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "platform-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    config = ScorerConfig()
    data = config.model_dump()

    yaml_content = """# AI Platform Scorer Configuration
# ================================
#
# This file configures the default scoring weights, budget-fit
# classification and the feedback-driven weight adjustment loop.
#
# Copy this file to one of these locations:
#   - ./scorer-config.yaml (current directory)
#   - ~/.config/platform-scorer/config.yaml (user config)
#
# Or set the PLATFORM_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
