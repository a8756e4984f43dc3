"""Shared fixtures for the platform scorer tests."""

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from platform_scorer.config import reset_config
from platform_scorer.schema import FeedbackCategory, FeedbackRecord, PlatformId


SAMPLES_DIR = Path(__file__).parent.parent / "samples"


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_assessment_path() -> Path:
    return SAMPLES_DIR / "sample-assessment.yaml"


@pytest.fixture
def sample_feedback_path() -> Path:
    return SAMPLES_DIR / "sample-feedback.json"


def make_feedback(
    platform_id: PlatformId,
    category: FeedbackCategory,
    count: int,
    rating: int = 4,
) -> list[FeedbackRecord]:
    """Build ``count`` feedback records for one platform."""
    start = datetime(2025, 1, 1, 9, 0)
    return [
        FeedbackRecord(
            platform_id=platform_id,
            rating=rating,
            feedback_category=category,
            timestamp=start + timedelta(days=i),
        )
        for i in range(count)
    ]
