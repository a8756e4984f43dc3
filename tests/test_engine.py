"""Tests for the scoring engine and its file loaders."""

import json

import pytest
import yaml

from platform_scorer.config import ScorerConfig
from platform_scorer.engine import (
    ScoringEngine,
    collect_warnings,
    load_assessment,
    load_feedback,
    load_weights,
    validate_assessment,
)
from platform_scorer.exceptions import AssessmentLoadError, ConfigError, FeedbackLoadError
from platform_scorer.schema import (
    Assessment,
    BudgetFit,
    Department,
    PlatformId,
    ScoringWeights,
    WeightSource,
)


@pytest.fixture
def engine():
    return ScoringEngine(ScorerConfig())


@pytest.fixture
def assessment_data():
    return {
        "organization_name": "Fabrikam",
        "departments": [
            {"name": "Legal", "user_count": 20, "hourly_rate": 110},
            {"name": "HR", "user_count": 10, "hourly_rate": 45},
        ],
        "compliance_requirements": ["SOC 2", "HIPAA"],
        "desired_integrations": ["Slack", "Workday"],
        "pain_points": ["Complex contract review processes"],
    }


class TestLoadAssessment:
    """Tests for reading assessment files."""

    def test_sample_yaml(self, sample_assessment_path):
        assessment = load_assessment(sample_assessment_path)

        assert assessment.organization_name == "Northwind Advisory"
        assert assessment.total_users() == 90
        assert assessment.budget_constraints.max_budget == 40000

    def test_json_single_item_list(self, tmp_path, assessment_data):
        path = tmp_path / "assessment.json"
        path.write_text(json.dumps([assessment_data]))

        assert load_assessment(path).organization_name == "Fabrikam"

    def test_missing_file(self, tmp_path):
        with pytest.raises(AssessmentLoadError, match="Cannot read assessment"):
            load_assessment(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "assessment.json"
        path.write_text("{not json")

        with pytest.raises(AssessmentLoadError):
            load_assessment(path)

    def test_invalid_headcount(self, tmp_path, assessment_data):
        assessment_data["departments"][0]["user_count"] = 0
        path = tmp_path / "assessment.yaml"
        path.write_text(yaml.safe_dump(assessment_data))

        with pytest.raises(AssessmentLoadError, match="Invalid assessment"):
            load_assessment(path)


class TestOtherLoaders:
    """Tests for feedback and weights files."""

    def test_sample_feedback(self, sample_feedback_path):
        history = load_feedback(sample_feedback_path)

        assert len(history) == 12
        assert history[0].platform_id == PlatformId.MICROSOFT_COPILOT

    def test_invalid_feedback_rating(self, tmp_path):
        path = tmp_path / "feedback.json"
        path.write_text(json.dumps([{
            "platform_id": "google_gemini",
            "rating": 9,
            "feedback_category": "good_fit",
            "timestamp": "2025-01-01T00:00:00Z",
        }]))

        with pytest.raises(FeedbackLoadError, match="Invalid feedback"):
            load_feedback(path)

    def test_empty_feedback_file(self, tmp_path):
        path = tmp_path / "feedback.yaml"
        path.write_text("")
        assert load_feedback(path) == []

    def test_weights_with_wrapper_key(self, tmp_path):
        path = tmp_path / "weights.yaml"
        path.write_text(yaml.safe_dump({
            "weights": {
                "roi_weight": 0.4,
                "compliance_weight": 0.2,
                "integration_weight": 0.2,
                "pain_point_weight": 0.2,
            },
            "applied": True,
        }))

        assert load_weights(path).roi_weight == pytest.approx(0.4)

    def test_bare_weights(self, tmp_path):
        path = tmp_path / "weights.json"
        path.write_text(json.dumps({"roi_weight": 0.5, "compliance_weight": 0.5,
                                    "integration_weight": 0.0, "pain_point_weight": 0.0}))

        assert load_weights(path).compliance_weight == pytest.approx(0.5)

    def test_invalid_weights(self, tmp_path):
        path = tmp_path / "weights.yaml"
        path.write_text("weights:\n  roi_weight: -1\n")

        with pytest.raises(ConfigError):
            load_weights(path)


class TestValidation:
    """Tests for assessment validation and warnings."""

    def test_sample_is_clean(self, sample_assessment_path):
        assert validate_assessment(sample_assessment_path) == (True, [])

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "assessment.yaml"
        path.write_text("departments: []\n")

        is_valid, issues = validate_assessment(path)
        assert is_valid is False
        assert len(issues) == 1

    def test_no_departments(self, tmp_path):
        path = tmp_path / "assessment.yaml"
        path.write_text("organization_name: Empty Co\n")

        is_valid, issues = validate_assessment(path)
        assert is_valid is True
        assert issues[0].startswith("No departments defined")

    def test_unknown_inputs_warned(self):
        assessment = Assessment(
            organization_name="Unknowns Inc",
            departments=[Department(name="Astrology", user_count=3, hourly_rate=20)],
            compliance_requirements=["ISO 9001"],
            desired_integrations=["Basecamp"],
            pain_points=["Too many meetings"],
            custom_weights=ScoringWeights(roi_weight=0.9),
        )

        assert collect_warnings(assessment) == [
            "Unknown department 'Astrology' contributes no savings",
            "Unknown compliance standard 'ISO 9001' is treated as unknown",
            "Unknown integration 'Basecamp' is treated as not supported",
            "Unknown pain point 'Too many meetings' is skipped",
            "Custom weights sum to 1.550, not 1.0",
        ]


class TestScoringEngine:
    """Tests for the full scoring pipeline."""

    def test_sample_assessment(self, engine, sample_assessment_path):
        result = engine.score(sample_assessment_path)
        scores = [r.total_score for r in result.recommendations]

        assert result.organization_name == "Northwind Advisory"
        assert len(result.recommendations) == 4
        assert all(a >= b for a, b in zip(scores, scores[1:]))
        assert result.weight_source == WeightSource.DEFAULT
        assert result.processing_warnings == []
        assert result.summary.primary_platform == result.recommendations[0].platform_id
        assert result.summary.total_users == 90

    def test_component_results_cover_every_platform(self, engine, sample_assessment_path):
        result = engine.score(sample_assessment_path)

        assert [r.platform for r in result.roi_results] == list(PlatformId)
        assert set(result.compliance_results) == set(PlatformId)
        assert set(result.integration_results) == set(PlatformId)
        assert len(result.pain_point_result.mappings) == 3

    def test_budget_fit_from_assessment(self, engine, assessment_data):
        assessment_data["budget_constraints"] = {"max_budget": 100, "budget_period": "annual"}
        result = engine.score(Assessment.model_validate(assessment_data))

        assert all(r.budget_fit == BudgetFit.EXCEEDS for r in result.recommendations)

    def test_custom_weights(self, engine, assessment_data):
        assessment_data["custom_weights"] = {
            "roi_weight": 0.0,
            "compliance_weight": 1.0,
            "integration_weight": 0.0,
            "pain_point_weight": 0.0,
        }
        result = engine.score(Assessment.model_validate(assessment_data))

        assert result.weight_source == WeightSource.CUSTOM
        # Only Copilot and Claude are certified for both SOC 2 and HIPAA
        assert {r.platform_id for r in result.recommendations[:2]} == {
            PlatformId.MICROSOFT_COPILOT,
            PlatformId.ANTHROPIC_CLAUDE,
        }
        assert result.recommendations[0].total_score == pytest.approx(100)

    def test_refined_weights_override_custom(self, engine, assessment_data):
        assessment_data["custom_weights"] = {"roi_weight": 1.0, "compliance_weight": 0,
                                             "integration_weight": 0, "pain_point_weight": 0}
        refined = ScoringWeights(roi_weight=0.25, compliance_weight=0.25,
                                 integration_weight=0.25, pain_point_weight=0.25)
        result = engine.score(Assessment.model_validate(assessment_data), refined_weights=refined)

        assert result.weight_source == WeightSource.REFINED
        assert result.weights_used == refined

    def test_configured_default_weights(self, assessment_data):
        config = ScorerConfig.model_validate({"scoring_weights": {
            "roi_weight": 0.25, "compliance_weight": 0.25,
            "integration_weight": 0.25, "pain_point_weight": 0.25,
        }})
        result = ScoringEngine(config).score(Assessment.model_validate(assessment_data))

        assert result.weight_source == WeightSource.DEFAULT
        assert result.weights_used.roi_weight == pytest.approx(0.25)

    def test_executive_summary(self, engine, sample_assessment_path):
        markdown = engine.executive_summary(sample_assessment_path)

        assert "**Organization:** Northwind Advisory" in markdown
        assert "**Assessment Date:** 2025-03-14" in markdown
        assert "## Top Recommendation:" in markdown

    def test_result_serializes(self, engine, sample_assessment_path):
        data = json.loads(engine.score(sample_assessment_path).model_dump_json())

        assert data["scoring_version"] == "1.0.0"
        assert data["recommendations"][0]["platform_id"] in {p.value for p in PlatformId}
