"""Tests for the pydantic-ai weight advisor."""

import asyncio

import pytest
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from conftest import make_feedback
from platform_scorer.advisor import PydanticAIWeightAdvisor, build_weight_prompt
from platform_scorer.config import FeedbackConfig
from platform_scorer.exceptions import AdvisorError
from platform_scorer.feedback import FeedbackAnalyzer, WeightAdjuster
from platform_scorer.schema import (
    FeedbackCategory,
    PlatformId,
    ScoringWeights,
    WeightProposal,
)


PROPOSAL_ARGS = {
    "optimized_weights": {
        "roi_weight": 0.30,
        "compliance_weight": 0.30,
        "integration_weight": 0.25,
        "pain_point_weight": 0.15,
    },
    "adjustments_made": [
        {
            "weight_name": "compliance_weight",
            "old_value": 0.25,
            "new_value": 0.30,
            "reasoning": "Poor-fit feedback clusters on weakly certified platforms",
        },
    ],
    "confidence_score": 0.8,
    "recommendations": ["Re-run after another quarter of feedback"],
}


@pytest.fixture
def history():
    return (
        make_feedback(PlatformId.GOOGLE_GEMINI, FeedbackCategory.GOOD_FIT, 4)
        + make_feedback(PlatformId.GOOGLE_GEMINI, FeedbackCategory.POOR_FIT, 6, rating=2)
        + make_feedback(PlatformId.OPENAI_CHATGPT, FeedbackCategory.MISSING_FEATURE, 2, rating=3)
    )


@pytest.fixture
def analysis(history):
    return FeedbackAnalyzer(FeedbackConfig()).analyze(history)


class TestBuildWeightPrompt:
    """Tests for the advisor prompt."""

    def test_current_weights_as_percentages(self, analysis):
        prompt = build_weight_prompt(ScoringWeights(), analysis)

        assert prompt.startswith("CURRENT WEIGHTS:")
        assert "- ROI Weight: 35%" in prompt
        assert "- Compliance Weight: 25%" in prompt
        assert "- Pain Point Weight: 15%" in prompt

    def test_feedback_and_patterns(self, analysis):
        prompt = build_weight_prompt(ScoringWeights(), analysis)

        assert "FEEDBACK ANALYSIS (12 records):" in prompt
        assert '"google_gemini"' in prompt
        assert "- overrated for google_gemini: Reduce scoring weight for this platform" in prompt
        assert "- missing_features for openai_chatgpt" in prompt

    def test_rules(self, analysis):
        prompt = build_weight_prompt(ScoringWeights(), analysis, max_adjustment_pct=0.10)

        assert "1. All weights must sum to 1.0" in prompt
        assert "max ±10% per weight" in prompt
        assert prompt.endswith("Return optimized weights with explanations.")


class TestPydanticAIWeightAdvisor:
    """Tests for the agent-backed advisor using pydantic-ai test models."""

    def test_agent_created_lazily(self):
        advisor = PydanticAIWeightAdvisor("openai:gpt-4o")
        assert advisor._agent is None

    def test_structured_proposal(self, analysis):
        advisor = PydanticAIWeightAdvisor(TestModel(custom_output_args=PROPOSAL_ARGS))
        proposal = asyncio.run(advisor.propose(ScoringWeights(), analysis))

        assert isinstance(proposal, WeightProposal)
        assert proposal.optimized_weights.compliance_weight == pytest.approx(0.30)
        assert proposal.adjustments_made[0].weight_name == "compliance_weight"
        assert proposal.confidence_score == pytest.approx(0.8)

    def test_model_failure_raises_advisor_error(self, analysis):
        def unavailable(messages, info: AgentInfo):
            raise RuntimeError("provider unavailable")

        advisor = PydanticAIWeightAdvisor(FunctionModel(unavailable))

        with pytest.raises(AdvisorError, match="provider unavailable"):
            asyncio.run(advisor.propose(ScoringWeights(), analysis))

    def test_adjuster_applies_agent_proposal(self, history):
        advisor = PydanticAIWeightAdvisor(TestModel(custom_output_args=PROPOSAL_ARGS))
        result = asyncio.run(WeightAdjuster(advisor, FeedbackConfig()).optimize(history, ScoringWeights()))

        assert result.applied is True
        assert result.weights.roi_weight == pytest.approx(0.30)
        assert result.recommendations == ["Re-run after another quarter of feedback"]

    def test_adjuster_falls_back_on_agent_failure(self, history):
        def unavailable(messages, info: AgentInfo):
            raise RuntimeError("provider unavailable")

        advisor = PydanticAIWeightAdvisor(FunctionModel(unavailable))
        result = asyncio.run(WeightAdjuster(advisor, FeedbackConfig()).optimize(history, ScoringWeights()))

        assert result.applied is False
        assert result.weights == ScoringWeights()
        assert "provider unavailable" in result.message
