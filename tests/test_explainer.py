"""Tests for the recommendation explainer."""

from datetime import date

import pytest

from platform_scorer.explainer import RecommendationExplainer
from platform_scorer.ranker import RecommendationRanker
from platform_scorer.schema import (
    Assessment,
    Department,
    PlatformId,
    Recommendation,
    ROIResult,
)


def make_recommendation(platform_id: PlatformId, name: str, total: float, **kwargs) -> Recommendation:
    defaults = dict(
        roi_score=0.0,
        compliance_score=90.0,
        integration_score=75.0,
        pain_point_score=30.0,
        justification_text=f"{name} scores {total:.1f}/100.",
        pros=[RecommendationRanker.FALLBACK_PRO],
        cons=[RecommendationRanker.FALLBACK_CON],
    )
    defaults.update(kwargs)
    return Recommendation(platform_id=platform_id, platform_name=name, total_score=total, **defaults)


@pytest.fixture
def explainer():
    return RecommendationExplainer()


@pytest.fixture
def ranked():
    return [
        make_recommendation(
            PlatformId.ANTHROPIC_CLAUDE, "Anthropic Claude", 82.0,
            pros=["High projected first-year ROI (900%)"],
            cons=["Compliance gaps (50% of required standards certified)"],
        ),
        make_recommendation(PlatformId.MICROSOFT_COPILOT, "Microsoft Copilot", 70.0),
    ]


class TestGenerateSummary:
    """Tests for the recommendation summary."""

    def test_primary_and_runner_up(self, explainer, ranked):
        summary = explainer.generate_summary(ranked, total_users=40)

        assert summary.primary_platform == PlatformId.ANTHROPIC_CLAUDE
        assert summary.primary_platform_name == "Anthropic Claude"
        assert summary.runner_up_platform == PlatformId.MICROSOFT_COPILOT
        assert summary.score_margin == pytest.approx(12.0)
        assert summary.total_users == 40

    def test_drivers_and_risks_from_pros_cons(self, explainer, ranked):
        summary = explainer.generate_summary(ranked)

        assert summary.key_drivers == ["High projected first-year ROI (900%)"]
        assert summary.key_risks == ["Compliance gaps (50% of required standards certified)"]

    def test_fallback_pros_are_not_drivers(self, explainer):
        rec = make_recommendation(PlatformId.GOOGLE_GEMINI, "Google Gemini", 50.0)
        summary = explainer.generate_summary([rec])

        assert summary.key_drivers == ["Google Gemini scores 50.0/100."]
        assert summary.key_risks == []
        assert summary.runner_up_platform is None

    def test_narrow_lead_is_a_risk(self, explainer):
        recommendations = [
            make_recommendation(PlatformId.OPENAI_CHATGPT, "OpenAI ChatGPT", 61.0),
            make_recommendation(PlatformId.GOOGLE_GEMINI, "Google Gemini", 59.5),
        ]
        summary = explainer.generate_summary(recommendations)

        assert len(summary.key_risks) == 1
        assert summary.key_risks[0].startswith("Narrow lead of 1.5 points over Google Gemini")

    def test_no_recommendations(self, explainer):
        summary = explainer.generate_summary([], total_users=3)

        assert summary.primary_platform is None
        assert summary.key_risks == ["No platforms could be scored"]


class TestExecutiveSummary:
    """Tests for the Markdown executive summary."""

    @pytest.fixture
    def assessment(self):
        return Assessment(
            organization_name="Contoso Legal",
            assessment_date=date(2025, 3, 14),
            departments=[
                Department(name="Legal", user_count=25, hourly_rate=120),
                Department(name="HR", user_count=15, hourly_rate=45),
            ],
        )

    @pytest.fixture
    def roi_results(self):
        return [
            ROIResult(
                platform=PlatformId.ANTHROPIC_CLAUDE,
                net_annual_savings=1234567.4,
                one_year_roi_pct=1029.0,
                three_year_roi_pct=3087.0,
            ),
        ]

    def test_header(self, explainer, assessment, ranked, roi_results):
        markdown = explainer.executive_summary(assessment, ranked, roi_results)

        assert markdown.startswith("# Executive Summary\n")
        assert "**Organization:** Contoso Legal" in markdown
        assert "**Assessment Date:** 2025-03-14" in markdown
        assert "**Total Users Evaluated:** 40" in markdown

    def test_top_recommendation_and_financials(self, explainer, assessment, ranked, roi_results):
        markdown = explainer.executive_summary(assessment, ranked, roi_results)

        assert "## Top Recommendation: Anthropic Claude" in markdown
        assert "- **Annual Net Savings:** $1,234,567" in markdown
        assert "- **1-Year ROI:** 1029%" in markdown
        assert "- **3-Year ROI:** 3087%" in markdown
        assert "- Compliance Score: 90%" in markdown

    def test_alternative_and_next_steps(self, explainer, assessment, ranked, roi_results):
        markdown = explainer.executive_summary(assessment, ranked, roi_results)

        assert "## Alternative Option: Microsoft Copilot" in markdown
        assert "1. Schedule pilot program with Anthropic Claude" in markdown
        assert "4. Plan phased rollout over 6-12 months" in markdown

    def test_missing_roi_omits_financials(self, explainer, assessment, ranked):
        markdown = explainer.executive_summary(assessment, ranked, [])
        assert "### Financial Impact" not in markdown

    def test_no_recommendations(self, explainer, assessment):
        markdown = explainer.executive_summary(assessment, [], [])
        assert "No platforms could be scored" in markdown
        assert "## Next Steps" not in markdown
