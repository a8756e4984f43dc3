"""Explainer - human-readable summaries of a ranking run.

Builds the recommendation summary attached to every result and the
Markdown executive summary shared with stakeholders.
"""

from typing import Optional

from .ranker import RecommendationRanker
from .schema import (
    Assessment,
    Recommendation,
    RecommendationSummary,
    ROIResult,
)


class RecommendationExplainer:
    """Generates explanations and summaries for ranking results.

    Principles:
    - Every recommendation must be explainable from its component scores
    - A narrow lead is reported as a risk, not hidden
    - Output is deterministic for identical inputs
    """

    # Lead over the runner-up below which the ranking is called close
    NARROW_MARGIN = 5.0

    NEXT_STEPS = [
        "Schedule pilot program with {platform}",
        "Identify 10-20 early adopters from key departments",
        "Establish success metrics and KPIs",
        "Plan phased rollout over 6-12 months",
    ]

    def generate_summary(
        self,
        recommendations: list[Recommendation],
        total_users: int = 0,
    ) -> RecommendationSummary:
        """Generate a summary of the ranking.

        Args:
            recommendations: Ranked recommendations (best first)
            total_users: Headcount covered by the assessment

        Returns:
            Summary with the primary recommendation, drivers and risks
        """
        if not recommendations:
            return RecommendationSummary(
                total_users=total_users,
                key_risks=["No platforms could be scored"],
            )

        primary = recommendations[0]
        runner_up = recommendations[1] if len(recommendations) > 1 else None
        margin = primary.total_score - runner_up.total_score if runner_up else 0.0

        key_drivers = [p for p in primary.pros if p != RecommendationRanker.FALLBACK_PRO]
        if not key_drivers:
            key_drivers = [primary.justification_text]

        key_risks = [c for c in primary.cons if c != RecommendationRanker.FALLBACK_CON]
        if runner_up and margin < self.NARROW_MARGIN:
            key_risks.append(
                f"Narrow lead of {margin:.1f} points over {runner_up.platform_name}; "
                f"validate with a pilot before committing"
            )

        return RecommendationSummary(
            primary_platform=primary.platform_id,
            primary_platform_name=primary.platform_name,
            runner_up_platform=runner_up.platform_id if runner_up else None,
            runner_up_platform_name=runner_up.platform_name if runner_up else None,
            score_margin=margin,
            total_users=total_users,
            key_drivers=key_drivers,
            key_risks=key_risks,
        )

    def executive_summary(
        self,
        assessment: Assessment,
        recommendations: list[Recommendation],
        roi_results: list[ROIResult],
    ) -> str:
        """Render a Markdown executive summary."""
        lines = ["# Executive Summary", ""]
        lines.append(f"**Organization:** {assessment.organization_name}")
        if assessment.assessment_date:
            lines.append(f"**Assessment Date:** {assessment.assessment_date.isoformat()}")
        lines.append(f"**Total Users Evaluated:** {assessment.total_users()}")
        lines.append("")

        if not recommendations:
            lines.append("No platforms could be scored for this assessment.")
            return "\n".join(lines) + "\n"

        top = recommendations[0]
        top_roi = _find_roi(roi_results, top)

        lines.append(f"## Top Recommendation: {top.platform_name}")
        lines.append("")
        lines.append(top.justification_text)
        lines.append("")

        if top_roi:
            lines.append("### Financial Impact")
            lines.append(f"- **Annual Net Savings:** ${top_roi.net_annual_savings:,.0f}")
            lines.append(f"- **1-Year ROI:** {top_roi.one_year_roi_pct:.0f}%")
            lines.append(f"- **3-Year ROI:** {top_roi.three_year_roi_pct:.0f}%")
            lines.append("")

        lines.append("### Key Strengths")
        lines.append(f"- Compliance Score: {top.compliance_score:.0f}%")
        lines.append(f"- Integration Compatibility: {top.integration_score:.0f}%")
        lines.append(f"- Pain Point Alignment: {top.pain_point_score:.0f}%")
        lines.append("")

        if len(recommendations) > 1:
            runner_up = recommendations[1]
            lines.append(f"## Alternative Option: {runner_up.platform_name}")
            lines.append("")
            lines.append(runner_up.justification_text)
            lines.append("")

        lines.append("## Next Steps")
        lines.append("")
        for i, step in enumerate(self.NEXT_STEPS, 1):
            lines.append(f"{i}. {step.format(platform=top.platform_name)}")

        return "\n".join(lines) + "\n"


def _find_roi(roi_results: list[ROIResult], recommendation: Recommendation) -> Optional[ROIResult]:
    return next((r for r in roi_results if r.platform == recommendation.platform_id), None)
