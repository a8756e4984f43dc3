"""Recommendation Ranker - combines component scores into a ranked list.

Normalizes the ROI, compliance, integration and pain-point scores, applies
the scoring weights, and produces a total score per platform with
justification, pros/cons, best-for hints and a budget-fit class.
"""

import logging
from typing import Optional

from .benchmarks import AI_PLATFORMS, DEPARTMENTS, leading_platforms
from .config import ScorerConfig, get_config
from .schema import (
    BudgetFit,
    ComplianceResult,
    IntegrationResult,
    OrganizationContext,
    PainPointResult,
    Platform,
    PlatformId,
    Recommendation,
    ROIResult,
    ScoringDimension,
    ScoringWeights,
    WeightSource,
)

logger = logging.getLogger(__name__)


def resolve_weights(
    refined: Optional[ScoringWeights] = None,
    custom: Optional[ScoringWeights] = None,
    default: Optional[ScoringWeights] = None,
) -> tuple[ScoringWeights, WeightSource]:
    """Pick the weights for a ranking run.

    Precedence: refined (accepted feedback-loop output) > custom
    (supplied with the assessment) > configured defaults.
    """
    if refined is not None:
        return refined, WeightSource.REFINED
    if custom is not None:
        return custom, WeightSource.CUSTOM
    if default is None:
        default = get_config().scoring_weights.to_weights()
    return default, WeightSource.DEFAULT


class RecommendationRanker:
    """Ranks the candidate platforms from their component scores.

    Scoring model:
    - ROI is normalized as one-year ROI % / 10 and is NOT clamped, so a
      platform above 1000% ROI can score over 100
    - Compliance and integration percentages are used as-is
    - Pain-point points are normalized as points / 10 * 100
    - Missing component data contributes zero; ranking never raises
    - Sorting is stable over catalog order, so exact ties keep catalog order
    """

    ROI_SCALE = 10.0
    PAIN_POINT_SCALE = 10.0

    # Justification thresholds
    STRONG_ROI_PCT = 200
    EXCELLENT_COMPLIANCE_PCT = 80
    ROBUST_INTEGRATION_PCT = 70

    # Pros/cons thresholds
    HIGH_ROI_PCT = 150
    LOW_ROI_PCT = 100
    HIGH_COMPLIANCE_PCT = 80
    LOW_COMPLIANCE_PCT = 60
    HIGH_INTEGRATION_PCT = 80
    LOW_INTEGRATION_PCT = 50

    FALLBACK_PRO = "Balanced fit across the evaluated criteria"
    FALLBACK_CON = "No decisive advantage over the alternatives for this assessment"

    MAX_CATALOG_BEST_FOR = 3

    def __init__(self, config: Optional[ScorerConfig] = None):
        """Initialize ranker from configuration."""
        cfg = config or get_config()
        self.default_weights = cfg.scoring_weights.to_weights()
        self.budget_config = cfg.budget_fit
        self.sum_tolerance = cfg.feedback.weight_sum_tolerance

    def rank(
        self,
        roi_results: list[ROIResult],
        compliance_results: dict[PlatformId, ComplianceResult],
        integration_results: dict[PlatformId, IntegrationResult],
        pain_point_result: PainPointResult,
        weights: Optional[ScoringWeights] = None,
        org_context: Optional[OrganizationContext] = None,
    ) -> list[Recommendation]:
        """Score every catalogued platform and return them best first.

        Args:
            roi_results: ROI per platform
            compliance_results: Compliance coverage keyed by platform
            integration_results: Integration coverage keyed by platform
            pain_point_result: Pain-point points and mappings
            weights: Scoring weights (configured defaults when omitted)
            org_context: Budget and goals, used for classification only

        Returns:
            Recommendations sorted by total score, highest first
        """
        weights = weights or self.default_weights
        if not weights.is_normalized(self.sum_tolerance):
            logger.warning(
                "Scoring weights sum to %.3f, not 1.0; scores are not comparable across runs",
                weights.total(),
            )

        roi_by_platform = {r.platform: r for r in roi_results}
        departments = self._assessed_departments(roi_results)

        recommendations = []
        for platform in AI_PLATFORMS:
            recommendations.append(self._score_platform(
                platform,
                roi_by_platform.get(platform.id),
                compliance_results.get(platform.id),
                integration_results.get(platform.id),
                pain_point_result,
                departments,
                weights,
                org_context,
            ))

        # list.sort is stable, so ties keep catalog order
        recommendations.sort(key=lambda r: r.total_score, reverse=True)
        return recommendations

    def _score_platform(
        self,
        platform: Platform,
        roi: Optional[ROIResult],
        compliance: Optional[ComplianceResult],
        integration: Optional[IntegrationResult],
        pain_point_result: PainPointResult,
        departments: list[str],
        weights: ScoringWeights,
        org_context: Optional[OrganizationContext],
    ) -> Recommendation:
        """Score a single platform."""
        roi_pct = roi.one_year_roi_pct if roi else 0.0
        compliance_pct = compliance.compliance_score_pct if compliance else 0.0
        integration_pct = integration.integration_score_pct if integration else 0.0
        pain_points = pain_point_result.platform_scores.get(platform.id, 0.0)

        roi_score = roi_pct / self.ROI_SCALE
        pain_score = pain_points / self.PAIN_POINT_SCALE * 100

        dimensions = [
            ScoringDimension(
                dimension="roi",
                weight=weights.roi_weight,
                raw_score=roi_pct,
                normalized_score=roi_score,
                weighted_score=roi_score * weights.roi_weight,
                reasoning=f"One-year ROI {roi_pct:.0f}% scaled by 1/{self.ROI_SCALE:.0f}",
            ),
            ScoringDimension(
                dimension="compliance",
                weight=weights.compliance_weight,
                raw_score=compliance_pct,
                normalized_score=compliance_pct,
                weighted_score=compliance_pct * weights.compliance_weight,
                reasoning=self._compliance_reasoning(compliance),
            ),
            ScoringDimension(
                dimension="integration",
                weight=weights.integration_weight,
                raw_score=integration_pct,
                normalized_score=integration_pct,
                weighted_score=integration_pct * weights.integration_weight,
                reasoning=self._integration_reasoning(integration),
            ),
            ScoringDimension(
                dimension="pain_point",
                weight=weights.pain_point_weight,
                raw_score=pain_points,
                normalized_score=pain_score,
                weighted_score=pain_score * weights.pain_point_weight,
                reasoning=f"{pain_points:.0f} preference points from selected pain points",
            ),
        ]
        total_score = sum(d.weighted_score for d in dimensions)

        annual_cost = roi.total_cost if roi else None
        budget_fit = self._classify_budget(annual_cost, org_context)
        pros, cons = self._generate_pros_cons(roi_pct, compliance_pct, integration_pct, budget_fit)

        return Recommendation(
            platform_id=platform.id,
            platform_name=platform.display_name,
            total_score=total_score,
            roi_score=roi_score,
            compliance_score=compliance_pct,
            integration_score=integration_pct,
            pain_point_score=pain_score,
            justification_text=self._generate_justification(
                platform.display_name, total_score, roi, compliance_pct, integration_pct
            ),
            pros=pros,
            cons=cons,
            best_for=self._generate_best_for(platform, departments, pain_point_result),
            budget_fit=budget_fit,
            one_year_roi_pct=roi_pct,
            annual_cost=annual_cost,
            scoring_dimensions=dimensions,
        )

    def _generate_justification(
        self,
        platform_name: str,
        total_score: float,
        roi: Optional[ROIResult],
        compliance_pct: float,
        integration_pct: float,
    ) -> str:
        """Build the fixed-template justification sentence."""
        parts = [f"{platform_name} scores {total_score:.1f}/100."]
        if roi and roi.one_year_roi_pct > self.STRONG_ROI_PCT:
            parts.append(f"Strong ROI at {roi.one_year_roi_pct:.0f}%.")
        if compliance_pct > self.EXCELLENT_COMPLIANCE_PCT:
            parts.append(f"Excellent compliance coverage ({compliance_pct:.0f}%).")
        if integration_pct > self.ROBUST_INTEGRATION_PCT:
            parts.append("Robust integration support.")
        return " ".join(parts)

    def _classify_budget(
        self,
        annual_cost: Optional[float],
        org_context: Optional[OrganizationContext],
    ) -> BudgetFit:
        """Classify annual platform cost against the stated budget."""
        budget = org_context.budget_constraints if org_context else None
        if budget is None or annual_cost is None:
            return BudgetFit.MODERATE

        annual_max = budget.annual_max_budget()
        if annual_max <= 0:
            # A zero ceiling means no budget was actually stated
            return BudgetFit.MODERATE

        cfg = self.budget_config
        if annual_cost <= annual_max * cfg.excellent_ratio:
            return BudgetFit.EXCELLENT
        if annual_cost <= annual_max * cfg.good_ratio:
            return BudgetFit.GOOD
        if annual_cost <= annual_max * cfg.moderate_ratio:
            return BudgetFit.MODERATE
        return BudgetFit.EXCEEDS

    def _generate_pros_cons(
        self,
        roi_pct: float,
        compliance_pct: float,
        integration_pct: float,
        budget_fit: BudgetFit,
    ) -> tuple[list[str], list[str]]:
        """Rule-based pros and cons; neither list is ever empty."""
        pros = []
        cons = []

        if roi_pct > self.HIGH_ROI_PCT:
            pros.append(f"High projected first-year ROI ({roi_pct:.0f}%)")
        elif roi_pct < self.LOW_ROI_PCT:
            cons.append(f"Modest projected first-year ROI ({roi_pct:.0f}%)")

        if compliance_pct > self.HIGH_COMPLIANCE_PCT:
            pros.append(f"Strong compliance coverage ({compliance_pct:.0f}% of required standards certified)")
        elif compliance_pct < self.LOW_COMPLIANCE_PCT:
            cons.append(f"Compliance gaps ({compliance_pct:.0f}% of required standards certified)")

        if integration_pct > self.HIGH_INTEGRATION_PCT:
            pros.append(f"Broad integration support ({integration_pct:.0f}%)")
        elif integration_pct < self.LOW_INTEGRATION_PCT:
            cons.append(f"Limited integration coverage ({integration_pct:.0f}%)")

        if budget_fit == BudgetFit.EXCEEDS:
            cons.append("Projected annual cost exceeds the stated budget")

        if not pros:
            pros.append(self.FALLBACK_PRO)
        if not cons:
            cons.append(self.FALLBACK_CON)
        return pros, cons

    def _generate_best_for(
        self,
        platform: Platform,
        departments: list[str],
        pain_point_result: PainPointResult,
    ) -> list[str]:
        """Departments the platform leads on, then pain points it ranks first for."""
        best_for = [d for d in departments if platform.id in leading_platforms(d)]

        if not any(leading_platforms(d) for d in departments):
            catalog_leads = [d for d in DEPARTMENTS if platform.id in leading_platforms(d)]
            best_for = catalog_leads[:self.MAX_CATALOG_BEST_FOR]

        for mapping in pain_point_result.mappings:
            if mapping.recommended_platforms and mapping.recommended_platforms[0] == platform.display_name:
                best_for.append(mapping.pain_point)

        return best_for

    def _assessed_departments(self, roi_results: list[ROIResult]) -> list[str]:
        """Unique department names from the ROI breakdown, in input order."""
        names = []
        for result in roi_results[:1]:
            for row in result.department_breakdown:
                if row.department not in names:
                    names.append(row.department)
        return names

    def _compliance_reasoning(self, compliance: Optional[ComplianceResult]) -> str:
        if compliance is None or not compliance.status_by_requirement:
            return "No compliance standards required"
        total = len(compliance.status_by_requirement)
        return (
            f"{compliance.certified_count} of {total} standards certified, "
            f"{compliance.in_progress_count} in progress"
        )

    def _integration_reasoning(self, integration: Optional[IntegrationResult]) -> str:
        if integration is None or not integration.support_by_tool:
            return "No integrations required"
        return (
            f"Native: {integration.native_count}, API: {integration.api_count}, "
            f"Limited: {integration.limited_count}, Unsupported: {integration.not_supported_count}"
        )
