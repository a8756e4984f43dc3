"""Feedback loop - pattern diagnostics and validated weight adjustment.

Historical feedback on past recommendations is grouped per platform and
checked for over/under-rating and recurring missing-feature complaints.
With enough samples, an external advisor may propose new scoring weights.
The core never trusts a proposal blindly: it is accepted only when the
weights sum to 1.0 within tolerance, otherwise the previous weights stand.
"""

import logging
from typing import Any, Optional, Protocol, Union

from .config import FeedbackConfig, get_config
from .schema import (
    FeedbackAnalysis,
    FeedbackCategory,
    FeedbackPattern,
    FeedbackRecord,
    PatternSeverity,
    PatternType,
    PlatformFeedbackStats,
    ScoringWeights,
    WeightOptimization,
    WeightProposal,
)

logger = logging.getLogger(__name__)

WEIGHT_FIELDS = ("roi_weight", "compliance_weight", "integration_weight", "pain_point_weight")


class WeightAdvisor(Protocol):
    """External service that proposes scoring weights from feedback diagnostics.

    Implementations are free to be slow, fallible and non-deterministic; the
    adjuster validates whatever they return.
    """

    async def propose(
        self,
        current_weights: ScoringWeights,
        analysis: FeedbackAnalysis,
    ) -> Union[WeightProposal, dict[str, Any]]:
        ...


class FeedbackAnalyzer:
    """Groups feedback by platform and flags recurring patterns."""

    def __init__(self, config: Optional[FeedbackConfig] = None):
        self.config = config or get_config().feedback

    def analyze(self, history: list[FeedbackRecord]) -> Optional[FeedbackAnalysis]:
        """Analyze a feedback history.

        Returns:
            FeedbackAnalysis, or None when there are fewer records than the
            pattern-analysis minimum.
        """
        if len(history) < self.config.min_samples_for_patterns:
            logger.info(
                "Only %d feedback records; %d needed for pattern analysis",
                len(history), self.config.min_samples_for_patterns,
            )
            return None

        stats: dict = {}
        rating_sums: dict = {}
        for record in history:
            pf = stats.setdefault(record.platform_id, PlatformFeedbackStats(platform_id=record.platform_id))
            if record.feedback_category == FeedbackCategory.GOOD_FIT:
                pf.good_fit += 1
            elif record.feedback_category == FeedbackCategory.POOR_FIT:
                pf.poor_fit += 1
            else:
                pf.missing_feature += 1
            pf.total += 1
            rating_sums[record.platform_id] = rating_sums.get(record.platform_id, 0) + record.rating

        for platform_id, pf in stats.items():
            pf.avg_rating = rating_sums[platform_id] / pf.total
            pf.accuracy_rate = pf.good_fit / pf.total
            pf.missing_feature_rate = pf.missing_feature / pf.total

        return FeedbackAnalysis(
            platform_feedback=stats,
            total_feedback_count=len(history),
            patterns=self._identify_patterns(list(stats.values())),
        )

    def _identify_patterns(self, stats: list[PlatformFeedbackStats]) -> list[FeedbackPattern]:
        cfg = self.config
        patterns = []

        for pf in stats:
            enough = pf.total >= cfg.min_platform_samples_for_flags

            if enough and pf.accuracy_rate < cfg.overrated_accuracy_below:
                patterns.append(FeedbackPattern(
                    pattern_type=PatternType.OVERRATED,
                    platform_id=pf.platform_id,
                    severity=PatternSeverity.HIGH,
                    recommendation="Reduce scoring weight for this platform",
                ))

            if enough and pf.accuracy_rate > cfg.underrated_accuracy_above:
                patterns.append(FeedbackPattern(
                    pattern_type=PatternType.UNDERRATED,
                    platform_id=pf.platform_id,
                    severity=PatternSeverity.MEDIUM,
                    recommendation="Increase scoring weight for this platform",
                ))

            if pf.missing_feature_rate > cfg.missing_feature_rate_above:
                patterns.append(FeedbackPattern(
                    pattern_type=PatternType.MISSING_FEATURES,
                    platform_id=pf.platform_id,
                    severity=PatternSeverity.MEDIUM,
                    recommendation="Review integration/feature requirements",
                ))

        return patterns


class WeightAdjuster:
    """Proposal-and-validate loop for revising the scoring weights.

    Rules:
    - Below the optimization sample minimum, weights are returned unchanged
    - Without an advisor, weights are returned unchanged
    - Any advisor error or malformed proposal falls back to the current weights
    - A proposal is accepted only if its weights sum to 1.0 within tolerance
    - The per-weight change limit is advisory: larger moves are logged, not clamped
    """

    def __init__(
        self,
        advisor: Optional[WeightAdvisor] = None,
        config: Optional[FeedbackConfig] = None,
    ):
        self.advisor = advisor
        self.config = config or get_config().feedback
        self.analyzer = FeedbackAnalyzer(self.config)

    async def optimize(
        self,
        history: list[FeedbackRecord],
        current_weights: ScoringWeights,
    ) -> WeightOptimization:
        """Attempt a weight re-optimization and report the outcome."""
        sample_size = len(history)
        if sample_size < self.config.min_samples_for_optimization:
            return self._fallback(
                current_weights, sample_size,
                f"Insufficient feedback data for optimization "
                f"({sample_size} of {self.config.min_samples_for_optimization} records)",
            )

        analysis = self.analyzer.analyze(history)
        if analysis is None:
            return self._fallback(current_weights, sample_size, "Feedback analysis unavailable")

        if self.advisor is None:
            return self._fallback(current_weights, sample_size, "No weight advisor configured")

        try:
            raw = await self.advisor.propose(current_weights, analysis)
            proposal = raw if isinstance(raw, WeightProposal) else WeightProposal.model_validate(raw)
        except Exception as e:
            logger.warning("Weight advisor failed; keeping current weights: %s", e)
            return self._fallback(current_weights, sample_size, f"Weight advisor failed: {e}")

        proposed = proposal.optimized_weights
        if not proposed.is_normalized(self.config.weight_sum_tolerance):
            logger.warning(
                "Proposed weights sum to %.3f, not 1.0; keeping current weights",
                proposed.total(),
            )
            return self._fallback(
                current_weights, sample_size,
                f"Proposed weights sum to {proposed.total():.3f}; proposal rejected",
            )

        self._log_large_adjustments(current_weights, proposed)

        return WeightOptimization(
            applied=True,
            weights=proposed,
            previous_weights=current_weights,
            adjustments=proposal.adjustments_made,
            confidence_score=proposal.confidence_score,
            sample_size=sample_size,
            recommendations=proposal.recommendations,
            message="Optimized weights applied",
        )

    async def adjust_weights(
        self,
        history: list[FeedbackRecord],
        current_weights: ScoringWeights,
    ) -> ScoringWeights:
        """Return new weights, or ``current_weights`` when no proposal is accepted."""
        optimization = await self.optimize(history, current_weights)
        return optimization.weights

    def _fallback(self, current_weights: ScoringWeights, sample_size: int, message: str) -> WeightOptimization:
        return WeightOptimization(
            applied=False,
            weights=current_weights,
            previous_weights=current_weights,
            sample_size=sample_size,
            message=message,
        )

    def _log_large_adjustments(self, current: ScoringWeights, proposed: ScoringWeights) -> None:
        limit = self.config.max_adjustment_pct
        for name in WEIGHT_FIELDS:
            old = getattr(current, name)
            new = getattr(proposed, name)
            if old > 0 and abs(new - old) / old > limit:
                logger.warning(
                    "Accepted %s change %.3f -> %.3f exceeds the advised +/-%.0f%% limit",
                    name, old, new, limit * 100,
                )


async def adjust_weights(
    history: list[FeedbackRecord],
    current_weights: ScoringWeights,
    advisor: Optional[WeightAdvisor] = None,
) -> ScoringWeights:
    """Feedback-driven weight adjustment with fallback to ``current_weights``."""
    return await WeightAdjuster(advisor).adjust_weights(history, current_weights)
