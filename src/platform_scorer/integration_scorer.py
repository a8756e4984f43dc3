"""Integration Scorer - weighted coverage of required tools per platform."""

from collections.abc import Mapping
from typing import Optional

from .benchmarks import PLATFORM_IDS, integration_tier
from .schema import IntegrationResult, IntegrationTier, PlatformId


class IntegrationScorer:
    """Scores each platform on how well it integrates with the required tools.

    Each tool earns credit by support tier; tools without a benchmark entry
    are treated as not supported.
    """

    TIER_CREDIT = {
        IntegrationTier.NATIVE: 1.0,
        IntegrationTier.API: 0.8,
        IntegrationTier.LIMITED: 0.4,
        IntegrationTier.NOT_SUPPORTED: 0.0,
    }

    def __init__(self, integration_support: Optional[Mapping[str, Mapping[str, str]]] = None):
        self.integration_support = integration_support

    def score(self, required_tools: list[str]) -> dict[PlatformId, IntegrationResult]:
        """Score all platforms against the required integration targets."""
        return {pid: self._score_platform(pid, required_tools) for pid in PLATFORM_IDS}

    def _score_platform(self, platform_id: PlatformId, required_tools: list[str]) -> IntegrationResult:
        counts = {tier: 0 for tier in IntegrationTier}
        support_by_tool = {}

        for tool in required_tools:
            tier = integration_tier(platform_id, tool, self.integration_support)
            support_by_tool[tool] = tier
            counts[tier] += 1

        total = len(required_tools)
        if total > 0:
            credit = sum(self.TIER_CREDIT[tier] * n for tier, n in counts.items())
            score = credit / total * 100
        else:
            score = 0.0

        return IntegrationResult(
            integration_score_pct=score,
            native_count=counts[IntegrationTier.NATIVE],
            api_count=counts[IntegrationTier.API],
            limited_count=counts[IntegrationTier.LIMITED],
            not_supported_count=counts[IntegrationTier.NOT_SUPPORTED],
            support_by_tool=support_by_tool,
        )
