"""Compliance Scorer - coverage of required standards per platform."""

from collections.abc import Mapping
from typing import Optional

from .benchmarks import PLATFORM_IDS, compliance_status
from .schema import ComplianceResult, ComplianceStatus, PlatformId


class ComplianceScorer:
    """Scores each platform on the share of required standards it is certified for.

    Only ``certified`` counts toward the score; ``in_progress`` is tallied
    but earns nothing. Standards without a benchmark entry are recorded as
    ``unknown`` and count toward no tally.
    """

    def __init__(self, compliance_data: Optional[Mapping[str, Mapping[str, str]]] = None):
        self.compliance_data = compliance_data

    def score(self, required_standards: list[str]) -> dict[PlatformId, ComplianceResult]:
        """Score all platforms against the required standards."""
        return {pid: self._score_platform(pid, required_standards) for pid in PLATFORM_IDS}

    def _score_platform(self, platform_id: PlatformId, required_standards: list[str]) -> ComplianceResult:
        counts = {
            ComplianceStatus.CERTIFIED: 0,
            ComplianceStatus.IN_PROGRESS: 0,
            ComplianceStatus.NOT_CERTIFIED: 0,
        }
        status_by_requirement = {}

        for standard in required_standards:
            status = compliance_status(platform_id, standard, self.compliance_data)
            status_by_requirement[standard] = status
            if status in counts:
                counts[status] += 1

        total = len(required_standards)
        certified = counts[ComplianceStatus.CERTIFIED]
        score = (certified / total * 100) if total > 0 else 0.0

        return ComplianceResult(
            compliance_score_pct=score,
            certified_count=certified,
            in_progress_count=counts[ComplianceStatus.IN_PROGRESS],
            not_certified_count=counts[ComplianceStatus.NOT_CERTIFIED],
            status_by_requirement=status_by_requirement,
        )
