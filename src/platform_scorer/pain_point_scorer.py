"""Pain-Point Scorer - maps selected pain points to ranked platform preferences."""

import logging
from collections.abc import Mapping
from typing import Optional

from .benchmarks import PLATFORM_IDS, pain_point_solution, platform_name
from .schema import PainPointMapping, PainPointResult, PainPointSolution

logger = logging.getLogger(__name__)

# Points for the best-ranked platform; each lower rank earns one less
TOP_RANK_POINTS = 3


class PainPointScorer:
    """Accumulates preference points from the pain-point solution table.

    For every selected pain point in the table, the platform at rank ``i``
    earns ``max(3 - i, 0)`` points. Unknown pain points are skipped.
    """

    def __init__(self, solutions: Optional[Mapping[str, PainPointSolution]] = None):
        self.solutions = solutions

    def score(self, selected_pain_points: list[str]) -> PainPointResult:
        """Score all platforms against the selected pain points."""
        platform_scores = {pid: 0.0 for pid in PLATFORM_IDS}
        mappings = []

        for pain_point in selected_pain_points:
            solution = pain_point_solution(pain_point, self.solutions)
            if solution is None:
                logger.debug("Skipping uncatalogued pain point: %s", pain_point)
                continue

            for rank, pid in enumerate(solution.platforms):
                platform_scores[pid] = platform_scores.get(pid, 0.0) + max(TOP_RANK_POINTS - rank, 0)

            mappings.append(PainPointMapping(
                pain_point=pain_point,
                solution_text=solution.solution,
                recommended_platforms=[platform_name(pid) for pid in solution.platforms],
            ))

        return PainPointResult(platform_scores=platform_scores, mappings=mappings)
