"""
LLM-backed weight advisor built on pydantic-ai.

The agent's output type is WeightProposal, so pydantic-ai validates the
structure of the response; the WeightAdjuster still validates its content.
"""
import json
import logging
from typing import Optional, Union

from pydantic_ai import Agent
from pydantic_ai.models import Model

from .exceptions import AdvisorError
from .schema import FeedbackAnalysis, ScoringWeights, WeightProposal

logger = logging.getLogger(__name__)


INSTRUCTIONS = (
    "You are an AI recommendation optimization system using reinforcement "
    "learning principles. You tune the weights that combine ROI, compliance, "
    "integration and pain-point scores when ranking enterprise AI platforms."
)


def build_weight_prompt(
    current_weights: ScoringWeights,
    analysis: FeedbackAnalysis,
    max_adjustment_pct: float = 0.15,
) -> str:
    """Build the advisor prompt from the current weights and feedback diagnostics."""
    platform_feedback = {
        pid.value: stats.model_dump(mode="json", exclude={"platform_id"})
        for pid, stats in analysis.platform_feedback.items()
    }
    if analysis.patterns:
        patterns = "\n".join(
            f"- {p.pattern_type.value} for {p.platform_id.value}: {p.recommendation}"
            for p in analysis.patterns
        )
    else:
        patterns = "- none"

    return f"""CURRENT WEIGHTS:
- ROI Weight: {current_weights.roi_weight * 100:.0f}%
- Compliance Weight: {current_weights.compliance_weight * 100:.0f}%
- Integration Weight: {current_weights.integration_weight * 100:.0f}%
- Pain Point Weight: {current_weights.pain_point_weight * 100:.0f}%

FEEDBACK ANALYSIS ({analysis.total_feedback_count} records):
{json.dumps(platform_feedback, indent=2)}

IDENTIFIED PATTERNS:
{patterns}

Based on user feedback patterns, adjust the scoring weights to improve recommendation accuracy.

RULES:
1. All weights must sum to 1.0
2. Consider which factors correlate with "good_fit" feedback
3. Reduce emphasis on factors that lead to "poor_fit" feedback
4. Make incremental adjustments (max ±{max_adjustment_pct * 100:.0f}% per weight)
5. Provide reasoning for each adjustment

Return optimized weights with explanations."""


class PydanticAIWeightAdvisor:
    """
    WeightAdvisor backed by a pydantic-ai Agent.

    The agent is created on first use so constructing the advisor does not
    require provider credentials.
    """

    def __init__(
        self,
        model: Union[str, Model],
        max_adjustment_pct: float = 0.15,
    ):
        """
        Initialize the advisor.

        Args:
            model: pydantic-ai model name (e.g. 'openai:gpt-4o') or Model instance
            max_adjustment_pct: Per-weight change limit stated in the prompt
        """
        self.model = model
        self.max_adjustment_pct = max_adjustment_pct
        self._agent: Optional[Agent] = None

    @property
    def agent(self) -> Agent:
        if self._agent is None:
            self._agent = Agent(
                self.model,
                name="Weight Advisor",
                output_type=WeightProposal,
                instructions=INSTRUCTIONS,
            )
        return self._agent

    async def propose(
        self,
        current_weights: ScoringWeights,
        analysis: FeedbackAnalysis,
    ) -> WeightProposal:
        """Ask the model for a weight proposal."""
        prompt = build_weight_prompt(current_weights, analysis, self.max_adjustment_pct)
        logger.info("Requesting weight proposal from %s", self.model)
        try:
            result = await self.agent.run(prompt)
        except Exception as e:
            raise AdvisorError(f"Weight advisor request failed: {e}") from e
        return result.output
