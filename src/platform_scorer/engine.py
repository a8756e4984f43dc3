"""Scoring Engine - runs the full assessment pipeline.

Pipeline:
1. Load and validate the assessment
2. Compute ROI, compliance, integration and pain-point scores
3. Resolve weights (refined > custom > defaults)
4. Rank platforms and summarize
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import TypeAdapter, ValidationError

from .benchmarks import (
    COMPLIANCE_DATA,
    INTEGRATION_SUPPORT,
    PAIN_POINT_SOLUTIONS,
    ROI_BENCHMARKS,
)
from .compliance_scorer import ComplianceScorer
from .config import ScorerConfig, get_config
from .exceptions import AssessmentLoadError, ConfigError, FeedbackLoadError
from .explainer import RecommendationExplainer
from .integration_scorer import IntegrationScorer
from .pain_point_scorer import PainPointScorer
from .ranker import RecommendationRanker, resolve_weights
from .roi_calculator import ROICalculator
from .schema import (
    Assessment,
    AssessmentResult,
    FeedbackRecord,
    ScoringWeights,
)

logger = logging.getLogger(__name__)

_FEEDBACK_ADAPTER = TypeAdapter(list[FeedbackRecord])


def _read_structured_file(path: Union[str, Path]) -> Any:
    """Read a JSON or YAML file based on its extension."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            return yaml.safe_load(f)
        return json.load(f)


def load_assessment(path: Union[str, Path]) -> Assessment:
    """Load an assessment from a JSON or YAML file.

    Raises:
        AssessmentLoadError: If the file cannot be read or is not a valid assessment.
    """
    try:
        data = _read_structured_file(path)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise AssessmentLoadError(f"Cannot read assessment {path}: {e}") from e

    # Wizard exports wrap the assessment in a single-item list
    if isinstance(data, list) and len(data) == 1:
        data = data[0]

    try:
        return Assessment.model_validate(data)
    except ValidationError as e:
        raise AssessmentLoadError(f"Invalid assessment {path}: {e}") from e


def load_feedback(path: Union[str, Path]) -> list[FeedbackRecord]:
    """Load a feedback history (a list of records) from a JSON or YAML file.

    Raises:
        FeedbackLoadError: If the file cannot be read or holds invalid records.
    """
    try:
        data = _read_structured_file(path)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise FeedbackLoadError(f"Cannot read feedback {path}: {e}") from e

    try:
        return _FEEDBACK_ADAPTER.validate_python(data or [])
    except ValidationError as e:
        raise FeedbackLoadError(f"Invalid feedback {path}: {e}") from e


def load_weights(path: Union[str, Path]) -> ScoringWeights:
    """Load scoring weights from a JSON or YAML file.

    Accepts either the bare weights or a mapping with a ``weights`` key,
    as written by ``platform-scorer adjust-weights --out``.

    Raises:
        ConfigError: If the file cannot be read or holds invalid weights.
    """
    try:
        data = _read_structured_file(path) or {}
        if isinstance(data, dict) and "weights" in data:
            data = data["weights"]
        return ScoringWeights.model_validate(data)
    except (OSError, json.JSONDecodeError, yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"Invalid weights file {path}: {e}") from e


def validate_assessment(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate an assessment file without scoring it.

    Returns:
        (is_valid, issues). Unknown departments, standards, tools and pain
        points are reported as issues but do not make the file invalid.
    """
    try:
        assessment = load_assessment(path)
    except AssessmentLoadError as e:
        return False, [e.message]

    issues = collect_warnings(assessment)
    if not assessment.departments:
        issues.insert(0, "No departments defined; ROI will be zero for every platform")
    return True, issues


def collect_warnings(assessment: Assessment) -> list[str]:
    """List the inputs that will silently score zero."""
    warnings = []

    for dept in assessment.departments:
        if dept.name not in ROI_BENCHMARKS:
            warnings.append(f"Unknown department '{dept.name}' contributes no savings")

    known_standards = {s for by_standard in COMPLIANCE_DATA.values() for s in by_standard}
    for standard in assessment.compliance_requirements:
        if standard not in known_standards:
            warnings.append(f"Unknown compliance standard '{standard}' is treated as unknown")

    known_tools = {t for by_tool in INTEGRATION_SUPPORT.values() for t in by_tool}
    for tool in assessment.desired_integrations:
        if tool not in known_tools:
            warnings.append(f"Unknown integration '{tool}' is treated as not supported")

    for pain_point in assessment.pain_points:
        if pain_point not in PAIN_POINT_SOLUTIONS:
            warnings.append(f"Unknown pain point '{pain_point}' is skipped")

    if assessment.custom_weights and not assessment.custom_weights.is_normalized():
        warnings.append(
            f"Custom weights sum to {assessment.custom_weights.total():.3f}, not 1.0"
        )

    return warnings


class ScoringEngine:
    """Runs an assessment through the scorers, the ranker and the explainer."""

    def __init__(self, config: Optional[ScorerConfig] = None):
        self.config = config or get_config()
        self.roi_calculator = ROICalculator()
        self.compliance_scorer = ComplianceScorer()
        self.integration_scorer = IntegrationScorer()
        self.pain_point_scorer = PainPointScorer()
        self.ranker = RecommendationRanker(self.config)
        self.explainer = RecommendationExplainer()

    def score(
        self,
        assessment: Union[Assessment, str, Path],
        refined_weights: Optional[ScoringWeights] = None,
    ) -> AssessmentResult:
        """Score an assessment.

        Args:
            assessment: Assessment, or path to an assessment file
            refined_weights: Accepted output of the feedback loop, if any

        Returns:
            AssessmentResult with component scores and ranked recommendations
        """
        if not isinstance(assessment, Assessment):
            assessment = load_assessment(assessment)

        weights, source = resolve_weights(
            refined_weights,
            assessment.custom_weights,
            self.config.scoring_weights.to_weights(),
        )
        logger.info(
            "Scoring '%s' with %s weights", assessment.organization_name, source.value
        )

        roi_results = self.roi_calculator.calculate_all(assessment.departments)
        compliance_results = self.compliance_scorer.score(assessment.compliance_requirements)
        integration_results = self.integration_scorer.score(assessment.desired_integrations)
        pain_point_result = self.pain_point_scorer.score(assessment.pain_points)

        recommendations = self.ranker.rank(
            roi_results,
            compliance_results,
            integration_results,
            pain_point_result,
            weights=weights,
            org_context=assessment.organization_context(),
        )

        summary = self.explainer.generate_summary(recommendations, assessment.total_users())

        return AssessmentResult(
            organization_name=assessment.organization_name,
            weights_used=weights,
            weight_source=source,
            roi_results=roi_results,
            compliance_results=compliance_results,
            integration_results=integration_results,
            pain_point_result=pain_point_result,
            recommendations=recommendations,
            summary=summary,
            processing_warnings=collect_warnings(assessment),
        )

    def executive_summary(
        self,
        assessment: Union[Assessment, str, Path],
        refined_weights: Optional[ScoringWeights] = None,
    ) -> str:
        """Score an assessment and render the Markdown executive summary."""
        if not isinstance(assessment, Assessment):
            assessment = load_assessment(assessment)
        result = self.score(assessment, refined_weights=refined_weights)
        return self.explainer.executive_summary(
            assessment, result.recommendations, result.roi_results
        )
