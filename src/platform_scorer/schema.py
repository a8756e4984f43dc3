"""Pydantic models for the Platform Scoring Engine.

Input schemas for the organizational assessment, output schemas for the
per-component score sets and the ranked recommendations, and the models
exchanged by the feedback loop.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class PlatformId(str, Enum):
    """Stable identifiers of the candidate AI platforms, in catalog order."""
    GOOGLE_GEMINI = "google_gemini"
    MICROSOFT_COPILOT = "microsoft_copilot"
    ANTHROPIC_CLAUDE = "anthropic_claude"
    OPENAI_CHATGPT = "openai_chatgpt"


class ComplianceStatus(str, Enum):
    """Certification status of a platform for a compliance standard."""
    CERTIFIED = "certified"
    IN_PROGRESS = "in_progress"
    NOT_CERTIFIED = "not_certified"
    UNKNOWN = "unknown"  # No benchmark entry


class IntegrationTier(str, Enum):
    """Level of support a platform offers for an integration target."""
    NATIVE = "native"
    API = "api"
    LIMITED = "limited"
    NOT_SUPPORTED = "not_supported"


class BudgetFit(str, Enum):
    """Coarse classification of platform cost against the budget envelope."""
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    EXCEEDS = "exceeds"


class BudgetPeriod(str, Enum):
    """Period the stated budget covers."""
    MONTHLY = "monthly"
    ANNUAL = "annual"


class BudgetFlexibility(str, Enum):
    """How strictly the budget ceiling applies (informational only)."""
    STRICT = "strict"
    MODERATE = "moderate"
    FLEXIBLE = "flexible"


class FeedbackCategory(str, Enum):
    """Category attached to a piece of recommendation feedback."""
    GOOD_FIT = "good_fit"
    POOR_FIT = "poor_fit"
    MISSING_FEATURE = "missing_feature"


class PatternType(str, Enum):
    """Diagnostic pattern found in the feedback history."""
    OVERRATED = "overrated"
    UNDERRATED = "underrated"
    MISSING_FEATURES = "missing_features"


class PatternSeverity(str, Enum):
    """Severity of a feedback pattern."""
    HIGH = "high"
    MEDIUM = "medium"


class WeightSource(str, Enum):
    """Where the weights used for a ranking run came from."""
    REFINED = "refined"  # Accepted output of the feedback loop
    CUSTOM = "custom"  # Supplied with the assessment
    DEFAULT = "default"  # Configured defaults


# =============================================================================
# Catalog and Input Models
# =============================================================================


class Platform(BaseModel):
    """Static catalog entry for a candidate platform."""
    id: PlatformId
    display_name: str
    color: str


class PainPointSolution(BaseModel):
    """Solution mapping for a catalogued pain point."""
    solution: str
    platforms: list[PlatformId]  # Ranked best to worst


class Department(BaseModel):
    """A department taking part in the assessment."""
    name: str
    user_count: int = Field(..., ge=1)
    hourly_rate: float = Field(..., ge=0)
    annual_spend: Optional[float] = Field(
        default=None,
        ge=0,
        description="Current annual spend (informational, not scored)"
    )


class BudgetConstraints(BaseModel):
    """Budget envelope stated during intake."""
    min_budget: float = Field(0.0, ge=0)
    max_budget: float = Field(0.0, ge=0)
    budget_period: BudgetPeriod = BudgetPeriod.ANNUAL
    flexibility: BudgetFlexibility = BudgetFlexibility.MODERATE

    def annual_max_budget(self) -> float:
        """Maximum budget expressed per year."""
        if self.budget_period == BudgetPeriod.MONTHLY:
            return self.max_budget * 12
        return self.max_budget


class ScoringWeights(BaseModel):
    """Weights combining the four component scores.

    Callers are responsible for keeping the sum at 1.0; the ranker uses
    whatever it is given.
    """
    roi_weight: float = Field(0.35, ge=0)
    compliance_weight: float = Field(0.25, ge=0)
    integration_weight: float = Field(0.25, ge=0)
    pain_point_weight: float = Field(0.15, ge=0)

    def total(self) -> float:
        """Sum of all four weights."""
        return (
            self.roi_weight
            + self.compliance_weight
            + self.integration_weight
            + self.pain_point_weight
        )

    def is_normalized(self, tolerance: float = 0.01) -> bool:
        """Check the weights sum to 1.0 within tolerance."""
        return abs(self.total() - 1.0) <= tolerance


class OrganizationContext(BaseModel):
    """Organizational context used for narrative and budget classification."""
    organization_name: Optional[str] = None
    business_goals: list[str] = Field(default_factory=list)
    budget_constraints: Optional[BudgetConstraints] = None


class Assessment(BaseModel):
    """A completed intake assessment, ready for scoring."""
    organization_name: str
    assessment_date: Optional[date] = None
    departments: list[Department] = Field(default_factory=list)
    compliance_requirements: list[str] = Field(default_factory=list)
    desired_integrations: list[str] = Field(default_factory=list)
    pain_points: list[str] = Field(default_factory=list)
    budget_constraints: Optional[BudgetConstraints] = None
    business_goals: list[str] = Field(default_factory=list)
    custom_weights: Optional[ScoringWeights] = None

    def total_users(self) -> int:
        """Total headcount across all departments."""
        return sum(d.user_count for d in self.departments)

    def organization_context(self) -> OrganizationContext:
        """Context handed to the ranker."""
        return OrganizationContext(
            organization_name=self.organization_name,
            business_goals=self.business_goals,
            budget_constraints=self.budget_constraints,
        )


# =============================================================================
# Component Score Models
# =============================================================================


class DepartmentROI(BaseModel):
    """ROI breakdown for one department on one platform."""
    department: str
    user_count: int
    hours_saved_per_user_per_week: float
    annual_hours_saved: float
    annual_savings: float
    platform_cost: float
    net_savings: float


class ROIResult(BaseModel):
    """Annual savings, cost and ROI for one platform."""
    platform: PlatformId
    total_annual_savings: float = 0.0
    total_cost: float = 0.0
    net_annual_savings: float = 0.0
    one_year_roi_pct: float = 0.0
    # Three times one year's net savings over a single year of cost
    three_year_roi_pct: float = 0.0
    department_breakdown: list[DepartmentROI] = Field(default_factory=list)


class ComplianceResult(BaseModel):
    """Compliance coverage of one platform."""
    compliance_score_pct: float = 0.0
    certified_count: int = 0
    in_progress_count: int = 0
    not_certified_count: int = 0
    status_by_requirement: dict[str, ComplianceStatus] = Field(default_factory=dict)


class IntegrationResult(BaseModel):
    """Integration coverage of one platform."""
    integration_score_pct: float = 0.0
    native_count: int = 0
    api_count: int = 0
    limited_count: int = 0
    not_supported_count: int = 0
    support_by_tool: dict[str, IntegrationTier] = Field(default_factory=dict)


class PainPointMapping(BaseModel):
    """Display mapping for a matched pain point."""
    pain_point: str
    solution_text: str
    recommended_platforms: list[str]  # Display names, best first


class PainPointResult(BaseModel):
    """Pain-point preference points per platform."""
    platform_scores: dict[PlatformId, float] = Field(default_factory=dict)
    mappings: list[PainPointMapping] = Field(default_factory=list)


# =============================================================================
# Ranking Output Models
# =============================================================================


class ScoringDimension(BaseModel):
    """A single weighted component of a platform's total score."""
    dimension: str
    weight: float
    raw_score: float  # Component metric before normalization
    normalized_score: float  # Value multiplied by the weight
    weighted_score: float
    reasoning: str


class Recommendation(BaseModel):
    """A ranked platform recommendation with explanation."""
    platform_id: PlatformId
    platform_name: str
    # Not bounded above: ROI above 1000% pushes the total past 100
    total_score: float
    roi_score: float
    compliance_score: float
    integration_score: float
    pain_point_score: float
    justification_text: str
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    best_for: list[str] = Field(default_factory=list)
    budget_fit: BudgetFit = BudgetFit.MODERATE

    one_year_roi_pct: float = 0.0
    annual_cost: Optional[float] = None
    scoring_dimensions: list[ScoringDimension] = Field(default_factory=list)


class RecommendationSummary(BaseModel):
    """Summary of a ranking run."""
    primary_platform: Optional[PlatformId] = None
    primary_platform_name: Optional[str] = None
    runner_up_platform: Optional[PlatformId] = None
    runner_up_platform_name: Optional[str] = None
    score_margin: float = 0.0
    total_users: int = 0
    key_drivers: list[str] = Field(default_factory=list)
    key_risks: list[str] = Field(default_factory=list)


class AssessmentResult(BaseModel):
    """Complete output from the scoring engine."""
    scoring_version: str = Field(default="1.0.0")
    scored_at: datetime = Field(default_factory=datetime.utcnow)
    organization_name: str

    weights_used: ScoringWeights
    weight_source: WeightSource = WeightSource.DEFAULT

    roi_results: list[ROIResult] = Field(default_factory=list)
    compliance_results: dict[PlatformId, ComplianceResult] = Field(default_factory=dict)
    integration_results: dict[PlatformId, IntegrationResult] = Field(default_factory=dict)
    pain_point_result: PainPointResult = Field(default_factory=PainPointResult)

    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: RecommendationSummary = Field(default_factory=RecommendationSummary)

    processing_warnings: list[str] = Field(default_factory=list)


# =============================================================================
# Feedback Loop Models
# =============================================================================


class FeedbackRecord(BaseModel):
    """User feedback on a platform recommendation."""
    platform_id: PlatformId
    rating: int = Field(..., ge=1, le=5)
    feedback_category: FeedbackCategory
    timestamp: datetime


class PlatformFeedbackStats(BaseModel):
    """Aggregated feedback for one platform."""
    platform_id: PlatformId
    good_fit: int = 0
    poor_fit: int = 0
    missing_feature: int = 0
    total: int = 0
    avg_rating: float = 0.0
    accuracy_rate: float = 0.0
    missing_feature_rate: float = 0.0


class FeedbackPattern(BaseModel):
    """A diagnostic pattern for one platform."""
    pattern_type: PatternType
    platform_id: PlatformId
    severity: PatternSeverity
    recommendation: str


class FeedbackAnalysis(BaseModel):
    """Pattern diagnostics over a feedback history."""
    platform_feedback: dict[PlatformId, PlatformFeedbackStats] = Field(default_factory=dict)
    total_feedback_count: int = 0
    patterns: list[FeedbackPattern] = Field(default_factory=list)


class WeightAdjustment(BaseModel):
    """One weight change proposed by the advisor."""
    weight_name: str
    old_value: float
    new_value: float
    reasoning: str = ""


class WeightProposal(BaseModel):
    """Weights proposed by an external advisor. Validated before use."""
    optimized_weights: ScoringWeights
    adjustments_made: list[WeightAdjustment] = Field(default_factory=list)
    confidence_score: float = 0.0
    recommendations: list[str] = Field(default_factory=list)


class WeightOptimization(BaseModel):
    """Outcome of a feedback-driven weight adjustment attempt."""
    applied: bool = False
    weights: ScoringWeights
    previous_weights: ScoringWeights
    adjustments: list[WeightAdjustment] = Field(default_factory=list)
    confidence_score: Optional[float] = None
    sample_size: int = 0
    recommendations: list[str] = Field(default_factory=list)
    message: str = ""
