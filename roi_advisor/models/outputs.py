"""
Output records produced by the analysis stages.

``ROIMetrics`` is the filled-in view of the tenant's economics;
``OpportunityCost`` and ``FuzzyLogicRecommendation`` are per-activity;
``NextStepsPlan`` groups ``NextStepsTask`` items into three horizons.

All models are frozen.  Bounded fields are validated so that a bug in a
scoring stage surfaces as a ``ValidationError`` instead of leaking an
out-of-range number to the caller.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from roi_advisor.models.inputs import CurrentCosts, CurrentKPIs
from roi_advisor.taxonomy.activity_taxonomy import Activity
from roi_advisor.taxonomy.business_taxonomy import (
    CompanyStage,
    PriorityBucket,
    ReadinessLevel,
    RiskLevel,
    TargetMarket,
    TaskCategory,
    TaskPriority,
    TechStack,
)


def _check_range(v: float, lo: float, hi: float, label: str) -> float:
    if not lo <= v <= hi:
        raise ValueError(f"{label} must be in [{lo}, {hi}], got {v}.")
    return v


# ── ROI metrics ───────────────────────────────────────────────────────────────


class ProjectedImprovement(BaseModel):
    """Expected percentage improvements after optimisation."""

    model_config = ConfigDict(frozen=True)

    conversion_rate_increase: float
    lead_quality_increase: float
    sales_cycle_reduction: float
    cost_reduction: float


class ROIMetrics(BaseModel):
    """Current and projected annual ROI with the inputs actually used.

    Attributes:
        current_roi:          (annual revenue - total costs) / total costs, %.
        projected_roi:        Same ratio after projected improvements.
        potential_increase:   ``projected_roi - current_roi``.
        projected_revenue:    Annual revenue after improvements.
        projected_costs:      Total costs after improvements.
        total_current_costs:  Sum of the monthly cost buckets.
        projected_improvement: Percentage improvements applied.
        opportunity_costs:    Revenue gap to target (or to 120 % of projection), × 0.7.
        filled_kpis:          KPIs with benchmark defaults substituted.
        filled_costs:         Costs with revenue-share defaults substituted.
        is_using_defaults:    Field name → ``True`` when the value was synthesised.
    """

    model_config = ConfigDict(frozen=True)

    current_roi: float
    projected_roi: float
    potential_increase: float
    projected_revenue: float
    projected_costs: float
    total_current_costs: float
    projected_improvement: ProjectedImprovement
    opportunity_costs: float
    filled_kpis: CurrentKPIs
    filled_costs: CurrentCosts
    is_using_defaults: dict[str, bool]


# ── Opportunity costs ─────────────────────────────────────────────────────────


class ToolRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    tool_key: str
    name: str
    setup_cost: float
    monthly_cost: float
    is_required: bool


class ToolValidation(BaseModel):
    """Missing tooling for one activity and what it would cost to close the gap."""

    model_config = ConfigDict(frozen=True)

    missing_tools: list[ToolRequirement] = []
    total_setup_cost: float = 0.0
    total_monthly_cost: float = 0.0
    has_all_required_tools: bool = True


class OpportunityCost(BaseModel):
    model_config = ConfigDict(frozen=True)

    activity: str
    activity_key: Activity
    estimated_roi: float
    implementation_cost: float
    time_to_implement: int
    risk_level: RiskLevel
    opportunity_cost: float
    priority: float
    reasoning: str
    tool_validation: Optional[ToolValidation] = None

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: float) -> float:
        return _check_range(v, 1.0, 10.0, "priority")


# ── Maturity ──────────────────────────────────────────────────────────────────


class CompanyMaturity(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: CompanyStage
    digital_maturity: float
    sales_team_size: int
    marketing_budget: float
    tech_stack: TechStack
    industry_type: str
    target_market: TargetMarket

    @field_validator("digital_maturity")
    @classmethod
    def validate_digital_maturity(cls, v: float) -> float:
        return _check_range(v, 1.0, 10.0, "digital_maturity")


# ── Recommendations ───────────────────────────────────────────────────────────


class ImplementationPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: int
    timeframe: str
    resources: list[str]
    expected_roi: float


class FuzzyLogicRecommendation(BaseModel):
    """One ranked activity recommendation.

    ``score`` and ``confidence`` are rounded integers in [0, 100];
    ``priority`` is the bucket derived from ``score``.
    """

    model_config = ConfigDict(frozen=True)

    activity: str
    activity_key: Activity
    score: int
    confidence: int
    priority: PriorityBucket
    reasoning: list[str]
    implementation_plan: ImplementationPlan
    prerequisites: list[str]
    risks: list[str]

    @field_validator("score", "confidence")
    @classmethod
    def validate_percent(cls, v: int) -> int:
        return int(_check_range(v, 0, 100, "score/confidence"))


# ── Next-steps plan ───────────────────────────────────────────────────────────


class NextStepsTask(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    priority: TaskPriority
    category: TaskCategory
    estimated_time: str
    dependencies: list[str] = []
    market_fit_alignment: int
    roi_impact: float
    action_url: Optional[str] = None
    resources: list[str] = []
    prerequisites: list[str] = []
    reasoning: str

    @field_validator("market_fit_alignment")
    @classmethod
    def validate_alignment(cls, v: int) -> int:
        return int(_check_range(v, 1, 10, "market_fit_alignment"))


class CompanyProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: CompanyStage
    digital_maturity: float
    market_fit_score: float
    readiness_level: ReadinessLevel


class NextStepsPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    company_profile: CompanyProfile
    immediate_actions: list[NextStepsTask]
    short_term_goals: list[NextStepsTask]
    long_term_strategy: list[NextStepsTask]
    total_estimated_time: str
    expected_roi_increase: float
    critical_path: list[str]

    def all_tasks(self) -> list[NextStepsTask]:
        return [*self.immediate_actions, *self.short_term_goals, *self.long_term_strategy]
