"""
Full analysis report returned by ``pipeline.analyze.run_analysis``.

The report is frozen and JSON-serialisable via ``model_dump(mode="json")``;
the CLI writes exactly that document to ``analysis_<slug>.json``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from roi_advisor.models.outputs import (
    FuzzyLogicRecommendation,
    NextStepsPlan,
    OpportunityCost,
    ROIMetrics,
)
from roi_advisor.models.simulation import MonthlyProjection, SensitivityRange, SimulationResult


class AnalysisReport(BaseModel):
    """Everything computed for one tenant in one run.

    Attributes:
        run_slug:              UUID4 identifying this run.
        generated_at:          UTC timestamp of the run.
        industry:              Industry actually used (after defaulting).
        company_size:          Company size actually used (after defaulting).
        roi_metrics:           Current/projected ROI with filled inputs.
        opportunity_costs:     Inactive activities by priority.
        recommendations:       Ranked fuzzy recommendations (at most 8 by default).
        next_steps:            Bucketed action plan.
        scenarios:             Predefined what-if scenarios, best ROI change first.
        sensitivity:           ROI at ±20 % per factor.
        projections:           12-month "current" projection.
        benchmark_confidence:  0.1-0.95 confidence that the benchmark row fits.
        industry_recommendations: Static industry advice.
        size_strategies:       Static company-size advice.
    """

    model_config = ConfigDict(frozen=True)

    run_slug: str
    generated_at: datetime
    industry: str
    company_size: str
    roi_metrics: ROIMetrics
    opportunity_costs: list[OpportunityCost]
    recommendations: list[FuzzyLogicRecommendation]
    next_steps: NextStepsPlan
    scenarios: list[SimulationResult]
    sensitivity: dict[str, SensitivityRange]
    projections: list[MonthlyProjection]
    benchmark_confidence: float
    industry_recommendations: list[str]
    size_strategies: list[str]
